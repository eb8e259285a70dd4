"""
Expression Translator Driver
============================

This module provides the main interface of the translator. It wires the
lookahead source, the recognizer and the emitter together:

    Input stream → LookaheadSource → ExpressionParser → InstructionEmitter → Output

Usage
-----
Programmatic:
    >>> from exprc.translator import translate_expression
    >>> print(translate_expression("2*3+4"), end="")
    	mov $2, %eax
    	push %eax
    	mov $3, %eax
    	pop %ebx
    	imul %ebx, %eax
    	push %eax
    	mov $4, %eax
    	pop %ebx
    	add %ebx, %eax

Command line:
    $ echo "2*3+4" | exprc compile

Trailing Input
--------------
Exactly one expression is translated. What may follow it is controlled by
the TrailingInput policy:

| Policy   | Accepted after the expression                 |
|----------|-----------------------------------------------|
| IGNORE   | Anything; the rest of the input is not read   |
| NEWLINE  | End of input, optionally after one line break |
| END      | End of input only                             |

NEWLINE is the default: ``echo 2+3 | exprc compile`` translates, while
``2+3x`` is rejected.

Configuration
-------------
Options come from TranslatorOptions defaults, may be overridden from the
environment with TranslatorOptions.from_env(), and finally by CLI flags:

    EXPRC_SYNTAX    att | intel | mnemonic
    EXPRC_TRAILING  ignore | newline | end
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TextIO

from exprc.errors import (
    CodeGenerationError,
    ExpressionSyntaxError,
    NestingTooDeepError,
)
from exprc.translator.emitter import InstructionEmitter
from exprc.translator.instructions import Instruction, TargetSyntax
from exprc.translator.parser import ExpressionParser
from exprc.translator.source import END, LookaheadSource

logger = logging.getLogger(__name__)


class TrailingInput(Enum):
    """What the translator accepts after the first complete expression."""
    IGNORE = "ignore"
    NEWLINE = "newline"
    END = "end"


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        syntax: Assembly syntax for emitted lines
        trailing: Policy for input following the expression
        check_balance: Verify every push was popped once translation ends
    """
    syntax: TargetSyntax = TargetSyntax.ATT
    trailing: TrailingInput = TrailingInput.NEWLINE
    check_balance: bool = True

    @classmethod
    def from_env(cls) -> "TranslatorOptions":
        """
        Create TranslatorOptions from environment variables.

        Environment variables (all optional):
            EXPRC_SYNTAX: Assembly syntax ("att", "intel", "mnemonic")
            EXPRC_TRAILING: Trailing input policy ("ignore", "newline", "end")

        Unrecognized values are ignored and the default is kept.
        """
        options = cls()

        if syntax := os.environ.get("EXPRC_SYNTAX"):
            try:
                options.syntax = TargetSyntax(syntax.lower())
            except ValueError:
                logger.debug(f"Ignoring invalid EXPRC_SYNTAX={syntax!r}")

        if trailing := os.environ.get("EXPRC_TRAILING"):
            try:
                options.trailing = TrailingInput(trailing.lower())
            except ValueError:
                logger.debug(f"Ignoring invalid EXPRC_TRAILING={trailing!r}")

        return options


@dataclass
class TranslationResult:
    """
    Result of translating one expression.

    Attributes:
        instructions: Generated instructions in emission order
        assembly: The emitted lines as one text block
        consumed: Number of input characters consumed
        max_stack_depth: Deepest evaluation stack the code will use
    """
    instructions: list[Instruction] = field(default_factory=list)
    assembly: str = ""
    consumed: int = 0
    max_stack_depth: int = 0


class ExpressionTranslator:
    """
    Translates one arithmetic expression to register-machine assembly.

    Example:
        translator = ExpressionTranslator()
        result = translator.translate_source("(2+3)*4")
        print(result.assembly)

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        self.options = options or TranslatorOptions()

    def translate_source(self, text: str) -> TranslationResult:
        """
        Translate an expression held in a string.

        Raises:
            ExpressionSyntaxError: If the input is not a valid expression
            NestingTooDeepError: If parentheses exceed the recursion limit
            CodeGenerationError: If the generated code is unbalanced
        """
        return self._translate(LookaheadSource.from_string(text), sink=None)

    def translate_stream(
        self,
        stream: TextIO,
        sink: Optional[TextIO] = None,
    ) -> TranslationResult:
        """
        Translate an expression read from a text stream.

        Each instruction is written to ``sink`` as soon as it is generated,
        so lines emitted before a syntax error remain written.

        Raises:
            ExpressionSyntaxError: If the input is not a valid expression
            NestingTooDeepError: If parentheses exceed the recursion limit
            CodeGenerationError: If the generated code is unbalanced
        """
        return self._translate(LookaheadSource(stream), sink=sink)

    def _translate(
        self,
        source: LookaheadSource,
        sink: Optional[TextIO],
    ) -> TranslationResult:
        emitter = InstructionEmitter(sink, syntax=self.options.syntax)
        parser = ExpressionParser(source, emitter)

        try:
            parser.expression()
        except RecursionError:
            raise NestingTooDeepError(source.consumed) from None
        self._check_trailing(source)

        if self.options.check_balance and emitter.depth != 0:
            raise CodeGenerationError(
                f"{emitter.depth} value(s) left on the evaluation stack"
            )

        logger.debug(
            f"Translated {source.consumed} characters into "
            f"{len(emitter.instructions)} instructions"
        )

        return TranslationResult(
            instructions=list(emitter.instructions),
            assembly=emitter.get_output(),
            consumed=source.consumed,
            max_stack_depth=emitter.max_depth,
        )

    def _check_trailing(self, source: LookaheadSource) -> None:
        """Apply the trailing-input policy after the expression."""
        policy = self.options.trailing
        logger.debug(f"Trailing input policy {policy.value}, look={source.look!r}")

        if policy is TrailingInput.IGNORE:
            return

        if policy is TrailingInput.NEWLINE:
            if source.look == "\r":
                source.advance()
                if source.look != "\n":
                    raise ExpressionSyntaxError("Newline", found=source.look)
            if source.look == "\n":
                source.advance()
            if source.look != END:
                raise ExpressionSyntaxError("Newline", found=source.look)
            return

        if source.look != END:
            raise ExpressionSyntaxError("End of input", found=source.look)


# =============================================================================
# Convenience Functions
# =============================================================================

def translate_expression(
    text: str,
    syntax: TargetSyntax = TargetSyntax.ATT,
    trailing: TrailingInput = TrailingInput.NEWLINE,
) -> str:
    """
    Translate an expression string and return the assembly text.

    Raises:
        ExpressionSyntaxError: If the input is not a valid expression
    """
    options = TranslatorOptions(syntax=syntax, trailing=trailing)
    return ExpressionTranslator(options).translate_source(text).assembly
