"""
exprc - Single-Pass Expression Compiler
=======================================

This package translates infix arithmetic expressions into 32-bit x86
assembly in a single pass. Recognition and code generation happen
together in a recursive descent parser; no syntax tree is built.

Main Components
---------------
- **translator**: Lookahead source, parser/code generator, emitter
    Converts an expression such as ``(2+3)*4`` to push/pop stack code

- **cli**: Command-line tool (exprc)
    Compiles, runs and greets from files or standard input

Quick Start
-----------
Translate an expression:
    >>> from exprc import translate_expression
    >>> print(translate_expression("2+3"), end="")
    	mov $2, %eax
    	push %eax
    	mov $3, %eax
    	pop %ebx
    	add %ebx, %eax

Check the generated code by running it:
    >>> from exprc import ExpressionTranslator, RegisterMachine
    >>> result = ExpressionTranslator().translate_source("(2+3)*4")
    >>> RegisterMachine().run(result.instructions)
    20

Or use the command-line tool:
    $ echo "2*3+4" | exprc compile
    $ echo "9-3-2" | exprc run
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from exprc.errors import (
    ExprcError,
    TranslationError,
    ExpressionSyntaxError,
    NestingTooDeepError,
    CodeGenerationError,
    MachineError,
)
from exprc.translator import (
    ExpressionTranslator,
    TranslationResult,
    TranslatorOptions,
    TrailingInput,
    TargetSyntax,
    RegisterMachine,
    translate_expression,
)

__all__ = [
    # Version info
    "__version__",
    # Translator
    "ExpressionTranslator",
    "TranslationResult",
    "TranslatorOptions",
    "TrailingInput",
    "TargetSyntax",
    "RegisterMachine",
    "translate_expression",
    # Exception hierarchy
    "ExprcError",
    "TranslationError",
    "ExpressionSyntaxError",
    "NestingTooDeepError",
    "CodeGenerationError",
    "MachineError",
]
