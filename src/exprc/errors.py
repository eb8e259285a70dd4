"""
exprc Error Hierarchy
=====================

This module defines the exception hierarchy for the expression compiler.
All exceptions inherit from ExprcError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
ExprcError (base)
├── TranslationError (translator-related)
│   ├── ExpressionSyntaxError - expected construct not found at lookahead
│   ├── NestingTooDeepError - parentheses nested beyond the recursion limit
│   └── CodeGenerationError - emitted code violates stack discipline
└── MachineError - reference register machine fault

Error Message Format
--------------------
The translator reads one character at a time and keeps no line or column
information, so messages carry no location prefix:

    error: ')' expected
    hint: found end of input

Errors are never recovered from. The recognizer raises them and they
propagate through every enclosing production; deciding whether that ends
the process is left to the caller (the CLI exits with a non-zero status).
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ExprcError(Exception):
    """
    Base exception for all exprc errors.

        try:
            translate_expression("(2+3")
        except ExprcError as e:
            print(e)
    """
    pass


# =============================================================================
# Translator Exceptions
# =============================================================================

class TranslationError(ExprcError):
    """
    Base exception for errors raised while translating an expression.

    Attributes:
        message: The error description
        hint: A suggestion or additional context (optional)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with its optional hint.

        Example output:
            error: Integer expected
            hint: found '*'
        """
        parts = [f"error: {self.message}"]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


class ExpressionSyntaxError(TranslationError):
    """
    The lookahead character is not what the grammar requires.

    Lexical and syntactic errors are not distinguished: tokens are single
    characters classified on demand, so every failure is "X expected".

    Attributes:
        expected: Human-readable name of the missing construct
                  ("Integer", "Name", "')'", ...)
        found: The offending lookahead character, or "" at end of input
    """

    def __init__(self, expected: str, found: Optional[str] = None):
        self.expected = expected
        self.found = found

        hint = None
        if found is not None:
            hint = f"found {describe_char(found)}"

        super().__init__(f"{expected} expected", hint=hint)


class CodeGenerationError(TranslationError):
    """
    Generated code breaks the evaluation-stack discipline.

    Raised when a pop is emitted with nothing pushed, or when a complete
    translation leaves values on the stack. A correct recognizer never
    triggers this.
    """
    pass


class NestingTooDeepError(TranslationError):
    """
    Parentheses nested more deeply than the recognizer can follow.

    Every nesting level costs several Python frames in the mutually
    recursive productions, so very deep input exhausts the interpreter's
    recursion limit before it exhausts the grammar.

    Attributes:
        consumed: Characters consumed when the limit was reached
    """

    def __init__(self, consumed: int):
        self.consumed = consumed
        super().__init__(
            "expression nested too deeply",
            hint=f"recursion limit reached after {consumed} characters",
        )


# =============================================================================
# Machine Exceptions
# =============================================================================

class MachineError(ExprcError):
    """
    Fault while executing generated code on the reference machine.

    Examples:
        - Division by zero in idiv
        - Pop from an empty stack
    """
    pass


# =============================================================================
# Helpers
# =============================================================================

def describe_char(char: str) -> str:
    """
    Describe a lookahead character for diagnostics.

    >>> describe_char("*")
    "'*'"
    >>> describe_char("")
    'end of input'
    >>> describe_char("\\n")
    'newline'
    """
    if char == "":
        return "end of input"
    if char == "\n":
        return "newline"
    if char == "\r":
        return "carriage return"
    if char == "\t":
        return "tab"
    if 0xDC80 <= ord(char) <= 0xDCFF:
        # Undecodable input byte carried through as a surrogate escape
        return f"byte 0x{ord(char) - 0xDC00:02X}"
    if not char.isprintable():
        return f"character 0x{ord(char):02X}"
    return f"'{char}'"
