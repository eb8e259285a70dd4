"""
Token Classifier
================

Pure predicates over a single lookahead character.

Tokens are single characters, so classification is done on demand by the
recognizer rather than by a separate lexing pass. Only ASCII is accepted:
``str.isdigit`` and friends would also admit characters such as '²' that
the generated code cannot load as an immediate.

The END sentinel (empty string) belongs to no class. Note that a plain
``c in "+-"`` test would wrongly accept it, which is why every predicate
checks the length first.
"""

import string

ALPHA_CHARS = string.ascii_letters
DIGIT_CHARS = string.digits
ADDOP_CHARS = "+-"
MULOP_CHARS = "*/"


def is_alpha(char: str) -> bool:
    """Check if char is an ASCII letter."""
    return len(char) == 1 and char in ALPHA_CHARS


def is_digit(char: str) -> bool:
    """Check if char is an ASCII decimal digit."""
    return len(char) == 1 and char in DIGIT_CHARS


def is_addop(char: str) -> bool:
    """Check if char is an additive operator ('+' or '-')."""
    return len(char) == 1 and char in ADDOP_CHARS


def is_mulop(char: str) -> bool:
    """Check if char is a multiplicative operator ('*' or '/')."""
    return len(char) == 1 and char in MULOP_CHARS
