"""
Cradle Greeting
===============

The smallest program built on the translator's cradle: read one name and
one digit, then greet them. It drives the name half of the matcher, which
the arithmetic grammar never reaches.

>>> from exprc.translator.greeting import greet
>>> from exprc.translator.source import LookaheadSource
>>> greet(LookaheadSource.from_string("x7"))
'Hello, X7'
"""

from exprc.translator.emitter import InstructionEmitter
from exprc.translator.parser import ExpressionParser
from exprc.translator.source import LookaheadSource


def greet(source: LookaheadSource) -> str:
    """
    Recognize ``name digit`` and return the greeting line.

    Raises:
        ExpressionSyntaxError: If the name or the digit is missing
    """
    parser = ExpressionParser(source, InstructionEmitter())
    name = parser.get_name()
    num = parser.get_num()
    return f"Hello, {name}{num}"
