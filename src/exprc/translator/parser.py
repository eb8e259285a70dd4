"""
Expression Parser and Code Generator
====================================

This module implements the single-pass translator: a recursive descent
recognizer that emits target instructions as a side effect of recognizing
the grammar. No syntax tree is built.

Grammar
-------
    expression ::= term (addop term)*
    term       ::= factor (mulop factor)*
    factor     ::= '(' expression ')' | digit

    addop      ::= '+' | '-'
    mulop      ::= '*' | '/'

Precedence falls out of the nesting: a term is completely reduced into
the accumulator before the enclosing expression applies '+' or '-' to it.
The while loops in ``expression`` and ``term`` make both levels
left-associative.

Code Generation Strategy
------------------------
Every production leaves its value in the accumulator (eax). For a binary
operator the left operand is pushed, the right operand is computed into
eax, and the left operand is popped into ebx:

    2*3+4               9-3

    mov $2, %eax        mov $9, %eax
    push %eax           push %eax
    mov $3, %eax        mov $3, %eax
    pop %ebx            pop %ebx
    imul %ebx, %eax     sub %ebx, %eax     ; eax = 3 - 9
    push %eax           neg %eax           ; eax = 9 - 3
    mov $4, %eax
    pop %ebx
    add %ebx, %eax

Subtraction and division see their operands in reverse order: ebx holds
the left operand and eax the right. ``subtract`` computes right - left
and negates it; ``divide`` swaps the two registers before sign-extending
eax into edx:eax.

Parser State
------------
The only state is the lookahead character held by the LookaheadSource.
Every production starts with ``look`` on the first character of its
derivation and returns with ``look`` on the first character after it.
The lookahead is only ever advanced through ``match``, ``get_name`` and
``get_num``.

Errors
------
Any grammar violation raises ExpressionSyntaxError from the matcher. No
recovery is attempted; instructions emitted before the failure stay
emitted.
"""

import logging

from exprc.errors import ExpressionSyntaxError
from exprc.translator.classify import is_addop, is_alpha, is_digit, is_mulop
from exprc.translator.emitter import InstructionEmitter
from exprc.translator import instructions as ins
from exprc.translator.source import LookaheadSource

logger = logging.getLogger(__name__)


class ExpressionParser:
    """
    Recursive descent recognizer and code generator.

    The parser is the explicit context shared by every production: it
    owns the lookahead source and the instruction emitter.

    Usage:
        source = LookaheadSource.from_string("(2+3)*4")
        emitter = InstructionEmitter(sys.stdout)
        ExpressionParser(source, emitter).expression()

    Attributes:
        source: The lookahead source being consumed
        emitter: Receives every generated instruction
    """

    def __init__(self, source: LookaheadSource, emitter: InstructionEmitter):
        self.source = source
        self.emitter = emitter

    @property
    def look(self) -> str:
        """The current lookahead character."""
        return self.source.look

    # =========================================================================
    # Matcher
    # =========================================================================

    def match(self, expected: str) -> None:
        """
        Consume ``expected`` from the input.

        Raises:
            ExpressionSyntaxError: If the lookahead is anything else
        """
        if self.look != expected:
            raise ExpressionSyntaxError(f"'{expected}'", found=self.look)
        logger.debug(f"match {expected!r}")
        self.source.advance()

    def get_name(self) -> str:
        """
        Recognize a single-letter name and return it uppercased.

        Raises:
            ExpressionSyntaxError: If the lookahead is not a letter
        """
        if not is_alpha(self.look):
            raise ExpressionSyntaxError("Name", found=self.look)
        name = self.look.upper()
        self.source.advance()
        return name

    def get_num(self) -> str:
        """
        Recognize a single decimal digit and return it.

        Raises:
            ExpressionSyntaxError: If the lookahead is not a digit
        """
        if not is_digit(self.look):
            raise ExpressionSyntaxError("Integer", found=self.look)
        num = self.look
        self.source.advance()
        return num

    # =========================================================================
    # Grammar Productions
    # =========================================================================

    def expression(self) -> None:
        """Parse and translate: term (addop term)*"""
        logger.debug(f"expression at {self.look!r}")
        self.term()
        while is_addop(self.look):
            self.emitter.emit(ins.push())
            if self.look == "+":
                self.add()
            else:
                self.subtract()

    def term(self) -> None:
        """Parse and translate: factor (mulop factor)*"""
        self.factor()
        while is_mulop(self.look):
            self.emitter.emit(ins.push())
            if self.look == "*":
                self.multiply()
            else:
                self.divide()

    def factor(self) -> None:
        """Parse and translate: '(' expression ')' | digit"""
        if self.look == "(":
            self.match("(")
            self.expression()
            self.match(")")
        else:
            num = self.get_num()
            self.emitter.emit(ins.load_immediate(int(num)))

    # =========================================================================
    # Operator Handlers
    # =========================================================================
    # Each handler is entered with the left operand already pushed and the
    # operator still in the lookahead. On return the result is in eax and
    # the pushed operand has been popped.
    # =========================================================================

    def add(self) -> None:
        """Translate '+' term."""
        self.match("+")
        self.term()
        self.emitter.emit(ins.pop())
        self.emitter.emit(ins.add())

    def subtract(self) -> None:
        """Translate '-' term."""
        self.match("-")
        self.term()
        self.emitter.emit(ins.pop())
        # eax = right - left, then negated to left - right
        self.emitter.emit(ins.subtract())
        self.emitter.emit(ins.negate())

    def multiply(self) -> None:
        """Translate '*' factor."""
        self.match("*")
        self.factor()
        self.emitter.emit(ins.pop())
        self.emitter.emit(ins.multiply())

    def divide(self) -> None:
        """Translate '/' factor."""
        self.match("/")
        self.factor()
        self.emitter.emit(ins.pop())
        # Dividend back into eax, divisor into ebx
        self.emitter.emit(ins.exchange())
        self.emitter.emit(ins.sign_extend())
        self.emitter.emit(ins.divide_wide())
