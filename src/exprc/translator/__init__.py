"""
exprc Expression Translator
===========================

This package implements a single-pass translator from infix arithmetic
over single-digit operands to 32-bit x86 assembly using a push/pop
evaluation stack.

- A lookahead source delivering one character at a time
- Character classifiers standing in for a lexer
- A recursive descent parser that emits code while it recognizes
- An instruction emitter with AT&T, Intel and mnemonic syntaxes
- A reference register machine for executing the output

Pipeline
--------
    Characters → Parser (factor / term / expression) → Instructions → Assembly

Usage
-----
>>> from exprc.translator import translate_expression
>>> asm = translate_expression("(2+3)*4")

Language
--------
Supported:
- Single decimal digits 0-9
- Binary + - * / with the usual precedence, left-associative
- Parentheses

Not supported:
- Multi-digit numbers, variables, unary minus
- Whitespace between tokens
"""

from exprc.translator.compiler import (
    ExpressionTranslator,
    TranslationResult,
    TranslatorOptions,
    TrailingInput,
    translate_expression,
)
from exprc.translator.classify import is_addop, is_alpha, is_digit, is_mulop
from exprc.translator.emitter import InstructionEmitter
from exprc.translator.greeting import greet
from exprc.translator.instructions import Instruction, Opcode, Register, TargetSyntax
from exprc.translator.machine import MachineState, RegisterMachine
from exprc.translator.parser import ExpressionParser
from exprc.translator.source import END, LookaheadSource

__all__ = [
    # Main API
    "ExpressionTranslator",
    "TranslationResult",
    "TranslatorOptions",
    "TrailingInput",
    "translate_expression",
    # Input
    "LookaheadSource",
    "END",
    # Classifier
    "is_alpha",
    "is_digit",
    "is_addop",
    "is_mulop",
    # Parser
    "ExpressionParser",
    "greet",
    # Output
    "InstructionEmitter",
    "Instruction",
    "Opcode",
    "Register",
    "TargetSyntax",
    # Execution
    "RegisterMachine",
    "MachineState",
]
