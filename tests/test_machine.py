"""
Reference Machine Tests
=======================

Tests for the register machine, and through it for the values computed
by translated code.
"""

import pytest

from exprc.errors import MachineError
from exprc.translator import instructions as ins
from exprc.translator.compiler import ExpressionTranslator
from exprc.translator.machine import RegisterMachine, to_signed32


def evaluate(text: str) -> int:
    """Translate an expression and run it on a fresh machine."""
    result = ExpressionTranslator().translate_source(text)
    return RegisterMachine().run(result.instructions)


# =============================================================================
# Instruction Semantics
# =============================================================================

class TestInstructions:
    """Single-instruction behaviour."""

    def test_load_immediate(self):
        assert RegisterMachine().run([ins.load_immediate(9)]) == 9

    def test_push_pop(self):
        machine = RegisterMachine()
        machine.run([ins.load_immediate(4), ins.push(), ins.pop()])
        assert machine.state.ebx == 4
        assert machine.state.stack == []

    def test_exchange(self):
        machine = RegisterMachine()
        machine.run([
            ins.load_immediate(1), ins.push(), ins.load_immediate(2),
            ins.pop(), ins.exchange(),
        ])
        assert machine.state.eax == 1
        assert machine.state.ebx == 2

    def test_sign_extend_negative(self):
        machine = RegisterMachine()
        machine.state.eax = -5
        machine.step(ins.sign_extend())
        assert machine.state.edx == -1

    def test_sign_extend_positive(self):
        machine = RegisterMachine()
        machine.state.eax = 5
        machine.state.edx = 123
        machine.step(ins.sign_extend())
        assert machine.state.edx == 0

    def test_divide_truncates_toward_zero(self):
        machine = RegisterMachine()
        machine.state.eax = -7
        machine.state.ebx = 2
        machine.step(ins.sign_extend())
        machine.step(ins.divide_wide())
        assert machine.state.eax == -3
        assert machine.state.edx == -1

    def test_pop_empty_stack(self):
        with pytest.raises(MachineError, match="empty stack"):
            RegisterMachine().run([ins.pop()])

    def test_run_resets_state(self):
        machine = RegisterMachine()
        machine.run([ins.load_immediate(1), ins.push()])
        machine.run([ins.load_immediate(2)])
        assert machine.state.stack == []
        assert machine.state.steps == 1


class TestWrapping:
    """32-bit signed arithmetic."""

    def test_to_signed32(self):
        assert to_signed32(0x7FFFFFFF) == 2147483647
        assert to_signed32(0x80000000) == -2147483648
        assert to_signed32(-1) == -1
        assert to_signed32(1 << 32) == 0

    def test_multiply_overflow_wraps(self):
        machine = RegisterMachine()
        machine.state.eax = 0x10000
        machine.state.ebx = 0x10000
        machine.step(ins.multiply())
        assert machine.state.eax == 0


# =============================================================================
# Translated Expressions
# =============================================================================

class TestEvaluation:
    """Values computed by generated code."""

    @pytest.mark.parametrize("text,expected", [
        ("7", 7),
        ("2+3", 5),
        ("2-3", -1),
        ("3*4", 12),
        ("8/2", 4),
        ("7/2", 3),
        ("2*3+4", 10),
        ("2+3*4", 14),
        ("(2+3)*4", 20),
        ("9-3-2", 4),
        ("9-(3-2)", 8),
        ("8/4/2", 1),
        ("8/(4/2)", 4),
        ("(1-9)/2", -4),
        ("(1-8)/2", -3),
        ("((1+2)*(3+4))-(5*6)", -9),
    ])
    def test_value(self, text, expected):
        assert evaluate(text) == expected

    def test_division_by_zero(self):
        with pytest.raises(MachineError, match="division by zero"):
            evaluate("5/0")

    def test_division_by_zero_expression(self):
        with pytest.raises(MachineError, match="division by zero"):
            evaluate("5/(3-3)")
