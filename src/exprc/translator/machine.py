"""
Reference Register Machine
==========================

Executes generated instructions with 32-bit x86 semantics so that the
output of the translator can be checked by value, not just by shape.

Machine Model
-------------
- Registers eax, ebx, edx hold signed 32-bit values
- An unbounded LIFO stack receives PUSH and feeds POP
- imul keeps the low 32 bits of the product
- cdq sign-extends eax into edx
- idiv divides the 64-bit edx:eax by the source, truncating toward zero;
  the quotient goes to eax and the remainder to edx

Example
-------
>>> from exprc.translator.compiler import ExpressionTranslator
>>> from exprc.translator.machine import RegisterMachine
>>> result = ExpressionTranslator().translate_source("9-3-2")
>>> RegisterMachine().run(result.instructions)
4
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from exprc.errors import MachineError
from exprc.translator.instructions import Instruction, Opcode, Register

logger = logging.getLogger(__name__)

WORD_BITS = 32
WORD_MASK = (1 << WORD_BITS) - 1


def to_signed32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= WORD_MASK
    if value & (1 << (WORD_BITS - 1)):
        value -= 1 << WORD_BITS
    return value


@dataclass
class MachineState:
    """
    Complete machine state.

    Attributes:
        eax: Accumulator
        ebx: Secondary register
        edx: High half of the wide dividend
        stack: Evaluation stack, top at the end
        steps: Instructions executed so far
    """
    eax: int = 0
    ebx: int = 0
    edx: int = 0
    stack: list[int] = field(default_factory=list)
    steps: int = 0


class RegisterMachine:
    """
    Interpreter for translator output.

    Usage:
        machine = RegisterMachine()
        value = machine.run(instructions)
    """

    def __init__(self) -> None:
        self.state = MachineState()

    def reset(self) -> None:
        """Clear registers and stack."""
        self.state = MachineState()

    def run(self, instructions: Iterable[Instruction]) -> int:
        """
        Execute instructions from a fresh state and return eax.

        Raises:
            MachineError: On division by zero or a pop from an empty stack
        """
        self.reset()
        for instruction in instructions:
            self.step(instruction)
        logger.debug(
            f"Executed {self.state.steps} instructions, eax={self.state.eax}"
        )
        return self.state.eax

    def step(self, instruction: Instruction) -> None:
        """Execute a single instruction."""
        op = instruction.opcode
        s = self.state

        if op is Opcode.LOAD_IMMEDIATE:
            self._write(instruction.dst, to_signed32(instruction.value))
        elif op is Opcode.PUSH:
            s.stack.append(self._read(instruction.src))
        elif op is Opcode.POP:
            if not s.stack:
                raise MachineError(f"pop from empty stack at step {s.steps}")
            self._write(instruction.dst, s.stack.pop())
        elif op is Opcode.MULTIPLY:
            product = self._read(instruction.dst) * self._read(instruction.src)
            self._write(instruction.dst, to_signed32(product))
        elif op is Opcode.EXCHANGE:
            a = self._read(instruction.dst)
            b = self._read(instruction.src)
            self._write(instruction.dst, b)
            self._write(instruction.src, a)
        elif op is Opcode.SIGN_EXTEND:
            s.edx = -1 if s.eax < 0 else 0
        elif op is Opcode.DIVIDE_WIDE:
            self._divide(self._read(instruction.src))
        elif op is Opcode.ADD:
            total = self._read(instruction.dst) + self._read(instruction.src)
            self._write(instruction.dst, to_signed32(total))
        elif op is Opcode.SUBTRACT:
            diff = self._read(instruction.dst) - self._read(instruction.src)
            self._write(instruction.dst, to_signed32(diff))
        elif op is Opcode.NEGATE:
            self._write(instruction.dst, to_signed32(-self._read(instruction.dst)))
        else:
            raise MachineError(f"unsupported opcode {op.value}")

        s.steps += 1

    def _divide(self, divisor: int) -> None:
        s = self.state
        if divisor == 0:
            raise MachineError(f"division by zero at step {s.steps}")

        dividend = (s.edx << WORD_BITS) | (s.eax & WORD_MASK)

        # Truncate toward zero, remainder takes the dividend's sign
        quotient = abs(dividend) // abs(divisor)
        if (dividend < 0) != (divisor < 0):
            quotient = -quotient
        remainder = dividend - quotient * divisor

        s.eax = to_signed32(quotient)
        s.edx = to_signed32(remainder)

    def _read(self, register: Register) -> int:
        if register is Register.ACCUMULATOR:
            return self.state.eax
        if register is Register.SECONDARY:
            return self.state.ebx
        raise MachineError(f"register {register.value} is not addressable")

    def _write(self, register: Register, value: int) -> None:
        if register is Register.ACCUMULATOR:
            self.state.eax = value
        elif register is Register.SECONDARY:
            self.state.ebx = value
        else:
            raise MachineError(f"register {register.value} is not addressable")
