"""
Target Instructions
===================

This module defines the instruction records produced by the code generator
and their textual rendering in each supported assembly syntax.

Register Convention
-------------------
The generated code uses a fixed two-register convention on 32-bit x86:

| Register  | Usage                                          |
|-----------|------------------------------------------------|
| eax       | Accumulator: holds the running result          |
| ebx       | Secondary: receives the popped left operand    |
| edx:eax   | Wide dividend pair for signed division         |

Operation Set
-------------
| Opcode          | AT&T             | Intel            | Effect                |
|-----------------|------------------|------------------|-----------------------|
| LOAD_IMMEDIATE  | mov $d, %eax     | mov eax, d       | eax = d               |
| PUSH            | push %eax        | push eax         | stack <- eax          |
| POP             | pop %ebx         | pop ebx          | ebx <- stack          |
| MULTIPLY        | imul %ebx, %eax  | imul eax, ebx    | eax = eax * ebx       |
| EXCHANGE        | xchg %eax, %ebx  | xchg eax, ebx    | swap eax, ebx         |
| SIGN_EXTEND     | cdq              | cdq              | edx:eax = sext(eax)   |
| DIVIDE_WIDE     | idiv %ebx        | idiv ebx         | eax = edx:eax / ebx   |
| ADD             | add %ebx, %eax   | add eax, ebx     | eax = eax + ebx       |
| SUBTRACT        | sub %ebx, %eax   | sub eax, ebx     | eax = eax - ebx       |
| NEGATE          | neg %eax         | neg eax          | eax = -eax            |

The MNEMONIC syntax prints the abstract operation names from the table,
e.g. ``LOAD_IMMEDIATE eax, 2``, and is convenient for reading or diffing
generated code independently of any assembler.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Register(Enum):
    """Registers named by generated code."""
    ACCUMULATOR = "eax"
    SECONDARY = "ebx"
    WIDE_PAIR = "edx:eax"   # Dividend pair for cdq/idiv


class Opcode(Enum):
    """Abstract target operations."""
    LOAD_IMMEDIATE = "LOAD_IMMEDIATE"
    PUSH = "PUSH"
    POP = "POP"
    MULTIPLY = "MULTIPLY"
    DIVIDE_WIDE = "DIVIDE_WIDE"
    SIGN_EXTEND = "SIGN_EXTEND"
    EXCHANGE = "EXCHANGE"
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    NEGATE = "NEGATE"


class TargetSyntax(Enum):
    """Concrete assembly syntax used when rendering instructions."""
    ATT = "att"
    INTEL = "intel"
    MNEMONIC = "mnemonic"


# =============================================================================
# Syntax Templates
# =============================================================================
# Each template is formatted with the instruction's dst, src and value.
# Registers are substituted by name (eax, ebx, ...).
# =============================================================================

_TEMPLATES: dict[TargetSyntax, dict[Opcode, str]] = {
    TargetSyntax.ATT: {
        Opcode.LOAD_IMMEDIATE: "mov ${value}, %{dst}",
        Opcode.PUSH: "push %{src}",
        Opcode.POP: "pop %{dst}",
        Opcode.MULTIPLY: "imul %{src}, %{dst}",
        Opcode.DIVIDE_WIDE: "idiv %{src}",
        Opcode.SIGN_EXTEND: "cdq",
        Opcode.EXCHANGE: "xchg %{dst}, %{src}",
        Opcode.ADD: "add %{src}, %{dst}",
        Opcode.SUBTRACT: "sub %{src}, %{dst}",
        Opcode.NEGATE: "neg %{dst}",
    },
    TargetSyntax.INTEL: {
        Opcode.LOAD_IMMEDIATE: "mov {dst}, {value}",
        Opcode.PUSH: "push {src}",
        Opcode.POP: "pop {dst}",
        Opcode.MULTIPLY: "imul {dst}, {src}",
        Opcode.DIVIDE_WIDE: "idiv {src}",
        Opcode.SIGN_EXTEND: "cdq",
        Opcode.EXCHANGE: "xchg {dst}, {src}",
        Opcode.ADD: "add {dst}, {src}",
        Opcode.SUBTRACT: "sub {dst}, {src}",
        Opcode.NEGATE: "neg {dst}",
    },
    TargetSyntax.MNEMONIC: {
        Opcode.LOAD_IMMEDIATE: "LOAD_IMMEDIATE {dst}, {value}",
        Opcode.PUSH: "PUSH {src}",
        Opcode.POP: "POP {dst}",
        Opcode.MULTIPLY: "MULTIPLY {dst}, {src}",
        Opcode.DIVIDE_WIDE: "DIVIDE_WIDE {dst}, {src}",
        Opcode.SIGN_EXTEND: "SIGN_EXTEND {dst}, {src}",
        Opcode.EXCHANGE: "EXCHANGE {dst}, {src}",
        Opcode.ADD: "ADD {dst}, {src}",
        Opcode.SUBTRACT: "SUBTRACT {dst}, {src}",
        Opcode.NEGATE: "NEGATE {dst}",
    },
}


@dataclass(frozen=True)
class Instruction:
    """
    One target operation.

    Instructions are immutable records; the emitter renders them to text
    and keeps them only so callers can inspect what was generated.

    Attributes:
        opcode: The operation
        dst: Destination register (None if the operation has none)
        src: Source register (None if the operation has none)
        value: Immediate operand for LOAD_IMMEDIATE
    """
    opcode: Opcode
    dst: Optional[Register] = None
    src: Optional[Register] = None
    value: Optional[int] = None

    def format(self, syntax: TargetSyntax = TargetSyntax.ATT) -> str:
        """Render the instruction in the given assembly syntax."""
        template = _TEMPLATES[syntax][self.opcode]
        return template.format(
            dst=self.dst.value if self.dst else "",
            src=self.src.value if self.src else "",
            value=self.value,
        )

    def __str__(self) -> str:
        return self.format(TargetSyntax.ATT)


# =============================================================================
# Constructors
# =============================================================================
# One helper per operation, fixing the register convention in one place.
# =============================================================================

ACC = Register.ACCUMULATOR
SEC = Register.SECONDARY


def load_immediate(value: int) -> Instruction:
    return Instruction(Opcode.LOAD_IMMEDIATE, dst=ACC, value=value)


def push() -> Instruction:
    return Instruction(Opcode.PUSH, src=ACC)


def pop() -> Instruction:
    return Instruction(Opcode.POP, dst=SEC)


def multiply() -> Instruction:
    return Instruction(Opcode.MULTIPLY, dst=ACC, src=SEC)


def exchange() -> Instruction:
    return Instruction(Opcode.EXCHANGE, dst=ACC, src=SEC)


def sign_extend() -> Instruction:
    return Instruction(Opcode.SIGN_EXTEND, dst=Register.WIDE_PAIR, src=ACC)


def divide_wide() -> Instruction:
    return Instruction(Opcode.DIVIDE_WIDE, dst=Register.WIDE_PAIR, src=SEC)


def add() -> Instruction:
    return Instruction(Opcode.ADD, dst=ACC, src=SEC)


def subtract() -> Instruction:
    return Instruction(Opcode.SUBTRACT, dst=ACC, src=SEC)


def negate() -> Instruction:
    return Instruction(Opcode.NEGATE, dst=ACC)
