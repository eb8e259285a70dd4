"""
Instruction Emitter
===================

Formats instructions and writes them to an output channel, one line per
call, in emission order. Each line is a tab, the instruction text and a
newline.

The emitter also follows the evaluation stack of the generated program:
every PUSH raises the depth and every POP lowers it. The driver checks
the final depth to confirm a finished translation left it balanced.
"""

import logging
from typing import Optional, TextIO

from exprc.errors import CodeGenerationError
from exprc.translator.instructions import Instruction, Opcode, TargetSyntax

logger = logging.getLogger(__name__)


class InstructionEmitter:
    """
    Writes instruction lines to a sink and records what was emitted.

    Usage:
        emitter = InstructionEmitter(sys.stdout)
        emitter.emit(load_immediate(2))

    Attributes:
        syntax: Assembly syntax used to render each line
        instructions: Every instruction emitted so far, in order
        depth: Current evaluation-stack depth of the generated program
        max_depth: Largest depth reached so far
    """

    def __init__(
        self,
        sink: Optional[TextIO] = None,
        syntax: TargetSyntax = TargetSyntax.ATT,
    ):
        """
        Initialize the emitter.

        Args:
            sink: Text stream receiving each line (None = collect only)
            syntax: Assembly syntax for rendering
        """
        self._sink = sink
        self.syntax = syntax
        self.instructions: list[Instruction] = []
        self._lines: list[str] = []
        self.depth = 0
        self.max_depth = 0

    def emit(self, instruction: Instruction) -> None:
        """
        Emit one instruction.

        Raises:
            CodeGenerationError: If a POP is emitted with nothing pushed
        """
        self._track_stack(instruction)

        line = f"\t{instruction.format(self.syntax)}"
        self.instructions.append(instruction)
        self._lines.append(line)
        logger.debug(f"emit {instruction.opcode.value}: {line.strip()}")

        if self._sink is not None:
            self._sink.write(line + "\n")

    def _track_stack(self, instruction: Instruction) -> None:
        if instruction.opcode is Opcode.PUSH:
            self.depth += 1
            self.max_depth = max(self.max_depth, self.depth)
        elif instruction.opcode is Opcode.POP:
            if self.depth == 0:
                raise CodeGenerationError(
                    "pop emitted with an empty evaluation stack",
                    hint=f"after {len(self.instructions)} instructions",
                )
            self.depth -= 1

    def get_output(self) -> str:
        """Return all emitted lines as one text block."""
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"
