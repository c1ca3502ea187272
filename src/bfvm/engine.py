from __future__ import annotations

import enum
import logging

from typing import Optional

from .compiler import Program
from .errors import BFRuntimeError, make_runtime_error
from .lexer import (
    DecrementCell, IncrementCell, LoopClose, LoopOpen, MovePointerBackward,
    MovePointerForward, ReadByte, WriteByte,
)
from .state import MachineState, Tape
from .streams import ByteSink, ByteSource, StreamSink, StreamSource

logger = logging.getLogger(__name__)


class EOFPolicy(str, enum.Enum):
    """What ',' does once the input source has no more bytes."""
    ERROR = "error"
    ZERO = "zero"
    UNCHANGED = "unchanged"


class ExecutionEngine:
    """Runs a resolved Program against a fresh MachineState.

    `step()` executes one instruction; `run()` steps until the instruction
    pointer passes the end of the program. The first failure raises
    BFRuntimeError and leaves the state as it was before that instruction.
    """

    def __init__(
        self,
        program: Program,
        *,
        tape: Optional[Tape] = None,
        input: Optional[ByteSource] = None,
        output: Optional[ByteSink] = None,
        eof: EOFPolicy = EOFPolicy.ERROR,
        max_steps: Optional[int] = None,
    ):
        self.program = program
        self.state = MachineState() if tape is None else MachineState(tape=tape)
        self.input = input if input is not None else StreamSource()
        self.output = output if output is not None else StreamSink()
        self.eof = EOFPolicy(eof)
        self.max_steps = max_steps

    @property
    def finished(self) -> bool:
        return self.state.instruction_pointer >= len(self.program)

    def _error(self, message: str) -> BFRuntimeError:
        ip = self.state.instruction_pointer
        pos = self.program.position_of(ip)
        return make_runtime_error(
            message=message,
            index=ip,
            line=None if pos is None else pos.line,
            column=None if pos is None else pos.column,
        )

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has ended."""
        if self.finished:
            return False
        st = self.state
        if self.max_steps is not None and st.steps >= self.max_steps:
            raise self._error("Step limit exceeded")

        ip = st.instruction_pointer
        instr = self.program[ip]

        if isinstance(instr, IncrementCell):
            st.cell = (st.cell + 1) & 0xFF
        elif isinstance(instr, DecrementCell):
            st.cell = (st.cell - 1) & 0xFF
        elif isinstance(instr, MovePointerForward):
            try:
                st.data_pointer = st.tape.forward(st.data_pointer)
            except (IndexError, MemoryError) as e:
                raise self._error(str(e)) from e
        elif isinstance(instr, MovePointerBackward):
            try:
                st.data_pointer = st.tape.backward(st.data_pointer)
            except (IndexError, MemoryError) as e:
                raise self._error(str(e)) from e
        elif isinstance(instr, WriteByte):
            self.output.write_byte(st.cell)
        elif isinstance(instr, ReadByte):
            # pending output (e.g. a prompt) must be visible before blocking on input
            self.output.flush()
            value = self.input.read_byte()
            if value is not None:
                st.cell = value
            elif self.eof is EOFPolicy.ERROR:
                raise self._error("Input exhausted")
            elif self.eof is EOFPolicy.ZERO:
                st.cell = 0
        elif isinstance(instr, (LoopOpen, LoopClose)):
            if instr.partner is None:
                raise self._error("Unresolved loop instruction")
            # '[' skips past its ']' on zero; ']' jumps back past its '[' on non-zero
            taken = st.cell == 0 if isinstance(instr, LoopOpen) else st.cell != 0
            if taken:
                st.instruction_pointer = instr.partner + 1
                st.steps += 1
                return not self.finished

        st.instruction_pointer = ip + 1
        st.steps += 1
        return not self.finished

    def run(self) -> MachineState:
        try:
            while self.step():
                pass
        finally:
            self.output.flush()
        logger.debug(
            "run finished after %d steps, tape has %d cells",
            self.state.steps, len(self.state.tape),
        )
        return self.state


def execute(program: Program, **kwargs) -> MachineState:
    return ExecutionEngine(program, **kwargs).run()
