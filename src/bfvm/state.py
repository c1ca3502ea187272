from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .tape import FixedTape, GrowableTape

Tape = Union[FixedTape, GrowableTape]


@dataclass
class MachineState:
    tape: Tape = field(default_factory=GrowableTape)
    data_pointer: int = 0
    instruction_pointer: int = 0
    steps: int = 0

    @property
    def cell(self) -> int:
        return self.tape.read(self.data_pointer)

    @cell.setter
    def cell(self, value: int) -> None:
        self.tape.write(self.data_pointer, value)
