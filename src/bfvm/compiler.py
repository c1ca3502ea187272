from __future__ import annotations

import logging

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import make_compile_error
from .lexer import Instruction, LoopClose, LoopOpen, SourcePosition, symbol_for, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """A resolved instruction stream, immutable once compiled.

    `positions` runs parallel to `instructions` and is empty for programs
    built without source text.
    """
    instructions: Tuple[Instruction, ...]
    positions: Tuple[SourcePosition, ...] = field(default=(), repr=False)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def position_of(self, index: int) -> Optional[SourcePosition]:
        if 0 <= index < len(self.positions):
            return self.positions[index]
        return None

    def to_source(self) -> str:
        return ''.join(symbol_for(instr) for instr in self.instructions)


def resolve_brackets(
    instructions: Sequence[Instruction],
    positions: Sequence[SourcePosition] = (),
    *,
    source: Optional[str] = None,
) -> List[Instruction]:
    """Rewrite every loop instruction into its resolved form.

    Single left-to-right pass with a stack of pending LoopOpen indices.
    Raises BFCompileError for a ']' with no open loop, or for any '[' left
    open at the end (the innermost one is reported).
    """
    result = list(instructions)
    open_locations: List[int] = []

    def fail(message: str, index: int):
        pos = positions[index] if index < len(positions) else None
        return make_compile_error(
            message=message,
            index=index,
            source=source,
            line=None if pos is None else pos.line,
            column=None if pos is None else pos.column,
        )

    for i, instr in enumerate(instructions):
        if isinstance(instr, LoopOpen):
            open_locations.append(i)
        elif isinstance(instr, LoopClose):
            if not open_locations:
                raise fail("Unmatched ']'", i)
            start = open_locations.pop()
            result[start] = LoopOpen(partner=i)
            result[i] = LoopClose(partner=start)

    if open_locations:
        raise fail("Unmatched '['", open_locations[-1])
    return result


def compile_source(source: str) -> Program:
    tokens = tokenize(source)
    positions = [t.position for t in tokens]
    resolved = resolve_brackets([t.instruction for t in tokens], positions, source=source)
    logger.debug("compiled %d instructions from %d source characters", len(resolved), len(source))
    return Program(tuple(resolved), tuple(positions))
