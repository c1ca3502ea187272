from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union


# ---------------- Instructions ----------------
@dataclass(frozen=True)
class MovePointerForward:
    pass  # '>'

@dataclass(frozen=True)
class MovePointerBackward:
    pass  # '<'

@dataclass(frozen=True)
class IncrementCell:
    pass  # '+'

@dataclass(frozen=True)
class DecrementCell:
    pass  # '-'

@dataclass(frozen=True)
class WriteByte:
    pass  # '.'

@dataclass(frozen=True)
class ReadByte:
    pass  # ','

@dataclass(frozen=True)
class LoopOpen:
    partner: Optional[int] = None  # index of the matching LoopClose once resolved

@dataclass(frozen=True)
class LoopClose:
    partner: Optional[int] = None  # index of the matching LoopOpen once resolved

Instruction = Union[
    MovePointerForward, MovePointerBackward, IncrementCell, DecrementCell,
    WriteByte, ReadByte, LoopOpen, LoopClose,
]

COMMANDS: Dict[str, Instruction] = {
    '>': MovePointerForward(),
    '<': MovePointerBackward(),
    '+': IncrementCell(),
    '-': DecrementCell(),
    '.': WriteByte(),
    ',': ReadByte(),
    '[': LoopOpen(),
    ']': LoopClose(),
}

SYMBOLS: Dict[type, str] = {type(instr): ch for ch, instr in COMMANDS.items()}


@dataclass(frozen=True)
class SourcePosition:
    offset: int
    line: int
    column: int


@dataclass(frozen=True)
class Token:
    instruction: Instruction
    position: SourcePosition


def parse_character(ch: str) -> Optional[Instruction]:
    """Map one source character to its instruction, or None for a comment character."""
    return COMMANDS.get(ch)


def symbol_for(instr: Instruction) -> str:
    return SYMBOLS[type(instr)]


def tokenize(source: str) -> List[Token]:
    """Lex `source` into tokens, dropping every non-command character.

    Positions are 0-based offsets with 1-based line and column numbers so
    errors can point back into the original text.
    """
    tokens: List[Token] = []
    line = 1
    line_start = 0
    for offset, ch in enumerate(source):
        if ch == '\n':
            line += 1
            line_start = offset + 1
            continue
        instr = parse_character(ch)
        if instr is None:
            continue
        tokens.append(Token(instr, SourcePosition(offset, line, offset - line_start + 1)))
    return tokens
