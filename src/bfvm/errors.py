from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


def _build_context(lines: List[str], line_no_1: int, column: Optional[int] = None, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column is not None:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'compile':
        if "unmatched ']'" in msg:
            return 'This "]" closes a loop that was never opened. Remove it or add a "[" before it.'
        if "unmatched '['" in msg:
            return 'This "[" is never closed. Add a matching "]" after the loop body.'
        return None
    if kind == 'runtime':
        if 'past the end' in msg or 'before the start' in msg:
            return 'The fixed tape has a limited number of cells. Use the growable tape to lift the limit.'
        if 'input exhausted' in msg:
            return 'The program read more bytes than were supplied. Choose a different EOF policy to continue instead.'
        if 'step limit' in msg:
            return 'The program may be stuck in an infinite loop, or needs a larger step limit.'
        return None
    return None


def _position_suffix(line: Optional[int], column: Optional[int]) -> str:
    if line is None:
        return ''
    if column is None:
        return f"line {line}"
    return f"line {line}, column {column}"


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFCompileError(BFError):
    index: Optional[int] = None
    line: Optional[int] = None
    column: Optional[int] = None
    context: str = ''


@dataclass
class BFRuntimeError(BFError):
    index: Optional[int] = None
    line: Optional[int] = None
    column: Optional[int] = None


def make_compile_error(
    *,
    message: str,
    index: Optional[int] = None,
    source: Optional[str] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
) -> BFCompileError:
    where = _position_suffix(line, column)
    if not where and index is not None:
        where = f"instruction {index}"
    text = f"CompileError: {message}"
    if where:
        text += f" ({where})"

    ctx = ''
    if source is not None and line is not None:
        ctx = _build_context(source.split('\n'), line, column)
        text += f"\n{ctx}"
    hint = _hint_for(message, kind='compile')
    if hint:
        text += f"\nHint: {hint}"
    return BFCompileError(message=text, index=index, line=line, column=column, context=ctx)


def make_runtime_error(
    *,
    message: str,
    index: Optional[int] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
) -> BFRuntimeError:
    parts: List[str] = []
    if index is not None:
        parts.append(f"instruction {index}")
    where = _position_suffix(line, column)
    if where:
        parts.append(where)
    text = f"RuntimeError: {message}"
    if parts:
        text += f" ({', '.join(parts)})"
    hint = _hint_for(message, kind='runtime')
    if hint:
        text += f"\nHint: {hint}"
    return BFRuntimeError(message=text, index=index, line=line, column=column)
