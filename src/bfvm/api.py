from __future__ import annotations

import sys

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .compiler import Program, compile_source
from .engine import EOFPolicy, ExecutionEngine
from .state import MachineState, Tape
from .streams import BufferSink, BufferSource, ByteSink, ByteSource
from .tape import DEFAULT_TAPE_SIZE, FixedTape, GrowableTape

TAPE_MODELS = ('growable', 'fixed')


@dataclass(frozen=True)
class CompileOptions:
    encoding: str = "utf-8"


@dataclass(frozen=True)
class RunOptions:
    tape: str = "growable"
    tape_size: int = DEFAULT_TAPE_SIZE
    max_cells: Optional[int] = None
    eof: str = EOFPolicy.ERROR.value
    max_steps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tape not in TAPE_MODELS:
            raise ValueError(f"Unknown tape model: {self.tape!r} (expected one of {', '.join(TAPE_MODELS)})")
        if self.tape_size < 1:
            raise ValueError("tape_size must be at least 1")
        if self.max_cells is not None and self.max_cells < 1:
            raise ValueError("max_cells must be at least 1")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must not be negative")
        EOFPolicy(self.eof)

    def make_tape(self) -> Tape:
        if self.tape == 'fixed':
            return FixedTape(self.tape_size)
        return GrowableTape(sys.maxsize if self.max_cells is None else self.max_cells)


@dataclass(frozen=True)
class CompileResult:
    program: Program
    source: str

    @property
    def bf_code(self) -> str:
        return self.program.to_source()


@dataclass(frozen=True)
class RunResult:
    output: bytes
    state: MachineState

    @property
    def tape(self) -> bytes:
        return self.state.tape.to_bytes()


def compile_string(source: str) -> CompileResult:
    return CompileResult(program=compile_source(source), source=source)


def compile_file(path: str | Path, *, options: Optional[CompileOptions] = None) -> CompileResult:
    encoding = "utf-8" if options is None else options.encoding
    p = Path(path)
    return compile_string(p.read_text(encoding=encoding))


def run_program(
    program: Program,
    *,
    options: Optional[RunOptions] = None,
    input: Optional[ByteSource] = None,
    output: Optional[ByteSink] = None,
) -> MachineState:
    opts = options or RunOptions()
    engine = ExecutionEngine(
        program,
        tape=opts.make_tape(),
        input=input,
        output=output,
        eof=EOFPolicy(opts.eof),
        max_steps=opts.max_steps,
    )
    return engine.run()


def run_string(source: str, input_data: bytes = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    """Compile and run `source` with in-memory I/O."""
    program = compile_string(source).program
    sink = BufferSink()
    state = run_program(program, options=options, input=BufferSource(input_data), output=sink)
    return RunResult(output=sink.getvalue(), state=state)


def run_file(
    path: str | Path,
    input_data: bytes = b"",
    *,
    options: Optional[RunOptions] = None,
    compile_options: Optional[CompileOptions] = None,
) -> RunResult:
    program = compile_file(path, options=compile_options).program
    sink = BufferSink()
    state = run_program(program, options=options, input=BufferSource(input_data), output=sink)
    return RunResult(output=sink.getvalue(), state=state)
