
from .compiler import Program, compile_source, resolve_brackets
from .lexer import parse_character, tokenize
from .engine import EOFPolicy, ExecutionEngine, execute
from .errors import BFCompileError, BFError, BFRuntimeError
from .tape import FixedTape, GrowableTape
from .api import (
    CompileOptions, CompileResult, RunOptions, RunResult,
    compile_file, compile_string, run_file, run_program, run_string,
)

__all__ = [
    'Program',
    'compile_source',
    'resolve_brackets',
    'parse_character',
    'tokenize',
    'EOFPolicy',
    'ExecutionEngine',
    'execute',
    'BFError',
    'BFCompileError',
    'BFRuntimeError',
    'FixedTape',
    'GrowableTape',
    'CompileOptions',
    'CompileResult',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'run_program',
    'run_string',
    'run_file',
]
