#!/usr/bin/env python3
"""
Tests for the programmatic API and run options.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfvm import (
    BFCompileError, BFRuntimeError, CompileOptions, RunOptions,
    compile_file, compile_string, run_file, run_string,
)
from bfvm.tape import FixedTape, GrowableTape

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>->+>>+[<]<-]"
    ">>.>>---.+++++++..+++.>.<<-.>.+++.------.--------.>+.>++."
)


def test_compile_string():
    result = compile_string("Add two: ++ and print .")
    assert result.bf_code == "++."
    assert len(result.program) == 3
    assert result.source.startswith("Add two")


def test_compile_file(tmp_path):
    path = tmp_path / "prog.bf"
    path.write_text("++[-]\n", encoding="utf-8")
    result = compile_file(path)
    assert result.bf_code == "++[-]"


def test_compile_file_encoding(tmp_path):
    path = tmp_path / "prog.bf"
    path.write_bytes("café +".encode("latin-1"))
    result = compile_file(path, options=CompileOptions(encoding="latin-1"))
    assert result.bf_code == "+"


def test_compile_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        compile_file(tmp_path / "missing.bf")


def test_run_string_hello_world():
    result = run_string(HELLO_WORLD)
    assert result.output == b"Hello World!\n"


def test_run_string_with_input():
    result = run_string(",+.", b"a")
    assert result.output == b"b"
    assert result.tape == b"b"


def test_run_file(tmp_path):
    path = tmp_path / "hello.bf"
    path.write_text(HELLO_WORLD, encoding="utf-8")
    assert run_file(path).output == b"Hello World!\n"


def test_default_options_use_growable_tape():
    result = run_string(">" * 30000)
    assert isinstance(result.state.tape, GrowableTape)
    assert len(result.state.tape) == 30001


def test_fixed_tape_option():
    opts = RunOptions(tape="fixed")
    assert isinstance(opts.make_tape(), FixedTape)
    with pytest.raises(BFRuntimeError):
        run_string(">" * 30000, options=opts)


def test_fixed_tape_size_option():
    with pytest.raises(BFRuntimeError):
        run_string(">>", options=RunOptions(tape="fixed", tape_size=2))


def test_max_cells_option():
    with pytest.raises(BFRuntimeError):
        run_string("<<<", options=RunOptions(max_cells=3))


def test_eof_option():
    assert run_string("+,.", options=RunOptions(eof="zero")).output == b"\x00"
    assert run_string("+,.", options=RunOptions(eof="unchanged")).output == b"\x01"
    with pytest.raises(BFRuntimeError):
        run_string("+,.")


def test_max_steps_option():
    with pytest.raises(BFRuntimeError):
        run_string("+[]", options=RunOptions(max_steps=1000))


def test_compile_error_stops_before_running():
    with pytest.raises(BFCompileError):
        run_string("+.[")


@pytest.mark.parametrize("kwargs", [
    {"tape": "circular"},
    {"tape_size": 0},
    {"max_cells": 0},
    {"eof": "retry"},
    {"max_steps": -1},
])
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        RunOptions(**kwargs)
