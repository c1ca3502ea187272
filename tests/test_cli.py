#!/usr/bin/env python3
"""
Command line tests, run in-process through main().
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfvm.cli import main

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>->+>>+[<]<-]"
    ">>.>>---.+++++++..+++.>.<<-.>.+++.------.--------.>+.>++."
)


def _write(tmp_path, source, name="prog.bf"):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return str(path)


def _stdin(monkeypatch, data):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_hello_world(tmp_path, capsysbinary):
    assert main([_write(tmp_path, HELLO_WORLD)]) == 0
    out, err = capsysbinary.readouterr()
    assert out == b"Hello World!\n"
    assert err == b""


def test_raw_byte_output(tmp_path, capsysbinary):
    assert main([_write(tmp_path, "-.")]) == 0
    out, _ = capsysbinary.readouterr()
    assert out == b"\xff"


def test_reads_stdin(tmp_path, capsysbinary, monkeypatch):
    _stdin(monkeypatch, b"xyz")
    assert main([_write(tmp_path, ",[.,]"), "--eof", "zero"]) == 0
    out, _ = capsysbinary.readouterr()
    assert out == b"xyz"


def test_missing_file(tmp_path, capsysbinary):
    assert main([str(tmp_path / "nope.bf")]) == 1
    _, err = capsysbinary.readouterr()
    assert b"nope.bf" in err


def test_compile_error(tmp_path, capsysbinary):
    assert main([_write(tmp_path, "+[")]) == 1
    out, err = capsysbinary.readouterr()
    assert out == b""
    assert b"CompileError: Unmatched '['" in err


def test_runtime_error_keeps_earlier_output(tmp_path, capsysbinary):
    assert main([_write(tmp_path, "+.<"), "--tape", "fixed"]) == 1
    out, err = capsysbinary.readouterr()
    assert out == b"\x01"
    assert b"RuntimeError: Pointer moved before the start of the tape" in err


def test_input_exhausted(tmp_path, capsysbinary, monkeypatch):
    _stdin(monkeypatch, b"")
    assert main([_write(tmp_path, ",")]) == 1
    _, err = capsysbinary.readouterr()
    assert b"Input exhausted" in err


def test_max_steps(tmp_path, capsysbinary):
    assert main([_write(tmp_path, "+[]"), "--max-steps", "50"]) == 1
    _, err = capsysbinary.readouterr()
    assert b"Step limit exceeded" in err


def test_stats_and_dump(tmp_path, capsysbinary):
    assert main([_write(tmp_path, "+>++>+++"), "--stats", "--dump", "3"]) == 0
    _, err = capsysbinary.readouterr()
    assert b"Compilation took" in err
    assert b"Execution took" in err
    assert b"Steps: 8, tape cells: 3" in err
    assert b"  1   2   3" in err


def test_invalid_option_value(tmp_path):
    with pytest.raises(SystemExit) as info:
        main([_write(tmp_path, "+"), "--tape-size", "0"])
    assert info.value.code == 2


def test_source_not_valid_utf8(tmp_path, capsysbinary):
    path = tmp_path / "binary.bf"
    path.write_bytes(b"+\xff\xfe.")
    assert main([str(path)]) == 1
    out, err = capsysbinary.readouterr()
    assert out == b""
    assert b"can't decode" in err


def test_source_decoded_with_encoding_option(tmp_path, capsysbinary):
    path = tmp_path / "latin.bf"
    path.write_bytes(b"+\xff\xfe.")
    assert main([str(path), "--encoding", "latin-1"]) == 0
    out, _ = capsysbinary.readouterr()
    assert out == b"\x01"
