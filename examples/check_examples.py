#!/usr/bin/env python3

import os
import subprocess
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _run_example(path: str, *, args: list, input_data: bytes, timeout_s: float = 10.0) -> dict:
    cmd = [sys.executable, "-m", "bfvm", path, *args]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.path.join(ROOT, "src") + os.pathsep + env.get("PYTHONPATH", "")
    try:
        p = subprocess.run(
            cmd,
            input=input_data,
            capture_output=True,
            cwd=ROOT,
            env=env,
            timeout=timeout_s,
        )
        return {
            "returncode": p.returncode,
            "stdout": p.stdout,
            "stderr": p.stderr.decode("utf-8", "replace"),
            "timeout": False,
        }
    except subprocess.TimeoutExpired as e:
        return {
            "returncode": None,
            "stdout": e.stdout or b"",
            "stderr": (e.stderr or b"").decode("utf-8", "replace") + "\n[TIMEOUT]",
            "timeout": True,
        }


def main() -> int:
    examples = [
        {
            "file": "examples/hello_world.bf",
            "args": [],
            "input": b"",
            "check": lambda r: r["returncode"] == 0 and r["stdout"] == b"Hello World!\n",
            "expect": "exactly equals 'Hello World!\\n'",
        },
        {
            "file": "examples/cat.bf",
            "args": ["--eof", "zero"],
            "input": b"echo me",
            "check": lambda r: r["returncode"] == 0 and r["stdout"] == b"echo me",
            "expect": "exactly equals the input",
        },
        {
            "file": "examples/reverse.bf",
            "args": ["--eof", "zero"],
            "input": b"stressed",
            "check": lambda r: r["returncode"] == 0 and r["stdout"] == b"desserts",
            "expect": "exactly equals 'desserts'",
        },
        {
            "file": "examples/hello_world.bf",
            "args": ["--tape", "fixed", "--tape-size", "4"],
            "input": b"",
            "check": lambda r: r["returncode"] == 1 and "past the end of the tape" in r["stderr"],
            "expect": "fails with a tape bounds RuntimeError",
        },
        {
            "file": "examples/unbalanced.bf",
            "args": [],
            "input": b"",
            "check": lambda r: r["returncode"] == 1 and "CompileError: Unmatched '['" in r["stderr"],
            "expect": "fails with a CompileError",
        },
    ]

    print("=== bfvm Examples Verification ===")

    any_fail = False
    for ex in examples:
        r = _run_example(ex["file"], args=ex["args"], input_data=ex["input"])

        passed = ex["check"](r)
        status = "PASS" if passed else "FAIL"
        print(f"\n[{status}] {ex['file']} {' '.join(ex['args'])}")

        if passed:
            continue

        any_fail = True
        print(f"Expected: {ex['expect']}")
        print(f"Return code: {r['returncode']}  Timeout: {r['timeout']}")
        print("--- stdout ---")
        print(r["stdout"][:2000])
        print("--- stderr ---")
        print(r["stderr"][:2000])

    if any_fail:
        print("\nSome examples FAILED.")
        return 1

    print("\nAll examples passed (output checks).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
