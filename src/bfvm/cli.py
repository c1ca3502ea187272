from __future__ import annotations

import argparse
import logging
import sys
import time

from typing import List, Optional

from .api import TAPE_MODELS, CompileOptions, RunOptions, compile_file, run_program
from .engine import EOFPolicy
from .errors import BFError
from .streams import StreamSink, StreamSource
from .tape import DEFAULT_TAPE_SIZE


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Compile and run a Brainfuck program.",
    )
    parser.add_argument("path", help="Program source file")
    parser.add_argument("--tape", choices=TAPE_MODELS, default="growable", help="Memory model (default growable)")
    parser.add_argument("--tape-size", type=int, default=DEFAULT_TAPE_SIZE, help="Cell count of the fixed tape")
    parser.add_argument("--max-cells", type=int, default=None, help="Growth limit of the growable tape")
    parser.add_argument(
        "--eof", choices=[p.value for p in EOFPolicy], default=EOFPolicy.ERROR.value,
        help="Behaviour of ',' at end of input (default error)",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="Abort after this many instructions")
    parser.add_argument("--encoding", default="utf-8", help="Source file encoding")
    parser.add_argument("--stats", action="store_true", help="Print timing and step count to stderr")
    parser.add_argument("--dump", type=int, default=0, metavar="N", help="Print the first N tape cells after the run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _dump_cells(cells: bytes, count: int) -> None:
    shown = list(cells[:count])
    for i in range(0, len(shown), 8):
        print(" ".join(f"{b:3d}" for b in shown[i:i + 8]), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = RunOptions(
            tape=args.tape,
            tape_size=args.tape_size,
            max_cells=args.max_cells,
            eof=args.eof,
            max_steps=args.max_steps,
        )
    except ValueError as e:
        parser.error(str(e))

    start = time.time()
    try:
        compiled = compile_file(args.path, options=CompileOptions(encoding=args.encoding))
    except (OSError, UnicodeDecodeError) as e:
        print(e, file=sys.stderr)
        return 1
    except BFError as e:
        print(e, file=sys.stderr)
        return 1
    compile_ms = (time.time() - start) * 1000

    state = None
    start = time.time()
    try:
        state = run_program(compiled.program, options=options, input=StreamSource(), output=StreamSink())
    except BFError as e:
        print(e, file=sys.stderr)
        return 1
    finally:
        if args.stats:
            print(f"Compilation took {compile_ms:.2f} ms", file=sys.stderr)
            print(f"Execution took {(time.time() - start) * 1000:.2f} ms", file=sys.stderr)
            if state is not None:
                print(f"Steps: {state.steps}, tape cells: {len(state.tape)}", file=sys.stderr)

    if args.dump > 0:
        _dump_cells(state.tape.to_bytes(), args.dump)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
