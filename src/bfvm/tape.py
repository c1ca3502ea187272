from __future__ import annotations

import sys

import numpy as np

DEFAULT_TAPE_SIZE = 30000


class FixedTape:
    """Zero-initialised tape of exactly `size` cells.

    Moving the pointer outside [0, size) raises IndexError.
    """

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size < 1:
            raise ValueError("Tape size must be at least 1")
        self.memory = np.zeros(size, dtype=np.uint8)

    def __len__(self) -> int:
        return len(self.memory)

    def read(self, index: int) -> int:
        return int(self.memory[index])

    def write(self, index: int, value: int) -> None:
        self.memory[index] = np.uint8(value & 0xFF)

    def forward(self, pointer: int) -> int:
        if pointer + 1 >= len(self.memory):
            raise IndexError("Pointer moved past the end of the tape")
        return pointer + 1

    def backward(self, pointer: int) -> int:
        if pointer == 0:
            raise IndexError("Pointer moved before the start of the tape")
        return pointer - 1

    def to_bytes(self) -> bytes:
        return self.memory.tobytes()


class GrowableTape:
    """Tape that starts with one cell and grows in the direction of travel.

    Cells live in a bytearray with zeroed headroom on both sides; the
    logical tape is the slice [start, end). Headroom doubles whenever it
    runs out, so extension at either end is amortised O(1). Raises
    MemoryError once the tape already holds `max_cells` cells.
    """

    def __init__(self, max_cells: int = sys.maxsize):
        if max_cells < 1:
            raise ValueError("max_cells must be at least 1")
        self.max_cells = max_cells
        self._buf = bytearray(1)
        self._start = 0
        self._end = 1

    def __len__(self) -> int:
        return self._end - self._start

    def read(self, index: int) -> int:
        return self._buf[self._start + index]

    def write(self, index: int, value: int) -> None:
        self._buf[self._start + index] = value & 0xFF

    def forward(self, pointer: int) -> int:
        pointer += 1
        if pointer == len(self):
            if len(self) >= self.max_cells:
                raise MemoryError("Out of memory")
            if self._end == len(self._buf):
                self._buf.extend(bytes(len(self._buf)))
            self._end += 1
        return pointer

    def backward(self, pointer: int) -> int:
        if pointer > 0:
            return pointer - 1
        if len(self) >= self.max_cells:
            raise MemoryError("Out of memory")
        if self._start == 0:
            pad = len(self._buf)
            self._buf[0:0] = bytes(pad)
            self._start += pad
            self._end += pad
        self._start -= 1
        # the new cell becomes index 0, so the pointer stays put
        return 0

    def to_bytes(self) -> bytes:
        return bytes(self._buf[self._start:self._end])
