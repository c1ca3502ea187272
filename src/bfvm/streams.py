from __future__ import annotations

import sys

from typing import BinaryIO, Optional, Protocol


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]:
        """Return the next input byte, or None once the stream has ended."""
        ...


class ByteSink(Protocol):
    def write_byte(self, value: int) -> None: ...

    def flush(self) -> None: ...


class StreamSource:
    """Reads one byte at a time from a binary stream (stdin by default)."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdin.buffer

    def read_byte(self) -> Optional[int]:
        data = self.stream.read(1)
        if not data:
            return None
        return data[0]


class BufferSource:
    def __init__(self, data: bytes = b""):
        self.data = bytes(data)
        self.index = 0

    def read_byte(self) -> Optional[int]:
        if self.index >= len(self.data):
            return None
        value = self.data[self.index]
        self.index += 1
        return value


class StreamSink:
    """Writes raw bytes to a binary stream (stdout by default)."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdout.buffer

    def write_byte(self, value: int) -> None:
        self.stream.write(bytes((value,)))

    def flush(self) -> None:
        self.stream.flush()


class BufferSink:
    def __init__(self):
        self.buffer = bytearray()

    def write_byte(self, value: int) -> None:
        self.buffer.append(value)

    def flush(self) -> None:
        pass

    def getvalue(self) -> bytes:
        return bytes(self.buffer)
