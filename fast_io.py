"""
Buffered Integer I/O for Batch Query Programs

Reads whitespace-separated non-negative integers from a binary stream and
writes them back one buffer at a time, avoiding per-token read/write calls
on large inputs.

Key Features:
- Chunked reads with a fixed-size buffer
- Whitespace skipping (any byte below '-')
- Buffered output flushed on overflow, on flush() and on context exit
"""

from typing import BinaryIO, List

_MINUS_SIGN = ord('-')
_ZERO = ord('0')
_NINE = ord('9')
_NEWLINE = b'\n'

DEFAULT_BUFFER_SIZE = 8192


class IntReader:
    """
    Token reader for non-negative decimal integers.

    Input is assumed well-formed: tokens are digit runs separated by
    whitespace. Reading past the end of input raises EOFError.
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")

        self.stream = stream
        self.buffer_size = buffer_size
        self._buffer = b''
        self._position = 0

    def _fill(self) -> bool:
        """Load the next chunk; returns False once the stream is exhausted."""
        self._buffer = self.stream.read(self.buffer_size)
        self._position = 0
        return len(self._buffer) > 0

    def _peek(self) -> int:
        """Next byte without consuming it, or -1 at end of input."""
        if self._position == len(self._buffer) and not self._fill():
            return -1
        return self._buffer[self._position]

    def read_non_negative_int(self) -> int:
        """
        Read the next integer token.

        Returns:
            The parsed integer

        Raises:
            EOFError: if the input ends before a token starts
        """
        byte = self._peek()
        while 0 <= byte < _MINUS_SIGN:
            self._position += 1
            byte = self._peek()

        if byte == -1:
            raise EOFError("Input exhausted while looking for an integer")
        if not _ZERO <= byte <= _NINE:
            raise ValueError(f"Unexpected byte {bytes([byte])!r} where an integer was expected")

        result = 0
        while _ZERO <= byte <= _NINE:
            result = result * 10 + (byte - _ZERO)
            self._position += 1
            byte = self._peek()

        return result

    def read_ints(self, count: int) -> List[int]:
        """Read the next `count` integer tokens."""
        return [self.read_non_negative_int() for _ in range(count)]


class IntWriter:
    """
    Buffered writer for non-negative integers and newlines.

    Nothing reaches the stream until the buffer would overflow or flush()
    is called.
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")

        self.stream = stream
        self.buffer_size = buffer_size
        self._buffer = bytearray()

    def _write(self, data: bytes):
        if len(self._buffer) + len(data) > self.buffer_size:
            self._drain()
        self._buffer += data

    def _drain(self):
        if self._buffer:
            self.stream.write(bytes(self._buffer))
            self._buffer.clear()

    def write_non_negative_int(self, value: int):
        """Append the decimal digits of value."""
        if value < 0:
            raise ValueError(f"Expected a non-negative integer, got {value}")
        self._write(str(value).encode('ascii'))

    def write_line(self):
        """Append a newline."""
        self._write(_NEWLINE)

    def flush(self):
        """Write out everything buffered and flush the stream."""
        self._drain()
        self.stream.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.flush()
        return False
