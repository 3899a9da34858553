"""A flow-controlled, in-memory, in-order byte stream."""

from __future__ import annotations

_MAX_CAPACITY = 4 * 1024 * 1024


def _to_bytes(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if hasattr(data, "__bytes__"):
        return bytes(data)
    raise TypeError(f"expected bytes-like data, got {type(data).__name__}")


class ByteStream:
    """Bytes are written on the input side and read from the output side.

    The stream holds at most ``capacity`` unread bytes (capped at 4 MiB). Once
    the writer ends the input, no more bytes are expected.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = min(capacity, _MAX_CAPACITY)
        self._buffer = bytearray()
        self._bytes_written = 0
        self._bytes_read = 0
        self._input_ended = False
        self._error = False

    # Input side

    def write(self, data) -> int:
        """Write as many bytes as fit; return how many were accepted."""
        raw = _to_bytes(data)
        accepted = raw[: self.remaining_capacity()]
        self._buffer += accepted
        self._bytes_written += len(accepted)
        return len(accepted)

    def remaining_capacity(self) -> int:
        """Number of additional bytes the stream has room for."""
        return self._capacity - len(self._buffer)

    def end_input(self) -> None:
        """Signal that the writer has reached the end of the stream."""
        self._input_ended = True

    def set_error(self) -> None:
        """Mark the stream as having suffered an error."""
        self._error = True

    # Output side

    def peek_output(self, length: int) -> bytes:
        """Return up to ``length`` bytes from the front without removing them."""
        if length < 0:
            raise ValueError("length must not be negative")
        return bytes(self._buffer[:length])

    def pop_output(self, length: int) -> None:
        """Remove ``length`` bytes from the front of the buffer."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length > len(self._buffer):
            raise ValueError(
                f"cannot pop {length} bytes, only {len(self._buffer)} buffered"
            )
        del self._buffer[:length]
        self._bytes_read += length

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes from the front."""
        data = self.peek_output(length)
        self.pop_output(len(data))
        return data

    def input_ended(self) -> bool:
        """Whether the writer has ended the input."""
        return self._input_ended

    def error(self) -> bool:
        """Whether the stream has suffered an error."""
        return self._error

    def buffer_size(self) -> int:
        """Number of bytes that can currently be read."""
        return len(self._buffer)

    def buffer_empty(self) -> bool:
        """Whether no bytes are buffered."""
        return not self._buffer

    def eof(self) -> bool:
        """Whether the input has ended and every byte has been read."""
        return self._input_ended and not self._buffer

    # Accounting

    def bytes_written(self) -> int:
        """Total number of bytes written."""
        return self._bytes_written

    def bytes_read(self) -> int:
        """Total number of bytes popped."""
        return self._bytes_read