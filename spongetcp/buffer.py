"""Read-only byte buffers that can cheaply discard bytes from the front."""

from __future__ import annotations

from collections import deque


def _as_bytes(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if hasattr(data, "__bytes__"):
        return bytes(data)
    raise TypeError(f"expected bytes-like data, got {type(data).__name__}")


class Buffer:
    """An immutable byte string with a movable starting offset.

    Copies share the underlying storage but keep their own offset.
    """

    __slots__ = ("_storage", "_offset")

    def __init__(self, data=b"") -> None:
        if isinstance(data, Buffer):
            self._storage = data._storage
            self._offset = data._offset
        else:
            self._storage = _as_bytes(data)
            self._offset = 0

    def __bytes__(self) -> bytes:
        return self._storage[self._offset :]

    def __len__(self) -> int:
        return len(self._storage) - self._offset

    def __eq__(self, other) -> bool:
        if isinstance(other, Buffer):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Buffer({bytes(self)!r})"

    def copy(self) -> bytes:
        """Return the remaining contents as a new bytes object."""
        return bytes(self)

    def at(self, n: int) -> int:
        """Return the byte at position ``n``."""
        if not 0 <= n < len(self):
            raise IndexError("Buffer.at")
        return self._storage[self._offset + n]

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes."""
        if n < 0:
            raise ValueError("Buffer.remove_prefix: negative length")
        if n > len(self):
            raise IndexError("Buffer.remove_prefix")
        self._offset += n
        if self._offset == len(self._storage):
            self._storage = b""
            self._offset = 0


class BufferList:
    """A discontiguous byte string made of a sequence of Buffers."""

    def __init__(self, data=None) -> None:
        self._buffers: deque[Buffer] = deque()
        if data is not None:
            self.append(data)

    @property
    def buffers(self) -> tuple[Buffer, ...]:
        """The Buffers that make up this list, in order."""
        return tuple(self._buffers)

    def append(self, other) -> None:
        """Append another BufferList, a Buffer or bytes."""
        if isinstance(other, BufferList):
            self._buffers.extend(Buffer(buf) for buf in other._buffers)
        else:
            self._buffers.append(Buffer(other))

    def to_buffer(self) -> Buffer:
        """Return the contents as a single Buffer; only a contiguous list converts."""
        if not self._buffers:
            return Buffer()
        if len(self._buffers) == 1:
            return Buffer(self._buffers[0])
        raise ValueError(
            "BufferList: use concatenate() to combine a multi-Buffer BufferList into one Buffer"
        )

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes across the buffers."""
        if n < 0:
            raise ValueError("BufferList.remove_prefix: negative length")
        while n > 0:
            if not self._buffers:
                raise IndexError("BufferList.remove_prefix")
            front = self._buffers[0]
            if n < len(front):
                front.remove_prefix(n)
                n = 0
            else:
                n -= len(front)
                self._buffers.popleft()

    def __len__(self) -> int:
        return sum(len(buf) for buf in self._buffers)

    def concatenate(self) -> bytes:
        """Return all the bytes joined together."""
        return b"".join(bytes(buf) for buf in self._buffers)

    __bytes__ = concatenate

    def __repr__(self) -> str:
        return f"BufferList({[bytes(buf) for buf in self._buffers]!r})"