"""Reassembles possibly out-of-order, overlapping substrings into an in-order byte stream."""

from __future__ import annotations

from bisect import bisect_left

from spongetcp.byte_stream import ByteStream


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


class StreamReassembler:
    """Collects substrings of a stream and writes contiguous bytes to a ByteStream.

    Each stored substring is cut to ``capacity`` bytes. Stored pieces that
    overlap or touch are merged, so the pieces held are disjoint and sorted.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._output = ByteStream(capacity)
        self._next_index = 0
        self._eof_index: int | None = None
        self._starts: list[int] = []
        self._chunks: list[bytes] = []
        self._unassembled = 0

    def push_substring(self, data, index: int, eof: bool = False) -> None:
        """Accept ``data`` starting at stream position ``index``.

        ``eof`` marks the last byte of ``data`` as the last byte of the stream.
        """
        if index < 0:
            raise ValueError("index must not be negative")
        raw = _to_bytes(data)
        if eof:
            self._eof_index = index + len(raw)

        if index < self._next_index:
            raw = raw[self._next_index - index :]
            index = self._next_index
        raw = raw[: self._capacity]

        if not raw:
            if self._next_index == self._eof_index:
                self._output.end_input()
            return

        self._store(index, raw)
        if index == self._next_index:
            self._deliver()

    def stream_out(self) -> ByteStream:
        """The reassembled in-order byte stream."""
        return self._output

    def unassembled_bytes(self) -> int:
        """Number of bytes stored but not yet written to the stream."""
        return self._unassembled

    def empty(self) -> bool:
        """Whether no substrings are waiting to be assembled."""
        return self._unassembled == 0

    def _store(self, index: int, data: bytes) -> None:
        end = index + len(data)
        first = bisect_left(self._starts, index)

        if first:
            prev_start = self._starts[first - 1]
            prev = self._chunks[first - 1]
            prev_end = prev_start + len(prev)
            if prev_end >= index:
                if prev_end >= end:
                    return
                data = prev + data[prev_end - index :]
                index = prev_start
                first -= 1

        last = first
        while last < len(self._starts) and self._starts[last] <= end:
            start = self._starts[last]
            chunk = self._chunks[last]
            if start + len(chunk) > end:
                data += chunk[end - start :]
                end = start + len(chunk)
            last += 1

        removed = sum(len(chunk) for chunk in self._chunks[first:last])
        self._starts[first:last] = [index]
        self._chunks[first:last] = [data]
        self._unassembled += len(data) - removed

    def _deliver(self) -> None:
        data = self._chunks[0]
        written = self._output.write(data)
        self._unassembled -= written
        if written == len(data):
            del self._starts[0]
            del self._chunks[0]
        else:
            self._starts[0] += written
            self._chunks[0] = data[written:]
        self._next_index += written
        if self._next_index == self._eof_index:
            self._output.end_input()