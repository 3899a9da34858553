"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from enum import Enum, auto

from spongetcp.byte_stream import ByteStream
from spongetcp.stream_reassembler import StreamReassembler
from spongetcp.tcp_segment import TCPSegment
from spongetcp.wrapping_integers import WrappingInt32, unwrap, wrap


class _Status(Enum):
    WAIT_SYN = auto()
    SYN_RECEIVED = auto()
    FIN_RECEIVED = auto()
    ERROR = auto()


class TCPReceiver:
    """Reassembles inbound segments into a ByteStream and computes ackno and window."""

    def __init__(self, capacity: int) -> None:
        self._reassembler = StreamReassembler(capacity)
        self._capacity = capacity
        self._status = _Status.WAIT_SYN
        self._peer_isn = WrappingInt32(0)

    def segment_received(self, seg: TCPSegment) -> None:
        """Handle an inbound segment; anything before a SYN is ignored."""
        if self._status is _Status.ERROR:
            return
        header = seg.header
        if self._status is _Status.WAIT_SYN:
            if not header.syn:
                return
            self._status = _Status.SYN_RECEIVED
            self._peer_isn = header.seqno
            self._reassembler.push_substring(seg.payload.copy(), 0, header.fin)
            if header.fin:
                self._status = _Status.FIN_RECEIVED
            return

        if header.fin:
            self._status = _Status.FIN_RECEIVED
        absolute = unwrap(header.seqno, self._peer_isn, self._checkpoint())
        if absolute == 0:
            return
        self._reassembler.push_substring(seg.payload.copy(), absolute - 1, header.fin)

    def ackno(self) -> WrappingInt32 | None:
        """The first sequence number not yet received, or None before a SYN."""
        if self._status in (_Status.SYN_RECEIVED, _Status.FIN_RECEIVED):
            return wrap(self._next_absolute(), self._peer_isn)
        return None

    def window_size(self) -> int:
        """Capacity minus the bytes reassembled but not yet read."""
        return self._capacity - self.stream_out().buffer_size()

    def unassembled_bytes(self) -> int:
        """Bytes stored but not yet reassembled."""
        return self._reassembler.unassembled_bytes()

    def stream_out(self) -> ByteStream:
        """The reassembled inbound byte stream."""
        return self._reassembler.stream_out()

    def _next_absolute(self) -> int:
        stream = self.stream_out()
        return stream.bytes_written() + (2 if stream.input_ended() else 1)

    def _checkpoint(self) -> int:
        written = self.stream_out().bytes_written()
        return written - 1 if written else 0