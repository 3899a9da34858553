"""The sending half of a TCP endpoint."""

from __future__ import annotations

from collections import deque
from dataclasses import replace

from spongetcp.buffer import Buffer
from spongetcp.byte_stream import ByteStream
from spongetcp.tcp_config import TCPConfig
from spongetcp.tcp_header import TCPHeader
from spongetcp.tcp_segment import TCPSegment
from spongetcp.util import get_random_generator
from spongetcp.wrapping_integers import WrappingInt32, unwrap, wrap

_WINDOW_MASK = 0xFFFF


def _clone(segment: TCPSegment) -> TCPSegment:
    return TCPSegment(header=replace(segment.header), payload=Buffer(segment.payload))


class RetransmissionTimer:
    """A one-shot timer that expires at an absolute time in milliseconds."""

    def __init__(self) -> None:
        self._started = False
        self._deadline = 0

    @property
    def deadline(self) -> int:
        """The time at which the timer expires."""
        return self._deadline

    def start(self, deadline: int) -> None:
        """Start (or restart) the timer to expire at ``deadline``."""
        self._deadline = deadline & 0xFFFFFFFF
        self._started = True

    def stop(self) -> None:
        """Stop the timer."""
        self._started = False

    def is_time_out(self, now: int) -> bool:
        """Whether the timer is running and ``now`` has reached its deadline."""
        return self._started and now >= self._deadline

    def started(self) -> bool:
        """Whether the timer is running."""
        return self._started


class TCPSender:
    """Splits an outbound ByteStream into segments and retransmits unacknowledged ones."""

    def __init__(
        self,
        capacity: int = TCPConfig.DEFAULT_CAPACITY,
        retx_timeout: int = TCPConfig.TIMEOUT_DFLT,
        fixed_isn: WrappingInt32 | None = None,
    ) -> None:
        if fixed_isn is None:
            fixed_isn = WrappingInt32(get_random_generator().getrandbits(32))
        self._isn = fixed_isn
        self._initial_rto = retx_timeout
        self._stream = ByteStream(capacity)
        self._segments_out: deque[TCPSegment] = deque()
        self._outstanding: deque[TCPSegment] = deque()
        self._timer = RetransmissionTimer()
        self._next_seqno = 0
        self._ms_alive = 0
        self._retransmissions = 0
        self._checkpoint = 0
        self._window = 1
        self._rto = retx_timeout
        self._peer_busy = False
        self._bytes_in_flight = 0
        self._fin_sent = False

    def stream_in(self) -> ByteStream:
        """The outbound byte stream the application writes to."""
        return self._stream

    def fill_window(self) -> None:
        """Send as many segments as the receiver's window allows."""
        if not self._window:
            return
        if self._next_seqno == 0:
            size = min(TCPConfig.MAX_PAYLOAD_SIZE, self._window - 1)
            self._send(self._stream.read(size), syn=True, fin=False)
        elif self._stream.input_ended() and not self._fin_sent:
            if self._window >= self._stream.buffer_size() + 1:
                self._send(self._stream.read(self._window), syn=False, fin=True)
                self._fin_sent = True

        while not self._stream.buffer_empty() and self._window:
            size = min(TCPConfig.MAX_PAYLOAD_SIZE, self._window)
            self._send(self._stream.read(size), syn=False, fin=False)

        if not self._timer.started() and self._outstanding:
            self._timer.start(self._ms_alive + self._rto)

    def ack_received(self, ackno: WrappingInt32, window_size: int) -> None:
        """Process an acknowledgment number and advertised window from the peer."""
        left = unwrap(ackno, self._isn, self._checkpoint)
        if left > self._next_seqno:
            return
        right = left + window_size
        self._window = (right - self._next_seqno) & _WINDOW_MASK

        if window_size == 0:
            self._peer_busy = True
            self._window = 1
        else:
            self._peer_busy = False

        acknowledged_any = False
        while self._outstanding:
            segment = self._outstanding[0]
            start = unwrap(segment.header.seqno, self._isn, self._checkpoint)
            length = segment.length_in_sequence_space()
            if start + length > left:
                break
            acknowledged_any = True
            self._outstanding.popleft()
            self._bytes_in_flight -= length
            self._rto = self._initial_rto
            self._retransmissions = 0

        if not self._outstanding:
            self._timer.stop()
        elif acknowledged_any:
            self._timer.start(self._ms_alive + self._rto)

    def tick(self, ms_since_last_tick: int) -> None:
        """Advance time; retransmit the oldest outstanding segment on timeout."""
        if not self._outstanding:
            return
        self._ms_alive += ms_since_last_tick
        if self._timer.is_time_out(self._ms_alive):
            if not self._peer_busy:
                self._retransmissions += 1
                self._rto *= 2
            self._segments_out.append(_clone(self._outstanding[0]))
            self._timer.start(self._ms_alive + self._rto)

    def send_empty_segment(self) -> None:
        """Queue a segment with no payload and no flags (e.g. a bare ACK)."""
        self._segments_out.append(self._make_segment(b"", syn=False, fin=False))

    def bytes_in_flight(self) -> int:
        """Sequence numbers sent but not yet acknowledged (SYN and FIN count one each)."""
        return self._bytes_in_flight

    def consecutive_retransmissions(self) -> int:
        """Number of retransmissions in a row without a new acknowledgment."""
        return self._retransmissions

    def segments_out(self) -> deque[TCPSegment]:
        """Segments queued for transmission."""
        return self._segments_out

    def next_seqno_absolute(self) -> int:
        """Absolute sequence number of the next byte to be sent."""
        return self._next_seqno

    def next_seqno(self) -> WrappingInt32:
        """Relative sequence number of the next byte to be sent."""
        return wrap(self._next_seqno, self._isn)

    def _make_segment(self, payload: bytes, syn: bool, fin: bool) -> TCPSegment:
        header = TCPHeader(seqno=wrap(self._next_seqno, self._isn), syn=syn, fin=fin)
        return TCPSegment(header=header, payload=payload)

    def _send(self, payload: bytes, syn: bool, fin: bool) -> None:
        segment = self._make_segment(payload, syn, fin)
        length = segment.length_in_sequence_space()
        self._segments_out.append(segment)
        self._next_seqno += length
        self._window = (self._window - length) & _WINDOW_MASK
        self._outstanding.append(_clone(segment))
        self._bytes_in_flight += length
        self._checkpoint = self._next_seqno