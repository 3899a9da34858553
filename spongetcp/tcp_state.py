"""Summaries of a TCP sender's and receiver's states as named in the TCP specification."""

from __future__ import annotations

from enum import Enum

from spongetcp.tcp_receiver import TCPReceiver
from spongetcp.tcp_sender import TCPSender


class ReceiverState(str, Enum):
    """States of a TCPReceiver."""

    ERROR = "error (connection was reset)"
    LISTEN = "waiting for SYN: ackno is empty"
    SYN_RECV = "SYN received (ackno exists), and input to stream hasn't ended"
    FIN_RECV = "input to stream has ended"


class SenderState(str, Enum):
    """States of a TCPSender."""

    ERROR = "error (connection was reset)"
    CLOSED = "waiting for stream to begin (no SYN sent)"
    SYN_SENT = "stream started but nothing acknowledged"
    SYN_ACKED = "stream ongoing"
    FIN_SENT = "stream finished (FIN sent) but not fully acknowledged"
    FIN_ACKED = "stream finished and fully acknowledged"


def receiver_state_summary(receiver: TCPReceiver) -> ReceiverState:
    """Summarize the state of a TCPReceiver."""
    stream = receiver.stream_out()
    if stream.error():
        return ReceiverState.ERROR
    if receiver.ackno() is None:
        return ReceiverState.LISTEN
    if stream.input_ended():
        return ReceiverState.FIN_RECV
    return ReceiverState.SYN_RECV


def sender_state_summary(sender: TCPSender) -> SenderState:
    """Summarize the state of a TCPSender."""
    stream = sender.stream_in()
    next_seqno = sender.next_seqno_absolute()
    if stream.error():
        return SenderState.ERROR
    if next_seqno == 0:
        return SenderState.CLOSED
    if next_seqno == sender.bytes_in_flight():
        return SenderState.SYN_SENT
    if not stream.eof():
        return SenderState.SYN_ACKED
    if next_seqno < stream.bytes_written() + 2:
        return SenderState.SYN_ACKED
    if sender.bytes_in_flight():
        return SenderState.FIN_SENT
    return SenderState.FIN_ACKED