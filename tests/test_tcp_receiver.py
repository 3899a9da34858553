import pytest

from spongetcp.tcp_header import TCPHeader
from spongetcp.tcp_receiver import TCPReceiver
from spongetcp.tcp_segment import TCPSegment
from spongetcp.tcp_state import ReceiverState, receiver_state_summary
from spongetcp.wrapping_integers import WrappingInt32

ISNS = [0, 1, 0x7FFFFFFF, 0xFFFFFFFE, 0xFFFFFFFF, 123456789]

LISTEN = ReceiverState.LISTEN
SYN_RECV = ReceiverState.SYN_RECV
FIN_RECV = ReceiverState.FIN_RECV


def segment(seqno, *, syn=False, fin=False, data=b"", ack=None):
    header = TCPHeader(seqno=WrappingInt32(seqno), syn=syn, fin=fin)
    if ack is not None:
        header.ack = True
        header.ackno = WrappingInt32(ack)
    return TCPSegment(header=header, payload=data)


def seg(offset, **kwargs):
    return ("seg", (offset, kwargs))


def state(value):
    return ("state", value)


def ackno(offset):
    return ("ackno", offset)


def unassembled(n):
    return ("unassembled", n)


def readable(data):
    return ("read", data)


def written(n):
    return ("written", n)


def ended(flag):
    return ("ended", flag)


def window(n):
    return ("window", n)


EOF = ("eof", True)


def run(steps, capacity=4000, isn=0):
    receiver = TCPReceiver(capacity)
    stream = receiver.stream_out()
    for kind, value in steps:
        if kind == "seg":
            offset, kwargs = value
            receiver.segment_received(segment(isn + offset, **kwargs))
        elif kind == "state":
            assert receiver_state_summary(receiver) == value
        elif kind == "ackno":
            expected = None if value is None else WrappingInt32(isn + value)
            assert receiver.ackno() == expected
        elif kind == "unassembled":
            assert receiver.unassembled_bytes() == value
        elif kind == "read":
            assert stream.read(stream.buffer_size()) == value
        elif kind == "written":
            assert stream.bytes_written() == value
        elif kind == "ended":
            assert stream.input_ended() is value
        elif kind == "eof":
            assert stream.eof() is value
        else:
            assert receiver.window_size() == value


NULL_TEXT = b"Here's a null byte:" + b"\0" + b"and it's gone."

ISN_CASES = {
    "close_with_bare_fin": [
        state(LISTEN), seg(0, syn=True), state(SYN_RECV), seg(1, fin=True), ackno(2), unassembled(0),
        readable(b""), written(0), state(FIN_RECV),
    ],
    "close_with_data_and_fin": [
        state(LISTEN), seg(0, syn=True), state(SYN_RECV), seg(1, fin=True, data=b"a"), state(FIN_RECV),
        ackno(3), unassembled(0), readable(b"a"), written(1), state(FIN_RECV),
    ],
    "segment_before_syn": [
        state(LISTEN), seg(1, data=b"hello"), state(LISTEN), unassembled(0), readable(b""), written(0),
        seg(0, syn=True), state(SYN_RECV), ackno(1),
    ],
    "syn_with_data": [
        state(LISTEN), seg(0, syn=True, data=b"Hello, CS144!"), state(SYN_RECV), ackno(14), unassembled(0),
        readable(b"Hello, CS144!"),
    ],
    "empty_segments": [
        state(LISTEN), seg(0, syn=True), state(SYN_RECV), ackno(1), unassembled(0),
        seg(1, syn=True), unassembled(0), written(0), ended(False),
        seg(5, syn=True), unassembled(0), written(0), ended(False),
    ],
    "segment_with_null_byte": [
        state(LISTEN), seg(0, syn=True), state(SYN_RECV), unassembled(0), written(0),
        seg(1, data=NULL_TEXT), readable(NULL_TEXT), ackno(35), ended(False),
    ],
    "data_with_fin": [
        state(LISTEN), seg(0, syn=True), state(SYN_RECV), seg(1, fin=True, data=b"Goodbye, CS144!"),
        state(FIN_RECV), readable(b"Goodbye, CS144!"), ackno(17), EOF,
    ],
    "fin_that_cannot_be_assembled_yet": [
        state(LISTEN), seg(0, syn=True), state(SYN_RECV), seg(2, fin=True, data=b"oodbye, CS144!"),
        state(SYN_RECV), readable(b""), ackno(1), ended(False),
        seg(1, data=b"G"), state(FIN_RECV), readable(b"Goodbye, CS144!"), ackno(17), EOF,
    ],
    "syn_data_fin": [
        state(LISTEN), seg(0, syn=True, fin=True, data=b"Hello and goodbye, CS144!"), state(FIN_RECV),
        ackno(27), unassembled(0), readable(b"Hello and goodbye, CS144!"), EOF,
    ],
}


@pytest.mark.parametrize("isn", ISNS)
@pytest.mark.parametrize("steps", list(ISN_CASES.values()), ids=list(ISN_CASES))
def test_with_isn(steps, isn):
    run(steps, isn=isn)


EMPTY = [unassembled(0), written(0)]

FIXED_CASES = {
    "syn_at_zero": (4000, [window(4000), ackno(None), *EMPTY, seg(0, syn=True), ackno(1), *EMPTY]),
    "syn_at_arbitrary_seqno": (5435, [ackno(None), *EMPTY, seg(89347598, syn=True), ackno(89347599), *EMPTY]),
    "segment_without_syn_is_ignored": (5435, [ackno(None), *EMPTY, seg(893475), ackno(None), *EMPTY]),
    "ack_fin_without_syn_is_ignored": (5435, [seg(893475, fin=True, ack=0), ackno(None), *EMPTY]),
    "syn_after_ignored_segment": (
        5435,
        [seg(893475, fin=True, ack=0), ackno(None), *EMPTY, seg(89347598, syn=True), ackno(89347599), *EMPTY],
    ),
    "syn_with_fin": (4000, [seg(5, syn=True, fin=True), state(FIN_RECV), ackno(7), *EMPTY]),
    "window_larger_than_16_bits": (0xFFFF + 5, [window(0xFFFF + 5)]),
    "window_shrinks_with_unread_bytes": (
        4000,
        [seg(0, syn=True, data=b"abcd"), window(4000 - 4), readable(b"abcd"), window(4000)],
    ),
}


@pytest.mark.parametrize("capacity, steps", list(FIXED_CASES.values()), ids=list(FIXED_CASES))
def test_fixed_seqnos(capacity, steps):
    run(steps, capacity=capacity)