import random

import pytest

from spongetcp.stream_reassembler import StreamReassembler


def read_all(reassembler):
    stream = reassembler.stream_out()
    return stream.read(stream.buffer_size())


def assembled(reassembler):
    return reassembler.stream_out().bytes_written()


def at_eof(reassembler):
    return reassembler.stream_out().eof()


def push(data, index, eof=False):
    return ("push", data, index, eof)


def written(n):
    return ("assembled", n)


def avail(data):
    return ("read", data)


def eof_is(flag):
    return ("eof", flag)


def pending(n):
    return ("unassembled", n)


def run(capacity, steps):
    r = StreamReassembler(capacity)
    for step in steps:
        kind, *args = step
        if kind == "push":
            r.push_substring(*args)
        elif kind == "assembled":
            assert assembled(r) == args[0], step
        elif kind == "read":
            assert read_all(r) == args[0], step
        elif kind == "eof":
            assert at_eof(r) is args[0], step
        else:
            assert r.unassembled_bytes() == args[0], step
            assert r.empty() is (args[0] == 0), step
    return r


def _hole_prefix(*segments):
    return [s for data, index in segments for s in (push(data, index), written(0), avail(b""), eof_is(False))]


def _cap_long_run():
    steps = []
    for i in range(0, 99997, 3):
        segment = bytes(v % 256 for v in (i, i + 1, i + 2, i + 13, i + 47, i + 9))
        steps += [push(segment, i), written(i + 3), avail(segment[:3])]
    return steps


def _seq_hundred(read_each):
    steps = []
    for i in range(100):
        steps += [written(4 * i), push(b"abcd", 4 * i), eof_is(False)]
        if read_each:
            steps.append(avail(b"abcd"))
    if not read_each:
        steps += [avail(b"abcd" * 100), eof_is(False)]
    return steps


CASES = {
    "cap_sequential_reads": (
        2,
        [push(b"ab", 0), written(2), avail(b"ab"), push(b"cd", 2), written(4), avail(b"cd"),
         push(b"ef", 4), written(6), avail(b"ef")],
    ),
    "cap_full_then_resubmit": (
        2,
        [push(b"ab", 0), written(2), push(b"cd", 2), written(2), avail(b"ab"), written(2),
         push(b"cd", 2), written(4), avail(b"cd")],
    ),
    "cap_extra_byte_dropped": (2, [push(b"bX", 1), written(0), push(b"a", 0), written(2), avail(b"ab")]),
    "cap_one": (
        1,
        [push(b"ab", 0), written(1), push(b"ab", 0), written(1), avail(b"a"), written(1),
         push(b"abc", 0), written(2), avail(b"b"), written(2)],
    ),
    "cap_eof_after_fill": (
        8,
        [push(b"a", 0), written(1), avail(b"a"), eof_is(False), push(b"bc", 1), written(3), eof_is(False),
         push(b"ghi", 6, True), written(3), eof_is(False), push(b"cdefg", 2), written(9),
         avail(b"bcdefghi"), eof_is(True)],
    ),
    "cap_long_run": (3, _cap_long_run()),
    "holes_single_out_of_order": (65000, _hole_prefix((b"b", 1)) + [pending(1)]),
    "holes_fill": (65000, [push(b"b", 1), push(b"a", 0), written(2), avail(b"ab"), eof_is(False), pending(0)]),
    "holes_eof_first": (
        65000,
        [push(b"b", 1, True), written(0), avail(b""), eof_is(False), push(b"a", 0), written(2),
         avail(b"ab"), eof_is(True)],
    ),
    "holes_overlap": (65000, [push(b"b", 1), push(b"ab", 0), written(2), avail(b"ab"), eof_is(False)]),
    "holes_many": (
        65000,
        _hole_prefix((b"b", 1), (b"d", 3), (b"c", 2)) + [push(b"a", 0), written(4), avail(b"abcd"), eof_is(False)],
    ),
    "holes_overlapping_fill": (
        65000,
        _hole_prefix((b"b", 1), (b"d", 3)) + [push(b"abc", 0), written(4), avail(b"abcd"), eof_is(False)],
    ),
    "holes_piecewise_then_empty_eof": (
        65000,
        _hole_prefix((b"b", 1), (b"d", 3))
        + [push(b"a", 0), written(2), avail(b"ab"), eof_is(False), push(b"c", 2), written(4), avail(b"cd"),
           eof_is(False), push(b"", 4, True), written(4), avail(b""), eof_is(True)],
    ),
    "seq_two_segments": (
        65000,
        [push(b"abcd", 0), written(4), avail(b"abcd"), eof_is(False), push(b"efgh", 4), written(8),
         avail(b"efgh"), eof_is(False)],
    ),
    "seq_read_at_end": (
        65000,
        [push(b"abcd", 0), written(4), eof_is(False), push(b"efgh", 4), written(8), avail(b"abcdefgh"),
         eof_is(False)],
    ),
    "seq_hundred_then_read": (65000, _seq_hundred(read_each=False)),
    "seq_hundred_read_each": (65000, _seq_hundred(read_each=True)),
    "single_nothing": (65000, [written(0), avail(b""), eof_is(False)]),
    "single_overlapping_eof": (
        8,
        [push(b"abc", 0), written(3), push(b"bcdefgh", 1, True), written(8), avail(b"abcdefgh"), eof_is(True)],
    ),
    "single_eof_beyond_capacity": (
        8,
        [push(b"abc", 0), written(3), eof_is(False), push(b"ghX", 6, True), written(3), eof_is(False),
         push(b"cdefg", 2), written(8), avail(b"abcdefgh"), eof_is(False)],
    ),
    "single_ignores_empty_segment": (
        8,
        [push(b"abc", 0), written(3), eof_is(False), push(b"", 6), written(3), eof_is(False),
         push(b"de", 3, True), written(5), avail(b"abcde"), eof_is(True)],
    ),
}


@pytest.mark.parametrize("capacity, steps", list(CASES.values()), ids=list(CASES))
def test_scripted(capacity, steps):
    run(capacity, steps)


@pytest.mark.parametrize(
    "capacity, data, eof",
    [
        (65000, b"a", False),
        (65000, b"a", True),
        (65000, b"", True),
        (65000, b"b", True),
        (65000, b"", False),
        (8, b"abcdefgh", False),
        (8, b"abcdefgh", True),
    ],
)
def test_single_segment(capacity, data, eof):
    run(capacity, [push(data, 0, eof), written(len(data)), avail(data), eof_is(eof)])


NREPS = 32
NSEGS = 128
MAX_SEG_LEN = 2048


@pytest.mark.parametrize("seed", range(NREPS))
def test_many_shuffled_segments(seed):
    rd = random.Random(seed)
    r = StreamReassembler(MAX_SEG_LEN * NSEGS)
    seq_size = []
    offset = 0
    for _ in range(NSEGS):
        size = 1 + rd.randrange(MAX_SEG_LEN - 1)
        seq_size.append((offset, size))
        offset += size
    rd.shuffle(seq_size)
    data = rd.randbytes(offset)
    for off, size in seq_size:
        r.push_substring(data[off : off + size], off, off + size == offset)
    assert read_all(r) == data
    assert assembled(r) == offset
    assert r.empty()


SIZE = 1024


def _prefilled(seed):
    data = random.Random(seed).randbytes(SIZE)
    r = run(65000, [push(data, 0), push(data[10:], SIZE + 10), avail(data), written(SIZE)])
    return r, data


@pytest.mark.parametrize("seed", range(NREPS))
def test_many_eof_into_hole(seed):
    r, data = _prefilled(1000 + seed)
    r.push_substring(data[:7], SIZE)
    r.push_substring(data[7:8], SIZE + 7, True)
    assert read_all(r) == data[:8]
    assert assembled(r) == SIZE + 8
    assert at_eof(r)


@pytest.mark.parametrize("seed", range(NREPS))
def test_many_eof_over_queued_data(seed):
    r, data = _prefilled(2000 + seed)
    r.push_substring(data[:15], SIZE, True)
    result = read_all(r)
    assert assembled(r) in (2 * SIZE, SIZE + 15)
    assert result == data[: len(result)]


def test_negative_index_rejected():
    with pytest.raises(ValueError):
        StreamReassembler(10).push_substring(b"a", -1)