# spongetcp

The parts of a TCP endpoint, written as plain Python objects that work
entirely in memory. Nothing here opens a socket; you feed segments in and
take segments out yourself.

## Modules

- `spongetcp.byte_stream`: `ByteStream`, a flow-controlled, in-order byte
  stream with a fixed capacity (capped at 4 MiB). `write` accepts as many
  bytes as fit and returns how many; `read`, `peek_output` and `pop_output`
  take bytes from the front; `end_input`, `eof`, `bytes_written` and
  `bytes_read` track the stream's progress.
- `spongetcp.stream_reassembler`: `StreamReassembler` takes substrings that
  may arrive out of order or overlap (`push_substring(data, index, eof)`)
  and writes the contiguous bytes to its `stream_out()` stream.
  `unassembled_bytes()` counts what is stored but not yet written.
- `spongetcp.wrapping_integers`: `WrappingInt32`, `wrap` and `unwrap`
  convert between 32-bit TCP sequence numbers and absolute sequence numbers.
- `spongetcp.tcp_receiver`: `TCPReceiver` turns incoming segments into a
  byte stream and gives the `ackno()` and `window_size()` to advertise.
  `ackno()` is `None` until a SYN has arrived.
- `spongetcp.tcp_sender`: `TCPSender` cuts its `stream_in()` stream into
  segments (`fill_window`), tracks what is in flight, processes
  acknowledgments (`ack_received`) and retransmits the oldest outstanding
  segment when its `RetransmissionTimer` expires (`tick`). Outgoing
  segments are queued in the deque returned by `segments_out()`.
- `spongetcp.tcp_header` and `spongetcp.tcp_segment`: `TCPHeader` and
  `TCPSegment` parse and serialize TCP segments. `TCPSegment.parse` checks
  the checksum and raises `ParseError` on failure; `serialize` fills in the
  checksum and returns a `BufferList`.
- `spongetcp.tcp_state`: `receiver_state_summary` and
  `sender_state_summary` return a `ReceiverState` or `SenderState`
  describing where a receiver or sender stands.
- `spongetcp.tcp_config`: `TCPConfig` (capacities, timeout, maximum payload
  size) and `FdAdapterConfig` (addresses and loss rates).
- `spongetcp.parser`: `NetParser`, which reads big-endian integers from a
  buffer, the `pack_u8`/`pack_u16`/`pack_u32` helpers, and `ParseResult`
  with the `ParseError` exception.
- `spongetcp.buffer`: `Buffer` and `BufferList`, byte buffers that can
  discard bytes from the front.
- `spongetcp.address`: `Address`, an IPv4 address and port;
  `Address.resolve` looks up host and service names through the system
  resolver.
- `spongetcp.util`: `InternetChecksum`, `timestamp_ms`,
  `get_random_generator` and `hexdump` (which prints to standard output).

## Installation

```
pip install .
```

## Example

```python
from spongetcp.stream_reassembler import StreamReassembler

reassembler = StreamReassembler(65000)
reassembler.push_substring(b"world", 6, True)
reassembler.push_substring(b"hello ", 0, False)

stream = reassembler.stream_out()
print(stream.read(stream.buffer_size()))  # b'hello world'
print(stream.eof())                       # True
```

Sending, with a fixed initial sequence number:

```python
from spongetcp.tcp_sender import TCPSender
from spongetcp.wrapping_integers import WrappingInt32

sender = TCPSender(64000, 1000, WrappingInt32(0))
sender.fill_window()                      # queues the SYN segment
syn = sender.segments_out().popleft()
sender.ack_received(WrappingInt32(1), 1000)
```

## What it does not do

There is no connection object joining a sender and a receiver, no socket
or event-loop layer, and no command-line program. The sender and receiver
do not exchange segments over a network by themselves; moving segments
between them is left to the caller.

## Running the tests

```
pip install .[test]
pytest
```