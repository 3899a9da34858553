"""A TCP segment: a header followed by a payload."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from spongetcp.buffer import Buffer, BufferList
from spongetcp.parser import NetParser, ParseError, ParseResult
from spongetcp.tcp_header import TCPHeader
from spongetcp.util import InternetChecksum


@dataclass
class TCPSegment:
    """A TCP header and its payload."""

    header: TCPHeader = field(default_factory=TCPHeader)
    payload: Buffer = field(default_factory=Buffer)

    def __post_init__(self) -> None:
        if not isinstance(self.payload, Buffer):
            self.payload = Buffer(self.payload)

    @classmethod
    def parse(cls, buffer, datagram_layer_checksum: int = 0) -> TCPSegment:
        """Parse a segment, verifying its checksum against the pseudo-header sum.

        Raises ParseError with BAD_CHECKSUM, PACKET_TOO_SHORT or HEADER_TOO_SHORT.
        """
        data = Buffer(buffer) if isinstance(buffer, Buffer) else Buffer(bytes(buffer) if isinstance(buffer, BufferList) else buffer)
        check = InternetChecksum(datagram_layer_checksum)
        check.add(bytes(data))
        if check.value():
            raise ParseError(ParseResult.BAD_CHECKSUM)
        parser = NetParser(data)
        header = TCPHeader.parse(parser)
        return cls(header=header, payload=parser.buffer)

    def serialize(self, datagram_layer_checksum: int = 0) -> BufferList:
        """Encode the segment, filling in a checksum computed over the whole segment."""
        header_out = replace(self.header, cksum=0)
        check = InternetChecksum(datagram_layer_checksum)
        check.add(header_out.serialize())
        check.add(bytes(self.payload))
        header_out.cksum = check.value()

        result = BufferList(header_out.serialize())
        result.append(self.payload)
        return result

    def length_in_sequence_space(self) -> int:
        """Payload length plus one for SYN and one for FIN."""
        return len(self.payload) + int(self.header.syn) + int(self.header.fin)