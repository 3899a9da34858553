"""The TCP segment header (options are skipped, not supported)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from spongetcp.parser import NetParser, ParseError, ParseResult, pack_u16, pack_u32, pack_u8
from spongetcp.wrapping_integers import WrappingInt32

_FLAG_BITS = (
    ("urg", 0b0010_0000),
    ("ack", 0b0001_0000),
    ("psh", 0b0000_1000),
    ("rst", 0b0000_0100),
    ("syn", 0b0000_0010),
    ("fin", 0b0000_0001),
)

_COMPARED = ("seqno", "ackno", "doff", "urg", "ack", "psh", "rst", "syn", "fin", "win", "uptr")

_BOOL_TEXT = {True: "true", False: "false"}


@dataclass(eq=False)
class TCPHeader:
    """A TCP header. Equality ignores the ports and the checksum."""

    LENGTH: ClassVar[int] = 20

    sport: int = 0
    dport: int = 0
    seqno: WrappingInt32 = field(default_factory=lambda: WrappingInt32(0))
    ackno: WrappingInt32 = field(default_factory=lambda: WrappingInt32(0))
    doff: int = 5
    urg: bool = False
    ack: bool = False
    psh: bool = False
    rst: bool = False
    syn: bool = False
    fin: bool = False
    win: int = 0
    cksum: int = 0
    uptr: int = 0

    @classmethod
    def parse(cls, parser) -> TCPHeader:
        """Read a header from ``parser``, skipping any options.

        Raises ParseError with PACKET_TOO_SHORT or HEADER_TOO_SHORT.
        """
        if not isinstance(parser, NetParser):
            parser = NetParser(parser)
        sport = parser.u16()
        dport = parser.u16()
        seqno = WrappingInt32(parser.u32())
        ackno = WrappingInt32(parser.u32())
        doff = parser.u8() >> 4
        flag_byte = parser.u8()
        win = parser.u16()
        cksum = parser.u16()
        uptr = parser.u16()

        if doff < 5:
            raise ParseError(ParseResult.HEADER_TOO_SHORT)
        parser.remove_prefix(doff * 4 - cls.LENGTH)

        flags = {name: bool(flag_byte & bit) for name, bit in _FLAG_BITS}
        return cls(
            sport=sport,
            dport=dport,
            seqno=seqno,
            ackno=ackno,
            doff=doff,
            win=win,
            cksum=cksum,
            uptr=uptr,
            **flags,
        )

    def serialize(self) -> bytes:
        """Encode the header, padded to ``4 * doff`` bytes; the checksum is not recomputed."""
        if self.doff < 5:
            raise ValueError("TCP header too short")
        flag_byte = 0
        for name, bit in _FLAG_BITS:
            if getattr(self, name):
                flag_byte |= bit
        raw = b"".join(
            (
                pack_u16(self.sport),
                pack_u16(self.dport),
                pack_u32(self.seqno.raw_value),
                pack_u32(self.ackno.raw_value),
                pack_u8(self.doff << 4),
                pack_u8(flag_byte),
                pack_u16(self.win),
                pack_u16(self.cksum),
                pack_u16(self.uptr),
            )
        )
        return raw.ljust(4 * self.doff, b"\0")

    def to_string(self) -> str:
        """The header's fields in human-readable form (numbers in hex)."""
        flags = " ".join(f"{name}: {_BOOL_TEXT[bool(getattr(self, name))]}" for name, _ in _FLAG_BITS)
        return (
            f"TCP source port: {self.sport:x}\n"
            f"TCP dest port: {self.dport:x}\n"
            f"TCP seqno: {self.seqno.raw_value:x}\n"
            f"TCP ackno: {self.ackno.raw_value:x}\n"
            f"TCP doff: {self.doff:x}\n"
            f"Flags: {flags}\n"
            f"TCP winsize: {self.win:x}\n"
            f"TCP cksum: {self.cksum:x}\n"
            f"TCP uptr: {self.uptr:x}\n"
        )

    def summary(self) -> str:
        """A one-line summary of flags, sequence numbers and window."""
        flags = "".join(
            letter for letter, on in (("S", self.syn), ("A", self.ack), ("R", self.rst), ("F", self.fin)) if on
        )
        return f"Header(flags={flags},seqno={self.seqno},ack={self.ackno},win={self.win})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TCPHeader):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in _COMPARED)

    __hash__ = None