"""Big-endian integer parsing and packing for packet headers."""

from __future__ import annotations

from enum import Enum

from spongetcp.buffer import Buffer


class ParseResult(Enum):
    """Outcome of parsing a datagram, segment, frame or message."""

    NO_ERROR = 0
    BAD_CHECKSUM = 1
    PACKET_TOO_SHORT = 2
    WRONG_IP_VERSION = 3
    HEADER_TOO_SHORT = 4
    TRUNCATED_PACKET = 5
    UNSUPPORTED = 6

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label


_LABELS = {
    ParseResult.NO_ERROR: "NoError",
    ParseResult.BAD_CHECKSUM: "BadChecksum",
    ParseResult.PACKET_TOO_SHORT: "PacketTooShort",
    ParseResult.WRONG_IP_VERSION: "WrongIPVersion",
    ParseResult.HEADER_TOO_SHORT: "HeaderTooShort",
    ParseResult.TRUNCATED_PACKET: "TruncatedPacket",
    ParseResult.UNSUPPORTED: "Unsupported",
}


class ParseError(Exception):
    """Raised when data cannot be parsed; ``result`` says why."""

    def __init__(self, result: ParseResult, message: str | None = None) -> None:
        super().__init__(message or result.label)
        self.result = result


class NetParser:
    """Reads network-byte-order integers from the front of a Buffer."""

    def __init__(self, buffer) -> None:
        self._buffer = Buffer(buffer)

    @property
    def buffer(self) -> Buffer:
        """The bytes not yet consumed."""
        return Buffer(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def _require(self, size: int) -> None:
        if size > len(self._buffer):
            raise ParseError(ParseResult.PACKET_TOO_SHORT)

    def _parse_int(self, width: int) -> int:
        self._require(width)
        value = int.from_bytes(bytes(self._buffer.at(i) for i in range(width)), "big")
        self._buffer.remove_prefix(width)
        return value

    def u32(self) -> int:
        """Consume a 32-bit big-endian integer."""
        return self._parse_int(4)

    def u16(self) -> int:
        """Consume a 16-bit big-endian integer."""
        return self._parse_int(2)

    def u8(self) -> int:
        """Consume one byte."""
        return self._parse_int(1)

    def remove_prefix(self, n: int) -> None:
        """Skip ``n`` bytes."""
        self._require(n)
        self._buffer.remove_prefix(n)


def pack_u32(value: int) -> bytes:
    """Encode the low 32 bits of ``value`` in network byte order."""
    return (value & 0xFFFFFFFF).to_bytes(4, "big")


def pack_u16(value: int) -> bytes:
    """Encode the low 16 bits of ``value`` in network byte order."""
    return (value & 0xFFFF).to_bytes(2, "big")


def pack_u8(value: int) -> bytes:
    """Encode the low 8 bits of ``value`` as one byte."""
    return (value & 0xFF).to_bytes(1, "big")