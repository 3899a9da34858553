"""Internet checksum, timing, randomness and hexdump helpers."""

from __future__ import annotations

import os
import random
import sys
import time

_PROGRAM_START_NS = time.monotonic_ns()

# Seed size matching the state of a Mersenne Twister (624 words of 32 bits).
_SEED_BYTES = 624 * 4


def _as_bytes(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if hasattr(data, "__bytes__"):
        return bytes(data)
    raise TypeError(f"expected bytes-like data, got {type(data).__name__}")


def timestamp_ms() -> int:
    """Return the number of milliseconds since the program started."""
    return (time.monotonic_ns() - _PROGRAM_START_NS) // 1_000_000


def get_random_generator() -> random.Random:
    """Return a random generator seeded from the operating system's entropy."""
    return random.Random(int.from_bytes(os.urandom(_SEED_BYTES), "big"))


class InternetChecksum:
    """The Internet checksum (ones' complement sum of 16-bit words).

    Evaluated over data that already carries a correct checksum, the value is 0.
    To compute a checksum, zero the checksum field, add the data and store the value.
    """

    def __init__(self, initial_sum: int = 0) -> None:
        self._sum = initial_sum & 0xFFFFFFFF
        self._parity = False

    def add(self, data) -> None:
        """Add bytes to the running sum; data may be split across calls."""
        raw = _as_bytes(data)
        if not raw:
            return
        if self._parity:
            high, low = raw[1::2], raw[0::2]
        else:
            high, low = raw[0::2], raw[1::2]
        self._sum = (self._sum + (sum(high) << 8) + sum(low)) & 0xFFFFFFFF
        if len(raw) % 2:
            self._parity = not self._parity

    def value(self) -> int:
        """Return the checksum in host byte order."""
        total = self._sum
        while total > 0xFFFF:
            total = (total >> 16) + (total & 0xFFFF)
        return ~total & 0xFFFF


def hexdump(data, indent: int = 0) -> None:
    """Print the bytes of ``data`` as hex rows of 16 with a printable-character column."""
    raw = _as_bytes(data)
    pad = " " * indent
    parts: list[str] = []
    chars: list[str] = []
    for offset, byte in enumerate(raw):
        if offset % 16 == 0:
            if offset:
                parts.append("    " + "".join(chars) + "\n")
                chars = []
            parts.append(f"{pad}{offset:08x}:    ")
        elif offset % 2 == 0:
            parts.append(" ")
        parts.append(f"{byte:02x}")
        chars.append(chr(byte) if 0x20 <= byte < 0x7F else ".")
    remainder = (16 - len(raw) % 16) % 16
    parts.append(" " * (2 * remainder + remainder // 2 + 4))
    parts.append("".join(chars) or " ")
    parts.append("\n\n")
    sys.stdout.write("".join(parts))
    sys.stdout.flush()