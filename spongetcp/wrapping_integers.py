"""32-bit sequence numbers that wrap around, relative to an initial sequence number."""

from __future__ import annotations

from dataclasses import dataclass

_MOD = 1 << 32
_MASK = _MOD - 1


@dataclass(frozen=True)
class WrappingInt32:
    """A 32-bit integer, expressed relative to an arbitrary initial sequence number.

    Used for TCP sequence and acknowledgment numbers. Values outside the 32-bit
    range are reduced modulo 2**32.
    """

    raw_value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_value", int(self.raw_value) & _MASK)

    def __add__(self, steps: int) -> WrappingInt32:
        if isinstance(steps, WrappingInt32):
            return NotImplemented
        return WrappingInt32(self.raw_value + int(steps))

    def __sub__(self, other):
        """Offset from ``other`` as a signed 32-bit int, or step back by an int."""
        if isinstance(other, WrappingInt32):
            delta = (self.raw_value - other.raw_value) & _MASK
            return delta - _MOD if delta >= (1 << 31) else delta
        return WrappingInt32(self.raw_value - int(other))

    def __int__(self) -> int:
        return self.raw_value

    def __str__(self) -> str:
        return str(self.raw_value)


def wrap(n: int, isn: WrappingInt32) -> WrappingInt32:
    """Turn an absolute 64-bit sequence number into a relative 32-bit one."""
    return isn + (n % _MOD)


def unwrap(n: WrappingInt32, isn: WrappingInt32, checkpoint: int) -> int:
    """Return the absolute sequence number that wraps to ``n`` and is closest to ``checkpoint``."""
    diff = (n.raw_value - isn.raw_value) & _MASK
    times = checkpoint >> 32
    if times == 0:
        low, high = diff, diff + _MOD
        return low if abs(checkpoint - low) < abs(checkpoint - high) else high
    candidates = (diff + k * _MOD for k in (times - 1, times, times + 1))
    return min(candidates, key=lambda value: abs(checkpoint - value))