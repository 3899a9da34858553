"""Configuration for the TCP sender, receiver and datagram adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from spongetcp.address import Address
from spongetcp.wrapping_integers import WrappingInt32


@dataclass
class TCPConfig:
    """Settings for a TCP sender and receiver."""

    DEFAULT_CAPACITY: ClassVar[int] = 64000
    MAX_PAYLOAD_SIZE: ClassVar[int] = 1452
    TIMEOUT_DFLT: ClassVar[int] = 1000
    MAX_RETX_ATTEMPTS: ClassVar[int] = 8

    rt_timeout: int = TIMEOUT_DFLT
    recv_capacity: int = DEFAULT_CAPACITY
    send_capacity: int = DEFAULT_CAPACITY
    fixed_isn: WrappingInt32 | None = None


@dataclass
class FdAdapterConfig:
    """Addresses and loss rates for a datagram adapter."""

    source: Address = field(default_factory=lambda: Address("0", 0))
    destination: Address = field(default_factory=lambda: Address("0", 0))
    loss_rate_dn: int = 0
    loss_rate_up: int = 0