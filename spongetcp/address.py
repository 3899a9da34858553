"""IPv4 socket addresses and name resolution."""

from __future__ import annotations

import socket


class Address:
    """An IPv4 address and port.

    Constructed from a numeric address (dotted quad or any form the system's
    address parser accepts) and a port; :meth:`resolve` looks up host and
    service names instead.
    """

    __slots__ = ("_packed", "_port")

    def __init__(self, ip: str, port: int = 0) -> None:
        try:
            packed = socket.inet_aton(ip)
        except (OSError, TypeError) as exc:
            raise ValueError(f"invalid IPv4 address: {ip!r}") from exc
        self._packed = packed
        self._port = _check_port(port)

    @classmethod
    def resolve(cls, hostname: str, service: str) -> Address:
        """Resolve a host name and service name (or numeric strings) to an address.

        Raises :class:`socket.gaierror` when the lookup fails.
        """
        results = socket.getaddrinfo(
            hostname, service, socket.AF_INET, 0, 0, socket.AI_ALL
        )
        if not results:
            raise OSError("getaddrinfo returned successfully but with no results")
        ip, port = results[0][4][:2]
        return cls(ip, port)

    @classmethod
    def from_ipv4_numeric(cls, ip_address: int) -> Address:
        """Build an address (port 0) from a 32-bit numeric IPv4 address."""
        if not 0 <= ip_address <= 0xFFFFFFFF:
            raise ValueError(f"not a 32-bit IPv4 address: {ip_address}")
        return cls(socket.inet_ntoa(ip_address.to_bytes(4, "big")), 0)

    def ipv4_numeric(self) -> int:
        """The IPv4 address as an integer in host byte order."""
        return int.from_bytes(self._packed, "big")

    def ip_port(self) -> tuple[str, int]:
        """Dotted-quad IP address and numeric port."""
        return socket.inet_ntoa(self._packed), self._port

    @property
    def ip(self) -> str:
        """Dotted-quad IP address."""
        return socket.inet_ntoa(self._packed)

    @property
    def port(self) -> int:
        """Numeric port."""
        return self._port

    def __str__(self) -> str:
        ip, port = self.ip_port()
        return f"{ip}:{port}"

    def __repr__(self) -> str:
        return f"Address({self.ip!r}, {self._port})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._packed == other._packed and self._port == other._port

    def __hash__(self) -> int:
        return hash((self._packed, self._port))


def _check_port(port) -> int:
    port = int(port)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    return port