"""IPv4 socket addresses and name resolution."""

from __future__ import annotations

import ipaddress
import socket


class AddressError(OSError):
    """Raised when an address cannot be resolved or converted."""


_AI_ALL = getattr(socket, "AI_ALL", 0)


def _lookup(node: str, service: str, flags: int) -> tuple[str, int]:
    try:
        results = socket.getaddrinfo(node, service, socket.AF_INET, 0, 0, flags)
    except socket.gaierror as exc:
        raise AddressError(f"getaddrinfo({node}, {service}): {exc.strerror}") from exc
    except UnicodeError as exc:
        raise AddressError(f"getaddrinfo({node}, {service}): {exc}") from exc
    if not results:
        raise AddressError("getaddrinfo returned successfully but with no results")
    sockaddr = results[0][4]
    return sockaddr[0], sockaddr[1]


class Address:
    """An IPv4 address and port."""

    __slots__ = ("_ip", "_port")

    def __init__(self, ip: str, port: int = 0) -> None:
        """Build from a dotted-quad string and a numeric port; no name lookup is done."""
        if not 0 <= port <= 0xFFFF:
            raise ValueError(f"port out of range: {port}")
        self._ip, self._port = _lookup(
            ip, str(port), socket.AI_NUMERICHOST | socket.AI_NUMERICSERV
        )

    @classmethod
    def _from_sockaddr(cls, ip: str, port: int) -> Address:
        inst = cls.__new__(cls)
        inst._ip = ip
        inst._port = port
        return inst

    @classmethod
    def resolve(cls, hostname: str, service: str) -> Address:
        """Resolve a host name and a service name (e.g. "http") or port string."""
        ip, port = _lookup(hostname, service, _AI_ALL)
        return cls._from_sockaddr(ip, port)

    @classmethod
    def from_ipv4_numeric(cls, ip_address: int) -> Address:
        """Build from a 32-bit numeric IP address (host byte order), with port 0."""
        if not 0 <= ip_address <= 0xFFFFFFFF:
            raise ValueError(f"not a 32-bit address: {ip_address}")
        return cls._from_sockaddr(str(ipaddress.IPv4Address(ip_address)), 0)

    def ip_port(self) -> tuple[str, int]:
        """Dotted-quad IP string and numeric port."""
        return self._ip, self._port

    def ip(self) -> str:
        """Dotted-quad IP string."""
        return self._ip

    def port(self) -> int:
        """Numeric port."""
        return self._port

    def ipv4_numeric(self) -> int:
        """The IP address as a 32-bit integer in host byte order."""
        try:
            return int(ipaddress.IPv4Address(self._ip))
        except ipaddress.AddressValueError as exc:
            raise AddressError("ipv4_numeric called on non-IPV4 address") from exc

    def sockaddr(self) -> tuple[str, int]:
        """The address in the form the socket module expects for AF_INET."""
        return self._ip, self._port

    def __str__(self) -> str:
        return f"{self._ip}:{self._port}"

    def __repr__(self) -> str:
        return f"Address({self._ip!r}, {self._port})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return (self._ip, self._port) == (other._ip, other._port)

    def __hash__(self) -> int:
        return hash((self._ip, self._port))