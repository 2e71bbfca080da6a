import socket

import pytest

from spongeutil.address import Address, AddressError


def test_ip_and_port():
    addr = Address("18.243.0.1", 53)
    assert addr.ip() == "18.243.0.1"
    assert addr.port() == 53
    assert addr.ip_port() == ("18.243.0.1", 53)


def test_default_port_is_zero():
    assert Address("10.0.0.1").port() == 0


def test_to_string():
    assert str(Address("8.8.8.8", 53)) == "8.8.8.8:53"


def test_invalid_ip_raises():
    with pytest.raises(AddressError):
        Address("not an address", 80)


def test_port_out_of_range():
    with pytest.raises(ValueError):
        Address("1.1.1.1", 70000)


def test_ipv4_numeric_pinned():
    assert Address("1.2.3.4").ipv4_numeric() == 0x01020304


def test_ipv4_numeric_round_trip():
    original = Address("192.168.7.9")
    rebuilt = Address.from_ipv4_numeric(original.ipv4_numeric())
    assert rebuilt == original
    assert rebuilt.ip() == "192.168.7.9"


def test_from_ipv4_numeric_has_port_zero():
    addr = Address.from_ipv4_numeric(0x7F000001)
    assert addr.port() == 0
    assert addr.ip() == "127.0.0.1"


def test_from_ipv4_numeric_out_of_range():
    with pytest.raises(ValueError):
        Address.from_ipv4_numeric(1 << 32)


def test_equality_and_hash():
    a = Address("1.1.1.1", 80)
    b = Address("1.1.1.1", 80)
    c = Address("1.1.1.1", 81)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_resolve_numeric_strings():
    addr = Address.resolve("127.0.0.1", "8080")
    assert addr == Address("127.0.0.1", 8080)


def test_sockaddr_usable_with_socket():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(Address("127.0.0.1", 0).sockaddr())
        bound_ip, bound_port = sock.getsockname()
    assert bound_ip == "127.0.0.1"
    assert 0 < bound_port <= 0xFFFF