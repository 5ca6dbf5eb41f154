"""IP address and netblock helpers: ranges, subsets, reserved blocks and dialing."""

from __future__ import annotations

import ipaddress
import socket
from itertools import islice
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

# Regular expression that matches an IPv4 address.
IPV4_RE = (
    r"((25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)[.]){3}"
    r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)

# Description used for reserved address ranges.
RESERVED_CIDR_DESCRIPTION = "Reserved Network Address Blocks"

# Networks that are reserved for special use.
RESERVED_CIDRS = (
    "192.168.0.0/16",
    "172.16.0.0/12",
    "10.0.0.0/8",
    "127.0.0.0/8",
    "224.0.0.0/4",
    "240.0.0.0/4",
    "100.64.0.0/10",
    "198.18.0.0/15",
    "169.254.0.0/16",
    "192.88.99.0/24",
    "192.0.0.0/24",
    "192.0.2.0/24",
    "192.94.77.0/24",
    "192.94.78.0/24",
    "192.52.193.0/24",
    "192.12.109.0/24",
    "192.31.196.0/24",
    "192.0.0.0/29",
)

_RESERVED_NETWORKS = tuple(ipaddress.ip_network(cidr) for cidr in RESERVED_CIDRS)


def _unmap(addr: IPAddress) -> IPAddress:
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def _as_address(value: Union[str, IPAddress]) -> IPAddress:
    """Return value as an address object; IPv4-mapped IPv6 becomes IPv4."""
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return _unmap(value)
    return _unmap(ipaddress.ip_address(str(value).strip()))


def _maybe_address(value) -> Optional[IPAddress]:
    if value is None:
        return None
    try:
        return _as_address(value)
    except ValueError:
        return None


def _as_network(value: Union[str, IPNetwork]) -> IPNetwork:
    if isinstance(value, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
        return value
    return ipaddress.ip_network(str(value), strict=False)


def is_ipv4(ip) -> bool:
    """Return True unless ip is an IPv6 address."""
    addr = _maybe_address(ip)
    return addr is None or addr.version == 4


def is_ipv6(ip) -> bool:
    """Return True when ip is an IPv6 address."""
    addr = _maybe_address(ip)
    return addr is not None and addr.version == 6


def is_reserved_address(addr) -> Optional[str]:
    """Return the reserved CIDR that holds addr, or None if it is not reserved."""
    ip = _maybe_address(addr)
    if ip is None:
        return None
    for block in _RESERVED_NETWORKS:
        if block.version == ip.version and ip in block:
            return str(block)
    return None


def first_last(cidr) -> tuple[IPAddress, IPAddress]:
    """Return the first and last address of the netblock."""
    net = _as_network(cidr)
    return net.network_address, net.broadcast_address


def range_to_cidr(first, last) -> Optional[IPNetwork]:
    """Return the netblock starting at first that covers the range up to last.

    Returns None when first is greater than last.
    """
    start = _as_address(first)
    end = _as_address(last)
    if start.version != end.version:
        raise ValueError("the range boundaries belong to different address families")

    start_int, end_int = int(start), int(end)
    if start_int > end_int:
        return None

    width = start.max_prefixlen
    bits, mask = 1, 1
    while bits < width:
        aligned = (start_int >> bits) << bits
        if (start_int | mask) > end_int or aligned != start_int:
            bits -= 1
            break
        bits += 1
        mask = (mask << 1) | 1

    return ipaddress.ip_network(f"{start}/{width - bits}", strict=False)


def all_hosts(cidr) -> list[IPAddress]:
    """Return every address in the netblock, minus the network and broadcast
    addresses when there are more than two."""
    net = _as_network(cidr)
    count = net.num_addresses
    if count > 2:
        return list(islice(net, 1, count - 1))
    return list(net)


def range_hosts(start, end) -> list[IPAddress]:
    """Return all addresses between start and end, inclusive."""
    if start is None or end is None:
        return []
    first = _as_address(start)
    last = _as_address(end)
    if first.version != last.version:
        raise ValueError("the range boundaries belong to different address families")
    if last < first:
        return []
    if last == first:
        return [first]
    kind = type(first)
    return [kind(value) for value in range(int(first), int(last) + 1)]


def cidr_subset(cidr, addr, num: int) -> list[IPAddress]:
    """Return up to num addresses from the netblock centred on addr."""
    net = _as_network(cidr)
    center = _as_address(addr)
    if center.version != net.version or center not in net:
        return [center]

    offset = max(int(num / 2), 0)
    kind = type(center)
    first = kind(max(int(center) - offset, int(net.network_address)))
    last = kind(min(int(center) + offset, int(net.broadcast_address)))
    if first == last:
        return [first]
    return range_hosts(first, last)


def ip_inc(ip) -> IPAddress:
    """Return the address that follows ip, wrapping around at the top."""
    addr = _as_address(ip)
    size = 1 << addr.max_prefixlen
    return type(addr)((int(addr) + 1) % size)


def ip_dec(ip) -> IPAddress:
    """Return the address that precedes ip, wrapping around at zero."""
    addr = _as_address(ip)
    size = 1 << addr.max_prefixlen
    return type(addr)((int(addr) - 1) % size)


def _split_host_port(address: str) -> tuple[str, int]:
    if address.startswith("["):
        end = address.find("]")
        if end < 0 or address[end + 1:end + 2] != ":":
            raise ValueError(f"missing port in address: {address}")
        host, port_text = address[1:end], address[end + 2:]
    else:
        host, sep, port_text = address.rpartition(":")
        if not sep:
            raise ValueError(f"missing port in address: {address}")
        if ":" in host:
            raise ValueError(f"too many colons in address: {address}")
    if not port_text.isdigit():
        raise ValueError(f"invalid port: {port_text!r}")
    return host, int(port_text)


def dial(network: str, address: str, timeout: Optional[float] = None,
         local_address: Optional[str] = None) -> socket.socket:
    """Open a connected socket to address ("host:port").

    network is "tcp", "tcp4", "tcp6", "udp", "udp4" or "udp6". When
    local_address (an address or CIDR) is given, the socket is bound to it
    using the same port number as the destination.
    """
    host, port = _split_host_port(address)

    if network.startswith("tcp"):
        sock_type = socket.SOCK_STREAM
    elif network.startswith("udp"):
        sock_type = socket.SOCK_DGRAM
    else:
        raise ValueError(f"unsupported network: {network}")

    family = {"4": socket.AF_INET, "6": socket.AF_INET6}.get(network[-1], socket.AF_UNSPEC)
    local = ipaddress.ip_interface(local_address).ip if local_address else None

    last_error: Optional[OSError] = None
    for fam, stype, proto, _, sockaddr in socket.getaddrinfo(host, port, family, sock_type):
        if local is not None:
            wanted = socket.AF_INET if local.version == 4 else socket.AF_INET6
            if fam != wanted:
                continue
        sock = socket.socket(fam, stype, proto)
        try:
            if timeout is not None:
                sock.settimeout(timeout)
            if local is not None:
                sock.bind((str(local), port))
            sock.connect(sockaddr)
            return sock
        except OSError as exc:
            sock.close()
            last_error = exc

    if last_error is not None:
        raise last_error
    raise OSError(f"no usable address found for {address}")