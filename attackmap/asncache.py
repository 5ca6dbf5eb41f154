"""In-memory cache of autonomous system and netblock information."""

from __future__ import annotations

import ipaddress
import threading
from typing import Optional, Union

from attackmap.messages import RIR, ASNRequest
from attackmap.network import RESERVED_CIDR_DESCRIPTION, is_reserved_address

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def _parse_ip(value: str) -> Optional[IPAddress]:
    try:
        addr = ipaddress.ip_address(value)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def _parse_cidr(value: str) -> Optional[IPNetwork]:
    address, sep, prefix = value.partition("/")
    if not sep or not prefix.isdigit() or _parse_ip(address) is None:
        return None
    try:
        return ipaddress.ip_network(value, strict=False)
    except ValueError:
        return None


class ASNCache:
    """Stores ASN records and answers lookups by ASN, description or address."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[int, ASNRequest] = {}
        self._ranges: dict[IPNetwork, ASNRequest] = {}

    def update(self, req: ASNRequest) -> None:
        """Save the information in req, merging it into any existing entry."""
        with self._lock:
            entry = self._cache.get(req.asn)
            if entry is None:
                self._cache[req.asn] = req
                if not req.netblocks:
                    req.netblocks = [req.prefix]
                return

            if not entry.cc and req.cc:
                entry.cc = req.cc
            if not entry.registry and req.registry:
                entry.registry = req.registry
            if entry.allocation_date is None and req.allocation_date is not None:
                entry.allocation_date = req.allocation_date
            if len(entry.description) < len(req.description):
                entry.description = req.description

            for cidr in [req.prefix, *req.netblocks]:
                if cidr not in entry.netblocks:
                    entry.netblocks.append(cidr)

    def description_search(self, s: str) -> list[ASNRequest]:
        """Return the entries whose description contains s."""
        with self._lock:
            return [entry for entry in self._cache.values() if s in entry.description]

    def asn_search(self, asn: int) -> Optional[ASNRequest]:
        """Return the entry for asn, or None when it is not cached."""
        with self._lock:
            return self._cache.get(asn)

    def addr_search(self, addr: str) -> Optional[ASNRequest]:
        """Return ASN information for the netblock holding addr, or None."""
        with self._lock:
            ip = _parse_ip(addr)
            if ip is None:
                return None

            reserved = is_reserved_address(ip)
            if reserved is not None:
                return ASNRequest(
                    address=addr,
                    asn=0,
                    prefix=reserved,
                    description=RESERVED_CIDR_DESCRIPTION,
                    tag=RIR,
                    source="RIR",
                )

            found = self._search_ranges(ip)
            if found is None:
                self._index_smallest_block(ip)
                found = self._search_ranges(ip)
                if found is None:
                    return None

            network, data = found
            prefix = str(network)
            netblocks = list(dict.fromkeys([prefix, *data.netblocks]))
            return ASNRequest(
                address=addr,
                asn=data.asn,
                cc=data.cc,
                prefix=prefix,
                netblocks=netblocks,
                description=data.description,
                tag=RIR,
                source="RIR",
            )

    def _search_ranges(self, ip: IPAddress) -> Optional[tuple[IPNetwork, ASNRequest]]:
        containing = [
            (network, data)
            for network, data in self._ranges.items()
            if network.version == ip.version and ip in network
        ]
        if not containing:
            return None
        # The least specific indexed network wins.
        return min(containing, key=lambda item: item[0].prefixlen)

    def _index_smallest_block(self, ip: IPAddress) -> None:
        best: Optional[IPNetwork] = None
        best_data: Optional[ASNRequest] = None

        for record in self._cache.values():
            for netblock in record.netblocks:
                network = _parse_cidr(netblock)
                if network is None or network.prefixlen == 0:
                    continue
                if network.version != ip.version or ip not in network:
                    continue
                if best is not None and best.prefixlen > network.prefixlen:
                    continue
                best, best_data = network, record

        if best is not None and best_data is not None:
            self._ranges[best] = best_data