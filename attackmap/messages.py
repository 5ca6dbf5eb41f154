"""Request and output records passed between the stages of an enumeration."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Union

from attackmap.dnsutil import remove_asterisk_label

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

# Request tag types.
NONE = "none"
ALT = "alt"
GUESS = "guess"
ARCHIVE = "archive"
API = "api"
AXFR = "axfr"
BRUTE = "brute"
CERT = "cert"
CRAWL = "crawl"
DNS = "dns"
RIR = "rir"
EXTERNAL = "ext"
SCRAPE = "scrape"

# Pub/sub topics.
NEW_NAME_TOPIC = "amass:newname"
NEW_ADDR_TOPIC = "amass:newaddr"
SUB_DISCOVERED_TOPIC = "amass:newsub"
ASN_REQUEST_TOPIC = "amass:asnreq"
NEW_ASN_TOPIC = "amass:newasn"
WHOIS_REQUEST_TOPIC = "amass:whoisreq"
NEW_WHOIS_TOPIC = "amass:whoisinfo"
LOG_TOPIC = "amass:log"
OUTPUT_TOPIC = "amass:output"

TRUSTED_TAGS = frozenset({ARCHIVE, AXFR, CERT, CRAWL, DNS})

_MAX_LABEL_LENGTH = 63
_MAX_NAME_LENGTH = 255


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


def is_domain_name(name: str) -> bool:
    """Return True when name is a syntactically valid DNS name."""
    if not name:
        return False
    if name == ".":
        return True
    body = name[:-1] if name.endswith(".") else name
    labels = body.split(".")
    if any(not label or len(label) > _MAX_LABEL_LENGTH for label in labels):
        return False
    wire_length = sum(len(label) + 1 for label in labels) + 1
    return wire_length <= _MAX_NAME_LENGTH


def _labels(name: str) -> list[str]:
    body = name.lower().rstrip(".")
    return body.split(".") if body else []


def is_subdomain(parent: str, child: str) -> bool:
    """Return True when child equals parent or lies beneath it."""
    parent_labels = _labels(parent)
    child_labels = _labels(child)
    if len(parent_labels) > len(child_labels):
        return False
    if not parent_labels:
        return True
    return child_labels[-len(parent_labels):] == parent_labels


def _valid_name_pair(name: str, domain: str) -> bool:
    return is_domain_name(name) and is_domain_name(domain) and is_subdomain(domain, name)


@dataclass(frozen=True)
class DNSAnswer:
    """A single DNS resource record."""

    name: str = ""
    type: int = 0
    ttl: int = 0
    data: str = ""


@dataclass
class _NameRecord:
    name: str = ""
    domain: str = ""
    records: list[DNSAnswer] = field(default_factory=list)
    tag: str = ""
    source: str = ""


@dataclass
class DNSRequest(_NameRecord):
    """A DNS name being processed by the enumeration."""

    def clone(self) -> "DNSRequest":
        """Return a copy with its own list of records."""
        return replace(self, records=list(self.records))

    def valid(self) -> bool:
        """Return True when name and domain are valid and name lies within domain."""
        return _valid_name_pair(self.name, self.domain)


@dataclass
class ResolvedRequest(_NameRecord):
    """A DNS name that has been resolved."""

    def clone(self) -> "ResolvedRequest":
        """Return a copy with its own list of records."""
        return replace(self, records=list(self.records))

    def valid(self) -> bool:
        """Return True when name and domain are valid and name lies within domain."""
        return _valid_name_pair(self.name, self.domain)


@dataclass
class SubdomainRequest(_NameRecord):
    """A subdomain discovered during enumeration."""

    times: int = 0

    def clone(self) -> "SubdomainRequest":
        """Return a copy with its own records; the copy's times count starts at zero."""
        return replace(self, records=list(self.records), times=0)

    def valid(self) -> bool:
        """Return True when the names are valid and the subdomain was seen at least once."""
        return _valid_name_pair(self.name, self.domain) and self.times != 0


@dataclass
class ZoneXFRRequest:
    """A zone transfer request."""

    name: str = ""
    domain: str = ""
    server: str = ""
    tag: str = ""
    source: str = ""

    def clone(self) -> "ZoneXFRRequest":
        """Return a copy of the request."""
        return replace(self)


@dataclass
class AddrRequest:
    """A network address being processed by the enumeration."""

    address: str = ""
    in_scope: bool = False
    domain: str = ""
    tag: str = ""
    source: str = ""

    def clone(self) -> "AddrRequest":
        """Return a copy of the request."""
        return replace(self)

    def valid(self) -> bool:
        """Return True when the address parses and any domain is a valid name."""
        if _parse_ip(self.address) is None:
            return False
        return not self.domain or is_domain_name(self.domain)


@dataclass
class ASNRequest:
    """Autonomous system and netblock information."""

    address: str = ""
    asn: int = 0
    prefix: str = ""
    cc: str = ""
    registry: str = ""
    allocation_date: Optional[datetime] = None
    description: str = ""
    netblocks: list[str] = field(default_factory=list)
    tag: str = ""
    source: str = ""

    def clone(self) -> "ASNRequest":
        """Return a copy with its own list of netblocks."""
        return replace(self, netblocks=list(self.netblocks))

    def valid(self) -> bool:
        """Return True when the address, prefix and every netblock parse."""
        if _parse_ip(self.address) is None or _parse_cidr(self.prefix) is None:
            return False
        return all(_parse_cidr(netblock) is not None for netblock in self.netblocks)


@dataclass
class WhoisRequest:
    """Data gathered for a reverse whois lookup."""

    domain: str = ""
    company: str = ""
    email: str = ""
    new_domains: list[str] = field(default_factory=list)
    tag: str = ""
    source: str = ""


@dataclass(frozen=True)
class AddressInfo:
    """Network addressing details attached to an output record."""

    address: Optional[IPAddress] = None
    netblock: Optional[IPNetwork] = None
    cidr_str: str = ""
    asn: int = 0
    description: str = ""


@dataclass
class Output:
    """The output data for an enumerated DNS name."""

    name: str = ""
    domain: str = ""
    addresses: list[AddressInfo] = field(default_factory=list)
    tag: str = ""
    sources: list[str] = field(default_factory=list)

    def clone(self) -> "Output":
        """Return a copy with its own address and source lists."""
        return replace(self, addresses=list(self.addresses), sources=list(self.sources))

    def complete(self, passive: bool) -> bool:
        """Return True when all required fields are populated.

        Address details are only required when passive is false.
        """
        if not (self.name and self.domain and self.tag and self.sources):
            return False
        if any(not src for src in self.sources):
            return False
        if passive:
            return True
        return all(
            a.address is not None and a.netblock is not None and a.cidr_str and a.description
            for a in self.addresses
        )


def trusted_tag(tag: str) -> bool:
    """Return True for tags that are trusted even when facing DNS wildcards."""
    return tag in TRUSTED_TAGS


def sanitize_dns_request(req: DNSRequest) -> DNSRequest:
    """Normalise the name and domain of req in place and return it."""
    name = remove_asterisk_label(req.name.lower().strip())
    req.name = name.strip(".")
    req.domain = req.domain.lower().strip().strip(".")
    return req