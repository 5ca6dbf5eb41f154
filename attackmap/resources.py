"""Loading of bundled resource data: IP-to-ASN ranges and default scripts."""

from __future__ import annotations

import csv
import gzip
import ipaddress
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from attackmap.asncache import ASNCache
from attackmap.messages import ASNRequest
from attackmap.network import range_to_cidr

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

SCRIPT_EXTENSION = ".ads"
_FIELDS_PER_RECORD = 5
_INTEGER = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class IP2ASN:
    """An address range record with its autonomous system details."""

    first_ip: Optional[IPAddress]
    last_ip: Optional[IPAddress]
    asn: int
    cc: str
    description: str


def _parse_ip(text: str) -> Optional[IPAddress]:
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def read_ip2asn_data(path: Union[str, os.PathLike]) -> list[IP2ASN]:
    """Return the range records in a gzipped, tab-separated ip2asn file.

    Rows without exactly five fields or with a non-numeric ASN are skipped.
    """
    name = os.fspath(path)
    records: list[IP2ASN] = []
    try:
        with gzip.open(name, "rt", encoding="utf-8", errors="replace", newline="") as stream:
            for row in csv.reader(stream, delimiter="\t"):
                if len(row) != _FIELDS_PER_RECORD or not _INTEGER.fullmatch(row[2]):
                    continue
                records.append(IP2ASN(
                    first_ip=_parse_ip(row[0]),
                    last_ip=_parse_ip(row[1]),
                    asn=int(row[2]),
                    cc=row[3],
                    description=row[4],
                ))
    except (OSError, EOFError) as exc:
        raise OSError(f"failed to read the '{name}' file: {exc}") from exc
    return records


def _walk_lexical(directory: Path):
    for entry in sorted(os.scandir(directory), key=lambda e: e.name):
        if entry.is_dir():
            yield from _walk_lexical(Path(entry.path))
        else:
            yield Path(entry.path)


def get_default_scripts(directory: Union[str, os.PathLike]) -> list[str]:
    """Return the contents of every script file below directory, in lexical order."""
    return [
        path.read_text(encoding="utf-8")
        for path in _walk_lexical(Path(directory))
        if path.suffix == SCRIPT_EXTENSION
    ]


def load_asn_cache(cache: ASNCache, ranges: Iterable[IP2ASN]) -> int:
    """Store each range that forms a usable netblock in cache; return how many were stored."""
    loaded = 0
    for record in ranges:
        if record.first_ip is None or record.last_ip is None:
            continue
        try:
            cidr = range_to_cidr(record.first_ip, record.last_ip)
        except ValueError:
            continue
        if cidr is None or cidr.prefixlen == 0:
            continue
        cache.update(ASNRequest(
            address=str(record.first_ip),
            asn=record.asn,
            cc=record.cc,
            prefix=str(cidr),
            description=record.description,
        ))
        loaded += 1
    return loaded