"""Writer for graphs as a Maltego-importable CSV table."""

from __future__ import annotations

import ipaddress
from typing import Sequence, TextIO

from attackmap.network import first_last
from attackmap.viz.graph import Edge, Node

COLUMN_TYPES = (
    "maltego.Domain",
    "maltego.DNSName",
    "maltego.NSRecord",
    "maltego.MXRecord",
    "maltego.IPv4Address",
    "maltego.Netblock",
    "maltego.AS",
    "maltego.Company",
    "maltego.DNSName",
)

_TYPE_INDEX = {
    "domain": 0,
    "subdomain": 1,
    "ptr": 8,
    "cname": 8,
    "address": 4,
    "ns": 2,
    "mx": 3,
    "netblock": 5,
    "as": 6,
    "company": 7,
}


def cidr_to_maltego_netblock(cidr: str) -> str:
    """Return the netblock as "first-last", or "" when cidr does not parse."""
    address, sep, prefix = cidr.partition("/")
    if not sep or not prefix.isdigit():
        return ""
    try:
        ipaddress.ip_address(address)
        network = ipaddress.ip_network(cidr, strict=False)
    except ValueError:
        return ""
    first, last = first_last(network)
    return f"{first}-{last}"


def _cell(data: str, node_type: str) -> str:
    return cidr_to_maltego_netblock(data) if node_type == "netblock" else data


def _write_line(out: TextIO, data1: str, type1: str, data2: str, type2: str) -> None:
    row = [""] * len(COLUMN_TYPES)
    row[_TYPE_INDEX.get(type1, 0)] = _cell(data1, type1)
    row[_TYPE_INDEX.get(type2, 0)] = _cell(data2, type2)
    out.write(",".join(row) + "\n")


def _select_next(node_id: int, outgoing: bool, edge: Edge):
    if outgoing:
        return edge.to if edge.from_ == node_id else None
    return edge.from_ if edge.to == node_id else None


def _traverse(out: TextIO, node_id: int, nodes: Sequence[Node],
              edges: Sequence[Edge], seen: set[int]) -> None:
    node = nodes[node_id]
    d1, t1 = node.label, node.type
    outgoing = t1 in ("netblock", "as")

    if node_id in seen:
        return
    seen.add(node_id)

    if t1 == "as":
        company = node.title.split(":")[2].strip().replace(",", "")
        _write_line(out, d1, t1, company, "company")

    for edge in edges:
        sub_outgoing = outgoing
        nxt = _select_next(node_id, outgoing, edge)
        if nxt is None and t1 in ("subdomain", "domain"):
            sub_outgoing = True
            nxt = _select_next(node_id, sub_outgoing, edge)
        if nxt is None:
            continue

        d2, t2 = nodes[nxt].label, nodes[nxt].type
        if "cname" in edge.title:
            if sub_outgoing:
                _write_line(out, d1, "cname", d2, t2)
            else:
                _write_line(out, d1, t1, d2, "cname")
        else:
            _write_line(out, d1, t1, d2, t2)
        _traverse(out, nxt, nodes, edges, seen)


def write_maltego_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write the graph to output as CSV rows, starting from the autonomous systems."""
    nodes = list(nodes)
    edges = list(edges)
    output.write(",".join(COLUMN_TYPES) + "\n")
    seen: set[int] = set()
    for idx, node in enumerate(nodes):
        if node.type == "as":
            _traverse(output, idx, nodes, edges, seen)