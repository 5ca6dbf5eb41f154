"""Graph nodes and edges built from quads for the visualisation writers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

_SKIPPED_TYPES = frozenset({"", "source", "event", "response"})

_EDGE_PREDICATES = frozenset({
    "root",
    "cname_record",
    "a_record",
    "aaaa_record",
    "ptr_record",
    "service",
    "srv_record",
    "ns_record",
    "mx_record",
    "contains",
    "prefix",
})

_IN_EDGE_TYPES = {"root": "domain", "ns_record": "ns", "mx_record": "mx"}


@dataclass(frozen=True)
class Quad:
    """A subject, predicate, object statement with an optional label."""

    subject: Optional[str] = None
    predicate: Optional[str] = None
    object: Optional[str] = None
    label: Optional[str] = None


@dataclass
class Edge:
    """A directed edge between two nodes, given by their indices."""

    from_: int = 0
    to: int = 0
    label: str = ""
    title: str = ""


@dataclass
class Node:
    """A graph node prepared for visualisation."""

    id: int = 0
    type: str = ""
    label: str = ""
    title: str = ""
    source: str = ""
    actual_type: str = ""


def _val_to_str(value: Optional[str]) -> str:
    """Return the plain text of a quad value: IRIs lose their angle brackets,
    strings lose their surrounding quotes."""
    if value is None:
        return ""
    text = str(value)
    if text.startswith("<"):
        return text.lstrip("<").rstrip(">")
    return text.strip('"')


def _first_object_for(quads: Iterable[Quad], predicate: str) -> str:
    for q in quads:
        if _val_to_str(q.predicate) == predicate:
            return _val_to_str(q.object)
    return ""


def _is_tld(name: str, node_quads: dict[str, list[Quad]]) -> bool:
    return any(
        _val_to_str(q.object) == name and _val_to_str(q.predicate) == "tld"
        for qs in node_quads.values()
        for q in qs
    )


def _get_source(name: str, events: Iterable[str], node_quads: dict[str, list[Quad]]) -> str:
    for event in events:
        for q in node_quads.get(event, ()):
            if _val_to_str(q.object) != name:
                continue
            pred = _val_to_str(q.predicate)
            if pred and pred != "domain":
                return pred
    return ""


def _out_edges(quads: Iterable[Quad], predicates: frozenset) -> list[Quad]:
    result = []
    for q in quads:
        pred = _val_to_str(q.predicate)
        if pred and pred in predicates:
            result.append(q)
    return result


def _in_edge(name: str, node_quads: dict[str, list[Quad]], predicates: frozenset) -> str:
    result = ""
    for qs in node_quads.values():
        for q in qs:
            if _val_to_str(q.object) != name:
                continue
            pred = _val_to_str(q.predicate)
            if pred and pred in predicates:
                result = pred
                break
    return result


def _convert_node_type(name: str, ntype: str, node_quads: dict[str, list[Quad]]) -> str:
    if ntype == "fqdn":
        incoming = _in_edge(name, node_quads, frozenset(_IN_EDGE_TYPES))
        if incoming:
            return _IN_EDGE_TYPES[incoming]
        if _out_edges(node_quads.get(name, ()), frozenset({"ptr_record"})):
            return "ptr"
        return "subdomain"
    if ntype == "ipaddr":
        return "address"
    return ntype


def _viz_edges(nodes: list[Node], node_index: dict[str, int],
               node_quads: dict[str, list[Quad]]) -> list[Edge]:
    edges = []
    for node in nodes:
        for q in _out_edges(node_quads.get(node.label, ()), _EDGE_PREDICATES):
            pred = _val_to_str(q.predicate)
            target = node_index.get(_val_to_str(q.object))
            if target is not None and pred:
                edges.append(Edge(from_=node.id, to=target, title=pred))
    return edges


def viz_data(quads: Iterable[Quad], uuids: Iterable[str]) -> tuple[list[Node], list[Edge]]:
    """Return the nodes and edges described by quads for the given event ids."""
    events = list(uuids)
    node_quads: dict[str, list[Quad]] = {}
    for q in quads:
        key = _val_to_str(q.subject)
        if key:
            node_quads.setdefault(key, []).append(q)

    nodes: list[Node] = []
    node_index: dict[str, int] = {}
    for subject, qs in node_quads.items():
        ntype = _first_object_for(qs, "type")
        if ntype in _SKIPPED_TYPES:
            continue
        if ntype == "fqdn" and _is_tld(subject, node_quads):
            continue

        source = _get_source(subject, events, node_quads)
        if not source:
            continue

        newtype = _convert_node_type(subject, ntype, node_quads)
        if not newtype:
            continue

        title = f"{newtype}: {subject}"
        if newtype == "as":
            title += ", Desc: " + _first_object_for(qs, "description")

        node = Node(
            id=len(nodes),
            type=newtype,
            label=subject,
            title=title,
            source=source,
            actual_type=ntype,
        )
        node_index[subject] = node.id
        nodes.append(node)

    return nodes, _viz_edges(nodes, node_index, node_quads)