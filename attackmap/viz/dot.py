"""Writer for graphs in the DOT language."""

from __future__ import annotations

from typing import Iterable, TextIO

from attackmap.viz.graph import Edge, Node

GRAPH_NAME = "OWASP Amass Network Mapping"

_NODE_TYPES = ("subdomain", "domain", "address", "ptr", "ns", "mx", "netblock", "as")
NODE_COLORS = dict(
    zip(_NODE_TYPES, ("green", "red", "orange", "yellow", "cyan", "purple", "pink", "blue"))
)

_GRAPH_SETTINGS = ('size = "7.5,10"', 'ranksep="2.5 equally"', "ratio=auto")
_ITEM_INDENT = " " * 8


def _attributes(**values: str) -> str:
    return ",".join(f'{key}="{value}"' for key, value in values.items())


def _item(statement: str) -> str:
    return f"\n{_ITEM_INDENT}{statement}\n"


def write_dot_data(output: TextIO, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
    """Write the graph to output as a DOT digraph."""
    header = f'\ndigraph "{GRAPH_NAME}" {{\n\t' + "; ".join(_GRAPH_SETTINGS) + ";\n\n"

    node_items = (
        _item(
            "node ["
            + _attributes(
                label=node.label,
                color=NODE_COLORS.get(node.type, ""),
                type=node.type,
                source=node.source,
            )
            + f"]; n{number};"
        )
        for number, node in enumerate(nodes, start=1)
    )
    edge_items = (
        _item(f"n{edge.from_ + 1} -> n{edge.to + 1} [{_attributes(label=edge.title)}];")
        for edge in edges
    )

    output.write(header + "".join(node_items) + "\n\n" + "".join(edge_items) + "\n}\n")