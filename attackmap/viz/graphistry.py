"""Writer for graphs in the Graphistry JSON edge-list format."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Iterable, TextIO

from attackmap.viz.graph import Edge, Node

NODE_COLORS = {
    "subdomain": 3,
    "domain": 5,
    "address": 7,
    "ptr": 10,
    "ns": 0,
    "mx": 9,
    "netblock": 4,
    "as": 1,
}

_HTML_SAFE = str.maketrans({
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})


def _graph_name(now: datetime) -> str:
    return f"OWASP_Amass_{now:%b}_{now.day}_{now:%Y_%H_%M_%S}"


def write_graphistry_data(output: TextIO, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
    """Write the graph to output as Graphistry JSON."""
    labels = [
        {
            "node": str(idx),
            "pointLabel": node.label,
            "pointTitle": node.title,
            "pointColor": NODE_COLORS.get(node.type, 0),
            "type": node.type,
            "source": node.source,
        }
        for idx, node in enumerate(nodes)
    ]
    graph = [
        {"src": str(edge.from_), "dst": str(edge.to), "edgeTitle": edge.title}
        for edge in edges
    ]
    document = {
        "name": _graph_name(datetime.now()),
        "type": "edgelist",
        "bindings": {
            "sourceField": "src",
            "destinationField": "dst",
            "idField": "node",
        },
        "graph": graph or None,
        "labels": labels or None,
    }
    text = json.dumps(document, indent=2, ensure_ascii=False)
    output.write(text.translate(_HTML_SAFE) + "\n")