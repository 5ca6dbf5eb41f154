"""Writer for graphs in the GEXF XML format."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, TextIO

from attackmap.viz.graph import Edge, Node

XML_NS = "http://www.gephi.org/gexf"
XML_NS_VIZ = "http://www.gephi.org/gexf/viz"
CREATOR = "OWASP Amass - https://github.com/owasp-amass/amass"
DESCRIPTION = "OWASP Amass Network Mapping"

NODE_COLORS = {
    "subdomain": (34, 153, 84),
    "domain": (242, 44, 13),
    "address": (243, 156, 18),
    "ptr": (237, 243, 26),
    "ns": (26, 243, 240),
    "mx": (142, 68, 173),
    "netblock": (243, 26, 188),
    "as": (26, 69, 243),
}

_PREFIX = "  "
_INDENT = "    "

_ESCAPES = str.maketrans({
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
})


def _escape(text: str) -> str:
    return text.translate(_ESCAPES)


@dataclass
class _Element:
    tag: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list["_Element"] = field(default_factory=list)
    text: str = ""

    def render(self, depth: int, lines: list[str]) -> None:
        indent = _PREFIX + _INDENT * depth
        attrs = "".join(f' {name}="{_escape(value)}"' for name, value in self.attrs)
        opening = f"<{self.tag}{attrs}>"
        if self.children:
            lines.append(indent + opening)
            for child in self.children:
                child.render(depth + 1, lines)
            lines.append(f"{indent}</{self.tag}>")
        else:
            lines.append(f"{indent}{opening}{_escape(self.text)}</{self.tag}>")


def _node_element(idx: int, node: Node) -> _Element:
    attrs = [("id", str(idx))]
    if node.label:
        attrs.append(("label", node.label))
    children = [
        _Element("attvalues", children=[
            _Element("attvalue", [("for", "0"), ("value", node.title)]),
            _Element("attvalue", [("for", "1"), ("value", node.source)]),
            _Element("attvalue", [("for", "2"), ("value", node.type)]),
        ]),
        _Element("parents"),
    ]
    color: Optional[tuple[int, int, int]] = NODE_COLORS.get(node.type)
    if color is not None:
        r, g, b = color
        children.append(_Element("viz:color", [("r", str(r)), ("g", str(g)), ("b", str(b))]))
    return _Element("node", attrs, children)


def _edge_element(idx: int, edge: Edge) -> _Element:
    attrs = [("id", str(idx))]
    if edge.label:
        attrs.append(("label", edge.label))
    attrs += [("source", str(edge.from_)), ("target", str(edge.to))]
    return _Element("edge", attrs, [_Element("attvalues")])


def write_gexf_data(output: TextIO, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
    """Write the graph to output as a GEXF document for Gephi."""
    today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    document = _Element(
        "gexf",
        [("xmlns", XML_NS), ("version", "1.3"), ("xmlns:viz", XML_NS_VIZ)],
        [
            _Element("meta", [("lastmodifieddate", today)], [
                _Element("creator", text=CREATOR),
                _Element("description", text=DESCRIPTION),
            ]),
            _Element("graph", [("mode", "static"), ("defaultedgetype", "directed")], [
                _Element("attributes", [("class", "node")], [
                    _Element("attribute", [("id", "0"), ("title", "Title"), ("type", "string")]),
                    _Element("attribute", [("id", "1"), ("title", "Source"), ("type", "string")]),
                    _Element("attribute", [("id", "2"), ("title", "Type"), ("type", "string")]),
                ]),
                _Element("nodes", children=[
                    _node_element(idx, node) for idx, node in enumerate(nodes)
                ]),
                _Element("edges", children=[
                    _edge_element(idx, edge) for idx, edge in enumerate(edges)
                ]),
            ]),
        ],
    )
    lines: list[str] = []
    document.render(0, lines)
    output.write('<?xml version="1.0" encoding="UTF-8"?>\n' + "\n".join(lines))