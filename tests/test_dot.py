import io

from attackmap.viz.dot import write_dot_data
from attackmap.viz.graph import Edge, Node

EXPECTED_DOT_OUTPUT = """
digraph "OWASP Amass Network Mapping" {
\tsize = "7.5,10"; ranksep="2.5 equally"; ratio=auto;


        node [label="owasp.org",color="red",type="domain",source="DNS"]; n1;

        node [label="205.251.199.98",color="orange",type="address",source="DNS"]; n2;



        n1 -> n2 [label="a_record"];

}
"""


def _nodes():
    return [
        Node(id=0, type="domain", label="owasp.org", title="domain: owasp.org",
             source="DNS", actual_type="fqdn"),
        Node(id=1, type="address", label="205.251.199.98",
             title="address: 205.251.199.98", source="DNS", actual_type="ipaddr"),
    ]


def _edges():
    return [Edge(from_=0, to=1, label="", title="a_record")]


def test_write_dot_data_happy_path():
    buf = io.StringIO()
    write_dot_data(buf, _nodes(), _edges())
    output = buf.getvalue()
    assert 'digraph "OWASP Amass Network Mapping"' in output
    assert output == EXPECTED_DOT_OUTPUT


def test_unknown_type_has_empty_color():
    buf = io.StringIO()
    write_dot_data(buf, [Node(type="cname", label="a.example.com", source="x")], [])
    assert 'node [label="a.example.com",color="",type="cname",source="x"]; n1;' in buf.getvalue()