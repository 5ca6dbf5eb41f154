import io

import pytest

from attackmap.viz.graph import Edge, Node
from attackmap.viz.maltego import cidr_to_maltego_netblock, write_maltego_data

HEADER = (
    "maltego.Domain,maltego.DNSName,maltego.NSRecord,maltego.MXRecord,"
    "maltego.IPv4Address,maltego.Netblock,maltego.AS,maltego.Company,maltego.DNSName\n"
)


def _nodes():
    return [
        Node(id=0, type="domain", label="owasp.org", title="domain: owasp.org",
             source="DNS", actual_type="fqdn"),
        Node(id=1, type="address", label="205.251.199.98",
             title="address: 205.251.199.98", source="DNS", actual_type="ipaddr"),
    ]


def _edges():
    return [Edge(from_=0, to=1, label="", title="a_record")]


def test_write_maltego_data():
    buf = io.StringIO()
    write_maltego_data(buf, _nodes(), _edges())
    output = buf.getvalue()
    assert output
    assert output in HEADER
    assert output == HEADER


@pytest.mark.parametrize(
    "cidr, expected",
    [
        ("", ""),
        ("193.0.2.1/16", "193.0.0.0-193.0.255.255"),
        ("193.0.2.1/66", ""),
        ("\t192.0.2.1/24", ""),
        ("192.0.2.1/24,", ""),
    ],
)
def test_cidr_to_maltego_netblock(cidr, expected):
    assert cidr_to_maltego_netblock(cidr) == expected


def test_traversal_from_autonomous_system():
    nodes = [
        Node(id=0, type="as", label="26808", title="as: 26808, Desc: UTICA-COLLEGE, US"),
        Node(id=1, type="netblock", label="72.237.4.0/24", title="netblock: 72.237.4.0/24"),
        Node(id=2, type="address", label="72.237.4.113", title="address: 72.237.4.113"),
        Node(id=3, type="subdomain", label="www.example.com", title="subdomain: www.example.com"),
    ]
    edges = [
        Edge(from_=0, to=1, title="prefix"),
        Edge(from_=1, to=2, title="contains"),
        Edge(from_=3, to=2, title="a_record"),
    ]
    buf = io.StringIO()
    write_maltego_data(buf, nodes, edges)
    assert buf.getvalue() == HEADER + (
        ",,,,,,26808,UTICA-COLLEGE US,\n"
        ",,,,,72.237.4.0-72.237.4.255,26808,,\n"
        ",,,,72.237.4.113,72.237.4.0-72.237.4.255,,,\n"
        ",,,,72.237.4.113,72.237.4.0-72.237.4.255,,,\n"
        ",www.example.com,,,72.237.4.113,,,,\n"
        ",www.example.com,,,72.237.4.113,,,,\n"
    )