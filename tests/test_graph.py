from attackmap.viz.graph import Edge, Node, Quad, viz_data


def _by_label(nodes):
    return {node.label: node for node in nodes}


def test_viz_data_a_record():
    quads = [
        Quad("barbazz", "type", "event"),
        Quad("barbazz", "test", "dev.example.domain"),
        Quad("barbazz", "test", "127.0.0.1"),
        Quad("dev.example.domain", "type", "fqdn"),
        Quad("dev.example.domain", "a_record", "127.0.0.1"),
        Quad("127.0.0.1", "type", "ipaddr"),
    ]
    nodes, edges = viz_data(quads, ["barbazz"])
    assert nodes == [
        Node(id=0, type="subdomain", label="dev.example.domain",
             title="subdomain: dev.example.domain", source="test", actual_type="fqdn"),
        Node(id=1, type="address", label="127.0.0.1",
             title="address: 127.0.0.1", source="test", actual_type="ipaddr"),
    ]
    assert edges == [Edge(from_=0, to=1, title="a_record")]


def test_unknown_event_gives_no_nodes():
    quads = [
        Quad("ev", "type", "event"),
        Quad("ev", "test", "host.example.com"),
        Quad("host.example.com", "type", "fqdn"),
    ]
    nodes, edges = viz_data(quads, ["other"])
    assert nodes == []
    assert edges == []


def test_domain_tld_and_as_nodes():
    quads = [
        Quad("ev", "type", "event"),
        Quad("ev", "domain", "example.com"),
        Quad("ev", "dns", "example.com"),
        Quad("ev", "dns", "www.example.com"),
        Quad("ev", "dns", "com"),
        Quad("ev", "rir", "13335"),
        Quad("com", "type", "fqdn"),
        Quad("example.com", "type", "fqdn"),
        Quad("example.com", "tld", "com"),
        Quad("www.example.com", "type", "fqdn"),
        Quad("www.example.com", "root", "example.com"),
        Quad("13335", "type", "as"),
        Quad("13335", "description", "CLOUDFLARENET"),
    ]
    nodes, edges = viz_data(quads, ["ev"])
    found = _by_label(nodes)
    assert set(found) == {"example.com", "www.example.com", "13335"}
    assert found["example.com"].type == "domain"
    assert found["example.com"].source == "dns"
    assert found["www.example.com"].type == "subdomain"
    assert found["13335"].title == "as: 13335, Desc: CLOUDFLARENET"
    assert found["13335"].source == "rir"
    assert edges == [
        Edge(from_=found["www.example.com"].id, to=found["example.com"].id, title="root")
    ]
    assert [node.id for node in nodes] == list(range(len(nodes)))


def test_ptr_ns_and_quoted_values():
    quads = [
        Quad("<ev>", "<type>", "<event>"),
        Quad("ev", "dns", '"1.0.0.127.in-addr.arpa"'),
        Quad("ev", "dns", "ns1.example.com"),
        Quad("ev", "dns", "example.com"),
        Quad("1.0.0.127.in-addr.arpa", "type", "fqdn"),
        Quad("1.0.0.127.in-addr.arpa", "ptr_record", "example.com"),
        Quad("ns1.example.com", "type", "fqdn"),
        Quad("example.com", "type", "fqdn"),
        Quad("example.com", "ns_record", "ns1.example.com"),
    ]
    nodes, edges = viz_data(quads, ["ev"])
    found = _by_label(nodes)
    assert found["1.0.0.127.in-addr.arpa"].type == "ptr"
    assert found["ns1.example.com"].type == "ns"
    assert found["example.com"].type == "subdomain"
    assert Edge(from_=found["example.com"].id, to=found["ns1.example.com"].id,
                title="ns_record") in edges
    assert Edge(from_=found["1.0.0.127.in-addr.arpa"].id, to=found["example.com"].id,
                title="ptr_record") in edges
    assert len(edges) == 2