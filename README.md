# attackmap

Building blocks for mapping the attack surface of an organisation: IP
address and netblock arithmetic, DNS name utilities, request and output
records for an enumeration, a cache of autonomous-system information,
loaders for ip-to-ASN range data, and exporters that turn a discovered
asset graph into files for common visualisation tools.

The package has no dependencies outside the standard library.

## Modules

| Module | What it gives you |
| --- | --- |
| `attackmap.network` | `is_ipv4`, `is_ipv6`, `is_reserved_address`, `first_last`, `range_to_cidr`, `all_hosts`, `range_hosts`, `cidr_subset`, `ip_inc`, `ip_dec`, `dial` |
| `attackmap.dnsutil` | `subdomain_regex`, `any_subdomain_regex`, `remove_asterisk_label`, `reverse_string`, `reverse_ip`, `expand_ipv6_addr`, `ipv6_nibble_format` |
| `attackmap.limits` | `get_file_limit`: raise the open-file soft limit to the hard limit and report it |
| `attackmap.messages` | `DNSRequest`, `ResolvedRequest`, `SubdomainRequest`, `ZoneXFRRequest`, `AddrRequest`, `ASNRequest`, `WhoisRequest`, `Output`, `AddressInfo`, `DNSAnswer`; `trusted_tag`, `sanitize_dns_request`, `is_domain_name`, `is_subdomain` |
| `attackmap.asncache` | `ASNCache`: store ASN records and find them by ASN, description or address |
| `attackmap.resources` | `read_ip2asn_data`, `get_default_scripts`, `load_asn_cache`, `IP2ASN` |
| `attackmap.systems` | `System`, `SimpleSystem`, `populate_cache`, `check_addresses` |
| `attackmap.viz.graph` | `Quad`, `Node`, `Edge`, `viz_data` |
| `attackmap.viz.dot` | `write_dot_data` (Graphviz DOT) |
| `attackmap.viz.gexf` | `write_gexf_data` (GEXF XML for Gephi) |
| `attackmap.viz.graphistry` | `write_graphistry_data` (Graphistry JSON) |
| `attackmap.viz.maltego` | `write_maltego_data`, `cidr_to_maltego_netblock` (Maltego CSV) |

## Examples

Address arithmetic and DNS helpers:

```python
from attackmap.network import first_last, range_to_cidr, is_reserved_address
from attackmap.dnsutil import reverse_ip, remove_asterisk_label, subdomain_regex

first_last("72.237.4.0/24")                   # (72.237.4.0, 72.237.4.255)
range_to_cidr("174.129.0.0", "174.129.255.255")  # IPv4Network('174.129.0.0/16')
is_reserved_address("192.168.0.0")            # "192.168.0.0/16"
is_reserved_address("202.145.4.15")           # None

reverse_ip("72.237.4.0")                      # "0.4.237.72"
remove_asterisk_label("*.sub.owasp.org")      # "sub.owasp.org"
subdomain_regex("owasp.org").search("see dev.owasp.org").group()  # "dev.owasp.org"
```

Request records and tags:

```python
from attackmap.messages import DNSRequest, trusted_tag, sanitize_dns_request

req = DNSRequest(name="*.Example.com", domain="Example.com", tag="cert", source="test")
sanitize_dns_request(req)
req.name, req.domain                          # ("example.com", "example.com")
req.valid()                                   # True
trusted_tag("cert")                           # True
```

Looking up an address in the ASN cache:

```python
from attackmap.asncache import ASNCache
from attackmap.messages import ASNRequest

cache = ASNCache()
cache.update(ASNRequest(address="72.237.4.113", asn=26808, prefix="72.237.4.0/24"))
cache.addr_search("72.237.4.120").asn         # 26808
cache.addr_search("127.0.0.1").description    # "Reserved Network Address Blocks"
cache.asn_search(26808).prefix                # "72.237.4.0/24"
```

Filling a cache from a gzipped, tab-separated ip2asn file
(first address, last address, ASN, country code, description):

```python
from attackmap.asncache import ASNCache
from attackmap.resources import read_ip2asn_data, load_asn_cache

cache = ASNCache()
loaded = load_asn_cache(cache, read_ip2asn_data("ip2asn-combined.tsv.gz"))
```

Normalising resolver addresses:

```python
from attackmap.systems import check_addresses

check_addresses(["1.1.1.1", "8.8.8.8:80", "NotAnIP"])  # ["1.1.1.1:53", "8.8.8.8:80"]
```

Exporting a graph:

```python
import io
from attackmap.viz.graph import Node, Edge
from attackmap.viz.dot import write_dot_data

nodes = [
    Node(id=0, type="domain", label="owasp.org", title="domain: owasp.org", source="DNS"),
    Node(id=1, type="address", label="205.251.199.98",
         title="address: 205.251.199.98", source="DNS"),
]
edges = [Edge(from_=0, to=1, title="a_record")]

out = io.StringIO()
write_dot_data(out, nodes, edges)
print(out.getvalue())
```

`write_gexf_data`, `write_graphistry_data` and `write_maltego_data` take
the same `(output, nodes, edges)` arguments. The Maltego writer walks the
graph starting from nodes of type `"as"`, so a graph without autonomous
systems yields only the header row. `viz_data(quads, uuids)` builds the
node and edge lists from a sequence of `Quad` statements.

## What the package does not do

- It makes no HTTP requests, does not crawl web sites and does not pull
  names from TLS certificates.
- It does not resolve DNS names; `SimpleSystem` only holds whatever
  resolver pools, graph and data source objects it is given.
- It has no HTML/D3 exporter and no command-line program.
- It ships no data files: `read_ip2asn_data` and `get_default_scripts`
  read from a path you supply.

## Running the tests

The test suite uses pytest, declared in the `test` extra:

```
pip install -e .[test]
pytest
```