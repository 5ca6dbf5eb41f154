import ipaddress
from datetime import datetime

import pytest

from attackmap.asncache import ASNCache
from attackmap.messages import RIR, ASNRequest


def _basic_request():
    return ASNRequest(address="72.237.4.113", asn=26808, prefix="72.237.4.0/24",
                      tag=RIR, source="RIR")


def _detailed_request():
    return ASNRequest(
        address="72.237.4.113",
        asn=26808,
        prefix="72.237.4.0/24",
        cc="US",
        registry="ARIN",
        allocation_date=datetime.now(),
        description="UTICA-COLLEGE",
        netblocks=["72.237.4.0/24", "8.24.68.0/23"],
        tag=RIR,
        source="RIR",
    )


def test_empty():
    cache = ASNCache()
    assert cache.asn_search(0) is None
    assert cache.addr_search("72.237.4.113") is None


def test_update():
    cache = ASNCache()
    assert cache.addr_search("72.237.4.113") is None

    cache.update(_basic_request())
    entry = cache.addr_search("72.237.4.113")
    assert entry is not None
    assert entry.asn == 26808

    cache.update(_detailed_request())
    entry = cache.addr_search("72.237.4.113")
    assert entry is not None
    assert entry.cc == "US"
    assert entry.description == "UTICA-COLLEGE"

    entry = cache.addr_search("8.24.68.1")
    assert entry is not None
    assert entry.asn == 26808


def test_update_merges_netblocks_without_duplicates():
    cache = ASNCache()
    cache.update(_basic_request())
    cache.update(_detailed_request())
    assert cache.asn_search(26808).netblocks == ["72.237.4.0/24", "8.24.68.0/23"]
    assert cache.asn_search(26808).registry == "ARIN"


def test_first_update_fills_netblocks_from_prefix():
    cache = ASNCache()
    cache.update(_basic_request())
    assert cache.asn_search(26808).netblocks == ["72.237.4.0/24"]


def test_asn_search():
    cache = ASNCache()
    assert cache.asn_search(26808) is None
    cache.update(_basic_request())
    entry = cache.asn_search(26808)
    assert entry is not None
    assert entry.prefix == "72.237.4.0/24"


def test_addr_search():
    cache = ASNCache()
    reserved = cache.addr_search("127.0.0.1")
    assert reserved is not None
    assert reserved.asn == 0
    assert cache.addr_search("72.237.4.113") is None

    cache.update(_detailed_request())
    assert cache.addr_search("72.237.4.120") is not None

    entry = cache.addr_search("8.24.68.1")
    assert entry is not None
    assert ipaddress.ip_address("8.24.68.1") in ipaddress.ip_network(entry.prefix)
    assert entry.prefix == "8.24.68.0/23"
    assert entry.netblocks[0] == "8.24.68.0/23"
    assert entry.tag == RIR
    assert entry.source == "RIR"


@pytest.mark.parametrize(
    "addr, reserved",
    [("300.300.300.300", False), ("192.168.0.0", True), ("202.145.4.15", False)],
)
def test_reserved_addresses(addr, reserved):
    entry = ASNCache().addr_search(addr)
    assert (entry is not None) is reserved


def test_reserved_entry_details():
    entry = ASNCache().addr_search("192.168.0.0")
    assert entry.prefix == "192.168.0.0/16"
    assert entry.description == "Reserved Network Address Blocks"
    assert entry.asn == 0


def test_smallest_netblock_selected():
    cache = ASNCache()
    cache.update(ASNRequest(address="8.0.0.1", asn=1, prefix="8.0.0.0/8"))
    cache.update(ASNRequest(address="8.8.8.1", asn=2, prefix="8.8.8.0/24"))
    entry = cache.addr_search("8.8.8.8")
    assert entry.asn == 2
    assert entry.prefix == "8.8.8.0/24"


def test_description_search():
    cache = ASNCache()
    cache.update(_detailed_request())
    cache.update(ASNRequest(address="8.8.8.1", asn=15169, prefix="8.8.8.0/24",
                            description="GOOGLE"))
    matches = cache.description_search("UTICA")
    assert [m.asn for m in matches] == [26808]
    assert cache.description_search("NOTHING") == []


def test_zero_length_prefix_ignored():
    cache = ASNCache()
    cache.update(ASNRequest(address="1.1.1.1", asn=5, prefix="0.0.0.0/0"))
    assert cache.addr_search("1.1.1.1") is None