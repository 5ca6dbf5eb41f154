"""Systems that hold the resolvers, caches, graphs and data sources of an enumeration."""

from __future__ import annotations

import gc
import ipaddress
import queue
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from attackmap.asncache import ASNCache
from attackmap.messages import ASNRequest

DEFAULT_DNS_PORT = "53"

# How long populate_cache waits for each data source to answer.
_REPLY_WAIT = 1.0


class System(ABC):
    """Manages the services that perform reconnaissance activities.

    A data source is any object with start() and stop() methods and with
    ``input`` and ``output`` queues.
    """

    cache: Optional[ASNCache]

    @abstractmethod
    def add_source(self, src: Any) -> None:
        """Add src to the data sources managed by the system."""

    @abstractmethod
    def add_and_start(self, srv: Any) -> None:
        """Start srv and then add it to the data sources."""

    @abstractmethod
    def data_sources(self) -> list:
        """Return the data sources managed by the system."""

    @abstractmethod
    def set_data_sources(self, sources: Sequence[Any]) -> None:
        """Assign the data sources used by the system."""

    @abstractmethod
    def graph_databases(self) -> list:
        """Return the graphs used by the system."""

    @abstractmethod
    def get_memory_usage(self) -> int:
        """Return the number of bytes held by live objects."""

    @abstractmethod
    def shutdown(self) -> None:
        """Shut the system down."""


def _live_object_bytes() -> int:
    return sum(sys.getsizeof(obj) for obj in gc.get_objects())


@dataclass
class SimpleSystem(System):
    """A system with a single data source and a single graph."""

    cfg: Any = None
    pool: Any = None
    trusted: Any = None
    graph: Any = None
    cache: Optional[ASNCache] = None
    service: Any = None

    def add_source(self, src: Any) -> None:
        """Make src the system's data source."""
        self.service = src

    def add_and_start(self, srv: Any) -> None:
        """Start srv and make it the data source; errors from start() propagate."""
        srv.start()
        self.add_source(srv)

    def data_sources(self) -> list:
        """Return the data source in a list, or an empty list when there is none."""
        return [] if self.service is None else [self.service]

    def set_data_sources(self, sources: Sequence[Any]) -> None:
        """Make the first of sources the system's data source."""
        if not sources:
            raise ValueError("no data sources were provided")
        self.service = sources[0]

    def graph_databases(self) -> list:
        """Return the graph in a list."""
        return [self.graph]

    def shutdown(self) -> None:
        """Stop the data source, close the graph, stop the pool and drop the cache."""
        if self.service is not None:
            self.service.stop()
        if self.graph is not None:
            self.graph.close()
        if self.pool is not None:
            self.pool.stop()
        self.cache = None

    def get_memory_usage(self) -> int:
        """Return the number of bytes held by live objects."""
        return _live_object_bytes()


def populate_cache(sys: System, asn: int) -> None:
    """Ask every data source of sys about asn and store the answers in its cache."""
    for src in sys.data_sources():
        src.input.put(ASNRequest(asn=asn))
        try:
            reply = src.output.get(timeout=_REPLY_WAIT)
        except queue.Empty:
            continue
        if isinstance(reply, ASNRequest) and sys.cache is not None:
            sys.cache.update(reply)


def _split_host_port(address: str) -> Optional[tuple[str, str]]:
    if address.startswith("["):
        end = address.find("]")
        if end < 0 or address[end + 1:end + 2] != ":":
            return None
        host, port = address[1:end], address[end + 2:]
        if "[" in host or "]" in port or "[" in port:
            return None
        return host, port
    host, sep, port = address.rpartition(":")
    if not sep or ":" in host or "[" in host or "]" in host:
        return None
    return host, port


def _valid_ip(text: str) -> bool:
    if "%" in text:
        return False
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def _join_host_port(host: str, port: str) -> str:
    return f"[{host}]:{port}" if ":" in host else f"{host}:{port}"


def check_addresses(addrs: Iterable[str]) -> list[str]:
    """Return the resolver addresses that hold a valid IP, as host:port.

    Addresses without a port get the DNS port 53.
    """
    result = []
    for addr in addrs:
        parts = _split_host_port(addr)
        host, port = parts if parts is not None else (addr, DEFAULT_DNS_PORT)
        if not _valid_ip(host):
            continue
        result.append(_join_host_port(host, port))
    return result