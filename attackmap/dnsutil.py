"""DNS name helpers: subdomain patterns, label cleanup and reverse-lookup formats."""

from __future__ import annotations

import ipaddress
import re

# Matches all subdomain labels once the domain is appended.
SUBRE = r"(([a-zA-Z0-9]{1}|[_a-zA-Z0-9]{1}[_a-zA-Z0-9-]{0,61}[a-zA-Z0-9]{1})[.]{1})+"


def subdomain_regex_string(domain: str) -> str:
    """Return a pattern matching subdomain names that end with domain."""
    return SUBRE + re.escape(domain)


def subdomain_regex(domain: str) -> re.Pattern:
    """Return a compiled pattern matching subdomain names that end with domain."""
    return re.compile(subdomain_regex_string(domain))


def any_subdomain_regex_string() -> str:
    """Return a pattern matching any DNS subdomain name."""
    return SUBRE + "[a-zA-Z]{2,61}"


def any_subdomain_regex() -> re.Pattern:
    """Return a compiled pattern matching any DNS subdomain name."""
    return re.compile(any_subdomain_regex_string())


def remove_asterisk_label(s: str) -> str:
    """Return the name with everything up to its last "*." label removed."""
    index = s.rfind("*.")
    if index == -1:
        return s
    return s[index + 2:]


def reverse_string(s: str) -> str:
    """Return the characters of s in reverse order."""
    return s[::-1]


def reverse_ip(ip: str) -> str:
    """Return the dotted parts of ip in reverse order."""
    return ".".join(reversed(ip.split(".")))


def expand_ipv6_addr(addr: str) -> str:
    """Return the fully expanded, zero-padded IPv6 form of addr.

    IPv4 addresses are expanded in their IPv4-mapped IPv6 form.
    """
    ip = ipaddress.ip_address(addr.strip())
    if ip.version == 4:
        ip = ipaddress.IPv6Address(f"::ffff:{ip}")
    return ip.exploded


def ipv6_nibble_format(ip: str) -> str:
    """Return the IPv6 address in reversed nibble format."""
    digits = expand_ipv6_addr(ip).replace(":", "")
    return ".".join(reversed(digits))