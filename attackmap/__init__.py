"""Attack surface mapping: addresses, DNS names, enumeration records, ASN data and graph export."""

__version__ = "0.1.0"