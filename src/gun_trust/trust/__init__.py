"""Trust management for certificate authorities."""

from .addition import (
    InvalidSource,
    LocalPathSource,
    UrlSource,
    resolve_source,
    trust_certificate,
)
from .fetch import fetch_certificate
from .hostname import match_hostname, verify_hostname
from .store import TrustStore

__all__ = [
    "TrustStore",
    "InvalidSource",
    "LocalPathSource",
    "UrlSource",
    "resolve_source",
    "trust_certificate",
    "fetch_certificate",
    "match_hostname",
    "verify_hostname",
]
