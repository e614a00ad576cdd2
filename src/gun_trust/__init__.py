"""gun-trust - Trusted certificates and signing keys for Global Unique Names."""

from .core import (
    CertificateSummary,
    KeyNamespaceEntry,
    KeysConfig,
    fingerprint_certificate,
    generate_keypair,
    private_key_to_bytes,
)
from .issuer import generate_certificate
from .keystore import KeyNamespaceScanner, PrivateKeyStore
from .trust import TrustStore, resolve_source, trust_certificate

__version__ = "0.1.0"

__all__ = [
    # Core
    "CertificateSummary",
    "KeyNamespaceEntry",
    "KeysConfig",
    "fingerprint_certificate",
    "generate_keypair",
    "private_key_to_bytes",
    # Issuer
    "generate_certificate",
    # Keystore
    "KeyNamespaceScanner",
    "PrivateKeyStore",
    # Trust
    "TrustStore",
    "resolve_source",
    "trust_certificate",
]
