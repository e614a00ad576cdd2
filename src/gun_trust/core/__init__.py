"""Core functionality for gun-trust."""

from .config import DEFAULT_ORGANIZATION, KeysConfig
from .crypto import (
    certificate_to_der,
    certificate_to_pem,
    fingerprint_certificate,
    generate_keypair,
    load_certificates,
    private_key_to_bytes,
)
from .errors import (
    GunTrustError,
    TrustStoreError,
    NotFoundError,
    StorageError,
    CertificateError,
    CertificateParseError,
    HostnameMismatchError,
    TrustSourceError,
    InvalidSourceError,
    CertificateFetchError,
    GenerationError,
    EntropyError,
    ConfigurationError,
)
from .models import CertificateSummary, KeyNamespaceEntry, common_name

__all__ = [
    # Config
    "DEFAULT_ORGANIZATION",
    "KeysConfig",
    # Crypto
    "certificate_to_der",
    "certificate_to_pem",
    "fingerprint_certificate",
    "generate_keypair",
    "load_certificates",
    "private_key_to_bytes",
    # Errors
    "GunTrustError",
    "TrustStoreError",
    "NotFoundError",
    "StorageError",
    "CertificateError",
    "CertificateParseError",
    "HostnameMismatchError",
    "TrustSourceError",
    "InvalidSourceError",
    "CertificateFetchError",
    "GenerationError",
    "EntropyError",
    "ConfigurationError",
    # Models
    "CertificateSummary",
    "KeyNamespaceEntry",
    "common_name",
]
