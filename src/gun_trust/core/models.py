"""Core data models for gun-trust."""

import math
from datetime import datetime, timezone
from typing import Optional

from cryptography import x509
from cryptography.x509.oid import NameOID
from pydantic import BaseModel, Field

from .crypto import fingerprint_certificate


def common_name(certificate: x509.Certificate) -> str:
    """Return the subject common name, or an empty string if absent."""
    attributes = certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attributes:
        return ""
    value = attributes[0].value
    return value.decode("utf-8") if isinstance(value, bytes) else value


class CertificateSummary(BaseModel):
    """Display view of a trusted certificate."""

    common_name: str = Field(description="Subject common name (usually the GUN)")
    fingerprint: str = Field(description="SHA-256 fingerprint of the DER encoding")
    not_after: datetime = Field(description="End of the validity window (UTC)")
    expires_in_days: int = Field(description="Whole days until expiry")

    @classmethod
    def from_certificate(
        cls, certificate: x509.Certificate, now: Optional[datetime] = None
    ) -> "CertificateSummary":
        """Summarize a certificate relative to now."""
        if now is None:
            now = datetime.now(timezone.utc)
        not_after = certificate.not_valid_after_utc
        remaining = (not_after - now).total_seconds() / 86400
        return cls(
            common_name=common_name(certificate),
            fingerprint=fingerprint_certificate(certificate),
            not_after=not_after,
            expires_in_days=math.floor(remaining),
        )

    def __str__(self) -> str:
        return (
            f"{self.common_name} {self.fingerprint} "
            f"(expires in: {self.expires_in_days} days)"
        )


class KeyNamespaceEntry(BaseModel):
    """A (GUN, fingerprint) pair recovered from the private key layout."""

    model_config = {"frozen": True}

    gun: str = Field(description="Global Unique Name, empty when ungrouped")
    fingerprint: str = Field(description="Fingerprint of the key's certificate")

    def __str__(self) -> str:
        return f"{self.gun} {self.fingerprint}"
