"""Key material, certificate encoding and fingerprinting."""

import hashlib

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from .errors import CertificateParseError

PEM_CERTIFICATE_MARKER = b"-----BEGIN CERTIFICATE-----"


def generate_keypair() -> ed25519.Ed25519PrivateKey:
    """Generate a new Ed25519 signing key."""
    return ed25519.Ed25519PrivateKey.generate()


def private_key_to_bytes(private_key: ed25519.Ed25519PrivateKey) -> bytes:
    """Serialize private key to an unencrypted PKCS#8 PEM blob.

    Args:
        private_key: Ed25519 private key

    Returns:
        PEM encoded private key bytes
    """
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def certificate_to_der(certificate: x509.Certificate) -> bytes:
    """Canonical encoding of a certificate."""
    return certificate.public_bytes(serialization.Encoding.DER)


def certificate_to_pem(certificate: x509.Certificate) -> bytes:
    return certificate.public_bytes(serialization.Encoding.PEM)


def fingerprint_certificate(certificate: x509.Certificate) -> str:
    """Compute the content-derived identifier of a certificate.

    The fingerprint is the hex encoded SHA-256 digest of the DER bytes, so
    it survives any PEM/DER round trip and never depends on the subject.

    Args:
        certificate: Certificate to fingerprint

    Returns:
        64 character lowercase hex string
    """
    return hashlib.sha256(certificate_to_der(certificate)).hexdigest()


def load_certificates(data: bytes) -> list[x509.Certificate]:
    """Parse every certificate contained in a PEM bundle or a DER blob.

    Args:
        data: Raw file or response body

    Returns:
        List of certificates, in file order

    Raises:
        CertificateParseError: If no certificate can be decoded
    """
    try:
        if PEM_CERTIFICATE_MARKER in data:
            certificates = x509.load_pem_x509_certificates(data)
        else:
            certificates = [x509.load_der_x509_certificate(data)]
    except ValueError as e:
        raise CertificateParseError(f"Failed to parse certificate: {e}") from e

    if not certificates:
        raise CertificateParseError("No certificate found")
    return certificates
