"""Shared fixtures for gun-trust tests."""

import ipaddress
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from cryptography import x509
from cryptography.x509.oid import NameOID

from gun_trust import generate_keypair


def build_certificate(
    common_name: str,
    dns_names: Optional[list[str]] = None,
    ip_addresses: Optional[list[str]] = None,
    serial_number: Optional[int] = None,
) -> x509.Certificate:
    """Self-signed certificate with the given subject and SANs."""
    private_key = generate_keypair()
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)

    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(serial_number or x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
    )

    general_names: list[x509.GeneralName] = [x509.DNSName(n) for n in dns_names or []]
    general_names += [
        x509.IPAddress(ipaddress.ip_address(ip)) for ip in ip_addresses or []
    ]
    if general_names:
        builder = builder.add_extension(
            x509.SubjectAlternativeName(general_names), critical=False
        )

    return builder.sign(private_key, algorithm=None)


@pytest.fixture
def make_certificate():
    """Factory for self-signed test certificates."""
    return build_certificate


@pytest.fixture
def ca_certificate() -> x509.Certificate:
    return build_certificate("example.com")
