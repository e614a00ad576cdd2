"""Self-signed signing certificate generation for a GUN."""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from ..core.crypto import fingerprint_certificate, generate_keypair
from ..core.errors import EntropyError, GenerationError

logger = logging.getLogger(__name__)

# Validity policy: two 365-day years
CERT_VALIDITY = timedelta(days=365 * 2)

SERIAL_NUMBER_BITS = 128


def new_serial_number(random_bytes: Callable[[int], bytes] = os.urandom) -> int:
    """Draw a serial number uniformly from [1, 2**128).

    X.509 serials must be positive, so a zero draw is discarded.

    Args:
        random_bytes: Secure random source with the os.urandom signature

    Returns:
        Serial number

    Raises:
        EntropyError: If the random source fails
    """
    while True:
        try:
            data = random_bytes(SERIAL_NUMBER_BITS // 8)
        except (OSError, NotImplementedError) as e:
            raise EntropyError(f"Failed to generate serial number: {e}") from e

        if len(data) != SERIAL_NUMBER_BITS // 8:
            raise EntropyError(
                f"Random source returned {len(data)} bytes, "
                f"expected {SERIAL_NUMBER_BITS // 8}"
            )

        serial = int.from_bytes(data, "big")
        if serial:
            return serial


def generate_certificate(
    gun: str,
    organization: str,
    *,
    random_bytes: Callable[[int], bytes] = os.urandom,
    now: Optional[datetime] = None,
) -> tuple[ed25519.Ed25519PrivateKey, x509.Certificate]:
    """Generate a new key and a self-signed code signing certificate.

    The GUN is written verbatim into the subject common name; its syntax
    is not checked. Nothing is persisted.

    Args:
        gun: Global Unique Name the certificate is issued for
        organization: Subject organization
        random_bytes: Secure random source used for the serial number
        now: Start of the validity window (default: current UTC time)

    Returns:
        Tuple of (private_key, certificate)

    Raises:
        GenerationError: If gun is empty or does not fit a common name
        EntropyError: If no serial number can be drawn
    """
    if not gun:
        raise GenerationError("GUN must not be empty")

    serial_number = new_serial_number(random_bytes)

    if now is None:
        now = datetime.now(timezone.utc)
    # X.509 times carry whole seconds only
    not_before = now.replace(microsecond=0)
    not_after = not_before + CERT_VALIDITY

    try:
        name = x509.Name(
            [
                x509.NameAttribute(NameOID.ORGANIZATION_NAME, organization),
                x509.NameAttribute(NameOID.COMMON_NAME, gun),
            ]
        )
    except ValueError as e:
        raise GenerationError(f"Cannot issue a certificate for {gun!r}: {e}") from e

    private_key = generate_keypair()

    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(serial_number)
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=True,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
        .add_extension(
            x509.ExtendedKeyUsage([ExtendedKeyUsageOID.CODE_SIGNING]),
            critical=False,
        )
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .sign(private_key, algorithm=None)
    )

    logger.info(
        f"Generated certificate {fingerprint_certificate(certificate)} for {gun}"
    )
    return private_key, certificate
