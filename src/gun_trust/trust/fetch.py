"""Retrieval of certificates from network locations."""

import logging
from typing import Optional

import httpx
from cryptography import x509

from ..core.crypto import load_certificates
from ..core.errors import CertificateFetchError

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


def fetch_certificate(
    url: str,
    *,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> x509.Certificate:
    """Download a certificate from a URL.

    The body may be PEM or DER; only the first certificate is returned.

    Args:
        url: Location of the certificate
        timeout: Request timeout in seconds
        client: Optional HTTP client to use

    Returns:
        The downloaded certificate

    Raises:
        CertificateFetchError: If the request fails
        CertificateParseError: If the body is not a certificate
    """
    logger.debug(f"Fetching certificate from {url}")
    try:
        if client is not None:
            response = client.get(url, timeout=timeout, follow_redirects=True)
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as http_client:
                response = http_client.get(url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise CertificateFetchError(
            f"error retrieving certificate from url ({url}): {e}"
        ) from e

    return load_certificates(response.content)[0]
