"""Trust addition protocol.

A candidate location is resolved exactly once into a URL, a local path or
an invalid source. A URL scheme always wins, even if a file with the same
name exists. Certificates fetched from the network must carry a hostname
claim for the GUN; local files are trusted as given.
"""

import logging
import os
from typing import Callable, Literal, Union
from urllib.parse import urlparse

from cryptography import x509
from pydantic import BaseModel

from ..core.errors import InvalidSourceError
from .fetch import fetch_certificate
from .hostname import verify_hostname
from .store import TrustStore

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], x509.Certificate]


class UrlSource(BaseModel):
    """Certificate to be fetched from a URL."""

    kind: Literal["url"] = "url"
    url: str


class LocalPathSource(BaseModel):
    """Certificate file on the local filesystem."""

    kind: Literal["local"] = "local"
    path: str


class InvalidSource(BaseModel):
    """Location that is neither a URL nor an existing file."""

    kind: Literal["invalid"] = "invalid"
    location: str


CertificateSource = Union[UrlSource, LocalPathSource, InvalidSource]


def resolve_source(location: str) -> CertificateSource:
    """Classify a certificate location.

    Args:
        location: URL or filesystem path given by the operator

    Returns:
        UrlSource if the location has a URL scheme, LocalPathSource if it
        names an existing path, InvalidSource otherwise
    """
    try:
        scheme = urlparse(location).scheme
    except ValueError:
        scheme = ""
    if scheme:
        return UrlSource(url=location)
    if location and os.path.exists(location):
        return LocalPathSource(path=location)
    return InvalidSource(location=location)


def trust_certificate(
    store: TrustStore,
    gun: str,
    location: str,
    *,
    fetcher: Fetcher = fetch_certificate,
) -> list[x509.Certificate]:
    """Add the certificate(s) at location to the trust store for gun.

    Args:
        store: Trust store to add to
        gun: Global Unique Name the certificate must be bound to
        location: URL or local file path
        fetcher: Callable downloading a certificate from a URL

    Returns:
        Certificates admitted to the store

    Raises:
        HostnameMismatchError: If a fetched certificate is not valid for gun
        CertificateFetchError: If the URL cannot be retrieved
        InvalidSourceError: If location is neither a URL nor an existing file
        StorageError: If the store cannot be updated or the file read
    """
    source = resolve_source(location)

    if isinstance(source, UrlSource):
        certificate = fetcher(source.url)
        verify_hostname(certificate, gun)
        store.add_cert(certificate)
        logger.info(f"Trusted certificate from {source.url} for {gun}")
        return [certificate]

    if isinstance(source, LocalPathSource):
        certificates = store.add_cert_from_file(source.path)
        logger.info(f"Trusted {len(certificates)} certificate(s) from {source.path}")
        return certificates

    raise InvalidSourceError(
        f"{source.location!r} is not a URL, not an existing file: "
        "please provide a file location or URL for CA certificate"
    )
