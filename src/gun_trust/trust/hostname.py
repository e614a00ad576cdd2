"""Hostname binding between a certificate and a GUN."""

import ipaddress

from cryptography import x509

from ..core.errors import HostnameMismatchError
from ..core.models import common_name


def _normalize(name: str) -> str:
    return name.lower().rstrip(".")


def match_hostname(pattern: str, hostname: str) -> bool:
    """Match a hostname against a certificate name.

    A wildcard is only honoured as the whole leftmost label and matches
    exactly one label.
    """
    pattern = _normalize(pattern)
    hostname = _normalize(hostname)
    if not pattern or not hostname:
        return False

    pattern_labels = pattern.split(".")
    host_labels = hostname.split(".")
    if len(pattern_labels) != len(host_labels):
        return False

    for i, (p, h) in enumerate(zip(pattern_labels, host_labels)):
        if i == 0 and p == "*" and len(pattern_labels) > 2:
            continue
        if p != h:
            return False
    return True


def _san(certificate: x509.Certificate) -> x509.SubjectAlternativeName | None:
    try:
        return certificate.extensions.get_extension_for_class(
            x509.SubjectAlternativeName
        ).value
    except x509.ExtensionNotFound:
        return None


def verify_hostname(certificate: x509.Certificate, hostname: str) -> None:
    """Check that a certificate is valid for hostname.

    DNS subjectAltNames take precedence; the subject common name is only
    consulted when the certificate has none. IP literals are matched
    against IP address subjectAltNames.

    Args:
        certificate: Certificate whose claim is checked
        hostname: Expected name (the GUN)

    Raises:
        HostnameMismatchError: If the certificate does not cover hostname
    """
    san = _san(certificate)

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        ip = None

    if ip is not None:
        candidates = san.get_values_for_type(x509.IPAddress) if san else []
        if ip in candidates:
            return
        raise HostnameMismatchError(
            f"certificate is valid for {', '.join(map(str, candidates)) or 'no IP addresses'}, "
            f"not {hostname}"
        )

    dns_names = san.get_values_for_type(x509.DNSName) if san else []
    names = dns_names or [common_name(certificate)]
    if any(match_hostname(name, hostname) for name in names):
        return

    raise HostnameMismatchError(
        f"certificate is valid for {', '.join(n for n in names if n) or 'no names'}, "
        f"not {hostname}"
    )
