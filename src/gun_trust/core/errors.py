"""Exception hierarchy for gun-trust."""


class GunTrustError(Exception):
    """Base exception for all gun-trust errors."""

    pass


# Trust store errors
class TrustStoreError(GunTrustError):
    """Base exception for trust store operations."""

    pass


class NotFoundError(TrustStoreError):
    """Lookup or removal target is not in the store."""

    pass


class StorageError(TrustStoreError):
    """Reading or writing the backing storage failed."""

    pass


# Certificate errors
class CertificateError(GunTrustError):
    """Base exception for certificate-related errors."""

    pass


class CertificateParseError(CertificateError):
    """Failed to parse certificate."""

    pass


class HostnameMismatchError(CertificateError):
    """Certificate hostname claim does not match the requested GUN."""

    pass


# Trust source errors
class TrustSourceError(GunTrustError):
    """Base exception for trust addition sources."""

    pass


class InvalidSourceError(TrustSourceError):
    """Location is neither a URL nor an existing file."""

    pass


class CertificateFetchError(TrustSourceError):
    """Retrieving a certificate from a URL failed."""

    pass


# Generation errors
class GenerationError(GunTrustError):
    """A key and certificate could not be generated for the GUN."""

    pass


class EntropyError(GenerationError):
    """Secure random source could not produce a value."""

    pass


# Configuration errors
class ConfigurationError(GunTrustError):
    """Configuration file is missing or malformed."""

    pass
