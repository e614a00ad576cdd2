"""Trust store for managing trusted certificate authorities."""

import logging
import os
import tempfile
from pathlib import Path

from cryptography import x509

from ..core.crypto import certificate_to_pem, fingerprint_certificate, load_certificates
from ..core.errors import CertificateParseError, NotFoundError, StorageError
from ..core.models import common_name

logger = logging.getLogger(__name__)

CERT_EXTENSION = ".crt"


class TrustStore:
    """Trusted CA certificates, keyed by fingerprint and backed by a directory.

    Every ``*.crt`` file in the directory is loaded on construction; a file
    may hold a bundle of several certificates. Each mutation is written to
    disk before the call returns.
    """

    def __init__(self, directory: str | Path):
        """Initialize the store and load existing certificates.

        Args:
            directory: Directory holding the certificate files

        Raises:
            StorageError: If the directory or a certificate file cannot be read
        """
        self.directory = Path(directory)
        self._certs: dict[str, x509.Certificate] = {}
        # The same certificate may sit in more than one file
        self._paths: dict[str, set[Path]] = {}
        self._load()

    def _load(self) -> None:
        if not self.directory.exists():
            return

        try:
            paths = sorted(self.directory.glob(f"*{CERT_EXTENSION}"))
        except OSError as e:
            raise StorageError(f"Failed to list {self.directory}: {e}") from e

        for path in paths:
            for certificate in self._read_file(path):
                fingerprint = fingerprint_certificate(certificate)
                self._certs[fingerprint] = certificate
                self._paths.setdefault(fingerprint, set()).add(path)

        logger.debug(f"Loaded {len(self._certs)} certificates from {self.directory}")

    @staticmethod
    def _read_file(path: Path) -> list[x509.Certificate]:
        try:
            return load_certificates(path.read_bytes())
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e
        except CertificateParseError as e:
            raise StorageError(f"Corrupt certificate file {path}: {e}") from e

    def _write_file(self, path: Path, certificates: list[x509.Certificate]) -> None:
        """Atomically replace path with the given certificates."""
        data = b"".join(certificate_to_pem(c) for c in certificates)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def _file_contents(self, path: Path) -> list[str]:
        """Fingerprints currently stored in path, in fingerprint order."""
        return sorted(fp for fp, paths in self._paths.items() if path in paths)

    def add_cert(self, certificate: x509.Certificate) -> str:
        """Add a trusted certificate.

        Adding a certificate that is already trusted changes nothing.

        Args:
            certificate: Certificate to trust

        Returns:
            Fingerprint the certificate is stored under

        Raises:
            StorageError: If the certificate cannot be written
        """
        fingerprint = fingerprint_certificate(certificate)
        if fingerprint in self._certs:
            logger.debug(f"Certificate {fingerprint} already trusted")
            return fingerprint

        path = self.directory / f"{fingerprint}{CERT_EXTENSION}"
        self._write_file(path, [certificate])
        self._certs[fingerprint] = certificate
        self._paths[fingerprint] = {path}
        logger.info(f"Trusted {common_name(certificate)} {fingerprint}")
        return fingerprint

    def add_cert_from_file(self, path: str | Path) -> list[x509.Certificate]:
        """Add every certificate found in a PEM or DER file.

        Args:
            path: Certificate file

        Returns:
            Certificates read from the file

        Raises:
            StorageError: If the file cannot be read or parsed
        """
        certificates = self._read_file(Path(path))
        for certificate in certificates:
            self.add_cert(certificate)
        return certificates

    def remove_cert(self, certificate: x509.Certificate) -> None:
        """Remove trust from a certificate.

        Bundle files holding other certificates are rewritten without it.

        Args:
            certificate: Certificate to remove

        Raises:
            NotFoundError: If the certificate is not in the store
            StorageError: If a backing file cannot be updated
        """
        fingerprint = fingerprint_certificate(certificate)
        if fingerprint not in self._certs:
            raise NotFoundError(f"Certificate not found: {fingerprint}")

        for path in sorted(self._paths[fingerprint]):
            remaining = [fp for fp in self._file_contents(path) if fp != fingerprint]
            if remaining:
                self._write_file(path, [self._certs[fp] for fp in remaining])
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to remove {path}: {e}") from e

        del self._certs[fingerprint]
        del self._paths[fingerprint]
        logger.info(f"Removed trust from {common_name(certificate)} {fingerprint}")

    def get_certificate_by_fingerprint(self, fingerprint: str) -> x509.Certificate:
        """Look up a certificate by exact fingerprint.

        Args:
            fingerprint: Hex SHA-256 fingerprint

        Returns:
            The trusted certificate

        Raises:
            NotFoundError: If no certificate has that fingerprint
        """
        try:
            return self._certs[fingerprint]
        except KeyError:
            raise NotFoundError(f"Certificate not found: {fingerprint}") from None

    def get_certificates(self) -> list[x509.Certificate]:
        """List all trusted certificates, ordered by common name then fingerprint."""
        ordered = sorted(
            self._certs.items(), key=lambda item: (common_name(item[1]), item[0])
        )
        return [certificate for _, certificate in ordered]

    def __len__(self) -> int:
        return len(self._certs)
