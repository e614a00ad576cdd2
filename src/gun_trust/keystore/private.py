"""Persistence of private key blobs under the key namespace."""

import logging
import os
from pathlib import Path

from ..core.errors import StorageError
from .namespace import KEY_EXTENSION

logger = logging.getLogger(__name__)

# Path segments that would not scan back to the same GUN
RESERVED_SEGMENTS = ("", ".", "..")


class PrivateKeyStore:
    """Writes key blobs to <root>/<gun>/<fingerprint>.key.

    The blob is opaque here; callers decide how the key is encoded.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def key_path(self, gun: str, fingerprint: str) -> Path:
        """Path a key for (gun, fingerprint) is stored at.

        Each "/" separated GUN segment becomes one directory level, so the
        scanner decodes the path back to the same GUN.

        Args:
            gun: Global Unique Name the key belongs to
            fingerprint: Fingerprint of the matching certificate

        Returns:
            Key file path below the root

        Raises:
            StorageError: If the GUN has empty, "." or ".." segments, or
                the path would leave the root
        """
        segments = gun.split("/")
        if "\0" in gun or any(s in RESERVED_SEGMENTS for s in segments):
            raise StorageError(f"Invalid GUN for key storage: {gun!r}")
        if (
            fingerprint in RESERVED_SEGMENTS
            or "/" in fingerprint
            or "\0" in fingerprint
        ):
            raise StorageError(f"Invalid key fingerprint: {fingerprint!r}")

        path = self.root.joinpath(*segments) / (fingerprint + KEY_EXTENSION)
        try:
            inside = path.resolve().is_relative_to(self.root.resolve())
        except (OSError, RuntimeError) as e:
            raise StorageError(f"Failed to resolve {path}: {e}") from e
        if not inside:
            raise StorageError(f"Key path for {gun!r} leaves {self.root}")
        return path

    def save_key(self, gun: str, fingerprint: str, key_bytes: bytes) -> Path:
        """Store a key blob, readable only by the owner.

        Args:
            gun: Global Unique Name the key belongs to
            fingerprint: Fingerprint of the matching certificate
            key_bytes: Encoded private key

        Returns:
            Path the key was written to

        Raises:
            StorageError: If the key path is invalid or cannot be written
        """
        path = self.key_path(gun, fingerprint)
        try:
            path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as f:
                f.write(key_bytes)
        except OSError as e:
            raise StorageError(f"Failed to write private key {path}: {e}") from e

        logger.info(f"Stored private key {fingerprint} for {gun}")
        return path

    def delete_key(self, gun: str, fingerprint: str) -> None:
        """Remove a stored key blob; a missing key is not an error."""
        path = self.key_path(gun, fingerprint)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove private key {path}: {e}") from e

        logger.info(f"Removed private key {fingerprint} for {gun}")
