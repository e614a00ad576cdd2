"""Key namespace scanning.

Private keys live under a root directory that mirrors the GUN::

    <root>/docker.io/library/ubuntu/<fingerprint>.key

Scanning the root recovers one (GUN, fingerprint) pair per key file. The
directory walk is injected, so decoding can be exercised against a
virtual listing.
"""

import logging
import os
from typing import Callable, Iterable, Iterator, NamedTuple, Optional

from ..core.models import KeyNamespaceEntry

logger = logging.getLogger(__name__)

KEY_EXTENSION = ".key"


class WalkEntry(NamedTuple):
    """One node reported by a directory walker."""

    path: str
    is_dir: bool
    error: Optional[OSError] = None


Walker = Callable[[str], Iterable[WalkEntry]]


def walk_directory(root: str) -> Iterator[WalkEntry]:
    """Walk a real directory tree depth first.

    Errors never escape: an unreadable directory or entry is reported as a
    WalkEntry carrying the error and its subtree is not descended into.

    Args:
        root: Directory to walk

    Yields:
        WalkEntry for every file and directory below root
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        yield WalkEntry(path=root, is_dir=True, error=e)
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            yield WalkEntry(path=entry.path, is_dir=False, error=e)
            continue

        yield WalkEntry(path=entry.path, is_dir=is_dir)
        if is_dir:
            yield from walk_directory(entry.path)


def decode_key_path(root: str, path: str) -> KeyNamespaceEntry:
    """Recover the (GUN, fingerprint) pair encoded in a key file path.

    Args:
        root: Namespace root the path was found under
        path: Path of a file ending in KEY_EXTENSION

    Returns:
        KeyNamespaceEntry; the GUN is empty for keys stored at the root
    """
    if path.endswith(KEY_EXTENSION):
        path = path[: -len(KEY_EXTENSION)]
    if path.startswith(root):
        path = path[len(root) :]
    path = path.lstrip(os.sep + "/")

    gun, _, fingerprint = path.rpartition(os.sep)
    if os.sep != "/":
        gun = gun.replace(os.sep, "/")
    return KeyNamespaceEntry(gun=gun, fingerprint=fingerprint)


class KeyNamespaceScanner:
    """Enumerates the keys stored under a private key root.

    Each iteration walks the tree again, so the scanner can be reused.
    """

    def __init__(self, root: str | os.PathLike, walker: Walker = walk_directory):
        """Initialize scanner.

        Args:
            root: Private key root directory
            walker: Directory walker (default: real filesystem)
        """
        self.root = os.fspath(root)
        self.walker = walker

    def scan(self) -> Iterator[KeyNamespaceEntry]:
        """Lazily yield every key found under the root."""
        for entry in self.walker(self.root):
            if entry.error is not None:
                logger.debug(f"Skipping {entry.path}: {entry.error}")
                continue
            if entry.is_dir:
                continue
            if not os.path.basename(entry.path).endswith(KEY_EXTENSION):
                continue
            yield decode_key_path(self.root, entry.path)

    def __iter__(self) -> Iterator[KeyNamespaceEntry]:
        return self.scan()
