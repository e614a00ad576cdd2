"""Private key namespace."""

from .namespace import (
    KEY_EXTENSION,
    KeyNamespaceScanner,
    WalkEntry,
    decode_key_path,
    walk_directory,
)
from .private import PrivateKeyStore

__all__ = [
    "KEY_EXTENSION",
    "KeyNamespaceScanner",
    "WalkEntry",
    "decode_key_path",
    "walk_directory",
    "PrivateKeyStore",
]
