"""Tests for the key namespace scanner."""

import os

import pytest

from gun_trust import KeyNamespaceEntry, KeyNamespaceScanner, PrivateKeyStore
from gun_trust.core.errors import StorageError
from gun_trust.keystore import WalkEntry, decode_key_path, walk_directory

FINGERPRINT = "ab" * 32


def virtual_walker(entries):
    """Walker replaying a fixed listing."""

    def walk(root):
        return iter(entries)

    return walk


def test_decode_nested_gun():
    """Directory segments below the root form the GUN."""
    path = f"/keys/docker.io/library/ubuntu/{FINGERPRINT}.key"

    assert decode_key_path("/keys", path) == KeyNamespaceEntry(
        gun="docker.io/library/ubuntu", fingerprint=FINGERPRINT
    )


def test_decode_root_with_trailing_separator():
    """A trailing separator on the root does not eat the GUN."""
    path = f"/keys/example.com/foo/{FINGERPRINT}.key"

    assert decode_key_path("/keys/", path).gun == "example.com/foo"


def test_decode_key_at_root_is_ungrouped():
    """A key directly under the root has an empty GUN."""
    entry = decode_key_path("/keys", f"/keys/{FINGERPRINT}.key")

    assert entry.gun == ""
    assert entry.fingerprint == FINGERPRINT


def test_scan_virtual_listing():
    """Only key files are yielded; directories and other files are skipped."""
    walker = virtual_walker(
        [
            WalkEntry("/keys/example.com", is_dir=True),
            WalkEntry("/keys/example.com/foo", is_dir=True),
            WalkEntry(f"/keys/example.com/foo/{FINGERPRINT}.key", is_dir=False),
            WalkEntry("/keys/example.com/foo/notes.txt", is_dir=False),
            WalkEntry("/keys/example.com/dir.key", is_dir=True),
        ]
    )
    scanner = KeyNamespaceScanner("/keys", walker=walker)

    assert list(scanner) == [
        KeyNamespaceEntry(gun="example.com/foo", fingerprint=FINGERPRINT)
    ]


def test_scan_skips_entries_with_errors():
    """A failing entry is skipped without aborting the enumeration."""
    walker = virtual_walker(
        [
            WalkEntry("/keys/broken.key", is_dir=False, error=PermissionError("denied")),
            WalkEntry("/keys/unreadable", is_dir=True, error=OSError("io error")),
            WalkEntry(f"/keys/ok/{FINGERPRINT}.key", is_dir=False),
        ]
    )
    scanner = KeyNamespaceScanner("/keys", walker=walker)

    assert [e.gun for e in scanner] == ["ok"]


def test_scan_is_lazy():
    """Entries are produced as the walk advances."""
    consumed = []

    def walk(root):
        for name in ("a", "b"):
            consumed.append(name)
            yield WalkEntry(f"/keys/{name}/{FINGERPRINT}.key", is_dir=False)

    scan = KeyNamespaceScanner("/keys", walker=walk).scan()

    assert next(scan).gun == "a"
    assert consumed == ["a"]


def test_namespace_layout_round_trip(tmp_path):
    """A key written under root/<gun>/<fingerprint>.key scans back exactly."""
    gun = "docker.io/library/ubuntu"
    key_path = tmp_path.joinpath(*gun.split("/")) / f"{FINGERPRINT}.key"
    key_path.parent.mkdir(parents=True)
    key_path.write_bytes(b"opaque")

    entries = list(KeyNamespaceScanner(tmp_path))

    assert entries == [KeyNamespaceEntry(gun=gun, fingerprint=FINGERPRINT)]


def test_scan_is_restartable(tmp_path):
    """Each scan walks the tree again."""
    scanner = KeyNamespaceScanner(tmp_path)
    assert list(scanner) == []

    (tmp_path / f"{FINGERPRINT}.key").write_bytes(b"opaque")

    assert list(scanner) == [KeyNamespaceEntry(gun="", fingerprint=FINGERPRINT)]
    assert list(scanner) == list(scanner.scan())


def test_scan_missing_root(tmp_path):
    """A missing root yields nothing."""
    assert list(KeyNamespaceScanner(tmp_path / "missing")) == []


def test_walk_directory_reports_unreadable_root(tmp_path):
    """Walk errors come back as entries instead of exceptions."""
    entries = list(walk_directory(os.fspath(tmp_path / "missing")))

    assert len(entries) == 1
    assert entries[0].error is not None


def test_private_key_store_layout(tmp_path):
    """Stored keys land where the scanner finds them."""
    store = PrivateKeyStore(tmp_path)

    path = store.save_key("example.com/foo", FINGERPRINT, b"secret")

    assert path == tmp_path / "example.com" / "foo" / f"{FINGERPRINT}.key"
    assert path.read_bytes() == b"secret"
    assert path.stat().st_mode & 0o777 == 0o600
    assert list(KeyNamespaceScanner(tmp_path)) == [
        KeyNamespaceEntry(gun="example.com/foo", fingerprint=FINGERPRINT)
    ]


def test_private_key_store_rejects_escaping_gun(tmp_path):
    """A GUN climbing out of the root is refused before anything is written."""
    root = tmp_path / "private"
    store = PrivateKeyStore(root)

    with pytest.raises(StorageError):
        store.save_key("../../outside", FINGERPRINT, b"secret")

    assert not root.exists()
    assert list(tmp_path.rglob("*.key")) == []


@pytest.mark.parametrize(
    "gun",
    ["", "/example.com//foo/", "example.com//foo", "example.com/./foo", "a/../b"],
)
def test_private_key_store_rejects_lossy_gun(tmp_path, gun):
    """GUNs that would not scan back unchanged are refused."""
    store = PrivateKeyStore(tmp_path)

    with pytest.raises(StorageError):
        store.save_key(gun, FINGERPRINT, b"secret")

    assert list(KeyNamespaceScanner(tmp_path)) == []


@pytest.mark.parametrize("fingerprint", ["", "..", "ab/cd"])
def test_private_key_store_rejects_bad_fingerprint(tmp_path, fingerprint):
    """The fingerprint must be a single file name."""
    with pytest.raises(StorageError):
        PrivateKeyStore(tmp_path).key_path("example.com", fingerprint)


def test_private_key_store_rejects_symlink_escape(tmp_path):
    """A symlinked GUN directory pointing outside the root is refused."""
    root = tmp_path / "private"
    outside = tmp_path / "outside"
    root.mkdir()
    outside.mkdir()
    (root / "example.com").symlink_to(outside, target_is_directory=True)

    with pytest.raises(StorageError):
        PrivateKeyStore(root).save_key("example.com/foo", FINGERPRINT, b"secret")

    assert list(outside.iterdir()) == []


def test_private_key_store_delete(tmp_path):
    """Deleting a key removes its file; deleting twice is fine."""
    store = PrivateKeyStore(tmp_path)
    path = store.save_key("example.com/foo", FINGERPRINT, b"secret")

    store.delete_key("example.com/foo", FINGERPRINT)
    store.delete_key("example.com/foo", FINGERPRINT)

    assert not path.exists()
    assert list(KeyNamespaceScanner(tmp_path)) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
