#!/usr/bin/env python3
"""
Basic example demonstrating the gun-trust workflow:
1. Generate a signing key and certificate for a GUN
2. Trust a CA certificate from a local file
3. List trusted certificates and signing keys
4. Remove trust by fingerprint
"""

import tempfile
from pathlib import Path

from gun_trust import (
    CertificateSummary,
    KeyNamespaceScanner,
    PrivateKeyStore,
    TrustStore,
    fingerprint_certificate,
    generate_certificate,
    private_key_to_bytes,
    trust_certificate,
)
from gun_trust.core.crypto import certificate_to_pem
from gun_trust.core.errors import InvalidSourceError


def main():
    print("=== gun-trust - Basic Example ===\n")

    workdir = Path(tempfile.mkdtemp(prefix="gun-trust-"))
    store = TrustStore(workdir / "trusted_certificates")
    private_keys = PrivateKeyStore(workdir / "private")

    # ============================================================================
    # STEP 1: Generate a signing key for a GUN
    # ============================================================================
    print("1. Generating signing key...")
    gun = "docker.io/library/ubuntu"
    private_key, certificate = generate_certificate(gun, "Example Org")
    fingerprint = store.add_cert(certificate)
    private_keys.save_key(gun, fingerprint, private_key_to_bytes(private_key))
    print(f"   ✓ Generated new keypair with ID: {fingerprint}\n")

    # ============================================================================
    # STEP 2: Trust a CA certificate from a local file
    # ============================================================================
    print("2. Trusting a CA from a local file...")
    _, ca_certificate = generate_certificate("ca.example.com", "Example CA")
    ca_path = workdir / "root-ca.crt"
    ca_path.write_bytes(certificate_to_pem(ca_certificate))
    for added in trust_certificate(store, "example.com/foo", str(ca_path)):
        print(f"   ✓ Adding: {CertificateSummary.from_certificate(added)}")

    try:
        trust_certificate(store, "example.com/foo", "not-a-url-or-path")
    except InvalidSourceError as e:
        print(f"   ✗ Rejected: {e}\n")

    # ============================================================================
    # STEP 3: List everything
    # ============================================================================
    print("3. Listing...")
    print("# Trusted Root keys: ")
    for trusted in store.get_certificates():
        print(CertificateSummary.from_certificate(trusted))
    print("")
    print("# Signing keys: ")
    for entry in KeyNamespaceScanner(workdir / "private"):
        print(entry)
    print()

    # ============================================================================
    # STEP 4: Remove trust
    # ============================================================================
    print("4. Removing the CA...")
    ca = store.get_certificate_by_fingerprint(fingerprint_certificate(ca_certificate))
    store.remove_cert(ca)
    print(f"   ✓ {len(store)} certificate(s) remain trusted")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
