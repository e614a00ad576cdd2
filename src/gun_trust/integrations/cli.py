"""Command line integration for gun-trust."""

import functools
import logging
from pathlib import Path
from typing import Optional

import click

from ..core.config import KeysConfig
from ..core.crypto import fingerprint_certificate, private_key_to_bytes
from ..core.errors import GunTrustError, NotFoundError
from ..core.models import CertificateSummary
from ..issuer import generate_certificate
from ..keystore import KeyNamespaceScanner, PrivateKeyStore
from ..trust import TrustStore, fetch_certificate, trust_certificate

logger = logging.getLogger(__name__)


class KeysContext:
    """Stores built from configuration, shared by the keys commands."""

    def __init__(self, config: KeysConfig):
        self.config = config
        self._trust_store: Optional[TrustStore] = None

    @property
    def trust_store(self) -> TrustStore:
        if self._trust_store is None:
            self._trust_store = TrustStore(self.config.trust_dir)
        return self._trust_store

    @property
    def scanner(self) -> KeyNamespaceScanner:
        return KeyNamespaceScanner(self.config.private_dir)

    @property
    def private_keys(self) -> PrivateKeyStore:
        return PrivateKeyStore(self.config.private_dir)

    def fetch(self, url: str):
        return fetch_certificate(url, timeout=self.config.fetch_timeout)


pass_keys = click.make_pass_decorator(KeysContext)


def reports_errors(func):
    """Turn gun-trust errors into a failed command."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GunTrustError as e:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(e)) from e

    return wrapper


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file.",
)
@click.option(
    "--trust-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of trusted certificates.",
)
@click.option(
    "--private-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root of the private key namespace.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
@reports_errors
def main(
    ctx: click.Context,
    config_path: Optional[Path],
    trust_dir: Optional[Path],
    private_dir: Optional[Path],
    verbose: bool,
):
    """Manage trusted certificates and signing keys."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = KeysConfig.from_file(config_path)
    overrides = {}
    if trust_dir is not None:
        overrides["trust_dir"] = trust_dir.expanduser()
    if private_dir is not None:
        overrides["private_dir"] = private_dir.expanduser()
    if overrides:
        config = config.model_copy(update=overrides)

    ctx.obj = KeysContext(config)


@main.group(invoke_without_command=True)
@click.pass_context
def keys(ctx: click.Context):
    """Operates on signature keys and trusted certificate authorities."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_keys)


@keys.command("list")
@pass_keys
@reports_errors
def list_keys(obj: KeysContext):
    """Lists trusted certificate authorities and signing keys."""
    click.echo("# Trusted Root keys: ")
    for certificate in obj.trust_store.get_certificates():
        click.echo(str(CertificateSummary.from_certificate(certificate)))

    click.echo("")
    click.echo("# Signing keys: ")
    for entry in obj.scanner:
        click.echo(str(entry))


@keys.command("trust")
@click.argument("gun")
@click.argument("location")
@pass_keys
@reports_errors
def trust(obj: KeysContext, gun: str, location: str):
    """Trusts a new certificate for a specific GUN.

    LOCATION is a URL or a local certificate file.
    """
    certificates = trust_certificate(
        obj.trust_store, gun, location, fetcher=obj.fetch
    )
    for certificate in certificates:
        click.echo(f"Adding: {CertificateSummary.from_certificate(certificate)}")


@keys.command("remove")
@click.argument("fingerprint")
@pass_keys
@reports_errors
def remove(obj: KeysContext, fingerprint: str):
    """Removes trust from a specific certificate authority or certificate."""
    try:
        certificate = obj.trust_store.get_certificate_by_fingerprint(fingerprint)
    except NotFoundError as e:
        raise NotFoundError("certificate not found in any store") from e

    click.echo(f"Removing: {CertificateSummary.from_certificate(certificate)}")
    obj.trust_store.remove_cert(certificate)


@keys.command("generate")
@click.argument("gun")
@pass_keys
@reports_errors
def generate(obj: KeysContext, gun: str):
    """Generates a new key for a specific GUN."""
    private_key, certificate = generate_certificate(gun, obj.config.organization)
    fingerprint = fingerprint_certificate(certificate)

    # A trusted certificate always has its key on disk
    private_keys = obj.private_keys
    private_keys.save_key(gun, fingerprint, private_key_to_bytes(private_key))
    try:
        obj.trust_store.add_cert(certificate)
    except GunTrustError:
        private_keys.delete_key(gun, fingerprint)
        raise
    click.echo(f"Generated new keypair with ID: {fingerprint}")


if __name__ == "__main__":
    main()
