"""CLI entry point for credential-resolver.

Invoked as::

    credential-resolver [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m credential_resolver.cli.main

Commands
--------
resolve   Resolve one or more DIDs to DID documents
convert   Re-frame an accumulator or blob identifier for another chain
types     Show runtime type definitions for a spec version
keygen    Generate a keypair and its did:key
version   Show version information
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Optional

import click
from aiohttp import ClientSession
from rich.console import Console
from rich.table import Table

from credential_resolver import __version__
from credential_resolver.config import ResolverSettings
from credential_resolver.errors import CredentialResolverError

console = Console()
err_console = Console(stderr=True)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="credential-resolver")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (defaults to CREDENTIAL_RESOLVER_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Resolve DIDs, convert chain identifiers and inspect runtime types."""
    settings = ResolverSettings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    console.print(f"[bold]credential-resolver[/bold] v{__version__}")


# ------------------------------------------------------------------
# resolve
# ------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("identifiers", nargs=-1, required=True)
@click.option(
    "--universal-resolver",
    "universal_resolver_url",
    default=None,
    help="Universal resolver base URL used for methods without a local resolver.",
)
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
@click.option("--no-web", is_flag=True, default=False, help="Do not register did:web.")
@click.pass_obj
def resolve_command(
    settings: ResolverSettings,
    identifiers: tuple[str, ...],
    universal_resolver_url: Optional[str],
    timeout: Optional[float],
    no_web: bool,
) -> None:
    """Resolve each of IDENTIFIERS and print its DID document as JSON."""
    overrides: dict[str, Any] = {}
    if universal_resolver_url is not None:
        overrides["universal_resolver_url"] = universal_resolver_url
    if timeout is not None:
        overrides["http_timeout"] = timeout
    if no_web:
        overrides["enable_did_web"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)

    results = asyncio.run(_resolve_all(settings, identifiers))

    failed = False
    for identifier, outcome in results:
        if isinstance(outcome, CredentialResolverError):
            err_console.print(f"[red]Error:[/red] {outcome}")
            failed = True
        else:
            if len(identifiers) > 1:
                console.print(f"[bold]{identifier}[/bold]")
            click.echo(json.dumps(outcome, indent=2))
    if failed:
        sys.exit(1)


async def _resolve_all(
    settings: ResolverSettings, identifiers: tuple[str, ...]
) -> list[tuple[str, Any]]:
    from credential_resolver.resolver import create_default_registry

    async with ClientSession() as session:
        registry = create_default_registry(settings, session=session)
        outcomes = await asyncio.gather(
            *(registry.resolve(identifier) for identifier in identifiers),
            return_exceptions=True,
        )
    results: list[tuple[str, Any]] = []
    for identifier, outcome in zip(identifiers, outcomes):
        if isinstance(outcome, BaseException) and not isinstance(
            outcome, CredentialResolverError
        ):
            raise outcome
        results.append((identifier, outcome))
    return results


# ------------------------------------------------------------------
# convert
# ------------------------------------------------------------------


@cli.command(name="convert")
@click.argument("identifier")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice(["dock", "dock-ss58", "cheqd-testnet", "cheqd-mainnet"]),
    help="Chain tag to convert to.",
)
@click.option("--show-payload", is_flag=True, default=False, help="Also print the payload hex.")
def convert_command(identifier: str, target: str, show_payload: bool) -> None:
    """Convert a qualified IDENTIFIER (e.g. accumulator:dock:0x...) to another chain."""
    from credential_resolver.codec import ResourceIdentifier, convert

    try:
        source = ResourceIdentifier.parse(identifier)
        converted = convert(source, target)
    except CredentialResolverError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    console.print(str(converted), highlight=False, soft_wrap=True)
    if show_payload:
        console.print(f"  Payload: 0x{converted.payload.hex()}", highlight=False, soft_wrap=True)


# ------------------------------------------------------------------
# types
# ------------------------------------------------------------------


@cli.command(name="types")
@click.argument("spec_name", required=False)
@click.argument("spec_version", type=int, required=False)
@click.option(
    "--bundle",
    "bundle_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="typesBundle JSON file (defaults to CREDENTIAL_RESOLVER_TYPES_BUNDLE_PATH or built-in).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_obj
def types_command(
    settings: ResolverSettings,
    spec_name: Optional[str],
    spec_version: Optional[int],
    bundle_path: Optional[str],
    as_json: bool,
) -> None:
    """Show the types of SPEC_NAME at SPEC_VERSION.

    Without arguments, list the known spec names and their version ranges.
    """
    from credential_resolver.runtime import load_type_registry, thaw

    try:
        registry = load_type_registry(bundle_path or settings.types_bundle_path)
    except (CredentialResolverError, OSError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if spec_name is None:
        table = Table(title="Runtime specs", show_header=True)
        table.add_column("Spec", style="bold")
        table.add_column("Version ranges")
        for name in registry.spec_names():
            table.add_row(name, ", ".join(str(r) for r in registry.ranges(name)))
        console.print(table)
        return

    if spec_version is None:
        err_console.print("[red]Error:[/red] SPEC_VERSION is required with SPEC_NAME.")
        sys.exit(2)

    try:
        types = thaw(registry.types_for(spec_name, spec_version))
    except CredentialResolverError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(types, indent=2))
        return

    table = Table(title=f"{spec_name} @ {spec_version}", show_header=True)
    table.add_column("Type", style="bold")
    table.add_column("Definition")
    for type_name, definition in sorted(types.items()):
        rendered = definition if isinstance(definition, str) else json.dumps(definition)
        table.add_row(type_name, rendered)
    console.print(table)


# ------------------------------------------------------------------
# keygen
# ------------------------------------------------------------------


@cli.command(name="keygen")
@click.option(
    "--key-type",
    type=click.Choice(["ed25519", "secp256k1"]),
    default="ed25519",
    show_default=True,
    help="Key algorithm.",
)
@click.option(
    "--show-private",
    is_flag=True,
    default=False,
    help="Also print the private key hex.",
)
def keygen_command(key_type: str, show_private: bool) -> None:
    """Generate a keypair and print its did:key identifier."""
    from credential_resolver.did import KeyManager
    from credential_resolver.resolver import did_key_from_public_key

    private_bytes, public_bytes = KeyManager().generate_keypair(key_type)
    did = did_key_from_public_key(public_bytes, key_type)

    console.print(f"[green]Generated[/green] {key_type} key")
    console.print(f"  DID:         {did}", highlight=False, soft_wrap=True)
    console.print(f"  Public key:  {public_bytes.hex()}", highlight=False, soft_wrap=True)
    if show_private:
        console.print(f"  Private key: {private_bytes.hex()}", highlight=False, soft_wrap=True)


if __name__ == "__main__":
    cli()
