"""
CLI commands for the known-digest registry.

Thin wrappers over ``zshetc.core.data.known_hashes`` and
``zshetc.core.services.drift_guard``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from zshetc.core.data.known_hashes import LOGICAL_NAMES


@click.group()
def hashes() -> None:
    """Known digests — list accepted predecessors, hash files."""


@hashes.command("list")
@click.argument("name", required=False, type=click.Choice(LOGICAL_NAMES))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_hashes(ctx: click.Context, name: str | None, as_json: bool) -> None:
    """List accepted digests (built-in plus zsh.yml knownHashes)."""
    from zshetc.core.config.loader import ConfigError, find_config_file, load_config
    from zshetc.core.data.known_hashes import known_hashes

    extra: dict[str, list[str]] = {}
    config_path: Path | None = ctx.obj.get("config_path") or find_config_file()
    if config_path is not None:
        try:
            extra = load_config(config_path).known_hashes
        except ConfigError as e:
            click.secho(f"❌ {e}", fg="red")
            sys.exit(1)

    names = [name] if name else list(LOGICAL_NAMES)
    table = {n: known_hashes(n, extra.get(n, [])) for n in names}

    if as_json:
        click.echo(json.dumps(table, indent=2))
        return

    for n, digests in table.items():
        click.secho(f"🔑 {n} ({len(digests)})", fg="cyan", bold=True)
        for digest in digests:
            click.echo(f"   {digest}")
    click.echo()


@hashes.command("file")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def hash_file(paths: tuple[str, ...]) -> None:
    """Print the sha256 of files, for registering them in knownHashes."""
    from zshetc.core.services.drift_guard import sha256_hex

    for p in paths:
        click.echo(f"{sha256_hex(Path(p).read_bytes())}  {p}")
