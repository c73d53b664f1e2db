"""
zsh-etc — CLI entrypoint.

Usage:
    zshetc --help
    zshetc config check
    zshetc render interactive-rc
    zshetc plan --root /
    zshetc apply --root /
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from zshetc import __version__
from zshetc.core.data.known_hashes import LOGICAL_NAMES
from zshetc.core.observability.logging_config import setup_logging

_DECISION_STYLE = {
    "write": ("✎", "green"),
    "identical": ("✓", "white"),
    "accepted-stale": ("⊘", "yellow"),
    "conflict": ("✗", "red"),
}


@click.group()
@click.version_option(version=__version__, prog_name="zshetc")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to zsh.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """zsh-etc — generate the system-wide zsh startup files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("ZSHETC_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("ZSHETC_LOG_FILE"),
        log_file_level=os.environ.get("ZSHETC_LOG_FILE_LEVEL"),
    )


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate zsh.yml configuration."""
    from zshetc.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.options is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Config:    {result.config_path}")
        click.echo(f"   Enabled:   {result.options.enable}")
        click.echo(f"   Variables: {len(result.options.variables)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


@cli.command()
@click.argument("names", nargs=-1, type=click.Choice(LOGICAL_NAMES))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def render(ctx: click.Context, names: tuple[str, ...], as_json: bool) -> None:
    """Print generated file content without writing anything.

    Examples:

        zshetc render

        zshetc render interactive-rc
    """
    from zshetc.core.use_cases.render import render_files

    result = render_files(config_path=ctx.obj.get("config_path"))

    if as_json:
        data = result.to_dict()
        if names:
            data["files"] = {n: f for n, f in data["files"].items() if n in names}
        click.echo(json.dumps(data, indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not result.enabled:
        click.secho("zsh is disabled — nothing to render.", fg="yellow", err=True)
        return

    selected = [result.files[n] for n in (names or result.files)]
    for i, generated in enumerate(selected):
        if len(selected) > 1:
            if i:
                click.echo()
            click.secho(f"==> {generated.path} <==", fg="cyan", bold=True)
        click.echo(generated.content, nl=False)


def _run_apply(ctx: click.Context, dry_run: bool, root: str, keep_stale: bool,
               state_file: str | None, as_json: bool) -> None:
    from zshetc.core.use_cases.apply import apply_files

    result = apply_files(
        config_path=ctx.obj.get("config_path"),
        root=Path(root),
        dry_run=dry_run,
        rewrite_stale=not keep_stale,
        ledger_path=Path(state_file) if state_file else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.enabled:
        click.secho("zsh is disabled — nothing to do.", fg="yellow")
        return

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        mode_label = "[dry-run] " if dry_run else ""
        click.secho(f"\n⚡ {mode_label}zsh startup files → {result.root}", fg="cyan", bold=True)
        click.echo()

    for outcome in result.outcomes:
        icon, color = _DECISION_STYLE[outcome.decision.value]
        if outcome.error:
            icon, color = "✗", "red"
        click.secho(f"   {icon} {outcome.name:<15}", fg=color, nl=False)
        label = outcome.decision.value
        if outcome.written:
            label = "written"
        elif outcome.decision.writes and dry_run:
            label = "would write"
        click.echo(f" {label:<15} {outcome.path}")
        if outcome.error:
            click.echo(f"     │ {outcome.error}")
        elif ctx.obj.get("verbose") and outcome.on_disk_sha256:
            click.echo(f"     │ on disk: {outcome.on_disk_sha256}")

    if result.conflicts:
        click.echo()
        click.secho("   ⚠️  Not overwritten (unrecognised content):", fg="yellow")
        for outcome in result.conflicts:
            click.echo(f"     • {outcome.path}")
        click.echo("     Move these files aside, or add their digest to knownHashes, and re-run.")

    click.echo()
    if not result.ok:
        sys.exit(1)


_apply_options = [
    click.option("--root", default="/", type=click.Path(file_okay=False),
                 help="Directory the /etc paths are placed under."),
    click.option("--keep-stale", is_flag=True,
                 help="Leave known predecessor files in place instead of replacing them."),
    click.option("--state-file", default=None, type=click.Path(dir_okay=False),
                 help="Write ledger path (default: .state/written.json beside zsh.yml)."),
    click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."),
]


def _with_apply_options(func):
    for option in reversed(_apply_options):
        func = option(func)
    return func


@cli.command()
@_with_apply_options
@click.pass_context
def plan(ctx: click.Context, root: str, keep_stale: bool, state_file: str | None,
         as_json: bool) -> None:
    """Show what apply would do, without writing."""
    _run_apply(ctx, True, root, keep_stale, state_file, as_json)


@cli.command()
@_with_apply_options
@click.pass_context
def apply(ctx: click.Context, root: str, keep_stale: bool, state_file: str | None,
          as_json: bool) -> None:
    """Write the zsh startup files, refusing to clobber local edits."""
    _run_apply(ctx, False, root, keep_stale, state_file, as_json)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def packages(ctx: click.Context, as_json: bool) -> None:
    """List the packages the enabled options rely on."""
    from zshetc.core.services.generators.zsh import required_packages
    from zshetc.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))
    if not result.valid or result.options is None:
        for err in result.errors:
            click.secho(f"❌ {err}", fg="red")
        sys.exit(1)

    names = required_packages(result.options)
    if as_json:
        click.echo(json.dumps(names))
        return
    for name in names:
        click.echo(name)


# ── Register sub-command groups from zshetc/ui/cli/ ───────────────

from zshetc.ui.cli.hashes import hashes  # noqa: E402

cli.add_command(hashes)


if __name__ == "__main__":
    cli()
