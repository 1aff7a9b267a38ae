"""
mysys — CLI entrypoint.

Usage:
    mysys --help
    mysys install-basics
    mysys status --group tools
    mysys config show
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from mysys import __version__
from mysys.core.observability.logging_config import (
    FILE_ENV_VAR,
    FILE_LEVEL_ENV_VAR,
    resolve_level,
    setup_logging,
)

_RESULT_MARKS = {
    "already_present": ("✓", "green", "already present"),
    "installed": ("+", "cyan", "installed"),
    "failed": ("✗", "red", "failed"),
}


@click.group()
@click.version_option(version=__version__, prog_name="mysys")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--home",
    "home",
    type=click.Path(file_okay=False),
    default=None,
    help="mysys home folder (default: $MYSYS_HOME or ~/.mysys).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    home: str | None,
) -> None:
    """mysys — bootstrap this machine to its baseline."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["home"] = Path(home) if home else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ),
        log_file=os.environ.get(FILE_ENV_VAR),
        log_file_level=os.environ.get(FILE_LEVEL_ENV_VAR),
    )


def _run_install(ctx: click.Context, group: str, as_json: bool, mock: bool) -> None:
    """Shared body of the install-* commands."""
    from mysys.core.use_cases.install import install_group

    result = install_group(group, home=ctx.obj.get("home"), mock_mode=mock)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    report = result.report
    quiet = ctx.obj.get("quiet", False)

    if report is not None and not quiet:
        mode_label = "[mock] " if mock else ""
        click.secho(
            f"\n⚡ {mode_label}install-{group} — {result.os_family}",
            fg="cyan",
            bold=True,
        )
        click.echo(f"   Specs: {', '.join(result.specs or []) or '(none)'}")
        click.echo()
        for outcome in report.outcomes:
            mark, color, label = _RESULT_MARKS[outcome.result.value]
            click.secho(f"   {mark} {outcome.package_id:<20}", fg=color, nl=False)
            if outcome.failed:
                click.echo(f" {label} (exit {outcome.exit_code}, {outcome.manager})")
            elif outcome.exit_code is not None:
                timing = f", {outcome.duration_ms}ms" if outcome.duration_ms else ""
                click.echo(f" {label} ({outcome.manager}{timing})")
            else:
                click.echo(f" {label}")

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if report is not None and not quiet:
        click.echo()
        click.secho(
            f"   Result: {len(report.installed)} installed, "
            f"{len(report.already_present)} already present",
            fg="green",
            bold=True,
        )
        click.echo()


@cli.command("install-basics")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--mock", is_flag=True, help="Record installs without running package managers.")
@click.pass_context
def install_basics(ctx: click.Context, as_json: bool, mock: bool) -> None:
    """Install the basic requirements for this OS."""
    from mysys.core.use_cases.install import GROUP_BASICS

    _run_install(ctx, GROUP_BASICS, as_json, mock)


@cli.command("install-tools")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--mock", is_flag=True, help="Record installs without running package managers.")
@click.pass_context
def install_tools(ctx: click.Context, as_json: bool, mock: bool) -> None:
    """Install the desktop tools for this OS."""
    from mysys.core.use_cases.install import GROUP_TOOLS

    _run_install(ctx, GROUP_TOOLS, as_json, mock)


@cli.command()
@click.option("--group", "-g", default="basics", show_default=True, help="Package group.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, group: str, as_json: bool) -> None:
    """Show which packages of a group are present (installs nothing)."""
    from mysys.core.use_cases.status import package_status

    result = package_status(group, home=ctx.obj.get("home"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"\n📦 {group} — {result.os_family}", fg="cyan", bold=True)
    for pkg in result.packages:
        if pkg.present:
            click.secho(f"   ✓ {pkg.package_id}", fg="green")
        else:
            click.secho(f"   ✗ {pkg.package_id} ", fg="red", nl=False)
            click.echo(f"(missing, probe: {pkg.probe})")

    click.echo()
    click.echo(f"   {len(result.present)}/{len(result.packages)} present")
    click.echo()


@cli.command("ssh-key")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def ssh_key(ctx: click.Context, as_json: bool) -> None:
    """Create the default SSH key (~/.ssh/id_rsa) if none exists."""
    from mysys.core.config.loader import ConfigError, load_settings
    from mysys.core.services.ssh_ops import ensure_ssh_key

    try:
        settings = load_settings(ctx.obj.get("home"))
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    result = ensure_ssh_key(settings)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        sys.exit(0 if result["ok"] else 1)

    if not result["ok"]:
        click.secho(f"❌ {result['error']}", fg="red", err=True)
        sys.exit(1)

    if result["created"]:
        click.secho(f"🔑 Created {result['key']}", fg="green")
        if result["added_to_agent"]:
            click.echo("   added to ssh-agent")
    else:
        click.secho(f"✅ {result['key']} already exists", fg="green")


# ── Register sub-command groups from mysys/ui/cli/ ────────────────

from mysys.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
