"""
CLI commands for the variables cascade and the package catalog.

Thin wrappers over ``mysys.core.use_cases.config_check``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def config() -> None:
    """Configuration — show variables, check the package catalog."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--reveal", is_flag=True, help="Show values from the secrets file unredacted.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool, reveal: bool) -> None:
    """Show resolved variables and the file each one came from."""
    from mysys.core.use_cases.config_check import show_config

    result = show_config(home=ctx.obj.get("home"))
    data = result.to_dict(redact=not reveal)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"\n⚙️  {data['home']}", fg="cyan", bold=True)
    for tier, path in data["files"].items():
        click.echo(f"   {tier:<16} {path}")
    click.echo(f"   {'catalog':<16} {data['specs_file'] or 'built-in'}")
    click.echo()

    if not data["variables"]:
        click.secho("   No variables defined", fg="yellow")
    for var in data["variables"]:
        click.echo(f"   {var['key']}={var['value']}  ", nl=False)
        click.secho(f"({var['tier']})", fg="white", dim=True)
    click.echo()


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the variables files and the package catalog."""
    from mysys.core.use_cases.config_check import check_config

    result = check_config(home=ctx.obj.get("home"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.catalog is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   OS:     {result.os_family}")
        click.echo(f"   Specs:  {len(result.catalog.specs)}")
        click.echo(f"   Groups: {', '.join(result.catalog.groups)}")
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
