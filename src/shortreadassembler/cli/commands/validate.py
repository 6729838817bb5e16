"""Installation validation command."""

from __future__ import annotations

import sys

import click

from shortreadassembler import __version__
from shortreadassembler.cli.exit_codes import EXIT_ERROR


@click.command()
@click.option("--full", is_flag=True, help="Also check that the external tools are on PATH")
def validate(full: bool) -> None:
    """Validate ShortReadAssembler installation and dependencies."""
    from shortreadassembler.utils.validators import validate_installation

    click.echo("Validating ShortReadAssembler installation...")
    issues = validate_installation(full_check=full)

    if not issues:
        click.echo("✓ All checks passed!")
        click.echo(f"  ShortReadAssembler version: {__version__}")
    else:
        click.echo("✗ Issues found:")
        for issue in issues:
            click.echo(f"  - {issue}")
        sys.exit(EXIT_ERROR)
