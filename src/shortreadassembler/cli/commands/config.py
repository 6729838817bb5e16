"""`init-config` subcommand: write the commented YAML template."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shortreadassembler.cli.exit_codes import EXIT_ERROR


@click.command(name="init-config")
@click.option(
    "--output-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("config.yaml"),
    help="Where to write the template [default: config.yaml]",
)
@click.option("--stdout", is_flag=True, help="Print the template instead of writing it")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(output_file: Path, stdout: bool, force: bool) -> None:
    """Write a configuration template with every option at its default."""
    from shortreadassembler.resources import get_default_config

    template = get_default_config()
    if stdout:
        click.echo(template)
        return

    if output_file.exists() and not force:
        click.echo(f"Error: {output_file} exists; pass --force to overwrite it", err=True)
        sys.exit(EXIT_ERROR)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(template, encoding="utf-8")
    click.echo(f"Wrote {output_file}")
    click.echo("Set tools.checkm2_database (or tools.skip_checkm2: true) before running.")
