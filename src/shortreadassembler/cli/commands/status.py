"""`status` subcommand: stage completion as seen on disk."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from shortreadassembler.cli.exit_codes import EXIT_ERROR
from shortreadassembler.cli.common_options import config_option, input_dir_option, output_option
from shortreadassembler.exceptions import ShortReadAssemblerError


@click.command(name="status")
@input_dir_option
@output_option
@config_option
def status(input_dir: Optional[Path], output: Optional[Path], config: Optional[Path]) -> None:
    """Show which stages are complete for every sample (nothing is executed)."""
    from shortreadassembler.config import Config, load_config
    from shortreadassembler.core.pipeline import Pipeline

    try:
        cfg = load_config(config) if config else Config()
        # Unpaired files are reported, not fatal, when only looking
        cfg = cfg.with_overrides(
            input_dir=input_dir, output_dir=output, missing_pair_policy="skip"
        )
        pipeline = Pipeline(cfg)
        samples = pipeline.discover()
    except ShortReadAssemblerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    click.echo(f"Samples in {cfg.input_dir}: {len(samples)}")
    for sample in samples:
        stages = pipeline.stage_status(sample)
        done = sum(stages.values())
        click.echo(f"\n{sample.sample_id} ({done}/{len(stages)} stages complete)")
        for name, complete in stages.items():
            mark = "✓" if complete else "·"
            click.echo(f"  {mark} {name}")

    failed = pipeline.ledger.failed_ids()
    click.echo("")
    if failed:
        click.echo(f"Failed in last run ({pipeline.ledger.path}):")
        for sample_id in failed:
            click.echo(f"  {sample_id}")
    else:
        click.echo("No failures recorded")
