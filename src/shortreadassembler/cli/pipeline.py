"""Shared pipeline execution helpers for the CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from shortreadassembler.cli.exit_codes import EXIT_ERROR
from shortreadassembler.config import Config, load_config
from shortreadassembler.exceptions import ConfigurationError
from shortreadassembler.utils.logging import setup_logging

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass
class PipelineOptions:
    """Container for pipeline execution options.

    ``None`` means "use the config file value or the default".
    """

    input_dir: Optional[Path] = None
    output: Optional[Path] = None
    config_path: Optional[Path] = None
    threads: Optional[int] = None
    spades_threads: Optional[int] = None
    memory_gb: Optional[int] = None
    length_filter: Optional[int] = None
    racon_rounds: Optional[int] = None
    checkm2_database: Optional[Path] = None
    skip_checkm2: bool = False
    tool_timeout: Optional[int] = None
    skip_unpaired: bool = False
    show_steps: bool = False
    dry_run: bool = False
    log_file: Optional[Path] = None
    verbose: int = 0


def show_pipeline_steps(racon_rounds: int = 2) -> None:
    """Print the stage order without touching the filesystem."""
    from shortreadassembler.core.steps.definitions import pipeline_stages

    stages = pipeline_stages(racon_rounds)
    click.echo("\nShortReadAssembler Pipeline Stages:")
    click.echo("-" * 40)
    for i, stage in enumerate(stages, 1):
        scope = " (batch)" if stage.scope == "batch" else ""
        click.echo(f"  {i:2d}. {stage.name:<18} - {stage.description}{scope}")
    click.echo("-" * 40)
    click.echo(f"Total: {len(stages)} stages\n")


def resolve_config(opts: PipelineOptions) -> Config:
    """Load the config file (if any) and apply CLI overrides.

    Priority: CLI arg > config file > built-in default.
    """
    cfg = load_config(opts.config_path) if opts.config_path else Config()
    return cfg.with_overrides(
        input_dir=opts.input_dir,
        output_dir=opts.output,
        threads=opts.threads,
        spades_threads=opts.spades_threads,
        memory_gb=opts.memory_gb,
        length_filter=opts.length_filter,
        racon_rounds=opts.racon_rounds,
        checkm2_database=opts.checkm2_database,
        skip_checkm2=True if opts.skip_checkm2 else None,
        tool_timeout=opts.tool_timeout,
        missing_pair_policy="skip" if opts.skip_unpaired else None,
        log_file=opts.log_file,
    )


def _configure_logging(cfg: Config, opts: PipelineOptions) -> None:
    # CLI verbosity wins; otherwise the config file decides
    if opts.verbose >= 2:
        level = logging.DEBUG
    elif opts.verbose == 1:
        level = logging.INFO
    else:
        level = LEVEL_MAP.get(cfg.runtime.log_level.upper(), logging.WARNING)
    setup_logging(level=level, log_file=cfg.runtime.log_file)


def execute_pipeline(opts: PipelineOptions, logger: logging.Logger) -> None:
    """
    Execute the ShortReadAssembler batch with given options.

    Args:
        opts: Pipeline execution options
        logger: Logger instance for output
    """
    try:
        cfg = resolve_config(opts)
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    # Handle show_steps early - no side effects
    if opts.show_steps:
        show_pipeline_steps(cfg.tools.racon_rounds)
        return

    _configure_logging(cfg, opts)

    # Validate before anything touches the filesystem
    try:
        cfg.validate()
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    # Deferred import: --show-steps and config errors never load pandas
    from shortreadassembler.core.pipeline import Pipeline

    pipeline = Pipeline(cfg)

    if opts.dry_run:
        logger.info("Dry run mode - showing what would be executed:")
        show_pipeline_steps(cfg.tools.racon_rounds)
        samples = pipeline.discover()
        click.echo(f"Input directory: {cfg.input_dir.absolute()}")
        click.echo(f"Output to: {cfg.output_dir.absolute()}")
        click.echo(f"Using {cfg.threads} threads, {cfg.tools.racon_rounds} Racon round(s)")
        click.echo(f"Samples ({len(samples)}):")
        for sample in samples:
            click.echo(f"  {sample.sample_id}: {sample.forward.name} + {sample.reverse.name}")
        return

    report = pipeline.run()

    click.echo("=" * 50)
    click.echo(f"Final assemblies ({len(report.final_assemblies)}): {report.final_dir}")
    if cfg.tools.skip_checkm2:
        click.echo("CheckM2: skipped")
    else:
        click.echo(f"CheckM2 results: {report.checkm2_dir}")
    click.echo(f"Assembly statistics: {report.stats_report}")
    if report.summary_file is not None:
        click.echo(f"Run summary: {report.summary_file}")
    if report.failed:
        click.echo(f"Failed samples ({len(report.failed)}), see {report.ledger_file}:")
        for sample_id in report.failed:
            click.echo(f"  {sample_id}")
    else:
        click.echo("No failed samples")
    click.echo("=" * 50)
