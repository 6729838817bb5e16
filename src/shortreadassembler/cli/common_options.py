"""Shared Click options for ShortReadAssembler CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import click

F = TypeVar("F", bound=Callable[..., None])


def input_dir_option(func: F) -> F:
    """Raw reads directory option."""
    return click.option(
        "-i",
        "--input-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory with <ID>_R1.fastq.gz/<ID>_R2.fastq.gz [default: 00_reads]",
    )(func)


def output_option(func: F) -> F:
    """Output root option."""
    return click.option(
        "-o",
        "--output",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Root for stage directories and failed.txt [default: .]",
    )(func)


def config_option(func: F) -> F:
    """Configuration file option."""
    return click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file (YAML)",
    )(func)


def threads_option(func: F) -> F:
    """Threads option."""
    return click.option(
        "-t",
        "--threads",
        type=click.IntRange(min=1),
        default=None,
        help="Threads for each tool [default: 8]",
    )(func)


def verbose_option(func: F) -> F:
    """Verbosity option (-v INFO, -vv DEBUG)."""
    return click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )(func)


def tool_options(func: F) -> F:
    """Stage parameter options shared by the run commands."""
    options = [
        click.option(
            "--spades-threads",
            type=click.IntRange(min=1),
            default=None,
            help="Threads for SPAdes [default: 6]",
        ),
        click.option(
            "--memory",
            "memory_gb",
            type=click.IntRange(min=1),
            default=None,
            help="SPAdes memory limit in GB [default: 200]",
        ),
        click.option(
            "--length-filter",
            type=click.IntRange(min=0),
            default=None,
            help="Minimum contig length to keep [default: 500]",
        ),
        click.option(
            "--racon-rounds",
            type=click.IntRange(min=0),
            default=None,
            help="Racon polishing rounds [default: 2]",
        ),
        click.option(
            "--checkm2-db",
            "checkm2_database",
            type=click.Path(path_type=Path),
            default=None,
            help="CheckM2 diamond database (uniref100.KO.1.dmnd)",
        ),
        click.option(
            "--skip-checkm2",
            is_flag=True,
            default=False,
            help="Do not run CheckM2 on the final assemblies",
        ),
        click.option(
            "--timeout",
            "tool_timeout",
            type=click.IntRange(min=1),
            default=None,
            help="Seconds allowed per tool call; a timeout counts as a failure",
        ),
        click.option(
            "--skip-unpaired",
            is_flag=True,
            default=False,
            help="Skip R1 files without an R2 mate instead of aborting",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def log_file_option(func: F) -> F:
    """Log file option."""
    return click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Path for log file output",
    )(func)
