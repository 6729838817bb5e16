"""Click application entrypoint for ShortReadAssembler."""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from types import FrameType
from typing import Optional

import click

from shortreadassembler import __version__
from shortreadassembler.cli.exit_codes import (
    EXIT_ERROR,
    EXIT_SIGINT,
    EXIT_SIGTERM,
    EXIT_SUCCESS,
)
from shortreadassembler.exceptions import ShortReadAssemblerError
from shortreadassembler.utils.logging import get_logger

from .commands.config import init_config
from .commands.status import status
from .commands.validate import validate
from .common_options import (
    config_option,
    input_dir_option,
    log_file_option,
    output_option,
    threads_option,
    tool_options,
    verbose_option,
)
from .pipeline import PipelineOptions, execute_pipeline


def _handle_signal(signum: int, frame: Optional[FrameType]) -> None:
    """Handle interrupt signals for graceful shutdown."""
    sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
    click.echo(f"\n{sig_name} received, initiating graceful shutdown...", err=True)
    # Raise KeyboardInterrupt to propagate through the call stack
    raise KeyboardInterrupt(sig_name)


def _interrupt_exit_code(exc: KeyboardInterrupt) -> int:
    return EXIT_SIGTERM if str(exc) == "SIGTERM" else EXIT_SIGINT


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(f"ShortReadAssembler {__version__}")
        ctx.exit()


@click.group(
    context_settings=dict(help_option_names=["-h", "--help"]),
    invoke_without_command=True,
)
# Version option (use -V to avoid conflict with -v/--verbose)
@click.option(
    "-V",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit.",
)
@input_dir_option
@output_option
@config_option
@threads_option
@tool_options
@verbose_option
@log_file_option
@click.option("--show-steps", is_flag=True, help="Show pipeline stages and exit")
@click.option("--dry-run", is_flag=True, help="List samples and stages without executing")
@click.pass_context
def cli(
    ctx: click.Context,
    input_dir: Optional[Path],
    output: Optional[Path],
    config: Optional[Path],
    threads: Optional[int],
    spades_threads: Optional[int],
    memory_gb: Optional[int],
    length_filter: Optional[int],
    racon_rounds: Optional[int],
    checkm2_database: Optional[Path],
    skip_checkm2: bool,
    tool_timeout: Optional[int],
    skip_unpaired: bool,
    verbose: int,
    log_file: Optional[Path],
    show_steps: bool,
    dry_run: bool,
) -> None:
    """ShortReadAssembler: batch de novo assembly of paired-end short reads.

    FastQC, fastp, SPAdes, Racon polishing, length filtering, then CheckM2 and
    assembly-stats over every final assembly. Re-running resumes from the
    outputs already on disk.

    Run directly as: ShortReadAssembler -i 00_reads --checkm2-db DB [options]
    """
    # If a subcommand was invoked, do not run the pipeline here
    if ctx.invoked_subcommand:
        return

    logger = get_logger("cli")

    try:
        opts = PipelineOptions(
            input_dir=input_dir,
            output=output,
            config_path=config,
            threads=threads,
            spades_threads=spades_threads,
            memory_gb=memory_gb,
            length_filter=length_filter,
            racon_rounds=racon_rounds,
            checkm2_database=checkm2_database,
            skip_checkm2=skip_checkm2,
            tool_timeout=tool_timeout,
            skip_unpaired=skip_unpaired,
            show_steps=show_steps,
            dry_run=dry_run,
            log_file=log_file,
            verbose=verbose,
        )
        execute_pipeline(opts, logger)

    except KeyboardInterrupt as exc:
        logger.info("Pipeline interrupted")
        sys.exit(_interrupt_exit_code(exc))
    except ShortReadAssemblerError as exc:
        logger.error(f"Pipeline error: {exc}")
        sys.exit(EXIT_ERROR)


cli.add_command(init_config)
cli.add_command(validate)
cli.add_command(status)


def main(argv: list[str] | None = None) -> int:
    """Main entry point with signal handling."""
    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        cli(argv)
        return EXIT_SUCCESS
    except KeyboardInterrupt as exc:
        return _interrupt_exit_code(exc)
    except SystemExit as exc:
        # Preserve explicit exit codes from cli()
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
