"""Command-line interface for ShortReadAssembler."""

from shortreadassembler.cli.main import cli, main

__all__ = ["cli", "main"]
