"""Racon wrapper."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class Racon(ExternalTool):
    """Racon consensus polishing."""

    tool_name = "racon"

    def polish(self, reads: Path, alignment: Path, assembly: Path, output_fasta: Path) -> None:
        """Polish assembly with aligned reads, writing FASTA to output_fasta."""
        cmd = [
            self.tool_name,
            "-t", str(self.threads),
            str(reads),
            str(alignment),
            str(assembly),
        ]
        self.run(cmd, stdout_file=output_fasta)
        self.logger.debug(f"Polished assembly written to: {output_fasta}")
