"""seqtk wrapper."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class Seqtk(ExternalTool):
    """seqtk sequence filtering."""

    tool_name = "seqtk"
    version_command = None

    def filter_by_length(self, input_fasta: Path, output_fasta: Path, min_length: int) -> None:
        """Keep sequences of at least min_length bp."""
        cmd = [self.tool_name, "seq", "-L", str(min_length), str(input_fasta)]
        self.run(cmd, stdout_file=output_fasta)
        self.logger.info(f"Contigs >= {min_length}bp saved to: {output_fasta}")
