"""Minimap2 wrapper for short-read to assembly alignment."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class Minimap2(ExternalTool):
    """Minimap2 aligner producing SAM for Racon."""

    tool_name = "minimap2"

    def __init__(self, preset: str = "sr", **kwargs):
        self.preset = preset
        super().__init__(**kwargs)

    def align(self, reference: Path, reads: Path, output_sam: Path) -> None:
        """Align reads against reference, writing SAM to output_sam."""
        cmd = [
            self.tool_name,
            "-ax", self.preset,
            "-t", str(self.threads),
            str(reference),
            str(reads),
        ]
        self.run(cmd, stdout_file=output_sam)
        self.logger.debug(f"Alignment written to: {output_sam}")
