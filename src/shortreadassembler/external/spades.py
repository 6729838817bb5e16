"""SPAdes wrapper."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class Spades(ExternalTool):
    """SPAdes isolate-mode de novo assembler."""

    tool_name = "spades.py"

    def __init__(self, memory_gb: int = 200, **kwargs):
        self.memory_gb = memory_gb
        super().__init__(**kwargs)

    def assemble(self, trimmed_forward: Path, trimmed_reverse: Path, output_dir: Path) -> Path:
        """Assemble a trimmed read pair; returns the path of ``contigs.fasta``."""
        output_dir.parent.mkdir(parents=True, exist_ok=True)
        cmd = [
            self.tool_name,
            "--isolate",
            "-1", str(trimmed_forward), "-2", str(trimmed_reverse),
            "-o", str(output_dir),
            "-t", str(self.threads),
            "-m", str(self.memory_gb),
        ]
        self.run(cmd, capture_output=True)
        contigs = output_dir / "contigs.fasta"
        self.logger.info(f"SPAdes contigs: {contigs}")
        return contigs
