"""FastQC wrapper."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class FastQC(ExternalTool):
    """FastQC raw read quality reports."""

    tool_name = "fastqc"

    def run_qc(self, forward: Path, reverse: Path, output_dir: Path) -> None:
        """Write FastQC reports for both mates into output_dir."""
        output_dir.mkdir(parents=True, exist_ok=True)
        cmd = [
            self.tool_name,
            "-t", str(self.threads),
            str(forward), str(reverse),
            "-o", str(output_dir),
        ]
        self.run(cmd, capture_output=True)
        self.logger.info(f"FastQC reports written to: {output_dir}")
