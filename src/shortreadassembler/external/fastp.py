"""fastp wrapper."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class Fastp(ExternalTool):
    """fastp adapter and quality trimming."""

    tool_name = "fastp"

    def trim(
        self,
        forward: Path,
        reverse: Path,
        trimmed_forward: Path,
        trimmed_reverse: Path,
        html_report: Path,
        json_report: Path,
    ) -> None:
        """Trim a read pair."""
        trimmed_forward.parent.mkdir(parents=True, exist_ok=True)
        cmd = [
            self.tool_name,
            "-i", str(forward), "-I", str(reverse),
            "-o", str(trimmed_forward), "-O", str(trimmed_reverse),
            "-h", str(html_report),
            "-j", str(json_report),
            "-w", str(self.threads),
        ]
        self.run(cmd, capture_output=True)
        self.logger.info(f"Trimmed reads saved to: {trimmed_forward.parent}")
