"""assembly-stats wrapper."""

from pathlib import Path
from typing import Sequence

from shortreadassembler.external.base import ExternalTool


class AssemblyStats(ExternalTool):
    """assembly-stats contiguity statistics."""

    tool_name = "assembly-stats"
    version_command = "-v"

    def report(self, assemblies: Sequence[Path], output_file: Path) -> None:
        """Write statistics for all assemblies into one report."""
        cmd = [self.tool_name, *(str(a) for a in assemblies)]
        self.run(cmd, stdout_file=output_file)
        self.logger.info(f"Assembly statistics saved to: {output_file}")
