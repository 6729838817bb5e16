"""CheckM2 wrapper."""

from pathlib import Path

from shortreadassembler.external.base import ExternalTool


class CheckM2(ExternalTool):
    """CheckM2 genome completeness and contamination prediction."""

    tool_name = "checkm2"

    def predict(
        self,
        database: Path,
        input_dir: Path,
        output_dir: Path,
        extension: str = "fasta",
    ) -> Path:
        """Score every ``*.<extension>`` file in input_dir.

        Returns:
            Path to ``quality_report.tsv`` inside output_dir.
        """
        cmd = [
            self.tool_name, "predict",
            "--database_path", str(database),
            "--input", str(input_dir),
            "--output-directory", str(output_dir),
            "--threads", str(self.threads),
            "-x", extension,
            "--force",
        ]
        self.run(cmd, capture_output=True)
        report = output_dir / "quality_report.tsv"
        self.logger.info(f"CheckM2 results in: {output_dir}")
        return report
