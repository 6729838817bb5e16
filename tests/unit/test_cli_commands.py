"""Unit tests for CLI commands."""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from shortreadassembler import __version__
from shortreadassembler.cli import cli
from shortreadassembler.cli.main import main
from shortreadassembler.core.pipeline import Pipeline
from shortreadassembler.core.pipeline_types import BatchReport, Success


def _write_reads(root: Path, *sample_ids: str) -> Path:
    reads = root / "00_reads"
    reads.mkdir(exist_ok=True)
    for sample_id in sample_ids:
        (reads / f"{sample_id}_R1.fastq.gz").write_bytes(b"f")
        (reads / f"{sample_id}_R2.fastq.gz").write_bytes(b"r")
    return reads


class TestCLIBasics:
    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "ShortReadAssembler" in result.output
        assert "--racon-rounds" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"ShortReadAssembler {__version__}" in result.output

    def test_missing_input_dir(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--skip-checkm2"])
        assert result.exit_code == 1
        assert "Input directory not found" in result.output

    def test_checkm2_database_required(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_reads(Path("."), "A")
            result = runner.invoke(cli, [])
        assert result.exit_code == 1
        assert "CheckM2 database" in result.output

    def test_invalid_option_value_is_usage_error(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--threads", "0"])
        assert result.exit_code == 2

    @patch("shortreadassembler.cli.main.signal.signal")
    def test_main_returns_exit_code(self, mock_signal):
        assert main(["--version"]) == 0
        assert main(["--threads", "zero"]) == 2
        assert mock_signal.call_count == 4


class TestShowSteps:
    def test_show_steps(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--show-steps"])
        assert result.exit_code == 0
        assert "Pipeline Stages" in result.output
        assert "polish_round_2" in result.output
        assert "polish_round_3" not in result.output
        assert "checkm2" in result.output

    def test_show_steps_follows_racon_rounds(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--show-steps", "--racon-rounds", "3"])
        assert result.exit_code == 0
        assert "polish_round_3" in result.output

    def test_dry_run_lists_samples(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_reads(Path("."), "B", "A")
            result = runner.invoke(cli, ["--dry-run", "--skip-checkm2", "-o", "out"])
            assert result.exit_code == 0
            assert "Samples (2)" in result.output
            assert "A: A_R1.fastq.gz + A_R2.fastq.gz" in result.output
            assert not Path("out").exists()


class TestRunCommand:
    def test_run_reports_outputs(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_reads(Path("."), "A")
            final = Path("04_final_assemblies")
            report = BatchReport(
                final_dir=final,
                checkm2_dir=final / "checkm2_results",
                stats_report=final / "assembly_stats_report.txt",
                ledger_file=Path("failed.txt"),
                failed=["B"],
            )
            report.outcomes["A"] = Success(final / "A.fasta")
            with patch.object(Pipeline, "run", return_value=report) as mock_run:
                result = runner.invoke(cli, ["--skip-checkm2", "-t", "2"])

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        assert "Final assemblies (1)" in result.output
        assert "CheckM2: skipped" in result.output
        assert "assembly_stats_report.txt" in result.output
        assert "Failed samples (1)" in result.output
        assert "  B" in result.output

    def test_missing_pair_exits_with_error(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            reads = _write_reads(Path("."), "A")
            (reads / "B_R1.fastq.gz").write_bytes(b"f")
            result = runner.invoke(cli, ["--skip-checkm2"])
        assert result.exit_code == 1


class TestCLIConfig:
    def test_init_config_stdout(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["init-config", "--stdout"])
        assert result.exit_code == 0
        assert "input_dir:" in result.output
        assert "racon_rounds" in result.output

    def test_init_config_output_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["init-config", "--output-file", "custom.yaml"])
            assert result.exit_code == 0
            contents = open("custom.yaml", encoding="utf-8").read()
            assert "checkm2_database" in contents

    def test_init_config_keeps_existing_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("config.yaml").write_text("threads: 4\n")
            result = runner.invoke(cli, ["init-config"])
            assert result.exit_code == 1
            assert Path("config.yaml").read_text() == "threads: 4\n"

            result = runner.invoke(cli, ["init-config", "--force"])
            assert result.exit_code == 0
            assert "checkm2_database" in Path("config.yaml").read_text()

    def test_config_file_is_used(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_reads(Path("."), "A")
            Path("run.yaml").write_text("tools:\n  skip_checkm2: true\n  racon_rounds: 1\n")
            result = runner.invoke(cli, ["-c", "run.yaml", "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "1 Racon round(s)" in result.output


class TestCLIValidateAndStatus:
    def test_validate_command_exists(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["validate", "--help"])
        assert result.exit_code == 0
        assert "Validate" in result.output

    def test_validate_python_modules(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["validate"])
        assert result.exit_code == 0
        assert "All checks passed" in result.output

    def test_validate_full_reports_missing_tools(self):
        runner = CliRunner()
        with patch("shortreadassembler.utils.validators.shutil.which", return_value=None):
            result = runner.invoke(cli, ["validate", "--full"])
        assert result.exit_code == 1
        assert "External tool not found: spades.py" in result.output

    def test_status(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_reads(Path("."), "A")
            assembly = Path("03_assemblies/A/A.fasta")
            assembly.parent.mkdir(parents=True)
            assembly.write_text(">c\nACGT\n")
            Path("failed.txt").write_text("Z\n")
            result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0, result.output
        assert "Samples in 00_reads: 1" in result.output
        assert "✓ assemble" in result.output
        assert "· finalize" in result.output
        assert "Z" in result.output

    def test_status_missing_input(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["status", "-i", "nowhere"])
        assert result.exit_code == 1
