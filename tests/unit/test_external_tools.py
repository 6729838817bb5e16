"""Tests for the external tool wrappers' command lines."""

from pathlib import Path
from unittest.mock import patch

import pytest

from shortreadassembler.external import (
    AssemblyStats,
    CheckM2,
    Fastp,
    FastQC,
    Minimap2,
    Racon,
    Seqtk,
    Spades,
)


def _cmd(mock_run):
    return [str(c) for c in mock_run.call_args.args[0]]


class TestFastQC:
    @patch.object(FastQC, "run")
    @patch.object(FastQC, "_check_installation")
    def test_run_qc(self, mock_check, mock_run, tmp_path):
        FastQC(threads=4).run_qc(Path("A_R1.fastq.gz"), Path("A_R2.fastq.gz"), tmp_path / "qc")
        assert _cmd(mock_run) == [
            "fastqc", "-t", "4", "A_R1.fastq.gz", "A_R2.fastq.gz", "-o", str(tmp_path / "qc"),
        ]
        assert (tmp_path / "qc").is_dir()


class TestFastp:
    @patch.object(Fastp, "run")
    @patch.object(Fastp, "_check_installation")
    def test_trim(self, mock_check, mock_run, tmp_path):
        out = tmp_path / "trim"
        Fastp(threads=8).trim(
            Path("A_R1.fastq.gz"),
            Path("A_R2.fastq.gz"),
            out / "A_R1.trimmed.fastq.gz",
            out / "A_R2.trimmed.fastq.gz",
            out / "A.fastp.html",
            out / "A.fastp.json",
        )
        cmd = _cmd(mock_run)
        assert cmd[:5] == ["fastp", "-i", "A_R1.fastq.gz", "-I", "A_R2.fastq.gz"]
        assert cmd[cmd.index("-o") + 1] == str(out / "A_R1.trimmed.fastq.gz")
        assert cmd[cmd.index("-O") + 1] == str(out / "A_R2.trimmed.fastq.gz")
        assert cmd[cmd.index("-w") + 1] == "8"


class TestSpades:
    @patch.object(Spades, "run")
    @patch.object(Spades, "_check_installation")
    def test_assemble(self, mock_check, mock_run, tmp_path):
        contigs = Spades(memory_gb=200, threads=6).assemble(
            Path("t1.fq.gz"), Path("t2.fq.gz"), tmp_path / "A_spades"
        )
        assert _cmd(mock_run) == [
            "spades.py", "--isolate",
            "-1", "t1.fq.gz", "-2", "t2.fq.gz",
            "-o", str(tmp_path / "A_spades"),
            "-t", "6", "-m", "200",
        ]
        assert contigs == tmp_path / "A_spades" / "contigs.fasta"


class TestPolishingTools:
    @patch.object(Minimap2, "run")
    @patch.object(Minimap2, "_check_installation")
    def test_minimap2_short_read_preset(self, mock_check, mock_run, tmp_path):
        sam = tmp_path / "A.round1.sam"
        Minimap2(threads=8).align(Path("A.fasta"), Path("A_combined.fq.gz"), sam)
        assert _cmd(mock_run) == ["minimap2", "-ax", "sr", "-t", "8", "A.fasta", "A_combined.fq.gz"]
        assert mock_run.call_args.kwargs["stdout_file"] == sam

    @patch.object(Racon, "run")
    @patch.object(Racon, "_check_installation")
    def test_racon(self, mock_check, mock_run, tmp_path):
        out = tmp_path / "A.racon_round1.fasta"
        Racon(threads=8).polish(Path("reads.fq.gz"), Path("A.sam"), Path("A.fasta"), out)
        assert _cmd(mock_run) == ["racon", "-t", "8", "reads.fq.gz", "A.sam", "A.fasta"]
        assert mock_run.call_args.kwargs["stdout_file"] == out

    @patch.object(Seqtk, "run")
    @patch.object(Seqtk, "_check_installation")
    def test_seqtk_length_filter(self, mock_check, mock_run, tmp_path):
        out = tmp_path / "A.filtered.fasta"
        Seqtk().filter_by_length(Path("A.racon_round2.fasta"), out, 500)
        assert _cmd(mock_run) == ["seqtk", "seq", "-L", "500", "A.racon_round2.fasta"]
        assert mock_run.call_args.kwargs["stdout_file"] == out


class TestAggregateTools:
    @patch.object(CheckM2, "run")
    @patch.object(CheckM2, "_check_installation")
    def test_checkm2_predict(self, mock_check, mock_run, tmp_path):
        report = CheckM2(threads=8).predict(
            Path("/db/uniref100.KO.1.dmnd"), tmp_path, tmp_path / "checkm2_results"
        )
        cmd = _cmd(mock_run)
        assert cmd[:2] == ["checkm2", "predict"]
        assert cmd[cmd.index("--database_path") + 1] == "/db/uniref100.KO.1.dmnd"
        assert cmd[cmd.index("--input") + 1] == str(tmp_path)
        assert cmd[cmd.index("-x") + 1] == "fasta"
        assert "--force" in cmd
        assert report == tmp_path / "checkm2_results" / "quality_report.tsv"

    @patch.object(AssemblyStats, "run")
    @patch.object(AssemblyStats, "_check_installation")
    def test_assembly_stats(self, mock_check, mock_run, tmp_path):
        out = tmp_path / "assembly_stats_report.txt"
        AssemblyStats().report([Path("A.fasta"), Path("B.fasta")], out)
        assert _cmd(mock_run) == ["assembly-stats", "A.fasta", "B.fasta"]
        assert mock_run.call_args.kwargs["stdout_file"] == out


@pytest.mark.parametrize(
    "cls, name",
    [(FastQC, "fastqc"), (Spades, "spades.py"), (AssemblyStats, "assembly-stats")],
)
def test_tool_names(cls, name):
    assert cls.tool_name == name
