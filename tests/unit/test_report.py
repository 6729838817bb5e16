"""Tests for the run summary table."""

from pathlib import Path

import pandas as pd

from shortreadassembler.core.pipeline_types import (
    BatchReport,
    Failure,
    Sample,
    SampleStatus,
    SoftStop,
    Success,
)
from shortreadassembler.core.report import (
    SUMMARY_COLUMNS,
    build_summary,
    load_checkm2_report,
    write_summary,
)


def _report(tmp_path):
    final = tmp_path / "04_final_assemblies"
    samples = [
        Sample("A", Path("A_R1"), Path("A_R2"), SampleStatus.COMPLETE),
        Sample("B", Path("B_R1"), Path("B_R2"), SampleStatus.FAILED),
        Sample("C", Path("C_R1"), Path("C_R2"), SampleStatus.COMPLETE),
    ]
    report = BatchReport(
        final_dir=final,
        checkm2_dir=final / "checkm2_results",
        stats_report=final / "assembly_stats_report.txt",
        ledger_file=tmp_path / "failed.txt",
        samples=samples,
    )
    report.outcomes = {
        "A": Success(final / "A.fasta"),
        "B": Failure("assembly failed", stage="assemble"),
        "C": SoftStop(final / "C.fasta", "empty alignment", round=2),
    }
    return report


class TestBuildSummary:
    def test_rows_without_checkm2(self, tmp_path):
        df = build_summary(_report(tmp_path))
        assert list(df.columns) == SUMMARY_COLUMNS
        assert list(df["sample_id"]) == ["A", "B", "C"]
        assert list(df["outcome"]) == ["success", "failure", "soft-stop"]
        assert list(df["status"]) == ["complete", "failed", "complete"]
        assert df.loc[1, "reason"] == "assembly failed"
        assert df.loc[1, "final_assembly"] == ""
        assert df["completeness"].isna().all()

    def test_checkm2_scores_joined(self, tmp_path):
        checkm2 = tmp_path / "quality_report.tsv"
        checkm2.write_text(
            "Name\tCompleteness\tContamination\tGenome_Size\n"
            "A\t98.7\t1.2\t5000000\n"
            "C\t80.0\t3.5\t4000000\n"
        )
        df = build_summary(_report(tmp_path), checkm2)
        scores = df.set_index("sample_id")
        assert scores.loc["A", "completeness"] == 98.7
        assert scores.loc["C", "contamination"] == 3.5
        assert pd.isna(scores.loc["B", "completeness"])


class TestLoadCheckm2Report:
    def test_missing_file(self, tmp_path):
        assert load_checkm2_report(tmp_path / "absent.tsv") is None

    def test_unexpected_columns(self, tmp_path):
        path = tmp_path / "quality_report.tsv"
        path.write_text("foo\tbar\n1\t2\n")
        assert load_checkm2_report(path) is None


def test_write_summary(tmp_path):
    out = tmp_path / "04_final_assemblies" / "run_summary.tsv"
    assert write_summary(_report(tmp_path), out) == out
    df = pd.read_csv(out, sep="\t")
    assert list(df.columns) == SUMMARY_COLUMNS
    assert len(df) == 3
