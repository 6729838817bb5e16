"""Run summary table: one row per sample, joined with CheckM2 scores when present."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from shortreadassembler.core.pipeline_types import BatchReport, Failure, SoftStop, Success
from shortreadassembler.utils.logging import get_logger

logger = get_logger("report")

SUMMARY_COLUMNS = [
    "sample_id",
    "status",
    "outcome",
    "final_assembly",
    "reason",
    "completeness",
    "contamination",
]


def load_checkm2_report(path: Path) -> Optional[pd.DataFrame]:
    """Read CheckM2's quality_report.tsv as (sample_id, completeness, contamination)."""
    if not path.exists() or path.stat().st_size == 0:
        return None
    try:
        df = pd.read_csv(path, sep="\t")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        logger.warning(f"Could not parse CheckM2 report {path}: {exc}")
        return None
    required = {"Name", "Completeness", "Contamination"}
    if not required.issubset(df.columns):
        logger.warning(f"CheckM2 report {path} lacks columns {sorted(required - set(df.columns))}")
        return None
    return df[["Name", "Completeness", "Contamination"]].rename(
        columns={
            "Name": "sample_id",
            "Completeness": "completeness",
            "Contamination": "contamination",
        }
    ).astype({"sample_id": str})


def build_summary(report: BatchReport, checkm2_report: Optional[Path] = None) -> pd.DataFrame:
    """Assemble the per-sample summary table."""
    rows = []
    for sample in report.samples:
        outcome = report.outcomes.get(sample.sample_id)
        row = {
            "sample_id": sample.sample_id,
            "status": sample.status.value,
            "outcome": "",
            "final_assembly": "",
            "reason": "",
        }
        if isinstance(outcome, Success):
            row.update(outcome="success", final_assembly=str(outcome.artifact))
        elif isinstance(outcome, SoftStop):
            row.update(outcome="soft-stop", final_assembly=str(outcome.artifact), reason=outcome.reason)
        elif isinstance(outcome, Failure):
            row.update(outcome="failure", reason=outcome.reason)
        rows.append(row)

    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS[:5])
    scores = load_checkm2_report(checkm2_report) if checkm2_report else None
    if scores is not None:
        df = df.merge(scores, on="sample_id", how="left")
    else:
        df["completeness"] = pd.NA
        df["contamination"] = pd.NA
    return df[SUMMARY_COLUMNS]


def write_summary(
    report: BatchReport, output_file: Path, checkm2_report: Optional[Path] = None
) -> Path:
    """Write the summary as TSV and return its path."""
    df = build_summary(report, checkm2_report)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_file, sep="\t", index=False)
    logger.info(f"Run summary saved to: {output_file}")
    return output_file
