"""On-disk artifact layout.

Directory and file names are fixed so downstream consumers can find results
without configuration; only the root (``output_dir``) moves.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from shortreadassembler.core.pipeline_types import Sample, Stage

FASTQC_DIR = "01_fastqc"
TRIMMED_DIR = "02_trimmed_reads"
ASSEMBLY_DIR = "03_assemblies"
FINAL_DIR = "04_final_assemblies"
CHECKM2_DIR = "checkm2_results"
CHECKM2_REPORT = "quality_report.tsv"
STATS_REPORT = "assembly_stats_report.txt"
SUMMARY_REPORT = "run_summary.tsv"
LEDGER_FILE = "failed.txt"
FINAL_EXTENSION = "fasta"

# Suffixes FastQC strips, in order, to name its report after the input file
FASTQC_STRIPPED_SUFFIXES = (
    ".gz",
    ".bz2",
    ".txt",
    ".fastq",
    ".fq",
    ".csfastq",
    ".sam",
    ".bam",
    ".ubam",
)


def fastqc_report_name(reads: Path) -> str:
    """Report file name FastQC writes for reads, e.g. A_1.fq.gz -> A_1_fastqc.html."""
    name = reads.name
    for suffix in FASTQC_STRIPPED_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
    return f"{name}_fastqc.html"


@dataclass(frozen=True)
class SampleLayout:
    """Artifact paths of one sample."""

    root: Path
    sample_id: str
    forward: Optional[Path] = None

    # 01_fastqc
    @property
    def fastqc_dir(self) -> Path:
        return self.root / FASTQC_DIR / self.sample_id

    @property
    def fastqc_report(self) -> Path:
        reads = self.forward or Path(f"{self.sample_id}_R1.fastq.gz")
        return self.fastqc_dir / fastqc_report_name(reads)

    # 02_trimmed_reads
    @property
    def trimmed_dir(self) -> Path:
        return self.root / TRIMMED_DIR / self.sample_id

    @property
    def trimmed_forward(self) -> Path:
        return self.trimmed_dir / f"{self.sample_id}_R1.trimmed.fastq.gz"

    @property
    def trimmed_reverse(self) -> Path:
        return self.trimmed_dir / f"{self.sample_id}_R2.trimmed.fastq.gz"

    @property
    def fastp_html(self) -> Path:
        return self.trimmed_dir / f"{self.sample_id}.fastp.html"

    @property
    def fastp_json(self) -> Path:
        return self.trimmed_dir / f"{self.sample_id}.fastp.json"

    @property
    def combined_reads(self) -> Path:
        return self.trimmed_dir / f"{self.sample_id}_combined.trimmed.fastq.gz"

    # 03_assemblies
    @property
    def assembly_dir(self) -> Path:
        return self.root / ASSEMBLY_DIR / self.sample_id

    @property
    def spades_dir(self) -> Path:
        return self.assembly_dir / f"{self.sample_id}_spades"

    @property
    def assembly_fasta(self) -> Path:
        return self.assembly_dir / f"{self.sample_id}.fasta"

    # Polishing rounds and the length filter write next to the raw assembly
    def alignment(self, round_number: int) -> Path:
        return self.assembly_dir / f"{self.sample_id}.round{round_number}.sam"

    def polished_fasta(self, round_number: int) -> Path:
        return self.assembly_dir / f"{self.sample_id}.racon_round{round_number}.fasta"

    def polish_input(self, round_number: int) -> Path:
        """Round k polishes round k-1's output; round 1 polishes the raw assembly."""
        if round_number <= 1:
            return self.assembly_fasta
        return self.polished_fasta(round_number - 1)

    @property
    def filtered_fasta(self) -> Path:
        return self.assembly_dir / f"{self.sample_id}.filtered.fasta"

    # 04_final_assemblies
    @property
    def final_fasta(self) -> Path:
        return self.root / FINAL_DIR / f"{self.sample_id}.{FINAL_EXTENSION}"


@dataclass(frozen=True)
class BatchLayout:
    """Whole-batch artifact paths."""

    root: Path

    @property
    def final_dir(self) -> Path:
        return self.root / FINAL_DIR

    @property
    def checkm2_dir(self) -> Path:
        return self.final_dir / CHECKM2_DIR

    @property
    def checkm2_report(self) -> Path:
        return self.checkm2_dir / CHECKM2_REPORT

    @property
    def stats_report(self) -> Path:
        return self.final_dir / STATS_REPORT

    @property
    def summary_report(self) -> Path:
        return self.final_dir / SUMMARY_REPORT

    @property
    def ledger_file(self) -> Path:
        return self.root / LEDGER_FILE

    def final_assemblies(self) -> list[Path]:
        """Final assemblies currently on disk, sorted by name."""
        if not self.final_dir.is_dir():
            return []
        return sorted(self.final_dir.glob(f"*.{FINAL_EXTENSION}"))

    def sample(self, sample_id: str, forward: Optional[Path] = None) -> SampleLayout:
        return SampleLayout(self.root, sample_id, forward)


def expected_artifacts(
    stage: Stage, layout: BatchLayout, sample: Optional[Sample] = None
) -> tuple[Path, ...]:
    """Artifacts a stage must leave behind to count as complete."""
    if stage.scope == "batch":
        if stage.kind == "checkm2":
            return (layout.checkm2_report,)
        if stage.kind == "assembly_stats":
            return (layout.stats_report,)
        raise ValueError(f"Unknown batch stage kind: {stage.kind}")

    if sample is None:
        raise ValueError(f"Stage {stage.name} needs a sample")
    s = layout.sample(sample.sample_id, sample.forward)
    if stage.kind == "fastqc":
        return (s.fastqc_report,)
    if stage.kind == "trim":
        return (s.trimmed_forward, s.trimmed_reverse)
    if stage.kind == "assemble":
        return (s.assembly_fasta,)
    if stage.kind == "combine_reads":
        return (s.combined_reads,)
    if stage.kind == "align":
        return (s.alignment(stage.round or 1),)
    if stage.kind == "polish":
        return (s.polished_fasta(stage.round or 1),)
    if stage.kind == "filter":
        return (s.filtered_fasta,)
    if stage.kind == "finalize":
        return (s.final_fasta,)
    raise ValueError(f"Unknown stage kind: {stage.kind}")
