"""Stage definitions and artifact layout."""

from shortreadassembler.core.steps.definitions import (
    ASSEMBLE,
    ASSEMBLY_STATS,
    CHECKM2,
    COMBINE_READS,
    FASTQC,
    FILTER,
    FINALIZE,
    TRIM,
    align_stage,
    pipeline_stages,
    polish_stage,
)
from shortreadassembler.core.steps.layout import BatchLayout, SampleLayout, expected_artifacts

__all__ = [
    "ASSEMBLE",
    "ASSEMBLY_STATS",
    "CHECKM2",
    "COMBINE_READS",
    "FASTQC",
    "FILTER",
    "FINALIZE",
    "TRIM",
    "BatchLayout",
    "SampleLayout",
    "align_stage",
    "expected_artifacts",
    "pipeline_stages",
    "polish_stage",
]
