"""Core pipeline functionality (ShortReadAssembler)."""

from shortreadassembler.core.pipeline import Pipeline
from shortreadassembler.core.pipeline_types import (
    BatchReport,
    Failure,
    Sample,
    SampleStatus,
    SoftStop,
    Stage,
    StageResult,
    Success,
)

__all__ = [
    "Pipeline",
    "BatchReport",
    "Failure",
    "Sample",
    "SampleStatus",
    "SoftStop",
    "Stage",
    "StageResult",
    "Success",
]
