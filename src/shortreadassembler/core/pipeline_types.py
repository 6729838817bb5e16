"""Shared pipeline types.

Plain dataclasses and enums used by the gate, executor, polisher and batch
driver. Nothing here imports the driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union


class SampleStatus(str, Enum):
    """Lifecycle of a sample within one run."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class Sample:
    """One paired-end sequencing dataset."""

    sample_id: str
    forward: Path
    reverse: Path
    status: SampleStatus = SampleStatus.PENDING


@dataclass(frozen=True)
class Stage:
    """A named unit of work with declared output artifacts.

    ``kind`` selects the executor routine and the artifact layout; ``round``
    is only set for per-round polishing stages. ``completion`` names the
    default completion predicate (``exists``, ``non_empty`` or ``up_to_date``).
    """

    name: str
    kind: str
    description: str
    scope: str = "sample"  # sample | batch
    completion: str = "non_empty"
    verify_outputs: bool = True
    round: Optional[int] = None


@dataclass(frozen=True)
class StageResult:
    """Outcome of a single stage invocation."""

    ok: bool
    exit_code: int
    message: str = ""


@dataclass(frozen=True)
class Success:
    """The sample produced its artifact."""

    artifact: Path


@dataclass(frozen=True)
class SoftStop:
    """Polishing ended early; artifact is the last good assembly."""

    artifact: Path
    reason: str
    round: Optional[int] = None


@dataclass(frozen=True)
class Failure:
    """The sample failed unrecoverably."""

    reason: str
    stage: Optional[str] = None


SampleOutcome = Union[Success, SoftStop, Failure]


@dataclass
class BatchReport:
    """What a completed run reports back to the user."""

    final_dir: Path
    checkm2_dir: Path
    stats_report: Path
    ledger_file: Path
    summary_file: Optional[Path] = None
    samples: List[Sample] = field(default_factory=list)
    outcomes: Dict[str, SampleOutcome] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def final_assemblies(self) -> Dict[str, Path]:
        """Final assembly per non-failed sample."""
        return {
            sample_id: outcome.artifact
            for sample_id, outcome in self.outcomes.items()
            if not isinstance(outcome, Failure)
        }
