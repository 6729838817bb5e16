"""Idempotency gate: decides from filesystem state whether a stage can be skipped.

Completion is purely a property of the artifacts on disk. Changing a
parameter such as the minimum contig length between runs does not
invalidate existing outputs; remove them to force a rerun.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

from shortreadassembler.core.pipeline_types import Sample, Stage
from shortreadassembler.core.steps.layout import BatchLayout, expected_artifacts

Predicate = Callable[[Path], bool]


def exists(path: Path) -> bool:
    return path.exists()


def non_empty(path: Path) -> bool:
    """True for an existing regular file with size > 0."""
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


def up_to_date(sources: Iterable[Path]) -> Predicate:
    """Non-empty and not older than any of ``sources``."""
    source_list = list(sources)

    def predicate(path: Path) -> bool:
        if not non_empty(path):
            return False
        mtime = path.stat().st_mtime
        for source in source_list:
            try:
                if source.stat().st_mtime > mtime:
                    return False
            except OSError:
                continue
        return True

    return predicate


class IdempotencyGate:
    """Completion checks for every stage.

    Args:
        layout: Artifact layout of the run
        predicates: Optional per-stage overrides keyed by stage name or stage
            kind (name wins), e.g. ``{"assemble": exists}``.
    """

    def __init__(self, layout: BatchLayout, predicates: Optional[Mapping[str, Predicate]] = None):
        self.layout = layout
        self.predicates = dict(predicates or {})

    def predicate_for(self, stage: Stage) -> Predicate:
        if stage.name in self.predicates:
            return self.predicates[stage.name]
        if stage.kind in self.predicates:
            return self.predicates[stage.kind]
        if stage.completion == "exists":
            return exists
        if stage.completion == "up_to_date":
            return up_to_date(self.layout.final_assemblies())
        return non_empty

    def artifacts(self, stage: Stage, sample: Optional[Sample] = None) -> tuple[Path, ...]:
        return expected_artifacts(stage, self.layout, sample)

    def is_complete(self, stage: Stage, sample: Optional[Sample] = None) -> bool:
        """True iff every expected artifact of the stage satisfies its predicate."""
        artifacts = self.artifacts(stage, sample)
        predicate = self.predicate_for(stage)
        return bool(artifacts) and all(predicate(path) for path in artifacts)
