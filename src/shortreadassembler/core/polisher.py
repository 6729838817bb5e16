"""Bounded iterative polishing (minimap2 alignment + Racon consensus).

Each round aligns the pooled trimmed reads to the current assembly and
polishes it. Rounds run strictly in order: round k consumes round k-1's
output (round 1 consumes the raw assembly). An empty alignment or empty
polished output ends the loop early with the last good assembly; that soft
stop never fails the sample. Only a missing or empty raw assembly does.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from shortreadassembler.core.gate import IdempotencyGate, non_empty
from shortreadassembler.core.pipeline_types import (
    Failure,
    Sample,
    SampleOutcome,
    SoftStop,
    Success,
)
from shortreadassembler.core.steps.definitions import COMBINE_READS, align_stage, polish_stage
from shortreadassembler.core.steps.layout import BatchLayout
from shortreadassembler.utils.logging import LogTemplates, get_logger


class PolishState(str, Enum):
    READY = "ready"
    ALIGNING = "aligning"
    POLISHING = "polishing"
    ADVANCE = "advance"
    STOP_EMPTY = "stop-empty"
    STOP_ERROR = "stop-error"
    DONE = "done"


class IterativePolisher:
    """Run up to ``rounds`` align+polish rounds for one sample.

    Args:
        executor: Stage executor (anything with ``run(stage, sample)``)
        gate: Idempotency gate used for the per-round short-circuit
        layout: Artifact layout of the run
        rounds: Upper bound on polishing rounds
    """

    def __init__(self, executor, gate: IdempotencyGate, layout: BatchLayout, rounds: int = 2):
        if rounds < 0:
            raise ValueError("rounds must be >= 0")
        self.executor = executor
        self.gate = gate
        self.layout = layout
        self.rounds = rounds
        self.logger = get_logger(self.__class__.__name__)
        # Terminal state of the last polish() call
        self.state: Optional[PolishState] = None

    def polish(self, sample: Sample) -> SampleOutcome:
        """Polish the raw assembly of sample.

        Returns:
            Success(best) after all rounds, SoftStop(best, reason) on an early
            stop, Failure when there is no raw assembly to start from.
        """
        s = self.layout.sample(sample.sample_id)
        current = s.assembly_fasta
        if not non_empty(current):
            self.state = None
            return Failure(f"no assembly to polish: {current}", stage="polish")

        if self.rounds == 0:
            self.state = PolishState.DONE
            return Success(current)

        if not self.gate.is_complete(COMBINE_READS, sample):
            result = self.executor.run(COMBINE_READS, sample)
            if not result.ok:
                self.state = PolishState.STOP_ERROR
                return self._soft_stop(sample, current, 1, f"could not pool reads: {result.message}")

        round_number = 1
        state = PolishState.READY
        while True:
            if state is PolishState.READY:
                polished = s.polished_fasta(round_number)
                if self.gate.is_complete(polish_stage(round_number), sample):
                    self.logger.info(
                        LogTemplates.STAGE_SKIPPED.format(
                            sample=sample.sample_id,
                            stage=f"polish_round_{round_number}",
                            reason="output exists",
                        )
                    )
                    current = polished
                    state = PolishState.ADVANCE
                    continue
                self.logger.info(
                    LogTemplates.POLISH_ROUND.format(
                        sample=sample.sample_id, round=round_number, total=self.rounds
                    )
                )
                state = PolishState.ALIGNING

            elif state is PolishState.ALIGNING:
                alignment = s.alignment(round_number)
                result = self.executor.run(align_stage(round_number), sample)
                if not result.ok or not non_empty(alignment):
                    self._discard(alignment)
                    self.state = PolishState.STOP_EMPTY
                    reason = "empty alignment" if result.ok else f"alignment failed: {result.message}"
                    return self._soft_stop(sample, current, round_number, reason)
                state = PolishState.POLISHING

            elif state is PolishState.POLISHING:
                alignment = s.alignment(round_number)
                polished = s.polished_fasta(round_number)
                result = self.executor.run(polish_stage(round_number), sample)
                self._discard(alignment)
                if not result.ok or not non_empty(polished):
                    self._discard(polished)
                    self.state = PolishState.STOP_ERROR
                    reason = "empty polished output" if result.ok else f"racon failed: {result.message}"
                    return self._soft_stop(sample, current, round_number, reason)
                current = polished
                state = PolishState.ADVANCE

            elif state is PolishState.ADVANCE:
                round_number += 1
                if round_number > self.rounds:
                    self.state = PolishState.DONE
                    return Success(current)
                state = PolishState.READY

    def _soft_stop(self, sample: Sample, current: Path, round_number: int, reason: str) -> SoftStop:
        self.logger.warning(
            LogTemplates.POLISH_SOFT_STOP.format(
                sample=sample.sample_id, round=round_number, reason=reason
            )
        )
        return SoftStop(current, reason, round=round_number)

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            self.logger.warning(f"Could not remove {path}: {exc}")
