"""Batch driver for ShortReadAssembler."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from shortreadassembler.config import Config
from shortreadassembler.core.executor import StageExecutor
from shortreadassembler.core.gate import IdempotencyGate, Predicate, non_empty
from shortreadassembler.core.ledger import FailureLedger
from shortreadassembler.core.pipeline_types import (
    BatchReport,
    Failure,
    Sample,
    SampleOutcome,
    SampleStatus,
    SoftStop,
    Stage,
    StageResult,
    Success,
)
from shortreadassembler.core.polisher import IterativePolisher
from shortreadassembler.core.report import write_summary
from shortreadassembler.core.samples import discover_samples
from shortreadassembler.core.steps.definitions import (
    ASSEMBLE,
    BATCH_STAGES,
    CHECKM2,
    FASTQC,
    FILTER,
    FINALIZE,
    TRIM,
    pipeline_stages,
)
from shortreadassembler.core.steps.layout import BatchLayout
from shortreadassembler.exceptions import PipelineError, ShortReadAssemblerError
from shortreadassembler.utils.logging import LogTemplates, get_logger
from shortreadassembler.utils.progress import iter_progress


class Pipeline:
    """Run every sample through the per-sample stages, then the batch stages.

    Per-sample failures are recorded in the failure ledger and the batch moves
    on to the next sample. Batch-stage failures raise PipelineError.

    Args:
        config: Immutable run configuration
        executor: Stage executor; defaults to the external tool executor
        gate: Idempotency gate; defaults to one over ``config.output_dir``
        ledger: Failure ledger; defaults to ``<output_dir>/failed.txt``
        predicates: Completion predicate overrides for the default gate
    """

    def __init__(
        self,
        config: Config,
        executor=None,
        gate: Optional[IdempotencyGate] = None,
        ledger: Optional[FailureLedger] = None,
        predicates: Optional[Mapping[str, Predicate]] = None,
    ):
        self.config = config
        self.logger = get_logger(self.__class__.__name__)
        self.layout = BatchLayout(config.output_dir)
        self.gate = gate or IdempotencyGate(self.layout, predicates)
        self.executor = executor or StageExecutor(config, self.layout)
        self.ledger = ledger or FailureLedger(self.layout.ledger_file)
        self.polisher = IterativePolisher(
            self.executor, self.gate, self.layout, rounds=config.tools.racon_rounds
        )

    @property
    def stages(self) -> list[Stage]:
        return pipeline_stages(self.config.tools.racon_rounds)

    def discover(self) -> list[Sample]:
        return discover_samples(
            self.config.input_dir,
            forward_suffix=self.config.forward_suffix,
            reverse_suffix=self.config.reverse_suffix,
            on_missing_pair=self.config.runtime.missing_pair_policy,
        )

    # ------------------------------------------------------------------ run

    def run(self, check_dependencies: bool = True) -> BatchReport:
        """Process the whole batch.

        Configuration and environment problems (missing input directory,
        unpaired reads, missing tools) raise before any sample is touched.
        """
        samples = self.discover()
        if check_dependencies:
            self.executor.check_dependencies()

        self.ledger.start_run()
        report = BatchReport(
            final_dir=self.layout.final_dir,
            checkm2_dir=self.layout.checkm2_dir,
            stats_report=self.layout.stats_report,
            ledger_file=self.ledger.path,
            samples=samples,
        )

        iterator = iter_progress(
            samples,
            total=len(samples),
            desc="Samples",
            enabled=self.config.runtime.enable_progress,
        )
        for index, sample in enumerate(iterator, 1):
            self.logger.info(
                LogTemplates.SAMPLE_START.format(sample=sample.sample_id, index=index, total=len(samples))
            )
            report.outcomes[sample.sample_id] = self.process_sample(sample)

        self.run_aggregates()

        report.failed = self.ledger.failed_ids()
        checkm2_report = None if self.config.tools.skip_checkm2 else self.layout.checkm2_report
        report.summary_file = write_summary(report, self.layout.summary_report, checkm2_report)
        self.logger.info(
            f"Batch finished: {len(report.final_assemblies)} assembled, {len(report.failed)} failed"
        )
        return report

    def process_sample(self, sample: Sample) -> SampleOutcome:
        """Run one sample; failures are ledgered, never raised."""
        sample.status = SampleStatus.IN_PROGRESS
        try:
            outcome = self._process(sample)
        except ShortReadAssemblerError as exc:
            outcome = Failure(str(exc))

        if isinstance(outcome, Failure):
            sample.status = SampleStatus.FAILED
            self.ledger.record_failure(sample.sample_id)
            self.logger.error(
                LogTemplates.SAMPLE_FAILED.format(sample=sample.sample_id, reason=outcome.reason)
            )
        else:
            sample.status = SampleStatus.COMPLETE
            self.logger.info(
                LogTemplates.SAMPLE_COMPLETE.format(sample=sample.sample_id, artifact=outcome.artifact)
            )
        return outcome

    def _run_stage(self, stage: Stage, sample: Optional[Sample] = None) -> StageResult:
        """Gate then execute."""
        if self.gate.is_complete(stage, sample):
            label = sample.sample_id if sample is not None else "batch"
            self.logger.info(
                LogTemplates.STAGE_SKIPPED.format(sample=label, stage=stage.name, reason="output exists")
            )
            return StageResult(ok=True, exit_code=0, message="skipped")
        return self.executor.run(stage, sample)

    def _process(self, sample: Sample) -> SampleOutcome:
        s = self.layout.sample(sample.sample_id)

        # QC and trimming failures are not fatal; missing trimmed reads fail the assembly
        for stage in (FASTQC, TRIM):
            result = self._run_stage(stage, sample)
            if not result.ok:
                self.logger.warning(
                    f"[{sample.sample_id}] {stage.name} failed (exit code {result.exit_code}); continuing"
                )

        result = self._run_stage(ASSEMBLE, sample)
        if not result.ok:
            return Failure(f"assembly failed: {result.message}", stage=ASSEMBLE.name)

        if self.gate.is_complete(FINALIZE, sample):
            self.logger.info(
                LogTemplates.STAGE_SKIPPED.format(
                    sample=sample.sample_id, stage=FINALIZE.name, reason="final assembly exists"
                )
            )
            return Success(s.final_fasta)

        polished: Optional[SampleOutcome] = None
        if not self.gate.is_complete(FILTER, sample):
            polished = self.polisher.polish(sample)
            if isinstance(polished, Failure):
                return polished
            if not non_empty(polished.artifact):
                return Failure(f"no valid assembly after polishing: {polished.artifact}", stage="polish")
            result = self.executor.run(FILTER, sample, source=polished.artifact)
            if not result.ok:
                return Failure(f"length filter failed: {result.message}", stage=FILTER.name)

        result = self._run_stage(FINALIZE, sample)
        if not result.ok:
            return Failure(f"could not write final assembly: {result.message}", stage=FINALIZE.name)

        if isinstance(polished, SoftStop):
            return SoftStop(s.final_fasta, polished.reason, round=polished.round)
        return Success(s.final_fasta)

    def run_aggregates(self) -> None:
        """Batch stages over whatever final assemblies exist.

        Raises:
            PipelineError: if any batch stage fails.
        """
        if not self.layout.final_assemblies():
            self.logger.warning(
                f"No final assemblies in {self.layout.final_dir}; skipping batch stages"
            )
            return

        for stage in BATCH_STAGES:
            if stage is CHECKM2 and self.config.tools.skip_checkm2:
                self.logger.info(
                    LogTemplates.STAGE_SKIPPED.format(sample="batch", stage=stage.name, reason="disabled")
                )
                continue
            result = self._run_stage(stage)
            if not result.ok:
                raise PipelineError(
                    f"Batch stage {stage.name} failed (exit code {result.exit_code}): {result.message}"
                )

    # --------------------------------------------------------------- status

    def stage_status(self, sample: Sample) -> Dict[str, bool]:
        """Gate result for every per-sample stage, without running anything."""
        return {
            stage.name: self.gate.is_complete(stage, sample)
            for stage in self.stages
            if stage.scope == "sample" and stage.kind != "align"
        }
