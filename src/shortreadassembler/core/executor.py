"""Stage executor: runs one stage for one sample through the tool wrappers."""

from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import Callable, Dict, Optional

from shortreadassembler.config import Config
from shortreadassembler.core.gate import non_empty
from shortreadassembler.core.pipeline_types import Sample, Stage, StageResult
from shortreadassembler.core.steps.layout import FINAL_EXTENSION, BatchLayout, expected_artifacts
from shortreadassembler.exceptions import DependencyError, ExternalToolError
from shortreadassembler.external import (
    AssemblyStats,
    CheckM2,
    ExternalTool,
    Fastp,
    FastQC,
    Minimap2,
    Racon,
    Seqtk,
    Spades,
)
from shortreadassembler.utils.logging import LogTemplates, get_logger


class StageExecutor:
    """Invoke the external tool behind a stage and report success or failure.

    The executor never decides whether a stage should run; the caller pairs
    it with :class:`~shortreadassembler.core.gate.IdempotencyGate`. It never
    raises for a tool failure: non-zero exit codes, timeouts, launch errors
    and (where the stage verifies outputs) missing or empty artifacts all come
    back as ``StageResult(ok=False, ...)``.
    """

    def __init__(self, config: Config, layout: Optional[BatchLayout] = None):
        self.config = config
        self.layout = layout or BatchLayout(config.output_dir)
        self.logger = get_logger(self.__class__.__name__)
        self._tools: Dict[str, ExternalTool] = {}

    # ------------------------------------------------------------------ tools

    def _tool_factories(self) -> Dict[str, Callable[[], ExternalTool]]:
        perf = self.config.performance
        timeout = self.config.runtime.tool_timeout
        factories: Dict[str, Callable[[], ExternalTool]] = {
            "fastqc": lambda: FastQC(threads=perf.threads, timeout=timeout),
            "fastp": lambda: Fastp(threads=perf.threads, timeout=timeout),
            "spades": lambda: Spades(
                memory_gb=perf.memory_gb, threads=perf.spades_threads, timeout=timeout
            ),
            "minimap2": lambda: Minimap2(
                preset=self.config.tools.minimap2_preset, threads=perf.threads, timeout=timeout
            ),
            "racon": lambda: Racon(threads=perf.threads, timeout=timeout),
            "seqtk": lambda: Seqtk(threads=1, timeout=timeout),
            "assembly_stats": lambda: AssemblyStats(threads=1, timeout=timeout),
        }
        if not self.config.tools.skip_checkm2:
            factories["checkm2"] = lambda: CheckM2(threads=perf.threads, timeout=timeout)
        if self.config.tools.racon_rounds == 0:
            factories.pop("minimap2")
            factories.pop("racon")
        return factories

    def tool(self, key: str) -> ExternalTool:
        """Return the (cached) wrapper for key, checking installation on first use."""
        if key not in self._tools:
            self._tools[key] = self._tool_factories()[key]()
        return self._tools[key]

    def check_dependencies(self) -> None:
        """Instantiate every wrapper the configured run needs.

        Raises:
            DependencyError: listing every tool that is missing or too old.
        """
        problems = []
        for key in self._tool_factories():
            try:
                self.tool(key)
            except ExternalToolError as exc:
                problems.append(str(exc))
        if problems:
            raise DependencyError("Missing external tools:\n  " + "\n  ".join(problems))
        self.logger.info("All required external tools found")

    # -------------------------------------------------------------- execution

    def run(
        self, stage: Stage, sample: Optional[Sample] = None, source: Optional[Path] = None
    ) -> StageResult:
        """Run stage for sample (``None`` for batch stages).

        ``source`` is the input assembly for stages whose input is decided at
        run time (the filter consumes whatever the polisher ended with).
        """
        handler = getattr(self, f"_run_{stage.kind}", None)
        if handler is None:
            raise ValueError(f"No executor for stage kind: {stage.kind}")

        label = sample.sample_id if sample is not None else "batch"
        self.logger.info(LogTemplates.STAGE_START.format(sample=label, stage=stage.name))
        start = time.time()
        try:
            handler(stage, sample, source)
        except ExternalToolError as exc:
            exit_code = exc.returncode if exc.returncode is not None else -1
            self.logger.warning(
                LogTemplates.STAGE_FAILURE.format(sample=label, stage=stage.name, exit_code=exit_code)
            )
            return StageResult(ok=False, exit_code=exit_code, message=str(exc))
        except OSError as exc:
            self.logger.warning(f"[{label}] Stage {stage.name} failed: {exc}")
            return StageResult(ok=False, exit_code=-1, message=str(exc))

        if stage.verify_outputs:
            missing = [
                p for p in expected_artifacts(stage, self.layout, sample) if not non_empty(p)
            ]
            if missing:
                message = "missing or empty output: " + ", ".join(str(p) for p in missing)
                self.logger.warning(f"[{label}] Stage {stage.name} exited 0 but left {message}")
                return StageResult(ok=False, exit_code=0, message=message)

        self.logger.info(
            LogTemplates.STAGE_SUCCESS.format(
                sample=label, stage=stage.name, duration=time.time() - start
            )
        )
        return StageResult(ok=True, exit_code=0)

    # ------------------------------------------------------ per-stage routines

    def _run_fastqc(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        self.tool("fastqc").run_qc(sample.forward, sample.reverse, s.fastqc_dir)

    def _run_trim(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        self.tool("fastp").trim(
            sample.forward,
            sample.reverse,
            s.trimmed_forward,
            s.trimmed_reverse,
            s.fastp_html,
            s.fastp_json,
        )

    def _run_assemble(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        contigs = self.tool("spades").assemble(s.trimmed_forward, s.trimmed_reverse, s.spades_dir)
        if not contigs.exists():
            self.logger.warning(f"[{sample.sample_id}] SPAdes left no contigs: {contigs}")
            return
        shutil.copyfile(contigs, s.assembly_fasta)

    def _run_combine_reads(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        # Concatenated gzip members form a valid gzip stream
        s = self.layout.sample(sample.sample_id)
        partial = s.combined_reads.with_name(s.combined_reads.name + ".partial")
        try:
            with open(partial, "wb") as out:
                for mate in (s.trimmed_forward, s.trimmed_reverse):
                    with open(mate, "rb") as src:
                        shutil.copyfileobj(src, out)
            partial.replace(s.combined_reads)
        finally:
            partial.unlink(missing_ok=True)

    def _run_align(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        k = stage.round or 1
        self.tool("minimap2").align(s.polish_input(k), s.combined_reads, s.alignment(k))

    def _run_polish(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        k = stage.round or 1
        self.tool("racon").polish(
            s.combined_reads, s.alignment(k), s.polish_input(k), s.polished_fasta(k)
        )

    def _run_filter(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        assembly = source if source is not None else s.assembly_fasta
        self.tool("seqtk").filter_by_length(
            assembly, s.filtered_fasta, self.config.tools.length_filter
        )

    def _run_finalize(self, stage: Stage, sample: Sample, source: Optional[Path]) -> None:
        s = self.layout.sample(sample.sample_id)
        s.final_fasta.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(s.filtered_fasta, s.final_fasta)
        self.logger.debug(f"Copied {s.filtered_fasta} -> {s.final_fasta}")

    def _run_checkm2(self, stage: Stage, sample: None, source: Optional[Path]) -> None:
        database = self.config.tools.checkm2_database
        if database is None:
            raise ExternalToolError("CheckM2 database is not configured", returncode=-1)
        self.tool("checkm2").predict(
            Path(database),
            self.layout.final_dir,
            self.layout.checkm2_dir,
            extension=FINAL_EXTENSION,
        )

    def _run_assembly_stats(self, stage: Stage, sample: None, source: Optional[Path]) -> None:
        assemblies = self.layout.final_assemblies()
        self.tool("assembly_stats").report(assemblies, self.layout.stats_report)
