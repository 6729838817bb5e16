"""Pytest configuration for ShortReadAssembler tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from shortreadassembler.config import Config, RuntimeConfig
from shortreadassembler.core.pipeline_types import StageResult
from shortreadassembler.core.steps.layout import BatchLayout, expected_artifacts
from shortreadassembler.exceptions import ExternalToolError

FASTA = ">contig_1\nACGTACGTACGT\n"


@pytest.fixture(autouse=True)
def reset_logging_after_test():
    """Reset shortreadassembler logger state after each test.

    This prevents test pollution from tests that call setup_logging(),
    which sets propagate=False and breaks caplog in subsequent tests.
    """
    yield
    app_logger = logging.getLogger("shortreadassembler")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True


class FakeExecutor:
    """Stands in for StageExecutor: writes artifacts instead of running tools.

    ``behaviors`` maps ``(sample_id, stage_name)``, ``stage_name`` or
    ``stage_kind`` to ``ok`` (default), ``empty``, ``fail`` or ``raise``.
    ``empty`` writes zero-byte artifacts and exits 0; like the real executor
    it reports failure for stages that verify their outputs. ``fail`` exits 1
    without writing anything. ``raise`` lets ExternalToolError escape.
    """

    def __init__(self, layout: BatchLayout, behaviors=None):
        self.layout = layout
        self.behaviors = dict(behaviors or {})
        self.calls = []
        self.sources = {}

    def check_dependencies(self):
        pass

    def _behavior(self, stage, sample_id):
        for key in ((sample_id, stage.name), stage.name, stage.kind):
            if key in self.behaviors:
                return self.behaviors[key]
        return "ok"

    def run(self, stage, sample=None, source=None):
        sample_id = sample.sample_id if sample is not None else None
        self.calls.append((sample_id, stage.name))
        if source is not None:
            self.sources[(sample_id, stage.name)] = source

        behavior = self._behavior(stage, sample_id)
        if behavior == "fail":
            return StageResult(ok=False, exit_code=1, message=f"{stage.name} failed")
        if behavior == "raise":
            raise ExternalToolError(f"{stage.name} crashed", returncode=-1)

        for path in expected_artifacts(stage, self.layout, sample):
            path.parent.mkdir(parents=True, exist_ok=True)
            if behavior == "empty":
                path.write_text("")
            elif stage.kind == "checkm2":
                rows = [
                    f"{p.stem}\t99.5\t0.4" for p in self.layout.final_assemblies()
                ]
                path.write_text("Name\tCompleteness\tContamination\n" + "\n".join(rows) + "\n")
            else:
                path.write_text(FASTA)
        if behavior == "empty" and stage.verify_outputs:
            return StageResult(ok=False, exit_code=0, message="missing or empty output")
        return StageResult(ok=True, exit_code=0)

    def stage_calls(self, sample_id=None):
        return [name for sid, name in self.calls if sid == sample_id]


@pytest.fixture
def reads_dir(tmp_path):
    path = tmp_path / "00_reads"
    path.mkdir()
    return path


@pytest.fixture
def make_sample(reads_dir):
    """Create raw read files for a sample; ``reverse=False`` leaves it unpaired."""

    def _make(sample_id, reverse=True):
        forward = reads_dir / f"{sample_id}_R1.fastq.gz"
        forward.write_bytes(b"forward reads")
        if reverse:
            (reads_dir / f"{sample_id}_R2.fastq.gz").write_bytes(b"reverse reads")
        return forward

    return _make


@pytest.fixture
def make_config(tmp_path, reads_dir):
    """Config rooted in tmp_path with CheckM2 skipped unless overridden."""

    def _make(**overrides):
        base = Config(
            input_dir=reads_dir,
            output_dir=tmp_path / "out",
            runtime=RuntimeConfig(enable_progress=False),
        )
        overrides.setdefault("skip_checkm2", True)
        return base.with_overrides(**overrides)

    return _make


@pytest.fixture
def make_executor():
    def _make(layout, behaviors=None):
        return FakeExecutor(layout, behaviors)

    return _make
