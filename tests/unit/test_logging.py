"""Tests for logging utilities."""

import logging

from shortreadassembler.utils.logging import LogTemplates, get_logger, setup_logging


def test_get_logger_is_namespaced():
    assert get_logger("pipeline").name == "shortreadassembler.pipeline"


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(level=logging.WARNING, log_file=log_file)
    get_logger("test").debug("debug line for the file")
    for handler in logging.getLogger("shortreadassembler").handlers:
        handler.flush()
    assert "debug line for the file" in log_file.read_text()


def test_setup_logging_is_repeatable():
    setup_logging(level=logging.INFO)
    setup_logging(level=logging.INFO)
    assert len(logging.getLogger("shortreadassembler").handlers) == 1


def test_templates_format():
    message = LogTemplates.STAGE_SKIPPED.format(sample="A", stage="assemble", reason="output exists")
    assert message == "[A] Skipping stage: assemble - output exists"
