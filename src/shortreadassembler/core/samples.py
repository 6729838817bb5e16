"""Discovery of paired-end samples in an input directory."""

from __future__ import annotations

from pathlib import Path

from shortreadassembler.core.pipeline_types import Sample
from shortreadassembler.exceptions import ConfigurationError, MissingPairError
from shortreadassembler.utils.logging import get_logger

logger = get_logger("samples")


def discover_samples(
    input_dir: Path,
    forward_suffix: str = "_R1.fastq.gz",
    reverse_suffix: str = "_R2.fastq.gz",
    on_missing_pair: str = "fail",
) -> list[Sample]:
    """Find ``<ID><forward_suffix>`` files and pair each with its reverse mate.

    Args:
        input_dir: Directory holding the raw reads
        forward_suffix: Suffix identifying forward (R1) files
        reverse_suffix: Suffix substituted to locate the reverse (R2) file
        on_missing_pair: ``fail`` raises MissingPairError, ``skip`` logs a warning

    Returns:
        Samples sorted by identifier.

    Raises:
        ConfigurationError: input_dir does not exist.
        MissingPairError: a forward file has no reverse mate and policy is ``fail``.
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise ConfigurationError(f"Input directory not found: {input_dir}")
    if on_missing_pair not in ("fail", "skip"):
        raise ConfigurationError(f"Invalid missing-pair policy: {on_missing_pair!r}")

    samples: list[Sample] = []
    for forward in sorted(input_dir.glob(f"*{forward_suffix}")):
        if not forward.is_file():
            continue
        sample_id = forward.name[: -len(forward_suffix)]
        if not sample_id:
            logger.warning(f"Ignoring read file without sample name: {forward}")
            continue
        reverse = forward.with_name(sample_id + reverse_suffix)
        if not reverse.is_file():
            if on_missing_pair == "fail":
                raise MissingPairError(sample_id, forward, reverse)
            logger.warning(f"Skipping sample {sample_id}: reverse reads not found ({reverse})")
            continue
        samples.append(Sample(sample_id=sample_id, forward=forward, reverse=reverse))

    samples.sort(key=lambda s: s.sample_id)
    if not samples:
        logger.warning(f"No paired samples matching *{forward_suffix} in {input_dir}")
    else:
        logger.info(f"Discovered {len(samples)} sample(s) in {input_dir}")
    return samples
