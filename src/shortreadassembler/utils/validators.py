"""Validation utilities for ShortReadAssembler."""

from __future__ import annotations

import importlib
import shutil
from typing import List

REQUIRED_MODULES = ["click", "yaml", "pandas", "tqdm", "packaging"]

EXTERNAL_TOOLS = [
    "fastqc",
    "fastp",
    "spades.py",
    "minimap2",
    "racon",
    "seqtk",
    "checkm2",
    "assembly-stats",
]


def validate_installation(full_check: bool = False) -> List[str]:
    """
    Validate ShortReadAssembler installation and dependencies.

    Args:
        full_check: Also look for the external tools on PATH

    Returns:
        List of validation issues (empty if all good)
    """
    issues = []

    for module in REQUIRED_MODULES:
        try:
            importlib.import_module(module)
        except ImportError:
            issues.append(f"Missing Python module: {module}")

    if full_check:
        for tool_name in EXTERNAL_TOOLS:
            if not shutil.which(tool_name):
                issues.append(f"External tool not found: {tool_name}")

    try:
        from shortreadassembler.core.pipeline import Pipeline  # noqa: F401
        from shortreadassembler.config import Config  # noqa: F401
    except ImportError as e:
        issues.append(f"ShortReadAssembler module import error: {e}")

    return issues
