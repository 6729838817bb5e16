"""Utility helpers for ShortReadAssembler."""

from shortreadassembler.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
