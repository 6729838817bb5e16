"""Custom exceptions for ShortReadAssembler."""

from __future__ import annotations

from pathlib import Path


class ShortReadAssemblerError(Exception):
    """Base exception for all ShortReadAssembler errors."""

    pass


class ConfigurationError(ShortReadAssemblerError):
    """Raised when configuration is invalid or missing."""

    pass


class ExternalToolError(ShortReadAssemblerError):
    """Raised when an external tool execution fails."""

    def __init__(self, message="", command=None, returncode=None, stderr=None):
        """Initialize ExternalToolError with optional command details.

        Args:
            message: Error message
            command: Command that was executed (list of strings)
            returncode: Exit code from the command
            stderr: Standard error output from the command
        """
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class PipelineError(ShortReadAssemblerError):
    """Raised when a pipeline step fails in a way that ends the run."""

    pass


class MissingPairError(ShortReadAssemblerError):
    """Raised when a forward read file has no matching reverse read file."""

    def __init__(self, sample_id: str, forward: Path, expected_reverse: Path):
        super().__init__(
            f"No reverse reads for sample '{sample_id}': expected {expected_reverse} "
            f"next to {forward}"
        )
        self.sample_id = sample_id
        self.forward = forward
        self.expected_reverse = expected_reverse


class DependencyError(ShortReadAssemblerError):
    """Raised when required external dependencies are missing or incompatible."""

    pass
