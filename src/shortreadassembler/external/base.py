"""Base class for external tool execution."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from packaging import version

from shortreadassembler.exceptions import ExternalToolError
from shortreadassembler.utils.logging import LogTemplates, get_logger


class ExternalTool:
    """Base class for external tool wrappers."""

    tool_name: str = ""
    required_version: Optional[str] = None
    version_command: Optional[str] = "--version"
    version_regex: Optional[str] = r"(\d+\.\d+(?:\.\d+)*)"

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        threads: int = 1,
        timeout: Optional[int] = None,
    ):
        self.threads = threads
        # None means the call blocks until the tool exits
        self.timeout = timeout
        self.logger = logger or get_logger(f"external.{self.tool_name}")
        self._check_installation()

    def check_tool_availability(self, tool_name: str) -> bool:
        """Check if a tool is available in PATH."""
        return shutil.which(tool_name) is not None

    def _check_installation(self) -> None:
        """Check if the tool is installed and meets version requirements."""
        if not self.check_tool_availability(self.tool_name):
            raise ExternalToolError(
                f"{self.tool_name} not found in PATH. "
                f"Please install it via: conda install -c bioconda {self.tool_name}"
            )

        if self.required_version:
            current_version = self.get_tool_version()
            if current_version and not self.check_minimum_version(
                current_version, self.required_version
            ):
                raise ExternalToolError(
                    f"{self.tool_name} version {current_version} is below "
                    f"required version {self.required_version}"
                )
            self.logger.debug(f"{self.tool_name} version: {current_version}")

    def get_tool_version(self) -> Optional[str]:
        """Get tool version string."""
        if not self.version_command:
            return None
        try:
            result = subprocess.run(
                [self.tool_name, self.version_command],
                capture_output=True,
                text=True,
                check=False,
                timeout=10,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            self.logger.debug(f"Could not get version for {self.tool_name}: {e}")
            return None

        output = result.stdout + result.stderr
        if self.version_regex:
            match = re.search(self.version_regex, output)
            if match:
                return match.group(1)
        return None

    def check_minimum_version(self, current_version: str, required_version: str) -> bool:
        """Check if current version meets minimum requirement.

        Unparseable version strings log a warning and pass.
        """
        try:
            return version.parse(current_version) >= version.parse(required_version)
        except version.InvalidVersion:
            self.logger.warning(
                f"Could not compare {self.tool_name} version '{current_version}' "
                f"with '{required_version}'; please verify the tool version manually."
            )
            return True

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Path] = None,
        check: bool = True,
        capture_output: bool = True,
        timeout: Optional[int] = None,
        stdout_file: Optional[Path] = None,
    ) -> tuple[str, str]:
        """Execute command with enhanced error handling.

        Args:
            cmd: Command and arguments to execute
            cwd: Working directory for the command
            check: Whether to raise on non-zero exit code
            capture_output: Whether to capture stdout/stderr
            timeout: Timeout in seconds (defaults to the wrapper's timeout)
            stdout_file: Redirect stdout into this file. The file only appears
                once the command has exited successfully.

        Returns:
            Tuple of (stdout, stderr); stdout is empty when redirected to a file.

        Raises:
            ExternalToolError: on non-zero exit, timeout or launch failure.
        """
        effective_timeout = timeout if timeout is not None else self.timeout
        cmd_str = " ".join(str(c) for c in cmd)
        self.logger.info(LogTemplates.TOOL_START.format(tool_name=self.tool_name, command=cmd_str))

        partial: Optional[Path] = None
        try:
            if stdout_file is not None:
                stdout_file.parent.mkdir(parents=True, exist_ok=True)
                partial = stdout_file.with_name(stdout_file.name + ".partial")
                with open(partial, "w") as handle:
                    result = subprocess.run(
                        [str(c) for c in cmd],
                        cwd=cwd,
                        stdout=handle,
                        stderr=subprocess.PIPE,
                        text=True,
                        check=check,
                        timeout=effective_timeout,
                    )
                partial.replace(stdout_file)
                partial = None
            else:
                result = subprocess.run(
                    [str(c) for c in cmd],
                    cwd=cwd,
                    capture_output=capture_output,
                    text=True,
                    check=check,
                    timeout=effective_timeout,
                )

            if result.stderr and not result.returncode:
                self.logger.debug(f"Command stderr: {result.stderr[-500:]}")

            if capture_output and stdout_file is None:
                return result.stdout or "", result.stderr or ""
            return "", result.stderr or ""

        except subprocess.TimeoutExpired:
            self.logger.error(f"Command timed out after {effective_timeout}s: {cmd_str}")
            raise ExternalToolError(
                f"{self.tool_name} timed out",
                command=list(cmd),
                returncode=-1,
                stderr=f"Process timed out after {effective_timeout} seconds",
            )
        except subprocess.CalledProcessError as e:
            self.logger.error(
                LogTemplates.TOOL_FAILURE.format(tool_name=self.tool_name, exit_code=e.returncode)
            )
            self.logger.error(f"Command: {cmd_str}")
            self.logger.error(f"Error: {e.stderr[-1000:] if e.stderr else 'No error output'}")
            raise ExternalToolError(
                f"{self.tool_name} failed", command=list(cmd), returncode=e.returncode, stderr=e.stderr
            )
        except OSError as e:
            self.logger.error(f"OS error running command: {cmd_str}")
            self.logger.error(f"Error: {e}")
            raise ExternalToolError(
                f"Failed to execute {self.tool_name}", command=list(cmd), returncode=-1, stderr=str(e)
            )
        finally:
            if partial is not None:
                partial.unlink(missing_ok=True)
