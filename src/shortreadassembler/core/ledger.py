"""Failure ledger: append-only record of samples that failed in this run."""

from __future__ import annotations

import fcntl
import os
import threading
from pathlib import Path

from shortreadassembler.utils.logging import get_logger


class FailureLedger:
    """One sample identifier per line in a plain text file.

    The file is truncated by :meth:`start_run`; afterwards identifiers are
    only ever appended. Each append takes an exclusive ``flock`` and writes a
    whole line in one call so concurrent writers never interleave.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.logger = get_logger(self.__class__.__name__)
        self._failed: set[str] = set()
        self._lock = threading.Lock()

    def start_run(self) -> None:
        """Create an empty ledger for a new run."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            self.path.write_text("", encoding="utf-8")
            self._failed.clear()

    def record_failure(self, sample_id: str) -> None:
        """Append sample_id unless it is already recorded."""
        with self._lock:
            if self.has_failed(sample_id):
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as handle:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
                try:
                    handle.write(f"{sample_id}\n")
                    handle.flush()
                    os.fsync(handle.fileno())
                finally:
                    fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            self._failed.add(sample_id)
        self.logger.debug(f"Recorded failure: {sample_id}")

    def has_failed(self, sample_id: str) -> bool:
        return sample_id in self._failed

    def failed_ids(self) -> list[str]:
        """Identifiers in the order they were recorded on disk."""
        if not self.path.exists():
            return []
        seen: list[str] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and line not in seen:
                seen.append(line)
        return seen
