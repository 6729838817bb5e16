"""Configuration management for ShortReadAssembler.

Configuration objects are frozen; use :meth:`Config.with_overrides` (or
``dataclasses.replace``) to derive a modified copy.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from shortreadassembler.exceptions import ConfigurationError

MISSING_PAIR_POLICIES = ("fail", "skip")


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime configuration."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    # Seconds per external tool invocation; None waits indefinitely
    tool_timeout: Optional[int] = None
    # What to do with a forward read file that has no reverse mate: 'fail' | 'skip'
    missing_pair_policy: str = "fail"
    enable_progress: bool = True


@dataclass(frozen=True)
class PerformanceConfig:
    """Thread and memory budgets handed to the external tools."""

    threads: int = 8
    spades_threads: int = 6
    memory_gb: int = 200


@dataclass(frozen=True)
class ToolConfig:
    """Stage-specific tool parameters."""

    length_filter: int = 500
    racon_rounds: int = 2
    minimap2_preset: str = "sr"
    checkm2_database: Optional[Path] = None
    skip_checkm2: bool = False


@dataclass(frozen=True)
class Config:
    """Main configuration class."""

    input_dir: Path = Path("00_reads")
    output_dir: Path = Path(".")
    forward_suffix: str = "_R1.fastq.gz"
    reverse_suffix: str = "_R2.fastq.gz"

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    tools: ToolConfig = field(default_factory=ToolConfig)

    # Convenience properties
    @property
    def threads(self) -> int:
        return self.performance.threads

    @property
    def racon_rounds(self) -> int:
        return self.tools.racon_rounds

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with top-level or nested fields replaced.

        Keys are looked up on ``Config`` first, then on the runtime, performance
        and tools sections. ``None`` values are ignored so unset CLI options
        leave the loaded configuration untouched.
        """
        top: Dict[str, Any] = {}
        sections: Dict[str, Dict[str, Any]] = {"runtime": {}, "performance": {}, "tools": {}}
        top_names = {f.name for f in fields(self)} - set(sections)

        for key, value in overrides.items():
            if value is None:
                continue
            if key in top_names:
                top[key] = value
                continue
            for section in sections:
                if key in {f.name for f in fields(getattr(self, section))}:
                    sections[section][key] = value
                    break
            else:
                raise ConfigurationError(f"Unknown configuration option: {key}")

        for section, values in sections.items():
            if values:
                top[section] = replace(getattr(self, section), **values)
        return replace(self, **top)

    def validate(self) -> None:
        """Validate configuration; raises ConfigurationError on the first problem."""
        if not self.input_dir.is_dir():
            raise ConfigurationError(f"Input directory not found: {self.input_dir}")
        if not self.forward_suffix or not self.reverse_suffix:
            raise ConfigurationError("Read suffixes must not be empty")
        if self.forward_suffix == self.reverse_suffix:
            raise ConfigurationError("Forward and reverse read suffixes must differ")

        if self.performance.threads < 1:
            raise ConfigurationError("Threads must be >= 1")
        if self.performance.spades_threads < 1:
            raise ConfigurationError("SPAdes threads must be >= 1")
        if self.performance.memory_gb < 1:
            raise ConfigurationError("Memory (GB) must be >= 1")

        if self.tools.length_filter < 0:
            raise ConfigurationError("Minimum contig length must be >= 0")
        if self.tools.racon_rounds < 0:
            raise ConfigurationError("Racon rounds must be >= 0")

        timeout = self.runtime.tool_timeout
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("Tool timeout must be a positive number of seconds")
        if self.runtime.missing_pair_policy not in MISSING_PAIR_POLICIES:
            raise ConfigurationError(
                f"Invalid missing_pair_policy: {self.runtime.missing_pair_policy!r} "
                f"(expected one of {', '.join(MISSING_PAIR_POLICIES)})"
            )

        if not self.tools.skip_checkm2:
            database = self.tools.checkm2_database
            if database is None:
                raise ConfigurationError(
                    "CheckM2 database path is required (tools.checkm2_database) "
                    "unless CheckM2 is skipped"
                )
            if not Path(database).exists():
                raise ConfigurationError(f"CheckM2 database not found: {database}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""

        def path_to_str(obj):
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: path_to_str(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [path_to_str(item) for item in obj]
            return obj

        return path_to_str(asdict(self))


_PATH_KEYS = {"input_dir", "output_dir", "log_file", "checkm2_database"}


def _coerce(key: str, value: Any) -> Any:
    if key in _PATH_KEYS and value is not None:
        return Path(value)
    return value


def _build_section(cls, data: Optional[Dict[str, Any]], section: str):
    if not data:
        return cls()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(
            f"Unsupported option(s) in '{section}': " + ", ".join(sorted(unknown))
        )
    return cls(**{k: _coerce(k, v) for k, v in data.items()})


def config_from_dict(data: Dict[str, Any]) -> Config:
    """Build a Config from a plain mapping (as read from YAML)."""
    sections = {"runtime", "performance", "tools"}
    top_known = {f.name for f in fields(Config)} - sections
    unknown = set(data) - top_known - sections
    if unknown:
        raise ConfigurationError("Unsupported config option(s): " + ", ".join(sorted(unknown)))

    top = {k: _coerce(k, v) for k, v in data.items() if k in top_known and v is not None}
    return Config(
        runtime=_build_section(RuntimeConfig, data.get("runtime"), "runtime"),
        performance=_build_section(PerformanceConfig, data.get("performance"), "performance"),
        tools=_build_section(ToolConfig, data.get("tools"), "tools"),
        **top,
    )


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return config_from_dict(data)


def save_config(cfg: Config, path: Path) -> None:
    """Save configuration to YAML file."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(cfg.to_dict(), f, default_flow_style=False, sort_keys=False)
