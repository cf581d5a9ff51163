# headword_index/config.py
"""Configuration for headword harvesting runs."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Tuple

from headword_index.io.locations import validate_base_url
from headword_index.io.parse import validate_selector

__all__ = [
    "ConfigError",
    "HarvestConfig",
    "DEFAULT_COUNT",
    "DEFAULT_BASE_URL",
    "DEFAULT_SELECTOR",
    "PROGRESS_MODES",
    "MISSING_POLICIES",
    "default_workers",
]

DEFAULT_COUNT = 291_601
DEFAULT_BASE_URL = "https://www.oed.com/oed2/"
DEFAULT_SELECTOR = ".hwLabel"

PROGRESS_MODES = ("off", "plain", "fancy")
MISSING_POLICIES = ("skip", "abort")


class ConfigError(ValueError):
    """Raised when a run configuration is invalid."""


def default_workers() -> int:
    """Number of workers used when none is requested (hardware parallelism)."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class HarvestConfig:
    """Settings for a single harvesting run.

    Output modes:
        - output is None: every record goes straight to stdout as it arrives
        - output is a path: records are buffered and written once, as CSV,
          after all workers finish

    Missing-headword policy:
        - "skip": log the page and move on, like a failed fetch
        - "abort": stop issuing work and fail the whole run
    """

    # Work range
    count: int = DEFAULT_COUNT

    # Parallelism
    workers: int = 0  # 0 means one worker per CPU

    # Output
    output: Optional[Path] = None
    sort_output: bool = True

    # Source
    base_url: str = DEFAULT_BASE_URL
    selector: str = DEFAULT_SELECTOR
    timeout: Tuple[float, float] = (10.0, 30.0)  # (connect, read) seconds
    user_agent: Optional[str] = None

    # Extraction
    on_missing: Literal["skip", "abort"] = "skip"

    # Reporting
    progress: Literal["off", "plain", "fancy"] = "off"
    progress_interval: float = 0.1
    verbose: bool = False
    log_dir: Optional[Path] = None

    @property
    def buffered(self) -> bool:
        """True when results are collected in memory and flushed to a file."""
        return self.output is not None

    @property
    def show_milestones(self) -> bool:
        """Whether start/stop milestones and the run summary are reported."""
        return self.verbose or self.progress != "off"

    def resolved_workers(self) -> int:
        """Worker count with 0 replaced by the hardware default."""
        return self.workers if self.workers > 0 else default_workers()

    def validate(self) -> None:
        """
        Check the configuration before any work starts.

        Raises:
            ConfigError: If any setting is out of range
        """
        if self.count <= 0:
            raise ConfigError(f"count must be a positive integer, got {self.count}")
        if self.workers < 0:
            raise ConfigError(f"workers must be >= 0, got {self.workers}")
        if self.progress not in PROGRESS_MODES:
            raise ConfigError(
                f"progress must be one of {PROGRESS_MODES}, got {self.progress!r}"
            )
        if self.on_missing not in MISSING_POLICIES:
            raise ConfigError(
                f"on_missing must be one of {MISSING_POLICIES}, got {self.on_missing!r}"
            )
        try:
            validate_base_url(self.base_url)
            validate_selector(self.selector)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        if len(self.timeout) != 2 or min(self.timeout) <= 0:
            raise ConfigError(
                f"timeout must be a (connect, read) pair of positive seconds, got {self.timeout!r}"
            )
        if self.progress_interval <= 0:
            raise ConfigError(
                f"progress_interval must be positive, got {self.progress_interval}"
            )
