"""
Headword index harvesting by numeric page index.

Fetches every page in a contiguous index range with a pool of worker threads,
extracts one headword per page, and writes ``"<word>",<index>`` records
either straight to stdout or to a CSV file flushed at the end of the run.

Main entry point:
    harvest() - Full run orchestration

Key components:
    - cursor: Shared work cursor handing out indices exactly once
    - worker: Per-thread fetch/extract/collect loop
    - collector: Immediate (stdout) or buffered (CSV) result sink
    - progress: Percentage and ETA rendering on stderr
    - interrupt: Two-stage Ctrl-C handling (drain, then force exit)
    - executor: Worker pool management
"""

from headword_index.config import HarvestConfig, ConfigError
from headword_index.core import harvest, HarvestResult

__all__ = ["harvest", "HarvestConfig", "HarvestResult", "ConfigError"]
