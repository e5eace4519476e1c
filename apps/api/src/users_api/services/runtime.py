"""Process-level figures reported by the stats endpoint."""

import os
import resource
import sys
import time
from pathlib import Path

STATM_PATH = Path("/proc/self/statm")


class ProcessClock:
    """Measures uptime from the moment it is created."""

    def __init__(self) -> None:
        self.started = time.monotonic()

    def uptime(self) -> float:
        """Seconds elapsed since creation."""
        return time.monotonic() - self.started


def _current_rss() -> int | None:
    try:
        resident_pages = int(STATM_PATH.read_text().split()[1])
    except OSError:
        return None
    return resident_pages * os.sysconf("SC_PAGE_SIZE")


def _peak_rss() -> int:
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS bytes
    if sys.platform != "darwin":
        rss *= 1024
    return rss


def memory_usage() -> dict[str, int]:
    """Sample the resident set size of this process, in bytes.

    Reads the current figure from procfs. Where procfs is missing (macOS),
    falls back to the peak reported by getrusage.
    """
    rss = _current_rss()
    return {"rss": rss if rss is not None else _peak_rss()}
