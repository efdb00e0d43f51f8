"""
Configuration defaults for disktop scans.
"""
from __future__ import annotations
import os
import sys
from dataclasses import dataclass, field
from typing import Tuple

import psutil

DEFAULT_DEPTH = 1
DEFAULT_TOP_N = 10
RESERVED_PREFIX = "$"
PROGRESS_INTERVAL = 0.10  # seconds between progress callbacks
MAX_WORKERS = 32

WINDOWS_DENY_LIST = (
    "C:\\Documents and Settings",
    "C:\\Recovery",
    "C:\\Windows",
)
POSIX_DENY_LIST = ("/proc", "/sys", "/dev")


def default_root() -> str:
    if sys.platform.startswith("win"):
        drive = os.environ.get("SystemDrive", "C:")
        return drive.rstrip("\\/") + "\\"
    return os.sep


def default_deny_list() -> Tuple[str, ...]:
    if sys.platform.startswith("win"):
        return WINDOWS_DENY_LIST
    return POSIX_DENY_LIST


def default_workers() -> int:
    # same shape as ThreadPoolExecutor's own default
    cpus = psutil.cpu_count(logical=True) or 1
    return min(MAX_WORKERS, cpus + 4)


@dataclass
class ScanConfig:
    root: str = field(default_factory=default_root)
    max_depth: int = DEFAULT_DEPTH
    top_n: int = DEFAULT_TOP_N
    reserved_prefix: str = RESERVED_PREFIX
    deny_list: Tuple[str, ...] = field(default_factory=default_deny_list)
    workers: int = field(default_factory=default_workers)
    follow_symlinks: bool = False
    streaming: bool = True

    @property
    def concurrent(self) -> bool:
        return self.workers > 1
