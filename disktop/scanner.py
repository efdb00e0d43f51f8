from __future__ import annotations
import logging
import os
import time
from typing import Callable, Optional

from .aggregator import ResultAccumulator
from .config import ScanConfig
from .models import ErrorKind, ScanResult
from .topn import select
from .traversal import ProgressCb, Traverser

logger = logging.getLogger(__name__)


def scan(config: Optional[ScanConfig] = None,
         cancel_flag: Optional[Callable[[], bool]] = None,
         progress: Optional[ProgressCb] = None) -> ScanResult:
    config = config or ScanConfig()
    root = os.path.abspath(config.root)
    t0 = time.perf_counter()

    if config.streaming:
        acc = ResultAccumulator(top_n=config.top_n, retain_observations=False)
    else:
        acc = ResultAccumulator()

    traverser = Traverser(config, accumulator=acc, cancel_flag=cancel_flag, progress=progress)
    traverser.traverse(root, config.max_depth)
    snap = acc.snapshot()

    if snap.top_files is not None:
        top_files = list(snap.top_files)
    else:
        top_files = select(snap.observations, config.top_n)

    elapsed = time.perf_counter() - t0
    root_accessible = not any(e.path == root and e.kind is ErrorKind.INACCESSIBLE_PATH for e in snap.errors)
    logger.info("Scanned %s: %d files, %d dirs, %d errors in %.3fs",
                root, snap.files, snap.dirs, len(snap.errors), elapsed)

    return ScanResult(
        root=root,
        top_files=top_files,
        files=snap.files,
        dirs=snap.dirs,
        errors=list(snap.errors),
        elapsed_sec=elapsed,
        root_accessible=root_accessible,
        cancelled=traverser.cancelled,
    )
