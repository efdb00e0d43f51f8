from __future__ import annotations
import logging
import os
from typing import List

import psutil

from .models import DriveInfo

logger = logging.getLogger(__name__)


def list_drives() -> List[DriveInfo]:
    """Mounted volumes that can be used as scan roots."""
    out: List[DriveInfo] = []
    seen = set()
    for part in psutil.disk_partitions(all=False):
        if not part.mountpoint:
            continue
        mountpoint = os.path.abspath(part.mountpoint)
        if mountpoint in seen:
            continue
        seen.add(mountpoint)
        try:
            usage = psutil.disk_usage(mountpoint)
        except OSError as e:
            logger.debug("No usage info for %s: %s", mountpoint, e)
            continue
        out.append(DriveInfo(mountpoint, part.fstype, int(usage.total), int(usage.used), int(usage.free)))
    out.sort(key=lambda d: d.mountpoint.lower())
    return out
