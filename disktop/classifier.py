from __future__ import annotations
import logging
import os
import stat as statmod

from .config import RESERVED_PREFIX
from .models import ClassifyResult, ErrorKind, ErrorRecord, FileObservation

logger = logging.getLogger(__name__)


def _describe(exc: OSError) -> str:
    return f"{exc.__class__.__name__}: {exc.strerror or exc}"


def classify(path: str,
             reserved_prefix: str = RESERVED_PREFIX,
             follow_symlinks: bool = False) -> ClassifyResult:
    """List the immediate entries of ``path``.

    Never raises for OS errors: an unlistable directory comes back with
    ``accessible=False`` and a single INACCESSIBLE_PATH record, a file whose
    size cannot be read becomes an UNREADABLE_FILE record.
    """
    result = ClassifyResult(path=path, accessible=False)

    if not os.path.isdir(path):
        result.errors.append(ErrorRecord(path, ErrorKind.INACCESSIBLE_PATH, "not a directory"))
        return result

    try:
        with os.scandir(path) as it:
            for entry in it:
                if reserved_prefix and entry.name.startswith(reserved_prefix):
                    continue

                try:
                    if entry.is_symlink() and not follow_symlinks:
                        continue
                    is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
                except OSError as e:
                    result.errors.append(ErrorRecord(entry.path, ErrorKind.INACCESSIBLE_PATH, _describe(e)))
                    continue

                if is_dir:
                    result.subdirectories.append(entry.path)
                    continue

                try:
                    st = entry.stat(follow_symlinks=follow_symlinks)
                except OSError as e:
                    result.errors.append(ErrorRecord(entry.path, ErrorKind.UNREADABLE_FILE, _describe(e)))
                    continue

                if statmod.S_ISREG(st.st_mode):
                    result.files.append(FileObservation(entry.path, int(st.st_size)))
    except OSError as e:
        logger.debug("Skipping inaccessible directory %s (%s)", path, e)
        return ClassifyResult(
            path=path,
            accessible=False,
            errors=[ErrorRecord(path, ErrorKind.INACCESSIBLE_PATH, _describe(e))],
        )

    result.accessible = True
    for err in result.errors:
        logger.debug("%s: %s (%s)", err.kind.value, err.path, err.message)
    return result
