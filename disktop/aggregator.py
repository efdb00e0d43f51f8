from __future__ import annotations
import threading
from typing import List, Optional, Tuple, Union

from .models import ClassifyResult, ErrorRecord, FileObservation, ScanSnapshot
from .topn import TopNSet


class ResultAccumulator:
    """Lock-protected sink shared by every traversal branch of one scan.

    With ``top_n`` set, observations are also fed to a TopNSet as they
    arrive. ``retain_observations=False`` keeps only that set, so memory
    stays bounded by ``top_n`` instead of the number of files.
    """

    def __init__(self, top_n: Optional[int] = None, retain_observations: bool = True):
        self._lock = threading.Lock()
        self._observations: List[FileObservation] = []
        self._errors: List[ErrorRecord] = []
        self._files = 0
        self._dirs = 0
        self._retain = retain_observations
        self._top: Optional[TopNSet] = TopNSet(top_n) if top_n is not None else None

    def _add_observation(self, obs: FileObservation) -> None:
        if self._retain:
            self._observations.append(obs)
        if self._top is not None:
            self._top.push(obs)

    def record(self, item: Union[FileObservation, ErrorRecord]) -> None:
        with self._lock:
            if isinstance(item, ErrorRecord):
                self._errors.append(item)
            else:
                self._add_observation(item)

    def increment_file_count(self, n: int = 1) -> None:
        with self._lock:
            self._files += n

    def increment_dir_count(self, n: int = 1) -> None:
        with self._lock:
            self._dirs += n

    def merge(self, result: ClassifyResult) -> None:
        """Fold one directory's classification in under a single lock hold."""
        with self._lock:
            self._errors.extend(result.errors)
            if not result.accessible:
                return
            self._dirs += 1
            self._files += len(result.files)
            for obs in result.files:
                self._add_observation(obs)

    def counts(self) -> Tuple[int, int]:
        with self._lock:
            return self._files, self._dirs

    def snapshot(self) -> ScanSnapshot:
        with self._lock:
            return ScanSnapshot(
                observations=tuple(self._observations),
                errors=tuple(self._errors),
                files=self._files,
                dirs=self._dirs,
                top_files=tuple(self._top.ranked()) if self._top is not None else None,
            )
