from __future__ import annotations
import heapq
from typing import Iterable, List, Optional

from .models import FileObservation


class _Candidate:
    """Heap entry ordered so that the worst-ranked observation is the minimum.

    Rank is size descending, then path ascending, so among equal sizes the
    lexicographically larger path sits lower in the heap and is evicted first.
    """
    __slots__ = ("obs",)

    def __init__(self, obs: FileObservation):
        self.obs = obs

    def __lt__(self, other: "_Candidate") -> bool:
        a, b = self.obs, other.obs
        if a.size != b.size:
            return a.size < b.size
        return a.path > b.path


def outranks(a: FileObservation, b: FileObservation) -> bool:
    if a.size != b.size:
        return a.size > b.size
    return a.path < b.path


class TopNSet:
    def __init__(self, capacity: int):
        self.capacity = capacity
        self._heap: List[_Candidate] = []

    def __len__(self) -> int:
        return len(self._heap)

    def minimum(self) -> Optional[FileObservation]:
        return self._heap[0].obs if self._heap else None

    def push(self, obs: FileObservation) -> bool:
        """Offer an observation; returns True if it was kept."""
        if self.capacity <= 0:
            return False
        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, _Candidate(obs))
            return True
        if outranks(obs, self._heap[0].obs):
            heapq.heapreplace(self._heap, _Candidate(obs))
            return True
        return False

    def extend(self, observations: Iterable[FileObservation]) -> None:
        for obs in observations:
            self.push(obs)

    def ranked(self) -> List[FileObservation]:
        """Current contents, best first, without consuming the set."""
        return [c.obs for c in sorted(self._heap, reverse=True)]

    def drain(self) -> List[FileObservation]:
        out: List[FileObservation] = []
        while self._heap:
            out.append(heapq.heappop(self._heap).obs)
        out.reverse()
        return out


def select(observations: Iterable[FileObservation], n: int) -> List[FileObservation]:
    top = TopNSet(n)
    top.extend(observations)
    return top.drain()
