from __future__ import annotations
import logging
import os
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional

from .aggregator import ResultAccumulator
from .classifier import classify
from .config import PROGRESS_INTERVAL, ScanConfig
from .models import ClassifyResult, DirectoryTask, NodeState

logger = logging.getLogger(__name__)

ProgressCb = Callable[[str, int, int], None]  # (current_path, files, dirs)


def _norm(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


class Traverser:
    """Bounded-depth directory walk that merges into one ResultAccumulator.

    With ``config.workers > 1`` directory listings run on a thread pool of
    that size while the calling thread schedules children and tracks
    completion; otherwise the walk is sequential and depth-first. Both
    paths feed the accumulator the same classifications.
    """

    def __init__(self,
                 config: Optional[ScanConfig] = None,
                 accumulator: Optional[ResultAccumulator] = None,
                 cancel_flag: Optional[Callable[[], bool]] = None,
                 progress: Optional[ProgressCb] = None):
        self.config = config or ScanConfig()
        self.accumulator = accumulator if accumulator is not None else ResultAccumulator()
        self.cancel_flag = cancel_flag
        self.progress = progress
        self.cancelled = False
        self.root_task: Optional[DirectoryTask] = None
        self._deny = {_norm(p) for p in self.config.deny_list}
        self._last_emit = 0.0

    def traverse(self, root: str, max_depth: Optional[int] = None) -> ResultAccumulator:
        depth = self.config.max_depth if max_depth is None else max_depth
        root_task = DirectoryTask(path=os.path.abspath(root), remaining_depth=max(depth, 1) - 1)
        self.root_task = root_task

        if self.config.concurrent:
            self._run_concurrent(root_task)
        else:
            self._run_sequential(root_task)

        logger.debug("Traversal of %s finished (%s)", root_task.path, root_task.state.value)
        return self.accumulator

    def is_denied(self, path: str) -> bool:
        return _norm(path) in self._deny

    def _is_cancelled(self) -> bool:
        if self.cancel_flag and self.cancel_flag():
            self.cancelled = True
        return self.cancelled

    def _visit(self, task: DirectoryTask) -> Optional[ClassifyResult]:
        # Worker side: touches nothing shared except the accumulator.
        if self._is_cancelled():
            return None
        result = classify(task.path,
                          reserved_prefix=self.config.reserved_prefix,
                          follow_symlinks=self.config.follow_symlinks)
        self.accumulator.merge(result)
        return result

    def _expand(self, task: DirectoryTask, result: Optional[ClassifyResult]) -> List[DirectoryTask]:
        if result is None or not result.accessible:
            self._finish(task, NodeState.SKIPPED)
            return []

        task.state = NodeState.EXPANDING
        children: List[DirectoryTask] = []
        if task.remaining_depth > 0:
            for sub in result.subdirectories:
                if self.is_denied(sub):
                    logger.debug("Not descending into excluded directory %s", sub)
                    continue
                children.append(DirectoryTask(path=sub, remaining_depth=task.remaining_depth - 1, parent=task))

        task.pending = len(children)
        if children:
            task.state = NodeState.AWAITING_CHILDREN
        else:
            self._finish(task)
        return children

    def _finish(self, task: DirectoryTask, state: NodeState = NodeState.DONE) -> None:
        task.state = state
        parent = task.parent
        while parent is not None:
            parent.pending -= 1
            if parent.pending or parent.state is not NodeState.AWAITING_CHILDREN:
                return
            parent.state = NodeState.DONE
            parent = parent.parent

    def _emit(self, cur: str) -> None:
        if not self.progress:
            return
        now = time.time()
        if now - self._last_emit >= PROGRESS_INTERVAL:
            self._last_emit = now
            files, dirs = self.accumulator.counts()
            self.progress(cur, files, dirs)

    def _run_sequential(self, root_task: DirectoryTask) -> None:
        stack = [root_task]
        while stack:
            task = stack.pop()
            task.state = NodeState.CLASSIFYING
            children = self._expand(task, self._visit(task))
            stack.extend(reversed(children))
            self._emit(task.path)

    def _run_concurrent(self, root_task: DirectoryTask) -> None:
        running: Dict[Future, DirectoryTask] = {}
        with ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix="disktop") as pool:
            def submit(task: DirectoryTask) -> None:
                task.state = NodeState.CLASSIFYING
                running[pool.submit(self._visit, task)] = task

            submit(root_task)
            try:
                while running:
                    done, _ = wait(running, return_when=FIRST_COMPLETED)
                    for fut in done:
                        task = running.pop(fut)
                        for child in self._expand(task, fut.result()):
                            submit(child)
                        self._emit(task.path)
            except BaseException:
                # queued visits see the flag and return without listing
                self.cancelled = True
                raise
