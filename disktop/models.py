from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class ErrorKind(str, enum.Enum):
    INACCESSIBLE_PATH = "inaccessible_path"  # not a directory, or listing denied
    UNREADABLE_FILE = "unreadable_file"      # stat failed on a file entry


class NodeState(str, enum.Enum):
    PENDING = "pending"
    CLASSIFYING = "classifying"
    SKIPPED = "skipped"
    EXPANDING = "expanding"
    AWAITING_CHILDREN = "awaiting_children"
    DONE = "done"


@dataclass(frozen=True)
class FileObservation:
    path: str
    size: int


@dataclass(frozen=True)
class ErrorRecord:
    path: str
    kind: ErrorKind
    message: str = ""


@dataclass
class ClassifyResult:
    path: str
    accessible: bool
    subdirectories: List[str] = field(default_factory=list)
    files: List[FileObservation] = field(default_factory=list)
    errors: List[ErrorRecord] = field(default_factory=list)


@dataclass(eq=False)
class DirectoryTask:
    """One directory node of a traversal.

    ``remaining_depth`` is how many further levels may be entered below this
    directory. ``pending`` counts spawned children that have not finished yet.
    """
    path: str
    remaining_depth: int
    parent: Optional["DirectoryTask"] = None
    state: NodeState = NodeState.PENDING
    pending: int = 0

    @property
    def finished(self) -> bool:
        return self.state in (NodeState.DONE, NodeState.SKIPPED)


@dataclass(frozen=True)
class DriveInfo:
    mountpoint: str
    fstype: str
    total: int
    used: int
    free: int


@dataclass(frozen=True)
class ScanSnapshot:
    observations: Tuple[FileObservation, ...]
    errors: Tuple[ErrorRecord, ...]
    files: int
    dirs: int
    top_files: Optional[Tuple[FileObservation, ...]] = None  # only when streaming


@dataclass
class ScanResult:
    root: str
    top_files: List[FileObservation]     # sorted desc by size, then path
    files: int
    dirs: int
    errors: List[ErrorRecord]
    elapsed_sec: float
    root_accessible: bool = True
    cancelled: bool = False

    @property
    def error_count(self) -> int:
        return len(self.errors)
