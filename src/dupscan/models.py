"""Data models for dupscan."""

from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dupscan.exceptions import DupscanError

TABLE_SIZE = 512_000  # Number of hash buckets
MAX_PATH = 4096  # Longest path (in bytes) that will be tracked
NAME_MAX = 255  # Longest filename accepted by the search prompt
PLACEHOLDER_NAME = "NULL"  # Hashed in place of a missing path


@dataclass(frozen=True)
class FileRecord:
    """A tracked file."""

    path: str  # Full path as discovered during the scan
    modified: int  # Last-modified time, seconds since the epoch


@dataclass(frozen=True)
class BucketGroup:
    """The records sharing one hash bucket, newest first."""

    index: int
    records: tuple[FileRecord, ...]

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass
class ScanIssue:
    """A path that was skipped during a scan, and why."""

    path: str
    error: "DupscanError"


@dataclass
class ScanReport:
    """Outcome of scanning one top-level path."""

    registered: int = 0
    issues: list[ScanIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues
