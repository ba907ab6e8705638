"""File registry: tracked files bucketed by a hash of their base name."""

import bisect
import logging
import math
import os
from collections.abc import Iterator

from dupscan.exceptions import AllocationError
from dupscan.exceptions import AlreadyInitializedError
from dupscan.exceptions import NotInitializedError
from dupscan.exceptions import PathTooLongError
from dupscan.files.paths import base_name
from dupscan.files.paths import encoded_length
from dupscan.models import MAX_PATH
from dupscan.models import TABLE_SIZE
from dupscan.models import BucketGroup
from dupscan.models import FileRecord

logger = logging.getLogger(__name__)

FNV_OFFSET = 2166136261
FNV_PRIME = 16777619

_MASK64 = (1 << 64) - 1
_SIGN64 = 1 << 63


def fnv1a(data: bytes) -> int:
    """Compute the FNV-1a hash of data as a signed 64-bit integer.

    Arithmetic wraps like a C ``long``, and each byte is sign-extended before
    the XOR the way a signed ``char`` is. Empty input hashes a single NUL
    byte.
    """
    h = FNV_OFFSET
    for byte in data or b"\0":
        if byte & 0x80:
            byte |= _MASK64 ^ 0xFF
        h = ((h ^ byte) * FNV_PRIME) & _MASK64
    return h - (1 << 64) if h & _SIGN64 else h


def name_index(name: str | bytes, bucket_count: int = TABLE_SIZE) -> int:
    """Map a name to its bucket, hashing it exactly as given.

    Args:
        name: Name to hash; directory components are not stripped
        bucket_count: Number of buckets in the table

    Returns:
        Index in [0, bucket_count)
    """
    if isinstance(name, str):
        name = os.fsencode(name)
    # |h| % n is the magnitude of C's truncated h % n
    return abs(fnv1a(name)) % bucket_count


def bucket_index(name: str | bytes | None, bucket_count: int = TABLE_SIZE) -> int:
    """Map a file path to its bucket by hashing its base name.

    Args:
        name: File name or path; only the base name is hashed
        bucket_count: Number of buckets in the table

    Returns:
        Index in [0, bucket_count)
    """
    if isinstance(name, bytes):
        name = os.fsdecode(name)
    return name_index(base_name(name), bucket_count)


class FileRegistry:
    """Hash table of tracked files.

    Each bucket holds a chain of records kept newest first. Records with equal
    timestamps stay in the order they were registered.

    The registry must be initialized before use and torn down when done;
    anything else in between raises NotInitializedError.
    """

    def __init__(self, bucket_count: int = TABLE_SIZE, max_path: int = MAX_PATH):
        if bucket_count <= 0:
            raise ValueError(f"bucket_count must be positive, got {bucket_count}")
        self.bucket_count = bucket_count
        self.max_path = max_path
        self._buckets: dict[int, list[FileRecord]] | None = None
        self._count = 0

    @property
    def initialized(self) -> bool:
        return self._buckets is not None

    @property
    def count(self) -> int:
        """Total number of registered files."""
        return self._count

    def initialize(self) -> None:
        """Allocate an empty table.

        Raises:
            AlreadyInitializedError: If the table is already allocated
            AllocationError: If memory couldn't be obtained
        """
        if self._buckets is not None:
            raise AlreadyInitializedError()
        try:
            self._buckets = {}
        except MemoryError as e:
            raise AllocationError("Couldn't allocate the file table") from e
        self._count = 0
        logger.debug("Initialized file table with %d buckets", self.bucket_count)

    def register(self, path: str, modified: int) -> FileRecord:
        """Track a file.

        Args:
            path: Full path of the file
            modified: Last-modified time in seconds, rounded down if fractional

        Returns:
            The new FileRecord

        Raises:
            NotInitializedError: If the table isn't initialized
            PathTooLongError: If path doesn't fit in max_path bytes
            AllocationError: If the record couldn't be allocated
        """
        buckets = self._require("register a file")
        if encoded_length(path) >= self.max_path:
            raise PathTooLongError(path, self.max_path)

        try:
            record = FileRecord(path=path, modified=math.floor(modified))
            chain = buckets.setdefault(bucket_index(path, self.bucket_count), [])
            # Chain is sorted by descending time; go after every record that
            # is as new or newer.
            position = bisect.bisect_right(
                chain, -record.modified, key=lambda r: -r.modified
            )
            chain.insert(position, record)
        except MemoryError as e:
            raise AllocationError(f"Couldn't allocate a record for {path}") from e

        self._count += 1
        return record

    def lookup(self, name: str) -> tuple[FileRecord, ...]:
        """Return the chain in the bucket name hashes to.

        name is hashed as given, so a name with directory components lands
        in a different bucket than its base name. The chain holds every file
        whose base name landed in that bucket, so
        differently named files that collide are included. Use matches() to
        keep only exact name matches.

        Raises:
            NotInitializedError: If the table isn't initialized
        """
        buckets = self._require("search the file table")
        return tuple(buckets.get(name_index(name, self.bucket_count), ()))

    def matches(self, name: str) -> tuple[FileRecord, ...]:
        """Return the records whose base name is exactly name."""
        return tuple(r for r in self.lookup(name) if base_name(r.path) == name)

    def enumerate_all(self) -> Iterator[BucketGroup]:
        """Lazily produce every non-empty bucket in index order.

        Each call starts over from the first bucket.

        Raises:
            NotInitializedError: If the table isn't initialized
        """
        buckets = self._require("list the file table")
        return (
            BucketGroup(index=index, records=tuple(buckets[index]))
            for index in sorted(buckets)
        )

    def teardown(self) -> None:
        """Release every record and the table itself.

        Raises:
            NotInitializedError: If the table was never initialized or was
                already torn down
        """
        self._require("free the file table")
        released = self._count
        self._buckets = None
        self._count = 0
        logger.debug("Released file table (%d records)", released)

    def _require(self, operation: str) -> dict[int, list[FileRecord]]:
        if self._buckets is None:
            raise NotInitializedError(operation)
        return self._buckets
