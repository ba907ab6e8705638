"""Custom exceptions for dupscan."""


class DupscanError(Exception):
    """Base exception for dupscan."""


class AllocationError(DupscanError):
    """Memory for the file table or a record couldn't be obtained."""


class RegistryStateError(DupscanError):
    """Registry used in the wrong lifecycle state."""


class NotInitializedError(RegistryStateError):
    """Registry used before initialize() or after teardown()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: file table is not initialized")


class AlreadyInitializedError(RegistryStateError):
    """initialize() called on a registry that is already initialized."""

    def __init__(self) -> None:
        super().__init__("File table is already initialized")


class AccessError(DupscanError):
    """Path could not be read (missing, permissions, I/O)."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Can't access {path}: {reason}")


class PathTooLongError(DupscanError):
    """Path is longer than the tracked maximum."""

    def __init__(self, path: str, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(f"Path too long (limit {limit} bytes): {path}")
