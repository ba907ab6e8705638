"""Filesystem operations for dupscan."""

from dupscan.files.paths import base_name
from dupscan.files.paths import join_entry
from dupscan.files.scan import scan_path

__all__ = [
    "base_name",
    "join_entry",
    "scan_path",
]
