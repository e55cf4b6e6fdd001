"""
errors.py - Error Types

Every problem the tool can run into. None of them is fatal to the process.
"""

from pathlib import Path
from typing import Any


class RenameToolError(Exception):
    """Base class for all rename tool errors"""


class PatternCompileError(RenameToolError):
    """Search text does not compile to a valid pattern"""

    def __init__(self, pattern: str, detail: str):
        lines = detail.strip().splitlines() or [detail]
        # Keep only the last line so it fits a one-line status area
        super().__init__(lines[-1])
        self.pattern = pattern
        self.detail = detail

    @property
    def short_message(self) -> str:
        return str(self)


class RenameabilityError(RenameToolError):
    """A file cannot be renamed"""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class MetadataReadError(RenameabilityError):
    """File metadata could not be read"""


class ReadOnlyTarget(RenameabilityError):
    """File is marked read-only"""


class NameCollision(RenameToolError):
    """Several candidates would receive the same name"""

    def __init__(self, name: str, count: int):
        super().__init__(f"{count} files would be renamed to {name!r}")
        self.name = name
        self.count = count


class RenameIoError(RenameToolError):
    """Moving a single file failed"""

    def __init__(self, item: Any, reason: str):
        super().__init__(f"{item.original} -> {item.renamed}: {reason}")
        self.item = item
        self.reason = reason
