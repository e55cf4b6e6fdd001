"""
safety_checks.py - Safety Check Module

Checks whether a file can be renamed before anything touches the disk
"""

from pathlib import Path
from typing import Tuple, Optional
import os
import stat

from .errors import MetadataReadError, ReadOnlyTarget, RenameabilityError

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def check_renameable(path: Path) -> os.stat_result:
    """
    Check that a file's metadata is readable and it is not read-only

    Read-only means no write permission bit is set at all (on Windows the
    read-only attribute clears them).

    Args:
        path: File to check

    Returns:
        The file's stat result

    Raises:
        MetadataReadError: metadata could not be read
        ReadOnlyTarget: file is read-only
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise MetadataReadError(path, f"Cannot read metadata ({e.strerror or e})") from e

    if not st.st_mode & _WRITE_BITS:
        raise ReadOnlyTarget(path, "File is read-only")

    return st


def check_writable(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if path can be renamed

    Args:
        path: Path to check

    Returns:
        (is_renameable, error_reason)
    """
    try:
        check_renameable(path)
    except RenameabilityError as e:
        return False, str(e)
    return True, None
