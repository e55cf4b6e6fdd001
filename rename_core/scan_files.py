"""
scan_files.py - Candidate Collection Module

Turns the paths given on the command line into rename candidates
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List
import logging

from .models_fs import RenameItem

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Classified command line paths"""
    items: List[RenameItem] = field(default_factory=list)     # Regular files, in argument order
    skipped: List[str] = field(default_factory=list)          # Existing non-files (directories, ...)
    missing: List[str] = field(default_factory=list)          # Paths that do not exist


def classify_paths(paths: Iterable[str]) -> ScanResult:
    """
    Classify command line paths

    Args:
        paths: One path per argument

    Returns:
        Scan result; items keep the argument order
    """
    result = ScanResult()

    for raw in paths:
        path = Path(raw)
        if path.is_file():
            result.items.append(RenameItem.from_path(path))
        elif not path.exists():
            result.missing.append(str(path))
        else:
            logger.debug("Ignoring directory: %s", path)
            result.skipped.append(str(path))

    return result
