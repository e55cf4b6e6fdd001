"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Rename single candidates inside their directory
- Run the whole batch, recording failures per item
- Result logging
"""

from pathlib import Path
from typing import List, Optional, Sequence
from datetime import datetime
import json
import logging
import os
import uuid

from .errors import RenameIoError
from .models_fs import RenameItem, CommitResult
from .text_match import is_valid_filename

logger = logging.getLogger(__name__)


def rename_item(item: RenameItem) -> Path:
    """
    Rename one file to its proposed name in the same directory

    No collision or permission checks happen here.

    Args:
        item: Candidate

    Returns:
        New path

    Raises:
        RenameIoError: The new name is not a plain filename or the move failed
    """
    valid, error = is_valid_filename(item.renamed)
    if not valid:
        raise RenameIoError(item, error)

    dst = item.destination
    if _destination_taken(item.location, dst):
        raise RenameIoError(item, "Destination already exists")
    try:
        os.rename(item.location, dst)
    except OSError as e:
        raise RenameIoError(item, e.strerror or str(e)) from e

    logger.debug("Renamed %s -> %s", item.location, dst)
    return dst


def _destination_taken(src: Path, dst: Path) -> bool:
    """Whether dst is another existing file (a case-only rename targets src itself)"""
    if src == dst or not os.path.lexists(dst):
        return False
    try:
        return not os.path.samefile(src, dst)
    except OSError:
        return True


def _generate_temp_name(original: Path) -> Path:
    """Generate temporary filename"""
    unique_id = uuid.uuid4().hex[:8]
    return original.parent / f".__tmp_rename__{unique_id}__{original.name}"


def _chained_items(items: Sequence[RenameItem]) -> List[RenameItem]:
    """
    Items to move aside before the batch runs

    An item qualifies when its destination is held by another candidate
    that is moving away. Only the first item claiming a destination
    qualifies; an item whose destination stays occupied is left in place
    and fails in rename_item instead.
    """
    moving = {item.location for item in items if not item.is_same}
    claimed = set()
    chained = []
    for item in items:
        dst = item.destination
        if item.is_same or dst not in moving or dst in claimed:
            continue
        claimed.add(dst)
        chained.append(item)
    return chained


def _finish_parked(item: RenameItem, temp_path: Path) -> None:
    """Rename a parked file to its final name, putting it back on failure"""
    valid, error = is_valid_filename(item.renamed)
    try:
        if not valid:
            raise RenameIoError(item, error)
        if os.path.lexists(item.destination):
            raise RenameIoError(item, "Destination already exists")
        try:
            os.rename(temp_path, item.destination)
        except OSError as e:
            raise RenameIoError(item, e.strerror or str(e)) from e
    except RenameIoError as e:
        if os.path.lexists(item.location):
            logger.error("Cannot restore %s, file left at %s", item.location, temp_path)
            raise RenameIoError(item, f"{e.reason}; file left at {temp_path}") from e
        try:
            os.rename(temp_path, item.location)
        except OSError as restore_error:
            logger.error("Cannot restore %s from %s: %s", item.location, temp_path, restore_error)
            raise RenameIoError(item, f"{e.reason}; file left at {temp_path}") from e
        raise


def commit_renames(
    items: Sequence[RenameItem],
    attempted: Optional[int] = None,
    log_dir: Optional[Path] = None
) -> CommitResult:
    """
    Rename every candidate

    A failing item does not stop the batch.

    Args:
        items: Candidates, including ones flagged by the check
        attempted: Count computed before committing (defaults to len(items))
        log_dir: Log directory (for saving execution logs)

    Returns:
        Execution result
    """
    total = len(items)
    result = CommitResult(attempted=total if attempted is None else attempted)

    # Phase 1: move files whose new name is still held by another candidate out of the way
    parked = {}
    for item in _chained_items(items):
        temp_path = _generate_temp_name(item.location)
        try:
            os.rename(item.location, temp_path)
            parked[id(item)] = temp_path
        except OSError as e:
            logger.error("Cannot move %s aside: %s", item.location, e)

    # Phase 2: rename to final names
    for item in items:
        try:
            temp_path = parked.get(id(item))
            if temp_path is None:
                rename_item(item)
            else:
                _finish_parked(item, temp_path)
            result.renamed.append(item)
        except RenameIoError as e:
            logger.error("Rename failed: %s", e)
            result.failed.append((item, e.reason))

    logger.info("Renamed %d of %d files", result.success_count, total)

    if log_dir:
        save_result_log(result, log_dir)

    return result


def save_result_log(result: CommitResult, log_dir: Path) -> Path:
    """Save execution result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"rename_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "attempted": result.attempted,
        "success_count": result.success_count,
        "failed_count": result.failed_count,
        "renamed": [
            {"src": str(item.location), "dst": str(item.destination)}
            for item in result.renamed
        ],
        "failed": [
            {"src": str(item.location), "dst": str(item.destination), "error": error}
            for item, error in result.failed
        ],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.info("Result log written to %s", log_file)
    return log_file

