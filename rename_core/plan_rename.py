"""
plan_rename.py - Rename Plan Validation Module

Responsibilities:
- Recompute proposed names for the whole candidate set
- Detect naming collisions inside the batch
- Detect files that cannot be renamed
"""

from typing import List, Optional, Sequence, Set
import logging

from .models_fs import RenameItem, CheckResult, RenameOptions, normalize_for_comparison
from .safety_checks import check_writable
from .text_match import PatternState

logger = logging.getLogger(__name__)


def update_renames(items: Sequence[RenameItem], patterns: PatternState) -> None:
    """
    Recompute every item's proposed name

    Args:
        items: All candidates
        patterns: Current session patterns
    """
    for item in items:
        item.set_pattern(patterns)


def find_conflicts(names: Sequence[str], case_insensitive: bool = False) -> List[str]:
    """
    Find names that occur more than once

    The first occurrence of a name is not reported, every later one is:
    three files sharing a name give two entries.

    Args:
        names: Proposed names in candidate order
        case_insensitive: Compare casefolded names

    Returns:
        Conflicting names, one entry per extra occurrence
    """
    seen: Set[str] = set()
    conflicting: List[str] = []

    for name in names:
        key = normalize_for_comparison(name, case_insensitive)
        if key in seen:
            conflicting.append(name)
        else:
            seen.add(key)

    return conflicting


def find_permission_problems(items: Sequence[RenameItem]) -> List[str]:
    """
    Find candidates whose file cannot be renamed

    Args:
        items: All candidates

    Returns:
        Full paths of the problem files
    """
    problems: List[str] = []
    for item in items:
        ok, error = check_writable(item.location)
        if not ok:
            logger.debug("Not renameable: %s", error)
            problems.append(str(item.location))
    return problems


def check_renames(
    items: Sequence[RenameItem],
    options: Optional[RenameOptions] = None
) -> CheckResult:
    """
    Validate a candidate set before committing

    Makes no changes, calling it again gives the same answer as long as
    the files did not change.

    Args:
        items: All candidates
        options: Rename options

    Returns:
        Check result
    """
    if options is None:
        options = RenameOptions()

    result = CheckResult(
        conflicting_names=find_conflicts(
            [item.renamed for item in items],
            case_insensitive=options.case_insensitive_detect,
        ),
        permission_problems=find_permission_problems(items),
    )

    if not result.ok:
        logger.info(
            "Check found %d conflicting names and %d permission problems",
            len(result.conflicting_names), len(result.permission_problems),
        )
    return result
