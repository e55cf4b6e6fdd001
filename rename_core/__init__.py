"""
rename_core - Batch Regex Rename Core Module

Provides pattern application, validation, the confirmation workflow and
rename execution.
"""

from .errors import (
    RenameToolError,
    PatternCompileError,
    RenameabilityError,
    MetadataReadError,
    ReadOnlyTarget,
    NameCollision,
    RenameIoError,
)

from .models_fs import (
    RenameItem,
    CheckResult,
    CommitResult,
    RenameOptions,
)

from .scan_files import (
    ScanResult,
    classify_paths,
)

from .text_match import (
    PatternState,
    compile_pattern,
    parse_template,
    apply_pattern,
    is_valid_filename,
)

from .plan_rename import (
    update_renames,
    find_conflicts,
    check_renames,
)

from .exec_rename import (
    rename_item,
    commit_renames,
)

from .safety_checks import (
    check_renameable,
    check_writable,
)

from .workflow import (
    ConfirmationWorkflow,
    WarningKind,
    WorkflowState,
)

__all__ = [
    # Errors
    "RenameToolError",
    "PatternCompileError",
    "RenameabilityError",
    "MetadataReadError",
    "ReadOnlyTarget",
    "NameCollision",
    "RenameIoError",

    # Data models
    "RenameItem",
    "CheckResult",
    "CommitResult",
    "RenameOptions",

    # Candidates
    "ScanResult",
    "classify_paths",

    # Patterns
    "PatternState",
    "compile_pattern",
    "parse_template",
    "apply_pattern",
    "is_valid_filename",

    # Validation
    "update_renames",
    "find_conflicts",
    "check_renames",

    # Execution
    "rename_item",
    "commit_renames",

    # Safety checks
    "check_renameable",
    "check_writable",

    # Workflow
    "ConfirmationWorkflow",
    "WarningKind",
    "WorkflowState",
]
