"""
models_fs.py - Core Data Structure Definitions

Contains:
- RenameItem: One candidate file and its proposed new name
- CheckResult: Validation result of a candidate set
- CommitResult: Outcome of applying the renames
- RenameOptions: Rename options configuration
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Tuple, TYPE_CHECKING

from .errors import NameCollision

if TYPE_CHECKING:
    from .text_match import PatternState


@dataclass
class RenameItem:
    """Rename candidate data class"""
    original: str                   # Filename on disk (with suffix)
    location: Path                  # Full path
    renamed: Optional[str] = None   # Proposed filename

    def __post_init__(self):
        if self.renamed is None:
            self.renamed = self.original

    @classmethod
    def from_path(cls, p: Path) -> "RenameItem":
        """Create RenameItem from Path object"""
        p = Path(p)
        return cls(original=p.name, location=p)

    @property
    def destination(self) -> Path:
        """Path the file will have after renaming"""
        return self.location.parent / self.renamed

    @property
    def is_same(self) -> bool:
        return self.original == self.renamed

    def set_pattern(self, patterns: "PatternState") -> None:
        """Recompute the proposed name from the current patterns"""
        self.renamed = patterns.apply(self.original)

    def rename(self) -> Path:
        """Rename the file on disk, raises RenameIoError on failure"""
        from .exec_rename import rename_item
        return rename_item(self)


@dataclass
class CheckResult:
    """Validation result of a candidate set"""
    conflicting_names: List[str] = field(default_factory=list)
    permission_problems: List[str] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicting_names)

    @property
    def has_permission_problems(self) -> bool:
        return bool(self.permission_problems)

    @property
    def ok(self) -> bool:
        """Whether nothing needs the user's attention"""
        return not (self.conflicting_names or self.permission_problems)

    def collisions(self) -> List[NameCollision]:
        """One NameCollision per distinct conflicting name"""
        counts = {}
        for name in self.conflicting_names:
            counts[name] = counts.get(name, 0) + 1
        # conflicting_names holds the extra occurrences only
        return [NameCollision(name, extra + 1) for name, extra in counts.items()]


@dataclass
class CommitResult:
    """Rename execution result"""
    attempted: int = 0              # Candidates minus permission-flagged ones, counted before commit
    renamed: List[RenameItem] = field(default_factory=list)
    failed: List[Tuple[RenameItem, str]] = field(default_factory=list)  # (item, error_msg)

    @property
    def success_count(self) -> int:
        return len(self.renamed)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def summary(self) -> str:
        """Generate summary"""
        lines = [f"Renamed {self.success_count} files"]
        if self.failed:
            lines.append("")
            lines.append(f"Failed to rename {self.failed_count} files:")
            for item, error in self.failed[:10]:  # Show at most 10
                lines.append(f"  - {item.original} -> {item.renamed}: {error}")
            if len(self.failed) > 10:
                lines.append(f"  ... and {len(self.failed) - 10} more failures")
        return "\n".join(lines)


@dataclass
class RenameOptions:
    """Rename options configuration"""
    # Pattern options
    ignore_case: bool = False       # Compile the search pattern with re.IGNORECASE

    # Collision detection compares casefolded names
    case_insensitive_detect: bool = False

    # Display
    column_width_percent: int = 48

    # Execution options
    log_dir: Optional[Path] = None  # Save a JSON result log after committing

    # Global key bindings
    quit_key: str = "q"
    console_key: str = "`"


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
