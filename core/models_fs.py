"""
models_fs.py - Core Data Structure Definitions

Contains:
- AssetRoot: Configured asset directory
- WalkEntry / AssetFileRef: Items produced while scanning
- RenameResult: Single completed (or previewed) rename
- PassSummary: Aggregated outcome of a clean/organize pass
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple
from enum import Enum


class ConfigError(Exception):
    """Configuration file missing or invalid"""


class RootUnavailableError(OSError):
    """Asset root path cannot be scanned"""


class PassState(Enum):
    """Orchestrator state"""
    IDLE = "idle"
    COLLECTING_FOLDER_NAMES = "collecting_folder_names"
    PROCESSING_ROOTS = "processing_roots"
    DONE = "done"


class PassStatus(Enum):
    """Final outcome of a pass"""
    OK = "ok"
    PARTIAL = "partial"
    NOTHING_TO_DO = "nothing_to_do"


@dataclass(frozen=True)
class AssetRoot:
    """Configured top-level asset directory"""
    name: str                       # Logical label, used as naming prefix
    path: Path                      # Directory on disk
    enabled: bool = True
    description: str = ""


@dataclass(frozen=True)
class WalkEntry:
    """Entry yielded by the directory walker"""
    path: Path
    path_parts: Tuple[str, ...]     # Directories between root and entry's parent
    is_dir: bool


@dataclass(frozen=True)
class AssetFileRef:
    """Asset file information, derived from its path at scan time"""
    path: Path                      # Full path
    directory: Path                 # Containing directory
    original_filename: str          # Filename (with extension)
    extension: str                  # Extension with dot, original case (e.g., .SVG)
    stem: str                       # Filename (without extension)
    path_parts: Tuple[str, ...] = ()

    @classmethod
    def from_path(cls, p: Path, path_parts: Tuple[str, ...] = ()) -> "AssetFileRef":
        """Create AssetFileRef from Path object"""
        return cls(
            path=p,
            directory=p.parent,
            original_filename=p.name,
            extension=p.suffix,
            stem=p.stem,
            path_parts=tuple(path_parts),
        )

    def with_stem(self, stem: str) -> Path:
        """Target path for a new stem, extension unchanged"""
        return self.directory / f"{stem}{self.extension}"


@dataclass(frozen=True)
class RenameResult:
    """A rename that changed a filename"""
    asset_root_name: str
    directory: Path
    original_name: str
    new_name: str
    old_path: Path
    new_path: Path
    path_parts: Tuple[str, ...] = ()
    dry_run: bool = False

    def to_dict(self) -> dict:
        return {
            "assetRootName": self.asset_root_name,
            "directory": str(self.directory),
            "originalName": self.original_name,
            "newName": self.new_name,
            "oldPath": str(self.old_path),
            "newPath": str(self.new_path),
            "pathParts": list(self.path_parts),
            "dryRun": self.dry_run,
        }


@dataclass(frozen=True)
class RootFailure:
    """Asset root that could not be processed"""
    root_name: str
    error: str


@dataclass(frozen=True)
class FileFailure:
    """Single file that could not be renamed"""
    path: Path
    error: str


@dataclass
class PassSummary:
    """Outcome of a clean or organize pass"""
    pass_name: str
    results: List[RenameResult] = field(default_factory=list)
    per_root: Dict[str, int] = field(default_factory=dict)
    root_failures: List[RootFailure] = field(default_factory=list)
    file_failures: List[FileFailure] = field(default_factory=list)
    folder_names: FrozenSet[str] = frozenset()
    roots_processed: int = 0
    dry_run: bool = False
    cancelled: bool = False
    state: PassState = PassState.IDLE

    @property
    def processed_count(self) -> int:
        return len(self.results)

    @property
    def has_failures(self) -> bool:
        return bool(self.root_failures or self.file_failures)

    @property
    def status(self) -> PassStatus:
        if self.has_failures:
            return PassStatus.PARTIAL
        if self.roots_processed == 0:
            return PassStatus.NOTHING_TO_DO
        return PassStatus.OK

    def results_for(self, root_name: str) -> List[RenameResult]:
        return [r for r in self.results if r.asset_root_name == root_name]

    def summary(self) -> str:
        """Generate summary"""
        if self.status == PassStatus.NOTHING_TO_DO:
            return f"{self.pass_name}: no enabled asset directories, nothing to do"

        if self.has_failures:
            headline = f"{self.pass_name} completed with failures:"
        else:
            headline = f"{self.pass_name} completed:"
        if self.dry_run:
            headline += " [Preview]"

        lines = [
            headline,
            f"  - Renamed: {self.processed_count}",
            f"  - Asset directories: {self.roots_processed}",
            f"  - Failed directories: {len(self.root_failures)}",
            f"  - Failed files: {len(self.file_failures)}",
        ]
        for root_name, count in self.per_root.items():
            lines.append(f"    {root_name}: {count}")
        if self.cancelled:
            lines.append("  - Cancelled before completion")
        if self.root_failures:
            lines.append("Directory Failures:")
            for failure in self.root_failures:
                lines.append(f"  - {failure.root_name}: {failure.error}")
        if self.file_failures:
            lines.append("File Failures:")
            for failure in self.file_failures[:10]:  # Show at most 10
                lines.append(f"  - {failure.path.name}: {failure.error}")
            if len(self.file_failures) > 10:
                lines.append(f"  ... and {len(self.file_failures) - 10} more failures")
        return "\n".join(lines)
