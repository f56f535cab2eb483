"""
scan_files.py - File Scanning Module

Provides the recursive directory walker and the folder-name collector
"""

from pathlib import Path
from typing import Generator, Iterable, Set, Tuple, Sequence
import os

from loguru import logger

from .models_fs import AssetFileRef, AssetRoot, WalkEntry


def _sorted_entries(directory: Path) -> list:
    """Snapshot a directory listing, sorted by name"""
    with os.scandir(directory) as it:
        entries = list(it)
    return sorted(entries, key=lambda e: (e.name.casefold(), e.name))


def walk_tree(
    root: Path,
    path_parts: Tuple[str, ...] = (),
) -> Generator[WalkEntry, None, None]:
    """
    Depth-first walk yielding every directory and regular file beneath root

    Each directory listing is read once and sorted before anything is
    yielded, so renaming yielded files does not disturb the traversal.
    Symlinked directories are yielded but not entered.

    Args:
        root: Directory to walk (may not exist)
        path_parts: Directory names between the asset root and `root`

    Yields:
        WalkEntry for each entry, directories before their contents
    """
    root = Path(root)
    try:
        entries = _sorted_entries(root)
    except OSError as e:
        logger.warning(f"Cannot read directory {root}: {e}")
        return

    for entry in entries:
        entry_path = root / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file()
        except OSError as e:
            logger.warning(f"Cannot access {entry_path}: {e}")
            continue

        if is_dir:
            yield WalkEntry(path=entry_path, path_parts=path_parts, is_dir=True)
            yield from walk_tree(entry_path, path_parts + (entry.name,))
        elif is_file:
            yield WalkEntry(path=entry_path, path_parts=path_parts, is_dir=False)


def is_asset_file(filename: str, supported_extensions: Iterable[str]) -> bool:
    """
    Check whether a filename has a supported asset extension

    Args:
        filename: Filename (with extension)
        supported_extensions: Extensions without dot, any case

    Returns:
        Whether the file counts as an asset
    """
    suffix = Path(filename).suffix
    if not suffix:
        return False
    allowed = {ext.lower().lstrip(".") for ext in supported_extensions}
    return suffix[1:].lower() in allowed


def walk_assets(
    root: Path,
    supported_extensions: Sequence[str],
) -> Generator[AssetFileRef, None, None]:
    """
    Walk root and yield asset files only

    Args:
        root: Asset root directory
        supported_extensions: Extensions without dot

    Yields:
        AssetFileRef with path_parts relative to root
    """
    for entry in walk_tree(root):
        if entry.is_dir or not is_asset_file(entry.path.name, supported_extensions):
            continue
        yield AssetFileRef.from_path(entry.path, entry.path_parts)


def collect_folder_names(roots: Iterable[AssetRoot]) -> frozenset:
    """
    Collect every folder name under the given asset roots

    The set is seeded with each root's declared name. A root that cannot be
    scanned is logged and skipped; whatever was collected is still returned.

    Args:
        roots: Asset roots to scan

    Returns:
        Immutable set of folder names
    """
    names: Set[str] = set()

    for root in roots:
        names.add(root.name)
        try:
            for entry in walk_tree(root.path):
                if entry.is_dir:
                    names.add(entry.path.name)
        except OSError as e:
            logger.warning(f"Directory scan failed: {root.path} - {e}")

    logger.debug(f"Collected folder names: {', '.join(sorted(names))}")
    return frozenset(names)
