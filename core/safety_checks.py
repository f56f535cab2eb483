"""
safety_checks.py - Safety Check Module

Checks run before an asset file is renamed
"""

from pathlib import Path
from typing import Tuple, Optional
import os
import platform

from .text_match import is_valid_filename


def check_writable(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if a file can be renamed in place

    Renaming needs write access to the containing directory.

    Args:
        path: Path to check

    Returns:
        (is_writable, error_reason)
    """
    parent = path.parent
    if not parent.exists():
        return False, f"Parent directory does not exist: {parent}"
    if not os.access(parent, os.W_OK):
        return False, f"Directory is not writable: {parent}"
    return True, None


def check_path_length(path: Path, max_length: int = 260) -> Tuple[bool, Optional[str]]:
    """
    Check if path length exceeds limit (mainly for Windows)

    Args:
        path: Path to check
        max_length: Maximum length

    Returns:
        (is_valid, error_reason)
    """
    path_str = str(path)
    if len(path_str) > max_length:
        return False, f"Path length ({len(path_str)}) exceeds limit ({max_length}): {path}"
    return True, None


def is_case_only_change(src: Path, dst: Path) -> bool:
    """Whether src and dst differ only by letter case within one directory"""
    return (src.parent == dst.parent and
            src.name.casefold() == dst.name.casefold() and
            src.name != dst.name)


def is_same_file(src: Path, dst: Path) -> bool:
    """Whether dst resolves to the same file as src (case-insensitive filesystems)"""
    try:
        return os.path.samefile(src, dst)
    except OSError:
        return False


def check_rename_op(src: Path, dst: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if a single rename operation is safe

    Args:
        src: Source path
        dst: Destination path

    Returns:
        (is_safe, error_reason)
    """
    if not src.exists():
        return False, f"Source file does not exist: {src}"

    if not src.is_file():
        return False, f"Source path is not a file: {src}"

    valid, error = is_valid_filename(dst.name)
    if not valid:
        return False, error

    # Never overwrite another file; a case-only change may see itself as "existing"
    if dst.exists() and not (is_case_only_change(src, dst) and is_same_file(src, dst)):
        return False, f"Target already exists: {dst.name}"

    if platform.system() == "Windows":
        valid, error = check_path_length(dst)
        if not valid:
            return False, error

    valid, error = check_writable(src)
    if not valid:
        return False, error

    return True, None
