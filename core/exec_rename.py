"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Rename one asset file, keeping its extension
- Exception handling and logging (never raises to the batch)
- dry_run support
- JSON log of a finished pass
"""

from pathlib import Path
from typing import List, Optional, Set
from datetime import datetime
import uuid
import json
import os

from loguru import logger

from .models_fs import AssetFileRef, FileFailure, PassSummary, RenameResult
from .safety_checks import check_rename_op, is_case_only_change


def _generate_temp_name(original: Path) -> Path:
    """Generate temporary filename"""
    unique_id = uuid.uuid4().hex[:8]
    temp_name = f".__tmp_rename__{unique_id}__{original.name}"
    return original.parent / temp_name


def _rename_case_only(src: Path, dst: Path) -> None:
    """Case-only rename through a temporary name (case-insensitive filesystems)"""
    temp_path = _generate_temp_name(src)
    os.rename(src, temp_path)
    try:
        os.rename(temp_path, dst)
    except OSError:
        os.rename(temp_path, src)
        raise


def rename_asset(
    ref: AssetFileRef,
    new_stem: str,
    root_name: str,
    dry_run: bool = False,
    failures: Optional[List[FileFailure]] = None,
    claimed: Optional[Set[Path]] = None,
) -> Optional[RenameResult]:
    """
    Rename one asset file to a new stem

    Dry runs go through the same checks as real runs, so a preview
    reports the failures the real run would hit.

    Args:
        ref: File to rename
        new_stem: New filename without extension
        root_name: Name of the asset root the file belongs to
        dry_run: Whether to preview only
        failures: Collects a FileFailure when the rename fails
        claimed: Targets already taken earlier in the same pass

    Returns:
        RenameResult when the name changed, None for no-ops and failures
    """
    if new_stem == ref.stem:
        return None

    new_path = ref.with_stem(new_stem)
    result = RenameResult(
        asset_root_name=root_name,
        directory=ref.directory,
        original_name=ref.original_filename,
        new_name=new_path.name,
        old_path=ref.path,
        new_path=new_path,
        path_parts=ref.path_parts,
        dry_run=dry_run,
    )

    if claimed is not None and new_path in claimed:
        ok, error = False, f"Target already used by another file in this pass: {new_path.name}"
    else:
        ok, error = check_rename_op(ref.path, new_path)

    if ok and dry_run:
        logger.info(f"[Preview] {ref.original_filename} -> {new_path.name}")
        if claimed is not None:
            claimed.add(new_path)
        return result

    if ok:
        try:
            if is_case_only_change(ref.path, new_path):
                _rename_case_only(ref.path, new_path)
            else:
                os.rename(ref.path, new_path)
        except OSError as e:
            error = str(e)
        else:
            logger.info(f"  ✓ {ref.original_filename} -> {new_path.name}")
            if claimed is not None:
                claimed.add(new_path)
            return result

    logger.error(f"  ✗ Rename failed: {ref.path} -> {new_path.name}: {error}")
    if failures is not None:
        failures.append(FileFailure(path=ref.path, error=error))
    return None


def save_pass_log(summary: PassSummary, log_dir: Path) -> Path:
    """Save pass result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{summary.pass_name}_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "pass": summary.pass_name,
        "status": summary.status.value,
        "dry_run": summary.dry_run,
        "renamed_count": summary.processed_count,
        "per_root": summary.per_root,
        "renamed": [r.to_dict() for r in summary.results],
        "root_failures": [
            {"root": f.root_name, "error": f.error}
            for f in summary.root_failures
        ],
        "file_failures": [
            {"path": str(f.path), "error": f.error}
            for f in summary.file_failures
        ],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return log_file
