"""
run_passes.py - Pass Orchestration Module

Responsibilities:
- Clean pass: collect folder names, strip them from asset filenames
- Organize pass: prefix asset filenames with their folder structure
- Fan out one unit of work per enabled asset root, isolating failures
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
import os
from threading import Event
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Set

from loguru import logger

from .config import AssetCodegenConfig
from .exec_rename import rename_asset
from .models_fs import (
    AssetFileRef, AssetRoot, FileFailure, PassState, PassSummary,
    RenameResult, RootFailure, RootUnavailableError,
)
from .scan_files import collect_folder_names, walk_assets
from .text_match import clean_name, organize_name, path_scoped_tokens


CLEAN_PASS = "clean"
ORGANIZE_PASS = "organize"

# (ref, root) -> new stem
StemFunc = Callable[[AssetFileRef, AssetRoot], str]


@dataclass
class RootReport:
    """Results of one asset root"""
    root_name: str
    results: List[RenameResult] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    cancelled: bool = False


def process_root(
    root: AssetRoot,
    new_stem_for: StemFunc,
    supported_extensions: Sequence[str],
    dry_run: bool = False,
    cancel_event: Optional[Event] = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> RootReport:
    """
    Rename every asset file under one root, sequentially

    Args:
        root: Asset root
        new_stem_for: Computes the new stem of a file
        supported_extensions: Asset extensions without dot
        dry_run: Whether to preview only
        cancel_event: Stops processing between files when set
        progress_callback: Progress callback (message)

    Returns:
        RootReport

    Raises:
        RootUnavailableError: Root path is not a directory or cannot be listed
    """
    root_path = Path(root.path)
    if not root_path.is_dir():
        raise RootUnavailableError(f"Asset directory does not exist: {root_path}")
    try:
        with os.scandir(root_path):
            pass
    except OSError as e:
        raise RootUnavailableError(f"Asset directory cannot be read: {root_path} - {e}") from e

    report = RootReport(root_name=root.name)
    claimed: Set[Path] = set()

    for ref in walk_assets(root_path, supported_extensions):
        if cancel_event is not None and cancel_event.is_set():
            report.cancelled = True
            break

        if progress_callback:
            progress_callback(str(ref.path))

        new_stem = new_stem_for(ref, root)
        result = rename_asset(ref, new_stem, root.name, dry_run=dry_run,
                              failures=report.failures, claimed=claimed)
        if result is not None:
            report.results.append(result)

    return report


def _run_roots(
    summary: PassSummary,
    roots: List[AssetRoot],
    new_stem_for: StemFunc,
    config: AssetCodegenConfig,
    max_workers: int,
    cancel_event: Optional[Event],
    progress_callback: Optional[Callable[[str], None]],
) -> None:
    """Process all roots, then aggregate in configuration order"""
    summary.state = PassState.PROCESSING_ROOTS
    reports: Dict[int, RootReport] = {}
    errors: Dict[int, str] = {}

    def work(root: AssetRoot) -> RootReport:
        return process_root(
            root,
            new_stem_for,
            config.supported_extensions,
            dry_run=summary.dry_run,
            cancel_event=cancel_event,
            progress_callback=progress_callback,
        )

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {executor.submit(work, root): index for index, root in enumerate(roots)}
        for future in as_completed(futures):
            index = futures[future]
            try:
                reports[index] = future.result()
            except Exception as e:
                logger.error(f"❌ Directory processing failed: {roots[index].path} - {e}")
                errors[index] = str(e)

    for index, root in enumerate(roots):
        if index in errors:
            summary.root_failures.append(RootFailure(root_name=root.name, error=errors[index]))
            continue
        report = reports[index]
        summary.results.extend(report.results)
        summary.file_failures.extend(report.failures)
        summary.per_root[root.name] = summary.per_root.get(root.name, 0) + len(report.results)
        summary.cancelled = summary.cancelled or report.cancelled

    summary.roots_processed = len(roots)


def run_clean_pass(
    config: AssetCodegenConfig,
    dry_run: bool = False,
    max_workers: int = 1,
    cancel_event: Optional[Event] = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> PassSummary:
    """
    Strip folder names from asset filenames

    Args:
        config: Configuration
        dry_run: Whether to preview only
        max_workers: Roots processed concurrently
        cancel_event: Stops the pass between files when set
        progress_callback: Progress callback (message)

    Returns:
        PassSummary
    """
    summary = PassSummary(pass_name=CLEAN_PASS, dry_run=dry_run)
    roots = config.enabled_roots
    if not roots:
        logger.warning("No enabled asset directories")
        summary.state = PassState.DONE
        return summary

    logger.info("🧹 Removing folder names from filenames...")
    summary.state = PassState.COLLECTING_FOLDER_NAMES
    folder_names: FrozenSet[str] = collect_folder_names(roots)
    summary.folder_names = folder_names

    sep = config.separator
    global_scope = config.conventions.clean_scope == "global"

    def new_stem_for(ref: AssetFileRef, root: AssetRoot) -> str:
        tokens = folder_names if global_scope else path_scoped_tokens(root.name, ref.path_parts)
        return clean_name(ref.stem, tokens, sep)

    _run_roots(summary, roots, new_stem_for, config, max_workers, cancel_event, progress_callback)
    summary.state = PassState.DONE
    logger.info(f"Clean pass done: {summary.processed_count} files renamed")
    return summary


def run_organize_pass(
    config: AssetCodegenConfig,
    dry_run: bool = False,
    max_workers: int = 1,
    cancel_event: Optional[Event] = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> PassSummary:
    """
    Prefix asset filenames with their root name and folder path

    Args:
        config: Configuration
        dry_run: Whether to preview only
        max_workers: Roots processed concurrently
        cancel_event: Stops the pass between files when set
        progress_callback: Progress callback (message)

    Returns:
        PassSummary
    """
    summary = PassSummary(pass_name=ORGANIZE_PASS, dry_run=dry_run)
    roots = config.enabled_roots
    if not roots:
        logger.warning("No enabled asset directories")
        summary.state = PassState.DONE
        return summary

    logger.info("📂 Applying folder structure to filenames...")
    sep = config.separator

    def new_stem_for(ref: AssetFileRef, root: AssetRoot) -> str:
        return organize_name(ref.stem, ref.path_parts, root.name, sep)

    _run_roots(summary, roots, new_stem_for, config, max_workers, cancel_event, progress_callback)
    summary.state = PassState.DONE
    logger.info(f"Organize pass done: {summary.processed_count} files renamed")
    return summary
