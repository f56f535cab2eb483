"""
gui_workers.py - GUI Worker Threads

Provides background execution of long tasks to avoid blocking UI
"""

from threading import Event
from typing import Optional

from PySide6.QtCore import QThread, Signal, QObject

from core import (
    AssetCodegenConfig, run_clean_pass, run_organize_pass,
    generate_types, generate_components, format_files,
)


PASS_FUNCS = {
    "clean": run_clean_pass,
    "organize": run_organize_pass,
}


class PassWorker(QThread):
    """Clean/organize pass worker thread"""

    # Signals
    progress = Signal(str)          # Current file
    finished = Signal(object)       # PassSummary
    error = Signal(str)             # Error message

    def __init__(
        self,
        config: AssetCodegenConfig,
        pass_name: str,
        dry_run: bool = True,
        max_workers: int = 1,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        if pass_name not in PASS_FUNCS:
            raise ValueError(f"Unknown pass: {pass_name}")
        self.config = config
        self.pass_name = pass_name
        self.dry_run = dry_run
        self.max_workers = max_workers
        self._cancel_event = Event()

    def cancel(self):
        """Stop after the current file"""
        self._cancel_event.set()

    def run(self):
        try:
            summary = PASS_FUNCS[self.pass_name](
                self.config,
                dry_run=self.dry_run,
                max_workers=self.max_workers,
                cancel_event=self._cancel_event,
                progress_callback=self.progress.emit,
            )
            self.finished.emit(summary)
        except Exception as e:
            self.error.emit(str(e))


class TypesWorker(QThread):
    """Type generation worker thread"""

    # Signals
    finished = Signal(object)       # TypesResult
    error = Signal(str)             # Error message

    def __init__(self, config: AssetCodegenConfig, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.config = config

    def run(self):
        try:
            result = generate_types(self.config)
            if result.written:
                format_files(result.generated_files, self.config)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))


class ComponentsWorker(QThread):
    """Component, hooks and utils generation worker thread"""

    # Signals
    finished = Signal(object)       # ComponentsResult
    error = Signal(str)             # Error message

    def __init__(self, config: AssetCodegenConfig, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.config = config

    def run(self):
        try:
            result = generate_components(self.config)
            if result.generated_files:
                format_files(result.generated_files, self.config)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))
