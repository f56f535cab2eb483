"""
gui_mainwindow.py - GUI Main Window

Contains three tabs:
1. Clean (remove folder names from filenames)
2. Organize (apply folder structure to filenames)
3. TypeScript types and React components
"""

from pathlib import Path
from typing import Callable, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QTabWidget, QLabel, QLineEdit, QPushButton, QSpinBox,
    QTableWidget, QTableWidgetItem, QTextEdit, QProgressBar,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox,
)
from PySide6.QtCore import QThread, Slot
from PySide6.QtGui import QColor

from core import (
    AssetCodegenConfig, PassSummary, TypesResult, ComponentsResult, ConfigError,
    load_config, DEFAULT_CONFIG_PATH,
)
from .gui_workers import PassWorker, TypesWorker, ComponentsWorker


ConfigGetter = Callable[[], Optional[AssetCodegenConfig]]


class PassTab(QWidget):
    """Preview and execute one renaming pass"""

    def __init__(self, pass_name: str, description: str, get_config: ConfigGetter, parent=None):
        super().__init__(parent)
        self.pass_name = pass_name
        self.get_config = get_config
        self.worker: Optional[PassWorker] = None
        self.preview: Optional[PassSummary] = None

        self._init_ui(description)

    def _init_ui(self, description: str):
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(description))

        options_layout = QHBoxLayout()
        options_layout.addWidget(QLabel("Concurrent directories:"))
        self.workers_spin = QSpinBox()
        self.workers_spin.setRange(1, 16)
        self.workers_spin.setValue(1)
        options_layout.addWidget(self.workers_spin)
        options_layout.addStretch()

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        options_layout.addWidget(self.preview_btn)
        layout.addLayout(options_layout)

        # Results table
        self.table = QTableWidget()
        self.table.setColumnCount(4)
        self.table.setHorizontalHeaderLabels(["Asset Directory", "Original Name", "New Name", "Path"])
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(3, QHeaderView.ResizeMode.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self._do_cancel)
        self.cancel_btn.setVisible(False)
        bottom_layout.addWidget(self.cancel_btn)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _start(self, dry_run: bool):
        config = self.get_config()
        if config is None:
            return

        self.preview_btn.setEnabled(False)
        self.execute_btn.setEnabled(False)
        self.cancel_btn.setVisible(True)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, 0)  # Indeterminate progress

        self.worker = PassWorker(
            config,
            self.pass_name,
            dry_run=dry_run,
            max_workers=self.workers_spin.value(),
        )
        self.worker.progress.connect(self._on_progress)
        self.worker.finished.connect(self._on_finished)
        self.worker.error.connect(self._on_error)
        self.worker.start()

    def _do_preview(self):
        """Generate preview"""
        self._start(dry_run=True)

    def _do_execute(self):
        """Execute rename"""
        if not self.preview or not self.preview.results:
            return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to rename {self.preview.processed_count} files?\n\nThis action cannot be undone!",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self._start(dry_run=False)

    def _do_cancel(self):
        if self.worker:
            self.worker.cancel()

    def _reset_controls(self):
        self.preview_btn.setEnabled(True)
        self.cancel_btn.setVisible(False)
        self.progress_bar.setVisible(False)

    @Slot(str)
    def _on_progress(self, msg: str):
        self.status_label.setText(msg[-80:] if len(msg) > 80 else msg)

    @Slot(object)
    def _on_finished(self, summary: PassSummary):
        self._reset_controls()
        self._fill_table(summary)

        if summary.dry_run:
            self.preview = summary
            self.execute_btn.setEnabled(bool(summary.results))
            if summary.results:
                self.status_label.setText(f"Will rename {summary.processed_count} files")
            else:
                self.status_label.setText("No files need renaming")
        else:
            self.preview = None
            self.status_label.setText("Complete")
            QMessageBox.information(self, "Complete", summary.summary())

        if summary.has_failures and summary.dry_run:
            QMessageBox.warning(self, "Warning", summary.summary())

    @Slot(str)
    def _on_error(self, error: str):
        self._reset_controls()
        QMessageBox.critical(self, "Error", f"{self.pass_name} failed: {error}")

    def _fill_table(self, summary: PassSummary):
        self.table.setRowCount(len(summary.results) + len(summary.file_failures))

        row = 0
        for r in summary.results:
            self.table.setItem(row, 0, QTableWidgetItem(r.asset_root_name))
            self.table.setItem(row, 1, QTableWidgetItem(r.original_name))
            new_item = QTableWidgetItem(r.new_name)
            new_item.setForeground(QColor(0, 150, 0))
            self.table.setItem(row, 2, new_item)
            self.table.setItem(row, 3, QTableWidgetItem("/".join(r.path_parts)))
            row += 1

        for failure in summary.file_failures:
            self.table.setItem(row, 0, QTableWidgetItem(""))
            self.table.setItem(row, 1, QTableWidgetItem(failure.path.name))
            error_item = QTableWidgetItem(failure.error)
            error_item.setForeground(QColor(200, 0, 0))
            self.table.setItem(row, 2, error_item)
            self.table.setItem(row, 3, QTableWidgetItem(str(failure.path.parent)))
            row += 1


class TypesTab(QWidget):
    """TypeScript types and React component generation tab"""

    def __init__(self, get_config: ConfigGetter, parent=None):
        super().__init__(parent)
        self.get_config = get_config
        self.worker: Optional[QThread] = None

        layout = QVBoxLayout(self)
        buttons_layout = QHBoxLayout()
        self.generate_btn = QPushButton("Generate Types")
        self.generate_btn.clicked.connect(self._do_generate)
        buttons_layout.addWidget(self.generate_btn)
        self.components_btn = QPushButton("Generate Components")
        self.components_btn.clicked.connect(self._do_components)
        buttons_layout.addWidget(self.components_btn)
        buttons_layout.addStretch()
        layout.addLayout(buttons_layout)

        self.output = QTextEdit()
        self.output.setReadOnly(True)
        layout.addWidget(self.output, 1)

    def _set_busy(self, busy: bool):
        self.generate_btn.setEnabled(not busy)
        self.components_btn.setEnabled(not busy)

    def _start(self, worker: QThread, on_finished):
        self._set_busy(True)
        self.worker = worker
        worker.finished.connect(on_finished)
        worker.error.connect(self._on_error)
        worker.start()

    def _do_generate(self):
        config = self.get_config()
        if config is not None:
            self._start(TypesWorker(config), self._on_finished)

    def _do_components(self):
        config = self.get_config()
        if config is not None:
            self._start(ComponentsWorker(config), self._on_components_finished)

    @Slot(object)
    def _on_finished(self, result: TypesResult):
        self._set_busy(False)
        if result.written:
            lines = [f"Written: {result.output_path}", f"Assets: {len(result.assets)}"]
            lines += [f"  {a.name}  ({a.asset_dir}/{a.path})" for a in result.assets]
            if result.skipped_duplicates:
                lines.append(f"Duplicate names ignored: {', '.join(result.skipped_duplicates)}")
            self.output.setPlainText("\n".join(lines))
        elif result.output_path:
            self.output.setPlainText(f"Skipped, file already exists: {result.output_path}")
        else:
            self.output.setPlainText("No enabled asset directories")

    @Slot(object)
    def _on_components_finished(self, result: ComponentsResult):
        self._set_busy(False)
        if not result.enabled:
            self.output.setPlainText("Component generation is disabled")
            return
        lines = [
            f"{'Written' if f.written else 'Skipped'}: {f.path}"
            for f in result.files
        ]
        stats = result.stats
        lines.append(f"Components: {stats['component']}, hooks: {stats['hooks']}, utils: {stats['utils']}")
        self.output.setPlainText("\n".join(lines))

    @Slot(str)
    def _on_error(self, error: str):
        self._set_busy(False)
        QMessageBox.critical(self, "Error", f"Generation failed: {error}")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        super().__init__()
        self.setWindowTitle("Asset CodeGen")
        self.setMinimumSize(800, 600)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Configuration group
        config_group = QGroupBox("Configuration")
        config_layout = QGridLayout(config_group)
        config_layout.addWidget(QLabel("Config file:"), 0, 0)
        self.config_edit = QLineEdit(str(config_path))
        config_layout.addWidget(self.config_edit, 0, 1)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_config)
        config_layout.addWidget(self.browse_btn, 0, 2)
        layout.addWidget(config_group)

        # Create tabs
        self.tabs = QTabWidget()
        self.clean_tab = PassTab(
            "clean", "Remove folder names previously baked into asset filenames.", self.load_config)
        self.organize_tab = PassTab(
            "organize", "Prefix asset filenames with their directory name and folder path.", self.load_config)
        self.types_tab = TypesTab(self.load_config)

        self.tabs.addTab(self.clean_tab, "Clean")
        self.tabs.addTab(self.organize_tab, "Organize")
        self.tabs.addTab(self.types_tab, "Generate")
        layout.addWidget(self.tabs)

        # Status bar
        self.statusBar().showMessage("Ready")

    def _browse_config(self):
        path, _ = QFileDialog.getOpenFileName(self, "Select Configuration", "", "JSON (*.json)")
        if path:
            self.config_edit.setText(path)

    def load_config(self) -> Optional[AssetCodegenConfig]:
        """Load configuration from the path field, reporting errors"""
        path = Path(self.config_edit.text().strip() or DEFAULT_CONFIG_PATH)
        try:
            config = load_config(path)
        except ConfigError as e:
            QMessageBox.critical(self, "Configuration Error", str(e))
            return None
        roots = ", ".join(r.name for r in config.enabled_roots) or "(none)"
        self.statusBar().showMessage(f"{config.project_name}: {roots}")
        return config
