"""
gui_entry.py - GUI Entry

Launch the PySide6 window, optionally preloading a configuration path
"""

import sys
from typing import Optional

from loguru import logger
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from core import DEFAULT_CONFIG_PATH
from .gui_mainwindow import MainWindow


def main(config_path: Optional[str] = None):
    """GUI main entry"""
    # Pass logs go to stderr; the window shows results, not log lines
    logger.remove()
    logger.add(sys.stderr, level="INFO", format="<level>{level: <8}</level> | {message}")

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Asset CodeGen")
    app.setApplicationVersion("1.0.0")
    app.setStyle("Fusion")

    window = MainWindow(config_path or DEFAULT_CONFIG_PATH)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))
