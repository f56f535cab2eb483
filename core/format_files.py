"""
format_files.py - Post-generation Formatting

Runs prettier on generated files; any failure only skips formatting
"""

from pathlib import Path
from typing import Iterable, List, Optional
import json
import subprocess

from loguru import logger

from .config import AssetCodegenConfig


FORMAT_SCRIPTS = ("format", "format:write", "prettier")


def has_format_script(package_json: Path = Path("package.json")) -> bool:
    """Check package.json for a format script"""
    try:
        with open(package_json, "r", encoding="utf-8") as f:
            scripts = json.load(f).get("scripts") or {}
    except (OSError, ValueError, AttributeError):
        return False
    return any(scripts.get(name) for name in FORMAT_SCRIPTS)


def format_files(
    paths: Iterable[Path],
    config: AssetCodegenConfig,
    cwd: Optional[Path] = None,
) -> bool:
    """
    Format generated files with prettier, falling back to `npm run format`

    Args:
        paths: Generated files
        config: Configuration (formatting.autoFormat)
        cwd: Project directory holding package.json

    Returns:
        Whether formatting ran successfully
    """
    files: List[str] = [str(p) for p in paths]
    project_dir = Path(cwd) if cwd else Path.cwd()

    if not config.formatting.auto_format:
        logger.info("⚙️ autoFormat is disabled, skipping formatting")
        return False
    if not has_format_script(project_dir / "package.json"):
        logger.info("No format script in package.json, skipping formatting")
        return False
    if not files:
        logger.info("No generated files to format")
        return False

    logger.info("🎨 Formatting generated files...")
    try:
        subprocess.run(["npx", "prettier", "--write", *files], cwd=project_dir, check=True)
        logger.info("   ✅ Formatting complete")
        return True
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f"prettier failed: {e}")

    try:
        logger.info("🎨 Falling back to npm run format...")
        subprocess.run(["npm", "run", "format"], cwd=project_dir, check=True)
        logger.info("   ✅ Formatting complete")
        return True
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning(f"   ⚠️ Formatting skipped: {e}")
        return False
