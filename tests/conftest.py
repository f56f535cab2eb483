from pathlib import Path

import pytest
from loguru import logger

from core import config_from_dict, deep_merge, default_config_dict


def touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def build_config(roots, extensions=("svg", "png"), sep="-", scope="path", output_dir=None, **overrides):
    """AssetCodegenConfig from (name, path[, enabled]) tuples"""
    data = {
        "assetDirectories": [
            {"name": r[0], "path": str(r[1]), "enabled": r[2] if len(r) > 2 else True}
            for r in roots
        ],
        "fileGeneration": {"supportedExtensions": list(extensions)},
        "conventions": {"separatorChar": sep, "cleanScope": scope},
        "formatting": {"autoFormat": False},
    }
    if output_dir is not None:
        data["fileGeneration"]["outputDir"] = str(output_dir)
    data = deep_merge(data, overrides)
    return config_from_dict(deep_merge(default_config_dict(), data))


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def icons_tree(tmp_path):
    """assets/icons with a nested home folder"""
    root = tmp_path / "assets" / "icons"
    touch(root / "home" / "icons-home-icon.svg", "<svg>home</svg>")
    return root
