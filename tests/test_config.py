import json
from pathlib import Path

import pytest

from core import (
    ConfigError, create_config, deep_merge, default_config_dict,
    default_config_for, load_config, validate_config,
)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_config_merges_defaults(tmp_path):
    path = _write(tmp_path / "asset-codegen.config.json", {
        "projectName": "demo",
        "assetDirectories": [{"name": "icons", "path": "public/icons"}],
        "conventions": {"separatorChar": "_"},
        "fileGeneration": {"supportedExtensions": ["SVG", ".png"]},
        "featureFlags": {"organizeFilenames": {"enabled": False}, "cleanupDuplicates": False},
    })

    config = load_config(path)

    assert config.project_name == "demo"
    assert [(r.name, r.path, r.enabled) for r in config.asset_directories] == [
        ("icons", Path("public/icons"), True)
    ]
    assert config.separator == "_"
    assert config.conventions.clean_scope == "path"
    assert config.supported_extensions == ["svg", "png"]
    assert config.file_generation.output_dir == "src/components/asset"
    assert config.type_generation.asset_name_type == "AssetName"
    assert config.size_mapping["md"] == 24
    assert config.feature_flags.organize_filenames is False
    assert config.feature_flags.cleanup_duplicates is False
    assert config.feature_flags.generate_types is True


def test_enabled_roots(tmp_path):
    path = _write(tmp_path / "c.json", {
        "assetDirectories": [
            {"name": "icons", "path": "a", "enabled": True},
            {"name": "images", "path": "b", "enabled": False},
        ],
    })
    assert [r.name for r in load_config(path).enabled_roots] == ["icons"]


def test_missing_config_is_fatal(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.json")


def test_unparseable_config_is_fatal(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_separator_is_rejected(tmp_path):
    path = _write(tmp_path / "c.json", {"conventions": {"separatorChar": "--"}})
    with pytest.raises(ConfigError, match="separatorChar"):
        load_config(path)


def test_validate_config_reports_every_error(tmp_path):
    path = _write(tmp_path / "c.json", {
        "projectName": "",
        "assetDirectories": [{"name": "icons"}, {"path": "x"}],
        "fileGeneration": {"overwriteMode": "merge"},
        "conventions": {"cleanScope": "everything"},
    })

    is_valid, errors, config = validate_config(path)

    assert not is_valid
    assert config is None
    assert "projectName is required" in errors
    assert "assetDirectories[0].path is required" in errors
    assert "assetDirectories[1].name is required" in errors
    assert any("overwriteMode" in e for e in errors)
    assert any("cleanScope" in e for e in errors)


def test_validate_config_valid(tmp_path):
    path = _write(tmp_path / "c.json", default_config_dict())
    is_valid, errors, config = validate_config(path)
    assert is_valid and errors == []
    assert config.project_name == "my-project"


def test_deep_merge_does_not_mutate_inputs():
    target = {"a": {"b": 1, "c": [1]}, "d": 1}
    source = {"a": {"b": 2}, "e": [3]}

    merged = deep_merge(target, source)

    assert merged == {"a": {"b": 2, "c": [1]}, "d": 1, "e": [3]}
    assert target == {"a": {"b": 1, "c": [1]}, "d": 1}
    merged["a"]["c"].append(2)
    assert target["a"]["c"] == [1]


def test_default_config_for_project_types():
    assert default_config_for("react", "app")["assetDirectories"][0]["path"] == "src/assets"
    assert default_config_for("react-native", "app")["assetDirectories"][0]["path"] == "assets"
    nextjs = default_config_for("nextjs", "site")
    assert nextjs["projectName"] == "site"
    assert [d["name"] for d in nextjs["assetDirectories"]] == ["icons", "images"]


def test_create_config_refuses_overwrite(tmp_path):
    path = tmp_path / "asset-codegen.config.json"
    create_config(path, default_config_dict())

    with pytest.raises(ConfigError, match="already exists"):
        create_config(path, {"projectName": "other"})

    create_config(path, {"projectName": "other"}, force=True)
    assert json.loads(path.read_text(encoding="utf-8")) == {"projectName": "other"}


@pytest.mark.parametrize("key", ["fileGeneration", "conventions", "componentGeneration", "featureFlags"])
def test_non_object_section_is_an_error(tmp_path, key):
    path = _write(tmp_path / "c.json", {key: "x"})

    is_valid, errors, config = validate_config(path)

    assert not is_valid
    assert config is None
    assert f"{key} must be an object" in errors
    with pytest.raises(ConfigError, match=f"{key} must be an object"):
        load_config(path)


def test_component_generation_settings(tmp_path):
    path = _write(tmp_path / "c.json", {
        "componentGeneration": {"framework": "react-native", "componentName": "Icon", "generateHook": False},
    })

    cg = load_config(path).component_generation

    assert cg.framework == "react-native"
    assert cg.component_name == "Icon"
    assert cg.generate_hook is False
    assert cg.generate_utils is True


def test_invalid_component_settings_are_rejected(tmp_path):
    path = _write(tmp_path / "c.json", {
        "componentGeneration": {"framework": "vue", "componentName": "my-asset"},
    })

    is_valid, errors, _ = validate_config(path)

    assert not is_valid
    assert any("framework" in e for e in errors)
    assert any("componentName" in e for e in errors)
