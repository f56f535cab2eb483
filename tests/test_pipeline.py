import json
import subprocess
import sys

import pytest

from core import format_files, resolve_steps, run_pipeline
from core.format_files import has_format_script
from tests.conftest import build_config, touch


def test_resolve_steps_from_feature_flags(tmp_path):
    config = build_config([("icons", tmp_path)])
    assert resolve_steps(config) == ["clean", "organize", "types", "components"]

    config = build_config([("icons", tmp_path)], featureFlags={"cleanupDuplicates": {"enabled": False}})
    assert resolve_steps(config) == ["organize", "types", "components"]

    config = build_config([("icons", tmp_path)], featureFlags={"generateComponent": False})
    assert resolve_steps(config) == ["clean", "organize", "types"]

    config = build_config([("icons", tmp_path)], componentGeneration={"enabled": False})
    assert resolve_steps(config) == ["clean", "organize", "types"]


def test_resolve_steps_requested_keeps_pipeline_order(tmp_path):
    config = build_config([("icons", tmp_path)])
    assert resolve_steps(config, ["types", "organize-filenames"]) == ["organize", "types"]
    assert resolve_steps(config, ["generateComponent", "clean"]) == ["clean", "components"]


def test_resolve_steps_unknown_step(tmp_path):
    with pytest.raises(ValueError, match="Unknown step"):
        resolve_steps(build_config([("icons", tmp_path)]), ["bogus"])


def test_run_pipeline_full(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "home-door.svg")
    config = build_config([("icons", root)], output_dir=tmp_path / "out")

    result = run_pipeline(config)

    assert (root / "home" / "icons-home-door.svg").exists()
    assert [s.pass_name for s in result.pass_summaries] == ["clean", "organize"]
    assert result.completed_steps == result.total_steps == 4
    out = tmp_path / "out"
    assert result.generated_files == [out / "types.ts", out / "Asset.tsx", out / "hooks.ts", out / "utils.ts", out / "index.ts"]
    assert result.components_result.stats["component"] == 1
    assert "'icons-home-door'" in result.generated_files[0].read_text(encoding="utf-8")
    assert not result.has_failures
    assert result.formatted is False


def test_run_pipeline_dry_run_writes_nothing(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "home-door.svg")
    config = build_config([("icons", root)], output_dir=tmp_path / "out")

    result = run_pipeline(config, dry_run=True)

    assert (root / "home" / "home-door.svg").exists()
    assert not (tmp_path / "out").exists()
    assert result.generated_files == []


def test_run_pipeline_reports_partial_failure(tmp_path):
    config = build_config([("missing", tmp_path / "missing")])
    result = run_pipeline(config, steps=["clean"])
    assert result.has_failures


def test_has_format_script(tmp_path):
    package_json = tmp_path / "package.json"
    assert not has_format_script(package_json)

    package_json.write_text(json.dumps({"scripts": {"format": "prettier --write ."}}), encoding="utf-8")
    assert has_format_script(package_json)


def test_format_files_skipped_without_auto_format(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(sys.modules["core.format_files"].subprocess, "run", lambda *a, **k: calls.append(a))
    config = build_config([("icons", tmp_path)])  # autoFormat disabled in test configs

    assert format_files([tmp_path / "types.ts"], config, cwd=tmp_path) is False
    assert calls == []


def test_format_files_falls_back_to_npm(tmp_path, monkeypatch):
    touch(tmp_path / "package.json", json.dumps({"scripts": {"format": "prettier"}}))
    config = build_config([("icons", tmp_path)], formatting={"autoFormat": True})
    calls = []

    def fake_run(cmd, cwd=None, check=False):
        calls.append(cmd)
        if cmd[0] == "npx":
            raise subprocess.CalledProcessError(1, cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(sys.modules["core.format_files"].subprocess, "run", fake_run)

    assert format_files([tmp_path / "types.ts"], config, cwd=tmp_path) is True
    assert calls == [
        ["npx", "prettier", "--write", str(tmp_path / "types.ts")],
        ["npm", "run", "format"],
    ]


def test_format_files_tolerates_missing_tools(tmp_path, monkeypatch):
    touch(tmp_path / "package.json", json.dumps({"scripts": {"prettier": "prettier"}}))
    config = build_config([("icons", tmp_path)], formatting={"autoFormat": True})

    def missing(cmd, cwd=None, check=False):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(sys.modules["core.format_files"].subprocess, "run", missing)

    assert format_files([tmp_path / "types.ts"], config, cwd=tmp_path) is False
