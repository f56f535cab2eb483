import os
from pathlib import Path
from threading import Event

from core import PassState, PassStatus, run_clean_pass, run_organize_pass
from tests.conftest import build_config, touch


def _names(directory):
    return sorted(p.name for p in directory.iterdir() if p.is_file())


def test_clean_pass_strips_folder_names(tmp_path, icons_tree):
    config = build_config([("icons", icons_tree)])

    summary = run_clean_pass(config)

    assert _names(icons_tree / "home") == ["icon.svg"]
    assert (icons_tree / "home" / "icon.svg").read_text(encoding="utf-8") == "<svg>home</svg>"
    assert summary.processed_count == 1
    assert summary.per_root == {"icons": 1}
    assert summary.folder_names == frozenset({"icons", "home"})
    assert summary.status == PassStatus.OK
    assert summary.state == PassState.DONE


def test_organize_pass_applies_folder_structure(tmp_path):
    root = tmp_path / "assets" / "icons"
    touch(root / "home" / "icon.svg")
    touch(root / "logo.svg")
    config = build_config([("icons", root)])

    summary = run_organize_pass(config)

    assert _names(root / "home") == ["icons-home-icon.svg"]
    assert _names(root) == ["icons-logo.svg"]
    assert [r.new_name for r in summary.results] == ["icons-home-icon.svg", "icons-logo.svg"]
    assert summary.results[0].path_parts == ("home",)


def test_organize_pass_second_run_changes_nothing(tmp_path, monkeypatch):
    root = tmp_path / "icons"
    touch(root / "home" / "icon.svg")
    config = build_config([("icons", root)])
    run_organize_pass(config)

    calls = []
    monkeypatch.setattr("core.exec_rename.os.rename", lambda *args: calls.append(args))
    summary = run_organize_pass(config)

    assert summary.processed_count == 0
    assert calls == []
    assert _names(root / "home") == ["icons-home-icon.svg"]


def test_clean_then_organize_is_stable(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "home-arrow-icons.svg")
    config = build_config([("icons", root)])

    run_clean_pass(config)
    run_organize_pass(config)
    assert _names(root / "home") == ["icons-home-arrow.svg"]

    assert run_clean_pass(config).processed_count == 1
    assert run_organize_pass(config).processed_count == 1
    assert _names(root / "home") == ["icons-home-arrow.svg"]


def test_missing_root_does_not_stop_other_roots(tmp_path):
    icons = tmp_path / "icons"
    images = tmp_path / "images"
    touch(icons / "home" / "home-door.svg")
    touch(images / "banners" / "banners-sale.png")
    config = build_config([
        ("icons", icons),
        ("missing", tmp_path / "does-not-exist"),
        ("images", images),
    ])

    summary = run_clean_pass(config, max_workers=3)

    assert _names(icons / "home") == ["door.svg"]
    assert _names(images / "banners") == ["sale.png"]
    assert summary.status == PassStatus.PARTIAL
    assert [f.root_name for f in summary.root_failures] == ["missing"]
    assert summary.per_root == {"icons": 1, "images": 1}
    assert "completed with failures" in summary.summary()


def test_results_follow_configuration_order(tmp_path):
    roots = []
    for name in ("zeta", "alpha", "mid"):
        touch(tmp_path / name / f"{name}-file.svg")
        roots.append((name, tmp_path / name))
    config = build_config(roots)

    summary = run_clean_pass(config, max_workers=3)

    assert [r.asset_root_name for r in summary.results] == ["zeta", "alpha", "mid"]
    assert list(summary.per_root) == ["zeta", "alpha", "mid"]


def test_no_enabled_roots_is_nothing_to_do(tmp_path):
    touch(tmp_path / "icons" / "icons-a.svg")
    config = build_config([("icons", tmp_path / "icons", False)])

    summary = run_clean_pass(config)

    assert summary.status == PassStatus.NOTHING_TO_DO
    assert summary.results == []
    assert not summary.has_failures
    assert _names(tmp_path / "icons") == ["icons-a.svg"]


def test_path_scope_ignores_other_roots_folders(tmp_path):
    icons = tmp_path / "icons"
    images = tmp_path / "images"
    touch(icons / "arrow-left.svg")
    touch(images / "arrow" / "banner.png")

    path_scoped = run_clean_pass(build_config([("icons", icons), ("images", images)]), dry_run=True)
    assert path_scoped.processed_count == 0

    global_scoped = run_clean_pass(
        build_config([("icons", icons), ("images", images)], scope="global"), dry_run=True)
    assert [r.new_name for r in global_scoped.results] == ["left.svg"]


def test_dry_run_renames_nothing(tmp_path, icons_tree):
    summary = run_clean_pass(build_config([("icons", icons_tree)]), dry_run=True)

    assert [r.new_name for r in summary.results] == ["icon.svg"]
    assert summary.dry_run
    assert _names(icons_tree / "home") == ["icons-home-icon.svg"]


def test_collision_is_a_file_failure(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "home-door.svg", "prefixed")
    touch(root / "home" / "door.svg", "plain")
    config = build_config([("icons", root)])

    summary = run_clean_pass(config)

    assert _names(root / "home") == ["door.svg", "home-door.svg"]
    assert (root / "home" / "door.svg").read_text(encoding="utf-8") == "plain"
    assert summary.status == PassStatus.PARTIAL
    assert len(summary.file_failures) == 1


def test_cancel_event_stops_pass(tmp_path, icons_tree):
    cancel = Event()
    cancel.set()

    summary = run_clean_pass(build_config([("icons", icons_tree)]), cancel_event=cancel)

    assert summary.cancelled
    assert summary.processed_count == 0
    assert _names(icons_tree / "home") == ["icons-home-icon.svg"]


def test_custom_separator(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "icon.svg")
    config = build_config([("icons", root)], sep="_")

    run_organize_pass(config)
    assert _names(root / "home") == ["icons_home_icon.svg"]

    run_clean_pass(config)
    assert _names(root / "home") == ["icon.svg"]


def test_progress_callback_sees_each_file(tmp_path, icons_tree):
    seen = []
    run_clean_pass(build_config([("icons", icons_tree)]), dry_run=True, progress_callback=seen.append)
    assert seen == [str(icons_tree / "home" / "icons-home-icon.svg")]


def _deny_scandir(monkeypatch, denied):
    real_scandir = os.scandir

    def scandir(path="."):
        if Path(path) == denied:
            raise PermissionError(f"Permission denied: {path}")
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


def test_unreadable_root_is_a_root_failure(tmp_path, monkeypatch):
    icons = tmp_path / "icons"
    locked = tmp_path / "locked"
    touch(icons / "icons-a.svg")
    touch(locked / "locked-b.svg")
    _deny_scandir(monkeypatch, locked)

    summary = run_clean_pass(build_config([("icons", icons), ("locked", locked)]))

    assert _names(icons) == ["a.svg"]
    assert [f.root_name for f in summary.root_failures] == ["locked"]
    assert summary.status == PassStatus.PARTIAL
    assert summary.per_root == {"icons": 1}


def test_unreadable_subdirectory_is_skipped(tmp_path, monkeypatch):
    root = tmp_path / "icons"
    touch(root / "home" / "home-door.svg")
    touch(root / "locked" / "locked-key.svg")
    touch(root / "user" / "user-avatar.svg")
    _deny_scandir(monkeypatch, root / "locked")

    summary = run_clean_pass(build_config([("icons", root)]))

    assert _names(root / "home") == ["door.svg"]
    assert _names(root / "user") == ["avatar.svg"]
    assert [r.new_name for r in summary.results] == ["door.svg", "avatar.svg"]
    assert summary.status == PassStatus.OK


def test_preview_reports_collision_like_real_run(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "home-door.svg")
    touch(root / "home" / "door.svg")
    config = build_config([("icons", root)])

    preview = run_clean_pass(config, dry_run=True)
    real = run_clean_pass(config)

    assert preview.processed_count == real.processed_count == 0
    assert preview.status == real.status == PassStatus.PARTIAL
    assert len(preview.file_failures) == len(real.file_failures) == 1


def test_preview_flags_two_files_with_the_same_target(tmp_path):
    root = tmp_path / "icons"
    touch(root / "home" / "home-door.svg", "first")
    touch(root / "home" / "icons-door.svg", "second")
    config = build_config([("icons", root)])

    preview = run_clean_pass(config, dry_run=True)

    assert [r.new_name for r in preview.results] == ["door.svg"]
    assert [f.path.name for f in preview.file_failures] == ["icons-door.svg"]
    assert preview.status == PassStatus.PARTIAL
    assert _names(root / "home") == ["home-door.svg", "icons-door.svg"]

    real = run_clean_pass(config)

    assert real.processed_count == preview.processed_count
    assert [f.path.name for f in real.file_failures] == ["icons-door.svg"]
    assert (root / "home" / "door.svg").read_text(encoding="utf-8") == "first"
