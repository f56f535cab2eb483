from core import collect_asset_info, generate_types, render_type_definitions
from core.gen_types import dedupe_assets, write_type_file
from tests.conftest import build_config, touch


def _config(tmp_path, **kwargs):
    icons = tmp_path / "icons"
    images = tmp_path / "images"
    touch(icons / "home" / "icons-home-door.svg")
    touch(icons / "icons-logo.svg")
    touch(images / "banner.PNG")
    return build_config([("icons", icons), ("images", images)], output_dir=tmp_path / "out", **kwargs)


def test_collect_asset_info(tmp_path):
    assets = collect_asset_info(_config(tmp_path))

    by_name = {a.name: a for a in assets}
    door = by_name["icons-home-door"]
    assert door.path == "home/icons-home-door.svg"
    assert door.type == "icon"
    assert door.category == "home"
    assert door.asset_dir == "icons"
    assert by_name["icons-logo"].category == "icons"
    banner = by_name["banner"]
    assert banner.extension == "png"
    assert banner.type == "image"
    assert banner.category == "images"


def test_render_type_definitions(tmp_path):
    config = _config(tmp_path)
    text = render_type_definitions(config, collect_asset_info(config))

    assert "export type AssetName = 'banner' | 'icons-home-door' | 'icons-logo'" in text
    assert "export interface AssetInfo" in text
    assert "export type AssetProps =" in text
    assert "export type SizeType = 'lg' | 'md' | 'sm' | 'xl' | 'xs'" in text
    assert "export const colorMap: Record<ColorType, string>" in text
    assert "export const assetPathMap: Record<AssetName, AssetInfo> = {" in text
    assert "path: 'home/icons-home-door.svg'," in text


def test_render_without_size_and_color_maps(tmp_path):
    config = _config(tmp_path, typeGeneration={"includeSizeTypes": False, "includeColorTypes": False})
    text = render_type_definitions(config, [])

    assert "sizeMap" not in text
    assert "colorMap" not in text
    assert "export type SizeType = string" in text
    assert "export type AssetName = never" in text


def test_dedupe_keeps_first(tmp_path):
    touch(tmp_path / "a" / "logo.svg")
    touch(tmp_path / "b" / "logo.svg")
    config = build_config([("a", tmp_path / "a"), ("b", tmp_path / "b")])

    unique, duplicates = dedupe_assets(collect_asset_info(config))

    assert [(a.name, a.asset_dir) for a in unique] == [("logo", "a")]
    assert duplicates == ["logo"]


def test_generate_types_writes_file(tmp_path):
    result = generate_types(_config(tmp_path))

    assert result.written
    assert result.output_path == tmp_path / "out" / "types.ts"
    assert result.generated_files == [result.output_path]
    content = result.output_path.read_text(encoding="utf-8")
    assert content.startswith("/**\n * Asset Types")
    assert "import React from 'react'" in content


def test_overwrite_skip_mode(tmp_path):
    config = _config(tmp_path, fileGeneration={"overwriteMode": "skip"})
    existing = touch(tmp_path / "out" / "types.ts", "keep me")

    path, written = write_type_file(config, "new")

    assert path == existing
    assert not written
    assert existing.read_text(encoding="utf-8") == "keep me"


def test_overwrite_backup_mode(tmp_path):
    config = _config(tmp_path, fileGeneration={"overwriteMode": "backup"})
    existing = touch(tmp_path / "out" / "types.ts", "old")

    path, written = write_type_file(config, "new")

    assert written
    assert path.read_text(encoding="utf-8") == "new"
    assert (tmp_path / "out" / "types.ts.backup").read_text(encoding="utf-8") == "old"


def test_quotes_in_names_are_escaped(tmp_path):
    touch(tmp_path / "icons" / "it's.svg")
    config = build_config([("icons", tmp_path / "icons")])

    text = render_type_definitions(config, collect_asset_info(config))

    assert "'it\\'s'" in text
