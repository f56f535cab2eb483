"""
gen_types.py - TypeScript Type Generation Module

Scans the enabled asset directories and writes a types file describing
every asset (name union, info interface, props, size/color maps, path map)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import json
import shutil

from loguru import logger

from .config import AssetCodegenConfig
from .models_fs import AssetRoot
from .scan_files import walk_assets


SVG_EXTENSIONS = ("svg",)
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "webp", "gif", "bmp")


@dataclass(frozen=True)
class AssetInfo:
    """Asset entry in the generated path map"""
    name: str
    filename: str
    path: str                       # Relative to the asset root, "/" separated
    extension: str                  # Lowercase, without dot
    asset_dir: str
    path_parts: Tuple[str, ...]
    type: str                       # icon / image / asset
    category: str


@dataclass
class TypesResult:
    """Type generation result"""
    output_path: Optional[Path] = None
    assets: List[AssetInfo] = field(default_factory=list)
    written: bool = False
    skipped_duplicates: List[str] = field(default_factory=list)

    @property
    def generated_files(self) -> List[Path]:
        return [self.output_path] if self.written and self.output_path else []


def get_asset_type(extension: str) -> str:
    if extension in SVG_EXTENSIONS:
        return "icon"
    if extension in IMAGE_EXTENSIONS:
        return "image"
    return "asset"


def get_asset_category(path_parts: Tuple[str, ...], asset_dir_name: str) -> str:
    return path_parts[0] if path_parts else asset_dir_name


def collect_asset_info(config: AssetCodegenConfig) -> List[AssetInfo]:
    """Collect AssetInfo from every enabled asset root"""
    assets: List[AssetInfo] = []
    for root in config.enabled_roots:
        assets.extend(_collect_from_root(root, config.supported_extensions))
    return assets


def _collect_from_root(root: AssetRoot, supported_extensions: List[str]) -> List[AssetInfo]:
    root_path = Path(root.path)
    if not root_path.is_dir():
        logger.warning(f"⚠️ Directory scan failed: {root_path} - not a directory")
        return []

    assets = []
    for ref in walk_assets(root_path, supported_extensions):
        extension = ref.extension.lower().lstrip(".")
        assets.append(AssetInfo(
            name=ref.stem,
            filename=ref.original_filename,
            path="/".join(ref.path_parts + (ref.original_filename,)),
            extension=extension,
            asset_dir=root.name,
            path_parts=ref.path_parts,
            type=get_asset_type(extension),
            category=get_asset_category(ref.path_parts, root.name),
        ))
    return assets


def ts_string(value: str) -> str:
    """Single-quoted TypeScript string literal"""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def dedupe_assets(assets: List[AssetInfo]) -> Tuple[List[AssetInfo], List[str]]:
    """Keep the first asset of each name; return (unique, duplicate names)"""
    seen: Dict[str, AssetInfo] = {}
    duplicates = []
    for asset in assets:
        if asset.name in seen:
            duplicates.append(asset.name)
            logger.warning(
                f"Duplicate asset name '{asset.name}': {asset.asset_dir}/{asset.path} "
                f"ignored, keeping {seen[asset.name].asset_dir}/{seen[asset.name].path}"
            )
            continue
        seen[asset.name] = asset
    return list(seen.values()), duplicates


def _names_type(assets: List[AssetInfo], type_name: str) -> str:
    names = sorted(ts_string(a.name) for a in assets)
    union = " | ".join(names) if names else "never"
    return (
        "/**\n"
        " * Asset name type\n"
        " * Every available asset name\n"
        " */\n"
        f"export type {type_name} = {union}"
    )


def _info_interface() -> str:
    return """/**
 * Asset info interface
 */
export interface AssetInfo {
  name: string
  filename: string
  path: string
  extension: string
  type: 'icon' | 'image' | 'asset'
  category: string
  assetDir: string
}"""


def _props_types(props_type: str, name_type: str) -> str:
    return f"""/**
 * Size object type
 */
export type SizeObject =
  | {{ width: number; height?: number }}
  | {{ width?: number; height: number }}
  | {{ width: number; height: number }}

/**
 * Asset size type
 */
export type AssetSize = SizeType | number | SizeObject

/**
 * Asset color type
 */
export type AssetColor = ColorType | string

/**
 * Asset component props
 */
export type {props_type} =
  | {{
      type: 'icon'
      name: {name_type}
      src?: never
      extension?: string
      size?: AssetSize
      color?: AssetColor
      className?: string
      style?: React.CSSProperties
      'aria-label'?: string
      alt?: string
      fallback?: React.ReactNode
      ratio?: number
    }}
  | {{
      type: 'url'
      name?: never
      src: string
      extension?: never
      size?: AssetSize
      color?: AssetColor
      className?: string
      style?: React.CSSProperties
      'aria-label'?: string
      alt?: string
      fallback?: React.ReactNode
      ratio?: number
    }}"""


def _mapping_types(type_name: str, const_name: str, value_type: str, mapping: dict) -> str:
    keys = sorted(ts_string(k) for k in mapping)
    union = " | ".join(keys) if keys else "never"
    body = json.dumps(mapping, indent=2, ensure_ascii=False)
    return (
        f"export type {type_name} = {union}\n\n"
        f"export const {const_name}: Record<{type_name}, {value_type}> = {body}"
    )


def _path_map(assets: List[AssetInfo], map_name: str, name_type: str) -> str:
    entries = []
    for a in assets:
        entries.append(
            f"  {ts_string(a.name)}: {{\n"
            f"    name: {ts_string(a.name)},\n"
            f"    filename: {ts_string(a.filename)},\n"
            f"    path: {ts_string(a.path)},\n"
            f"    extension: {ts_string(a.extension)},\n"
            f"    type: {ts_string(a.type)},\n"
            f"    category: {ts_string(a.category)},\n"
            f"    assetDir: {ts_string(a.asset_dir)}\n"
            f"  }}"
        )
    return (
        "/**\n"
        " * Asset path map\n"
        " */\n"
        f"export const {map_name}: Record<{name_type}, AssetInfo> = {{\n"
        + ",\n".join(entries)
        + ("\n" if entries else "")
        + "}"
    )


def render_type_definitions(config: AssetCodegenConfig, assets: List[AssetInfo]) -> str:
    """Render the TypeScript sections for a list of unique assets"""
    tg = config.type_generation
    sections = [
        _names_type(assets, tg.asset_name_type),
        _info_interface(),
        _props_types(tg.asset_props_type, tg.asset_name_type),
    ]
    # Props reference SizeType/ColorType, so they fall back to plain types when disabled
    if tg.include_size_types:
        sections.append(_mapping_types("SizeType", "sizeMap", "number", config.size_mapping))
    else:
        sections.append("export type SizeType = string")
    if tg.include_color_types:
        sections.append(_mapping_types("ColorType", "colorMap", "string", config.color_mapping))
    else:
        sections.append("export type ColorType = string")
    sections.append(_path_map(assets, tg.path_map_name, tg.asset_name_type))
    return "\n\n".join(sections)


def render_file_header(config: AssetCodegenConfig) -> str:
    timestamp = datetime.now(timezone.utc).isoformat()
    return (
        "/**\n"
        " * Asset Types\n"
        " *\n"
        " * Generated by asset-codegen. Do not edit by hand.\n"
        " *\n"
        f" * @generated {timestamp}\n"
        f" * @package {config.project_name or 'asset-codegen'}\n"
        " */\n"
        "\n"
        "import React from 'react'"
    )


def write_output_file(output_path: Path, content: str, overwrite_mode: str) -> bool:
    """
    Write a generated file, honoring an overwrite mode

    Args:
        output_path: File to write (parent directories are created)
        content: File content
        overwrite_mode: overwrite / skip / backup

    Returns:
        Whether the file was written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path.exists():
        if overwrite_mode == "skip":
            logger.warning(f"  ⚠️ {output_path.name} already exists, skipping")
            return False
        if overwrite_mode == "backup":
            backup_path = output_path.with_name(output_path.name + ".backup")
            shutil.copyfile(output_path, backup_path)
            logger.info(f"  📦 Backup created: {backup_path.name}")
        else:
            logger.info(f"  🔄 Overwriting {output_path.name}")

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)
    return True


def write_type_file(config: AssetCodegenConfig, content: str) -> Tuple[Path, bool]:
    """
    Write the types file, honoring fileGeneration.overwriteMode

    Returns:
        (output_path, written)
    """
    output_path = Path(config.file_generation.output_dir) / config.file_generation.output_file
    written = write_output_file(output_path, content, config.file_generation.overwrite_mode)
    if written:
        logger.info(f"  ✓ TypeScript types written: {output_path}")
    return output_path, written


def generate_types(config: AssetCodegenConfig) -> TypesResult:
    """Collect assets and write the types file"""
    result = TypesResult()
    if not config.enabled_roots:
        logger.warning("No enabled asset directories")
        return result

    logger.info("📝 Generating TypeScript types...")
    assets, duplicates = dedupe_assets(collect_asset_info(config))
    result.assets = assets
    result.skipped_duplicates = duplicates

    content = f"{render_file_header(config)}\n\n{render_type_definitions(config, assets)}\n"
    result.output_path, result.written = write_type_file(config, content)
    logger.info(f"Types generated for {len(assets)} assets")
    return result
