"""
gen_components.py - React Component Generation Module

Writes the files that sit next to the generated types:
- Asset component (React / Next.js, or React Native)
- Hooks (useAssetPath, useAssetInfo, ...)
- Utility functions (getAssetPath, getSizeStyle, ...)
- index.ts re-exporting all of the above
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple
import json

from loguru import logger

from .config import AssetCodegenConfig
from .gen_types import ts_string, write_output_file


COMPONENT = "component"
HOOKS = "hooks"
UTILS = "utils"
INDEX = "index"


@dataclass(frozen=True)
class GeneratedFile:
    """One file produced by component generation"""
    kind: str                       # component / hooks / utils / index
    path: Path
    written: bool
    exports: int = 0                # Exported functions and components


@dataclass
class ComponentsResult:
    """Component generation result"""
    files: List[GeneratedFile] = field(default_factory=list)
    enabled: bool = True

    @property
    def generated_files(self) -> List[Path]:
        return [f.path for f in self.files if f.written]

    @property
    def skipped_files(self) -> List[Path]:
        return [f.path for f in self.files if not f.written]

    @property
    def stats(self) -> Dict[str, int]:
        counts = {COMPONENT: 0, HOOKS: 0, UTILS: 0}
        for f in self.files:
            if f.kind in counts:
                counts[f.kind] += f.exports
        return counts


def asset_base_paths(config: AssetCodegenConfig) -> Dict[str, str]:
    """
    URL prefix in front of each asset directory name

    `public/` is served from the site root, so `public/icons` maps to ""
    and `public/static/icons` maps to "/static".
    """
    base_paths = {}
    for root in config.asset_directories:
        posix = Path(root.path).as_posix()
        if posix.startswith("public/"):
            posix = posix[len("public/"):]
        parts = [p for p in posix.split("/") if p][:-1]
        base_paths[root.name] = "/" + "/".join(parts) if parts else ""
    return base_paths


def types_module(config: AssetCodegenConfig) -> str:
    """Import specifier of the generated types file"""
    return "./" + Path(config.file_generation.output_file).stem


def _path_resolver(config: AssetCodegenConfig) -> str:
    entries = "".join(
        f"  {ts_string(name)}: {ts_string(base)},\n"
        for name, base in asset_base_paths(config).items()
    )
    return (
        "const assetDirBasePathMap: Record<string, string> = {\n"
        f"{entries}"
        "}\n"
        "\n"
        "function resolveAssetPath(info: AssetInfo): string {\n"
        "  const basePath = assetDirBasePathMap[info.assetDir] || ''\n"
        "  return `${basePath}/${info.assetDir}/${info.path}`\n"
        "}"
    )


def _map_imports(config: AssetCodegenConfig) -> Tuple[List[str], str]:
    """
    sizeMap/colorMap come from the types file when it emits them,
    otherwise they are declared locally from the configured mappings
    """
    tg = config.type_generation
    imports: List[str] = []
    local = []
    if tg.include_size_types:
        imports.append("sizeMap")
    else:
        local.append(
            "const sizeMap: Record<string, number> = "
            + json.dumps(config.size_mapping or {"md": 24}, indent=2)
        )
    if tg.include_color_types:
        imports.append("colorMap")
    else:
        local.append(
            "const colorMap: Record<string, string> = "
            + json.dumps(config.color_mapping, indent=2, ensure_ascii=False)
        )
    return imports, "\n\n".join(local)


def _file_header(title: str) -> str:
    return (
        "/**\n"
        f" * {title}\n"
        " *\n"
        " * Generated by asset-codegen. Do not edit by hand.\n"
        " */"
    )


# Templates use %-formatting: TypeScript braces and ${} pass through untouched

REACT_COMPONENT_TEMPLATE = """%(directive)s%(header)s

%(image_import)simport React, { forwardRef, useMemo } from 'react'
import { %(imports)s } from '%(types_module)s'
%(local_maps)s
%(resolver)s

/**
 * Renders a generated asset by name, or any asset by URL
 *
 * @example
 * <%(component)s type="icon" name="icons-home" size="md" />
 * <%(component)s type="url" src="/path/to/image.png" size={32} />
 * <%(component)s type="icon" name="icons-home" size="lg" color="primary" className="my-icon" />
 */
export const %(component)s = forwardRef<HTMLDivElement | HTMLImageElement, %(props_type)s>((props, ref) => {
  const { size = 'md', color, className, style, 'aria-label': ariaLabel, alt, fallback, ratio } = props

  const calculatedSize = useMemo(() => {
    if (typeof size === 'number') {
      return { width: size, height: size }
    }
    if (typeof size === 'object') {
      if (size.width !== undefined && size.height !== undefined) {
        return { width: size.width, height: size.height }
      }
      if (size.width !== undefined) {
        return { width: size.width, height: ratio ? size.width / ratio : size.width }
      }
      if (size.height !== undefined) {
        return { width: ratio ? size.height * ratio : size.height, height: size.height }
      }
    }
    const sizeValue = sizeMap[size as keyof typeof sizeMap] || sizeMap.md || 24
    return { width: sizeValue, height: sizeValue }
  }, [size, ratio])

  const calculatedColor = useMemo(() => {
    if (!color) return undefined
    return (colorMap as Record<string, string>)[color] || color
  }, [color])

  const calculatedStyle = useMemo(() => {
    const baseStyle: React.CSSProperties = {
      ...style,
      width: calculatedSize.width,
      height: calculatedSize.height,
    }
    if (calculatedColor) {
      baseStyle.color = calculatedColor
      baseStyle.fill = calculatedColor
    }
    return baseStyle
  }, [style, calculatedSize, calculatedColor])

  const renderSvg = (href: string, label: string) => (
    <div
      ref={ref as React.Ref<HTMLDivElement>}
      className={className}
      style={calculatedStyle}
      aria-label={ariaLabel || alt || label}
      role="img"
    >
      <svg width="100%%" height="100%%" style={{ fill: 'currentColor' }}>
        <use href={`${href}#main`} />
      </svg>
    </div>
  )

  const renderImage = (src: string, label: string) => (
    <%(image_tag)s
      ref={ref as React.Ref<HTMLImageElement>}
      src={src}
      alt={alt || ariaLabel || label}
      width={calculatedSize.width}
      height={calculatedSize.height}
      className={className}
      style={style}%(image_props)s
      onError={() => {
        console.warn(`Failed to load asset: ${src}`)
      }}
    />
  )

  if (props.type === 'icon') {
    const assetInfo = %(path_map)s[props.name]
    if (!assetInfo) {
      console.warn(`Asset "${props.name}" not found in %(path_map)s`)
      return <>{fallback || null}</>
    }
    const assetPath = resolveAssetPath(assetInfo)
    return assetInfo.extension === 'svg'
      ? renderSvg(assetPath, props.name)
      : renderImage(assetPath, props.name)
  }

  if (props.type === 'url') {
    const isImage = /\\.(png|jpe?g|gif|webp|avif)$/i.test(props.src)
    return isImage ? renderImage(props.src, 'Asset') : renderSvg(props.src, 'Asset')
  }

  return <>{fallback || null}</>
})

%(component)s.displayName = '%(component)s'

export default %(component)s
"""

REACT_NATIVE_COMPONENT_TEMPLATE = """%(header)s

import React from 'react'
import { Image, ImageStyle, StyleProp } from 'react-native'
import { %(imports)s } from '%(types_module)s'
%(local_maps)s
%(resolver)s

/**
 * Renders a generated asset by name, or any asset by URL
 */
export default function %(component)s(props: %(props_type)s) {
  const calculatedSize = calculateSize(props.size)

  if (props.type === 'icon') {
    const assetInfo = %(path_map)s[props.name]
    if (!assetInfo) {
      console.warn(`Asset "${props.name}" not found in %(path_map)s`)
      return props.fallback ? <>{props.fallback}</> : null
    }
    const style: StyleProp<ImageStyle> = [
      { ...calculatedSize, tintColor: calculateColor(props.color) },
      props.style as StyleProp<ImageStyle>,
    ]
    return <Image source={{ uri: resolveAssetPath(assetInfo) }} style={style} />
  }

  const style: StyleProp<ImageStyle> = [calculatedSize, props.style as StyleProp<ImageStyle>]
  return <Image source={{ uri: props.src }} style={style} />
}

function calculateSize(size?: AssetSize): { width: number; height: number } {
  if (typeof size === 'number') {
    return { width: size, height: size }
  }
  if (typeof size === 'object') {
    const width = size.width ?? size.height ?? 24
    const height = size.height ?? size.width ?? 24
    return { width, height }
  }
  const value = (size && (sizeMap as Record<string, number>)[size]) || sizeMap.md || 24
  return { width: value, height: value }
}

function calculateColor(color?: AssetColor): string | undefined {
  if (!color) return undefined
  return (colorMap as Record<string, string>)[color] || color
}

%(component)s.displayName = '%(component)s'
"""

HOOKS_TEMPLATE = """%(header)s

import { useMemo } from 'react'
import { %(name_type)s, AssetInfo, %(path_map)s } from '%(types_module)s'

%(resolver)s

/**
 * URL of an asset
 */
export function useAssetPath(name: %(name_type)s): string {
  return useMemo(() => resolveAssetPath(%(path_map)s[name]), [name])
}

/**
 * URLs of several assets
 */
export function useAssetPaths(names: %(name_type)s[]): string[] {
  return useMemo(() => names.map(name => resolveAssetPath(%(path_map)s[name])), [names])
}

/**
 * Info of an asset
 */
export function useAssetInfo(name: %(name_type)s): AssetInfo {
  return useMemo(() => %(path_map)s[name], [name])
}

/**
 * Info of several assets
 */
export function useAssetInfos(names: %(name_type)s[]): AssetInfo[] {
  return useMemo(() => names.map(name => %(path_map)s[name]), [names])
}

/**
 * Asset names of one type
 */
export function useAssetNamesByType(type: AssetInfo['type']): %(name_type)s[] {
  return useMemo(() => {
    return Object.values(%(path_map)s)
      .filter(asset => asset.type === type)
      .map(asset => asset.name as %(name_type)s)
  }, [type])
}

/**
 * Asset names of one category
 */
export function useAssetNamesByCategory(category: string): %(name_type)s[] {
  return useMemo(() => {
    return Object.values(%(path_map)s)
      .filter(asset => asset.category === category)
      .map(asset => asset.name as %(name_type)s)
  }, [category])
}

/**
 * Asset names matching a search term (name, filename or category)
 */
export function useSearchAssetNames(searchTerm: string): %(name_type)s[] {
  return useMemo(() => {
    if (!searchTerm.trim()) return []
    const term = searchTerm.toLowerCase()
    return Object.values(%(path_map)s)
      .filter(asset =>
        asset.name.toLowerCase().includes(term) ||
        asset.filename.toLowerCase().includes(term) ||
        asset.category.toLowerCase().includes(term)
      )
      .map(asset => asset.name as %(name_type)s)
  }, [searchTerm])
}
"""

UTILS_TEMPLATE = """%(header)s

import React from 'react'
import { %(imports)s } from '%(types_module)s'
%(local_maps)s
%(resolver)s

/**
 * URL of an asset, empty when the name is unknown
 */
export function getAssetPath(name: %(name_type)s): string {
  const assetInfo = %(path_map)s[name]
  if (!assetInfo) {
    console.warn(`Asset "${name}" not found in %(path_map)s`)
    return ''
  }
  return resolveAssetPath(assetInfo)
}

/**
 * Info of an asset, null when the name is unknown
 */
export function getAssetInfo(name: %(name_type)s): AssetInfo | null {
  return %(path_map)s[name] || null
}

/**
 * Width/height style for a size prop
 */
export function getSizeStyle(size?: AssetSize, ratio?: number, style?: React.CSSProperties): React.CSSProperties {
  if (size === undefined) {
    // ratio 1 squares whatever dimension the CSS already sets
    if (ratio === 1) {
      if (style?.width) return { height: style.width }
      if (style?.height) return { width: style.height }
    }
    return {}
  }

  if (typeof size === 'object') {
    if (size.width !== undefined && size.height !== undefined) {
      return { width: size.width, height: size.height }
    }
    if (size.width !== undefined) {
      return ratio === 1 ? { width: size.width, height: size.width } : { width: size.width, height: 'auto' }
    }
    if (size.height !== undefined) {
      return ratio === 1 ? { width: size.height, height: size.height } : { width: 'auto', height: size.height }
    }
  }

  const actualSize = typeof size === 'number'
    ? size
    : (sizeMap as Record<string, number>)[size as string] || sizeMap.md || 24
  return { width: actualSize, height: actualSize }
}

/**
 * Concrete color value for a color prop
 */
export function getAssetColor(color?: AssetColor): string | undefined {
  if (!color) return undefined
  return (colorMap as Record<string, string>)[color] || color
}

/**
 * Size, color and caller style combined
 */
export function createCommonStyle(
  sizeStyle: React.CSSProperties,
  color: string | undefined,
  style?: React.CSSProperties
): React.CSSProperties {
  return { ...sizeStyle, color, ...style }
}

/**
 * Placeholder element for assets that failed to load or do not exist
 */
export function createErrorElement(
  type: 'error' | 'not-found',
  sizeStyle: React.CSSProperties,
  className: string = '',
  style?: React.CSSProperties,
  name?: string
): React.ReactElement {
  const isError = type === 'error'
  return React.createElement('div', {
    className: `asset-${type} ${className}`,
    style: {
      ...sizeStyle,
      display: 'flex',
      alignItems: 'center',
      justifyContent: 'center',
      background: '#f8f9fa',
      border: isError ? '1px solid #e9ecef' : '1px dashed #dee2e6',
      borderRadius: '4px',
      fontSize: '12px',
      color: '#6c757d',
      ...style,
    },
  }, isError ? '!' : `? ${name || ''}`)
}

/**
 * Whether a string is a known asset name
 */
export function hasAsset(name: string): name is %(name_type)s {
  return name in %(path_map)s
}

/**
 * Every asset name
 */
export function getAllAssetNames(): %(name_type)s[] {
  return Object.keys(%(path_map)s) as %(name_type)s[]
}

/**
 * Asset names matching a search term (name, filename or category)
 */
export function searchAssetNames(searchTerm: string): %(name_type)s[] {
  if (!searchTerm.trim()) return []
  const term = searchTerm.toLowerCase()
  return Object.values(%(path_map)s)
    .filter(asset =>
      asset.name.toLowerCase().includes(term) ||
      asset.filename.toLowerCase().includes(term) ||
      asset.category.toLowerCase().includes(term)
    )
    .map(asset => asset.name as %(name_type)s)
}

/**
 * Asset names of one type
 */
export function getAssetNamesByType(type: AssetInfo['type']): %(name_type)s[] {
  return Object.values(%(path_map)s)
    .filter(asset => asset.type === type)
    .map(asset => asset.name as %(name_type)s)
}

/**
 * Asset names of one category
 */
export function getAssetNamesByCategory(category: string): %(name_type)s[] {
  return Object.values(%(path_map)s)
    .filter(asset => asset.category === category)
    .map(asset => asset.name as %(name_type)s)
}

/**
 * Asset counts by type, category and extension
 */
export function getAssetStats() {
  const assets: AssetInfo[] = Object.values(%(path_map)s)
  const countBy = (key: 'type' | 'category' | 'extension') =>
    assets.reduce((acc, asset) => {
      acc[asset[key]] = (acc[asset[key]] || 0) + 1
      return acc
    }, {} as Record<string, number>)

  return {
    total: assets.length,
    byType: countBy('type'),
    byCategory: countBy('category'),
    byExtension: countBy('extension'),
  }
}
"""


def _common_values(config: AssetCodegenConfig) -> Dict[str, str]:
    tg = config.type_generation
    return {
        "component": config.component_generation.component_name,
        "props_type": tg.asset_props_type,
        "name_type": tg.asset_name_type,
        "path_map": tg.path_map_name,
        "types_module": types_module(config),
        "resolver": _path_resolver(config),
    }


def render_component(config: AssetCodegenConfig) -> str:
    """Asset component source for the configured framework"""
    values = _common_values(config)
    map_imports, local_maps = _map_imports(config)
    values["local_maps"] = f"\n{local_maps}\n" if local_maps else ""
    tg = config.type_generation

    if config.component_generation.framework == "react-native":
        imports = [tg.asset_props_type, "AssetInfo", "AssetSize", "AssetColor", tg.path_map_name] + map_imports
        values["imports"] = ", ".join(imports)
        values["header"] = _file_header(f"{values['component']} component (React Native)")
        return REACT_NATIVE_COMPONENT_TEMPLATE % values

    imports = [tg.asset_props_type, "AssetInfo", tg.path_map_name] + map_imports
    values["imports"] = ", ".join(imports)
    values["header"] = _file_header(f"{values['component']} component")
    if config.project_type == "nextjs":
        values.update(
            directive="'use client'\n\n",
            image_import="import Image from 'next/image'\n",
            image_tag="Image",
            image_props="\n      priority={false}\n      placeholder=\"empty\"",
        )
    else:
        values.update(directive="", image_import="", image_tag="img", image_props="")
    return REACT_COMPONENT_TEMPLATE % values


def render_hooks(config: AssetCodegenConfig) -> str:
    values = _common_values(config)
    values["header"] = _file_header("Asset hooks")
    return HOOKS_TEMPLATE % values


def render_utils(config: AssetCodegenConfig) -> str:
    values = _common_values(config)
    map_imports, local_maps = _map_imports(config)
    tg = config.type_generation
    imports = ["AssetInfo", tg.asset_name_type, "AssetSize", "AssetColor", tg.path_map_name] + map_imports
    values["imports"] = ", ".join(imports)
    values["local_maps"] = f"\n{local_maps}\n" if local_maps else ""
    values["header"] = _file_header("Asset utilities")
    return UTILS_TEMPLATE % values


def render_index(config: AssetCodegenConfig) -> str:
    cg = config.component_generation
    lines = [
        _file_header("Asset module"),
        "",
        f"export {{ default as {cg.component_name} }} from './{cg.component_name}'",
        f"export * from '{types_module(config)}'",
    ]
    if cg.generate_hook:
        lines.append("export * from './hooks'")
    if cg.generate_utils:
        lines.append("export * from './utils'")
    return "\n".join(lines) + "\n"


def _count_exports(content: str) -> int:
    return content.count("export function ") + content.count("export const ")


def generate_components(config: AssetCodegenConfig) -> ComponentsResult:
    """
    Write the component, hooks, utils and index files into the output directory

    componentGeneration.overwriteMode applies, falling back to
    fileGeneration.overwriteMode.

    Returns:
        ComponentsResult (enabled=False when component generation is off)
    """
    cg = config.component_generation
    result = ComponentsResult(enabled=cg.enabled)
    if not cg.enabled:
        logger.warning("⚠️ Component generation is disabled")
        return result

    output_dir = Path(config.file_generation.output_dir)
    mode = cg.overwrite_mode or config.file_generation.overwrite_mode

    types_path = output_dir / config.file_generation.output_file
    if not types_path.exists():
        logger.warning(f"⚠️ {types_path} does not exist yet, generated files import from it")

    logger.info(f"⚛️ Generating {cg.framework} component files...")
    planned = [(COMPONENT, output_dir / f"{cg.component_name}.tsx", render_component(config))]
    if cg.generate_hook:
        planned.append((HOOKS, output_dir / "hooks.ts", render_hooks(config)))
    if cg.generate_utils:
        planned.append((UTILS, output_dir / "utils.ts", render_utils(config)))
    planned.append((INDEX, output_dir / "index.ts", render_index(config)))

    for kind, path, content in planned:
        written = write_output_file(path, content, mode)
        if written:
            logger.info(f"  ✓ {kind}: {path}")
        exports = 1 if kind == COMPONENT else _count_exports(content)
        result.files.append(GeneratedFile(kind=kind, path=path, written=written, exports=exports))

    logger.info(f"Component generation done: {len(result.generated_files)} files written")
    return result
