"""
config.py - Configuration Loading and Validation

Reads asset-codegen.config.json, merges it over the defaults and maps the
result onto typed dataclasses.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import copy
import json

from loguru import logger

from .models_fs import AssetRoot, ConfigError


DEFAULT_CONFIG_PATH = "./asset-codegen.config.json"

OVERWRITE_MODES = ("overwrite", "skip", "backup")
CLEAN_SCOPES = ("path", "global")
PROJECT_TYPES = ("nextjs", "react", "react-native")
FRAMEWORKS = ("react", "react-native")


@dataclass
class FileGenerationConfig:
    output_dir: str = "src/components/asset"
    output_file: str = "types.ts"
    supported_extensions: List[str] = field(default_factory=lambda: ["svg", "png", "jpg", "jpeg", "webp"])
    overwrite_mode: str = "overwrite"


@dataclass
class TypeGenerationConfig:
    asset_name_type: str = "AssetName"
    asset_props_type: str = "AssetProps"
    path_map_name: str = "assetPathMap"
    include_color_types: bool = True
    include_size_types: bool = True


@dataclass
class ConventionsConfig:
    separator_char: str = "-"
    naming_pattern: str = "{category}-{subcategory}-{name}"
    case_style: str = "kebab-case"
    clean_scope: str = "path"       # "path" (per-file) or "global" (all collected folder names)


@dataclass
class ComponentGenerationConfig:
    enabled: bool = True
    framework: str = "react"        # "react" or "react-native"
    component_name: str = "Asset"
    generate_hook: bool = True
    generate_utils: bool = True
    overwrite_mode: Optional[str] = None    # None follows fileGeneration.overwriteMode


@dataclass
class FormattingConfig:
    auto_format: bool = True


@dataclass
class FeatureFlags:
    cleanup_duplicates: bool = True
    organize_filenames: bool = True
    generate_types: bool = True
    generate_component: bool = True


@dataclass
class AssetCodegenConfig:
    """Typed view of the configuration file"""
    project_name: str = "my-project"
    project_type: str = "nextjs"
    asset_directories: List[AssetRoot] = field(default_factory=list)
    file_generation: FileGenerationConfig = field(default_factory=FileGenerationConfig)
    type_generation: TypeGenerationConfig = field(default_factory=TypeGenerationConfig)
    component_generation: ComponentGenerationConfig = field(default_factory=ComponentGenerationConfig)
    size_mapping: Dict[str, int] = field(default_factory=dict)
    color_mapping: Dict[str, str] = field(default_factory=dict)
    formatting: FormattingConfig = field(default_factory=FormattingConfig)
    feature_flags: FeatureFlags = field(default_factory=FeatureFlags)
    conventions: ConventionsConfig = field(default_factory=ConventionsConfig)

    @property
    def enabled_roots(self) -> List[AssetRoot]:
        return [root for root in self.asset_directories if root.enabled]

    @property
    def separator(self) -> str:
        return self.conventions.separator_char or "-"

    @property
    def supported_extensions(self) -> List[str]:
        return self.file_generation.supported_extensions


def default_config_dict() -> Dict[str, Any]:
    """Default configuration, in file (camelCase) form"""
    return {
        "projectName": "my-project",
        "projectType": "nextjs",
        "assetDirectories": [
            {"name": "icons", "path": "public/icons", "enabled": True, "description": "Icon assets"},
            {"name": "images", "path": "public/images", "enabled": True, "description": "Image assets"},
        ],
        "fileGeneration": {
            "outputDir": "src/components/asset",
            "outputFile": "types.ts",
            "supportedExtensions": ["svg", "png", "jpg", "jpeg", "webp"],
            "overwriteMode": "overwrite",
        },
        "typeGeneration": {
            "assetNameType": "AssetName",
            "assetPropsType": "AssetProps",
            "pathMapName": "assetPathMap",
            "includeColorTypes": True,
            "includeSizeTypes": True,
        },
        "sizeMapping": {"xs": 16, "sm": 20, "md": 24, "lg": 32, "xl": 48},
        "colorMapping": {
            "primary": "var(--color-primary)",
            "secondary": "var(--color-secondary)",
            "gray": "var(--color-gray)",
            "white": "#FDFDFE",
            "black": "#1A1A20",
        },
        "componentGeneration": {
            "enabled": True,
            "framework": "react",
            "componentName": "Asset",
            "generateHook": True,
            "generateUtils": True,
        },
        "formatting": {"autoFormat": True},
        "featureFlags": {
            "cleanupDuplicates": {"enabled": True},
            "organizeFilenames": {"enabled": True},
            "generateTypes": {"enabled": True},
            "generateComponent": {"enabled": True},
        },
        "conventions": {
            "namingPattern": "{category}-{subcategory}-{name}",
            "separatorChar": "-",
            "caseStyle": "kebab-case",
            "cleanScope": "path",
        },
    }


def default_config_for(project_type: str, project_name: str) -> Dict[str, Any]:
    """Preset configuration for a project type"""
    data = default_config_dict()
    data["projectType"] = project_type
    data["projectName"] = project_name or "my-project"

    if project_type == "nextjs":
        pass  # defaults already target public/icons and public/images
    elif project_type == "react":
        data["assetDirectories"] = [
            {"name": "assets", "path": "src/assets", "enabled": True, "description": "Asset files"},
        ]
    elif project_type == "react-native":
        data["assetDirectories"] = [
            {"name": "assets", "path": "assets", "enabled": True, "description": "Asset files"},
        ]
        data["componentGeneration"]["framework"] = "react-native"
    else:
        logger.warning(f"Unknown project type: {project_type}, using default settings")

    return data


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge source into a copy of target

    Nested dicts merge key by key; every other value (lists included) in
    source replaces the one in target.
    """
    result = copy.deepcopy(target)
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _flag_enabled(value: Any) -> bool:
    if isinstance(value, dict):
        return bool(value.get("enabled", True))
    return bool(value)


def _asset_root_from_dict(data: Dict[str, Any]) -> AssetRoot:
    return AssetRoot(
        name=str(data.get("name", "")),
        path=Path(str(data.get("path", ""))),
        enabled=bool(data.get("enabled", True)),
        description=str(data.get("description", "")),
    )


def config_from_dict(data: Dict[str, Any]) -> AssetCodegenConfig:
    """Map merged configuration data onto AssetCodegenConfig"""
    file_gen = data.get("fileGeneration") or {}
    type_gen = data.get("typeGeneration") or {}
    components = data.get("componentGeneration") or {}
    conventions = data.get("conventions") or {}
    formatting = data.get("formatting") or {}
    flags = data.get("featureFlags") or {}

    return AssetCodegenConfig(
        project_name=data.get("projectName", "my-project"),
        project_type=data.get("projectType", "nextjs"),
        asset_directories=[_asset_root_from_dict(d) for d in data.get("assetDirectories") or []],
        file_generation=FileGenerationConfig(
            output_dir=file_gen.get("outputDir", "src/components/asset"),
            output_file=file_gen.get("outputFile") or "types.ts",
            supported_extensions=[str(ext).lower().lstrip(".") for ext in file_gen.get("supportedExtensions", [])],
            overwrite_mode=file_gen.get("overwriteMode", "overwrite"),
        ),
        type_generation=TypeGenerationConfig(
            asset_name_type=type_gen.get("assetNameType", "AssetName"),
            asset_props_type=type_gen.get("assetPropsType", "AssetProps"),
            path_map_name=type_gen.get("pathMapName", "assetPathMap"),
            include_color_types=bool(type_gen.get("includeColorTypes", True)),
            include_size_types=bool(type_gen.get("includeSizeTypes", True)),
        ),
        component_generation=ComponentGenerationConfig(
            enabled=bool(components.get("enabled", True)),
            framework=components.get("framework", "react"),
            component_name=components.get("componentName") or "Asset",
            generate_hook=bool(components.get("generateHook", True)),
            generate_utils=bool(components.get("generateUtils", True)),
            overwrite_mode=components.get("overwriteMode"),
        ),
        size_mapping=dict(data.get("sizeMapping") or {}),
        color_mapping=dict(data.get("colorMapping") or {}),
        formatting=FormattingConfig(auto_format=bool(formatting.get("autoFormat", True))),
        feature_flags=FeatureFlags(
            cleanup_duplicates=_flag_enabled(flags.get("cleanupDuplicates", True)),
            organize_filenames=_flag_enabled(flags.get("organizeFilenames", True)),
            generate_types=_flag_enabled(flags.get("generateTypes", True)),
            generate_component=_flag_enabled(flags.get("generateComponent", True)),
        ),
        conventions=ConventionsConfig(
            separator_char=conventions.get("separatorChar") or "-",
            naming_pattern=conventions.get("namingPattern", "{category}-{subcategory}-{name}"),
            case_style=conventions.get("caseStyle", "kebab-case"),
            clean_scope=conventions.get("cleanScope", "path"),
        ),
    )


def read_config_dict(config_path) -> Dict[str, Any]:
    """Read the configuration file and merge it over the defaults"""
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

    if not isinstance(user_config, dict):
        raise ConfigError(f"Configuration root must be a JSON object: {path}")

    return deep_merge(default_config_dict(), user_config)


def _section(data: Dict[str, Any], key: str, errors: List[str]) -> Dict[str, Any]:
    """Nested object of the configuration, recording an error when it is not one"""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        errors.append(f"{key} must be an object")
        return {}
    return value


def check_config_dict(data: Dict[str, Any]) -> List[str]:
    """
    Check required fields of merged configuration data

    Returns:
        Error list (empty when valid)
    """
    errors = []

    if not data.get("projectName"):
        errors.append("projectName is required")

    directories = data.get("assetDirectories")
    if not isinstance(directories, list):
        errors.append("assetDirectories must be an array")
    else:
        for index, directory in enumerate(directories):
            if not isinstance(directory, dict):
                errors.append(f"assetDirectories[{index}] must be an object")
                continue
            if not directory.get("name"):
                errors.append(f"assetDirectories[{index}].name is required")
            if not directory.get("path"):
                errors.append(f"assetDirectories[{index}].path is required")

    for key in ("typeGeneration", "formatting", "featureFlags", "sizeMapping", "colorMapping"):
        _section(data, key, errors)

    file_gen = _section(data, "fileGeneration", errors)
    if not file_gen.get("outputDir"):
        errors.append("fileGeneration.outputDir is required")
    if not isinstance(file_gen.get("supportedExtensions"), list):
        errors.append("fileGeneration.supportedExtensions must be an array")
    if file_gen.get("overwriteMode", "overwrite") not in OVERWRITE_MODES:
        errors.append(f"fileGeneration.overwriteMode must be one of: {', '.join(OVERWRITE_MODES)}")

    components = _section(data, "componentGeneration", errors)
    if components.get("framework", "react") not in FRAMEWORKS:
        errors.append(f"componentGeneration.framework must be one of: {', '.join(FRAMEWORKS)}")
    component_name = components.get("componentName", "Asset")
    if not isinstance(component_name, str) or not component_name.isidentifier():
        errors.append("componentGeneration.componentName must be a valid identifier")
    if components.get("overwriteMode", "overwrite") not in OVERWRITE_MODES:
        errors.append(f"componentGeneration.overwriteMode must be one of: {', '.join(OVERWRITE_MODES)}")

    conventions = _section(data, "conventions", errors)
    separator = conventions.get("separatorChar", "-")
    if not isinstance(separator, str) or len(separator) != 1:
        errors.append("conventions.separatorChar must be a single character")
    if conventions.get("cleanScope", "path") not in CLEAN_SCOPES:
        errors.append(f"conventions.cleanScope must be one of: {', '.join(CLEAN_SCOPES)}")

    return errors


def load_config(config_path=DEFAULT_CONFIG_PATH) -> AssetCodegenConfig:
    """
    Load and validate configuration

    Args:
        config_path: Path to the JSON configuration file

    Returns:
        Typed configuration

    Raises:
        ConfigError: File missing, unparseable or invalid
    """
    data = read_config_dict(config_path)
    errors = check_config_dict(data)
    if errors:
        raise ConfigError("Invalid configuration: " + "; ".join(errors))
    return config_from_dict(data)


def validate_config(config_path=DEFAULT_CONFIG_PATH) -> Tuple[bool, List[str], Optional[AssetCodegenConfig]]:
    """
    Validate configuration file

    Returns:
        (is_valid, errors, config)
    """
    try:
        data = read_config_dict(config_path)
    except ConfigError as e:
        return False, [str(e)], None

    errors = check_config_dict(data)
    if errors:
        return False, errors, None
    return True, [], config_from_dict(data)


def create_config(config_path, data: Dict[str, Any], force: bool = False) -> Path:
    """Write configuration file, refusing to overwrite unless forced"""
    path = Path(config_path)
    if path.exists() and not force:
        raise ConfigError(f"Configuration file already exists: {path}. Use --force to overwrite.")

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")

    logger.info(f"Configuration file created: {path}")
    return path
