"""
core - Asset CodeGen Core Module

Provides asset scanning, filename cleaning/organizing passes, type generation, etc.
"""

from .models_fs import (
    AssetRoot,
    AssetFileRef,
    WalkEntry,
    RenameResult,
    RootFailure,
    FileFailure,
    PassSummary,
    PassState,
    PassStatus,
    ConfigError,
    RootUnavailableError,
)

from .config import (
    AssetCodegenConfig,
    DEFAULT_CONFIG_PATH,
    PROJECT_TYPES,
    load_config,
    validate_config,
    create_config,
    default_config_dict,
    default_config_for,
    config_from_dict,
    deep_merge,
)

from .scan_files import (
    walk_tree,
    walk_assets,
    is_asset_file,
    collect_folder_names,
)

from .text_match import (
    clean_name,
    path_scoped_tokens,
    organize_name,
    is_already_organized,
    is_valid_filename,
)

from .exec_rename import (
    rename_asset,
    save_pass_log,
)

from .safety_checks import (
    check_writable,
    check_path_length,
    check_rename_op,
)

from .run_passes import (
    run_clean_pass,
    run_organize_pass,
    process_root,
)

from .gen_types import (
    AssetInfo,
    TypesResult,
    collect_asset_info,
    render_type_definitions,
    generate_types,
)

from .gen_components import (
    ComponentsResult,
    GeneratedFile,
    render_component,
    generate_components,
)

from .format_files import format_files

from .pipeline import (
    ALL_STEPS,
    PipelineResult,
    resolve_steps,
    run_pipeline,
)

__all__ = [
    # Data models
    "AssetRoot",
    "AssetFileRef",
    "WalkEntry",
    "RenameResult",
    "RootFailure",
    "FileFailure",
    "PassSummary",
    "PassState",
    "PassStatus",
    "ConfigError",
    "RootUnavailableError",

    # Configuration
    "AssetCodegenConfig",
    "DEFAULT_CONFIG_PATH",
    "PROJECT_TYPES",
    "load_config",
    "validate_config",
    "create_config",
    "default_config_dict",
    "default_config_for",
    "config_from_dict",
    "deep_merge",

    # Scanning
    "walk_tree",
    "walk_assets",
    "is_asset_file",
    "collect_folder_names",

    # Text processing
    "clean_name",
    "path_scoped_tokens",
    "organize_name",
    "is_already_organized",
    "is_valid_filename",

    # Execution
    "rename_asset",
    "save_pass_log",

    # Safety checks
    "check_writable",
    "check_path_length",
    "check_rename_op",

    # Passes
    "run_clean_pass",
    "run_organize_pass",
    "process_root",

    # Type generation
    "AssetInfo",
    "TypesResult",
    "collect_asset_info",
    "render_type_definitions",
    "generate_types",

    # Component generation
    "ComponentsResult",
    "GeneratedFile",
    "render_component",
    "generate_components",

    "format_files",

    # Pipeline
    "ALL_STEPS",
    "PipelineResult",
    "resolve_steps",
    "run_pipeline",
]
