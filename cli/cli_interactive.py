"""
cli_interactive.py - Interactive CLI

Provides a menu-style interactive interface
"""

import os
from pathlib import Path
from typing import Optional

from core import (
    load_config, validate_config, run_clean_pass, run_organize_pass,
    generate_types, generate_components, format_files, ConfigError, AssetCodegenConfig,
    DEFAULT_CONFIG_PATH, PassStatus,
)


def clear_screen():
    """Clear screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    """Print header"""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def input_int(prompt: str, default: int = 0, min_val: int = 0) -> int:
    """Input integer"""
    while True:
        value = input(f"{prompt} [{default}]: ").strip()
        if not value:
            return default
        try:
            num = int(value)
            if num < min_val:
                print(f"Value cannot be less than {min_val}")
                continue
            return num
        except ValueError:
            print("Please enter a valid integer")


def input_config() -> Optional[AssetCodegenConfig]:
    """Input configuration path and load it"""
    while True:
        path_str = input(f"Configuration file [{DEFAULT_CONFIG_PATH}] (q to return): ").strip()
        if path_str.lower() == 'q':
            return None
        path = Path(path_str or DEFAULT_CONFIG_PATH).expanduser()
        try:
            return load_config(path)
        except ConfigError as e:
            print(f"Error: {e}")


def menu_rename_pass(title: str, pass_func):
    """Clean / organize menu"""
    print_header(title)

    config = input_config()
    if config is None:
        return

    workers = input_int("Asset directories processed concurrently", default=1, min_val=1)

    # Preview
    print("\nGenerating preview...")
    preview = pass_func(config, dry_run=True, max_workers=workers)

    if preview.status == PassStatus.NOTHING_TO_DO or preview.processed_count == 0:
        print(preview.summary())
        print("No files need renaming")
        input("Press Enter to return...")
        return

    print(f"\nWill perform {preview.processed_count} rename operations:")
    print("-" * 70)
    for r in preview.results[:15]:
        print(f"  {r.original_name:<30} -> {r.new_name}")
    if preview.processed_count > 15:
        print(f"  ... and {preview.processed_count - 15} more operations")
    print("-" * 70)

    if preview.has_failures:
        print("Note: some asset directories could not be scanned")

    # Confirm execution
    print()
    if not input_bool("Confirm execution", default=False):
        print("Cancelled")
        input("Press Enter to return...")
        return

    # Execute
    print("\nExecuting...")
    summary = pass_func(config, dry_run=False, max_workers=workers)
    print()
    print(summary.summary())

    input("\nPress Enter to return...")


def menu_types():
    """Type generation menu"""
    print_header("Generate TypeScript Types")

    config = input_config()
    if config is None:
        return

    print("\nGenerating...")
    try:
        result = generate_types(config)
    except OSError as e:
        print(f"Error: {e}")
        input("Press Enter to return...")
        return

    if result.written:
        format_files(result.generated_files, config)
        print(f"Types generated for {len(result.assets)} assets: {result.output_path}")
    elif result.output_path:
        print(f"Skipped, file already exists: {result.output_path}")
    else:
        print("No enabled asset directories")

    input("\nPress Enter to return...")


def menu_components():
    """Component generation menu"""
    print_header("Generate React Component, Hooks and Utils")

    config = input_config()
    if config is None:
        return

    print("\nGenerating...")
    try:
        result = generate_components(config)
    except OSError as e:
        print(f"Error: {e}")
        input("Press Enter to return...")
        return

    if not result.enabled:
        print("Component generation is disabled")
    else:
        if result.generated_files:
            format_files(result.generated_files, config)
        for f in result.files:
            state = "written" if f.written else "skipped (already exists)"
            print(f"  {f.kind}: {f.path} - {state}")

    input("\nPress Enter to return...")


def menu_validate():
    """Configuration validation menu"""
    print_header("Validate Configuration")

    path_str = input(f"Configuration file [{DEFAULT_CONFIG_PATH}]: ").strip()
    is_valid, errors, config = validate_config(Path(path_str or DEFAULT_CONFIG_PATH).expanduser())

    if is_valid:
        print("Configuration is valid")
        print(f"  Project: {config.project_name}")
        for root in config.asset_directories:
            state = "enabled" if root.enabled else "disabled"
            print(f"  - {root.name}: {root.path} ({state})")
    else:
        print("Configuration has errors:")
        for err in errors:
            print(f"  - {err}")

    input("\nPress Enter to return...")


def interactive_mode() -> int:
    """Interactive mode main loop"""
    while True:
        clear_screen()
        print_header("Asset CodeGen")

        print("Please select function:")
        print()
        print("  1. Remove folder names from filenames (clean)")
        print("  2. Apply folder structure to filenames (organize)")
        print("  3. Generate TypeScript types")
        print("  4. Generate React component, hooks and utils")
        print("  5. Validate configuration")
        print()
        print("  q. Exit")
        print()

        choice = input("Please select (1/2/3/4/5/q): ").strip().lower()

        if choice == 'q':
            print("Goodbye!")
            return 0
        elif choice == '1':
            menu_rename_pass("Clean Filenames", run_clean_pass)
        elif choice == '2':
            menu_rename_pass("Organize Filenames", run_organize_pass)
        elif choice == '3':
            menu_types()
        elif choice == '4':
            menu_components()
        elif choice == '5':
            menu_validate()
        else:
            print("Invalid choice")
            input("Press Enter to continue...")


if __name__ == "__main__":
    interactive_mode()
