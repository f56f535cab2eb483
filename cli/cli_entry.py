"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode
- Interactive mode

Exit codes: 0 ran cleanly, 3 ran with partial failures, 1 error.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .cli_interactive import interactive_mode


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 3


def setup_logging(verbose: bool = False) -> None:
    """Send log output to stderr, DEBUG when verbose"""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {message}",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="asset-codegen",
        description="Asset file naming and TypeScript type generation tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  asset-codegen

  # Create a configuration file
  asset-codegen init --type nextjs

  # Remove folder names from filenames (preview only)
  asset-codegen clean --dry-run

  # Apply folder structure to filenames
  asset-codegen organize --yes

  # React component, hooks and utils
  asset-codegen components

  # Full process, selected steps only
  asset-codegen generate --steps clean,organize --yes
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # init subcommand
    init_parser = subparsers.add_parser("init", help="Create configuration file")
    init_parser.add_argument("--type", "-t", type=str, default="nextjs",
                             help="Project type (nextjs, react, react-native)")
    init_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing file")
    init_parser.add_argument("--output", "-o", type=str, default="./asset-codegen.config.json",
                             help="Configuration file path")

    # validate subcommand
    validate_parser = subparsers.add_parser("validate", aliases=["validate-config"],
                                            help="Validate configuration file")
    _add_config_arg(validate_parser)

    # clean / organize subcommands
    clean_parser = subparsers.add_parser("clean", help="Remove folder names from filenames")
    _add_config_arg(clean_parser)
    _add_pass_args(clean_parser)

    organize_parser = subparsers.add_parser("organize", help="Apply folder structure to filenames")
    _add_config_arg(organize_parser)
    _add_pass_args(organize_parser)

    # types subcommand
    types_parser = subparsers.add_parser("types", help="Generate TypeScript types")
    _add_config_arg(types_parser)

    # components subcommand
    components_parser = subparsers.add_parser("components", help="Generate React component, hooks and utils")
    _add_config_arg(components_parser)

    # generate subcommand
    gen_parser = subparsers.add_parser("generate", aliases=["gen"], help="Run the full process")
    _add_config_arg(gen_parser)
    _add_pass_args(gen_parser)
    gen_parser.add_argument("--steps", "-s", type=str, default="",
                            help="Steps to run, comma separated (clean, organize, types, components)")

    return parser


def _add_config_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", "-c", type=str, default="./asset-codegen.config.json",
                        help="Configuration file path")


def _add_pass_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    parser.add_argument("--workers", "-w", type=int, default=1,
                        help="Asset directories processed concurrently")
    parser.add_argument("--log-dir", type=str, default=None, help="Save a JSON result log here")


def _load(config_path: str):
    from core import load_config, ConfigError

    try:
        return load_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}")
        return None


def print_pass_results(summary) -> None:
    """Print renamed files grouped by asset directory"""
    for root_name in summary.per_root:
        results = summary.results_for(root_name)
        if not results:
            continue
        print(f"\n📁 {root_name}:")
        for r in results[:20]:
            print(f"  {r.original_name:<40} -> {r.new_name}")
        if len(results) > 20:
            print(f"  ... and {len(results) - 20} more files")
    if summary.file_failures:
        print(f"\n⚠️ {len(summary.file_failures)} files cannot be renamed:")
        for f in summary.file_failures[:20]:
            print(f"  {f.path}: {f.error}")


def _confirm(prompt: str) -> bool:
    confirm = input(f"\n{prompt} (y/N): ").strip().lower()
    return confirm == 'y'


def _run_pass(args, pass_func) -> int:
    from core import save_pass_log, PassStatus

    config = _load(args.config)
    if config is None:
        return EXIT_ERROR

    roots = ", ".join(r.name for r in config.enabled_roots) or "(none)"
    print(f"Configuration: {args.config}")
    print(f"Asset directories: {roots}")

    if not args.dry_run and not args.yes:
        preview = pass_func(config, dry_run=True, max_workers=args.workers)
        if preview.status == PassStatus.NOTHING_TO_DO:
            print(preview.summary())
            return EXIT_OK
        if preview.processed_count == 0:
            print(preview.summary())
            print("No files need renaming")
            return EXIT_PARTIAL if preview.has_failures else EXIT_OK
        print(f"\nWill perform {preview.processed_count} rename operations:")
        print_pass_results(preview)
        if not _confirm("Confirm execution?"):
            print("Cancelled")
            return EXIT_OK

    summary = pass_func(config, dry_run=args.dry_run, max_workers=args.workers)

    print_pass_results(summary)
    print()
    print(summary.summary())
    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")

    if args.log_dir:
        log_file = save_pass_log(summary, Path(args.log_dir))
        print(f"Log saved: {log_file}")

    return EXIT_PARTIAL if summary.has_failures else EXIT_OK


def cmd_init(args) -> int:
    """Handle init command"""
    from core import create_config, default_config_for, ConfigError

    print(f"Project type: {args.type}")
    print(f"Configuration file: {args.output}")

    data = default_config_for(args.type, Path.cwd().name)
    try:
        create_config(args.output, data, force=args.force)
    except ConfigError as e:
        print(f"Error: {e}")
        return EXIT_ERROR

    print("\nNext steps:")
    print(f"  1. Review {args.output} and adjust assetDirectories")
    print("  2. Put asset files in those directories")
    print("  3. Run: asset-codegen generate")
    return EXIT_OK


def cmd_validate(args) -> int:
    """Handle validate command"""
    from core import validate_config

    is_valid, errors, config = validate_config(args.config)
    if not is_valid:
        print("Configuration has errors:")
        for err in errors:
            print(f"  - {err}")
        return EXIT_ERROR

    print("Configuration is valid")
    print(f"  Project: {config.project_name}")
    print(f"  Asset directories: {len(config.asset_directories)}")
    return EXIT_OK


def cmd_clean(args) -> int:
    """Handle clean command"""
    from core import run_clean_pass
    return _run_pass(args, run_clean_pass)


def cmd_organize(args) -> int:
    """Handle organize command"""
    from core import run_organize_pass
    return _run_pass(args, run_organize_pass)


def cmd_types(args) -> int:
    """Handle types command"""
    from core import generate_types, format_files

    config = _load(args.config)
    if config is None:
        return EXIT_ERROR

    print(f"Output: {Path(config.file_generation.output_dir) / config.file_generation.output_file}")
    try:
        result = generate_types(config)
    except OSError as e:
        print(f"Error: Type generation failed: {e}")
        return EXIT_ERROR

    if result.written:
        format_files(result.generated_files, config)
        print(f"Types generated for {len(result.assets)} assets: {result.output_path}")
    elif result.output_path:
        print(f"Skipped, file already exists: {result.output_path}")
    else:
        print("No enabled asset directories, nothing to do")
    return EXIT_OK


def print_components_result(result) -> None:
    """Print generated component files and export counts"""
    for f in result.files:
        state = "✓" if f.written else "skipped"
        print(f"  {state} {f.kind}: {f.path}")
    stats = result.stats
    print(f"Components: {stats['component']}, hooks: {stats['hooks']}, utils: {stats['utils']}")


def cmd_components(args) -> int:
    """Handle components command"""
    from core import generate_components, format_files

    config = _load(args.config)
    if config is None:
        return EXIT_ERROR

    cg = config.component_generation
    print(f"Output directory: {config.file_generation.output_dir}")
    print(f"Framework: {cg.framework}, component: {cg.component_name}")
    try:
        result = generate_components(config)
    except OSError as e:
        print(f"Error: Component generation failed: {e}")
        return EXIT_ERROR

    if not result.enabled:
        print("Component generation is disabled (componentGeneration.enabled)")
        return EXIT_OK

    if result.generated_files:
        format_files(result.generated_files, config)
    print_components_result(result)
    print("\nUsage:")
    print(f"  <{cg.component_name} type=\"icon\" name=\"your-asset-name\" size=\"md\" />")
    if cg.generate_hook:
        print("  const path = useAssetPath('your-asset-name')")
    if cg.generate_utils:
        print("  const info = getAssetInfo('your-asset-name')")
    return EXIT_OK


def cmd_generate(args) -> int:
    """Handle generate command"""
    from core import run_pipeline, resolve_steps

    config = _load(args.config)
    if config is None:
        return EXIT_ERROR

    steps = [s for s in args.steps.split(",") if s.strip()] if args.steps else None
    try:
        selected = resolve_steps(config, steps)
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_ERROR

    print(f"Steps: {' -> '.join(selected)}")
    if not args.dry_run and not args.yes:
        if not _confirm("Asset files will be renamed in place. Continue?"):
            print("Cancelled")
            return EXIT_OK

    try:
        result = run_pipeline(config, steps=selected, dry_run=args.dry_run, max_workers=args.workers)
    except OSError as e:
        print(f"Error: Generation failed: {e}")
        return EXIT_ERROR

    for summary in result.pass_summaries:
        print_pass_results(summary)
        print()
        print(summary.summary())
    if result.types_result and result.types_result.written:
        print(f"\nTypes file: {result.types_result.output_path}")
    if result.components_result:
        print_components_result(result.components_result)
    print(f"\nCompleted steps: {result.completed_steps}/{result.total_steps}")
    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")

    return EXIT_PARTIAL if result.has_failures else EXIT_OK


def main(argv: Optional[list] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command is None:
        # No subcommand, enter interactive mode
        return interactive_mode()

    handlers = {
        "init": cmd_init,
        "validate": cmd_validate,
        "validate-config": cmd_validate,
        "clean": cmd_clean,
        "organize": cmd_organize,
        "types": cmd_types,
        "components": cmd_components,
        "generate": cmd_generate,
        "gen": cmd_generate,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_ERROR
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
