#!/usr/bin/env python3
"""
Asset CodeGen - Main Entry

The GUI starts by default; `--cli` (or `-c`) as the first argument hands the
rest of the command line to the CLI.

Usage:
    python main.py                          # GUI
    python main.py path/to/config.json      # GUI with a preloaded config
    python main.py --cli                    # CLI interactive mode
    python main.py --cli clean --dry-run    # CLI command mode
    python main.py -c generate --yes        # CLI command mode
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

CLI_FLAGS = ("--cli", "-c")


def main(argv=None):
    """Main entry point"""
    args = sys.argv[1:] if argv is None else list(argv)

    # Only the first argument selects the mode; later -c means --config
    if args and args[0] in CLI_FLAGS:
        from cli import main as cli_main
        return cli_main(args[1:])

    try:
        from gui import main as gui_main
    except ImportError as e:
        print("Error: Unable to start GUI, install the gui extra: pip install 'asset-codegen[gui]'")
        print(f"Detailed error: {e}")
        print("\nTo use CLI mode, run:")
        print("    python main.py --cli")
        return 1
    return gui_main(args[0] if args else None)


if __name__ == "__main__":
    sys.exit(main())
