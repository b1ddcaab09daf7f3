"""CLI entry point for statwatch.

Usage:
    python -m statwatch [options] PATH...
"""

import sys


def main() -> int:
    """Main entry point for the statwatch CLI."""
    from statwatch.cli import run_cli

    return run_cli(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
