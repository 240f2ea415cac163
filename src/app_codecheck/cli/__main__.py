"""
Main Entry Point for app-codecheck CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `app_codecheck.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from app_codecheck import __version__
from app_codecheck.cli import commands
from app_codecheck.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="app-codecheck: Policy driven PHP code checker")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CHECK ---
  cmd_check = subparsers.add_parser("check", help="Check PHP-Parser JSON dumps for policy violations")
  cmd_check.add_argument("path", type=Path, help="JSON dump file or directory of dumps")
  cmd_check.add_argument(
    "--checker",
    dest="checkers",
    action="append",
    default=None,
    help="Check to enforce, repeatable (default: from toml, else all built-in checks)",
  )
  cmd_check.add_argument(
    "--strong-comparison",
    action=argparse.BooleanOptionalAction,
    default=None,
    help="Report (or ignore) == and != usage regardless of the selected checks",
  )
  cmd_check.add_argument("--json", action="store_true", help="Print a JSON report to stdout")

  # --- Command: LIST-CHECKS ---
  subparsers.add_parser("list-checks", help="Show the registered checks")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "check":
    return commands.handle_check(args.path, args.checkers, args.strong_comparison, args.json)

  elif args.command == "list-checks":
    return commands.handle_list_checks()

  return 0


if __name__ == "__main__":
  sys.exit(main())
