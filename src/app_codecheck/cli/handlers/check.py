"""
Check Command Handler.

Runs the configured policy over PHP-Parser JSON dumps and renders the
diagnostics as Rich tables or as JSON.
"""

import json
from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from app_codecheck.config import RuntimeConfig
from app_codecheck.core.check_result import CheckResult
from app_codecheck.core.engine import CodeChecker
from app_codecheck.enums import OutputFormat
from app_codecheck.utils.console import console, log_error, log_info, log_success, use_stderr


def _render_table(result: CheckResult) -> None:
  table = Table(title=escape(result.path))
  table.add_column("Line", style="dim", justify="right")
  table.add_column("Kind")
  table.add_column("Token")
  table.add_column("Reason")

  for diag in result.diagnostics:
    table.add_row(str(diag.line), f"[kind]{diag.kind.name}[/kind]", f"[token]{escape(diag.token)}[/token]", escape(diag.reason))

  console.print(table)


def handle_check(
  path: Path,
  checkers: Optional[List[str]] = None,
  strong_comparison: Optional[bool] = None,
  json_mode: bool = False,
) -> int:
  """
  Checks a JSON dump or a folder of dumps against the configured policy.

  Args:
      path: Input file or directory.
      checkers: Check names overriding the configuration.
      strong_comparison: Operator reporting override.
      json_mode: If True, print a JSON report to stdout. Logs go to stderr.

  Returns:
      int: 0 if every file is clean, 1 on violations or load errors.
  """
  if json_mode:
    use_stderr()

  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  try:
    config = RuntimeConfig.load(
      checkers=checkers,
      strong_comparison=strong_comparison,
      output_format=OutputFormat.JSON.value if json_mode else None,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  if config.output_format == OutputFormat.JSON and not json_mode:
    # Requested through pyproject.toml rather than --json.
    json_mode = True
    use_stderr()

  checker = CodeChecker(config.build_policy())

  if not json_mode:
    log_info(f"Checking [path]{escape(str(path))}[/path] with {', '.join(config.checkers)}...")

  results = checker.analyse(path)

  failed = [r for r in results if not r.success]
  violating = [r for r in results if r.has_violations]

  if json_mode:
    print(json.dumps([r.to_dict() for r in results], indent=2))
    return 1 if failed or violating else 0

  for result in violating:
    _render_table(result)

  total = sum(len(r.diagnostics) for r in results)
  console.print(f"[bold]Code Check Summary for {escape(path.name)}[/bold]")
  console.print(f"Files checked:  {len(results)}")
  console.print(f"Clean:          [clean]{len(results) - len(violating) - len(failed)}[/clean]")
  console.print(f"With findings:  [finding]{len(violating)}[/finding]")
  console.print(f"Unreadable:     [finding]{len(failed)}[/finding]")
  console.print(f"Findings:       [finding]{total}[/finding]")

  if not failed and not violating:
    log_success("No policy violations found.")
    return 0
  return 1
