"""
List-Checks Command Handler.
"""

from rich.markup import escape
from rich.table import Table

from app_codecheck.checks import available_checks, get_check
from app_codecheck.utils.console import console


def handle_list_checks() -> int:
  """
  Prints the registered checks with their blacklist sizes.

  Returns:
      int: Always 0.
  """
  table = Table(title="Available Checks")
  table.add_column("Name", style="cyan")
  table.add_column("Description")
  table.add_column("Classes", justify="right")
  table.add_column("Constants", justify="right")
  table.add_column("Strong Comparison", justify="center")

  for name in available_checks():
    check = get_check(name)
    policy = check.to_policy()
    table.add_row(
      name,
      escape(check.description or "-"),
      str(len(policy.classes)),
      str(len(policy.constants)),
      "yes" if check.strong_comparison else "no",
    )

  console.print(table)
  return 0
