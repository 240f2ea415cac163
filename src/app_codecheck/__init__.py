"""
app-codecheck Package.

A policy driven static checker for PHP apps. It walks the syntax tree of one
source file and reports uses of forbidden (private or deprecated) classes,
interfaces and class constants, following namespace aliases introduced by
``use`` statements, and optionally flags loose ``==`` / ``!=`` comparisons.

Parsing is not done here: trees come from nikic/PHP-Parser JSON dumps
(``php-parse --json-dump``) or are built directly from
`app_codecheck.php.nodes`.

Usage
-----

Checking a JSON dump
^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import app_codecheck as acc
    for diag in acc.check_file("lib/controller.json", checkers=["private"]):
        print(diag.line, diag.token, diag.reason)

Custom Policy
^^^^^^^^^^^^^

.. code-block:: python

    from app_codecheck import CodeChecker, Policy

    policy = Policy("Private", ["OC_API"], {"OC_API::ADMIN_AUTH": "8.0.0"}, False)
    result = CodeChecker(policy).analyse_tree(module)
"""

from pathlib import Path
from typing import List, Optional, Union

from app_codecheck.analysis.code_check import CodeCheckVisitor
from app_codecheck.analysis.diagnostics import Diagnostic
from app_codecheck.analysis.policy import Policy, PolicyError
from app_codecheck.config import RuntimeConfig
from app_codecheck.core.check_result import CheckResult
from app_codecheck.core.engine import CodeChecker
from app_codecheck.enums import ErrorKind

__version__ = "0.1.0"


def check_file(
  path: Union[str, Path],
  checkers: Optional[List[str]] = None,
  strong_comparison: Optional[bool] = None,
) -> List[Diagnostic]:
  """
  Checks one PHP-Parser JSON dump with built-in checks.

  Args:
      path: The JSON dump to check.
      checkers: Registered check names (default: all built-in checks).
      strong_comparison: Force `==`/`!=` reporting on or off.

  Returns:
      List[Diagnostic]: Violations in document order.

  Raises:
      ValueError: If the dump cannot be loaded or a check name is unknown.
  """
  options = {"strong_comparison": strong_comparison}
  if checkers is not None:
    options["checkers"] = checkers
  config = RuntimeConfig(**options)

  result = CodeChecker(config.build_policy()).analyse_file(path)
  if not result.success:
    raise ValueError(f"Check failed for {path}:\n" + "\n".join(result.errors))
  return result.diagnostics


__all__ = [
  "CheckResult",
  "CodeChecker",
  "CodeCheckVisitor",
  "Diagnostic",
  "ErrorKind",
  "Policy",
  "PolicyError",
  "RuntimeConfig",
  "check_file",
  "__version__",
]
