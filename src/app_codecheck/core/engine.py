"""
Code Checker Engine.

Runs a `Policy` over syntax trees: a single in-memory `Module`, one
PHP-Parser JSON dump, or every dump below a folder. Each tree is checked with
its own `CodeCheckVisitor` and blacklist table, so one policy instance can be
reused for any number of files.
"""

import logging
from pathlib import Path
from typing import List, Union

from rich.markup import escape

from app_codecheck.analysis.code_check import CodeCheckVisitor
from app_codecheck.analysis.policy import Policy
from app_codecheck.core.check_result import CheckResult
from app_codecheck.php.json_loader import AstLoadError, load_file
from app_codecheck.php.nodes import Module
from app_codecheck.php.traversal import walk
from app_codecheck.utils.console import log_error

logger = logging.getLogger(__name__)

AST_SUFFIX = ".json"


class CodeChecker:
  """
  Applies one policy to syntax trees.

  Attributes:
      policy (Policy): The policy enforced on every tree.
  """

  def __init__(self, policy: Policy):
    """
    Initializes the checker.

    Args:
        policy: The immutable policy to enforce.
    """
    self.policy = policy

  def analyse_tree(self, module: Module, path: str = "") -> CheckResult:
    """
    Checks an in-memory syntax tree.

    Args:
        module: Root node of the file.
        path: Label recorded on the result.

    Returns:
        CheckResult holding the diagnostics in document order.
    """
    visitor = CodeCheckVisitor(self.policy)
    walk(module, visitor)
    logger.debug("%s: %d violation(s)", path or "<memory>", len(visitor.diagnostics))
    return CheckResult(path=path, diagnostics=visitor.diagnostics)

  def analyse_file(self, path: Union[str, Path]) -> CheckResult:
    """
    Loads a PHP-Parser JSON dump and checks it.

    Load failures do not raise; they are logged and returned as an
    unsuccessful result.

    Args:
        path: JSON file produced by ``php-parse --json-dump``.

    Returns:
        The CheckResult for the file.
    """
    path = Path(path)
    try:
      module = load_file(path)
    except (OSError, UnicodeDecodeError, AstLoadError, RecursionError) as e:
      # RecursionError: nesting deeper than the JSON decoder accepts.
      log_error(f"Failed to load {escape(path.name)}: {escape(str(e))}")
      return CheckResult(path=str(path), errors=[str(e)], success=False)
    return self.analyse_tree(module, str(path))

  def analyse_folder(self, folder: Union[str, Path]) -> List[CheckResult]:
    """
    Checks every JSON dump below `folder`, in sorted path order.

    Args:
        folder: Directory to scan recursively.

    Returns:
        One CheckResult per file.
    """
    files = sorted(p for p in Path(folder).rglob(f"*{AST_SUFFIX}") if p.is_file())
    return [self.analyse_file(f) for f in files]

  def analyse(self, path: Union[str, Path]) -> List[CheckResult]:
    """
    Checks a single file or a folder.

    Args:
        path: File or directory.

    Returns:
        List of CheckResults (one element for a file).
    """
    path = Path(path)
    if path.is_dir():
      return self.analyse_folder(path)
    return [self.analyse_file(path)]
