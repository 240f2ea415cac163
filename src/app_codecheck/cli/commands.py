"""
CLI Command Handlers Facade.

Re-exports the handlers from `app_codecheck.cli.handlers` so the dispatcher
and tests patch a single module.
"""

from app_codecheck.cli.handlers.check import handle_check
from app_codecheck.cli.handlers.checks import handle_list_checks

__all__ = [
  "handle_check",
  "handle_list_checks",
]
