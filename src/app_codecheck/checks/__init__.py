"""
Named Checks Package.

Automatically discovers and registers checks by scanning this directory for
modules. Dropping a new module with a `@register_check` class into this folder
makes it selectable by name.

This module exposes the registry helpers (`get_check`, `available_checks`,
`compose_policy`) but relies on the side-effects of importing submodules to
populate the internal `_CHECK_REGISTRY`.
"""

import importlib
import logging
import pkgutil
from pathlib import Path

from app_codecheck.checks.base import (
  BaseCheck,
  available_checks,
  compose_policy,
  get_check,
  register_check,
)

# Infrastructure modules, not checks.
_EXCLUDED_MODULES = {"base", "__init__"}


def _auto_register_checks() -> None:
  """
  Imports every module of this package so their decorators run.
  """
  pkg_path = str(Path(__file__).parent)

  for _, module_name, _ in pkgutil.iter_modules([pkg_path]):
    if module_name in _EXCLUDED_MODULES:
      continue

    try:
      importlib.import_module(f".{module_name}", package=__name__)
    except Exception as e:
      # One broken check module must not disable the others.
      logging.warning(f"⚠️  Failed to load check module '{module_name}': {e}. This check will not be available.")


_auto_register_checks()

__all__ = [
  "BaseCheck",
  "available_checks",
  "compose_policy",
  "get_check",
  "register_check",
]
