"""
Enumerations for app-codecheck.

This module defines the closed set of violation categories reported by the
code checker. The numeric values are stable error codes that appear in
fallback messages and JSON reports.
"""

from enum import Enum


class ErrorKind(int, Enum):
  """
  Categorization of policy violations.

  Each member maps to a fixed message template in
  `app_codecheck.analysis.diagnostics`.
  """

  CLASS_EXTENDS_NOT_ALLOWED = 1000
  CLASS_IMPLEMENTS_NOT_ALLOWED = 1001
  STATIC_CALL_NOT_ALLOWED = 1002
  CLASS_CONST_FETCH_NOT_ALLOWED = 1003
  CLASS_NEW_FETCH_NOT_ALLOWED = 1004
  CLASS_USE_NOT_ALLOWED = 1005
  OP_OPERATOR_USAGE_DISCOURAGED = 1006

  def __str__(self) -> str:
    return str(self.value)


class OutputFormat(str, Enum):
  """
  Rendering modes supported by the `check` command.
  """

  TABLE = "table"
  JSON = "json"
