"""
Data structures representing the output of checking one file.

This module defines the `CheckResult` Pydantic model, which encapsulates the
diagnostics found in a syntax tree and any errors encountered loading it.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from app_codecheck.analysis.diagnostics import Diagnostic


class CheckResult(BaseModel):
  """
  Container for the results of checking one syntax tree.
  """

  path: str = Field(default="", description="Source of the syntax tree (empty for in-memory trees).")
  diagnostics: List[Diagnostic] = Field(default_factory=list, description="Violations in discovery order.")
  errors: List[str] = Field(default_factory=list, description="Errors that prevented the check.")
  success: bool = Field(
    default=True,
    description="True if the tree was loaded and fully traversed.",
  )

  @property
  def has_violations(self) -> bool:
    """
    Check if the file violates the policy.

    Returns:
        True if one or more diagnostics are present.
    """
    return len(self.diagnostics) > 0

  def to_dict(self) -> Dict[str, Any]:
    """
    Serializes the result for JSON reports.
    """
    return {
      "path": self.path,
      "success": self.success,
      "errors": list(self.errors),
      "diagnostics": [d.to_dict() for d in self.diagnostics],
    }
