"""
Runtime Configuration Store.

Settings come from the ``[tool.app_codecheck]`` table of the nearest
``pyproject.toml`` and are overridden by command line arguments.

Example::

    [tool.app_codecheck]
    checkers = ["private", "deprecation"]
    strong_comparison = true
    extra_classes = ["OCA\\Legacy\\Helper"]
    extra_constants = ["OCA\\Legacy\\Helper::MODE"]
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from app_codecheck.analysis.policy import Policy
from app_codecheck.checks import available_checks, compose_policy
from app_codecheck.enums import OutputFormat

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

TOOL_SECTION = "app_codecheck"

DEFAULT_CHECKERS = ["private", "deprecation", "strong-comparison"]


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the code checker.
  """

  checkers: List[str] = Field(
    default_factory=lambda: list(DEFAULT_CHECKERS),
    description="Names of the registered checks to enforce.",
  )
  strong_comparison: Optional[bool] = Field(
    None,
    description="Force `==`/`!=` reporting on or off. None defers to the selected checks.",
  )
  extra_classes: List[str] = Field(default_factory=list, description="Additional forbidden classes/interfaces.")
  extra_constants: List[str] = Field(default_factory=list, description="Additional forbidden `Class::CONST` pairs.")
  description: Optional[str] = Field(None, description="Overrides the category label used in messages.")
  output_format: OutputFormat = Field(OutputFormat.TABLE, description="Report rendering mode.")

  @field_validator("checkers")
  @classmethod
  def validate_checkers(cls, v: List[str]) -> List[str]:
    """
    Ensures every selected check is registered.

    Args:
        v (List[str]): Requested check names.

    Returns:
        List[str]: Normalized (lowercase, de-duplicated) names.

    Raises:
        ValueError: If a check is not registered.
    """
    known = available_checks()
    cleaned: List[str] = []
    for name in v:
      name_clean = name.lower().strip()
      if name_clean not in known:
        raise ValueError(f"Unknown check: '{name_clean}'. Supported checks: {known}")
      if name_clean not in cleaned:
        cleaned.append(name_clean)
    return cleaned

  def build_policy(self) -> Policy:
    """
    Composes the selected checks and extra entries into one Policy.

    Returns:
        Policy: The policy to enforce.
    """
    return compose_policy(
      self.checkers,
      extra_classes=self.extra_classes,
      extra_constants=self.extra_constants,
      description=self.description,
      strong_comparison=self.strong_comparison,
    )

  @classmethod
  def load(
    cls,
    checkers: Optional[List[str]] = None,
    strong_comparison: Optional[bool] = None,
    output_format: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        checkers (Optional[List[str]]): Override for the check selection.
        strong_comparison (Optional[bool]): Override for operator reporting.
        output_format (Optional[str]): Override for the report format.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    final_checkers = checkers or toml_config.get("checkers", list(DEFAULT_CHECKERS))

    if strong_comparison is not None:
      final_strong = strong_comparison
    else:
      final_strong = toml_config.get("strong_comparison")

    final_format = output_format or toml_config.get("output_format", OutputFormat.TABLE.value)

    return cls(
      checkers=final_checkers,
      strong_comparison=final_strong,
      extra_classes=toml_config.get("extra_classes", []),
      extra_constants=toml_config.get("extra_constants", []),
      description=toml_config.get("description"),
      output_format=final_format,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None
