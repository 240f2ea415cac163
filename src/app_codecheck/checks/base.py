"""
Base Class and Registry for Named Checks.

A check is a reusable blacklist bundle (e.g. "private" or "deprecation").
Checks register themselves with `@register_check(name)`; the command line and
`RuntimeConfig` select them by name, and `compose_policy` merges a selection
into a single `Policy`.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type, Union

from app_codecheck.analysis.policy import Policy, normalize_blacklist

DEFAULT_DESCRIPTION = "blacklisted"


class BaseCheck:
  """
  A named blacklist definition.

  Attributes:
      description (str): Category label used in messages. Empty for checks
          that only toggle operator detection.
      classes: Forbidden classes/interfaces (list, or mapping name -> since-version).
      constants: Forbidden ``Class::CONST`` pairs (list or mapping).
      strong_comparison (bool): Whether this check discourages `==` / `!=`.
  """

  description: str = ""
  classes: Union[Sequence[str], Mapping[str, Any]] = ()
  constants: Union[Sequence[str], Mapping[str, Any]] = MappingProxyType({})
  strong_comparison: bool = False

  def to_policy(self) -> Policy:
    """
    Builds a standalone policy for this check.
    """
    return Policy(
      self.description or DEFAULT_DESCRIPTION,
      self.classes,
      self.constants,
      self.strong_comparison,
    )


_CHECK_REGISTRY: Dict[str, Type[BaseCheck]] = {}


def register_check(name: str):
  def wrapper(cls):
    _CHECK_REGISTRY[name] = cls
    return cls

  return wrapper


def get_check(name: str) -> Optional[BaseCheck]:
  cls = _CHECK_REGISTRY.get(name)
  if cls:
    return cls()
  return None


def available_checks() -> List[str]:
  """
  Returns the registered check names in sorted order.
  """
  return sorted(_CHECK_REGISTRY.keys())


def compose_policy(
  names: Iterable[str],
  extra_classes: Optional[Union[List[str], Mapping[str, Any]]] = None,
  extra_constants: Optional[Union[List[str], Mapping[str, Any]]] = None,
  description: Optional[str] = None,
  strong_comparison: Optional[bool] = None,
) -> Policy:
  """
  Merges several registered checks into one policy.

  Descriptions are joined with "/" in selection order, blacklists are united
  and the operator flag is enabled if any selected check enables it.

  Args:
      names: Registered check names.
      extra_classes: Additional forbidden classes from configuration.
      extra_constants: Additional forbidden constants from configuration.
      description: Overrides the joined description.
      strong_comparison: Overrides the operator flag of the selected checks.

  Returns:
      The composed Policy.

  Raises:
      ValueError: If a name is not registered.
  """
  labels: List[str] = []
  classes: Dict[str, str] = {}
  constants: Dict[str, str] = {}
  operators = False

  for name in names:
    check = get_check(name)
    if check is None:
      raise ValueError(f"Unknown check: '{name}'. Available checks: {available_checks()}")
    if check.description and check.description not in labels:
      labels.append(check.description)
    for key, display in normalize_blacklist(check.classes, "classes").items():
      classes.setdefault(key, display)
    for key, display in normalize_blacklist(check.constants, "constants").items():
      constants.setdefault(key, display)
    operators = operators or check.strong_comparison

  for key, display in normalize_blacklist(extra_classes, "classes").items():
    classes.setdefault(key, display)
  for key, display in normalize_blacklist(extra_constants, "constants").items():
    constants.setdefault(key, display)

  if strong_comparison is not None:
    operators = strong_comparison

  label = description or "/".join(labels) or DEFAULT_DESCRIPTION
  return Policy(label, list(classes.values()), list(constants.values()), operators)
