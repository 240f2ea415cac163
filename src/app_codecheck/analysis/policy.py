"""
Compatibility Policy and Per-File Blacklist Table.

A `Policy` is the immutable description of what a check forbids: class and
interface names, ``Class::CONSTANT`` pairs, and whether loose equality
operators are discouraged. All lookups are case-insensitive; the tables map
the lowercase key to the name as it was configured, which is what diagnostics
display.

A `BlacklistTable` is the mutable working copy used while one file is
checked. Import statements extend it with aliased names (see
`BlacklistTable.add_alias`). Every file gets a fresh table from
`Policy.new_table()`, so aliases never leak between files.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from app_codecheck.analysis.diagnostics import build_messages
from app_codecheck.enums import ErrorKind

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "\\"
CONSTANT_SEPARATOR = "::"

BlacklistSpec = Union[Mapping[Any, Any], Iterable[Any], None]
"""Either a list of names or a mapping of name -> auxiliary info (unused)."""


class PolicyError(TypeError):
  """Raised when a blacklist is neither a list nor a mapping."""


def _iter_entries(entries: BlacklistSpec, what: str) -> Iterable[Tuple[Any, Any]]:
  if entries is None:
    return ()
  if isinstance(entries, Mapping):
    return entries.items()
  if isinstance(entries, (list, tuple, set, frozenset)):
    # A plain list behaves like a numerically keyed mapping.
    return enumerate(sorted(entries, key=str) if isinstance(entries, (set, frozenset)) else entries)
  raise PolicyError(f"Blacklisted {what} must be a list or a mapping, got {type(entries).__name__}")


def _is_numeric_key(key: Any) -> bool:
  if isinstance(key, bool):
    return False
  if isinstance(key, int):
    return True
  return isinstance(key, str) and key.isdigit()


def normalize_blacklist(entries: BlacklistSpec, what: str = "classes") -> Dict[str, str]:
  """
  Normalizes a configured blacklist into a lowercase-key -> display-name map.

  Accepts the two authoring styles ``["Foo\\Bar"]`` and ``{"Foo\\Bar": info}``;
  both produce the same result. Numerically keyed entries with a string value
  promote the value to the key.

  Args:
      entries: The configured blacklist.
      what: Label used in log and error messages.

  Returns:
      Dict mapping lowercase names to their configured spelling. The first
      spelling wins for duplicate logical entries.

  Raises:
      PolicyError: If `entries` is not a list or a mapping.
  """
  result: Dict[str, str] = {}
  for key, info in _iter_entries(entries, what):
    if _is_numeric_key(key) and isinstance(info, str):
      key = info
    if not isinstance(key, str) or not key.strip():
      logger.warning("Ignoring invalid blacklisted %s entry: %r", what, key)
      continue
    key = key.strip().lstrip(NAMESPACE_SEPARATOR)
    result.setdefault(key.lower(), key)
  return result


class BlacklistTable:
  """
  Mutable, alias-aware copy of a policy's blacklists for one file.

  Attributes:
      classes (Dict[str, str]): Lowercase name or alias -> original forbidden name.
      constants (Dict[str, str]): Lowercase ``class::const`` or alias -> original.
  """

  def __init__(self, classes: Mapping[str, str], constants: Mapping[str, str]):
    self.classes: Dict[str, str] = dict(classes)
    self.constants: Dict[str, str] = dict(constants)

  def lookup_class(self, name: str) -> Optional[str]:
    """
    Returns the original forbidden name for `name` (case-insensitive), or None.
    """
    return self.classes.get(name.lower())

  def lookup_constant(self, class_name: str, constant: str) -> Optional[str]:
    """
    Returns the original forbidden ``Class::CONST`` for the pair, or None.
    """
    return self.constants.get(f"{class_name}{CONSTANT_SEPARATOR}{constant}".lower())

  def add_alias(self, name: str, alias: str) -> int:
    """
    Registers the names an import makes reachable under `alias`.

    Example:
    - Blacklist entry:      OCP\\AppFramework\\IApi
    - Name:                 OCP\\AppFramework
    - Alias:                OAF
    =>  new blacklist entry:  OAF\\IApi  (reported as OCP\\AppFramework\\IApi)

    An entry equal to the imported name itself becomes forbidden under the
    alias too. Derivation only looks at entries present before this call,
    including aliases from earlier imports, so aliases chain across
    successive imports but never within one.

    Args:
        name: The imported fully qualified name.
        alias: The explicit alias, or the last segment of `name`.

    Returns:
        The number of entries added or redirected.
    """
    lower_name = name.lower().lstrip(NAMESPACE_SEPARATOR)
    lower_alias = alias.lower()
    if not lower_name or not lower_alias:
      return 0

    derived = 0
    for key, original in list(self.classes.items()):
      if key == lower_name or key.startswith(lower_name + NAMESPACE_SEPARATOR):
        self.classes[lower_alias + key[len(lower_name) :]] = original
        derived += 1

    for key, original in list(self.constants.items()):
      if key.startswith(lower_name + NAMESPACE_SEPARATOR) or key.startswith(lower_name + CONSTANT_SEPARATOR):
        self.constants[lower_alias + key[len(lower_name) :]] = original
        derived += 1

    if derived:
      logger.debug("Alias %s for %s covers %d blacklisted entries", alias, name, derived)
    return derived


class Policy:
  """
  Immutable compatibility policy.

  Attributes:
      description (str): Category label used in messages (e.g. "private").
      classes (Mapping[str, str]): Lowercase forbidden class/interface -> display name.
      constants (Mapping[str, str]): Lowercase ``class::const`` -> display name.
      check_equality_operators (bool): Whether `==` and `!=` are reported.
      messages (Mapping[ErrorKind, str]): Message templates for this category.
  """

  def __init__(
    self,
    description: str,
    classes: BlacklistSpec = None,
    constants: BlacklistSpec = None,
    check_equality_operators: bool = False,
  ):
    """
    Builds the policy, normalizing both blacklists.

    Args:
        description: Category label.
        classes: Forbidden classes and interfaces, as a list or mapping.
        constants: Forbidden ``Class::CONST`` pairs, as a list or mapping.
        check_equality_operators: Report `==` / `!=` usage.

    Raises:
        PolicyError: If a blacklist has an unsupported shape.
    """
    self._description = description
    self._classes = MappingProxyType(normalize_blacklist(classes, "classes"))
    self._constants = MappingProxyType(normalize_blacklist(constants, "constants"))
    self._check_equality_operators = bool(check_equality_operators)
    self._messages = MappingProxyType(build_messages(description))

  @property
  def description(self) -> str:
    return self._description

  @property
  def classes(self) -> Mapping[str, str]:
    return self._classes

  @property
  def constants(self) -> Mapping[str, str]:
    return self._constants

  @property
  def check_equality_operators(self) -> bool:
    return self._check_equality_operators

  @property
  def messages(self) -> Mapping[ErrorKind, str]:
    return self._messages

  def new_table(self) -> BlacklistTable:
    """
    Returns a fresh working table for checking one file.
    """
    return BlacklistTable(self._classes, self._constants)

  def __repr__(self) -> str:
    return (
      f"Policy(description={self._description!r}, classes={len(self._classes)}, "
      f"constants={len(self._constants)}, check_equality_operators={self._check_equality_operators})"
    )
