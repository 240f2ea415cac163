"""
Policy Driven Code Check Visitor.

`CodeCheckVisitor` walks one PHP module in document order and records a
`Diagnostic` for every use of a blacklisted class, interface or class constant,
and optionally for every loose (in)equality comparison.

Known gap: only statically written class names are checked. A class reached
through a runtime expression is never reported::

    $c = "OC_API";
    $c::call();         // not detected
    $c::ADMIN_AUTH;     // not detected
    new $c;             // not detected
"""

import logging
from typing import List, Optional

from app_codecheck.analysis.diagnostics import Diagnostic, resolve_reason
from app_codecheck.analysis.policy import BlacklistTable, Policy
from app_codecheck.enums import ErrorKind
from app_codecheck.php.nodes import (
  BinaryOp,
  ClassConstFetch,
  ClassDecl,
  Identifier,
  Name,
  New,
  Node,
  StaticCall,
  UseItem,
)
from app_codecheck.php.traversal import NodeVisitor

logger = logging.getLogger(__name__)

_EQUALITY_OPERATORS = {"==": "==", "!=": "!=", "<>": "!="}


class CodeCheckVisitor(NodeVisitor):
  """
  Checks one syntax tree against a `Policy`.

  Attributes:
      policy (Policy): The immutable policy being enforced.
      table (BlacklistTable): Working blacklist for this file, extended by imports.
      diagnostics (List[Diagnostic]): Findings in discovery order.
  """

  def __init__(self, policy: Policy, table: Optional[BlacklistTable] = None):
    """
    Initializes the visitor.

    Args:
        policy: The policy to enforce.
        table: Working table to use. A fresh one is taken from the policy if omitted.
    """
    self.policy = policy
    self.table = table if table is not None else policy.new_table()
    self.diagnostics: List[Diagnostic] = []

  def enter_node(self, node: Node) -> None:
    """
    Inspects a single node without descending into its children.

    Drivers that own the traversal call this once per node in document order.

    Args:
        node: Any syntax tree node. Irrelevant kinds are ignored.
    """
    handler = getattr(self, f"visit_{type(node).__name__}", None)
    if handler is not None:
      handler(node)

  def visit_BinaryOp(self, node: BinaryOp) -> None:
    if not self.policy.check_equality_operators:
      return
    token = _EQUALITY_OPERATORS.get(node.op)
    if token is None:
      return
    self._report(token, token, ErrorKind.OP_OPERATOR_USAGE_DISCOURAGED, node)

  def visit_ClassDecl(self, node: ClassDecl) -> None:
    if node.extends is not None:
      self._check_class(node.extends.to_string(), ErrorKind.CLASS_EXTENDS_NOT_ALLOWED, node)
    for interface in node.implements:
      self._check_class(interface.to_string(), ErrorKind.CLASS_IMPLEMENTS_NOT_ALLOWED, node)

  def visit_StaticCall(self, node: StaticCall) -> None:
    if isinstance(node.class_, Name):
      self._check_class(node.class_.to_string(), ErrorKind.STATIC_CALL_NOT_ALLOWED, node)

  def visit_ClassConstFetch(self, node: ClassConstFetch) -> None:
    if not isinstance(node.class_, Name):
      return
    class_name = node.class_.to_string()
    self._check_class(class_name, ErrorKind.CLASS_CONST_FETCH_NOT_ALLOWED, node)
    if isinstance(node.name, Identifier):
      self._check_constant(class_name, node.name.name, node)

  def visit_New(self, node: New) -> None:
    if isinstance(node.class_, Name):
      self._check_class(node.class_.to_string(), ErrorKind.CLASS_NEW_FETCH_NOT_ALLOWED, node)

  def visit_UseItem(self, node: UseItem) -> None:
    imported = node.name.to_string()
    self._check_class(imported, ErrorKind.CLASS_USE_NOT_ALLOWED, node)
    self.table.add_alias(imported, node.effective_alias())

  def _check_class(self, name: str, kind: ErrorKind, node: Node) -> None:
    original = self.table.lookup_class(name)
    if original is not None:
      self._report(name, original, kind, node)

  def _check_constant(self, class_name: str, constant: str, node: Node) -> None:
    original = self.table.lookup_constant(class_name, constant)
    if original is not None:
      token = f"{class_name}::{constant}"
      self._report(token, original, ErrorKind.CLASS_CONST_FETCH_NOT_ALLOWED, node)

  def _report(self, token: str, original: str, kind: ErrorKind, node: Node) -> None:
    logger.debug("Line %d: %s (%s)", node.line, token, kind.name)
    self.diagnostics.append(
      Diagnostic(
        token=token,
        kind=kind,
        line=max(node.line, 1),
        reason=resolve_reason(self.policy.messages, original, kind),
        symbol=original,
      )
    )
