"""
Reader for nikic/PHP-Parser JSON Dumps.

The checker does not parse PHP itself. Instead it consumes the JSON
serialization emitted by PHP-Parser (``php-parse --json-dump file.php``) and
converts it into the node model of `app_codecheck.php.nodes`.

Both the v4 name layout (``{"nodeType": "Name", "parts": ["OCP", "IDb"]}``) and
the v5 layout (``{"nodeType": "Name", "name": "OCP\\IDb"}``) are accepted, as are
the v4 ``Stmt_UseUse`` and v5 ``UseItem`` import items.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from app_codecheck.php.nodes import (
  BinaryOp,
  ClassConstFetch,
  ClassDecl,
  GenericNode,
  Identifier,
  Literal,
  Module,
  Name,
  New,
  Node,
  StaticCall,
  Use,
  UseItem,
  Variable,
)

logger = logging.getLogger(__name__)

_NAME_TYPES = {"Name": False, "Name_FullyQualified": True, "Name_Relative": False}

_USE_KINDS = {0: "unknown", 1: "normal", 2: "function", 3: "const"}

# Operator sigils for Expr_BinaryOp_* suffixes. NotEqual covers both `!=` and `<>`.
_BINARY_OPS = {
  "Equal": "==",
  "NotEqual": "!=",
  "Identical": "===",
  "NotIdentical": "!==",
  "Smaller": "<",
  "SmallerOrEqual": "<=",
  "Greater": ">",
  "GreaterOrEqual": ">=",
  "Spaceship": "<=>",
  "Concat": ".",
  "Plus": "+",
  "Minus": "-",
  "Mul": "*",
  "Div": "/",
  "Mod": "%",
  "Pow": "**",
  "BooleanAnd": "&&",
  "BooleanOr": "||",
  "LogicalAnd": "and",
  "LogicalOr": "or",
  "LogicalXor": "xor",
  "BitwiseAnd": "&",
  "BitwiseOr": "|",
  "BitwiseXor": "^",
  "ShiftLeft": "<<",
  "ShiftRight": ">>",
  "Coalesce": "??",
}

_SCALAR_TYPES = {"Scalar_String", "Scalar_LNumber", "Scalar_DNumber", "Scalar_Int", "Scalar_Float"}


class AstLoadError(ValueError):
  """Raised when a document is not a PHP-Parser JSON syntax tree."""


def _is_node(value: Any) -> bool:
  return isinstance(value, dict) and isinstance(value.get("nodeType"), str)


def _line_of(raw: Dict[str, Any], parent_line: int) -> int:
  attrs = raw.get("attributes")
  if isinstance(attrs, dict):
    start = attrs.get("startLine")
    if isinstance(start, int) and start >= 1:
      return start
  return max(parent_line, 1)


def _child_nodes(raw: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
  """Yields the nested node objects of `raw` in field order."""
  for key, value in raw.items():
    if key in ("nodeType", "attributes"):
      continue
    if _is_node(value):
      yield value
    elif isinstance(value, list):
      for item in value:
        if _is_node(item):
          yield item


class _Converter:
  """
  Converter from decoded JSON to syntax tree nodes.

  Long expression chains (e.g. thousands of `.` concatenations) nest deeper
  than the interpreter's recursion limit, so the tree is processed with an
  explicit stack: lines are resolved top-down, then nodes are built
  bottom-up from already converted children.
  """

  def convert(self, raw: Dict[str, Any], parent_line: int) -> Node:
    lines: Dict[int, int] = {}
    order: List[Dict[str, Any]] = []
    stack: List[Tuple[Dict[str, Any], int]] = [(raw, parent_line)]
    while stack:
      current, inherited = stack.pop()
      line = _line_of(current, inherited)
      lines[id(current)] = line
      order.append(current)
      stack.extend((child, line) for child in _child_nodes(current))

    # Pre-order lists every node before its descendants.
    built: Dict[int, Node] = {}
    for current in reversed(order):
      built[id(current)] = self._build(current, lines[id(current)], built)
    return built[id(raw)]

  def _build(self, raw: Dict[str, Any], line: int, built: Dict[int, Node]) -> Node:
    node_type = raw["nodeType"]

    def one(value: Any) -> Optional[Node]:
      return built[id(value)] if _is_node(value) else None

    def many(values: Any) -> Tuple[Node, ...]:
      if not isinstance(values, list):
        return ()
      return tuple(built[id(v)] for v in values if _is_node(v))

    if node_type in _NAME_TYPES:
      return self._name(raw, line)
    if node_type in ("Identifier", "VarLikeIdentifier"):
      return Identifier(line=line, name=str(raw.get("name", "")))
    if node_type == "Expr_Variable":
      name = raw.get("name")
      return Variable(line=line, name=one(name) if _is_node(name) else str(name))
    if node_type == "Stmt_Class":
      return self._class(raw, line, one, many)
    if node_type == "Expr_StaticCall":
      return StaticCall(
        line=line,
        class_=one(raw.get("class")),
        name=self._member_name(raw.get("name"), line, one),
        args=many(raw.get("args")),
      )
    if node_type == "Expr_ClassConstFetch":
      return ClassConstFetch(
        line=line,
        class_=one(raw.get("class")),
        name=self._member_name(raw.get("name"), line, one),
      )
    if node_type == "Expr_New":
      return New(line=line, class_=one(raw.get("class")), args=many(raw.get("args")))
    if node_type in ("Stmt_Use", "Stmt_GroupUse"):
      kind = _USE_KINDS.get(raw.get("type", 1), "normal")
      prefix = one(raw.get("prefix"))
      items = [item for item in many(raw.get("uses")) if isinstance(item, UseItem)]
      if isinstance(prefix, Name):
        items = [self._prefixed(item, prefix) for item in items]
      return Use(line=line, uses=tuple(items), kind=kind)
    if node_type in ("Stmt_UseUse", "UseItem"):
      return self._use_item(raw, line, one)
    if node_type.startswith("Expr_BinaryOp_"):
      suffix = node_type[len("Expr_BinaryOp_") :]
      return BinaryOp(
        line=line,
        op=_BINARY_OPS.get(suffix, suffix),
        left=one(raw.get("left")),
        right=one(raw.get("right")),
      )
    if node_type in _SCALAR_TYPES:
      return Literal(line=line, value=raw.get("value"))

    return GenericNode(line=line, kind=node_type, nested=tuple(built[id(c)] for c in _child_nodes(raw)))

  def _name(self, raw: Dict[str, Any], line: int) -> Name:
    fully_qualified = _NAME_TYPES.get(raw["nodeType"], False)
    if isinstance(raw.get("parts"), list):
      parts = tuple(str(p) for p in raw["parts"])
    else:
      text = str(raw.get("name", ""))
      if text.startswith("\\"):
        fully_qualified = True
      parts = tuple(p for p in text.split("\\") if p)
    return Name(line=line, parts=parts, fully_qualified=fully_qualified)

  def _class(self, raw: Dict[str, Any], line: int, one, many) -> ClassDecl:
    ident = raw.get("name")
    if _is_node(ident):
      class_name: Optional[str] = str(ident.get("name"))
    else:
      class_name = ident if isinstance(ident, str) else None

    extends = one(raw.get("extends"))
    return ClassDecl(
      line=line,
      name=class_name,
      extends=extends if isinstance(extends, Name) else None,
      implements=tuple(n for n in many(raw.get("implements")) if isinstance(n, Name)),
      body=many(raw.get("stmts")),
    )

  def _member_name(self, value: Any, line: int, one) -> Union[Identifier, Node, None]:
    # PHP-Parser 1.x-3.x serialized member names as plain strings.
    if isinstance(value, str):
      return Identifier(line=line, name=value)
    return one(value)

  def _use_item(self, raw: Dict[str, Any], line: int, one) -> UseItem:
    name = one(raw.get("name"))
    if not isinstance(name, Name):
      raise AstLoadError(f"Import item on line {line} has no name")

    alias = raw.get("alias")
    if _is_node(alias):
      alias = alias.get("name")
    return UseItem(line=line, name=name, alias=str(alias) if alias else None)

  @staticmethod
  def _prefixed(item: UseItem, prefix: Name) -> UseItem:
    name = Name(line=item.name.line, parts=prefix.parts + item.name.parts, fully_qualified=prefix.fully_qualified)
    return UseItem(line=item.line, name=name, alias=item.alias)


def load_module(document: Any) -> Module:
  """
  Converts a decoded PHP-Parser JSON document into a `Module`.

  Args:
      document: Either the list of top-level statements or a single node object.

  Returns:
      The root `Module` node.

  Raises:
      AstLoadError: If the document is not a syntax tree.
  """
  if _is_node(document):
    document = [document]
  if not isinstance(document, list):
    raise AstLoadError(f"Expected a list of statements, got {type(document).__name__}")

  converter = _Converter()
  body: List[Node] = []
  for index, raw in enumerate(document):
    if not _is_node(raw):
      raise AstLoadError(f"Top-level entry #{index} is not a syntax tree node")
    body.append(converter.convert(raw, 1))
  return Module(line=1, body=tuple(body))


def loads(text: str) -> Module:
  """
  Parses a JSON string into a `Module`.

  Raises:
      AstLoadError: On invalid JSON or a non-tree document.
  """
  try:
    document = json.loads(text)
  except json.JSONDecodeError as e:
    raise AstLoadError(f"Invalid JSON: {e}") from e
  return load_module(document)


def load_file(path: Path) -> Module:
  """
  Reads a JSON dump from disk.

  Args:
      path: File written by ``php-parse --json-dump``.

  Returns:
      The root `Module` node.
  """
  logger.debug("Loading syntax tree from %s", path)
  return loads(Path(path).read_text(encoding="utf-8"))
