"""
PHP Syntax Tree Node Model.

A closed set of immutable node shapes describing the parts of a PHP module
the code checker inspects. Everything the checker does not care about is
represented by `GenericNode`, which keeps its children so traversal still
reaches nested shapes of interest.

Traversal mirrors the LibCST visitor protocol: `node.visit(visitor)` calls
`visitor.on_visit(node)`, descends into `children()` in source order when it
returns a truthy value, and finally calls `visitor.on_leave(node)`.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Node:
  """
  Base class for all syntax tree nodes.
  """

  line: int
  """1-based source line the node starts on."""

  def children(self) -> Iterator["Node"]:
    """
    Yields direct child nodes in source order.

    Returns:
        An iterator over child nodes (empty for leaves).
    """
    return iter(())

  def visit(self, visitor: Any) -> None:
    """
    Walks this subtree in pre-order with the given visitor.

    Uses an explicit stack, so arbitrarily deep trees do not hit the
    recursion limit.

    Args:
        visitor: An object implementing `on_visit(node)` and `on_leave(node)`.
    """
    stack: List[Tuple["Node", bool]] = [(self, False)]
    while stack:
      node, leaving = stack.pop()
      if leaving:
        visitor.on_leave(node)
        continue
      descend = visitor.on_visit(node) is not False
      stack.append((node, True))
      if descend:
        stack.extend((child, False) for child in reversed(tuple(node.children())))


@dataclass(frozen=True)
class Name(Node):
  """
  A statically written class or namespace name (e.g. `OCP\\AppFramework\\IApi`).
  """

  parts: Tuple[str, ...] = ()
  fully_qualified: bool = False
  """True if the name was written with a leading backslash."""

  def to_string(self) -> str:
    """
    Returns the name joined with namespace separators, without a leading backslash.
    """
    return "\\".join(self.parts)

  def last(self) -> str:
    """
    Returns the final segment of the name (the implicit import alias).
    """
    return self.parts[-1] if self.parts else ""

  def __str__(self) -> str:
    return self.to_string()


@dataclass(frozen=True)
class Identifier(Node):
  """A bare identifier such as a method or constant name."""

  name: str = ""

  def __str__(self) -> str:
    return self.name


@dataclass(frozen=True)
class Variable(Node):
  """A variable expression (`$name`). Its value is unknown statically."""

  name: Union[str, Node] = ""


@dataclass(frozen=True)
class GenericNode(Node):
  """
  Catch-all for node kinds without a dedicated shape.

  Attributes:
      kind: The originating node type label (e.g. `Stmt_Function`).
      nested: Child nodes in source order.
  """

  kind: str = ""
  nested: Tuple[Node, ...] = ()

  def children(self) -> Iterator[Node]:
    return iter(self.nested)


@dataclass(frozen=True)
class Module(Node):
  """Root of one source file."""

  body: Tuple[Node, ...] = ()

  def children(self) -> Iterator[Node]:
    return iter(self.body)


@dataclass(frozen=True)
class ClassDecl(Node):
  """
  A class declaration with optional `extends` and `implements` clauses.
  """

  name: Optional[str] = None
  extends: Optional[Name] = None
  implements: Tuple[Name, ...] = ()
  body: Tuple[Node, ...] = ()

  def children(self) -> Iterator[Node]:
    if self.extends is not None:
      yield self.extends
    yield from self.implements
    yield from self.body


ClassRef = Union[Name, Node]
"""The target of a static access: a literal `Name` or any runtime expression."""


@dataclass(frozen=True)
class StaticCall(Node):
  """A static method call: `Foo::bar(...)`."""

  class_: ClassRef = None  # type: ignore[assignment]
  name: Union[Identifier, Node, None] = None
  args: Tuple[Node, ...] = ()

  def children(self) -> Iterator[Node]:
    if self.class_ is not None:
      yield self.class_
    if self.name is not None:
      yield self.name
    yield from self.args


@dataclass(frozen=True)
class ClassConstFetch(Node):
  """A class constant fetch: `Foo::BAR`."""

  class_: ClassRef = None  # type: ignore[assignment]
  name: Union[Identifier, Node, None] = None

  def children(self) -> Iterator[Node]:
    if self.class_ is not None:
      yield self.class_
    if self.name is not None:
      yield self.name


@dataclass(frozen=True)
class New(Node):
  """An instantiation: `new Foo(...)`. `class_` is a ClassDecl for anonymous classes."""

  class_: ClassRef = None  # type: ignore[assignment]
  args: Tuple[Node, ...] = ()

  def children(self) -> Iterator[Node]:
    if self.class_ is not None:
      yield self.class_
    yield from self.args


@dataclass(frozen=True)
class UseItem(Node):
  """
  One imported name of a `use` statement, with an optional explicit alias.
  """

  name: Name = None  # type: ignore[assignment]
  alias: Optional[str] = None

  def effective_alias(self) -> str:
    """
    Returns the explicit alias, or the last segment of the imported name.
    """
    return self.alias if self.alias else self.name.last()

  def children(self) -> Iterator[Node]:
    if self.name is not None:
      yield self.name


@dataclass(frozen=True)
class Use(Node):
  """A `use` statement holding one or more `UseItem`s."""

  uses: Tuple[UseItem, ...] = ()
  kind: str = "normal"
  """One of `normal`, `function`, `const`."""

  def children(self) -> Iterator[Node]:
    return iter(self.uses)


@dataclass(frozen=True)
class BinaryOp(Node):
  """A binary operation. `op` holds the operator as written (e.g. `==`)."""

  op: str = ""
  left: Optional[Node] = None
  right: Optional[Node] = None

  def children(self) -> Iterator[Node]:
    if self.left is not None:
      yield self.left
    if self.right is not None:
      yield self.right


@dataclass(frozen=True)
class Literal(Node):
  """A scalar literal. Only kept so fixtures read naturally."""

  value: Any = field(default=None)
