"""
Visitor Base and Traversal Driver.

`NodeVisitor` dispatches on the node class name, so a subclass handles a shape
by defining `visit_<ClassName>` (and optionally `leave_<ClassName>`). Node
kinds without a handler are a no-op, which keeps dispatch total over the
closed node set in `app_codecheck.php.nodes`.
"""

from typing import Optional

from app_codecheck.php.nodes import Node


class NodeVisitor:
  """
  Pre-order visitor with per-class dispatch.

  Handlers may return False from `visit_*` to skip the node's children.
  """

  def on_visit(self, node: Node) -> Optional[bool]:
    """
    Called before the node's children are traversed.

    Args:
        node: The node being entered.

    Returns:
        False to skip the children, anything else to descend.
    """
    handler = getattr(self, f"visit_{type(node).__name__}", None)
    if handler is None:
      return True
    return handler(node)

  def on_leave(self, node: Node) -> None:
    """
    Called after the node's children were traversed.

    Args:
        node: The node being left.
    """
    handler = getattr(self, f"leave_{type(node).__name__}", None)
    if handler is not None:
      handler(node)


def walk(node: Node, visitor: NodeVisitor) -> NodeVisitor:
  """
  Traverses `node` in document order with `visitor`.

  Args:
      node: Root of the subtree (usually a `Module`).
      visitor: The visitor receiving callbacks.

  Returns:
      The visitor, for chaining (`walk(tree, v).diagnostics`).
  """
  node.visit(visitor)
  return visitor
