"""
PHP Syntax Tree Package.

Modules:
    - ``nodes``: The closed set of node shapes consumed by the checker.
    - ``traversal``: Visitor base class and the pre-order walk driver.
    - ``json_loader``: Reader for nikic/PHP-Parser JSON dumps.
"""

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
from app_codecheck.php.traversal import NodeVisitor, walk

__all__ = [
  "BinaryOp",
  "ClassConstFetch",
  "ClassDecl",
  "GenericNode",
  "Identifier",
  "Literal",
  "Module",
  "Name",
  "New",
  "Node",
  "NodeVisitor",
  "StaticCall",
  "Use",
  "UseItem",
  "Variable",
  "walk",
]
