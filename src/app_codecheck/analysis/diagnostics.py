"""
Diagnostic Records and Message Resolution.

A `Diagnostic` is the output record of the checker: the offending token as
written in source, the violation category, the line, and a human readable
reason built from the policy's description.
"""

from typing import Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field

from app_codecheck.enums import ErrorKind


class Diagnostic(BaseModel):
  """
  One reported policy violation.
  """

  model_config = ConfigDict(frozen=True)

  token: str = Field(description="The offending symbol or operator text as written in source.")
  kind: ErrorKind = Field(description="The violation category.")
  line: int = Field(ge=1, description="1-based source line.")
  reason: str = Field(description="Resolved human readable message.")
  symbol: str = Field(
    default="",
    description="Canonical blacklisted name the token resolved to (the original entry, not an alias).",
  )

  def to_dict(self) -> Dict[str, object]:
    """
    Serializes to a JSON friendly dictionary with the numeric error code.
    """
    return {
      "token": self.token,
      "kind": self.kind.name,
      "code": self.kind.value,
      "line": self.line,
      "reason": self.reason,
      "symbol": self.symbol,
    }


def build_messages(description: str) -> Dict[ErrorKind, str]:
  """
  Builds the message templates for a policy category.

  Args:
      description: Category label (e.g. "private", "deprecated").

  Returns:
      Mapping of every ErrorKind to its message.
  """
  return {
    ErrorKind.CLASS_EXTENDS_NOT_ALLOWED: f"{description} class must not be extended",
    ErrorKind.CLASS_IMPLEMENTS_NOT_ALLOWED: f"{description} interface must not be implemented",
    ErrorKind.STATIC_CALL_NOT_ALLOWED: f"Static method of {description} class must not be called",
    ErrorKind.CLASS_CONST_FETCH_NOT_ALLOWED: f"Constant of {description} class must not be fetched",
    ErrorKind.CLASS_NEW_FETCH_NOT_ALLOWED: f"{description} class must not be instantiated",
    ErrorKind.CLASS_USE_NOT_ALLOWED: f"{description} class must not be imported with an import statement",
    ErrorKind.OP_OPERATOR_USAGE_DISCOURAGED: "is discouraged",
  }


def resolve_reason(messages: Mapping[ErrorKind, str], name: str, kind: ErrorKind) -> str:
  """
  Looks up the message for `kind`, falling back to a generic one.

  Args:
      messages: Templates of the active policy.
      name: The canonical blacklisted name (only used by the fallback).
      kind: The violation category.

  Returns:
      The resolved reason string.
  """
  if kind in messages:
    return messages[kind]
  return f"{name} usage not allowed - error: {kind.value}"
