"""
Report Console and Log Routing.

Everything the checker prints goes to one Rich `Console`:

1.  **Reports**: diagnostic tables and run summaries (`console.print`).
2.  **Logs**: records from any `logging` logger, rendered by a `RichHandler`
    attached to the root logger, plus the emoji-prefixed `log_*` helpers.

Modules import the module-level `console` object once. It forwards to a
swappable backend, so tests and embedding applications can redirect all
output with `set_console` without re-importing anything.

Attributes:
    console (_ConsoleProxy): Forwarder to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Sits between INFO and WARNING, used for "no violations" messages.
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_CHECK_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "token": "bold magenta",
    "kind": "cyan",
    "clean": "green",
    "finding": "red",
  }
)


def _new_backend() -> Console:
  return Console(theme=_CHECK_THEME)


def _route_logging_to(target: Console) -> None:
  """
  Replaces the root logger's Rich handler with one writing to `target`.

  Handlers installed by other parties (pytest's capture handler, for
  instance) are left alone.
  """
  root = logging.getLogger()
  for existing in [h for h in root.handlers if isinstance(h, RichHandler)]:
    root.removeHandler(existing)

  root.addHandler(
    RichHandler(
      console=target,
      markup=True,
      show_time=False,
      show_path=False,
      omit_repeated_times=False,
      rich_tracebacks=True,
    )
  )
  root.setLevel(logging.INFO)


class _ConsoleProxy:
  """
  Stable handle on the active `rich.console.Console`.

  Unknown attributes (`width`, `export_text`, ...) are looked up on the
  backend, so the proxy can be used wherever a Console is expected.
  """

  def __init__(self) -> None:
    self._backend: Console = _new_backend()
    _route_logging_to(self._backend)

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    """
    Sends reports and log records to `new_console` from now on.

    Args:
        new_console (Console): Replacement backend, e.g. ``Console(record=True)``.
    """
    self._backend = new_console
    _route_logging_to(new_console)

  def reset(self) -> None:
    """
    Installs a fresh standard output backend.
    """
    self.set_backend(_new_backend())

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects all reports and logs.

  Args:
      new_console (Console): The Rich console to write to.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Redirects reports and logs back to standard output."""
  console.reset()


def get_console() -> Console:
  """
  Returns the Rich console currently receiving output.
  """
  return console.backend


def set_verbose(enabled: bool) -> None:
  """
  Shows debug records (alias derivation, per-file counts) when enabled.
  """
  logging.getLogger().setLevel(logging.DEBUG if enabled else logging.INFO)


def _emit(level: int, prefix: str, msg: str) -> None:
  logging.log(level, f"{prefix} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  _emit(logging.INFO, "ℹ️ ", msg)


def log_success(msg: str) -> None:
  _emit(SUCCESS_LEVEL_NUM, "✅", msg)


def log_warning(msg: str) -> None:
  _emit(logging.WARNING, "⚠️ ", msg)


def log_error(msg: str) -> None:
  _emit(logging.ERROR, "❌", msg)


def use_stderr() -> None:
  """
  Sends reports and logs to standard error, keeping stdout free for
  machine readable output.
  """
  console.set_backend(Console(theme=_CHECK_THEME, stderr=True))
