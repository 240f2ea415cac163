"""
Tests for the Console Proxy and Logging Wrappers.

Verifies:
1. The proxy forwards to a real Rich console.
2. `set_console` reroutes both reports and `logging` output.
3. `set_verbose` toggles debug output of library loggers.
"""

import io
import logging

from rich.console import Console

from app_codecheck.utils.console import (
  console,
  get_console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
  set_verbose,
)


def make_recorder() -> Console:
  return Console(record=True, file=io.StringIO(), width=160)


def test_proxy_forwards_to_backend():
  assert isinstance(get_console(), Console)
  # 'width' is not defined on the proxy itself
  assert console.width == get_console().width


def test_injected_console_receives_reports_and_logs():
  capture = make_recorder()
  set_console(capture)

  console.print("[token]OC_API[/token] report line")
  log_info("Checking lib/")
  log_warning("Skipped entry")
  log_success("Clean")
  log_error("Broken dump")

  output = capture.export_text()
  assert "OC_API report line" in output
  assert "ℹ️" in output and "Checking lib/" in output
  assert "⚠️" in output and "Skipped entry" in output
  assert "✅" in output and "Clean" in output
  assert "❌" in output and "Broken dump" in output


def test_module_loggers_follow_the_console():
  capture = make_recorder()
  set_console(capture)

  logging.getLogger("app_codecheck.analysis.policy").warning("Ignoring invalid entry")
  assert "Ignoring invalid entry" in capture.export_text()


def test_reset_creates_fresh_backend():
  temp = make_recorder()
  set_console(temp)
  assert get_console() is temp

  reset_console()
  assert get_console() is not temp

  handlers = [h for h in logging.getLogger().handlers if type(h).__name__ == "RichHandler"]
  assert len(handlers) == 1


def test_set_verbose_toggles_debug():
  capture = make_recorder()
  set_console(capture)

  logging.getLogger("app_codecheck.core.engine").debug("hidden detail")
  set_verbose(True)
  logging.getLogger("app_codecheck.core.engine").debug("visible detail")
  set_verbose(False)

  output = capture.export_text()
  assert "hidden detail" not in output
  assert "visible detail" in output
