"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Global check registry isolation to prevent tests with custom checks from leaking.
- Console reset so tests capturing output start from stdout.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'app_codecheck' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Importing the package runs check discovery, so the snapshot below holds the built-ins.
import app_codecheck.checks  # noqa: E402
from app_codecheck.checks.base import _CHECK_REGISTRY  # noqa: E402
from app_codecheck.utils.console import reset_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_check_registry():
  """
  Ensures that checks registered by a test do not leak into other tests.
  """
  original_registry = _CHECK_REGISTRY.copy()
  yield
  _CHECK_REGISTRY.clear()
  _CHECK_REGISTRY.update(original_registry)


@pytest.fixture(autouse=True)
def cleanup_console():
  """Ensures console is reset to stdout after every test."""
  reset_console()
  yield
  reset_console()


@pytest.fixture
def write_dump(tmp_path):
  """
  Returns a helper writing a PHP-Parser style JSON document to `tmp_path`.
  """

  def _write(nodes, name: str = "file.json") -> Path:
    target = tmp_path / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(nodes), encoding="utf-8")
    return target

  return _write
