"""
Tests for the CLI 'check' and 'list-checks' Commands.

Verifies that:
1.  Arguments are forwarded to the handler.
2.  Table mode renders findings and returns 1 on violations, 0 when clean.
3.  JSON mode prints a machine readable report, with logs kept on stderr.
4.  Missing paths and unknown checks fail cleanly.
"""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from app_codecheck.cli.__main__ import main
from app_codecheck.utils.console import set_console


def attrs(line):
  return {"startLine": line, "endLine": line}


def new_stmt(name, line):
  return {
    "nodeType": "Stmt_Expression",
    "expr": {
      "nodeType": "Expr_New",
      "class": {"nodeType": "Name", "name": name, "attributes": attrs(line)},
      "args": [],
      "attributes": attrs(line),
    },
    "attributes": attrs(line),
  }


def loose_compare(line):
  return {
    "nodeType": "Stmt_Expression",
    "expr": {
      "nodeType": "Expr_BinaryOp_Equal",
      "left": {"nodeType": "Expr_Variable", "name": "a", "attributes": attrs(line)},
      "right": {"nodeType": "Scalar_LNumber", "value": 1, "attributes": attrs(line)},
      "attributes": attrs(line),
    },
    "attributes": attrs(line),
  }


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
  """Runs every command outside any configured project."""
  monkeypatch.chdir(tmp_path)


@pytest.fixture
def recorder():
  capture = Console(record=True, file=io.StringIO(), width=200)
  set_console(capture)
  return capture


@patch("app_codecheck.cli.commands.handle_check")
def test_check_arguments_forwarded(mock_handle):
  mock_handle.return_value = 0

  ret = main(["check", "lib/", "--checker", "private", "--checker", "deprecation", "--no-strong-comparison", "--json"])

  assert ret == 0
  mock_handle.assert_called_once_with(Path("lib/"), ["private", "deprecation"], False, True)


@patch("app_codecheck.cli.commands.handle_check")
def test_check_defaults(mock_handle):
  mock_handle.return_value = 0
  main(["check", "file.json"])
  mock_handle.assert_called_once_with(Path("file.json"), None, None, False)


def test_check_table_with_violations(write_dump, recorder):
  path = write_dump([new_stmt("OC_API", 5), loose_compare(9)])

  ret = main(["check", str(path)])

  output = recorder.export_text()
  assert ret == 1
  assert "CLASS_NEW_FETCH_NOT_ALLOWED" in output
  assert "private/deprecated class must not be instantiated" in output
  assert "OP_OPERATOR_USAGE_DISCOURAGED" in output
  assert "Findings:       2" in output


def test_check_clean_file(write_dump, recorder):
  path = write_dump([new_stmt("OCP\\IDBConnection", 3), loose_compare(4)])

  ret = main(["check", str(path), "--checker", "private"])

  assert ret == 0
  assert "No policy violations found" in recorder.export_text()


def test_strong_comparison_flag_overrides_checks(write_dump, recorder):
  path = write_dump([loose_compare(4)])

  assert main(["check", str(path), "--checker", "private", "--strong-comparison"]) == 1
  assert main(["check", str(path), "--no-strong-comparison"]) == 0


def test_check_json_report(write_dump, recorder, capsys):
  path = write_dump([new_stmt("OC_API", 5)])

  ret = main(["check", str(path), "--checker", "private", "--json"])

  assert ret == 1
  report = json.loads(capsys.readouterr().out)
  assert report == [
    {
      "path": str(path),
      "success": True,
      "errors": [],
      "diagnostics": [
        {
          "token": "OC_API",
          "kind": "CLASS_NEW_FETCH_NOT_ALLOWED",
          "code": 1004,
          "line": 5,
          "reason": "private class must not be instantiated",
          "symbol": "OC_API",
        }
      ],
    }
  ]


def test_check_unreadable_dump_fails(tmp_path, recorder):
  broken = tmp_path / "broken.json"
  broken.write_text("[1, 2", encoding="utf-8")

  assert main(["check", str(broken)]) == 1
  assert "Failed to load broken.json" in recorder.export_text()


def test_check_json_stdout_survives_load_errors(tmp_path, write_dump, capsys):
  """
  Scenario: A folder holds one valid dump and one truncated dump, checked with --json.
  Expectation: stdout is a parseable report; the load error is logged to stderr only.
  """
  folder = tmp_path / "dumps"
  write_dump([new_stmt("OC_API", 5)], name="dumps/good.json")
  (folder / "broken.json").write_text("[1, 2", encoding="utf-8")

  ret = main(["check", str(folder), "--checker", "private", "--json"])

  captured = capsys.readouterr()
  report = json.loads(captured.out)
  assert ret == 1
  assert [Path(r["path"]).name for r in report] == ["broken.json", "good.json"]
  assert report[0]["success"] is False
  assert report[1]["diagnostics"][0]["kind"] == "CLASS_NEW_FETCH_NOT_ALLOWED"
  assert "Failed to load broken.json" in captured.err
  assert "Failed to load" not in captured.out


def test_check_missing_path(tmp_path, recorder):
  ret = main(["check", str(tmp_path / "nowhere")])

  assert ret == 1
  assert "Path not found" in recorder.export_text()


def test_check_unknown_checker(write_dump, recorder):
  path = write_dump([])

  ret = main(["check", str(path), "--checker", "typo"])

  assert ret == 1
  assert "Invalid configuration" in recorder.export_text()


def test_list_checks(recorder):
  assert main(["list-checks"]) == 0

  output = recorder.export_text()
  for name in ("private", "deprecation", "strong-comparison"):
    assert name in output


def test_version_flag(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert "0.1.0" in capsys.readouterr().out
