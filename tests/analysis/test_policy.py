"""
Tests for Policy Construction and the Blacklist Table.

Verifies:
1.  Both authoring styles (list / mapping) normalize identically.
2.  Case-insensitive keys with preserved display casing.
3.  Rejection of unsupported container shapes, tolerance for bad entries.
4.  Alias derivation for namespaces, classes and constants.
5.  Per-file tables never mutate the shared policy.
"""

import logging

import pytest

from app_codecheck.analysis.policy import BlacklistTable, Policy, PolicyError, normalize_blacklist
from app_codecheck.enums import ErrorKind


def test_list_and_mapping_styles_are_equivalent():
  as_list = normalize_blacklist(["OC_API", "OCP\\IDb"])
  as_map = normalize_blacklist({"OC_API": "6.0.0", "OCP\\IDb": "8.0.0"})
  numeric_keys = normalize_blacklist({0: "OC_API", 1: "OCP\\IDb"})
  numeric_string_keys = normalize_blacklist({"0": "OC_API", "1": "OCP\\IDb"})

  assert as_list == as_map == numeric_keys == numeric_string_keys
  assert as_list == {"oc_api": "OC_API", "ocp\\idb": "OCP\\IDb"}


def test_duplicate_logical_entries_keep_first_spelling():
  result = normalize_blacklist(["Foo\\Bar", "FOO\\BAR", "foo\\bar"])
  assert result == {"foo\\bar": "Foo\\Bar"}


def test_leading_backslash_is_ignored():
  assert normalize_blacklist(["\\OC_API"]) == {"oc_api": "OC_API"}


def test_unsupported_shape_raises():
  with pytest.raises(PolicyError):
    normalize_blacklist("OC_API")
  with pytest.raises(PolicyError):
    Policy("Private", 42)


def test_invalid_entries_are_skipped_with_warning(caplog):
  with caplog.at_level(logging.WARNING):
    result = normalize_blacklist(["OC_API", 7, "", None])
  assert result == {"oc_api": "OC_API"}
  assert "Ignoring invalid blacklisted classes entry" in caplog.text


def test_none_means_empty():
  policy = Policy("Private")
  assert dict(policy.classes) == {}
  assert dict(policy.constants) == {}
  assert policy.check_equality_operators is False


def test_policy_is_read_only():
  policy = Policy("Private", ["OC_API"], ["OC_API::ADMIN_AUTH"], True)
  with pytest.raises(TypeError):
    policy.classes["oc_foo"] = "OC_Foo"  # type: ignore[index]
  with pytest.raises(AttributeError):
    policy.description = "Public"  # type: ignore[misc]


def test_policy_messages_cover_every_kind():
  policy = Policy("Private", ["OC_API"])
  assert set(policy.messages) == set(ErrorKind)
  assert policy.messages[ErrorKind.CLASS_NEW_FETCH_NOT_ALLOWED] == "Private class must not be instantiated"


def test_lookup_is_case_insensitive():
  table = Policy("Private", ["Foo\\Bar"], ["OCP\\Foo::BAR"]).new_table()
  for spelling in ("Foo\\Bar", "foo\\bar", "FOO\\BAR"):
    assert table.lookup_class(spelling) == "Foo\\Bar"
  assert table.lookup_constant("ocp\\foo", "bar") == "OCP\\Foo::BAR"
  assert table.lookup_constant("OCP\\Foo", "BAZ") is None
  assert table.lookup_constant("OCP\\Other", "BAR") is None


def test_namespace_alias_derivation():
  table = BlacklistTable({"ocp\\appframework\\iapi": "OCP\\AppFramework\\IApi"}, {})
  added = table.add_alias("OCP\\AppFramework", "OAF")

  assert added == 1
  assert table.lookup_class("OAF\\IApi") == "OCP\\AppFramework\\IApi"
  assert table.lookup_class("oaf\\iapi") == "OCP\\AppFramework\\IApi"


def test_class_alias_derivation_covers_the_imported_name_itself():
  table = BlacklistTable({"ocp\\appframework\\iapi": "OCP\\AppFramework\\IApi"}, {})
  table.add_alias("OCP\\AppFramework\\IApi", "IApi")
  assert table.lookup_class("IApi") == "OCP\\AppFramework\\IApi"


def test_prefix_must_end_at_a_namespace_boundary():
  table = BlacklistTable({"ocp\\appframeworkx\\iapi": "OCP\\AppFrameworkX\\IApi"}, {})
  assert table.add_alias("OCP\\AppFramework", "OAF") == 0
  assert table.lookup_class("OAF\\IApi") is None
  assert table.lookup_class("OAFX\\IApi") is None


def test_constant_alias_derivation_on_namespace_and_class():
  table = BlacklistTable({}, {"ocp\\api::admin_auth": "OCP\\API::ADMIN_AUTH"})

  table.add_alias("OCP", "P")
  table.add_alias("OCP\\API", "Api")

  assert table.lookup_constant("P\\API", "ADMIN_AUTH") == "OCP\\API::ADMIN_AUTH"
  assert table.lookup_constant("Api", "ADMIN_AUTH") == "OCP\\API::ADMIN_AUTH"


def test_aliases_chain_across_imports():
  """
  Scenario: An alias of an alias. Each derivation sees the previous one.
  Expectation: The second alias still reports the original entry.
  """
  table = BlacklistTable({"ocp\\appframework\\iapi": "OCP\\AppFramework\\IApi"}, {})
  table.add_alias("OCP\\AppFramework", "OAF")
  table.add_alias("OAF", "Second")

  assert table.lookup_class("Second\\IApi") == "OCP\\AppFramework\\IApi"


def test_single_import_does_not_chain_on_its_own_entries():
  """
  Scenario: The alias equals the imported namespace prefix plus more segments.
  Expectation: Derivation runs over a snapshot, so the new entry is not re-derived.
  """
  table = BlacklistTable({"a\\x": "A\\X"}, {})
  table.add_alias("A", "A\\A")
  assert set(table.classes) == {"a\\x", "a\\a\\x"}


def test_new_table_is_isolated_from_policy():
  policy = Policy("Private", ["OCP\\AppFramework\\IApi"])
  first = policy.new_table()
  first.add_alias("OCP\\AppFramework", "OAF")

  second = policy.new_table()
  assert second.lookup_class("OAF\\IApi") is None
  assert "oaf\\iapi" not in policy.classes
