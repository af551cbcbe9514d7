"""Tests for the variable store."""

import pytest

from smallsh import CapacityExceededError, InvalidBindingError, VariableStore


class TestStoreAndLookup:
    """Test storing and looking up bindings."""

    def test_store_then_lookup(self):
        env = VariableStore()
        env.store("GREETING", "hello world")
        assert env.lookup("GREETING") == "hello world"

    def test_lookup_unbound_is_empty(self):
        env = VariableStore()
        assert env.lookup("NEVER_SET") == ""

    def test_store_updates_in_place(self):
        env = VariableStore()
        env.store("A", "1")
        env.store("B", "2")
        env.store("A", "3")
        assert list(env) == ["A", "B"]
        assert env.lookup("A") == "3"

    def test_special_keys_are_accepted(self):
        env = VariableStore()
        env.store("$", "1234")
        env.store("?", "0")
        env.store("1", "first")
        assert env.lookup("$") == "1234"
        assert env.lookup("1") == "first"

    def test_none_value_stores_empty(self):
        env = VariableStore()
        env.store("X", None)
        assert "X" in env
        assert env.lookup("X") == ""

    def test_item_assignment_goes_through_store(self):
        env = VariableStore(max_variables=1)
        env["A"] = "1"
        with pytest.raises(CapacityExceededError):
            env["B"] = "2"


class TestStoreErrors:
    """Test store failures."""

    def test_capacity_exceeded_for_new_name(self):
        env = VariableStore(max_variables=2)
        env.store("A", "1")
        env.store("B", "2")
        with pytest.raises(CapacityExceededError):
            env.store("C", "3")
        assert "C" not in env

    def test_full_table_still_updates_existing(self):
        env = VariableStore(max_variables=1)
        env.store("A", "1")
        env.store("A", "2")
        assert env.lookup("A") == "2"

    def test_empty_name_is_invalid(self):
        env = VariableStore()
        with pytest.raises(InvalidBindingError):
            env.store("", "x")

    def test_non_string_value_is_invalid(self):
        env = VariableStore()
        with pytest.raises(InvalidBindingError):
            env.store("N", 42)


class TestExport:
    """Test export flags and the child environment."""

    def test_export_existing(self):
        env = VariableStore()
        env.store("FOO", "bar")
        assert not env.is_exported("FOO")
        env.export("FOO")
        assert env.is_exported("FOO")
        assert env.lookup("FOO") == "bar"

    def test_export_creates_empty_binding(self):
        env = VariableStore()
        env.export("NEWVAR")
        assert "NEWVAR" in env
        assert env.lookup("NEWVAR") == ""
        assert env.is_exported("NEWVAR")

    def test_export_on_full_table_fails(self):
        env = VariableStore(max_variables=1)
        env.store("A", "1")
        with pytest.raises(CapacityExceededError):
            env.export("B")

    def test_load_from_environment_marks_exported(self):
        env = VariableStore()
        env.load_from_environment([("HOME", "/home/me"), ("PATH", "/bin")])
        assert env.is_exported("HOME")
        assert env.is_exported("PATH")

    def test_materialize_only_exported_in_table_order(self):
        env = VariableStore()
        env.load_from_environment([("HOME", "/home/me")])
        env.store("LOCAL", "x")
        env.store("LATER", "y")
        env.export("LATER")
        assert env.materialize_environment() == ["HOME=/home/me", "LATER=y"]

    def test_list_reports_flags_in_table_order(self):
        env = VariableStore()
        env.store("B", "2")
        env.export("A")
        bindings = env.list()
        assert [(b.name, b.value, b.exported) for b in bindings] == [
            ("B", "2", False),
            ("A", "", True),
        ]
