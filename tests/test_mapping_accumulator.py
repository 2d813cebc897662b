"""Tests for the KeyspaceAccumulator."""

from __future__ import annotations

import pytest

from dataset_keyspace.errors import DuplicateFieldError, DuplicateMemberError
from dataset_keyspace.mapping import KeyspaceAccumulator


class TestKeyspaceAccumulator:
    """Test the duplicate-detecting hash and set buckets."""

    def test_add_fields(self, accumulator: KeyspaceAccumulator) -> None:
        """Test adding fields under several hash keys."""
        accumulator.add_field("users:1", "id", "1")
        accumulator.add_field("users:1", "name", "John")
        accumulator.add_field("users:2", "id", "2")

        assert accumulator.hashes == {
            "users:1": {"id": "1", "name": "John"},
            "users:2": {"id": "2"},
        }

    def test_duplicate_field(self, accumulator: KeyspaceAccumulator) -> None:
        """Test that a repeated field fails without overwriting the first value."""
        accumulator.add_field("users", "name", "John")

        with pytest.raises(DuplicateFieldError) as excinfo:
            accumulator.add_field("users", "name", "Jane")

        assert excinfo.value.key == "users"
        assert excinfo.value.field == "name"
        assert "users/name" in str(excinfo.value)
        # The first value is never overwritten.
        assert accumulator.hashes["users"] == {"name": "John"}

    def test_same_field_under_different_keys(self, accumulator: KeyspaceAccumulator) -> None:
        """Test that the same field name is allowed under different keys."""
        accumulator.add_field("users:1", "name", "John")
        accumulator.add_field("users:2", "name", "John")

        assert len(accumulator.hashes) == 2

    def test_add_members_preserves_order(self, accumulator: KeyspaceAccumulator) -> None:
        """Test that set members keep their insertion order."""
        accumulator.add_member("users", "2")
        accumulator.add_member("users", "1")
        accumulator.add_member("users", "3")

        assert accumulator.sets == {"users": ["2", "1", "3"]}

    def test_duplicate_member(self, accumulator: KeyspaceAccumulator) -> None:
        """Test that a repeated member fails."""
        accumulator.add_member("flags", "true")

        with pytest.raises(DuplicateMemberError) as excinfo:
            accumulator.add_member("flags", "true")

        assert excinfo.value.member == "true"
        assert "flags/true" in str(excinfo.value)

    def test_key_insertion_order(self, accumulator: KeyspaceAccumulator) -> None:
        """Test that keys are listed in first-insertion order."""
        accumulator.add_field("b", "f", "1")
        accumulator.add_field("a", "f", "1")
        accumulator.add_member("z", "1")
        accumulator.add_member("y", "1")

        assert list(accumulator.hashes) == ["b", "a"]
        assert list(accumulator.sets) == ["z", "y"]
        assert len(accumulator) == 4

    def test_views_are_copies(self, accumulator: KeyspaceAccumulator) -> None:
        """Test that mutating the returned views does not change the accumulator."""
        accumulator.add_field("k", "f", "v")
        accumulator.hashes["k"]["f"] = "changed"

        assert accumulator.to_dict() == {"hashes": {"k": {"f": "v"}}, "sets": {}}
