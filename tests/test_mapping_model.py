"""Tests for decoding the mapping document."""

from __future__ import annotations

import pytest

from dataset_keyspace.errors import MappingFormatError
from dataset_keyspace.mapping import HashProjection, MappingSpec, SetProjection, TableMapping


class TestMappingSpec:
    """Test MappingSpec.from_dict."""

    def test_full_document(self) -> None:
        """Test decoding every projection field."""
        spec = MappingSpec.from_dict(
            {
                "tables": [
                    {
                        "table": "users",
                        "hashes": [
                            {"key": "users:${id}"},
                            {"key": "names", "field": "${id}", "value": "${name}"},
                        ],
                        "sets": [{"key": None, "member": "${id}"}],
                    },
                    {"table": "orders"},
                ]
            }
        )

        assert spec.tables == (
            TableMapping(
                table="users",
                hashes=(
                    HashProjection(key="users:${id}"),
                    HashProjection(key="names", field="${id}", value="${name}"),
                ),
                sets=(SetProjection(member="${id}"),),
            ),
            TableMapping(table="orders"),
        )

    def test_empty_strings_are_absent(self) -> None:
        """Test that empty strings take the defaults."""
        spec = MappingSpec.from_dict(
            {"tables": [{"table": "t", "hashes": [{"key": "", "field": "", "value": ""}]}]}
        )
        assert spec.tables[0].hashes == (HashProjection(),)

    def test_bare_entry_uses_defaults(self) -> None:
        """Test that a bare list entry is a projection with defaults."""
        spec = MappingSpec.from_dict({"tables": [{"table": "t", "sets": [None]}]})
        assert spec.tables[0].sets == (SetProjection(),)

    def test_find_returns_first_match(self) -> None:
        """Test that the first entry for a table wins."""
        spec = MappingSpec.from_dict(
            {
                "tables": [
                    {"table": "users", "sets": [{"key": "first"}]},
                    {"table": "users", "sets": [{"key": "second"}]},
                ]
            }
        )
        found = spec.find("users")
        assert found is not None
        assert found.sets[0].key == "first"
        assert spec.find("orders") is None

    @pytest.mark.parametrize(
        "document",
        [
            None,
            {},
            {"tables": {"users": {}}},
            {"tables": [{"hashes": []}]},
            {"tables": [{"table": 1}]},
            {"tables": [{"table": "t", "hashes": {"key": "x"}}]},
            {"tables": [{"table": "t", "hashes": ["x"]}]},
            {"tables": [{"table": "t", "hashes": [{"vaule": "${id}"}]}]},
            {"tables": [{"table": "t", "sets": [{"key": 5}]}]},
            {"tables": [{"table": "t", "lists": []}]},
        ],
    )
    def test_malformed_documents(self, document: object) -> None:
        """Test that malformed mapping documents are rejected."""
        with pytest.raises(MappingFormatError):
            MappingSpec.from_dict(document)
