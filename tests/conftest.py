"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import fakeredis
import pytest

from dataset_keyspace.mapping import KeyspaceAccumulator, MappingSpec
from dataset_keyspace.sinks import MemorySink


@pytest.fixture
def users_dataset() -> dict[str, list[dict[str, object]]]:
    """Two users sharing the same age."""
    return {
        "users": [
            {"id": 1, "name": "John", "age": 42},
            {"id": 2, "name": "Jane", "age": 42},
        ]
    }


@pytest.fixture
def users_mapping() -> MappingSpec:
    """One hash per user plus a set of user ids."""
    return MappingSpec.from_dict(
        {
            "tables": [
                {
                    "table": "users",
                    "hashes": [{"key": "users:${id}"}],
                    "sets": [{"key": None, "member": "${id}"}],
                }
            ]
        }
    )


@pytest.fixture
def accumulator() -> KeyspaceAccumulator:
    """Provide a fresh KeyspaceAccumulator instance for each test."""
    return KeyspaceAccumulator()


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def redis_client() -> fakeredis.FakeRedis:
    """In-memory Redis with string responses, as the real sink expects."""
    return fakeredis.FakeRedis(decode_responses=True)
