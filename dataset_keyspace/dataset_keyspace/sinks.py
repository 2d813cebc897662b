from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from redis import Redis


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 50


class KeyspaceSink(Protocol):
    def clear_all(self) -> None: ...

    def write_fields(self, key: str, fields: Mapping[str, str]) -> None: ...

    def write_members(self, key: str, members: Iterable[str]) -> None: ...


class RedisSink:
    """Writes hashes with HSET and sets with SADD through a redis-py client."""

    def __init__(
        self, client: Redis, chunk_size: int = DEFAULT_CHUNK_SIZE, owns_client: bool = False
    ):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._client = client
        self._chunk_size = chunk_size
        self._owns_client = owns_client

    @classmethod
    def from_url(cls, url: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> RedisSink:
        client = Redis.from_url(url, decode_responses=True)
        return cls(client, chunk_size=chunk_size, owns_client=True)

    def __enter__(self) -> RedisSink:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def clear_all(self) -> None:
        logger.debug("FLUSHDB")
        self._client.flushdb()

    def write_fields(self, key: str, fields: Mapping[str, str]) -> None:
        if not fields:
            return
        logger.debug("HSET %s (%d field(s))", key, len(fields))
        self._client.hset(key, mapping=dict(fields))

    def write_members(self, key: str, members: Iterable[str]) -> None:
        members = list(members)
        logger.debug("SADD %s (%d member(s))", key, len(members))
        for start in range(0, len(members), self._chunk_size):
            self._client.sadd(key, *members[start : start + self._chunk_size])


class MemorySink:
    """Dict-backed sink with the same overwrite/union semantics as Redis."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        # Members keep first-write order; dict keys act as an ordered set.
        self.sets: dict[str, dict[str, None]] = {}
        self.clear_count = 0

    def clear_all(self) -> None:
        self.hashes.clear()
        self.sets.clear()
        self.clear_count += 1

    def write_fields(self, key: str, fields: Mapping[str, str]) -> None:
        self.hashes.setdefault(key, {}).update(fields)

    def write_members(self, key: str, members: Iterable[str]) -> None:
        self.sets.setdefault(key, {}).update(dict.fromkeys(members))

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {
            "hashes": {key: dict(fields) for key, fields in self.hashes.items()},
            "sets": {key: list(members) for key, members in self.sets.items()},
        }
