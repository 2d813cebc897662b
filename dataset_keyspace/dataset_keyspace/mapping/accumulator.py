"""Accumulator for hash fields and set members produced by one load."""

from __future__ import annotations

from dataset_keyspace.errors import DuplicateFieldError, DuplicateMemberError


class KeyspaceAccumulator:
    """Collects hash and set entries in first-insertion order, refusing to overwrite."""

    def __init__(self) -> None:
        self._hashes: dict[str, dict[str, str]] = {}
        self._sets: dict[str, list[str]] = {}
        self._seen: dict[str, set[str]] = {}

    def add_field(self, key: str, field: str, value: str) -> None:
        bucket = self._hashes.setdefault(key, {})
        if field in bucket:
            raise DuplicateFieldError(key, field, value)
        bucket[field] = value

    def add_member(self, key: str, member: str) -> None:
        if key not in self._sets:
            self._sets[key] = []
            self._seen[key] = set()
        if member in self._seen[key]:
            raise DuplicateMemberError(key, member)
        self._sets[key].append(member)
        self._seen[key].add(member)

    @property
    def hashes(self) -> dict[str, dict[str, str]]:
        return {key: dict(fields) for key, fields in self._hashes.items()}

    @property
    def sets(self) -> dict[str, list[str]]:
        return {key: list(members) for key, members in self._sets.items()}

    def __len__(self) -> int:
        return len(self._hashes) + len(self._sets)

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {"hashes": self.hashes, "sets": self.sets}
