"""In-memory model of the table -> hash/set mapping document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from dataset_keyspace.errors import MappingFormatError


@dataclass(frozen=True)
class HashProjection:
    """Produces ``key -> {field: value}`` entries from one row.

    ``key`` defaults to the table name, ``field`` to the source column name and
    ``value`` (a single ``${column}`` selector) to every column of the row.
    """

    key: str | None = None
    field: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class SetProjection:
    """Produces ``key -> {member}`` entries from one row."""

    key: str | None = None
    member: str | None = None


@dataclass(frozen=True)
class TableMapping:
    table: str
    hashes: tuple[HashProjection, ...] = ()
    sets: tuple[SetProjection, ...] = ()


@dataclass(frozen=True)
class MappingSpec:
    tables: tuple[TableMapping, ...] = ()

    def find(self, table: str) -> TableMapping | None:
        """Return the first mapping entry for *table*, if any."""
        for entry in self.tables:
            if entry.table == table:
                return entry
        return None

    @classmethod
    def from_dict(cls, document: object) -> MappingSpec:
        if not isinstance(document, Mapping) or not isinstance(document.get("tables"), list):
            raise MappingFormatError("Mapping document must contain a 'tables' sequence")
        return cls(tables=tuple(_table_from_dict(raw) for raw in document["tables"]))


_HASH_KEYS = frozenset({"key", "field", "value"})
_SET_KEYS = frozenset({"key", "member"})


def _table_from_dict(raw: object) -> TableMapping:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("table"), str):
        raise MappingFormatError(f"Mapping table entry must have a string 'table': {raw!r}")

    table = raw["table"]
    unknown = set(raw) - {"table", "hashes", "sets"}
    if unknown:
        raise MappingFormatError(
            f"Unknown keys in mapping for table '{table}': {', '.join(sorted(unknown))}"
        )

    hashes = tuple(
        HashProjection(**_projection_fields(item, _HASH_KEYS, table, "hashes"))
        for item in _sequence(raw.get("hashes"), table, "hashes")
    )
    sets = tuple(
        SetProjection(**_projection_fields(item, _SET_KEYS, table, "sets"))
        for item in _sequence(raw.get("sets"), table, "sets")
    )
    return TableMapping(table=table, hashes=hashes, sets=sets)


def _sequence(value: object, table: str, section: str) -> list[object]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MappingFormatError(f"'{section}' of table '{table}' must be a sequence")
    return value


def _projection_fields(
    item: object, allowed: frozenset[str], table: str, section: str
) -> dict[str, str | None]:
    # A bare "- " entry in YAML decodes to None: every field takes its default.
    if item is None:
        return {}
    if not isinstance(item, Mapping):
        raise MappingFormatError(f"Entry in '{section}' of table '{table}' must be a mapping")

    unknown = set(item) - allowed
    if unknown:
        raise MappingFormatError(
            f"Unknown keys in '{section}' of table '{table}': {', '.join(sorted(unknown))}"
        )

    fields: dict[str, str | None] = {}
    for name in allowed:
        value = item.get(name)
        if value is not None and not isinstance(value, str):
            raise MappingFormatError(
                f"'{section}.{name}' of table '{table}' must be a string, got {value!r}"
            )
        # Empty means absent, so the default applies.
        fields[name] = value or None
    return fields
