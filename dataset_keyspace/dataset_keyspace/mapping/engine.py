"""Projection of dataset rows into hash and set entries."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from dataset_keyspace.errors import MappingError, UnmappedTableError
from dataset_keyspace.mapping.accumulator import KeyspaceAccumulator
from dataset_keyspace.mapping.model import MappingSpec, TableMapping
from dataset_keyspace.mapping.placeholders import (
    render_value,
    resolve_single_column,
    resolve_template,
)


logger = logging.getLogger(__name__)

Row = Mapping[str, object]
Dataset = Mapping[str, Sequence[Row]]


class ProjectionEngine:
    """Evaluates a :class:`MappingSpec` against every row of a dataset.

    Accumulation is global across all tables of one dataset, so a key built
    by two tables lands in the same bucket and collisions between them are
    detected as well.
    """

    def __init__(self, mapping: MappingSpec) -> None:
        self._mapping = mapping

    @property
    def mapping(self) -> MappingSpec:
        return self._mapping

    def project(self, dataset: Dataset) -> KeyspaceAccumulator:
        accumulator = KeyspaceAccumulator()
        for table, rows in dataset.items():
            table_mapping = self._mapping.find(table)
            if table_mapping is None:
                raise UnmappedTableError(table)
            self._project_table(table_mapping, rows, accumulator)
        return accumulator

    def _project_table(
        self, table_mapping: TableMapping, rows: Sequence[Row], accumulator: KeyspaceAccumulator
    ) -> None:
        table = table_mapping.table
        logger.debug("Projecting %d row(s) of table '%s'", len(rows), table)

        try:
            hash_columns = [resolve_single_column(h.value) for h in table_mapping.hashes]
            set_columns = [resolve_single_column(s.member) for s in table_mapping.sets]
        except MappingError as exc:
            exc.locate(table)
            raise

        for row_index, row in enumerate(rows):
            try:
                for projection, column in zip(table_mapping.hashes, hash_columns):
                    key = resolve_template(projection.key or table, row)
                    field = (
                        resolve_template(projection.field, row)
                        if projection.field is not None
                        else None
                    )
                    for name, value in _selected_values(row, column):
                        accumulator.add_field(
                            key, name if field is None else field, render_value(value)
                        )

                for projection, column in zip(table_mapping.sets, set_columns):
                    key = resolve_template(projection.key or table, row)
                    for _, value in _selected_values(row, column):
                        accumulator.add_member(key, render_value(value))
            except MappingError as exc:
                exc.locate(table, row_index)
                raise


def _selected_values(row: Row, column: str | None) -> list[tuple[str, object]]:
    # No selector means every column; a selected column missing from a sparse
    # row yields nothing.
    if column is None:
        return [(name, value) for name, value in row.items() if value is not None]
    value = row.get(column)
    if value is None:
        return []
    return [(column, value)]


def project(dataset: Dataset, mapping: MappingSpec) -> KeyspaceAccumulator:
    """Shortcut for ``ProjectionEngine(mapping).project(dataset)``."""
    return ProjectionEngine(mapping).project(dataset)
