"""Mapping infrastructure for projecting tables into hashes and sets."""

from dataset_keyspace.mapping.accumulator import KeyspaceAccumulator
from dataset_keyspace.mapping.engine import ProjectionEngine, project
from dataset_keyspace.mapping.model import HashProjection, MappingSpec, SetProjection, TableMapping
from dataset_keyspace.mapping.placeholders import resolve_single_column, resolve_template


__all__ = [
    "HashProjection",
    "KeyspaceAccumulator",
    "MappingSpec",
    "ProjectionEngine",
    "SetProjection",
    "TableMapping",
    "project",
    "resolve_single_column",
    "resolve_template",
]
