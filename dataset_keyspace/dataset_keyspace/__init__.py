"""Load relational-style datasets into a Redis keyspace through a declarative mapping."""

from dataset_keyspace.loader import KeyspaceLoader
from dataset_keyspace.mapping import KeyspaceAccumulator, MappingSpec, ProjectionEngine


__all__ = ["KeyspaceAccumulator", "KeyspaceLoader", "MappingSpec", "ProjectionEngine"]
