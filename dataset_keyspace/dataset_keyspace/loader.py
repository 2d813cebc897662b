from __future__ import annotations

import logging
from pathlib import Path

from dataset_keyspace.io import read_dataset, read_mapping_file
from dataset_keyspace.mapping import KeyspaceAccumulator, MappingSpec, ProjectionEngine
from dataset_keyspace.mapping.engine import Dataset
from dataset_keyspace.sinks import KeyspaceSink


logger = logging.getLogger(__name__)


class KeyspaceLoader:
    """Projects a dataset through one mapping and writes the result to a sink.

    Nothing reaches the sink unless the whole dataset projects cleanly: the
    optional clear happens after projection, right before the first write.
    """

    def __init__(self, sink: KeyspaceSink, mapping: MappingSpec):
        self._sink = sink
        self._engine = ProjectionEngine(mapping)

    @classmethod
    def from_mapping_file(cls, sink: KeyspaceSink, mapping_path: Path) -> KeyspaceLoader:
        return cls(sink, read_mapping_file(mapping_path))

    @property
    def mapping(self) -> MappingSpec:
        return self._engine.mapping

    def load(self, dataset: Dataset, clean_before: bool = False) -> KeyspaceAccumulator:
        logger.info(
            "Projecting %d table(s) into keyspace (clean_before=%s)", len(dataset), clean_before
        )
        accumulator = self._engine.project(dataset)

        if clean_before:
            self._sink.clear_all()

        hashes = accumulator.hashes
        sets = accumulator.sets
        for key, fields in hashes.items():
            self._sink.write_fields(key, fields)
        for key, members in sets.items():
            self._sink.write_members(key, members)

        logger.info("Wrote %d hash(es) and %d set(s)", len(hashes), len(sets))
        return accumulator

    def load_file(self, dataset_path: Path, clean_before: bool = False) -> KeyspaceAccumulator:
        return self.load(read_dataset(dataset_path), clean_before=clean_before)
