from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from dataset_keyspace.config import LoaderConfig
from dataset_keyspace.errors import MappingError
from dataset_keyspace.io import read_dataset, read_mapping_file, write_keyspace_export
from dataset_keyspace.loader import KeyspaceLoader
from dataset_keyspace.mapping import KeyspaceAccumulator, MappingSpec
from dataset_keyspace.mapping.engine import Dataset
from dataset_keyspace.sinks import KeyspaceSink, MemorySink, RedisSink


def build_parser(config: LoaderConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dataset-keyspace",
        description="Load a table/rows dataset into Redis hashes and sets using a mapping file.",
    )
    parser.add_argument(
        "dataset_path",
        type=Path,
        help="Dataset YAML/JSON file, or a folder of CSV(.gz)/Parquet files (one table each).",
    )
    parser.add_argument(
        "--mapping",
        type=Path,
        required=True,
        metavar="PATH",
        help="YAML mapping of tables to hash and set projections.",
    )
    parser.add_argument(
        "--redis-url",
        default=config.redis_url,
        help=f"Redis connection URL (default: {config.redis_url}).",
    )
    parser.add_argument(
        "--clean-before",
        action="store_true",
        default=config.clean_before,
        help="Flush the target database before writing.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Project the dataset without connecting to Redis.",
    )
    parser.add_argument(
        "--export",
        type=Path,
        default=None,
        metavar="PATH",
        help="Optional path to write the projected hashes and sets as JSON.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    config = LoaderConfig.from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    dataset_path: Path = args.dataset_path
    mapping_path: Path = args.mapping
    export_path: Path | None = args.export

    if not dataset_path.exists():
        parser.error(f"Dataset not found: {dataset_path}")
    if not mapping_path.exists():
        parser.error(f"Mapping file not found: {mapping_path}")

    try:
        mapping = read_mapping_file(mapping_path)
        dataset = read_dataset(dataset_path)

        if args.dry_run:
            accumulator = _load(MemorySink(), mapping, dataset, args.clean_before)
        else:
            with RedisSink.from_url(args.redis_url, chunk_size=config.chunk_size) as sink:
                accumulator = _load(sink, mapping, dataset, args.clean_before)
    except MappingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    target = "dry run" if args.dry_run else args.redis_url
    print(
        f"Loaded {dataset_path} -> {target}: "
        f"{len(accumulator.hashes)} hash(es), {len(accumulator.sets)} set(s)."
    )

    if export_path is not None:
        write_keyspace_export(accumulator.to_dict(), export_path)
        print(f"Keyspace written to: {export_path}")

    return 0


def _load(
    sink: KeyspaceSink, mapping: MappingSpec, dataset: Dataset, clean_before: bool
) -> KeyspaceAccumulator:
    return KeyspaceLoader(sink, mapping).load(dataset, clean_before=clean_before)


if __name__ == "__main__":
    raise SystemExit(main())
