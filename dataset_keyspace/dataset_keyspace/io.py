from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd
import yaml

from dataset_keyspace.errors import DatasetFormatError, MappingFormatError
from dataset_keyspace.mapping import MappingSpec
from dataset_keyspace.mapping.engine import Row


logger = logging.getLogger(__name__)

TABULAR_EXTENSIONS: tuple[str, ...] = (".csv", ".csv.gz", ".parquet")


def read_mapping_file(path: Path) -> MappingSpec:
    logger.info("Loading dataset -> keyspace mapping from: %s", path)
    try:
        document = _read_document(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise MappingFormatError(f"Could not read mapping file {path}: {exc}") from exc
    return MappingSpec.from_dict(document)


def read_dataset(path: Path) -> dict[str, list[Row]]:
    """Decode a dataset file, or a folder of tabular files, into table -> rows."""
    logger.info("Loading dataset: %s", path)
    if path.is_dir():
        return read_tabular_folder(path)

    if _has_extension(path, TABULAR_EXTENSIONS):
        return {table_name_for_file(path): read_table_file(path)}

    try:
        document = _read_document(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise DatasetFormatError(f"Could not read dataset file {path}: {exc}") from exc
    return dataset_from_document(document, source=str(path))


def dataset_from_document(document: object, source: str = "<document>") -> dict[str, list[Row]]:
    # An empty YAML document decodes to None: a dataset without tables.
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DatasetFormatError(f"Dataset {source} must map table names to row sequences")

    dataset: dict[str, list[Row]] = {}
    for table, rows in document.items():
        if rows is None:
            rows = []
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise DatasetFormatError(
                f"Table '{table}' in dataset {source} must be a sequence of row mappings"
            )
        dataset[str(table)] = [
            {str(column): value for column, value in row.items() if value is not None}
            for row in rows
        ]
    return dataset


def discover_table_files(folder: Path) -> list[Path]:
    files: list[Path] = []
    for candidate in sorted(folder.rglob("*")):
        if candidate.is_file() and _has_extension(candidate, TABULAR_EXTENSIONS):
            files.append(candidate)
    return files


def read_tabular_folder(folder: Path) -> dict[str, list[Row]]:
    dataset: dict[str, list[Row]] = {}
    for path in discover_table_files(folder):
        table = table_name_for_file(path)
        if table in dataset:
            raise DatasetFormatError(
                f"Table '{table}' is defined by more than one file in {folder}"
            )
        dataset[table] = read_table_file(path)
    return dataset


def read_table_file(path: Path) -> list[Row]:
    if not _has_extension(path, TABULAR_EXTENSIONS):
        raise DatasetFormatError(f"Unsupported table file format: {path}")

    # pandas EmptyDataError/ParserError and pyarrow ArrowInvalid are ValueErrors.
    try:
        if path.suffix == ".parquet":
            df = pd.read_parquet(path)
        else:
            # Cells are kept as written; rendering to strings happens later anyway.
            df = pd.read_csv(path, dtype=str)
    except (OSError, ValueError) as exc:
        raise DatasetFormatError(f"Could not read dataset file {path}: {exc}") from exc
    return dataframe_to_rows(df)


def dataframe_to_rows(df: pd.DataFrame) -> list[Row]:
    """Convert a DataFrame to rows, dropping missing cells so they count as absent."""
    return [
        {str(column): value for column, value in record.items() if not _is_missing(value)}
        for record in df.to_dict(orient="records")
    ]


def table_name_for_file(path: Path) -> str:
    name = path.name
    for suffix in TABULAR_EXTENSIONS:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return path.stem


def write_keyspace_export(document: dict[str, object], output_file: Path) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")


def _read_document(path: Path) -> object:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _is_missing(value: object) -> bool:
    # List-like cells (e.g. parquet list columns) are never treated as missing.
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _has_extension(path: Path, extensions: tuple[str, ...]) -> bool:
    name = path.name.lower()
    return any(name.endswith(extension) for extension in extensions)
