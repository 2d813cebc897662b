"""Loader configuration shared by the CLI and library callers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dataset_keyspace.sinks import DEFAULT_CHUNK_SIZE


DEFAULT_REDIS_URL = "redis://localhost:6379/0"

REDIS_URL_ENV = "DATASET_KEYSPACE_REDIS_URL"
CLEAN_BEFORE_ENV = "DATASET_KEYSPACE_CLEAN_BEFORE"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class LoaderConfig:
    redis_url: str = DEFAULT_REDIS_URL
    clean_before: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LoaderConfig:
        env = os.environ if environ is None else environ
        return cls(
            redis_url=env.get(REDIS_URL_ENV) or DEFAULT_REDIS_URL,
            clean_before=env.get(CLEAN_BEFORE_ENV, "").strip().lower() in _TRUTHY,
        )
