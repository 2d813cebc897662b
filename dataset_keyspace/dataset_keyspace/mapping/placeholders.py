"""Resolution of ``${column}`` placeholders against a single row."""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta

from dataset_keyspace.errors import MalformedSelectorError, MissingColumnError


# Matches ${column} where column is made of letters, digits, '@', '_' or '-'.
PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z0-9@_-]+)\}")


def render_value(value: object) -> str:
    """Render a row value to the display string stored in the keyspace."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, datetime):
        text = value.isoformat()
        if value.utcoffset() == timedelta(0):
            text = text[: -len("+00:00")] + "Z"
        return text
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def resolve_template(template: str, row: Mapping[str, object]) -> str:
    """Replace every ``${column}`` in *template* with the row's rendered value.

    Literal text is left untouched, so a template without placeholders is
    returned as is. A placeholder naming a column that is absent from the row
    (or holds no value) raises :class:`MissingColumnError`.
    """
    replacements: dict[str, str] = {}
    for match in PLACEHOLDER_RE.finditer(template):
        column = match.group(1)
        if column in replacements:
            continue
        value = row.get(column)
        if value is None:
            raise MissingColumnError(column, template, _present_columns(row))
        replacements[column] = render_value(value)

    if not replacements:
        return template
    return PLACEHOLDER_RE.sub(lambda match: replacements[match.group(1)], template)


def resolve_single_column(selector: str | None) -> str | None:
    """Return the column named by a bare ``${column}`` selector.

    ``None`` (or an empty selector) means "all columns" and is returned as
    ``None``. Anything other than exactly one placeholder with no surrounding
    text raises :class:`MalformedSelectorError`.
    """
    if not selector:
        return None
    match = PLACEHOLDER_RE.fullmatch(selector)
    if match is None:
        raise MalformedSelectorError(selector)
    return match.group(1)


def _present_columns(row: Mapping[str, object]) -> list[str]:
    return [column for column, value in row.items() if value is not None]
