"""Error hierarchy raised while mapping a dataset into a keyspace."""

from __future__ import annotations

from collections.abc import Iterable


class MappingError(ValueError):
    """Base class for configuration and data errors that abort a load.

    The projection engine fills in ``table`` and ``row_index`` when the error
    escapes a row, so the message points at the faulty table and row.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.table: str | None = None
        self.row_index: int | None = None

    def locate(self, table: str, row_index: int | None = None) -> None:
        if self.table is None:
            self.table = table
            self.row_index = row_index

    def __str__(self) -> str:
        if self.table is None:
            return self.message
        if self.row_index is None:
            return f"{self.message} (table '{self.table}')"
        return f"{self.message} (table '{self.table}', row {self.row_index})"


class MappingFormatError(MappingError):
    """The mapping document does not have the expected shape."""


class DatasetFormatError(MappingError):
    """The dataset document does not have the expected shape."""


class UnmappedTableError(MappingError):
    def __init__(self, table: str) -> None:
        super().__init__(f"Could not find corresponding mapping for table: {table}")
        self.unmapped_table = table


class MissingColumnError(MappingError):
    def __init__(self, placeholder: str, template: str, columns: Iterable[str]) -> None:
        self.placeholder = placeholder
        self.template = template
        self.columns = list(columns)
        available = ", ".join(self.columns) or "<none>"
        super().__init__(
            f"Could not find value for placeholder '{placeholder}' in template "
            f"'{template}' among columns: {available}"
        )


class MalformedSelectorError(MappingError):
    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(
            "Value must either be empty or contain a single column placeholder, "
            f"but was: {selector}"
        )


class DuplicateFieldError(MappingError):
    def __init__(self, key: str, field: str, value: str) -> None:
        self.key = key
        self.field = field
        self.value = value
        super().__init__(
            "Duplicate field found in hash, please assure the mapping is correct: "
            f"{key}/{field} (value '{value}')"
        )


class DuplicateMemberError(MappingError):
    def __init__(self, key: str, member: str) -> None:
        self.key = key
        self.member = member
        super().__init__(
            "Duplicate member found in set, please assure the mapping is correct: "
            f"{key}/{member}"
        )
