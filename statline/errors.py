from __future__ import annotations

from enum import Enum
from typing import Iterable, List


class StatlineError(Exception):
    """Base class for structural failures that abort a whole call."""


class MissingColumnError(StatlineError):
    def __init__(self, table: str, columns: Iterable[str]) -> None:
        self.table = table
        self.columns: List[str] = list(columns)
        super().__init__(f"{table} is missing required columns: {', '.join(self.columns)}")


class MalformedInputError(StatlineError):
    def __init__(self, table: str, detail: str) -> None:
        self.table = table
        self.detail = detail
        super().__init__(f"{table} failed validation: {detail}")


class IssueKind(str, Enum):
    """Row-level problems recorded in ``row_issues``; none of them abort a batch."""

    DIVIDE_BY_ZERO = "divide_by_zero"
    MISSING_VALUE = "missing_value"
    INVARIANT_VIOLATION = "invariant_violation"
    UNLABELED_CATEGORY = "unlabeled_category"


def require_columns(table: str, columns: Iterable[str], required: Iterable[str]) -> None:
    present = set(columns)
    missing = [c for c in required if c not in present]
    if missing:
        raise MissingColumnError(table, missing)
