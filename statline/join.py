"""Surname filter and inner joins between the people and batting tables."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

import polars as pl
import structlog

from .errors import require_columns
from .models import (
    PERFORMANCE_FRAME_SCHEMA,
    PERSON_FRAME_SCHEMA,
    PersonRecord,
    SeasonPerformanceRecord,
    as_frame,
)
from .transforms import BATTING_ALIASES, PEOPLE_ALIASES, SEASON_KEY, normalize_batting, normalize_people


logger = structlog.get_logger(__name__)

# Columns of the first-pass query: identity, season key and the counting
# stats that need no renaming.
SEASON_LINE_COLUMNS: List[str] = [
    "person_id",
    "birth_year",
    "last_name",
    "season_year",
    "team_id",
    "G",
    "AB",
    "R",
    "H",
    "HR",
    "RBI",
    "BB",
    "SO",
]

# Extra-base and sacrifice columns added by the second, keyed join.
EXTRA_BASE_COLUMNS: List[str] = ["dubs", "trips", "sac_flies"]

People = Union[pl.DataFrame, Sequence[PersonRecord]]
Performances = Union[pl.DataFrame, Sequence[SeasonPerformanceRecord]]


def _project(df: pl.DataFrame, columns: Optional[Sequence[str]], table: str) -> pl.DataFrame:
    if columns is None:
        return df
    aliases = {**PEOPLE_ALIASES, **BATTING_ALIASES}
    wanted = [aliases.get(c, c) for c in columns]
    require_columns(table, df.columns, wanted)
    return df.select(wanted)


def join_by_surname(
    persons: People,
    performances: Performances,
    surname: str,
    columns: Optional[Sequence[str]] = None,
) -> pl.DataFrame:
    """Inner join people named ``surname`` (exact match) to their batting rows.

    Rows come back grouped by person in the order the people table lists
    them, seasons ascending within a person. People without batting rows and
    batting rows without a person are dropped. An empty frame is a valid
    result and is only logged.
    """
    people = normalize_people(as_frame(persons, PERSON_FRAME_SCHEMA))
    batting = normalize_batting(as_frame(performances, PERFORMANCE_FRAME_SCHEMA))
    require_columns("persons", people.columns, ["person_id", "last_name"])
    require_columns("performances", batting.columns, ["person_id"])

    matched = people.filter(pl.col("last_name") == surname).with_row_index("__person_order")
    if matched.height == 0:
        logger.info("empty_result", stage="filter", surname=surname)

    joined = matched.join(batting, on="person_id", how="inner")
    if matched.height and joined.height == 0:
        logger.info("empty_result", stage="join", surname=surname, people=matched.height)

    order = ["__person_order"] + (["season_year"] if "season_year" in joined.columns else [])
    joined = joined.sort(order, maintain_order=True).drop("__person_order")
    return _project(joined, columns, "joined")


def join_on_season_key(
    intermediate: pl.DataFrame,
    performances: Performances,
    columns: Optional[Sequence[str]] = None,
) -> pl.DataFrame:
    """Add batting columns to an already joined frame on the full season key.

    Joining on ``(person_id, season_year, team_id)`` instead of ``person_id``
    keeps one output row per input row, so the second pass never multiplies
    seasons. Only columns the intermediate frame lacks are brought over.
    """
    batting = normalize_batting(as_frame(performances, PERFORMANCE_FRAME_SCHEMA))
    require_columns("intermediate", intermediate.columns, SEASON_KEY)
    require_columns("performances", batting.columns, SEASON_KEY)

    extra = [c for c in batting.columns if c not in intermediate.columns]
    joined = (
        intermediate.with_row_index("__row_order")
        .join(batting.select(SEASON_KEY + extra), on=SEASON_KEY, how="inner")
        .sort("__row_order")
        .drop("__row_order")
    )
    if intermediate.height and joined.height == 0:
        logger.info("empty_result", stage="season_key_join", rows=intermediate.height)
    return _project(joined, columns, "joined")


def season_lines(persons: People, performances: Performances, surname: str) -> pl.DataFrame:
    """Two-pass join: season lines first, then extra-base columns by season key.

    Person fields beyond the season line (``first_name``, ``weight``, ...)
    are carried through after the extra-base columns.
    """
    people = normalize_people(as_frame(persons, PERSON_FRAME_SCHEMA))
    carried = [c for c in people.columns if c not in SEASON_LINE_COLUMNS]
    lines = join_by_surname(people, performances, surname, columns=SEASON_LINE_COLUMNS + carried)
    return join_on_season_key(lines, performances, columns=SEASON_LINE_COLUMNS + EXTRA_BASE_COLUMNS + carried)
