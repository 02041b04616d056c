"""Record models for the two source tables.

Tables travel through the pipeline as polars frames; the models exist for
callers that hold plain records (fixtures, API payloads) and for a typed
description of the columns each table carries.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

import polars as pl
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


PERSON_FRAME_SCHEMA: Dict[str, Any] = {
    "person_id": pl.Utf8,
    "birth_year": pl.Int64,
    "first_name": pl.Utf8,
    "last_name": pl.Utf8,
    "weight": pl.Float64,
    "height": pl.Float64,
    "bats": pl.Utf8,
    "throws": pl.Utf8,
    "retro_id": pl.Utf8,
    "bbref_id": pl.Utf8,
}

COUNTING_STATS = ["G", "AB", "R", "H", "HR", "RBI", "BB", "SO", "dubs", "trips", "sac_flies"]

PERFORMANCE_FRAME_SCHEMA: Dict[str, Any] = {
    "person_id": pl.Utf8,
    "season_year": pl.Int64,
    "team_id": pl.Utf8,
    **{stat: pl.Int64 for stat in COUNTING_STATS},
}


class PersonRecord(BaseModel):
    """One row of the biographical table."""

    person_id: str = Field(..., min_length=1)
    birth_year: Optional[int] = None
    first_name: str = ""
    last_name: str
    weight: Optional[float] = None
    height: Optional[float] = None
    bats: Optional[str] = None
    throws: Optional[str] = None
    retro_id: Optional[str] = None
    bbref_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class SeasonPerformanceRecord(BaseModel):
    """One row of the batting table, keyed by person, season and team."""

    person_id: str = Field(..., min_length=1)
    season_year: int
    team_id: str
    G: Optional[int] = None
    AB: Optional[int] = None
    R: Optional[int] = None
    H: Optional[int] = None
    HR: Optional[int] = None
    RBI: Optional[int] = None
    BB: Optional[int] = None
    SO: Optional[int] = None
    dubs: Optional[int] = None
    trips: Optional[int] = None
    sac_flies: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("sac_flies", mode="before")
    @classmethod
    def blank_sac_flies_is_missing(cls, v: Any) -> Any:
        # Older seasons ship sacrifice flies as text, often empty
        if isinstance(v, str):
            v = v.strip()
            return int(float(v)) if v else None
        return v


Record = Union[PersonRecord, SeasonPerformanceRecord]


def records_to_frame(records: Sequence[Record], schema: Dict[str, Any]) -> pl.DataFrame:
    rows = [r.model_dump() for r in records]
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema)


def as_frame(table: Union[pl.DataFrame, Sequence[Record]], schema: Dict[str, Any]) -> pl.DataFrame:
    if isinstance(table, pl.DataFrame):
        return table
    return records_to_frame(list(table), schema)
