# pyright: reportMissingImports=false, reportMissingModuleSource=false
"""Providers for the people and batting tables.

The join/derive stages only ever see materialized polars frames; where they
come from is decided here. Every provider returns normalized frames
(snake_case names, ``dubs``/``trips``/``sac_flies`` aliases, string ids).
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Protocol, Sequence, Union

import duckdb
import polars as pl

from .config import SourceConfig
from .models import (
    PERFORMANCE_FRAME_SCHEMA,
    PERSON_FRAME_SCHEMA,
    PersonRecord,
    SeasonPerformanceRecord,
    as_frame,
)
from .transforms import normalize_batting, normalize_people


class StatSource(Protocol):
    def people(self) -> pl.DataFrame: ...

    def batting(self) -> pl.DataFrame: ...


@dataclass
class FrameSource:
    """In-memory tables, either frames or record sequences."""

    people_table: Union[pl.DataFrame, Sequence[PersonRecord]]
    batting_table: Union[pl.DataFrame, Sequence[SeasonPerformanceRecord]]

    def people(self) -> pl.DataFrame:
        return normalize_people(as_frame(self.people_table, PERSON_FRAME_SCHEMA))

    def batting(self) -> pl.DataFrame:
        return normalize_batting(as_frame(self.batting_table, PERFORMANCE_FRAME_SCHEMA))


def read_frame(path: str | Path) -> pl.DataFrame:
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".parquet":
        return pl.read_parquet(p)
    if suffix == ".csv":
        # Lahman leaves SF and friends blank for early seasons
        return pl.read_csv(p, infer_schema_length=10000, null_values=[""])
    raise ValueError(f"Unsupported table file: {p}")


@dataclass
class FileSource:
    """CSV or Parquet exports, e.g. Lahman People.csv and Batting.csv."""

    people_path: str
    batting_path: str

    def people(self) -> pl.DataFrame:
        return normalize_people(read_frame(self.people_path))

    def batting(self) -> pl.DataFrame:
        return normalize_batting(read_frame(self.batting_path))


def surname_sql(people_table: str = "People", batting_table: str = "Batting") -> str:
    """SQL form of the surname filter-join, with ``?`` bound to the surname."""
    return f"""
    SELECT
        p.playerID AS person_id,
        p.birthYear AS birth_year,
        p.nameLast AS last_name,
        b.yearID AS season_year,
        b.teamID AS team_id,
        b.G, b.AB, b.R, b.H, b.HR, b.RBI, b.BB, b.SO,
        b."2B" AS dubs,
        b."3B" AS trips,
        b.SF AS sac_flies
    FROM "{people_table}" AS p
    INNER JOIN "{batting_table}" AS b ON p.playerID = b.playerID
    WHERE p.nameLast = ?
    ORDER BY p.playerID, b.yearID, b.teamID
    """


@dataclass
class DuckDBSource:
    """Tables living in a duckdb database (file path or an open connection)."""

    database: str = ":memory:"
    people_table: str = "People"
    batting_table: str = "Batting"
    connection: Optional[duckdb.DuckDBPyConnection] = None

    @contextmanager
    def _connect(self) -> Iterator[duckdb.DuckDBPyConnection]:
        if self.connection is not None:
            yield self.connection
            return
        con = duckdb.connect(self.database, read_only=self.database != ":memory:")
        try:
            yield con
        finally:
            con.close()

    def _table(self, name: str) -> pl.DataFrame:
        with self._connect() as con:
            return con.execute(f'SELECT * FROM "{name}"').pl()

    def people(self) -> pl.DataFrame:
        return normalize_people(self._table(self.people_table))

    def batting(self) -> pl.DataFrame:
        return normalize_batting(self._table(self.batting_table))

    def query_by_surname(self, surname: str) -> pl.DataFrame:
        sql = surname_sql(self.people_table, self.batting_table)
        with self._connect() as con:
            df = con.execute(sql, [surname]).pl()
        return normalize_batting(df)


def source_from_config(cfg: SourceConfig) -> StatSource:
    if cfg.kind == "files":
        if not (cfg.people and cfg.batting):
            raise ValueError("files source needs both people and batting paths")
        return FileSource(people_path=cfg.people, batting_path=cfg.batting)
    if cfg.kind == "duckdb":
        return DuckDBSource(
            database=cfg.database or ":memory:",
            people_table=cfg.people_table,
            batting_table=cfg.batting_table,
        )
    raise NotImplementedError(f"Source kind not implemented: {cfg.kind}")
