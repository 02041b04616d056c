from __future__ import annotations

from typing import Dict, List

import polars as pl
import structlog


logger = structlog.get_logger(__name__)

# Lahman headers -> identifier-safe snake_case. 2B/3B cannot be addressed as
# identifiers downstream, so the rename is applied on every entry point.
PEOPLE_ALIASES: Dict[str, str] = {
    "playerID": "person_id",
    "birthYear": "birth_year",
    "nameFirst": "first_name",
    "nameLast": "last_name",
    "retroID": "retro_id",
    "bbrefID": "bbref_id",
}

BATTING_ALIASES: Dict[str, str] = {
    "playerID": "person_id",
    "yearID": "season_year",
    "teamID": "team_id",
    "2B": "dubs",
    "3B": "trips",
    "SF": "sac_flies",
}

SEASON_KEY: List[str] = ["person_id", "season_year", "team_id"]


def _apply_aliases(df: pl.DataFrame, aliases: Dict[str, str]) -> pl.DataFrame:
    # Skip an alias when the target already exists to avoid duplicate names
    mapping = {src: dst for src, dst in aliases.items() if src in df.columns and dst not in df.columns}
    return df.rename(mapping) if mapping else df


def _normalize_common(df: pl.DataFrame) -> pl.DataFrame:
    for col in ("person_id", "team_id", "retro_id", "bbref_id"):
        if col in df.columns:
            df = df.with_columns(pl.col(col).cast(pl.Utf8).alias(col))
    for col in ("birth_year", "season_year"):
        if col in df.columns:
            df = df.with_columns(pl.col(col).cast(pl.Int64, strict=False))
    # Upcast columns that are entirely Null to Utf8 to stabilize schemas
    null_cols = [name for name, dtype in df.schema.items() if dtype == pl.Null]
    if null_cols:
        df = df.with_columns([pl.col(c).cast(pl.Utf8) for c in null_cols])
    return df


def normalize_people(df: pl.DataFrame) -> pl.DataFrame:
    return _normalize_common(_apply_aliases(df, PEOPLE_ALIASES))


def normalize_batting(df: pl.DataFrame) -> pl.DataFrame:
    df = _normalize_common(_apply_aliases(df, BATTING_ALIASES))
    key_cols = [c for c in SEASON_KEY if c in df.columns]
    if not key_cols:
        return df
    df = df.drop_nulls(subset=key_cols)
    # A person has several rows in one season only when traded, so the full
    # key must be unique; keep the first occurrence of any repeat
    deduped = df.unique(subset=key_cols, keep="first", maintain_order=True)
    dropped = df.height - deduped.height
    if dropped:
        logger.warning("duplicate_season_rows", dropped=dropped, key=key_cols)
    return deduped
