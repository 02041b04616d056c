# pyright: reportMissingImports=false, reportMissingModuleSource=false
from __future__ import annotations

from typing import List

import pandera.errors
import pandera.pandas as pa
import polars as pl

from ..errors import MalformedInputError


# Stable column set handed to reporting and plotting; row_issues follows it.
OUTPUT_COLUMNS: List[str] = [
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
    "slug_perc",
    "ob_perc",
    "ops",
    "name_label",
]

PEOPLE_SCHEMA = pa.DataFrameSchema(
    {
        "person_id": pa.Column(str, nullable=False, unique=True),
        "birth_year": pa.Column("Int64", nullable=True),
        "last_name": pa.Column(str, nullable=True),
    },
    coerce=True,
)

BATTING_SCHEMA = pa.DataFrameSchema(
    {
        "person_id": pa.Column(str, nullable=False),
        "season_year": pa.Column("Int64", nullable=False),
        "team_id": pa.Column(str, nullable=False),
        # counting stats stay nullable for seasons predating stat tracking
        "AB": pa.Column("Int64", nullable=True),
        "H": pa.Column("Int64", nullable=True),
    },
    unique=["person_id", "season_year", "team_id"],
    coerce=True,
)

OUTPUT_SCHEMA = pa.DataFrameSchema(
    {
        "person_id": pa.Column(str, nullable=False),
        "season_year": pa.Column("Int64", nullable=False),
        # pandas counts the NaN zero-denominator sentinel as null
        "slug_perc": pa.Column(float, nullable=True),
        "ob_perc": pa.Column(float, nullable=True),
        "ops": pa.Column(float, nullable=True),
        "name_label": pa.Column(nullable=False),
    },
    coerce=True,
)


def _validate(table: str, schema: pa.DataFrameSchema, df: pl.DataFrame) -> None:
    try:
        schema.validate(df.to_pandas(), lazy=True)
    except pandera.errors.SchemaErrors as exc:
        raise MalformedInputError(table, str(exc.failure_cases)) from exc


def validate_people(df: pl.DataFrame) -> None:
    _validate("people", PEOPLE_SCHEMA, df)


def validate_batting(df: pl.DataFrame) -> None:
    _validate("batting", BATTING_SCHEMA, df)


def validate_output(df: pl.DataFrame) -> None:
    # A custom column selection is checked only on the columns it kept
    dropped = [c for c in OUTPUT_SCHEMA.columns if c not in df.columns]
    schema = OUTPUT_SCHEMA.remove_columns(dropped) if dropped else OUTPUT_SCHEMA
    _validate("ops output", schema, df)
