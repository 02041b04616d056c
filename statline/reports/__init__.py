"""Plot-ready views of labeled OPS frames. Rendering is left to the caller."""

from __future__ import annotations

import polars as pl

from ..errors import require_columns


def ops_series(df: pl.DataFrame) -> pl.DataFrame:
    """``season_year, name_label, ops`` ordered for faceting by label.

    The reference label sorts first because ``name_label`` is an Enum.
    """
    require_columns("ops frame", df.columns, ["season_year", "name_label", "ops"])
    return df.select("season_year", "name_label", "ops").sort(["name_label", "season_year"], maintain_order=True)


def label_summary(df: pl.DataFrame) -> pl.DataFrame:
    """Seasons, career span and mean/peak OPS per label, NaN seasons excluded."""
    require_columns("ops frame", df.columns, ["season_year", "name_label", "ops"])
    return (
        df.group_by("name_label")
        .agg(
            pl.len().alias("seasons"),
            pl.col("season_year").min().alias("first_season"),
            pl.col("season_year").max().alias("last_season"),
            pl.col("ops").filter(pl.col("ops").is_finite()).mean().alias("ops_mean"),
            pl.col("ops").filter(pl.col("ops").is_finite()).max().alias("ops_peak"),
        )
        .sort("name_label")
    )
