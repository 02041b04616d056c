from __future__ import annotations

from typing import List

import polars as pl
import structlog

from .errors import IssueKind, require_columns
from .issues import issue_keys, rows_with_issue, with_row_issues
from .transforms import SEASON_KEY


logger = structlog.get_logger(__name__)

DERIVE_INPUTS: List[str] = ["AB", "H", "dubs", "trips", "HR", "BB", "sac_flies"]
DERIVED_COLUMNS: List[str] = ["slug_perc", "ob_perc", "ops"]

NAN = float("nan")


def _stat(name: str) -> pl.Expr:
    return pl.col(name).cast(pl.Float64, strict=False)


def coerce_sac_flies(col: str = "sac_flies") -> pl.Expr:
    """Text or numeric sacrifice flies as Int64; blanks and junk count as zero.

    Sacrifice flies were not tracked in every era, so a missing value means
    "none recorded" rather than an unknown.
    """
    return (
        pl.col(col)
        .cast(pl.Utf8)
        .str.strip_chars()
        .cast(pl.Float64, strict=False)
        .fill_nan(None)
        .fill_null(0.0)
        .round(0)
        .cast(pl.Int64)
        .alias(col)
    )


def derive_ops(rows: pl.DataFrame) -> pl.DataFrame:
    """Add slugging, on-base and OPS columns to joined season lines.

    ``slug_perc = total bases / AB`` and
    ``ob_perc = (H + BB) / (H + AB + BB + sac_flies)``. A zero denominator
    yields NaN and a ``divide_by_zero`` marker in ``row_issues``; rows with
    null counting stats get NaN and ``missing_value``; implausible counts are
    flagged ``invariant_violation``. None of these stop the batch. Running
    it again on its own output returns the same frame.
    """
    require_columns("season lines", rows.columns, DERIVE_INPUTS)

    df = rows.with_columns(coerce_sac_flies())

    ab, h, dubs, trips, hr, bb = (_stat(c) for c in ("AB", "H", "dubs", "trips", "HR", "BB"))
    sf = pl.col("sac_flies").cast(pl.Float64)
    singles = h - dubs - trips - hr
    total_bases = singles + 2 * dubs + 3 * trips + 4 * hr
    ob_denominator = h + ab + bb + sf

    df = df.with_columns(
        pl.when(ab == 0).then(pl.lit(NAN)).otherwise(total_bases / ab).fill_null(NAN).alias("slug_perc"),
        pl.when(ob_denominator == 0)
        .then(pl.lit(NAN))
        .otherwise((h + bb) / ob_denominator)
        .fill_null(NAN)
        .alias("ob_perc"),
    )
    df = df.with_columns((pl.col("slug_perc") + pl.col("ob_perc")).alias("ops"))

    counts = [ab, h, dubs, trips, hr, bb]
    negative = pl.any_horizontal([c < 0 for c in counts + [sf]])
    df = with_row_issues(
        df,
        {
            IssueKind.MISSING_VALUE: pl.any_horizontal([c.is_null() for c in counts]),
            IssueKind.DIVIDE_BY_ZERO: (ab == 0) | (ob_denominator == 0),
            IssueKind.INVARIANT_VIOLATION: negative | (dubs + trips + hr > h) | (h > ab),
        },
    )

    zero = rows_with_issue(df, IssueKind.DIVIDE_BY_ZERO).height
    if zero:
        logger.info("zero_denominator", rows=zero, keys=issue_keys(df, IssueKind.DIVIDE_BY_ZERO, SEASON_KEY))
    bad = rows_with_issue(df, IssueKind.INVARIANT_VIOLATION).height
    if bad:
        logger.warning(
            "stat_invariant_violation",
            rows=bad,
            keys=issue_keys(df, IssueKind.INVARIANT_VIOLATION, SEASON_KEY),
        )
    return df
