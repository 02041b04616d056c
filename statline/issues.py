from __future__ import annotations

from typing import Dict, List

import polars as pl

from .errors import IssueKind


ISSUES_COLUMN = "row_issues"


def with_row_issues(df: pl.DataFrame, flags: Dict[IssueKind, pl.Expr]) -> pl.DataFrame:
    """Record ``flags`` in the ``row_issues`` list column.

    Markers of the given kinds that are already present are replaced, not
    appended, so a stage can be re-run on its own output without piling up
    duplicates. Markers owned by other stages keep their position.
    """
    kinds = [kind.value for kind in flags]
    fresh = pl.concat_list(
        [
            pl.when(cond.fill_null(False)).then(pl.lit(kind.value)).otherwise(pl.lit(None, dtype=pl.Utf8))
            for kind, cond in flags.items()
        ]
    ).list.drop_nulls()
    if ISSUES_COLUMN in df.columns:
        kept = pl.col(ISSUES_COLUMN).list.eval(pl.element().filter(~pl.element().is_in(kinds)))
        fresh = pl.concat_list([kept, fresh])
    return df.with_columns(fresh.alias(ISSUES_COLUMN))


def rows_with_issue(df: pl.DataFrame, kind: IssueKind) -> pl.DataFrame:
    if ISSUES_COLUMN not in df.columns:
        return df.clear()
    return df.filter(pl.col(ISSUES_COLUMN).list.contains(kind.value))


def issue_counts(df: pl.DataFrame) -> Dict[str, int]:
    if ISSUES_COLUMN not in df.columns or df.height == 0:
        return {}
    exploded = df.select(pl.col(ISSUES_COLUMN).explode().drop_nulls().alias("kind"))
    counts = exploded.group_by("kind").len().sort("kind")
    return {kind: int(n) for kind, n in counts.iter_rows()}


def issue_keys(df: pl.DataFrame, kind: IssueKind, key_cols: List[str]) -> List[str]:
    """Short ``person_id/season_year/team_id`` strings for log messages."""
    hits = rows_with_issue(df, kind)
    cols = [c for c in key_cols if c in hits.columns]
    return ["/".join(str(v) for v in row) for row in hits.select(cols).iter_rows()]
