from __future__ import annotations

from typing import Dict, List, Mapping, Optional

import polars as pl
import structlog

from .errors import IssueKind, require_columns
from .issues import with_row_issues


logger = structlog.get_logger(__name__)

DEFAULT_UNLABELED = "unlabeled"


def label_categories(
    year_to_label: Mapping[int, str],
    reference: Optional[str] = None,
    unlabeled: str = DEFAULT_UNLABELED,
) -> List[str]:
    """Ordered categories for ``name_label``: reference first, unlabeled last."""
    labels = list(dict.fromkeys(year_to_label.values()))
    if reference is not None:
        if reference not in labels:
            raise ValueError(f"reference label {reference!r} is not one of {labels}")
        labels.remove(reference)
        labels.insert(0, reference)
    if unlabeled not in labels:
        labels.append(unlabeled)
    return labels


def label_by_birth_year(
    rows: pl.DataFrame,
    year_to_label: Mapping[int, str],
    reference: Optional[str] = None,
    unlabeled: str = DEFAULT_UNLABELED,
) -> pl.DataFrame:
    """Set ``name_label`` from each row's birth year.

    ``name_label`` is an Enum whose first category is ``reference`` (or the
    first mapped label), which downstream grouping treats as the baseline.
    Years missing from the mapping get ``unlabeled`` and an
    ``unlabeled_category`` marker; the column is never null.
    """
    require_columns("season lines", rows.columns, ["birth_year"])
    categories = label_categories(year_to_label, reference, unlabeled)

    if year_to_label:
        mapped = pl.col("birth_year").replace_strict(
            old=[int(y) for y in year_to_label],
            new=[str(v) for v in year_to_label.values()],
            default=pl.lit(None, dtype=pl.Utf8),
            return_dtype=pl.Utf8,
        )
    else:
        mapped = pl.lit(None, dtype=pl.Utf8)

    df = rows.with_columns(mapped.alias("__label"))
    df = with_row_issues(df, {IssueKind.UNLABELED_CATEGORY: pl.col("__label").is_null()})
    df = df.with_columns(
        pl.col("__label").fill_null(unlabeled).cast(pl.Enum(categories)).alias("name_label")
    ).drop("__label")

    missing = df.filter(pl.col("name_label") == unlabeled)
    if missing.height:
        years = sorted({y for y in missing["birth_year"].to_list() if y is not None})
        logger.info("unlabeled_rows", rows=missing.height, birth_years=years)

    _warn_on_collisions(df, unlabeled)
    return df


def _warn_on_collisions(df: pl.DataFrame, unlabeled: str) -> None:
    # Birth year is not an identity: twins, or unrelated namesakes born the
    # same year, end up sharing a label
    if "person_id" not in df.columns or df.height == 0:
        return
    per_label = (
        df.filter(pl.col("name_label") != unlabeled)
        .group_by("name_label")
        .agg(pl.col("person_id").unique().sort().alias("people"))
        .filter(pl.col("people").list.len() > 1)
    )
    for label, people in per_label.iter_rows():
        logger.warning("label_collision", label=label, people=people)


def reference_label(df: pl.DataFrame, column: str = "name_label") -> str:
    dtype = df.schema[column]
    if not isinstance(dtype, pl.Enum):
        raise TypeError(f"{column} is not an Enum column")
    return str(dtype.categories[0])


def labels_by_year(mapping: Mapping[int | str, str]) -> Dict[int, str]:
    """Normalize mapping keys read from YAML or the command line to ints."""
    return {int(year): str(label) for year, label in mapping.items()}
