# pyright: reportMissingImports=false, reportMissingModuleSource=false
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

import polars as pl

from .issues import issue_counts


def compute_metrics(df: pl.DataFrame, key_cols: List[str]) -> Dict[str, object]:
    rows = df.height
    cols = list(df.columns)
    dtypes = {name: str(dtype) for name, dtype in df.schema.items()}
    metrics: Dict[str, object] = {
        "rows": rows,
        "num_columns": len(cols),
        "columns": cols,
        "dtypes": dtypes,
    }
    nulls = {}
    for k in key_cols:
        if k in df.columns:
            nulls[k] = int(df.select(pl.col(k).is_null().sum()).item())
    metrics["key_nulls"] = nulls
    if all(k in df.columns for k in key_cols):
        uniq = df.select(key_cols).unique().height
        metrics["key_unique_rows"] = int(uniq)
        metrics["key_duplicate_rows"] = int(rows - uniq)
        metrics["key_unique_ratio"] = float(uniq / rows) if rows else 1.0
    if "season_year" in df.columns and rows:
        metrics["season_year_min"] = df.select(pl.col("season_year").min()).item()
        metrics["season_year_max"] = df.select(pl.col("season_year").max()).item()
    if "ops" in df.columns:
        finite = df.filter(pl.col("ops").is_finite())
        metrics["ops_finite_rows"] = finite.height
        metrics["ops_mean"] = finite.select(pl.col("ops").mean()).item() if finite.height else None
        metrics["ops_max"] = finite.select(pl.col("ops").max()).item() if finite.height else None
    if "name_label" in df.columns:
        counts = df.group_by(pl.col("name_label").cast(pl.Utf8)).len().sort("name_label")
        metrics["label_counts"] = {label: int(n) for label, n in counts.iter_rows()}
    metrics["issue_counts"] = issue_counts(df)
    return metrics


def write_profile(metrics: Dict[str, object], output_dir: str | Path, name: str) -> Path:
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"{name}.profile.json"
    path.write_text(json.dumps({"table": name, "metrics": metrics}, indent=2, default=str))
    return path
