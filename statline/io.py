# pyright: reportMissingImports=false, reportMissingModuleSource=false
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import polars as pl
import pyarrow.dataset as ds

from .issues import ISSUES_COLUMN


def ensure_dir(path: str | Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def remove_dir(path: str | Path) -> None:
    p = Path(path)
    if p.exists() and p.is_dir():
        import shutil

        shutil.rmtree(p)


def write_parquet_dataset(
    df: pl.DataFrame,
    target: str | Path,
    partitions: Optional[List[str]] = None,
    compression: str = "zstd",
) -> Path:
    target_root = Path(target)
    # Reruns replace the previous output instead of adding files beside it
    remove_dir(target_root)
    ensure_dir(target_root)

    # Enum labels go out as plain strings so hive partition names stay readable
    enum_cols = [name for name, dtype in df.schema.items() if isinstance(dtype, pl.Enum)]
    if enum_cols:
        df = df.with_columns([pl.col(c).cast(pl.Utf8) for c in enum_cols])
    table = df.to_arrow()

    parquet_format = ds.ParquetFileFormat()
    file_options = parquet_format.make_write_options(compression=compression)
    ds.write_dataset(
        table,
        base_dir=str(target_root),
        format=parquet_format,
        file_options=file_options,
        partitioning=partitions if partitions else None,
        partitioning_flavor="hive",
        existing_data_behavior="overwrite_or_ignore",
    )
    return target_root


def write_csv(df: pl.DataFrame, target: str | Path) -> Path:
    path = Path(target)
    ensure_dir(path.parent)
    if ISSUES_COLUMN in df.columns:
        df = df.with_columns(pl.col(ISSUES_COLUMN).list.join(";"))
    df.write_csv(path)
    return path


def write_table(
    df: pl.DataFrame,
    root: str,
    name: str,
    fmt: str = "parquet",
    compression: str = "zstd",
    partitions: Optional[List[str]] = None,
) -> Path:
    if fmt == "parquet":
        return write_parquet_dataset(df, Path(root) / name, partitions=partitions, compression=compression)
    if fmt == "csv":
        return write_csv(df, Path(root) / f"{name}.csv")
    raise NotImplementedError(f"Output format not implemented: {fmt}")


def read_table(path: str | Path) -> pl.DataFrame:
    p = Path(path)
    if p.suffix.lower() == ".csv":
        df = pl.read_csv(p)
        if ISSUES_COLUMN in df.columns:
            df = df.with_columns(
                pl.col(ISSUES_COLUMN)
                .cast(pl.Utf8)
                .fill_null("")
                .str.split(";")
                .list.eval(pl.element().filter(pl.element() != ""))
            )
        return df
    return pl.from_arrow(ds.dataset(str(p), format="parquet", partitioning="hive").to_table())
