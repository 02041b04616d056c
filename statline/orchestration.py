# pyright: reportMissingImports=false, reportMissingModuleSource=false
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

import polars as pl
import structlog
from filelock import BaseFileLock, FileLock

from .config import StatlineConfig
from .derive import derive_ops
from .errors import require_columns
from .io import write_table
from .issues import ISSUES_COLUMN
from .join import People, Performances, season_lines
from .labels import DEFAULT_UNLABELED, label_by_birth_year
from .logging_setup import LOGS_DIR, log_run_event
from .profiling import compute_metrics, write_profile
from .schemas import OUTPUT_COLUMNS, validate_batting, validate_output, validate_people
from .sources import StatSource, source_from_config
from .transforms import BATTING_ALIASES, PEOPLE_ALIASES, SEASON_KEY


logger = structlog.get_logger(__name__)


@dataclass
class OpsRunResult:
    run_id: str
    frame: pl.DataFrame
    output_path: Optional[Path] = None
    profile_path: Optional[Path] = None
    metrics: Dict[str, object] = field(default_factory=dict)


def _new_run_id() -> str:
    return f"run_{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%SZ')}"


def _lock_guard(root: str) -> BaseFileLock:
    root_dir = Path(root)
    root_dir.mkdir(parents=True, exist_ok=True)
    return FileLock(str(root_dir / ".statline.lock"))


def build_ops_frame(
    people: People,
    batting: Performances,
    surname: str,
    year_to_label: Mapping[int, str],
    reference: Optional[str] = None,
    unlabeled: str = DEFAULT_UNLABELED,
    columns: Optional[Sequence[str]] = None,
) -> pl.DataFrame:
    """Filter, join, derive and label; the in-memory core of an OPS run."""
    lines = season_lines(people, batting, surname)
    derived = derive_ops(lines)
    labeled = label_by_birth_year(derived, year_to_label, reference=reference, unlabeled=unlabeled)
    aliases = {**PEOPLE_ALIASES, **BATTING_ALIASES}
    wanted = [aliases.get(c, c) for c in (columns or OUTPUT_COLUMNS)]
    require_columns("ops frame", labeled.columns, wanted)
    return labeled.select(wanted + [ISSUES_COLUMN])


def run_ops(
    config: StatlineConfig,
    source: Optional[StatSource] = None,
    no_validate: bool = False,
    write: bool = True,
    logs_dir: str | Path = LOGS_DIR,
) -> OpsRunResult:
    run_id = _new_run_id()
    src = source or source_from_config(config.source)
    log_run_event(run_id, "start", logs_dir=logs_dir, surname=config.surname, source=config.source.kind)
    try:
        people = src.people()
        batting = src.batting()
        if not no_validate:
            validate_people(people)
            validate_batting(batting)
        frame = build_ops_frame(
            people,
            batting,
            config.surname,
            config.labels,
            reference=config.reference,
            unlabeled=config.unlabeled,
            columns=config.columns,
        )
        if not no_validate:
            validate_output(frame)
    except Exception as exc:
        logger.error("ops_run_failed", run_id=run_id, surname=config.surname, error=str(exc))
        log_run_event(run_id, "failed", logs_dir=logs_dir, error=str(exc))
        raise

    result = OpsRunResult(run_id=run_id, frame=frame)
    result.metrics = compute_metrics(frame, SEASON_KEY)
    if frame.height == 0:
        logger.info("empty_result", stage="pipeline", surname=config.surname)

    if write:
        out = config.output
        with _lock_guard(out.root):
            result.output_path = write_table(
                frame,
                root=out.root,
                name=out.name,
                fmt=out.format,
                compression=out.compression,
                partitions=out.partitions,
            )
            result.profile_path = write_profile(result.metrics, out.root, out.name)

    log_run_event(
        run_id,
        "completed",
        logs_dir=logs_dir,
        rows=frame.height,
        output=str(result.output_path) if result.output_path else None,
        issues=result.metrics.get("issue_counts"),
    )
    logger.info(
        "ops_run_completed",
        run_id=run_id,
        surname=config.surname,
        rows=frame.height,
        labels=result.metrics.get("label_counts"),
    )
    return result
