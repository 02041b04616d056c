# pyright: reportMissingImports=false, reportMissingModuleSource=false
from __future__ import annotations

import logging
import os
from pathlib import Path

import orjson
import structlog


LOGS_DIR = Path("logs")


def configure_logging(logs_dir: str | Path = LOGS_DIR) -> None:
    Path(logs_dir).mkdir(parents=True, exist_ok=True)
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logging.basicConfig(level=log_level)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def log_run_event(run_id: str, event: str, logs_dir: str | Path = LOGS_DIR, **fields) -> None:
    path = Path(logs_dir) / f"{run_id}.jsonl"
    path.parent.mkdir(parents=True, exist_ok=True)
    rec = {"event": event, **fields}
    with path.open("ab") as f:
        f.write(orjson.dumps(rec, default=str) + b"\n")
