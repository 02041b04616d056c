from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .labels import DEFAULT_UNLABELED, labels_by_year


DEFAULT_CONFIG_PATH = "catalog/statline.yml"


class SourceModel(BaseModel):
    kind: Literal["files", "duckdb"] = "files"
    people: Optional[str] = None
    batting: Optional[str] = None
    database: Optional[str] = None
    people_table: str = "People"
    batting_table: str = "Batting"

    @model_validator(mode="after")
    def locations_present(self) -> "SourceModel":
        if self.kind == "files" and not (self.people and self.batting):
            raise ValueError("files source needs both people and batting paths")
        if self.kind == "duckdb" and not self.database:
            raise ValueError("duckdb source needs a database path")
        return self


class LabelsModel(BaseModel):
    mapping: Dict[int, str] = Field(default_factory=dict)
    reference: Optional[str] = None
    unlabeled: str = DEFAULT_UNLABELED

    @model_validator(mode="after")
    def reference_is_mapped(self) -> "LabelsModel":
        if self.reference is not None and self.reference not in self.mapping.values():
            raise ValueError(f"reference {self.reference!r} is not a mapped label")
        return self


class OutputModel(BaseModel):
    root: str = "out"
    name: str = "ops"
    format: Literal["parquet", "csv"] = "parquet"
    compression: str = Field("zstd")
    partitions: List[str] = Field(default_factory=list)


class StatlineConfigModel(BaseModel):
    source: SourceModel
    surname: str
    columns: Optional[List[str]] = None
    labels: LabelsModel = Field(default_factory=LabelsModel)
    output: OutputModel = Field(default_factory=OutputModel)

    @field_validator("surname")
    @classmethod
    def surname_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("surname must not be empty")
        return v


@dataclass
class SourceConfig:
    kind: str
    people: Optional[str]
    batting: Optional[str]
    database: Optional[str]
    people_table: str
    batting_table: str


@dataclass
class OutputConfig:
    root: str
    name: str
    format: str
    compression: str
    partitions: List[str] = field(default_factory=list)


@dataclass
class StatlineConfig:
    source: SourceConfig
    surname: str
    columns: Optional[List[str]]
    labels: Dict[int, str]
    reference: Optional[str]
    unlabeled: str
    output: OutputConfig


def resolve_config_path(path: Optional[str] = None) -> Path:
    return Path(path or os.getenv("STATLINE_CONFIG") or DEFAULT_CONFIG_PATH)


def parse_config(data: dict) -> StatlineConfig:
    parsed = StatlineConfigModel.model_validate(data)
    src = parsed.source
    out = parsed.output
    return StatlineConfig(
        source=SourceConfig(
            kind=src.kind,
            people=src.people,
            batting=src.batting,
            database=src.database,
            people_table=src.people_table,
            batting_table=src.batting_table,
        ),
        surname=parsed.surname,
        columns=parsed.columns,
        labels=labels_by_year(parsed.labels.mapping),
        reference=parsed.labels.reference,
        unlabeled=parsed.labels.unlabeled,
        output=OutputConfig(
            root=os.getenv("STATLINE_OUTPUT_ROOT") or out.root,
            name=out.name,
            format=out.format,
            compression=out.compression,
            partitions=list(out.partitions),
        ),
    )


def load_config(path: Optional[str] = None) -> StatlineConfig:
    yaml_path = resolve_config_path(path)
    data = yaml.safe_load(yaml_path.read_text()) or {}
    return parse_config(data)
