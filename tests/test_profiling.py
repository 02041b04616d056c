import math

import polars as pl

from statline.derive import derive_ops
from statline.io import read_table, write_table
from statline.labels import label_by_birth_year
from statline.profiling import compute_metrics, write_profile
from statline.reports import label_summary, ops_series
from statline.transforms import SEASON_KEY

from conftest import GRIFFEY_LABELS


def _labeled() -> pl.DataFrame:
    lines = pl.DataFrame(
        {
            "person_id": ["griffke01", "griffke01", "griffke02", "griffke02"],
            "birth_year": [1950, 1950, 1969, 1969],
            "season_year": [1990, 1991, 1990, 1991],
            "team_id": ["SEA", "SEA", "SEA", "SEA"],
            "AB": [77, 0, 597, 548],
            "H": [29, 0, 179, 179],
            "dubs": [2, 0, 28, 42],
            "trips": [0, 0, 7, 1],
            "HR": [3, 0, 22, 22],
            "BB": [10, 0, 63, 71],
            "sac_flies": [0, 0, 4, 9],
        }
    )
    return label_by_birth_year(derive_ops(lines), GRIFFEY_LABELS, reference="Junior")


class TestComputeMetrics:
    def test_reports_counts_issues_and_labels(self):
        metrics = compute_metrics(_labeled(), key_cols=SEASON_KEY)

        assert metrics["rows"] == 4
        assert metrics["key_nulls"] == {"person_id": 0, "season_year": 0, "team_id": 0}
        assert metrics["key_duplicate_rows"] == 0
        assert metrics["season_year_min"] == 1990
        assert metrics["season_year_max"] == 1991
        assert metrics["ops_finite_rows"] == 3
        assert metrics["label_counts"] == {"Junior": 2, "Senior": 2}
        assert metrics["issue_counts"] == {"divide_by_zero": 1}

    def test_handles_duplicate_keys(self):
        df = pl.DataFrame({"person_id": ["a", "a"], "season_year": [2000, 2000], "team_id": ["X", "X"]})

        metrics = compute_metrics(df, key_cols=SEASON_KEY)

        assert metrics["key_unique_rows"] == 1
        assert metrics["key_duplicate_rows"] == 1
        assert metrics["issue_counts"] == {}


def test_write_profile_creates_json(tmp_path):
    path = write_profile({"rows": 1}, tmp_path / "quality", "griffey_ops")

    assert path.name == "griffey_ops.profile.json"
    assert '"rows": 1' in path.read_text()


def test_parquet_output_partitioned_by_label(tmp_path):
    df = _labeled()

    target = write_table(df, str(tmp_path), "ops", partitions=["name_label"])

    assert (target / "name_label=Junior").is_dir()
    assert (target / "name_label=Senior").is_dir()
    assert read_table(target).height == 4


def test_parquet_output_replaces_previous_run(tmp_path):
    df = _labeled()

    write_table(df, str(tmp_path), "ops")
    target = write_table(df.head(1), str(tmp_path), "ops")

    assert read_table(target).height == 1


def test_ops_series_puts_reference_label_first():
    series = ops_series(_labeled())

    assert series.columns == ["season_year", "name_label", "ops"]
    assert series["name_label"].cast(pl.Utf8).to_list() == ["Junior", "Junior", "Senior", "Senior"]
    assert series["season_year"].to_list() == [1990, 1991, 1990, 1991]


def test_label_summary_skips_nan_seasons():
    summary = label_summary(_labeled())
    senior = summary.filter(pl.col("name_label") == "Senior").row(0, named=True)

    assert senior["seasons"] == 2
    assert senior["first_season"] == 1990
    assert senior["last_season"] == 1991
    assert math.isfinite(senior["ops_mean"])
    assert senior["ops_mean"] == senior["ops_peak"]
