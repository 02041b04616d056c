import polars as pl

from statline.transforms import normalize_batting, normalize_people


def test_normalize_batting_aliases_digit_leading_columns(lahman_batting):
    result = normalize_batting(lahman_batting)

    assert {"dubs", "trips", "sac_flies"} <= set(result.columns)
    assert "2B" not in result.columns
    assert "3B" not in result.columns
    assert {"person_id", "season_year", "team_id"} <= set(result.columns)


def test_normalize_batting_keeps_existing_target_column():
    df = pl.DataFrame({"playerID": ["a"], "yearID": [2000], "teamID": ["X"], "2B": [5], "dubs": [7]})

    result = normalize_batting(df)

    assert result["dubs"].item() == 7
    assert "2B" in result.columns


def test_normalize_batting_dedupes_full_season_key_keeping_first():
    df = pl.DataFrame(
        {
            "person_id": ["a", "a", "a"],
            "season_year": [2000, 2000, 2000],
            "team_id": ["X", "X", "Y"],
            "H": [10, 99, 5],
        }
    )

    result = normalize_batting(df)

    assert result.height == 2
    assert result.filter(pl.col("team_id") == "X")["H"].item() == 10


def test_normalize_batting_drops_rows_missing_key():
    df = pl.DataFrame(
        {
            "person_id": ["a", None],
            "season_year": [2000, 2000],
            "team_id": ["X", "X"],
        }
    )

    result = normalize_batting(df)

    assert result.height == 1
    assert result["person_id"].item() == "a"


def test_normalize_people_casts_ids_and_years():
    df = pl.DataFrame({"playerID": [1, 2], "birthYear": ["1950", None], "nameLast": ["Griffey", "Griffey"]})

    result = normalize_people(df)

    assert result.schema["person_id"] == pl.Utf8
    assert result.schema["birth_year"] == pl.Int64
    assert result["birth_year"].to_list() == [1950, None]


def test_normalize_people_upcasts_null_columns_to_utf8():
    df = pl.DataFrame({"person_id": ["a"], "last_name": ["Griffey"], "notes": [None]})

    result = normalize_people(df)

    assert result.schema["notes"] == pl.Utf8
