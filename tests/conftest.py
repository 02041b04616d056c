import polars as pl
import pytest

from statline.models import PersonRecord, SeasonPerformanceRecord


GRIFFEY_LABELS = {1950: "Senior", 1969: "Junior"}


@pytest.fixture
def griffey_people() -> list[PersonRecord]:
    return [
        PersonRecord(person_id="griffey_sr", birth_year=1950, first_name="Ken", last_name="Griffey"),
        PersonRecord(person_id="griffey_jr", birth_year=1969, first_name="Ken", last_name="Griffey"),
        PersonRecord(person_id="bondsba01", birth_year=1964, first_name="Barry", last_name="Bonds"),
    ]


@pytest.fixture
def griffey_batting() -> list[SeasonPerformanceRecord]:
    return [
        SeasonPerformanceRecord(
            person_id="griffey_sr", season_year=1990, team_id="SEA",
            G=21, AB=300, R=40, H=80, HR=10, RBI=45, BB=40, SO=30, dubs=20, trips=2, sac_flies=3,
        ),
        SeasonPerformanceRecord(
            person_id="griffey_jr", season_year=1990, team_id="SEA",
            G=155, AB=350, R=91, H=100, HR=22, RBI=80, BB=50, SO=81, dubs=25, trips=1, sac_flies=2,
        ),
        SeasonPerformanceRecord(
            person_id="bondsba01", season_year=1990, team_id="PIT",
            G=151, AB=519, R=104, H=156, HR=33, RBI=114, BB=93, SO=83, dubs=32, trips=3, sac_flies=6,
        ),
    ]


@pytest.fixture
def lahman_people() -> pl.DataFrame:
    """People table with raw Lahman headers."""
    return pl.DataFrame(
        {
            "playerID": ["griffke01", "griffke02", "griffdo01"],
            "birthYear": [1950, 1969, 1950],
            "nameFirst": ["Ken", "Ken", "Doug"],
            "nameLast": ["Griffey", "Griffey", "Griffin"],
            "weight": [190, 195, 160],
            "height": [72, 75, 70],
            "bats": ["L", "L", "R"],
            "throws": ["L", "L", "R"],
            "retroID": ["grifk001", "grifk002", "grifd001"],
            "bbrefID": ["griffke01", "griffke02", "griffdo01"],
        }
    )


@pytest.fixture
def lahman_batting() -> pl.DataFrame:
    """Batting table with raw Lahman headers, SF delivered as text."""
    return pl.DataFrame(
        {
            "playerID": ["griffke01", "griffke01", "griffke01", "griffke02", "griffke02", "nobody01"],
            "yearID": [1989, 1990, 1990, 1989, 1990, 1990],
            "teamID": ["CIN", "CIN", "SEA", "SEA", "SEA", "NYA"],
            "G": [106, 46, 21, 127, 155, 10],
            "AB": [236, 63, 77, 455, 597, 20],
            "R": [26, 6, 13, 61, 91, 1],
            "H": [62, 13, 29, 120, 179, 4],
            "2B": [8, 2, 2, 23, 28, 1],
            "3B": [3, 0, 0, 0, 7, 0],
            "HR": [8, 1, 3, 16, 22, 0],
            "RBI": [30, 8, 18, 61, 80, 2],
            "BB": [29, 2, 10, 44, 63, 1],
            "SO": [42, 5, 3, 83, 81, 7],
            "SF": ["3", "", "0", "4", "4", "0"],
        }
    )
