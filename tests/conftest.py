"""Shared fixtures for the movie chart tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd
import pytest

SAMPLE_CSV = """\
color,director_name,gross,movie_title,title_year,imdb_score
Color,James Cameron,760505847,Avatar,2009,7.9
Color,Christopher Nolan,448130642,The Dark Knight Rises,2012,8.5
Color,Christopher Nolan,292568851,Inception,2010,8.8
Color,Sam Raimi,336530303,Spider-Man 3,2007,6.2
Color,,,"Star Wars: Episode VII - The Force Awakens",,7.1
Color,Rich Moore,200069408,Wreck-It Ralph,2012,7.8
Color,Zack Snyder,330249062,Batman v Superman,2016,6.9
Color,Joss Whedon,623279547,The Avengers,2012,8.1
Color,Andrew Stanton,73058679,John Carter,2012,6.6
Color,Gore Verbinski,,The Lone Ranger,2013,6.5
Color,Marc Webb,n/a,The Amazing Spider-Man,2012,
"""


def movie_frame(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Build a cleaned-style movie frame from plain dictionaries."""

    rows = list(rows)
    return pd.DataFrame(
        {
            "director": [row.get("director", "") for row in rows],
            "score": pd.Series([row.get("score") for row in rows], dtype="float64"),
            "year": pd.array([row.get("year") for row in rows], dtype="Int64"),
            "gross": pd.Series([row.get("gross") for row in rows], dtype="float64"),
        }
    )


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "movies.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the dataset lookup fallbacks at empty temporary directories."""

    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("MOVIES_DATA_DIR", raising=False)
    monkeypatch.chdir(workdir)
    return home
