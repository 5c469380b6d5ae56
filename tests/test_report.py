"""Tests for the Markdown summary and the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import movie_frame
from movie_charts.data_access import DatasetLoadError, load_movies
from movie_charts.pipeline import build_charts
from movie_charts.report import build_report, build_sections
from scripts.run_charts import main


def test_build_report_orders_sections() -> None:
    report = build_report({"First": "one", "Second": "two"})

    assert report.startswith("# Movie Revenue and Director Scores\n")
    assert report.index("## First") < report.index("## Second")
    assert report.endswith("two\n")


def test_build_sections_summarises_both_tables(sample_csv: Path) -> None:
    movies = load_movies(sample_csv)
    sections = build_sections(build_charts(movies), "movies.csv", len(movies))

    assert "11 records" in sections["Data Snapshot"]
    assert "peaked in 2012 at 1.34B" in sections["Total Gross by Year"]
    assert "| Christopher Nolan" in sections["Top Directors"]
    assert "8.65" in sections["Top Directors"]


def test_build_sections_without_data() -> None:
    bundle = build_charts(movie_frame([{"director": "", "year": 1999}]))

    sections = build_sections(bundle, "movies.csv", 1)

    assert sections["Total Gross by Year"].startswith("No records")
    assert sections["Top Directors"].startswith("No records")


def test_main_writes_charts_and_report(sample_csv: Path, tmp_path: Path) -> None:
    figures = tmp_path / "figures"
    report = tmp_path / "reports" / "summary.md"

    main(
        [
            "--source",
            str(sample_csv),
            "--data-dir",
            str(tmp_path / "data"),
            "--figures-dir",
            str(figures),
            "--report",
            str(report),
        ]
    )

    assert (figures / "gross_by_year.png").exists()
    assert (figures / "top_directors.png").exists()
    assert "## Top Directors" in report.read_text(encoding="utf-8")


def test_main_missing_dataset_fails(tmp_path: Path, isolated_home: Path) -> None:
    with pytest.raises(DatasetLoadError):
        main(["--source", "movies.csv", "--data-dir", str(tmp_path / "data")])
