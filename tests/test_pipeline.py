"""Unit tests for layout constants and chart scale construction."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from conftest import movie_frame
from movie_charts.data_access import load_movies
from movie_charts.pipeline import (
    DEFAULT_LAYOUT,
    ChartLayout,
    Margin,
    build_bar_chart,
    build_charts,
    build_line_chart,
)


def test_default_layout_dimensions() -> None:
    assert DEFAULT_LAYOUT.margin == Margin(top=50, right=30, bottom=60, left=70)
    assert DEFAULT_LAYOUT.width == 700
    assert DEFAULT_LAYOUT.height == 290


def test_build_charts_line_scales(sample_csv: Path) -> None:
    """Years run from 2010 to the last year; gross runs from 0 to the peak."""
    bundle = build_charts(load_movies(sample_csv))

    line = bundle.line
    assert line is not None
    assert line.x.domain == (2010.0, 2016.0)
    assert line.x.range == (0.0, 700.0)
    assert line.y.domain == (0.0, pytest.approx(1_344_538_276.0))
    assert line.y.range == (290.0, 0.0)
    assert line.year_ticks == (2010, 2011, 2012, 2013, 2014, 2015, 2016)
    assert line.y(line.data["total_gross"].max()) == pytest.approx(0)


def test_build_charts_bar_scales(sample_csv: Path) -> None:
    """Directors get equal bands; scores run from 0 to the best average."""
    bundle = build_charts(load_movies(sample_csv))

    bar = bundle.bar
    assert bar is not None
    assert bar.x.domain == tuple(bar.data["director"])
    assert len(bar.x.domain) == 6
    assert bar.x.padding == 0.1
    assert bar.y.domain == (0.0, pytest.approx(8.65))
    assert bar.y.range == (290.0, 0.0)


def test_build_charts_empty_views_are_none(caplog: pytest.LogCaptureFixture) -> None:
    """An empty filtered view produces no chart and a warning."""
    movies = movie_frame([{"director": "", "year": 2001, "gross": 10, "score": 7}])

    bundle = build_charts(movies)

    assert bundle.line is None
    assert bundle.bar is None
    assert "line chart has no data" in caplog.text
    assert "bar chart has no data" in caplog.text


def test_build_scales_on_empty_tables_raise() -> None:
    with pytest.raises(ValueError):
        build_line_chart(pd.DataFrame({"year": [], "total_gross": []}))
    with pytest.raises(ValueError):
        build_bar_chart(pd.DataFrame({"director": [], "average_score": []}))


def test_build_charts_respects_custom_layout_and_options(sample_csv: Path) -> None:
    layout = ChartLayout(outer_width=500, outer_height=300, margin=Margin(10, 10, 10, 10))

    bundle = build_charts(load_movies(sample_csv), layout=layout, start_year=2012, top_n=2)

    assert bundle.layout is layout
    assert bundle.line is not None and bundle.line.x.domain == (2012.0, 2016.0)
    assert bundle.line.x.range == (0.0, 480.0)
    assert bundle.bar is not None and bundle.bar.x.domain == ("Christopher Nolan", "Joss Whedon")
