"""Turn the cleaned movie table into everything a chart renderer needs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from movie_charts.analysis import (
    LINE_START_YEAR,
    TOP_DIRECTORS,
    compute_director_averages,
    compute_yearly_gross,
)
from movie_charts.scales import BandScale, LinearScale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Margin:
    top: int = 50
    right: int = 30
    bottom: int = 60
    left: int = 70


@dataclass(frozen=True)
class ChartLayout:
    """Fixed canvas geometry shared by both charts, in pixels."""

    outer_width: int = 800
    outer_height: int = 400
    margin: Margin = Margin()

    @property
    def width(self) -> int:
        return self.outer_width - self.margin.left - self.margin.right

    @property
    def height(self) -> int:
        return self.outer_height - self.margin.top - self.margin.bottom


DEFAULT_LAYOUT = ChartLayout()


@dataclass(frozen=True, eq=False)
class LineChart:
    data: pd.DataFrame
    x: LinearScale
    y: LinearScale
    year_ticks: tuple[int, ...]


@dataclass(frozen=True, eq=False)
class BarChart:
    data: pd.DataFrame
    x: BandScale
    y: LinearScale


@dataclass(frozen=True, eq=False)
class ChartBundle:
    """Derived tables and scales for both charts.

    A chart is ``None`` when its filtered view turned out empty.
    """

    layout: ChartLayout
    line: Optional[LineChart]
    bar: Optional[BarChart]


def build_line_chart(
    totals: pd.DataFrame,
    layout: ChartLayout = DEFAULT_LAYOUT,
    start_year: int = LINE_START_YEAR,
) -> LineChart:
    """Build year -> x and gross -> y scales for the revenue line."""

    if totals.empty:
        raise ValueError("Cannot build line chart scales from an empty table")

    first_year = int(totals["year"].min())
    last_year = int(totals["year"].max())
    x = LinearScale(domain=(start_year, last_year), range=(0, layout.width))
    y = LinearScale(domain=(0, float(totals["total_gross"].max())), range=(layout.height, 0))
    year_ticks = tuple(range(first_year, last_year + 1))
    return LineChart(data=totals, x=x, y=y, year_ticks=year_ticks)


def build_bar_chart(
    averages: pd.DataFrame,
    layout: ChartLayout = DEFAULT_LAYOUT,
    padding: float = 0.1,
) -> BarChart:
    """Build director -> band and score -> y scales for the bar chart."""

    if averages.empty:
        raise ValueError("Cannot build bar chart scales from an empty table")

    x = BandScale(domain=tuple(averages["director"]), range=(0, layout.width), padding=padding)
    y = LinearScale(domain=(0, float(averages["average_score"].max())), range=(layout.height, 0))
    return BarChart(data=averages, x=x, y=y)


def build_charts(
    movies: pd.DataFrame,
    layout: ChartLayout = DEFAULT_LAYOUT,
    start_year: int = LINE_START_YEAR,
    top_n: int = TOP_DIRECTORS,
) -> ChartBundle:
    """Aggregate ``movies`` and construct the scales for both charts."""

    totals = compute_yearly_gross(movies, start_year=start_year)
    logger.debug("Total gross by year:\n%s", totals)
    if totals.empty:
        logger.warning("No records from %d onwards with gross and year; line chart has no data", start_year)
        line = None
    else:
        line = build_line_chart(totals, layout=layout, start_year=start_year)

    averages = compute_director_averages(movies, top_n=top_n)
    logger.debug("Top directors by average score:\n%s", averages)
    if averages.empty:
        logger.warning("No records with a director and a score; bar chart has no data")
        bar = None
    else:
        bar = build_bar_chart(averages, layout=layout)

    return ChartBundle(layout=layout, line=line, bar=bar)
