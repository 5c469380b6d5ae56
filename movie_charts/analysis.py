"""Aggregations behind the revenue line chart and the director bar chart."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

LINE_START_YEAR = 2010
TOP_DIRECTORS = 6


@dataclass(frozen=True)
class Record:
    """One cleaned row of the source table."""

    director: str
    score: float
    year: Optional[int]
    gross: float


@dataclass(frozen=True)
class YearlyGross:
    """Total gross revenue for a single release year."""

    year: int
    total_gross: float


@dataclass(frozen=True)
class DirectorAverage:
    """Average IMDb score across one director's films."""

    director: str
    average_score: float


def compute_yearly_gross(movies: pd.DataFrame, start_year: int = LINE_START_YEAR) -> pd.DataFrame:
    """Sum gross revenue per release year from ``start_year`` onwards.

    Rows with a missing gross or year are dropped before grouping.  The result
    has one row per year, sorted ascending, with columns ``year`` and
    ``total_gross``.
    """

    recent = movies.dropna(subset=["gross", "year"])
    recent = recent[recent["year"] >= start_year]
    logger.debug("Line chart keeps %d of %d records", len(recent), len(movies))

    if recent.empty:
        return pd.DataFrame({"year": pd.Series(dtype="int64"), "total_gross": pd.Series(dtype="float64")})

    totals = (
        recent.assign(year=recent["year"].astype("int64"))
        .groupby("year", sort=True)["gross"]
        .sum()
        .rename("total_gross")
        .reset_index()
    )
    totals["total_gross"] = totals["total_gross"].astype("float64")
    return totals


def compute_director_averages(movies: pd.DataFrame, top_n: int = TOP_DIRECTORS) -> pd.DataFrame:
    """Return the ``top_n`` directors ranked by mean IMDb score.

    Directors with equal means keep the order in which they first appear in
    the filtered table.  Fewer than ``top_n`` rows are returned when fewer
    directors qualify.
    """

    rated = movies.dropna(subset=["score"])
    rated = rated[rated["director"].fillna("") != ""]
    logger.debug("Bar chart keeps %d of %d records", len(rated), len(movies))

    if rated.empty:
        return pd.DataFrame({"director": pd.Series(dtype=object), "average_score": pd.Series(dtype="float64")})

    grouped = rated.groupby("director", sort=False)["score"].mean().rename("average_score").reset_index()
    grouped["first_seen"] = range(len(grouped))

    ranked = grouped.sort_values(["average_score", "first_seen"], ascending=[False, True])
    ranked = ranked.head(top_n)[["director", "average_score"]].reset_index(drop=True)
    ranked["average_score"] = ranked["average_score"].astype("float64")
    return ranked


def yearly_gross_records(totals: pd.DataFrame) -> Tuple[YearlyGross, ...]:
    return tuple(
        YearlyGross(year=int(row.year), total_gross=float(row.total_gross))
        for row in totals.itertuples(index=False)
    )


def director_average_records(averages: pd.DataFrame) -> Tuple[DirectorAverage, ...]:
    return tuple(
        DirectorAverage(director=str(row.director), average_score=float(row.average_score))
        for row in averages.itertuples(index=False)
    )
