"""Draw the revenue line chart and the director bar chart with matplotlib.

Both charts are drawn in pixel space: every mark is positioned through the
scales computed by :mod:`movie_charts.pipeline`, on a fixed-size canvas whose
plotting area is inset by the layout margins.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from movie_charts.pipeline import BarChart, ChartLayout, LineChart

logger = logging.getLogger(__name__)

MARK_COLOR = "purple"
DPI = 100


def format_billions(value: float) -> str:
    """Label a revenue tick in billions, e.g. ``1.5B``."""

    return f"{value / 1_000_000_000:g}B"


def _plot_area(layout: ChartLayout) -> tuple[Figure, Axes]:
    fig = plt.figure(figsize=(layout.outer_width / DPI, layout.outer_height / DPI), dpi=DPI)
    ax = fig.add_axes(
        [
            layout.margin.left / layout.outer_width,
            layout.margin.bottom / layout.outer_height,
            layout.width / layout.outer_width,
            layout.height / layout.outer_height,
        ]
    )
    # Chart space: x grows right, y grows down from the top of the plot area.
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    return fig, ax


def _save(fig: Figure, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=DPI)
    plt.close(fig)


def save_line_chart(chart: Optional[LineChart], layout: ChartLayout, output_path: Path) -> Optional[Path]:
    """Plot total gross revenue per year and save it to ``output_path``."""

    if chart is None:
        logger.warning("Line chart has no data; skipping chart")
        return None

    fig, ax = _plot_area(layout)
    xs = [chart.x(year) for year in chart.data["year"]]
    ys = [chart.y(gross) for gross in chart.data["total_gross"]]
    ax.plot(xs, ys, color=MARK_COLOR, linewidth=3)

    ax.set_xticks([chart.x(year) for year in chart.year_ticks])
    ax.set_xticklabels([f"{year:d}" for year in chart.year_ticks])
    y_ticks = chart.y.ticks()
    ax.set_yticks([chart.y(value) for value in y_ticks])
    ax.set_yticklabels([format_billions(value) for value in y_ticks])

    ax.set_title("Trends in Total Gross Movie Revenue")
    ax.set_xlabel("Year")
    ax.set_ylabel("Gross Revenue (Billion $)")
    _save(fig, output_path)

    logger.info("Saved line chart to %s", output_path)
    return output_path


def save_bar_chart(chart: Optional[BarChart], layout: ChartLayout, output_path: Path) -> Optional[Path]:
    """Plot the top directors by average IMDb score."""

    if chart is None:
        logger.warning("Bar chart has no data; skipping chart")
        return None

    fig, ax = _plot_area(layout)
    directors = chart.data["director"].astype(str).tolist()
    tops = [chart.y(score) for score in chart.data["average_score"]]
    ax.bar(
        [chart.x(director) for director in directors],
        [layout.height - top for top in tops],
        width=chart.x.bandwidth,
        bottom=tops,
        align="edge",
        color=MARK_COLOR,
    )

    ax.set_xticks([chart.x.center(director) for director in directors])
    ax.set_xticklabels(directors, fontsize=8)
    y_ticks = chart.y.ticks()
    ax.set_yticks([chart.y(value) for value in y_ticks])
    ax.set_yticklabels([f"{value:g}" for value in y_ticks])

    ax.set_title(f"Top {len(directors)} Average IMDb Scores by Director")
    ax.set_xlabel("Director")
    ax.set_ylabel("Average Score")
    _save(fig, output_path)

    logger.info("Saved bar chart to %s", output_path)
    return output_path
