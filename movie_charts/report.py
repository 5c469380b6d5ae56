"""Markdown summary of the two chart tables."""

from __future__ import annotations

from typing import Dict

import pandas as pd

from movie_charts.pipeline import ChartBundle


def render_table(df: pd.DataFrame) -> str:
    """Render a dataframe as GitHub-flavoured Markdown."""

    return df.to_markdown(index=False)


def build_report(sections: Dict[str, str]) -> str:
    """Combine named sections into a Markdown document."""

    lines = ["# Movie Revenue and Director Scores", ""]
    for title, body in sections.items():
        lines.append(f"## {title}")
        lines.append("")
        lines.append(body)
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def _format_billions(value: float) -> str:
    return f"{value / 1_000_000_000:.2f}B"


def build_sections(bundle: ChartBundle, source: str, record_count: int) -> Dict[str, str]:
    sections: Dict[str, str] = {}

    sections["Data Snapshot"] = f"* Loaded {record_count:,} records from `{source}`."

    if bundle.line is None:
        sections["Total Gross by Year"] = "No records with both a release year and gross revenue were found."
    else:
        totals = bundle.line.data
        peak = totals.loc[totals["total_gross"].idxmax()]
        table = totals.assign(total_gross=totals["total_gross"].map(_format_billions))
        sections["Total Gross by Year"] = (
            f"Revenue peaked in {int(peak['year'])} at {_format_billions(peak['total_gross'])}.\n\n"
            + render_table(table.rename(columns={"year": "Year", "total_gross": "Total gross"}))
        )

    if bundle.bar is None:
        sections["Top Directors"] = "No records with both a director and an IMDb score were found."
    else:
        averages = bundle.bar.data.assign(average_score=bundle.bar.data["average_score"].round(2))
        sections["Top Directors"] = render_table(
            averages.rename(columns={"director": "Director", "average_score": "Average score"})
        )

    return sections
