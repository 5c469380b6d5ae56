"""Build the movie revenue and director score charts and a Markdown summary."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from movie_charts.analysis import LINE_START_YEAR, TOP_DIRECTORS
from movie_charts.charts import save_bar_chart, save_line_chart
from movie_charts.data_access import DEFAULT_DATASET, load_movies, resolve_source
from movie_charts.pipeline import build_charts
from movie_charts.report import build_report, build_sections


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--source",
        default=DEFAULT_DATASET,
        help="Path or http(s) URL of the movie CSV file",
    )
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="Where datasets are looked up and stored")
    parser.add_argument(
        "--figures-dir",
        type=Path,
        default=Path("reports/figures"),
        help="Directory where generated charts will be written",
    )
    parser.add_argument("--report", type=Path, default=Path("reports/movie_charts.md"), help="Output report path")
    parser.add_argument("--start-year", type=int, default=LINE_START_YEAR, help="First year on the revenue chart")
    parser.add_argument("--top-n", type=int, default=TOP_DIRECTORS, help="Number of directors on the bar chart")
    parser.add_argument("--log-level", default="INFO", help="Logging level, e.g. DEBUG to dump intermediate tables")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    LOGGER.info("Resolving dataset %s", args.source)
    dataset_path = resolve_source(args.source, args.data_dir)
    movies = load_movies(dataset_path)

    bundle = build_charts(movies, start_year=args.start_year, top_n=args.top_n)

    figures_dir = args.figures_dir
    save_line_chart(bundle.line, bundle.layout, figures_dir / "gross_by_year.png")
    save_bar_chart(bundle.bar, bundle.layout, figures_dir / "top_directors.png")

    report_text = build_report(build_sections(bundle, str(dataset_path), len(movies)))
    args.report.parent.mkdir(parents=True, exist_ok=True)
    args.report.write_text(report_text, encoding="utf-8")
    LOGGER.info("Report written to %s", args.report)


if __name__ == "__main__":
    main()
