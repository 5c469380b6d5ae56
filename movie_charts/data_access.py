"""Locate, download and load the movie metadata table.

The charts are built from a single comma-separated file (``movies.csv`` by
default).  We first look for it in a few conventional places on disk and only
fall back to a network fetch when the caller passes an ``http(s)`` URL.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional
from urllib.parse import urlparse

import numpy as np
import pandas as pd
import requests

from movie_charts.analysis import Record

DEFAULT_DATASET = "movies.csv"

# Source column -> cleaned column.  Numeric columns are coerced, the director
# name is copied as text.
NUMERIC_FIELDS: Dict[str, str] = {
    "imdb_score": "score",
    "title_year": "year",
    "gross": "gross",
}
DIRECTOR_FIELD = "director_name"

# Whole numbers from here on are not exact in float64; such years count as malformed.
MAX_EXACT_YEAR = 2**53

logger = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when the source table cannot be fetched or parsed."""


def _candidate_directories(data_dir: Path) -> Iterable[Path]:
    """Yield the directories searched for the movie CSV, most specific first.

    ``data_dir`` comes from the caller, then ``$MOVIES_DATA_DIR`` when set, then
    ``~/data``.  Duplicates after resolving symlinks are skipped.
    """

    env_dir = os.environ.get("MOVIES_DATA_DIR")
    candidates = [data_dir]
    if env_dir:
        candidates.append(Path(env_dir))
    candidates.append(Path.home() / "data")

    seen = set()
    for raw_dir in candidates:
        try:
            directory = raw_dir.resolve()
        except FileNotFoundError:
            directory = raw_dir
        if directory in seen:
            continue
        seen.add(directory)
        yield directory


def locate_dataset(name: str, data_dir: Path) -> Optional[Path]:
    """Return the path of ``name`` if it already exists on disk."""

    direct = Path(name)
    if direct.is_file():
        logger.info("Using local dataset %s", direct)
        return direct

    for base_dir in _candidate_directories(data_dir):
        candidate = base_dir / name
        if candidate.is_file():
            logger.info("Using local dataset %s", candidate)
            return candidate

        # One level of sub-directories, e.g. ``<data_dir>/imdb/movies.csv``.
        if base_dir.is_dir():
            for child in sorted(base_dir.iterdir()):
                if not child.is_dir():
                    continue
                candidate = child / name
                if candidate.is_file():
                    logger.info("Using local dataset %s", candidate)
                    return candidate
    return None


def fetch_dataset(url: str, data_dir: Path) -> Path:
    """Download ``url`` into ``data_dir`` unless it is already there.

    Parameters
    ----------
    url:
        Remote location of the CSV file.
    data_dir:
        Directory where the download should be stored.

    Returns
    -------
    Path
        Location of the downloaded file.
    """

    name = Path(urlparse(url).path).name or DEFAULT_DATASET
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / name

    if path.exists():
        logger.info("Dataset %s already present at %s", name, path)
        return path

    logger.info("Downloading %s to %s", url, path)
    try:
        with requests.get(url, stream=True, timeout=30) as response:
            response.raise_for_status()
            with path.open("wb") as f:
                for chunk in response.iter_content(chunk_size=1 << 15):
                    if chunk:
                        f.write(chunk)
    except (requests.RequestException, OSError) as exc:
        path.unlink(missing_ok=True)
        raise DatasetLoadError(f"Could not download {url}") from exc

    logger.info("Finished downloading %s", name)
    return path


def resolve_source(source: str, data_dir: Path) -> Path:
    """Turn a path or URL given by the user into a local file."""

    if urlparse(source).scheme in ("http", "https"):
        return fetch_dataset(source, data_dir)

    path = locate_dataset(source, data_dir)
    if path is None:
        raise DatasetLoadError(f"Dataset {source!r} not found in {data_dir} or the fallback locations")
    return path


def clean_movies(raw: pd.DataFrame) -> pd.DataFrame:
    """Coerce the raw text columns into the typed fields used by the charts.

    Unparsable numbers become missing values instead of raising, and a missing
    column is treated as entirely missing.  Non-integral years count as
    malformed.
    """

    movies = raw.copy()
    for source, target in NUMERIC_FIELDS.items():
        if source in movies.columns:
            values = pd.to_numeric(movies[source], errors="coerce").astype("float64")
            movies[target] = values.where(np.isfinite(values))
        else:
            logger.warning("Column %s missing from dataset; treating %s as absent", source, target)
            movies[target] = np.nan

    year = movies["year"]
    movies["year"] = year.where((year == np.floor(year)) & (year.abs() < MAX_EXACT_YEAR)).astype("Int64")

    if DIRECTOR_FIELD in movies.columns:
        movies["director"] = movies[DIRECTOR_FIELD].fillna("").astype(str)
    else:
        logger.warning("Column %s missing from dataset; treating director as absent", DIRECTOR_FIELD)
        movies["director"] = ""

    return movies


def load_movies(path: Path) -> pd.DataFrame:
    """Load the movie table into a cleaned :class:`~pandas.DataFrame`."""

    try:
        raw = pd.read_csv(
            path,
            dtype=object,
            keep_default_na=False,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DatasetLoadError(f"Could not read dataset {path}") from exc

    movies = clean_movies(raw)
    logger.info("Loaded %d movie records from %s", len(movies), path)
    logger.debug("Cleaned movies:\n%s", movies[["director", "score", "year", "gross"]].head())
    return movies


def records_from_frame(movies: pd.DataFrame) -> list[Record]:
    """Convert a cleaned frame into :class:`Record` objects."""

    records = []
    for row in movies[["director", "score", "year", "gross"]].itertuples(index=False):
        records.append(
            Record(
                director=row.director,
                score=float(row.score),
                year=None if pd.isna(row.year) else int(row.year),
                gross=float(row.gross),
            )
        )
    return records
