"""Scale mappings from data values to pixel coordinates.

The two scale types mirror what a chart needs for its axes: a continuous
linear mapping for years, revenue and scores, and a band mapping that splits
an axis into equally sized slots for categorical bars.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, Tuple

import numpy as np

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _is_nan(value: float) -> bool:
    try:
        return math.isnan(float(value))
    except (TypeError, ValueError):
        return True


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    """Return ``(first, last, increment)`` for evenly spaced round ticks.

    A negative increment means ticks are ``index / -increment`` (used for
    sub-unit steps to avoid accumulating floating point error).
    """

    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1

    if power < 0:
        inc = 10 ** (-power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10**power * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """Return roughly ``count`` round values (1, 2 or 5 times a power of ten) in ``[start, stop]``."""

    if count <= 0:
        return []
    if start == stop:
        return [float(start)]

    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []

    steps = np.arange(i1, i2 + 1, dtype="float64")
    values = steps / -inc if inc < 0 else steps * inc
    ticks = [float(value) for value in values]
    return ticks[::-1] if reverse else ticks


@dataclass(frozen=True)
class LinearScale:
    """Map a continuous domain onto a pixel range by linear interpolation.

    A domain whose ends coincide maps every value to the middle of the range.
    """

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __post_init__(self) -> None:
        if len(self.domain) != 2 or len(self.range) != 2:
            raise ValueError("LinearScale needs a two-value domain and range")
        if any(_is_nan(v) for v in (*self.domain, *self.range)):
            raise ValueError(f"LinearScale bounds must be numbers, got {self.domain} -> {self.range}")
        object.__setattr__(self, "domain", (float(self.domain[0]), float(self.domain[1])))
        object.__setattr__(self, "range", (float(self.range[0]), float(self.range[1])))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        t = (float(value) - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = r1 - r0
        t = (float(pixel) - r0) / span if span else 0.5
        return d0 + t * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class BandScale:
    """Split a pixel range into equal bands, one per category.

    ``padding`` is used both between bands and before the first / after the
    last band, expressed as a fraction of the step.  Bands are centred in the
    range.
    """

    domain: Tuple[Hashable, ...]
    range: Tuple[float, float]
    padding: float = 0.1
    step: float = field(init=False)
    bandwidth: float = field(init=False)
    _positions: Dict[Hashable, float] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.padding <= 1:
            raise ValueError(f"padding must be within [0, 1], got {self.padding}")

        categories: list[Hashable] = []
        for category in self.domain:
            if category not in categories:
                categories.append(category)
        object.__setattr__(self, "domain", tuple(categories))

        r0, r1 = float(self.range[0]), float(self.range[1])
        object.__setattr__(self, "range", (r0, r1))
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)

        n = len(categories)
        step = (stop - start) / max(1, n - self.padding + self.padding * 2)
        start += (stop - start - step * (n - self.padding)) * 0.5
        positions = [start + step * i for i in range(n)]
        if reverse:
            positions.reverse()

        object.__setattr__(self, "step", step)
        object.__setattr__(self, "bandwidth", step * (1 - self.padding))
        object.__setattr__(self, "_positions", dict(zip(categories, positions)))

    def __call__(self, category: Hashable) -> float:
        try:
            return self._positions[category]
        except KeyError:
            raise KeyError(f"Unknown category {category!r}") from None

    def center(self, category: Hashable) -> float:
        return self(category) + self.bandwidth / 2

