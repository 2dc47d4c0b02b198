"""Scale builders — categorical (band/point) and linear domain→pixel mappings.

Scales are immutable value objects; the domain is derived once per render
pass from the current Dataset.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from chartengine.errors import DegenerateDomainError, InvalidDomainError

# Tick-step thresholds: an ideal step is rounded to 1, 2, 5 or 10 x 10^k.
# sqrt(50) ~ 7.07, sqrt(10) ~ 3.16, sqrt(2) ~ 1.41 are the geometric midpoints.
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

# Nice uses ~10 ticks when no count is given.
_DEFAULT_NICE_COUNT = 10
# Nicing converges in two passes; a third guards against float drift.
_NICE_MAX_PASSES = 3


@dataclass(frozen=True)
class CategoricalScale:
    """Ordered categories -> evenly spaced centre positions."""

    categories: tuple[str, ...]
    range_start: float
    range_end: float
    padding: float
    kind: str  # "band" or "point"
    step: float
    bandwidth: float
    _positions: dict[str, float] = field(repr=False, compare=False)

    def __call__(self, category: str) -> float:
        try:
            return self._positions[category]
        except KeyError:
            raise InvalidDomainError(f"Unknown category: {category!r}") from None

    def __contains__(self, category: str) -> bool:
        return category in self._positions

    @property
    def positions(self) -> list[float]:
        return [self._positions[c] for c in self.categories]

    def band_start(self, category: str) -> float:
        return self(category) - self.bandwidth / 2


def build_categorical_scale(
    categories: Sequence[str],
    range_start: float,
    range_end: float,
    padding: float = 0.0,
    kind: str = "band",
) -> CategoricalScale:
    """Assign each category an evenly spaced position between range_start and range_end.

    Band: each category owns ``bandwidth`` pixels; ``padding`` is the fraction
    of a step left empty between bands and on both outer edges.
    Point: bandwidth 0; ``padding`` is the outer inset in step units.
    """
    cats = tuple(categories)
    if not cats:
        raise InvalidDomainError("Categorical scale needs at least one category")
    if len(set(cats)) != len(cats):
        raise InvalidDomainError(f"Duplicate categories in domain: {list(cats)}")
    if not 0.0 <= padding < 1.0:
        raise InvalidDomainError(f"padding must be in [0, 1), got {padding}")
    if kind not in ("band", "point"):
        raise InvalidDomainError(f"Unknown categorical scale kind: {kind!r}")

    n = len(cats)
    span = range_end - range_start

    if kind == "band":
        step = span / (n + padding)
        bandwidth = step * (1 - padding)
        first = range_start + step * padding + bandwidth / 2
    else:
        slots = n - 1 + 2 * padding
        step = span / slots if slots > 0 else 0.0
        bandwidth = 0.0
        first = range_start + step * padding if slots > 0 else range_start + span / 2

    positions = {c: first + step * i for i, c in enumerate(cats)}
    return CategoricalScale(
        categories=cats,
        range_start=range_start,
        range_end=range_end,
        padding=padding,
        kind=kind,
        step=step,
        bandwidth=bandwidth,
        _positions=positions,
    )


def tick_increment(start: float, stop: float, count: int) -> float:
    """Round step (1/2/5 x 10^k) for roughly ``count`` ticks across [start, stop]."""
    raw = (stop - start) / max(count, 1)
    if raw <= 0:
        return 0.0
    power = math.floor(math.log10(raw))
    error = raw / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    return factor * 10**power


def nice_domain(domain_min: float, domain_max: float, count: int = _DEFAULT_NICE_COUNT) -> tuple[float, float]:
    """Expand [min, max] outward to multiples of the tick step."""
    lo, hi = domain_min, domain_max
    prev_step = None
    for _ in range(_NICE_MAX_PASSES):
        step = tick_increment(lo, hi, count)
        if step == prev_step or step <= 0:
            break
        lo = math.floor(lo / step) * step
        hi = math.ceil(hi / step) * step
        prev_step = step
    return lo, hi


@dataclass(frozen=True)
class LinearScale:
    """Numeric interval -> pixel interval."""

    domain_min: float
    domain_max: float
    range_start: float
    range_end: float

    def __call__(self, value: float) -> float:
        t = (value - self.domain_min) / (self.domain_max - self.domain_min)
        return self.range_start + t * (self.range_end - self.range_start)

    def invert(self, pixel: float) -> float:
        t = (pixel - self.range_start) / (self.range_end - self.range_start)
        return self.domain_min + t * (self.domain_max - self.domain_min)

    @property
    def domain(self) -> tuple[float, float]:
        return (self.domain_min, self.domain_max)

    def ticks(self, count: int = _DEFAULT_NICE_COUNT) -> list[float]:
        """Round tick values within the domain, ascending."""
        step = tick_increment(self.domain_min, self.domain_max, count)
        if step <= 0:
            return [self.domain_min]
        first = math.ceil(self.domain_min / step)
        last = math.floor(self.domain_max / step)
        ks = np.arange(first, last + 1)
        # Multiply integers by the step, then round away binary noise (0.1 * 3).
        decimals = max(0, -math.floor(math.log10(step)))
        return [round(float(k * step), decimals) for k in ks]


def build_linear_scale(
    domain_min: float,
    domain_max: float,
    range_start: float,
    range_end: float,
    nice: bool = False,
) -> LinearScale:
    """Linear interpolation from [domain_min, domain_max] onto [range_start, range_end]."""
    if domain_min == domain_max:
        raise DegenerateDomainError(
            f"Linear domain has zero span ({domain_min}); pad it before building the scale"
        )
    if not (math.isfinite(domain_min) and math.isfinite(domain_max)):
        raise InvalidDomainError(f"Linear domain must be finite: [{domain_min}, {domain_max}]")
    if domain_min > domain_max:
        raise InvalidDomainError(f"Linear domain is reversed: [{domain_min}, {domain_max}]")
    if nice:
        domain_min, domain_max = nice_domain(domain_min, domain_max)
    return LinearScale(domain_min, domain_max, range_start, range_end)
