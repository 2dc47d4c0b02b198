"""Bar geometry — one rectangle per category, measured from the baseline."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping, Sequence

from chartengine.engine.scales import CategoricalScale, LinearScale
from chartengine.errors import NegativeValueWarning
from chartengine.geometry.primitives import Bar

logger = logging.getLogger(__name__)

BarPoint = tuple[str, float] | Mapping[str, object]


def _category_value(item: BarPoint) -> tuple[str, float]:
    if isinstance(item, Mapping):
        return str(item["category"]), float(item["value"])  # type: ignore[arg-type]
    category, value = item
    return str(category), float(value)


def compute_bars(
    points: Sequence[BarPoint],
    category_scale: CategoricalScale,
    value_scale: LinearScale,
    baseline_y: float,
    *,
    color: str = "",
    name: str = "",
    series: int = 0,
    id_prefix: str = "bar",
) -> tuple[Bar, ...]:
    """Rectangles from ``baseline_y`` up to each scaled value.

    Values that land below the baseline are clamped to zero height and
    reported with NegativeValueWarning.
    """
    bars = []
    for i, item in enumerate(points):
        category, value = _category_value(item)
        top = value_scale(value)
        height = baseline_y - top
        if height < 0:
            logger.warning("Bar %s: value %s below baseline, clamped to zero height", category, value)
            warnings.warn(
                f"{category}: value {value} falls below the baseline; clamped to zero height",
                NegativeValueWarning,
                stacklevel=2,
            )
            height = 0.0
            top = baseline_y

        bars.append(
            Bar(
                id=f"{id_prefix}-{i}",
                x=category_scale(category) - category_scale.bandwidth / 2,
                y=top,
                width=category_scale.bandwidth,
                height=height,
                color=color,
                label=category,
                value=value,
                name=name,
                series=series,
            )
        )
    return tuple(bars)
