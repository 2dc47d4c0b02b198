"""Theme resolver — closed lookup from selector to palette."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from chartengine.errors import InvalidDomainError


class ThemeSelector(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class ThemePalette:
    name: str
    background: str
    text: str
    axis: str
    # Metric series (sales, revenue)
    series_colors: tuple[str, ...]
    # Per-category slices of a breakdown pie; the second metric uses the alternate scheme
    category_colors: tuple[str, ...]
    alt_category_colors: tuple[str, ...]
    bar_gradient: tuple[str, str]
    tooltip_bg: str
    tooltip_text: str
    slice_stroke: str = "#fff"


_CATEGORY10 = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)
_SET3 = (
    "#8dd3c7", "#ffffb3", "#bebada", "#fb8072", "#80b1d3", "#fdb462",
    "#b3de69", "#fccde5", "#d9d9d9", "#bc80bd", "#ccebc5", "#ffed6f",
)

_PALETTES: dict[ThemeSelector, ThemePalette] = {
    ThemeSelector.LIGHT: ThemePalette(
        name="light",
        background="#f8f9fa",
        text="#333",
        axis="#333",
        series_colors=("#3498db", "#e74c3c"),
        category_colors=_CATEGORY10,
        alt_category_colors=_SET3,
        bar_gradient=("#e74c3c", "#e67e22"),
        tooltip_bg="#2c3e50",
        tooltip_text="#ecf0f1",
    ),
    ThemeSelector.DARK: ThemePalette(
        name="dark",
        background="#795d55",
        text="#fff",
        axis="#fff",
        series_colors=("#1f78b4", "#d62728"),
        category_colors=_CATEGORY10,
        alt_category_colors=_SET3,
        bar_gradient=("#c0392b", "#d35400"),
        tooltip_bg="#3498db",
        tooltip_text="#ffffff",
    ),
}


def parse_theme(selector: ThemeSelector | str) -> ThemeSelector:
    try:
        return ThemeSelector(selector)
    except ValueError:
        raise InvalidDomainError(f"Unknown theme: {selector!r}") from None


def resolve_theme(selector: ThemeSelector | str) -> ThemePalette:
    return _PALETTES[parse_theme(selector)]


def toggle_theme(selector: ThemeSelector | str) -> ThemeSelector:
    return ThemeSelector.DARK if parse_theme(selector) is ThemeSelector.LIGHT else ThemeSelector.LIGHT
