"""Engine configuration — sizing, padding and interaction tunables."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ChartConfig:
    """Tunables shared by every chart kind."""

    # Responsive sizing: full size at or above the breakpoint, proportional below
    breakpoint_width: float = 1200.0
    pie_size: float = 400.0
    breakdown_pie_size: float = 320.0
    cartesian_width: float = 800.0
    cartesian_aspect: float = 9 / 16  # height / width
    # Smallest plot area kept inside the margins on narrow viewports
    min_plot_size: float = 80.0

    # Categorical padding (band for bars, point for lines)
    band_padding: float = 0.3
    point_padding: float = 0.5

    # Value axis: headroom above the largest value, then niced
    value_headroom: float = 1.1
    y_tick_count: int = 6

    # Pie radii: breakdown pies inset from the half-size by a divisor and a gap
    breakdown_radius_divisor: float = 2.3
    breakdown_radius_gap: float = 5.0

    # Line markers
    marker_radius: float = 4.0
    curve_kind: str = "monotone"

    # Legend: swatch + label per fixed-width slot, offset above the top margin
    legend_slot_width: float = 100.0
    legend_swatch_size: float = 15.0
    legend_offset: float = 30.0

    # Data labels
    bar_label_gap: float = 5.0

    # Tooltip offsets (dx, dy) per anchor kind
    tooltip_offsets: dict[str, tuple[float, float]] = field(
        default_factory=lambda: {
            "arc": (0.0, -28.0),
            "path": (0.0, -10.0),
            "bar": (0.0, -10.0),
        }
    )
    tooltip_clamp: bool = False
    tooltip_box: tuple[float, float] = (120.0, 40.0)

    # Line hover: max horizontal distance from a data point, in px
    line_hit_tolerance: float = 24.0

    placeholder_text: str = "No data to display"
