"""Chart kinds and the events that drive recomputation."""

from __future__ import annotations

import enum


class ChartKind(str, enum.Enum):
    PIE = "pie"  # one slice per metric total
    BREAKDOWN_PIE = "breakdown_pie"  # one slice per category for a single metric
    LINE = "line"
    BAR = "bar"

    @property
    def is_radial(self) -> bool:
        return self in (ChartKind.PIE, ChartKind.BREAKDOWN_PIE)


class Input(str, enum.Enum):
    """Inputs a derivation stage can read."""

    DATASET = "dataset"
    VIEWPORT = "viewport"
    THEME = "theme"


class Event(str, enum.Enum):
    INITIAL = "initial"
    RESIZE = "resize"
    DATASET = "dataset"
    THEME = "theme"

    @property
    def changed_inputs(self) -> frozenset[Input]:
        return _EVENT_INPUTS[self]


_EVENT_INPUTS: dict[Event, frozenset[Input]] = {
    Event.INITIAL: frozenset(Input),
    Event.RESIZE: frozenset({Input.VIEWPORT}),
    Event.DATASET: frozenset({Input.DATASET}),
    Event.THEME: frozenset({Input.THEME}),
}
