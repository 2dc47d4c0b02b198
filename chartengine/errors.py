"""Error taxonomy for chart derivation passes.

Every error is local to a single render pass. Callers keep the last good
frame when a pass fails; ``EmptySeriesError`` is the one error that still
publishes a frame (a "no data" placeholder).
"""

from __future__ import annotations


class ChartError(Exception):
    """Base class for every chart derivation failure."""


class InvalidDomainError(ChartError, ValueError):
    """Malformed scale or geometry input (empty categories, bad padding, ...)."""


class DegenerateDomainError(ChartError, ValueError):
    """Numeric domain with zero span. Pad the domain before building the scale."""


class EmptySeriesError(ChartError):
    """Nothing to draw: all values are zero or the dataset is empty."""


class DatasetError(ChartError, ValueError):
    """Dataset invariant violated (duplicate categories, mismatched metrics, ...)."""


class NegativeValueWarning(UserWarning):
    """A value fell below the baseline and was clamped to zero height."""
