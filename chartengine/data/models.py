"""Dataset model — immutable, ordered records of per-category metrics.

Every mutation returns a new Dataset; downstream derivations only ever see
whole snapshots.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from chartengine.errors import DatasetError

MetricValue = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e["loc"])
        parts.append(f"{loc}: {e['msg']}" if loc else e["msg"])
    return "; ".join(parts)


class _Record(BaseModel):
    """Frozen model whose validation failures surface as DatasetError."""

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise DatasetError(f"Invalid {type(self).__name__}: {_describe(e)}") from e


class DataPoint(_Record):
    """One time bucket (e.g. a month) and its metric values."""

    category: str = Field(min_length=1)
    metrics: dict[str, MetricValue] = Field(default_factory=dict)

    def value(self, metric: str) -> float:
        try:
            return self.metrics[metric]
        except KeyError:
            raise DatasetError(f"{self.category} has no metric {metric!r}") from None

    def with_metric(self, metric: str, value: float) -> DataPoint:
        return DataPoint(category=self.category, metrics={**self.metrics, metric: value})


class Dataset(_Record):
    """Ordered sequence of DataPoint. Order is chronological and always preserved."""

    points: tuple[DataPoint, ...] = ()

    @model_validator(mode="after")
    def check_points(self) -> Dataset:
        seen: set[str] = set()
        for p in self.points:
            if p.category in seen:
                raise ValueError(f"Duplicate category: {p.category!r}")
            seen.add(p.category)

        if self.points:
            keys = set(self.points[0].metrics)
            for p in self.points[1:]:
                if set(p.metrics) != keys:
                    raise ValueError(f"{p.category} exposes metrics {sorted(p.metrics)}, expected {sorted(keys)}")
        return self

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], category_key: str = "month") -> Dataset:
        """Build from flat records such as ``{"month": "Jan", "sales": 100, "revenue": 150}``."""
        points = [
            DataPoint(
                category=rec.get(category_key),
                metrics={k: v for k, v in rec.items() if k != category_key},
            )
            for rec in records
        ]
        return cls(points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):  # type: ignore[override]
        return iter(self.points)

    def __bool__(self) -> bool:
        return bool(self.points)

    @property
    def categories(self) -> list[str]:
        return [p.category for p in self.points]

    @property
    def metric_keys(self) -> list[str]:
        if not self.points:
            return []
        return list(self.points[0].metrics)

    def series(self, metric: str) -> list[float]:
        return [p.value(metric) for p in self.points]

    def total(self, metric: str) -> float:
        return float(sum(self.series(metric)))

    def max_value(self, metrics: Iterable[str]) -> float:
        metrics = list(metrics)
        if not self.points or not metrics:
            return 0.0
        return max(p.value(m) for p in self.points for m in metrics)

    def get(self, category: str) -> DataPoint | None:
        for p in self.points:
            if p.category == category:
                return p
        return None

    # --- Mutations: each returns a new Dataset ---

    def append(self, point: DataPoint) -> Dataset:
        return Dataset(points=self.points + (point,))

    def filter(self, predicate: Callable[[DataPoint], bool]) -> Dataset:
        return Dataset(points=tuple(p for p in self.points if predicate(p)))

    def upsert(self, point: DataPoint) -> Dataset:
        """Replace the point with the same category in place, or append it."""
        if self.get(point.category) is None:
            return self.append(point)
        return Dataset(points=tuple(point if p.category == point.category else p for p in self.points))
