"""DataSource — supplies the initial Dataset and applies mutation requests."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime

from chartengine.data.models import DataPoint, Dataset
from chartengine.data.sample import SAMPLE_RECORDS

logger = logging.getLogger(__name__)

# Synthesized revenue is drawn from [100, 500), matching the dashboard's "Add Data" action.
_SYNTH_REVENUE_MIN = 100
_SYNTH_REVENUE_SPAN = 400

Predicate = Callable[[DataPoint], bool]


def revenue_at_least(threshold: float) -> Predicate:
    """Predicate for the "Filter Revenue >= $threshold" action."""

    def predicate(point: DataPoint) -> bool:
        return point.value("revenue") >= threshold

    return predicate


class StaticDataSource:
    """In-memory data source. ``load()`` is synchronous and always returns the same snapshot."""

    def __init__(
        self,
        records: Iterable[Mapping[str, object]] | None = None,
        category_key: str = "month",
    ) -> None:
        self.category_key = category_key
        self._dataset = Dataset.from_records(
            SAMPLE_RECORDS if records is None else records, category_key=category_key
        )

    def load(self) -> Dataset:
        return self._dataset

    def append(self, dataset: Dataset, point: DataPoint) -> Dataset:
        new = dataset.append(point)
        logger.debug("Appended %s (%d -> %d points)", point.category, len(dataset), len(new))
        return new

    def filter(self, dataset: Dataset, predicate: Predicate) -> Dataset:
        new = dataset.filter(predicate)
        logger.debug("Filtered dataset: %d -> %d points", len(dataset), len(new))
        return new

    def upsert(self, dataset: Dataset, point: DataPoint) -> Dataset:
        return dataset.upsert(point)

    def synthesize(
        self,
        dataset: Dataset,
        *,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> Dataset:
        """Add or refresh the current month.

        If the month already exists only its revenue is replaced; otherwise a
        new month with zero sales is appended.
        """
        now = now or datetime.now()
        rng = rng or random.Random()
        month = now.strftime("%b")
        revenue = float(rng.randrange(_SYNTH_REVENUE_SPAN) + _SYNTH_REVENUE_MIN)

        existing = dataset.get(month)
        if existing is not None:
            point = existing.with_metric("revenue", revenue)
        else:
            metrics = {key: 0.0 for key in dataset.metric_keys} or {"sales": 0.0}
            metrics["revenue"] = revenue
            point = DataPoint(category=month, metrics=metrics)

        logger.info("Synthesized %s revenue=%.0f (%s)", month, revenue, "update" if existing else "append")
        return dataset.upsert(point)
