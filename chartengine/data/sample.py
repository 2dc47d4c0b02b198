"""Static monthly sample dataset."""

from __future__ import annotations

SAMPLE_RECORDS: list[dict[str, float | str]] = [
    {"month": "Jan", "sales": 100, "revenue": 150},
    {"month": "Feb", "sales": 200, "revenue": 100},
    {"month": "Mar", "sales": 150, "revenue": 250},
    {"month": "Apr", "sales": 300, "revenue": 200},
    {"month": "May", "sales": 250, "revenue": 350},
    {"month": "Jun", "sales": 400, "revenue": 300},
]

METRICS: tuple[str, ...] = ("sales", "revenue")
