"""Shared test fixtures."""

from __future__ import annotations

import pytest

from chartengine.data.models import Dataset
from chartengine.data.source import StaticDataSource
from chartengine.engine.config import ChartConfig


# The dashboard's monthly sample, in chronological order
SAMPLE_ROWS = [
    {"month": "Jan", "sales": 100, "revenue": 150},
    {"month": "Feb", "sales": 200, "revenue": 100},
    {"month": "Mar", "sales": 150, "revenue": 250},
    {"month": "Apr", "sales": 300, "revenue": 200},
    {"month": "May", "sales": 250, "revenue": 350},
    {"month": "Jun", "sales": 400, "revenue": 300},
]

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]

# Three-bucket quarter used by the smaller geometry tests
QUARTER_ROWS = [
    {"month": "Jan", "sales": 100, "revenue": 150},
    {"month": "Feb", "sales": 200, "revenue": 100},
    {"month": "Mar", "sales": 0, "revenue": 250},
]

ZERO_ROWS = [
    {"month": "Jan", "sales": 0, "revenue": 0},
    {"month": "Feb", "sales": 0, "revenue": 0},
]


@pytest.fixture
def sample_dataset() -> Dataset:
    return Dataset.from_records(SAMPLE_ROWS)


@pytest.fixture
def quarter_dataset() -> Dataset:
    return Dataset.from_records(QUARTER_ROWS)


@pytest.fixture
def source() -> StaticDataSource:
    return StaticDataSource(SAMPLE_ROWS)


@pytest.fixture
def config() -> ChartConfig:
    return ChartConfig()
