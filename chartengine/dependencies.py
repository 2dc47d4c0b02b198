"""FastAPI dependency injection."""

from __future__ import annotations

from chartengine.config import settings
from chartengine.data.source import StaticDataSource

_source = StaticDataSource()


def get_settings():
    return settings


def get_data_source() -> StaticDataSource:
    return _source
