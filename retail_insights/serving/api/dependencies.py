"""
API Dependencies

The fact table snapshot is loaded once per process from the configured file
and shared by every request. Applications may install another loader
through app.state.snapshot_loader.
"""

from functools import lru_cache

from fastapi import Depends, Request

from retail_insights.analytics.queries import ReportEngine
from retail_insights.config import get_settings
from retail_insights.ingestion.snapshot import FactTableSnapshot


@lru_cache()
def load_configured_snapshot() -> FactTableSnapshot:
    """Load the snapshot named by DataSettings (cached)"""
    settings = get_settings()
    return FactTableSnapshot.load(settings.data.orders_path, settings.data.file_format)


def get_snapshot(request: Request) -> FactTableSnapshot:
    """Snapshot for the current application"""
    return request.app.state.snapshot_loader()


def get_engine(snapshot: FactTableSnapshot = Depends(get_snapshot)) -> ReportEngine:
    """Report engine bound to the snapshot and the report settings"""
    return ReportEngine(snapshot, get_settings().reports)
