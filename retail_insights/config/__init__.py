"""
Retail Insights Reporting Layer
Configuration Module
"""
from .settings import DataSettings, ReportSettings, Settings, get_settings

__all__ = ["Settings", "ReportSettings", "DataSettings", "get_settings"]
