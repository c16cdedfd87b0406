"""
Data Ingestion Module
"""
from .snapshot import FactTableSnapshot, FileFormat

__all__ = [
    "FactTableSnapshot",
    "FileFormat",
]
