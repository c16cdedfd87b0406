"""
Data Quality Module
"""
from .validators import DataValidator, ValidationResult, create_order_lines_validator

__all__ = [
    "DataValidator",
    "ValidationResult",
    "create_order_lines_validator",
]
