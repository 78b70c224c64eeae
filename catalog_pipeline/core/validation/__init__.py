"""
Validation engine for channel catalogs
"""

from .finding import ERROR, WARNING, Finding, ValidationReport
from .validation_engine import RawObject, ValidationEngine

__all__ = ["ERROR", "WARNING", "Finding", "RawObject", "ValidationEngine", "ValidationReport"]
