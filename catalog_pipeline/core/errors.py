"""
Catalog Errors
Exception taxonomy shared by codecs, validation and storage
"""

from typing import List, Optional


class CatalogError(Exception):
    """Base class for every catalog pipeline failure."""
    pass


class InputNotFound(CatalogError):
    """Raised when an input or catalog file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"File not found: {path}")


class ParseError(CatalogError):
    """Raised when input is malformed for the selected format."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"Line {line}: {message}"
        super().__init__(message)


class SchemaViolation(CatalogError):
    """Raised when one or more error-severity findings block an operation."""

    def __init__(self, findings: List):
        self.findings = list(findings)
        summary = "; ".join(str(f) for f in self.findings[:3])
        if len(self.findings) > 3:
            summary += f" (+{len(self.findings) - 3} more)"
        super().__init__(f"{len(self.findings)} schema violation(s): {summary}")


class DuplicateError(CatalogError):
    """Raised when a record's url already exists in the catalog."""

    def __init__(self, url: str, name: str = ""):
        self.url = url
        self.name = name
        super().__init__(f"Channel with URL '{url}' already exists.")


class UnsupportedConversion(CatalogError):
    """Raised when no codec pair is registered for an extension pair."""
    pass


class CatalogBusyError(CatalogError):
    """Raised when the catalog lock cannot be acquired in time."""
    pass
