"""Custom exceptions for docredline."""

from __future__ import annotations


class DocRedlineError(Exception):
    """Base exception for all docredline errors."""

    pass


class ConfigError(DocRedlineError):
    """Raised when a DiffConfig value is out of range."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid config {field}={value!r}: {reason}")


class ReportExportError(DocRedlineError):
    """Raised when a debug report cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write debug report {path}: {reason}")
