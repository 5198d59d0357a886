"""Exception types for nepdict.

Only ``ConfigurationError`` ever reaches a caller. Source and record
problems are logged where they are caught and loading continues with the
remaining data.
"""

from typing import Any, Dict, Optional


class NepdictError(Exception):
    """Base exception for all nepdict errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}


class SourceUnavailableError(NepdictError):
    """A data source could not be fetched or decoded."""

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="source_unavailable", context=context)
        self.source_name = source_name


class MalformedRecordError(NepdictError):
    """A raw record is missing a headword, romanization, part of speech or definitions."""

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        record: Any = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="malformed_record", context=context)
        self.source_name = source_name
        self.record = record


class ConfigurationError(NepdictError):
    """Configuration could not be read or failed validation."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="configuration_error", context=context)
        self.config_key = config_key
