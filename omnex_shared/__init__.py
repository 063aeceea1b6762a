"""Shared utilities for the Omnex asset explorer."""
from .errors import debug_enabled, sanitize_error_message
from .log import get_logger, log_structured, log_success, request_id_var
from .result import Result
from .time import timer
from .types import (
    EXTENSIONS,
    FILTER_GROUPS,
    ErrorCode,
    FileKind,
    NodeKind,
    OutputFormat,
    classify_file,
)

__all__ = [
    "Result",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "timer",
    "ErrorCode",
    "FileKind",
    "NodeKind",
    "OutputFormat",
    "EXTENSIONS",
    "FILTER_GROUPS",
    "classify_file",
    "debug_enabled",
    "sanitize_error_message",
]
