"""Errors and diagnostics for the CSS sourcemap plugin."""

from css_sourcemap.errors.codes import ErrorCode, format_error_message
from css_sourcemap.errors.diagnostics import Diagnostic, Severity
from css_sourcemap.errors.exceptions import (
    BuildStateError,
    CssSourcemapConfigError,
    CssSourcemapError,
    SourceMapDecodeError,
)

__all__ = [
    "BuildStateError",
    "CssSourcemapConfigError",
    "CssSourcemapError",
    "Diagnostic",
    "ErrorCode",
    "Severity",
    "SourceMapDecodeError",
    "format_error_message",
]
