"""Exception hierarchy for the CSS sourcemap plugin."""

from css_sourcemap.errors.codes import ErrorCode


class CssSourcemapError(Exception):
    """Base exception for all plugin errors."""

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        """Initialize plugin error.

        Args:
            message: Error message.
            code: Optional error code.

        """
        super().__init__(message)
        self.code = code


class CssSourcemapConfigError(CssSourcemapError):
    """Invalid options, missing collaborator plugin or unusable naming template."""


class SourceMapDecodeError(CssSourcemapError):
    """Malformed VLQ mappings or sourcemap document."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        """Initialize decode error.

        Args:
            message: Error message.
            position: Offset in the mappings string where decoding failed.

        """
        super().__init__(message, code=ErrorCode.E0004)
        self.position = position


class BuildStateError(CssSourcemapError):
    """Lifecycle hook invoked in a phase that does not allow it."""
