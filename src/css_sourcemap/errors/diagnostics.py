"""Diagnostic records for recoverable plugin conditions.

A diagnostic is collected on the build context instead of failing the
build, so the embedding tool can surface it after bundling.
"""

from dataclasses import dataclass
from enum import Enum
from logging import ERROR, WARNING

from css_sourcemap.errors.codes import ErrorCode, format_error_message
from css_sourcemap.log import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    """A condition that aborts the build."""

    WARNING = "warning"
    """A condition the build recovers from."""


@dataclass(frozen=True)
class Diagnostic:
    """A diagnostic message about one output asset."""

    severity: Severity
    """The severity level of this diagnostic."""

    code: ErrorCode
    """Code identifying the condition."""

    message: str
    """Formatted message (no leading capital, no trailing period)."""

    asset: str | None = None
    """Output file name the diagnostic refers to, if any."""

    @classmethod
    def warning(
        cls,
        code: ErrorCode,
        *,
        asset: str | None = None,
        **kwargs: object,
    ) -> "Diagnostic":
        """Create a warning diagnostic from a message template.

        Args:
            code: Warning code.
            asset: Output file name the warning refers to.
            **kwargs: Template parameters for the code's message.

        Returns:
            A new Diagnostic with WARNING severity.

        """
        return cls(
            severity=Severity.WARNING,
            code=code,
            message=format_error_message(code, asset=asset, **kwargs),
            asset=asset,
        )

    def log(self) -> None:
        """Write the diagnostic to the plugin log at its severity."""
        level = ERROR if self.severity is Severity.ERROR else WARNING
        logger.log(level, "%s", self)

    def __str__(self) -> str:
        """Format as ``warning[W0001]: message``."""
        return f"{self.severity.value}[{self.code.value}]: {self.message}"
