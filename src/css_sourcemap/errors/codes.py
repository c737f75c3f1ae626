"""Error and warning codes for the CSS sourcemap plugin.

Codes follow the convention E0001-E9999 for fatal conditions and
W0001-W9999 for conditions the build recovers from.
"""

from enum import Enum

from css_sourcemap.log import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Plugin error and warning codes."""

    E0001 = "E0001"
    """Required collaborator plugin is not installed."""

    E0002 = "E0002"
    """Invalid plugin option."""

    E0003 = "E0003"
    """Naming template evaluated to an unusable value."""

    E0004 = "E0004"
    """Malformed sourcemap data."""

    E0005 = "E0005"
    """Lifecycle hook invoked out of order."""

    W0001 = "W0001"
    """Style asset has no discoverable contributing modules."""

    W0002 = "W0002"
    """Per-module map asset missing from the output bundle."""

    @property
    def is_warning(self) -> bool:
        """Whether the code describes a recoverable condition.

        Returns:
            True for W-prefixed codes.

        """
        return self.value.startswith("W")


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.E0001: "{name} plugin not found",
    ErrorCode.E0002: "invalid option '{field}': {reason}",
    ErrorCode.E0003: "{kind} naming template returned {value!r}, expected a string",
    ErrorCode.E0004: "malformed sourcemap: {reason}",
    ErrorCode.E0005: "cannot enter phase {target} from {current}",
    ErrorCode.W0001: "no source map found for {asset}",
    ErrorCode.W0002: "map asset {map_file} for module {module_id} is not in the bundle",
}


def format_error_message(code: ErrorCode, **kwargs: object) -> str:
    """Format an error message with the given parameters.

    Args:
        code: The error code.
        **kwargs: Parameters to substitute in the message template.

    Returns:
        Formatted error message string.

    """
    template = ERROR_MESSAGES.get(code, "unknown error")
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter for error message: %s", e)
        return template
