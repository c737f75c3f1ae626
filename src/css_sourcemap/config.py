"""Plugin options."""

from collections.abc import Callable
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from css_sourcemap.constants import EXTENSIONS
from css_sourcemap.errors.codes import ErrorCode, format_error_message
from css_sourcemap.errors.exceptions import CssSourcemapConfigError


def _identity_url(file_name: str) -> str:
    return file_name


class CssSourcemapOptions(BaseModel):
    """Options accepted by :func:`css_sourcemap.css_sourcemap`.

    Attributes:
        extensions: Suffixes of modules treated as style sources.
        enabled: When False the plugin registers and emits nothing.
        folder: Subfolder, relative to each style asset, that receives
            its merged map.
        get_url: Formats the map path written into the asset's
            ``sourceMappingURL`` trailer.

    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    extensions: tuple[str, ...] = EXTENSIONS
    enabled: bool = True
    folder: str = ""
    get_url: Callable[[str], str] = Field(default=_identity_url)

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list | tuple | set | frozenset):
            normalized = []
            for ext in value:
                if not isinstance(ext, str) or not ext.strip("."):
                    msg = f"invalid extension {ext!r}"
                    raise ValueError(msg)  # noqa: TRY004
                normalized.append(f".{ext.lower().lstrip('.')}")
            if not normalized:
                msg = "at least one extension is required"
                raise ValueError(msg)
            return tuple(dict.fromkeys(normalized))
        return value

    @field_validator("folder")
    @classmethod
    def _relative_folder(cls, value: str) -> str:
        folder = PurePosixPath(value)
        if folder.is_absolute() or ".." in folder.parts:
            msg = "folder must be a relative path inside the output directory"
            raise ValueError(msg)
        return value

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "CssSourcemapOptions":
        """Validate options given as keyword arguments.

        Args:
            **kwargs: Option values.

        Returns:
            Validated options.

        Raises:
            CssSourcemapConfigError: If any value is invalid.

        """
        try:
            return cls.model_validate(kwargs)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "options"
            msg = format_error_message(
                ErrorCode.E0002,
                field=field,
                reason=first["msg"],
            )
            raise CssSourcemapConfigError(msg, code=ErrorCode.E0002) from e

    def matches(self, module_id: str) -> bool:
        """Check whether a module id names a style source.

        Query strings such as ``?inline`` or ``?used`` are ignored.

        Args:
            module_id: Module id as reported by the host.

        Returns:
            True when the id ends with a configured extension.

        """
        path = module_id.split("?", 1)[0].lower()
        return path.endswith(self.extensions)
