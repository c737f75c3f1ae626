"""Sourcemap document model.

Wrap the revision 3 sourcemap JSON document in a pydantic model so
upstream maps with missing or ``null`` fields are normalized in one
place.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from css_sourcemap.constants import SOURCEMAP_VERSION
from css_sourcemap.errors.exceptions import SourceMapDecodeError


class SourceMap(BaseModel):
    """A revision 3 sourcemap.

    ``sources_content`` is always as long as ``sources``; entries with
    no known content are ``None``.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    version: int = SOURCEMAP_VERSION
    file: str | None = None
    sources: list[str | None] = Field(default_factory=list)
    sources_content: list[str | None] = Field(
        default_factory=list,
        alias="sourcesContent",
    )
    names: list[str] = Field(default_factory=list)
    mappings: str = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Treat ``null`` list and string fields as missing."""
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    @model_validator(mode="after")
    def _pad_sources_content(self) -> "SourceMap":
        """Keep ``sources_content`` aligned with ``sources``."""
        missing = len(self.sources) - len(self.sources_content)
        if missing > 0:
            self.sources_content.extend([None] * missing)
        elif missing < 0:
            del self.sources_content[len(self.sources) :]
        return self

    @classmethod
    def from_json(cls, data: str | bytes) -> "SourceMap":
        """Parse a serialized sourcemap.

        Args:
            data: JSON text of the map.

        Returns:
            The parsed map.

        Raises:
            SourceMapDecodeError: If the text is not a valid sourcemap.

        """
        try:
            return cls.model_validate(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as e:
            msg = f"invalid sourcemap document: {e}"
            raise SourceMapDecodeError(msg) from e

    def to_json(self) -> str:
        """Serialize using the standard camelCase field names.

        Returns:
            Compact JSON text.

        """
        return json.dumps(
            self.model_dump(by_alias=True),
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def is_empty(self) -> bool:
        """Check whether the map carries no meaningful mapping data.

        Returns:
            True when there are no mappings or no sources.

        """
        return not self.mappings or not self.sources

    @property
    def line_count(self) -> int:
        """Number of generated lines described by ``mappings``."""
        if not self.mappings:
            return 0
        return self.mappings.count(";") + 1

    def pad_lines(self, line_count: int) -> "SourceMap":
        """Extend ``mappings`` with empty lines up to ``line_count``.

        Upstream tools often leave out trailing unmapped lines. Maps
        appended after this one are offset by its line count, so it must
        cover every line of the generated text.

        Args:
            line_count: Number of lines of the generated text.

        Returns:
            A padded copy, or this map when it already covers enough lines.

        """
        missing = line_count - self.line_count
        if missing <= 0:
            return self
        # An empty mappings string has no lines, a single group has one
        padding = ";" * (missing if self.mappings else missing - 1)
        return self.model_copy(update={"mappings": self.mappings + padding})
