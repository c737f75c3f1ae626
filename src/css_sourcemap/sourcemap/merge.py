"""Concatenation of per-module sourcemaps into one map.

Style modules are laid out one after another in the bundled asset, so
each map is appended below the previous ones: its generated lines are
shifted past all prior lines and its source and name indices past all
prior sources and names.
"""

from collections.abc import Iterable

from css_sourcemap.sourcemap.model import SourceMap
from css_sourcemap.sourcemap.vlq import Segment, decode_mappings, encode_mappings

_SOURCE_INDEX = 1
_NAME_INDEX = 4


def _shift_segment(segment: Segment, source_offset: int, name_offset: int) -> Segment:
    if len(segment) <= _SOURCE_INDEX:
        return segment
    shifted = list(segment)
    shifted[_SOURCE_INDEX] += source_offset
    if len(shifted) > _NAME_INDEX:
        shifted[_NAME_INDEX] += name_offset
    return tuple(shifted)


def _concat(maps: list[SourceMap]) -> SourceMap:
    """Concatenate two or more maps, decoding and encoding each once."""
    lines: list[list[Segment]] = []
    sources: list[str | None] = []
    sources_content: list[str | None] = []
    names: list[str] = []
    for sourcemap in maps:
        source_offset = len(sources)
        name_offset = len(names)
        lines.extend(
            [_shift_segment(segment, source_offset, name_offset) for segment in line]
            for line in decode_mappings(sourcemap.mappings)
        )
        sources.extend(sourcemap.sources)
        sources_content.extend(sourcemap.sources_content)
        names.extend(sourcemap.names)

    return SourceMap(
        version=maps[0].version,
        file=next((m.file for m in maps if m.file), None),
        sources=sources,
        sources_content=sources_content,
        names=names,
        mappings=encode_mappings(lines),
    )


def concat_sourcemaps(first: SourceMap, second: SourceMap) -> SourceMap:
    """Append ``second`` below ``first``.

    Args:
        first: Map of the leading content.
        second: Map of the content that follows it.

    Returns:
        A new map covering both; neither input is modified.

    Raises:
        SourceMapDecodeError: If either map has malformed mappings.

    """
    return _concat([first, second])


def fold_sourcemaps(maps: Iterable[SourceMap]) -> SourceMap | None:
    """Concatenate maps in output order.

    Equivalent to folding left to right with :func:`concat_sourcemaps`,
    but every input is decoded once and the result encoded once.

    Args:
        maps: Maps in output order.

    Returns:
        The combined map, or None when ``maps`` is empty.

    Raises:
        SourceMapDecodeError: If any map has malformed mappings.

    """
    maps = list(maps)
    if not maps:
        return None
    if len(maps) == 1:
        return maps[0].model_copy(deep=True)
    return _concat(maps)
