"""Identity sourcemap generation.

Used when a style module reaches the plugin without an upstream map:
every generated line maps to column 0 of the same source line.
"""

from pathlib import PurePosixPath

from css_sourcemap.sourcemap.model import SourceMap

_FIRST_LINE = "AAAA"
"""Column 0, source 0, line 0, column 0."""

_NEXT_LINE = "AACA"
"""Column 0, same source, one line further, column 0."""


def generate_identity_sourcemap(code: str, module_id: str) -> SourceMap:
    """Build a line-for-line sourcemap of ``code`` onto itself.

    Args:
        code: Source text of the module.
        module_id: Module id, recorded as the only source.

    Returns:
        A map with one segment per line of ``code``.

    """
    line_count = code.count("\n") + 1
    mappings = ";".join([_FIRST_LINE] + [_NEXT_LINE] * (line_count - 1))
    return SourceMap(
        file=PurePosixPath(module_id).name,
        sources=[module_id],
        sources_content=[code],
        names=[],
        mappings=mappings,
    )
