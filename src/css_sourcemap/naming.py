"""Evaluation of the host's file naming templates.

Static templates are inspected as text. Dynamic templates are called
with a pre-rendered description of the entry chunk or the style asset,
and their result is inspected the same way.
"""

import re
from pathlib import PurePosixPath

from css_sourcemap.constants import CSS_OUTPUT_SUFFIX
from css_sourcemap.errors.codes import ErrorCode, format_error_message
from css_sourcemap.errors.exceptions import CssSourcemapConfigError
from css_sourcemap.host import (
    InputOption,
    NamingPattern,
    OutputOptions,
    PreRenderedAsset,
    PreRenderedChunk,
    StaticPattern,
)

HASH_PLACEHOLDER_RE = re.compile(r"\[hash(?::\d+)?\]")
"""Matches ``[hash]`` and length-limited ``[hash:8]`` placeholders."""


def extract_template_name(entries: InputOption) -> str:
    """Derive the template name from the first declared entry.

    Args:
        entries: Declared build input.

    Returns:
        File stem of the first entry, e.g. ``index`` for ``./index.html``.

    Raises:
        CssSourcemapConfigError: If no entry is declared.

    """
    if isinstance(entries, str):
        first = entries
    else:
        # First list item, or first key of named entries
        first = next(iter(entries), None)

    if not first:
        msg = format_error_message(
            ErrorCode.E0002,
            field="input",
            reason="no entry point declared",
        )
        raise CssSourcemapConfigError(msg, code=ErrorCode.E0002)
    return PurePosixPath(first).stem


def _evaluate(pattern: NamingPattern, kind: str, description: object) -> str:
    if isinstance(pattern, StaticPattern):
        return pattern.template
    value = pattern.fn(description)
    if not isinstance(value, str):
        msg = format_error_message(ErrorCode.E0003, kind=kind, value=value)
        raise CssSourcemapConfigError(msg, code=ErrorCode.E0003)
    return value


def has_hash_placeholder(pattern: NamingPattern | None, template_name: str) -> bool:
    """Check whether entry file names will carry a content hash.

    Args:
        pattern: The entry naming template, if configured.
        template_name: Name of the first entry.

    Returns:
        True when the evaluated template contains a hash placeholder.
        Without a template the host's default hashed naming is assumed.

    Raises:
        CssSourcemapConfigError: If a dynamic template returns a non-string.

    """
    if pattern is None:
        return True
    template = _evaluate(
        pattern,
        "entry",
        PreRenderedChunk(name=template_name, is_entry=True),
    )
    return HASH_PLACEHOLDER_RE.search(template) is not None


def asset_directory(pattern: NamingPattern | None, template_name: str) -> str | None:
    """Get the directory part of the asset naming template.

    Args:
        pattern: The asset naming template, if configured.
        template_name: Entry name the stylesheet is named after.

    Returns:
        The directory, or None when assets land in the output root.

    Raises:
        CssSourcemapConfigError: If a dynamic template returns a non-string.

    """
    if pattern is None:
        return None
    template = _evaluate(
        pattern,
        "asset",
        PreRenderedAsset(name=f"{template_name}{CSS_OUTPUT_SUFFIX}"),
    )
    directory = str(PurePosixPath(template).parent)
    return None if directory == "." else directory


def expected_asset_path(options: OutputOptions | None, template_name: str) -> str:
    """Compute the pre-hash key of the style asset of an unhashed build.

    Args:
        options: Resolved output options, if known.
        template_name: Entry name the stylesheet is named after.

    Returns:
        ``template_name`` joined below the asset directory, if any.

    """
    directory = (
        asset_directory(options.asset_file_names, template_name) if options else None
    )
    if directory is None:
        return template_name
    return str(PurePosixPath(directory) / template_name)

