"""css_sourcemap - merged sourcemaps for bundled, content-hashed stylesheets."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("css-sourcemap")
except PackageNotFoundError:
    __version__ = "0+local"

from css_sourcemap.config import CssSourcemapOptions
from css_sourcemap.context import BuildContext, BuildPhase
from css_sourcemap.errors import (
    BuildStateError,
    CssSourcemapConfigError,
    CssSourcemapError,
    Diagnostic,
    ErrorCode,
    Severity,
    SourceMapDecodeError,
)
from css_sourcemap.host import (
    DynamicPattern,
    InputOptions,
    OutputAsset,
    OutputBundle,
    OutputChunk,
    OutputOptions,
    Plugin,
    PluginContext,
    RenderedChunk,
    StaticPattern,
    TransformResult,
)
from css_sourcemap.log import init_logging
from css_sourcemap.plugin import CssSourcemapPlugin, css_sourcemap
from css_sourcemap.sourcemap import (
    SourceMap,
    fold_sourcemaps,
    generate_identity_sourcemap,
)

__all__ = [
    "BuildContext",
    "BuildPhase",
    "BuildStateError",
    "CssSourcemapConfigError",
    "CssSourcemapError",
    "CssSourcemapOptions",
    "CssSourcemapPlugin",
    "Diagnostic",
    "DynamicPattern",
    "ErrorCode",
    "InputOptions",
    "OutputAsset",
    "OutputBundle",
    "OutputChunk",
    "OutputOptions",
    "Plugin",
    "PluginContext",
    "RenderedChunk",
    "Severity",
    "SourceMap",
    "SourceMapDecodeError",
    "StaticPattern",
    "TransformResult",
    "__version__",
    "css_sourcemap",
    "fold_sourcemaps",
    "generate_identity_sourcemap",
    "init_logging",
]
