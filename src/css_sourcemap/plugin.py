"""CSS sourcemap plugin.

Restores accurate sourcemaps for stylesheets the host bundles from many
style modules into one, possibly content-hashed, output file.

Hook flow of one build:

* ``build_start`` creates a fresh :class:`BuildContext` and wraps the
  style post-processor's ``augment_chunk_hash``.
* ``output_options`` decides whether output names are hashed.
* ``transform`` emits each style module's map as an intermediate asset.
* ``render_chunk`` (unhashed builds) or the wrapped
  ``augment_chunk_hash`` (hashed builds) records which modules belong
  to which stylesheet.
* ``generate_bundle`` merges the maps, drops the intermediates and
  links each stylesheet to its merged map.
"""

from typing import Any

from css_sourcemap.collector import collect_module_map
from css_sourcemap.config import CssSourcemapOptions
from css_sourcemap.constants import PLUGIN_NAME
from css_sourcemap.context import BuildContext, BuildPhase
from css_sourcemap.engine import merge_bundle_sourcemaps
from css_sourcemap.errors.exceptions import BuildStateError
from css_sourcemap.host import (
    InputOptions,
    OutputBundle,
    OutputOptions,
    Plugin,
    PluginContext,
    RenderedChunk,
    TransformResult,
)
from css_sourcemap.interceptor import install_interceptor
from css_sourcemap.log import get_logger
from css_sourcemap.naming import extract_template_name, has_hash_placeholder
from css_sourcemap.resolver import associate_chunk

logger = get_logger(__name__)


class CssSourcemapPlugin(Plugin):
    """Build plugin merging style module maps per output stylesheet."""

    name = PLUGIN_NAME

    def __init__(self, options: CssSourcemapOptions | None = None) -> None:
        """Initialize the plugin.

        Args:
            options: Validated options; defaults apply when omitted.

        """
        super().__init__()
        self.options = options or CssSourcemapOptions()
        self._build: BuildContext | None = None

    @property
    def build(self) -> BuildContext | None:
        """Context of the current or most recent build, if any."""
        return self._build

    def _require_build(self) -> BuildContext:
        if self._build is None:
            msg = "build_start has not been called"
            raise BuildStateError(msg)
        return self._build

    async def build_start(self, ctx: PluginContext, options: InputOptions) -> None:
        """Start a build: reset state and observe the style post-processor."""
        if not self.options.enabled:
            return
        build = BuildContext(
            options=self.options,
            template_name=extract_template_name(options.input),
        )
        install_interceptor(options.plugins, build)
        self._build = build
        logger.debug("Build started for entry %s", build.template_name)

    def output_options(self, options: OutputOptions) -> OutputOptions | None:
        """Decide between hashed and unhashed association."""
        if not self.options.enabled:
            return None
        build = self._require_build()
        build.advance(BuildPhase.HASH_MODE_DECIDED)
        build.output_options = options
        build.hashed = has_hash_placeholder(
            options.entry_file_names,
            build.template_name,
        )
        logger.debug("Output names hashed: %s", build.hashed)
        return options

    async def transform(
        self,
        ctx: PluginContext,
        code: str,
        module_id: str,
    ) -> TransformResult | None:
        """Emit the map of a style module."""
        if not self.options.enabled:
            return None
        return await collect_module_map(ctx, self._require_build(), code, module_id)

    async def render_chunk(
        self,
        ctx: PluginContext,
        code: str,
        chunk: RenderedChunk,
    ) -> str | None:
        """Associate a chunk's style modules with their stylesheet."""
        if self.options.enabled:
            associate_chunk(self._require_build(), chunk)
        return None

    async def generate_bundle(
        self,
        ctx: PluginContext,
        options: OutputOptions,
        bundle: OutputBundle,
    ) -> None:
        """Merge, emit and reference the map of every stylesheet."""
        if not self.options.enabled:
            return
        await merge_bundle_sourcemaps(ctx, self._require_build(), bundle)


def css_sourcemap(
    options: CssSourcemapOptions | None = None,
    **kwargs: Any,
) -> CssSourcemapPlugin:
    """Create the plugin.

    Args:
        options: Pre-built options. Mutually exclusive with ``kwargs``.
        **kwargs: Option values, see :class:`CssSourcemapOptions`.

    Returns:
        A plugin to install in the host pipeline.

    Raises:
        CssSourcemapConfigError: If an option value is invalid.
        TypeError: If both ``options`` and keyword options are given.

    """
    if options is not None and kwargs:
        msg = "pass either an options object or keyword options, not both"
        raise TypeError(msg)
    return CssSourcemapPlugin(options or CssSourcemapOptions.from_kwargs(**kwargs))
