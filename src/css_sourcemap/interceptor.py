"""Observation of the style post-processor's chunk hash contribution.

The style post-processing plugin contributes the final names of the
style assets a chunk imports to that chunk's hash. Observing that
contribution tells us, for hashed builds, which modules end up in
which hash-qualified asset, at a point where the asset's final name is
not otherwise available.
"""

from collections.abc import Callable
from functools import partial

from css_sourcemap.constants import CSS_POST_PLUGIN_NAME, PLUGIN_NAME
from css_sourcemap.context import BuildContext, BuildPhase
from css_sourcemap.errors.codes import ErrorCode, format_error_message
from css_sourcemap.errors.exceptions import CssSourcemapConfigError
from css_sourcemap.host import Plugin, RenderedChunk
from css_sourcemap.log import get_logger

logger = get_logger(__name__)

AugmentChunkHash = Callable[[RenderedChunk], str | None]

HOOK_NAME = "augment_chunk_hash"


class HashCaptureInterceptor:
    """Transparent observer around a plugin's ``augment_chunk_hash``.

    Calls the wrapped hook unchanged and returns its result unchanged.
    A non-empty result is used as the asset key for every style module
    of the chunk.
    """

    def __init__(self, wrapped: AugmentChunkHash, build: BuildContext) -> None:
        """Initialize the interceptor.

        Args:
            wrapped: The hook being observed.
            build: Context receiving the observed memberships.

        """
        self._wrapped = wrapped
        self._build = build

    def __call__(self, chunk: RenderedChunk) -> str | None:
        """Invoke the wrapped hook and record what it contributed."""
        result = self._wrapped(chunk)
        if not result or not self._build.hashed:
            return result

        self._build.advance(BuildPhase.ASSOCIATING_ASSETS)
        for module_id in chunk.module_ids:
            if self._build.options.matches(module_id):
                self._build.asset_modules.add(result, module_id)
        logger.debug("Captured hash contribution %r of chunk %s", result, chunk.name)
        return result


def find_plugin(plugins: list[Plugin], name: str) -> Plugin:
    """Find an installed plugin by name.

    Args:
        plugins: Installed plugins.
        name: Plugin name to look for.

    Returns:
        The first plugin with that name.

    Raises:
        CssSourcemapConfigError: If no such plugin is installed.

    """
    for plugin in plugins:
        if plugin.name == name:
            return plugin
    msg = format_error_message(ErrorCode.E0001, name=name)
    raise CssSourcemapConfigError(msg, code=ErrorCode.E0001)


def install_interceptor(
    plugins: list[Plugin],
    build: BuildContext,
    *,
    target: str = CSS_POST_PLUGIN_NAME,
) -> None:
    """Wrap the style post-processor's hash hook for this build.

    Args:
        plugins: Plugins installed in the pipeline.
        build: Context of the starting build.
        target: Name of the plugin to observe.

    Raises:
        CssSourcemapConfigError: If the target plugin is not installed.

    """
    collaborator = find_plugin(plugins, target)
    collaborator.intercept(
        HOOK_NAME,
        PLUGIN_NAME,
        partial(HashCaptureInterceptor, build=build),
    )
    build.advance(BuildPhase.INTERCEPTOR_INSTALLED)
    logger.debug("Intercepting %s.%s", target, HOOK_NAME)
