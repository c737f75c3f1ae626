"""Per-module sourcemap collection.

Every style module passing through ``transform`` has its current map
emitted as an intermediate asset, so the merge step can fold the maps
of all modules that ended up in the same output stylesheet.
"""

from pathlib import PurePosixPath

from css_sourcemap.constants import MAP_SUFFIX
from css_sourcemap.context import BuildContext, BuildPhase
from css_sourcemap.host import PluginContext, TransformResult
from css_sourcemap.log import get_logger
from css_sourcemap.sourcemap.identity import generate_identity_sourcemap

logger = get_logger(__name__)

_MODULE_INFIX = ".module"


def module_map_name(module_id: str) -> str:
    """Name of the intermediate map asset of a module.

    Args:
        module_id: Module id as reported by the host.

    Returns:
        The module's stem without a ``.module`` infix, plus ``.map``.

    """
    stem = PurePosixPath(module_id.split("?", 1)[0]).stem
    return f"{stem.replace(_MODULE_INFIX, '')}{MAP_SUFFIX}"


async def collect_module_map(
    ctx: PluginContext,
    build: BuildContext,
    code: str,
    module_id: str,
) -> TransformResult | None:
    """Emit the map of a style module and remember its handle.

    Args:
        ctx: Host plugin context.
        build: Context of the current build.
        code: Module code as produced by upstream transforms.
        module_id: Id of the module.

    Returns:
        The unchanged code with the map later transforms should see,
        or None for modules that are not style sources.

    """
    if not build.options.matches(module_id):
        return None

    build.advance(BuildPhase.COLLECTING_MAPS)
    sourcemap = ctx.get_combined_sourcemap(module_id)
    if sourcemap.is_empty():
        logger.debug("No upstream map for %s, using identity map", module_id)
        sourcemap = generate_identity_sourcemap(code, module_id)
    else:
        sourcemap = sourcemap.pad_lines(code.count("\n") + 1)

    handle = await ctx.emit_asset(
        name=module_map_name(module_id),
        source=sourcemap.to_json(),
    )
    build.module_maps.register(module_id, handle)
    return TransformResult(code=code, map=sourcemap)
