"""Module-to-asset association for builds without hashed file names.

Without a hash in the output names the style post-processor contributes
nothing to chunk hashes, so membership is recorded while chunks are
rendered instead, under the asset path the naming templates predict.
"""

from css_sourcemap.context import BuildContext, BuildPhase
from css_sourcemap.host import RenderedChunk
from css_sourcemap.log import get_logger
from css_sourcemap.naming import expected_asset_path

logger = get_logger(__name__)


def associate_chunk(build: BuildContext, chunk: RenderedChunk) -> str | None:
    """Record the style modules of a rendered chunk under its expected path.

    Args:
        build: Context of the current build.
        chunk: A chunk whose content is final.

    Returns:
        The asset key used, or None if nothing was recorded.

    """
    if build.hashed:
        return None

    build.advance(BuildPhase.ASSOCIATING_ASSETS)
    style_modules = [m for m in chunk.module_ids if build.options.matches(m)]
    if not style_modules:
        return None

    # Entry chunks emit a stylesheet named after themselves
    asset_name = chunk.name if chunk.is_entry else build.template_name
    asset_key = expected_asset_path(build.output_options, asset_name)
    for module_id in style_modules:
        build.asset_modules.add(asset_key, module_id)
    logger.debug(
        "Chunk %s contributes %d style modules to %s",
        chunk.name,
        len(style_modules),
        asset_key,
    )
    return asset_key
