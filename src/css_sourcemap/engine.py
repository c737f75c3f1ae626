"""Merging of per-module maps into one map per bundled stylesheet.

Runs once during bundle assembly. For each stylesheet the contributing
modules are looked up, their intermediate maps are pulled out of the
bundle and folded in module order, and the result is emitted next to
the stylesheet, which gets a ``sourceMappingURL`` trailer.
"""

from pathlib import PurePosixPath

from css_sourcemap.constants import CSS_OUTPUT_SUFFIX, MAP_SUFFIX
from css_sourcemap.context import BuildContext, BuildPhase
from css_sourcemap.errors.codes import ErrorCode
from css_sourcemap.errors.diagnostics import Diagnostic
from css_sourcemap.host import OutputAsset, OutputBundle, PluginContext
from css_sourcemap.log import get_logger
from css_sourcemap.naming import expected_asset_path
from css_sourcemap.sourcemap.merge import fold_sourcemaps
from css_sourcemap.sourcemap.model import SourceMap

logger = get_logger(__name__)


def source_mapping_url_comment(url: str) -> str:
    """Build the trailer appended to a stylesheet.

    Args:
        url: Formatted map location.

    Returns:
        The trailer, starting on a new line.

    """
    return f"\n/*# sourceMappingURL={url} */"


def merged_map_file_name(asset_file_name: str, folder: str) -> str:
    """Output path of the merged map of a stylesheet.

    Args:
        asset_file_name: Final file name of the stylesheet.
        folder: Subfolder relative to the stylesheet's directory.

    Returns:
        ``<asset dir>/<folder>/<asset name>.map``.

    """
    asset_path = PurePosixPath(asset_file_name)
    return str(asset_path.parent / folder / f"{asset_path.name}{MAP_SUFFIX}")


def _take_module_maps(
    ctx: PluginContext,
    build: BuildContext,
    bundle: OutputBundle,
    module_ids: list[str],
) -> list[SourceMap]:
    """Remove the intermediate maps of ``module_ids`` from the bundle."""
    maps = []
    for module_id in module_ids:
        handle = build.module_maps.get(module_id)
        if handle is None:
            continue
        map_file = ctx.get_file_name(handle)
        map_asset = bundle.pop(map_file, None)
        if not isinstance(map_asset, OutputAsset):
            build.report(
                Diagnostic.warning(
                    ErrorCode.W0002,
                    map_file=map_file,
                    module_id=module_id,
                ),
            )
            continue
        maps.append(SourceMap.from_json(map_asset.source))
    return maps


async def merge_asset_sourcemap(
    ctx: PluginContext,
    build: BuildContext,
    bundle: OutputBundle,
    asset: OutputAsset,
) -> str | None:
    """Emit the merged map of one stylesheet and reference it.

    Args:
        ctx: Host plugin context.
        build: Context of the current build.
        bundle: The output bundle, modified in place.
        asset: The stylesheet.

    Returns:
        File name of the emitted map, or None when the stylesheet
        ships without one.

    """
    logical_name = (
        PurePosixPath(asset.name).stem if asset.name else build.template_name
    )
    pre_hash_key = expected_asset_path(build.output_options, logical_name)
    module_ids = build.asset_modules.resolve(pre_hash_key, asset.file_name)
    merged = fold_sourcemaps(_take_module_maps(ctx, build, bundle, module_ids))
    if merged is None:
        build.report(Diagnostic.warning(ErrorCode.W0001, asset=asset.file_name))
        return None

    map_name = f"{PurePosixPath(asset.file_name).name}{MAP_SUFFIX}"
    map_file_name = merged_map_file_name(asset.file_name, build.options.folder)
    merged.file = PurePosixPath(asset.file_name).name
    await ctx.emit_asset(file_name=map_file_name, source=merged.to_json())

    trailer = source_mapping_url_comment(build.options.get_url(map_name))
    if isinstance(asset.source, bytes):
        asset.source += trailer.encode("utf-8")
    else:
        asset.source += trailer
    logger.info(
        "Emitted %s covering %d sources",
        map_file_name,
        len(merged.sources),
    )
    return map_file_name


async def merge_bundle_sourcemaps(
    ctx: PluginContext,
    build: BuildContext,
    bundle: OutputBundle,
) -> list[str]:
    """Merge maps for every stylesheet in the bundle.

    Args:
        ctx: Host plugin context.
        build: Context of the current build.
        bundle: The output bundle, modified in place.

    Returns:
        File names of the emitted merged maps.

    """
    build.advance(BuildPhase.MERGING)
    stylesheets = [
        item
        for file_name, item in bundle.items()
        if isinstance(item, OutputAsset) and file_name.endswith(CSS_OUTPUT_SUFFIX)
    ]
    emitted = []
    for asset in stylesheets:
        map_file_name = await merge_asset_sourcemap(ctx, build, bundle, asset)
        if map_file_name is not None:
            emitted.append(map_file_name)
    build.advance(BuildPhase.DONE)
    return emitted
