"""In-memory host pipeline driving plugins through one build.

Implements just enough of a bundler for end-to-end tests: each entry
becomes one chunk, the style modules of an entry are concatenated into
one stylesheet, and file names are rendered from naming templates with
a content hash.
"""

import hashlib
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from css_sourcemap.constants import CSS_POST_PLUGIN_NAME
from css_sourcemap.host import (
    DynamicPattern,
    InputOptions,
    NamingPattern,
    OutputAsset,
    OutputBundle,
    OutputChunk,
    OutputOptions,
    Plugin,
    PreRenderedAsset,
    PreRenderedChunk,
    RenderedChunk,
    StaticPattern,
)
from css_sourcemap.sourcemap.model import SourceMap

_PLACEHOLDER_RE = re.compile(r"\[(name|hash|ext|extname)(?::(\d+))?\]")

DEFAULT_ASSET_FILE_NAMES = "assets/[name]-[hash][extname]"
DEFAULT_ENTRY_FILE_NAMES = "assets/[name]-[hash].js"


def default_hasher(content: str | bytes) -> str:
    """Hash content like a bundler would for file names."""
    data = content.encode("utf-8") if isinstance(content, str) else content
    return hashlib.sha256(data).hexdigest()[:8]


def render_file_name(template: str, name: str, extname: str, content_hash: str) -> str:
    """Replace naming placeholders in a template."""

    def replace(match: re.Match[str]) -> str:
        placeholder, length = match.groups()
        if placeholder == "name":
            return name
        if placeholder == "hash":
            return content_hash[: int(length)] if length else content_hash
        if placeholder == "ext":
            return extname.lstrip(".")
        return extname

    return _PLACEHOLDER_RE.sub(replace, template)


def _template(pattern: NamingPattern | None, default: str, description: object) -> str:
    if pattern is None:
        return default
    if isinstance(pattern, StaticPattern):
        return pattern.template
    assert isinstance(pattern, DynamicPattern)
    return pattern.fn(description)


@dataclass
class StyleModule:
    """A source module of the fake project."""

    code: str
    upstream_map: SourceMap | None = None


class FakeCssPostPlugin(Plugin):
    """Stand-in for the style post-processor.

    Contributes the names of the stylesheets a chunk imports to the
    chunk's hash, as the real post-processor does.
    """

    name = CSS_POST_PLUGIN_NAME

    def __init__(self) -> None:
        super().__init__()
        self.imported_css: dict[str, list[str]] = {}
        self.calls: list[tuple[RenderedChunk, str | None]] = []

    def augment_chunk_hash(self, chunk: RenderedChunk) -> str | None:
        result = "".join(self.imported_css.get(chunk.name, [])) or None
        self.calls.append((chunk, result))
        return result


class FakeContext:
    """Plugin context backed by a :class:`FakePipeline`."""

    def __init__(self, pipeline: "FakePipeline") -> None:
        self._pipeline = pipeline
        self._handles: dict[str, str] = {}

    async def emit_asset(
        self,
        *,
        source: str | bytes,
        name: str | None = None,
        file_name: str | None = None,
    ) -> str:
        pipeline = self._pipeline
        if file_name is None:
            assert name is not None
            path = PurePosixPath(name)
            template = _template(
                pipeline.output_options.asset_file_names,
                DEFAULT_ASSET_FILE_NAMES,
                PreRenderedAsset(name=name),
            )
            file_name = render_file_name(
                template,
                path.stem,
                path.suffix,
                pipeline.hasher(source),
            )
        handle = f"ref-{len(self._handles) + 1}"
        self._handles[handle] = file_name
        pipeline.bundle[file_name] = OutputAsset(
            file_name=file_name,
            source=source,
            name=name,
        )
        pipeline.emitted.append(file_name)
        return handle

    def get_file_name(self, handle: str) -> str:
        return self._handles[handle]

    def get_combined_sourcemap(self, module_id: str) -> SourceMap:
        combined = self._pipeline.combined_maps.get(module_id)
        return combined.model_copy(deep=True) if combined else SourceMap()


@dataclass
class FakePipeline:
    """One build of a project with named entries.

    ``entries`` maps each entry name to the ids of the modules it
    imports, in import order. Ids ending in a style extension are
    looked up in ``modules``; other ids are treated as code.
    """

    modules: dict[str, StyleModule]
    entries: dict[str, list[str]]
    plugins: list[Plugin]
    output_options: OutputOptions = field(default_factory=OutputOptions)
    hasher: Callable[[str | bytes], str] = default_hasher
    bundle: OutputBundle = field(default_factory=dict)
    emitted: list[str] = field(default_factory=list)
    combined_maps: dict[str, SourceMap] = field(default_factory=dict)

    @property
    def css_post(self) -> FakeCssPostPlugin | None:
        for plugin in self.plugins:
            if isinstance(plugin, FakeCssPostPlugin):
                return plugin
        return None

    async def run(self) -> OutputBundle:
        ctx = FakeContext(self)
        input_options = InputOptions(
            input={name: f"./{name}.html" for name in self.entries},
            plugins=self.plugins,
        )
        for plugin in self.plugins:
            await plugin.hook("build_start")(ctx, input_options)

        for plugin in self.plugins:
            replaced = plugin.hook("output_options")(self.output_options)
            if replaced is not None:
                self.output_options = replaced

        transformed = await self._transform_all(ctx)
        for entry_name, module_ids in self.entries.items():
            await self._render_entry(ctx, entry_name, module_ids, transformed)

        for plugin in self.plugins:
            await plugin.hook("generate_bundle")(ctx, self.output_options, self.bundle)
        return self.bundle

    async def _transform_all(self, ctx: FakeContext) -> dict[str, str]:
        transformed: dict[str, str] = {}
        for module_ids in self.entries.values():
            for module_id in module_ids:
                if module_id in transformed or module_id not in self.modules:
                    continue
                module = self.modules[module_id]
                if module.upstream_map is not None:
                    self.combined_maps[module_id] = module.upstream_map
                code = module.code
                for plugin in self.plugins:
                    result = await plugin.hook("transform")(ctx, code, module_id)
                    if result is not None:
                        code = result.code
                        if result.map is not None:
                            self.combined_maps[module_id] = result.map
                transformed[module_id] = code
        return transformed

    async def _render_entry(
        self,
        ctx: FakeContext,
        entry_name: str,
        module_ids: list[str],
        transformed: dict[str, str],
    ) -> None:
        styles = [transformed[m] for m in module_ids if m in self.modules]
        if styles:
            stylesheet = "\n".join(styles)
            template = _template(
                self.output_options.asset_file_names,
                DEFAULT_ASSET_FILE_NAMES,
                PreRenderedAsset(name=f"{entry_name}.css"),
            )
            css_file_name = render_file_name(
                template,
                entry_name,
                ".css",
                self.hasher(stylesheet),
            )
            self.bundle[css_file_name] = OutputAsset(
                file_name=css_file_name,
                source=stylesheet,
                name=f"{entry_name}.css",
            )
            if self.css_post is not None:
                self.css_post.imported_css.setdefault(entry_name, []).append(
                    css_file_name,
                )

        entry_template = _template(
            self.output_options.entry_file_names,
            DEFAULT_ENTRY_FILE_NAMES,
            PreRenderedChunk(name=entry_name, module_ids=tuple(module_ids)),
        )
        code = f"// {entry_name}\n" + "\n".join(
            f"import {module_id!r};" for module_id in module_ids
        )
        chunk = RenderedChunk(
            file_name=entry_template,
            name=entry_name,
            module_ids=list(module_ids),
        )
        for plugin in self.plugins:
            rendered = await plugin.hook("render_chunk")(ctx, code, chunk)
            if rendered is not None:
                code = rendered

        augment = ""
        if "[hash" in entry_template:
            for plugin in self.plugins:
                contribution = plugin.hook("augment_chunk_hash")(chunk)
                if contribution:
                    augment += contribution
        file_name = render_file_name(
            entry_template,
            entry_name,
            ".js",
            self.hasher(code + augment),
        )
        self.bundle[file_name] = OutputChunk(
            file_name=file_name,
            code=code,
            module_ids=list(module_ids),
        )
