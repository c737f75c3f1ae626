"""Host pipeline contract consumed by the plugin.

The host bundler drives plugins through ordered lifecycle hooks and
offers a small plugin context for emitting and resolving assets. This
module defines the payloads exchanged on those hooks, the context
protocol, and the :class:`Plugin` base class hosts call into.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from css_sourcemap.sourcemap.model import SourceMap


@dataclass(frozen=True)
class PreRenderedChunk:
    """Chunk description passed to dynamic entry naming templates."""

    name: str
    """Logical chunk name (the entry name for entry chunks)."""

    is_entry: bool = True
    """Whether the chunk is an entry chunk."""

    module_ids: tuple[str, ...] = ()
    """Modules bundled into the chunk, if already known."""


@dataclass(frozen=True)
class PreRenderedAsset:
    """Asset description passed to dynamic asset naming templates."""

    name: str | None
    """Logical asset name, e.g. ``index.css``."""

    type: Literal["asset"] = "asset"


@dataclass(frozen=True)
class StaticPattern:
    """Naming template given as a string, e.g. ``assets/[name]-[hash][extname]``."""

    template: str


@dataclass(frozen=True)
class DynamicPattern:
    """Naming template computed by a callback from a pre-rendered description."""

    fn: Callable[[Any], Any]


NamingPattern = StaticPattern | DynamicPattern
"""A file naming template: either static text or a callback."""


def as_naming_pattern(value: object) -> NamingPattern | None:
    """Coerce a host option value to a :data:`NamingPattern`.

    Args:
        value: A string, a callable, an existing pattern, or None.

    Returns:
        The tagged pattern, or None when no template is configured.

    Raises:
        TypeError: For any other value.

    """
    if value is None or isinstance(value, StaticPattern | DynamicPattern):
        return value
    if isinstance(value, str):
        return StaticPattern(value)
    if callable(value):
        return DynamicPattern(value)
    msg = f"naming template must be a string or callable, not {type(value).__name__}"
    raise TypeError(msg)


InputOption = str | Sequence[str] | Mapping[str, str]
"""Build entry points: a path, a list of paths, or a name to path mapping."""


@dataclass
class InputOptions:
    """Options the host hands to ``build_start``."""

    input: InputOption
    """Declared entry points."""

    plugins: list["Plugin"] = field(default_factory=list)
    """All plugins installed in the pipeline, in order."""


@dataclass
class OutputOptions:
    """Output naming options, resolved before chunks are rendered."""

    entry_file_names: NamingPattern | None = None
    asset_file_names: NamingPattern | None = None
    chunk_file_names: NamingPattern | None = None

    def __post_init__(self) -> None:
        """Accept plain strings and callables for the naming templates."""
        self.entry_file_names = as_naming_pattern(self.entry_file_names)
        self.asset_file_names = as_naming_pattern(self.asset_file_names)
        self.chunk_file_names = as_naming_pattern(self.chunk_file_names)


@dataclass
class RenderedChunk:
    """A chunk whose content is final but whose file name may still change."""

    file_name: str
    """Output file name; may still contain placeholders."""

    name: str
    """Logical chunk name."""

    module_ids: list[str] = field(default_factory=list)
    """Ids of the modules bundled into the chunk, in bundle order."""

    is_entry: bool = True


@dataclass
class OutputAsset:
    """A non-code file in the output bundle."""

    file_name: str
    source: str | bytes
    name: str | None = None
    type: Literal["asset"] = field(default="asset", init=False)


@dataclass
class OutputChunk:
    """A code file in the output bundle."""

    file_name: str
    code: str
    module_ids: list[str] = field(default_factory=list)
    type: Literal["chunk"] = field(default="chunk", init=False)


OutputBundle = dict[str, OutputAsset | OutputChunk]
"""Output files keyed by their final file name."""


@dataclass
class TransformResult:
    """Result of a ``transform`` hook."""

    code: str
    map: SourceMap | None = None


class PluginContext(Protocol):
    """Capabilities the host exposes to plugin hooks."""

    async def emit_asset(
        self,
        *,
        source: str | bytes,
        name: str | None = None,
        file_name: str | None = None,
    ) -> str:
        """Emit an asset into the output and return its reference handle.

        ``name`` lets the host derive the final file name from its asset
        naming template; ``file_name`` fixes it verbatim.
        """
        ...

    def get_file_name(self, handle: str) -> str:
        """Resolve the final file name of an emitted asset."""
        ...

    def get_combined_sourcemap(self, module_id: str) -> SourceMap:
        """Get the map accumulated by earlier transforms of ``module_id``."""
        ...


HookWrapper = Callable[[Callable[..., Any]], Callable[..., Any]]
"""Builds an observing hook from the hook it wraps."""


class Plugin:
    """Base class for pipeline plugins.

    Hosts invoke hooks through :meth:`hook`, which applies interceptors
    other plugins registered with :meth:`intercept`. Every hook defaults
    to a no-op.
    """

    name: str = ""

    def __init__(self) -> None:
        """Initialize a plugin with no interceptors."""
        self._interceptors: dict[str, dict[str, HookWrapper]] = {}

    def intercept(self, hook_name: str, owner: str, wrapper: HookWrapper) -> None:
        """Wrap one of this plugin's hooks.

        Registering again under the same ``owner`` replaces the earlier
        wrapper, so a plugin re-installing on every build never stacks.

        Args:
            hook_name: Name of the hook method to wrap.
            owner: Name of the plugin installing the wrapper.
            wrapper: Called with the wrapped hook, returns the new hook.

        Raises:
            AttributeError: If this plugin has no such hook.

        """
        if not callable(getattr(type(self), hook_name, None)):
            msg = f"{type(self).__name__} has no hook {hook_name!r}"
            raise AttributeError(msg)
        self._interceptors.setdefault(hook_name, {})[owner] = wrapper

    def hook(self, hook_name: str) -> Callable[..., Any]:
        """Get a hook with all registered interceptors applied.

        Args:
            hook_name: Name of the hook method.

        Returns:
            The callable the host should invoke.

        """
        composed = getattr(self, hook_name)
        for wrapper in self._interceptors.get(hook_name, {}).values():
            composed = wrapper(composed)
        return composed

    async def build_start(self, ctx: PluginContext, options: InputOptions) -> None:
        """Called once when a build starts."""

    def output_options(self, options: OutputOptions) -> OutputOptions | None:
        """Inspect or replace the output options."""
        return None

    async def transform(
        self,
        ctx: PluginContext,
        code: str,
        module_id: str,
    ) -> TransformResult | None:
        """Transform one module."""
        return None

    async def render_chunk(
        self,
        ctx: PluginContext,
        code: str,
        chunk: RenderedChunk,
    ) -> str | None:
        """Observe or rewrite a finalized chunk."""
        return None

    def augment_chunk_hash(self, chunk: RenderedChunk) -> str | None:
        """Contribute extra text to a chunk's content hash."""
        return None

    async def generate_bundle(
        self,
        ctx: PluginContext,
        options: OutputOptions,
        bundle: OutputBundle,
    ) -> None:
        """Inspect or modify the assembled output bundle in place."""
