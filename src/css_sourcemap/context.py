"""Per-build state of the CSS sourcemap plugin.

A :class:`BuildContext` is created at ``build_start`` and handed to
every later hook. Nothing in it outlives the build.
"""

from dataclasses import dataclass, field
from enum import IntEnum

from css_sourcemap.config import CssSourcemapOptions
from css_sourcemap.errors.codes import ErrorCode, format_error_message
from css_sourcemap.errors.diagnostics import Diagnostic
from css_sourcemap.errors.exceptions import BuildStateError
from css_sourcemap.host import OutputOptions
from css_sourcemap.log import get_logger
from css_sourcemap.registry import AssetModuleIndex, ModuleMapRegistry

logger = get_logger(__name__)


class BuildPhase(IntEnum):
    """Build lifecycle phases, in the only order they may occur.

    One build writes one output. Hosts that generate several outputs from
    the same build, calling ``output_options`` and ``generate_bundle`` again
    after ``DONE``, are not supported and get a :class:`BuildStateError`.
    """

    INIT = 0
    INTERCEPTOR_INSTALLED = 1
    HASH_MODE_DECIDED = 2
    COLLECTING_MAPS = 3
    ASSOCIATING_ASSETS = 4
    MERGING = 5
    DONE = 6


@dataclass
class BuildContext:
    """Registries and settings of one build."""

    options: CssSourcemapOptions
    """Validated plugin options."""

    template_name: str
    """Stem of the first declared entry."""

    hashed: bool = True
    """Whether output names carry a content hash."""

    output_options: OutputOptions | None = None
    """Output options, once the host resolved them."""

    module_maps: ModuleMapRegistry = field(default_factory=ModuleMapRegistry)
    """Map asset handle per style module."""

    asset_modules: AssetModuleIndex = field(default_factory=AssetModuleIndex)
    """Contributing modules per style asset key."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    """Recoverable conditions met during the build."""

    phase: BuildPhase = BuildPhase.INIT

    def advance(self, target: BuildPhase) -> None:
        """Move to ``target``, or stay if already there.

        Args:
            target: Phase the calling hook belongs to.

        Raises:
            BuildStateError: When moving backwards or after the build is
                done.

        """
        if target == self.phase and target != BuildPhase.DONE:
            return
        if target < self.phase or self.phase == BuildPhase.DONE:
            msg = format_error_message(
                ErrorCode.E0005,
                target=target.name,
                current=self.phase.name,
            )
            raise BuildStateError(msg, code=ErrorCode.E0005)
        logger.debug("Build phase %s -> %s", self.phase.name, target.name)
        self.phase = target

    def report(self, diagnostic: Diagnostic) -> None:
        """Record and log a recoverable condition.

        Args:
            diagnostic: The condition to record.

        """
        self.diagnostics.append(diagnostic)
        diagnostic.log()
