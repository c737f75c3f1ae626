"""Shared fixtures for the CSS sourcemap plugin tests."""

import pytest

from css_sourcemap.config import CssSourcemapOptions
from css_sourcemap.context import BuildContext


@pytest.fixture
def options() -> CssSourcemapOptions:
    return CssSourcemapOptions()


@pytest.fixture
def build(options: CssSourcemapOptions) -> BuildContext:
    """Fresh build context for the ``index`` entry."""
    return BuildContext(options=options, template_name="index")
