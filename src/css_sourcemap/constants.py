"""Shared constants for the CSS sourcemap plugin."""

PLUGIN_NAME = "css-sourcemap"
"""Name under which the plugin registers with the host pipeline."""

CSS_POST_PLUGIN_NAME = "vite:css-post"
"""Collaborator plugin whose chunk hash contribution is observed."""

EXTENSIONS: tuple[str, ...] = (
    ".css",
    ".less",
    ".sass",
    ".scss",
    ".styl",
    ".stylus",
    ".pcss",
    ".postcss",
    ".sss",
)
"""Style source suffixes handled by default."""

CSS_OUTPUT_SUFFIX = ".css"
"""Suffix of bundled style assets that receive a merged map."""

MAP_SUFFIX = ".map"

SOURCEMAP_VERSION = 3
