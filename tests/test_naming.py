"""Tests for naming template evaluation."""

import pytest

from css_sourcemap.errors.codes import ErrorCode
from css_sourcemap.errors.exceptions import CssSourcemapConfigError
from css_sourcemap.host import (
    DynamicPattern,
    OutputOptions,
    PreRenderedAsset,
    PreRenderedChunk,
    StaticPattern,
    as_naming_pattern,
)
from css_sourcemap.naming import (
    asset_directory,
    expected_asset_path,
    extract_template_name,
    has_hash_placeholder,
)


class TestExtractTemplateName:
    """Test extract_template_name."""

    def test_string_input(self) -> None:
        """Use the stem of a single entry path."""
        assert extract_template_name("src/main.ts") == "main"

    def test_list_input(self) -> None:
        """Use the first entry of a list."""
        assert extract_template_name(["./index.html", "./foo.html"]) == "index"

    def test_mapping_input(self) -> None:
        """Use the first entry name of named entries."""
        assert extract_template_name({"app": "./index.html", "b": "./b.html"}) == "app"

    @pytest.mark.parametrize("entries", [[], {}, ""])
    def test_no_entries(self, entries) -> None:
        """A build without entries is a configuration error."""
        with pytest.raises(CssSourcemapConfigError) as exc_info:
            extract_template_name(entries)
        assert exc_info.value.code is ErrorCode.E0002


class TestAsNamingPattern:
    """Test coercion of naming template option values."""

    def test_string(self) -> None:
        """Strings become static patterns."""
        assert as_naming_pattern("[name].js") == StaticPattern("[name].js")

    def test_callable(self) -> None:
        """Callables become dynamic patterns."""

        def fn(chunk: PreRenderedChunk) -> str:
            return chunk.name

        assert as_naming_pattern(fn) == DynamicPattern(fn)

    def test_none_and_patterns_pass_through(self) -> None:
        """None and existing patterns are returned as-is."""
        pattern = StaticPattern("x")
        assert as_naming_pattern(None) is None
        assert as_naming_pattern(pattern) is pattern

    def test_invalid_value(self) -> None:
        """Other values are rejected."""
        with pytest.raises(TypeError):
            as_naming_pattern(42)

    def test_output_options_coerce(self) -> None:
        """OutputOptions accepts plain strings."""
        options = OutputOptions(entry_file_names="[name].js")
        assert options.entry_file_names == StaticPattern("[name].js")


class TestHasHashPlaceholder:
    """Test has_hash_placeholder."""

    def test_no_template_assumes_hash(self) -> None:
        """Without a template the host's hashed default applies."""
        assert has_hash_placeholder(None, "index")

    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("[name].js", False),
            ("[name]-[hash].js", True),
            ("js/[name].[hash:8].js", True),
            ("[name]-hash.js", False),
        ],
    )
    def test_static(self, template: str, expected: bool) -> None:
        """Detect hash placeholders in static templates."""
        assert has_hash_placeholder(StaticPattern(template), "index") is expected

    def test_dynamic_evaluated_with_entry(self) -> None:
        """Dynamic templates are called with the entry chunk description."""
        seen: list[PreRenderedChunk] = []

        def entry_names(chunk: PreRenderedChunk) -> str:
            seen.append(chunk)
            return f"{chunk.name}-[hash].js"

        assert has_hash_placeholder(DynamicPattern(entry_names), "index")
        assert seen == [PreRenderedChunk(name="index", is_entry=True)]

    def test_dynamic_without_hash(self) -> None:
        """A dynamic template may produce unhashed names."""
        assert not has_hash_placeholder(DynamicPattern(lambda _: "[name].js"), "x")

    def test_dynamic_non_string(self) -> None:
        """A dynamic template returning a non-string is rejected."""
        with pytest.raises(CssSourcemapConfigError) as exc_info:
            has_hash_placeholder(DynamicPattern(lambda _: None), "index")
        assert exc_info.value.code is ErrorCode.E0003


class TestAssetDirectory:
    """Test asset_directory and expected_asset_path."""

    def test_no_template(self) -> None:
        """No template means assets land in the output root."""
        assert asset_directory(None, "index") is None

    def test_static_with_directory(self) -> None:
        """Use the directory part of a static template."""
        pattern = StaticPattern("assets/[name].[hash].[ext]")
        assert asset_directory(pattern, "index") == "assets"

    def test_static_without_directory(self) -> None:
        """A template without a directory has none."""
        assert asset_directory(StaticPattern("[name][extname]"), "index") is None

    def test_dynamic_evaluated_with_stylesheet(self) -> None:
        """Dynamic templates are called with the stylesheet description."""
        seen: list[PreRenderedAsset] = []

        def asset_names(asset: PreRenderedAsset) -> str:
            seen.append(asset)
            return "styles/nested/[name][extname]"

        assert asset_directory(DynamicPattern(asset_names), "index") == "styles/nested"
        assert seen == [PreRenderedAsset(name="index.css")]

    def test_expected_path_with_directory(self) -> None:
        """The pre-hash key joins the template name below the directory."""
        options = OutputOptions(asset_file_names="assets/[name][extname]")
        assert expected_asset_path(options, "index") == "assets/index"

    def test_expected_path_without_options(self) -> None:
        """Without output options the key is the template name."""
        assert expected_asset_path(None, "index") == "index"
