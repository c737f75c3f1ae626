"""Tests for the build-scoped module and asset registries."""

from css_sourcemap.registry import AssetModuleIndex, ModuleMapRegistry


class TestModuleMapRegistry:
    """Test ModuleMapRegistry."""

    def test_register_and_get(self) -> None:
        """A registered handle is returned for its module."""
        registry = ModuleMapRegistry()
        registry.register("a.css", "ref-1")
        assert registry.get("a.css") == "ref-1"
        assert "a.css" in registry
        assert len(registry) == 1

    def test_unknown_module(self) -> None:
        """Unknown modules have no handle."""
        registry = ModuleMapRegistry()
        assert registry.get("missing.css") is None
        assert "missing.css" not in registry

    def test_latest_handle_wins(self) -> None:
        """Transforming a module again replaces its handle."""
        registry = ModuleMapRegistry()
        registry.register("a.css", "ref-1")
        registry.register("a.css", "ref-2")
        assert registry.get("a.css") == "ref-2"
        assert len(registry) == 1


class TestAssetModuleIndex:
    """Test AssetModuleIndex."""

    def test_insertion_order_preserved(self) -> None:
        """Modules are returned in the order they were added."""
        index = AssetModuleIndex()
        for module_id in ["c.css", "a.css", "b.css"]:
            index.add("index.css", module_id)
        assert index.get("index.css") == ["c.css", "a.css", "b.css"]

    def test_keys_are_independent(self) -> None:
        """Interleaved additions do not mix memberships."""
        index = AssetModuleIndex()
        index.add("index.css", "a.css")
        index.add("foo.css", "x.css")
        index.add("index.css", "b.css")
        assert index.get("index.css") == ["a.css", "b.css"]
        assert index.get("foo.css") == ["x.css"]
        assert list(index.keys()) == ["index.css", "foo.css"]
        assert len(index) == 2

    def test_get_returns_copy(self) -> None:
        """Callers cannot modify the stored membership."""
        index = AssetModuleIndex()
        index.add("index.css", "a.css")
        index.get("index.css").append("b.css")
        assert index.get("index.css") == ["a.css"]

    def test_resolve_first_known_key(self) -> None:
        """Resolve falls back to later keys in order."""
        index = AssetModuleIndex()
        index.add("index-abcd1234.css", "a.css")
        assert index.resolve("index", "index-abcd1234.css") == ["a.css"]

    def test_resolve_prefers_first_key(self) -> None:
        """The first key with a membership wins."""
        index = AssetModuleIndex()
        index.add("assets/index", "a.css")
        index.add("assets/index.css", "b.css")
        assert index.resolve("assets/index", "assets/index.css") == ["a.css"]

    def test_resolve_unknown(self) -> None:
        """Unknown keys resolve to no modules."""
        assert AssetModuleIndex().resolve("index", "index.css") == []
