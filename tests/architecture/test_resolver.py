"""Tests for namespace map construction and reference resolution."""

import pytest

from archmap.architecture.resolver import (
    NamespaceResolver,
    build_namespace_map,
    namespace_prefixes,
)
from archmap.scanning.dialects import PHP


def _php(namespace):
    return f"<?php\nnamespace {namespace};\nclass X {{}}\n"


class TestNamespacePrefixes:
    def test_shortest_first(self):
        assert namespace_prefixes("App\\Domain\\Model", "\\") == [
            "App",
            "App\\Domain",
            "App\\Domain\\Model",
        ]

    def test_leading_separator_ignored(self):
        assert namespace_prefixes("\\App\\Domain", "\\") == ["App", "App\\Domain"]


class TestBuildNamespaceMap:
    def test_maps_namespace_and_prefixes(self, php_tree):
        root = php_tree({"Domain/Model/Order.php": _php("App\\Domain\\Model")})
        mapping = build_namespace_map(root, PHP)
        assert mapping["App\\Domain\\Model"] == "Domain/Model"
        assert mapping["App\\Domain"] == "Domain/Model"
        assert mapping["App"] == "Domain/Model"

    def test_first_seen_wins(self, php_tree):
        root = php_tree(
            {
                "a/One.php": _php("App\\Shared"),
                "b/Two.php": _php("App\\Shared"),
            }
        )
        mapping = build_namespace_map(root, PHP)
        assert mapping["App\\Shared"] == "a"

    def test_prefix_claimed_by_first_directory(self, php_tree):
        root = php_tree(
            {
                "a/One.php": _php("App\\Billing"),
                "b/Two.php": _php("App\\Shipping"),
            }
        )
        mapping = build_namespace_map(root, PHP)
        assert mapping["App"] == "a"
        assert mapping["App\\Shipping"] == "b"

    def test_root_files_map_to_sentinel(self, php_tree):
        root = php_tree({"Kernel.php": _php("App")})
        assert build_namespace_map(root, PHP)["App"] == "/"

    def test_global_namespace_files_ignored(self, php_tree):
        root = php_tree({"a/helpers.php": "<?php\nfunction f() {}\n"})
        assert dict(build_namespace_map(root, PHP)) == {}

    def test_map_is_read_only(self, php_tree):
        root = php_tree({"a/One.php": _php("App")})
        mapping = build_namespace_map(root, PHP)
        with pytest.raises(TypeError):
            mapping["Other"] = "b"


class TestNamespaceResolver:
    @pytest.fixture
    def resolver(self, php_tree):
        root = php_tree(
            {
                "Domain/Order.php": _php("App\\Domain"),
                "Http/Controller.php": _php("App\\Http"),
                "src/Legacy/Thing/Old.php": "<?php\nclass Old {}\n",
                "Vendorish/Lib/x.php": "<?php\n",
            }
        )
        mapping = build_namespace_map(root, PHP)
        return NamespaceResolver(mapping, root, PHP)

    def test_exact_match(self, resolver):
        assert resolver.resolve("App\\Http") == "Http"

    def test_closest_ancestor(self, resolver):
        assert resolver.resolve("App\\Domain\\Order") == "Domain"
        assert resolver.resolve("App\\Domain\\Sub\\Deep\\Thing") == "Domain"

    def test_leading_separator(self, resolver):
        assert resolver.resolve("\\App\\Http\\Controller") == "Http"

    def test_path_guess_under_root(self, resolver):
        assert resolver.resolve("Vendorish\\Lib\\Client") == "Vendorish/Lib"

    def test_path_guess_under_conventional_root(self, resolver):
        assert resolver.resolve("Legacy\\Thing\\Old") == "src/Legacy/Thing"

    def test_single_segment_under_conventional_root(self, resolver):
        # Read as src/DateTime, whose parent src/ exists
        assert resolver.resolve("DateTime") == "src"

    def test_unresolved(self, resolver):
        assert resolver.resolve("Symfony\\Component\\Console\\Command") is None

    def test_empty_identifier(self, resolver):
        assert resolver.resolve("") is None
        assert resolver.resolve("\\") is None

    def test_single_segment_never_resolves_to_root(self, tmp_path):
        (tmp_path / "DateTime").mkdir()
        resolver = NamespaceResolver({}, tmp_path, PHP)
        assert resolver.resolve("DateTime") is None
