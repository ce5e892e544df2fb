from __future__ import annotations

from storygen.catalog import SourceCatalog, _path_matches


def test_discover_sorts_and_skips_generated_stories(tree_builder) -> None:
    tree_builder.write(
        {
            "components/ui/card.tsx": "export const Card = () => <div />;",
            "components/Badge.tsx": "export default function Badge() { return <span />; }",
            "components/Badge.stories.tsx": "// generated",
            "components/helpers.ts": "export const x = 1;",
            "components/node_modules/pkg/Thing.tsx": "export const Thing = () => null;",
            "components/.cache/Hidden.tsx": "export const Hidden = () => null;",
            "components/.Draft.tsx": "export const Draft = () => null;",
        }
    )
    catalog = SourceCatalog(tree_builder.path())

    discovered = [catalog.display_path(path) for path in catalog.discover()]

    assert discovered == ["components/Badge.tsx", "components/ui/card.tsx"]


def test_discover_stories_lists_only_story_files(tree_builder) -> None:
    tree_builder.write(
        {
            "components/Badge.tsx": "",
            "components/Badge.stories.tsx": "",
            "components/forms/Input.stories.tsx": "",
            "components/forms/Input.mdx": "",
        }
    )
    catalog = SourceCatalog(tree_builder.path())

    stories = [catalog.relative_to_base(path) for path in catalog.discover_stories()]

    assert stories == ["Badge.stories.tsx", "forms/Input.stories.tsx"]


def test_exclude_paths_prune_directories_and_files(tree_builder) -> None:
    tree_builder.write(
        {
            "components/legacy/Old.tsx": "",
            "components/ui/Button.tsx": "",
            "components/ui/Button.test.tsx": "",
        }
    )
    catalog = SourceCatalog(tree_builder.path(), exclude_paths=["legacy/", "**/*.test.tsx"])

    assert [catalog.relative_to_base(path) for path in catalog.discover()] == ["ui/Button.tsx"]


def test_missing_components_dir_yields_nothing(tree_builder) -> None:
    catalog = SourceCatalog(tree_builder.path(), "src/components")

    assert catalog.discover() == []
    assert catalog.discover_stories() == []


def test_story_path_replaces_only_the_suffix(tree_builder) -> None:
    catalog = SourceCatalog(tree_builder.path(), story_extension=".story.tsx")
    source = tree_builder.path() / "components" / "tsx-table.tsx"

    assert catalog.story_path_for(source).name == "tsx-table.story.tsx"


def test_load_parses_utf8_source(tree_builder) -> None:
    tree_builder.write({"components/Greeting.tsx": "export const Greeting = () => <p>héllo</p>;\n"})
    catalog = SourceCatalog(tree_builder.path())
    path = catalog.discover()[0]

    with catalog.load(path) as unit:
        assert "Greeting" in unit.variables
        assert unit.base_name == "Greeting"

    assert unit.tree is None
    assert unit.variables == {}


def test_path_matches_patterns() -> None:
    assert _path_matches("ui/Button.tsx", "**/*.tsx")
    assert _path_matches("Button.tsx", "**/*.tsx")
    assert _path_matches("legacy/Old.tsx", "legacy/**")
    assert _path_matches("deep/legacy/Old.tsx", "legacy/")
    assert not _path_matches("ui/Button.ts", "**/*.tsx")
