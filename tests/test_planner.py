from __future__ import annotations

from pathlib import Path

from storygen.analysis.components import ComponentFilter
from storygen.config import StoryGenConfig
from storygen.models import PropAssignment
from storygen.planner import StoryPlanner
from tests._fixtures.component_tree import parse_source


def _plan(source: str, relative_path: str = "Example.tsx", planner: StoryPlanner | None = None):
    unit = parse_source(source, f"components/{relative_path}")
    story_path = Path("components") / relative_path.replace(".tsx", ".stories.tsx")
    return (planner or StoryPlanner()).plan(unit, relative_path, story_path)


def test_badge_default_export_plan() -> None:
    plan = _plan(
        """
        interface BadgeProps {
          label: string;
          variant: "red" | "blue";
        }

        export default function Badge({ label, variant }: BadgeProps) {
          return <span className={variant}>{label}</span>;
        }
        """,
        "Badge.tsx",
    )

    assert plan is not None
    assert plan.title == "Components/Badge/Badge"
    assert plan.primary_export_name == "Badge"
    assert plan.import_lines == ["import Badge from './Badge';"]
    assert plan.decorators == []
    assert [story.name for story in plan.stories] == ["Primary"]
    assert plan.stories[0].assignments == [
        PropAssignment("label", '"Sample Text"'),
        PropAssignment("variant", '"red"'),
    ]


def test_named_exports_become_secondary_stories() -> None:
    plan = _plan(
        """
        import { cva } from "class-variance-authority";

        export const buttonVariants = cva("px-4", { variants: { size: { sm: "h-8" } } });

        interface ButtonProps { label: string; disabled?: boolean }
        export function Button({ label }: ButtonProps) { return <button>{label}</button>; }

        interface IconButtonProps { icon: React.ReactNode; size?: number }
        export const IconButton = ({ icon }: IconButtonProps) => <button>{icon}</button>;

        export function useButtonState() { return {}; }
        """,
        "button.tsx",
    )

    assert plan is not None
    assert plan.title == "Components/Button/Button"
    assert plan.import_lines == [
        "import { buttonVariants, Button, IconButton, useButtonState } from './button';"
    ]
    assert plan.secondary_story_names == ["IconButtonStory"]
    assert plan.stories[0].assignments == [
        PropAssignment("label", '"Sample Text"'),
        PropAssignment("disabled", "true"),
    ]
    assert plan.stories[1].assignments == [
        PropAssignment("icon", "undefined", placeholder=True),
        PropAssignment("size", "123"),
    ]


def test_default_export_keeps_named_siblings() -> None:
    plan = _plan(
        """
        export function MenuItem() { return <li />; }
        export default function Menu() { return <ul />; }
        """,
        "menu.tsx",
    )

    assert plan is not None
    assert plan.primary_export_name == "Menu"
    assert plan.import_lines == ["import Menu, { MenuItem } from './menu';"]
    assert plan.secondary_story_names == ["MenuItemStory"]


def test_primary_falls_back_to_name_only_match() -> None:
    plan = _plan(
        """
        export const Panel = ({ tone }: { tone: "a" | "b" }) => <div className={cn("p-2", tone)} />;
        """,
        "panel.tsx",
    )

    assert plan is not None
    assert plan.primary_export_name == "Panel"
    assert plan.stories[0].assignments == [PropAssignment("tone", '"a"')]


def test_file_without_usable_exports_has_no_plan() -> None:
    assert _plan("export const formatDate = (value: Date) => value.toISOString();\n", "dates.tsx") is None
    assert _plan("export type Size = 'sm' | 'lg';\n", "types.tsx") is None


def test_context_markers_add_decorators_and_imports() -> None:
    plan = _plan(
        """
        export function ChartTooltip() {
          const { config } = useChart();
          return <div />;
        }
        """,
        "chart-tooltip.tsx",
    )

    assert plan is not None
    assert [decorator.name for decorator in plan.decorators] == ["chart"]
    assert plan.import_lines == [
        "import { ChartTooltip } from './chart-tooltip';",
        "import { ChartContainer } from './chart';",
    ]


def test_aliased_export_uses_local_declaration_props() -> None:
    plan = _plan(
        """
        interface InnerCardProps { heading: string }
        function InnerCard({ heading }: InnerCardProps) { return <div>{heading}</div>; }
        export { InnerCard as Card };
        """,
        "card.tsx",
    )

    assert plan is not None
    assert plan.primary_export_name == "Card"
    assert plan.stories[0].assignments == [PropAssignment("heading", '"Sample Text"')]


def test_planner_from_config_uses_heuristics() -> None:
    config = StoryGenConfig(root=Path("."), title_prefix="UI")
    config.heuristics.excluded_name_fragments = ["legacy"]
    planner = StoryPlanner.from_config(config)

    plan = _plan(
        """
        export function LegacyTable() { return <table />; }
        export function ButtonUtils() { return <div />; }
        """,
        "table.tsx",
        planner,
    )

    assert isinstance(planner.component_filter, ComponentFilter)
    assert plan is not None
    assert plan.title == "UI/Table/ButtonUtils"
    assert plan.secondary_story_names == []


def test_default_export_of_named_function_stays_primary() -> None:
    plan = _plan(
        """
        export function Bar({ count }: { count: number }) { return <i>{count}</i>; }
        export function Foo({ label }: { label: string }) { return <b>{label}</b>; }
        export default Foo;
        """,
        "foo.tsx",
    )

    assert plan is not None
    assert plan.primary_export_name == "Foo"
    assert plan.title == "Components/Foo/Foo"
    assert plan.import_lines == ["import Foo, { Bar } from './foo';"]
    assert plan.secondary_story_names == ["BarStory"]
    assert plan.stories[0].assignments == [PropAssignment("label", '"Sample Text"')]
    assert plan.stories[1].assignments == [PropAssignment("count", "123")]
