"""Tests for syntax based type classification."""

from __future__ import annotations

from storygen.analysis.types import SyntaxTypeClassifier
from storygen.models import (
    LITERAL_NUMBER,
    LITERAL_STRING,
    TYPE_BOOLEAN,
    TYPE_ENUM_OR_UNION,
    TYPE_NUMBER,
    TYPE_OTHER,
    TYPE_STRING,
    LiteralMember,
)
from tests._fixtures.component_tree import parse_source


SOURCE = """
type Tone = 'red' | "blue";
type Wrapped = Tone;
type Single = "only" | null;
type Flag = true | false;
enum Size { Small, Medium = 5, Large }
enum Palette { Primary = "primary", Secondary = "secondary" }
interface Nested { inner: string }

interface ProbeProps {
  title: string;
  count?: number;
  open: boolean;
  flag: Flag;
  tone: Tone;
  wrapped: Wrapped;
  single: Single;
  size: Size;
  palette: Palette;
  offsets: -1 | 2;
  nested: Nested;
  onClick: () => void;
  external: ExternalType;
  maybe: string | undefined;
}
"""


def _records():
    unit = parse_source(SOURCE)
    classifier = SyntaxTypeClassifier(unit)
    records = classifier.own_properties(unit.interfaces["ProbeProps"])
    return classifier, {record.name: record for record in records}


def test_own_properties_keep_order_and_optionality() -> None:
    _, records = _records()

    assert list(records)[:3] == ["title", "count", "open"]
    assert records["count"].optional is True
    assert records["title"].optional is False


def test_classify_primitives_and_unions() -> None:
    classifier, records = _records()
    classes = {name: classifier.classify(record.type_node) for name, record in records.items()}

    assert classes["title"] == TYPE_STRING
    assert classes["count"] == TYPE_NUMBER
    assert classes["open"] == TYPE_BOOLEAN
    assert classes["flag"] == TYPE_BOOLEAN
    assert classes["tone"] == TYPE_ENUM_OR_UNION
    assert classes["wrapped"] == TYPE_ENUM_OR_UNION
    assert classes["size"] == TYPE_ENUM_OR_UNION
    assert classes["palette"] == TYPE_ENUM_OR_UNION
    assert classes["offsets"] == TYPE_ENUM_OR_UNION
    assert classes["nested"] == TYPE_OTHER
    assert classes["onClick"] == TYPE_OTHER
    assert classes["external"] == TYPE_OTHER


def test_nullish_members_are_dropped() -> None:
    classifier, records = _records()

    # A union left with a single member collapses into that member.
    assert classifier.classify(records["single"].type_node) == TYPE_OTHER
    assert classifier.classify(records["maybe"].type_node) == TYPE_STRING


def test_first_union_member_values() -> None:
    classifier, records = _records()

    assert classifier.first_union_member(records["tone"].type_node) == LiteralMember(LITERAL_STRING, "red")
    assert classifier.first_union_member(records["wrapped"].type_node) == LiteralMember(LITERAL_STRING, "red")
    assert classifier.first_union_member(records["size"].type_node) == LiteralMember(LITERAL_NUMBER, "0")
    assert classifier.first_union_member(records["palette"].type_node) == LiteralMember(
        LITERAL_STRING, "primary"
    )
    assert classifier.first_union_member(records["offsets"].type_node) == LiteralMember(LITERAL_NUMBER, "-1")


def test_intersections_flatten_into_branches() -> None:
    unit = parse_source(
        """
        type Base = { id: string };
        type Extra = { label: string } & { hint?: string };
        type All = Base & Extra;
        """
    )
    classifier = SyntaxTypeClassifier(unit)
    value = unit.type_aliases["All"].child_by_field_name("value")

    assert classifier.is_intersection(value)
    branches = classifier.intersection_members(value)
    names = [record.name for branch in branches for record in classifier.properties(branch)]
    assert names == ["id", "label", "hint"]


def test_interface_properties_include_extended_members() -> None:
    unit = parse_source(
        """
        interface Base { id: string }
        interface Card extends Base { title: string }
        type Alias = Card;
        """
    )
    classifier = SyntaxTypeClassifier(unit)
    value = unit.type_aliases["Alias"].child_by_field_name("value")

    assert [record.name for record in classifier.properties(value)] == ["title", "id"]
    assert [record.name for record in classifier.own_properties(unit.interfaces["Card"])] == ["title"]


def test_utility_types_reshape_local_properties() -> None:
    unit = parse_source(
        """
        type Base = { id: string; label: string; tone?: "a" | "b" };
        type Trimmed = Omit<Base, "id">;
        type Picked = Pick<Base, "id" | "tone">;
        type Loose = Partial<Base>;
        type Strict = Required<Base>;
        type Wrapped = React.PropsWithChildren<Base>;
        """
    )
    classifier = SyntaxTypeClassifier(unit)

    def props(alias: str):
        return classifier.own_properties(unit.type_aliases[alias])

    assert [r.name for r in props("Trimmed")] == ["label", "tone"]
    assert [r.name for r in props("Picked")] == ["id", "tone"]
    assert all(r.optional for r in props("Loose"))
    assert not any(r.optional for r in props("Strict"))
    assert [r.name for r in props("Wrapped")] == ["id", "label", "tone"]


def test_self_referencing_types_terminate() -> None:
    unit = parse_source(
        """
        type Loop = Loop & { id: string };
        type Outer = Loop;
        interface Tree extends Tree { name: string }
        type Ref = Tree;
        """
    )
    classifier = SyntaxTypeClassifier(unit)

    loop = unit.type_aliases["Outer"].child_by_field_name("value")
    ref = unit.type_aliases["Ref"].child_by_field_name("value")

    assert [record.name for record in classifier.properties(loop)] == ["id"]
    assert [record.name for record in classifier.properties(ref)] == ["name"]
