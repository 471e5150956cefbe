"""Tests for parent/child matching and the reprocessing guard."""

from datasheet_finance.domain.models import RawRecord
from datasheet_finance.domain.services.hierarchy import (
    ParentLinkChildMatcher,
    TitlePrefixChildMatcher,
    child_title,
    children_of,
    is_splittable_parent,
    line_items,
)
from datasheet_finance.domain.services.reprocessing import ReprocessingGuard


def _record(record_id: str, title: str, values=None) -> RawRecord:
    return RawRecord(record_id=record_id, values=values or {}, title=title)


def test_children_of_matches_title_prefix() -> None:
    """Children are records titled '<parent> - ...'."""
    parent = _record("rec1", "Dinner")
    records = [
        parent,
        _record("rec2", "Dinner - Item 1"),
        _record("rec3", "Dinner party"),
        _record("rec4", "Dinner - Item 2"),
    ]

    children = children_of(parent, records)

    assert [child.record_id for child in children] == ["rec2", "rec4"]


def test_title_prefix_matcher_ignores_empty_parent_title() -> None:
    """A parent without title has no children."""
    matcher = TitlePrefixChildMatcher()

    orphan = _record("rec2", " - x")
    assert matcher.is_child(_record("rec1", ""), orphan) is False


def test_parent_link_matcher_uses_reference_field() -> None:
    """The link matcher follows an explicit parent reference."""
    parent = _record("rec1", "Dinner")
    records = [
        _record("rec2", "Starter", {"fldParent": ["rec1"]}),
        _record("rec3", "Dinner - Item 1", {"fldParent": ["rec9"]}),
        _record("rec4", "Main", {"fldParent": {"recordId": "rec1"}}),
        _record("rec5", "Dessert", {"fldParent": "rec1"}),
    ]

    children = children_of(
        parent,
        records,
        ParentLinkChildMatcher("fldParent"),
    )

    assert [child.record_id for child in children] == ["rec2", "rec4", "rec5"]


def test_child_title_numbers_from_one() -> None:
    """Line-item children use 1-based item numbers."""
    assert child_title("Dinner", 1) == "Dinner - Item 1"


def test_line_items_and_splittable_parent() -> None:
    """Only list cells count as line items."""
    record = _record("rec1", "Dinner", {"fldItems": ["a", "b"], "fldText": "a"})

    assert line_items(record, "fldItems") == ["a", "b"]
    assert line_items(record, "fldText") == []
    assert is_splittable_parent(record, "fldItems") is True
    assert is_splittable_parent(record, "fldText") is False


def test_reprocessing_guard_only_grows() -> None:
    """Suppressed ids stay suppressed; a new guard starts empty."""
    guard = ReprocessingGuard()
    guard.suppress("rec1")
    guard.suppress("rec1")

    assert guard.is_suppressed("rec1") is True
    assert "rec1" in guard
    assert len(guard) == 1
    assert "rec1" not in ReprocessingGuard()
