"""Tests for keyword index loading."""

from __future__ import annotations

import json

import pytest

from core.catalog import Category, KeywordEntry, KeywordIndex, Scope
from core.errors import DuplicateKeywordError, IndexUnavailableError


def test_from_json_preserves_order_and_fields() -> None:
    text = json.dumps({
        "wasp": {"class": "bugs", "OtherKeywords": ["sting"]},
        "raccoon": {"class": "Animals", "OtherKeywords": ["masked"]},
        "poison ivy": {"class": "PLANTS"},
    })

    index = KeywordIndex.from_json(text)

    assert index.keywords() == ["wasp", "raccoon", "poison ivy"]
    assert index.get("wasp") == KeywordEntry("wasp", Category.BUGS, ("sting",))
    assert index.get("Poison_Ivy").aliases == ()
    assert "RACCOON" in index


def test_repeated_json_key_rejected() -> None:
    text = '{"flea": {"class": "Bugs"}, "flea": {"class": "Bugs"}}'

    with pytest.raises(DuplicateKeywordError):
        KeywordIndex.from_json(text)


def test_normalized_duplicate_rejected() -> None:
    text = json.dumps({
        "bed bug": {"class": "Bugs"},
        "Bed_Bug": {"class": "Bugs"},
    })

    with pytest.raises(DuplicateKeywordError, match="bed bug"):
        KeywordIndex.from_json(text)


def test_last_wins_keeps_first_position() -> None:
    text = (
        '{"flea": {"class": "Bugs", "OtherKeywords": ["a"]},'
        ' "wasp": {"class": "Bugs"},'
        ' "flea": {"class": "Bugs", "OtherKeywords": ["b"]}}'
    )

    index = KeywordIndex.from_json(text, duplicates="last_wins")

    assert index.keywords() == ["flea", "wasp"]
    assert index.get("flea").aliases == ("b",)


@pytest.mark.parametrize("text", ["not json", "[1, 2]", '"bed bug"'])
def test_malformed_document(text: str) -> None:
    with pytest.raises(IndexUnavailableError):
        KeywordIndex.from_json(text)


def test_bad_entries_skipped() -> None:
    text = json.dumps({
        "flea": {"class": "Bugs", "OtherKeywords": "pets"},
        "mushroom": {"class": "Fungi"},
        "broken": ["Bugs"],
        "wasp": {"class": "Bugs", "OtherKeywords": {"nested": "value"}},
    })

    index = KeywordIndex.from_json(text)

    assert index.keywords() == ["flea", "wasp"]
    assert index.get("flea").aliases == ("pets",)
    assert index.get("wasp").aliases == ()


def test_in_scope_filters_by_category(index: KeywordIndex) -> None:
    assert [e.keyword for e in index.in_scope(Scope.ANIMALS)] == ["raccoon"]
    assert len(index.in_scope("all")) == len(index)
    assert index.in_scope("Fungi") == []


def test_unknown_duplicate_policy() -> None:
    with pytest.raises(ValueError):
        KeywordIndex([], duplicates="first")


def test_parse_enums() -> None:
    assert Category.parse("PLANTS") is Category.PLANTS
    assert Category.parse("fungi") is None
    assert Scope.parse("all") is Scope.ALL
    assert Scope.parse(Scope.BUGS) is Scope.BUGS
    assert Scope.parse("x") is None
