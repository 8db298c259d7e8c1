"""Tests for label parsing and item construction."""

from __future__ import annotations

import dataclasses

import pytest

from typeahead_cli.core import ParsedName, RawItem, SuggestionItem, parse_name


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Rock [Music]", ParsedName("Rock", "Music")),
        ("  Hip Hop   [ Dance ]", ParsedName("Hip Hop", "Dance")),
        ("Jazz", ParsedName("Jazz", None)),
        ("A [b] [c]", ParsedName("A [b]", "c")),
    ],
)
def test_parse_name_splits_trailing_bracket(label, expected):
    assert parse_name(label) == expected


@pytest.mark.parametrize(
    "label",
    ["Rock [Music", "Rock Music]", "Rock []", "Rock [ ]", " [Music]", "[Music]", ""],
)
def test_parse_name_falls_back_to_whole_label(label):
    assert parse_name(label) == ParsedName(label, None)


def test_suggestion_item_from_raw_parses_name():
    raw = RawItem(
        id=7,
        name="Python [Programming]",
        avatar="https://img.example/python.png",
        color="#3776AB",
        type="interest",
        match=0.92,
        existing=True,
    )

    item = SuggestionItem.from_raw(raw)

    assert item.id == 7
    assert item.name == "Python"
    assert item.secondary_term == "Programming"
    assert item.avatar == "https://img.example/python.png"
    assert item.match == 0.92
    assert item.existing is True
    assert item.label == "Python [Programming]"


def test_suggestion_item_is_immutable():
    item = SuggestionItem(id=1, name="Music")
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.name = "Other"  # type: ignore[misc]


def test_raw_item_from_dict_tolerates_missing_optionals():
    raw = RawItem.from_dict({"id": 3, "name": "Chess", "color": None, "type": "interest"})

    assert raw.avatar is None
    assert raw.color == ""
    assert raw.match is None
    assert raw.existing is None
