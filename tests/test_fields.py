from __future__ import annotations

import pytest

from repocli.errors import MalformedInputError
from repocli.fields import (
    Comparison,
    Direction,
    FieldMapper,
    ISSUE_FIELD_MAP,
    canonical_json,
    compare,
    map_fields,
    map_json_text,
    normalize,
    select_fields,
)


def test_github_to_target_renames_top_level_fields():
    data = {"body": "hello", "html_url": "https://x/y", "number": 42}
    assert map_fields(data, Direction.GITHUB_TO_TARGET) == {
        "description": "hello",
        "web_url": "https://x/y",
        "iid": 42,
    }


@pytest.mark.parametrize("direction", list(Direction))
def test_empty_object_maps_to_empty_object(direction):
    assert map_fields({}, direction) == {}


def test_nested_and_array_paths_round_trip():
    original = {
        "body": "b",
        "title": "t",
        "user": {"login": "octo"},
        "assignees": [{"login": "a"}, {"login": "b", "id": 2}],
        "extra": {"kept": True},
    }
    target = map_fields(original, Direction.GITHUB_TO_TARGET)
    assert target == {
        "description": "b",
        "title": "t",
        "author": {"username": "octo"},
        "assignees": [{"username": "a"}, {"username": "b", "id": 2}],
        "extra": {"kept": True},
    }
    assert map_fields(target, Direction.TARGET_TO_GITHUB) == original


def test_mapping_does_not_mutate_input():
    data = {"body": "x", "user": {"login": "u"}}
    map_fields(data, "github-to-target")
    assert data == {"body": "x", "user": {"login": "u"}}


@pytest.mark.parametrize("direction", list(Direction))
def test_mapping_is_idempotent(direction):
    data = {"body": "x", "description": "y", "number": 1, "user": {"login": "u"}}
    once = map_fields(data, direction)
    assert map_fields(once, direction) == once


def test_lists_map_element_wise():
    out = map_fields([{"number": 1}, {"number": 2}], Direction.GITHUB_TO_TARGET)
    assert out == [{"iid": 1}, {"iid": 2}]


def test_partial_nested_parent_is_kept():
    out = map_fields({"user": {"login": "u", "id": 9}}, Direction.GITHUB_TO_TARGET)
    assert out == {"user": {"id": 9}, "author": {"username": "u"}}


def test_custom_table():
    mapper = FieldMapper(ISSUE_FIELD_MAP)
    out = mapper.map({"iid": 3, "created_at": "2024"}, Direction.TARGET_TO_GITHUB)
    assert out == {"number": 3, "createdAt": "2024"}


def test_table_rejects_array_shape_mismatch():
    with pytest.raises(ValueError):
        FieldMapper((("labels[].name", "label_names"),))


def test_malformed_input_raises():
    with pytest.raises(MalformedInputError):
        map_fields("not json", Direction.GITHUB_TO_TARGET)
    with pytest.raises(MalformedInputError):
        map_json_text("{broken", Direction.GITHUB_TO_TARGET)
    with pytest.raises(MalformedInputError):
        map_json_text("42", Direction.GITHUB_TO_TARGET)


def test_map_json_text_parses_first():
    assert map_json_text('{"web_url": "u"}', Direction.TARGET_TO_GITHUB) == {"html_url": "u"}


def test_normalize_timestamps_and_booleans():
    data = {
        "created_at": "2024-01-02T03:04:05.123+02:00",
        "updated_at": "2024-01-02T03:04:05Z",
        "confidential": "false",
        "nested": [{"flag": "true"}],
        "title": "2024 plans",
    }
    assert normalize(data) == {
        "created_at": "2024-01-02T01:04:05Z",
        "updated_at": "2024-01-02T03:04:05Z",
        "confidential": False,
        "nested": [{"flag": True}],
        "title": "2024 plans",
    }


def test_canonical_json_sorts_keys():
    assert canonical_json({"b": 1, "a": "true"}) == '{"a":true,"b":1}'


def test_compare_levels():
    assert compare({"a": 1, "b": "true"}, {"b": True, "a": 1}) is Comparison.IDENTICAL
    left = {"body": "x", "created_at": "2024-01-01T00:00:00Z"}
    right = {"description": "x", "created_at": "2024-01-01T00:00:00.000Z"}
    assert compare(left, right) is Comparison.EQUIVALENT
    assert compare(left, right, Direction.GITHUB_TO_TARGET) is Comparison.EQUIVALENT
    assert compare({"body": "x"}, {"description": "y"}) is Comparison.DIFFERENT


def test_select_fields():
    data = [{"a": 1, "b": 2}, {"a": 3}]
    assert select_fields(data, ["a"]) == [{"a": 1}, {"a": 3}]
    assert select_fields({"a": 1}, ["a", "missing"]) == {"a": 1, "missing": None}
