"""Tests for the filter Builder."""

import pytest

from ddd_toolkit.infrastructure.filter import Builder, Equal, FilterValueInvalidError


def test_builder_starts_empty() -> None:
    builder = Builder()

    assert len(builder) == 0
    assert builder.to_list() == []


def test_eq_to_list() -> None:
    assert Builder().eq("foo", "bar").to_list() == [
        {"type": "$eq", "target": "foo", "value": "bar"}
    ]


def test_between_to_list() -> None:
    assert Builder().between("foo", [10, 20]).to_list() == [
        {"type": "$between", "target": "foo", "value": [10, 20]}
    ]


def test_in_to_list() -> None:
    assert Builder().in_("foo", ["bar", "baz"]).to_list() == [
        {"type": "$in", "target": "foo", "value": ["bar", "baz"]}
    ]


def test_chaining_keeps_order() -> None:
    builder = (
        Builder()
        .eq("status", "active")
        .neq("role", "guest")
        .gte("age", 18)
        .lt("age", 65)
        .gt("score", 1)
        .lte("score", 10)
        .not_between("created", ["2024-01-01", "2024-02-01"])
        .between_columns("today", ["starts_on", "ends_on"])
        .not_between_columns("today", ["paused_from", "paused_to"])
        .not_in("country", ["XX", "YY"])
        .like("name", "A%")
        .not_like("name", "%bot")
        .is_null("deleted_at")
        .is_not_null("email")
    )

    assert len(builder) == 14
    assert [item["type"] for item in builder.to_list()] == [
        "$eq",
        "$notEq",
        "$gte",
        "$lt",
        "$gt",
        "$lte",
        "$notBetween",
        "$betweenColumns",
        "$notBetweenColumns",
        "$notIn",
        "$like",
        "$notLike",
        "$null",
        "$null",
    ]


def test_invalid_filter_fails_whole_list() -> None:
    builder = Builder().eq("foo", "bar").between("foo", ["x"])

    with pytest.raises(FilterValueInvalidError, match=r'"\["x"\]"'):
        builder.to_list()


def test_filters_and_iteration() -> None:
    builder = Builder().eq("foo", "bar").add(Equal("baz", 1))

    assert builder.filters == (Equal("foo", "bar"), Equal("baz", 1))
    assert [f.target for f in builder] == ["foo", "baz"]
