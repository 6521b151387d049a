"""Tests for individual filter expressions."""

from dataclasses import FrozenInstanceError

import pytest

from ddd_toolkit.infrastructure.filter import (
    Between,
    BetweenColumns,
    Equal,
    Filter,
    FilterType,
    FilterValueInvalidError,
    GreaterThan,
    GreaterThanEqualTo,
    In,
    IsNotNull,
    IsNull,
    LessThan,
    LessThanEqualTo,
    Like,
    NotBetween,
    NotBetweenColumns,
    NotEqual,
    NotIn,
    NotLike,
)


@pytest.mark.parametrize(
    ("filter_", "expected"),
    [
        (Equal("foo", "bar"), {"type": "$eq", "target": "foo", "value": "bar"}),
        (NotEqual("foo", 1), {"type": "$notEq", "target": "foo", "value": 1}),
        (Like("foo", "ba%"), {"type": "$like", "target": "foo", "value": "ba%"}),
        (NotLike("foo", 2.5), {"type": "$notLike", "target": "foo", "value": 2.5}),
        (GreaterThan("foo", 123), {"type": "$gt", "target": "foo", "value": 123}),
        (GreaterThanEqualTo("foo", 1.5), {"type": "$gte", "target": "foo", "value": 1.5}),
        (LessThan("foo", 0), {"type": "$lt", "target": "foo", "value": 0}),
        (LessThanEqualTo("foo", -3), {"type": "$lte", "target": "foo", "value": -3}),
        (Between("foo", [10, 20]), {"type": "$between", "target": "foo", "value": [10, 20]}),
        (
            NotBetween("foo", ("a", "z")),
            {"type": "$notBetween", "target": "foo", "value": ["a", "z"]},
        ),
        (In("foo", ["bar", "baz"]), {"type": "$in", "target": "foo", "value": ["bar", "baz"]}),
        (NotIn("foo", [1, 2]), {"type": "$notIn", "target": "foo", "value": [1, 2]}),
        (
            BetweenColumns("foo", ["bar", "baz"]),
            {"type": "$betweenColumns", "target": "foo", "value": ["bar", "baz"]},
        ),
        (
            NotBetweenColumns("foo", ["bar", "baz"]),
            {"type": "$notBetweenColumns", "target": "foo", "value": ["bar", "baz"]},
        ),
        (IsNull("foo"), {"type": "$null", "target": "foo", "value": True}),
        (IsNotNull("foo"), {"type": "$null", "target": "foo", "value": False}),
    ],
)
def test_to_dict(filter_: Filter, expected: dict[str, object]) -> None:
    assert filter_.to_dict() == expected


def test_filters_are_immutable() -> None:
    filter_ = Equal("foo", "bar")

    with pytest.raises(FrozenInstanceError):
        filter_.value = "baz"  # type: ignore[misc]


def test_type_tags() -> None:
    assert Equal.type is FilterType.EQUAL
    assert IsNull.type == IsNotNull.type == "$null"


@pytest.mark.parametrize(
    ("filter_", "message"),
    [
        (Equal("foo", ""), 'The filter value "" is not valid.'),
        (Like("foo", "   "), 'The filter value "   " is not valid.'),
        (NotEqual("foo", True), 'The filter value "1" is not valid.'),
        (Between("foo", ["x"]), 'The filter value "["x"]" is not valid.'),
        (
            Between("foo", ["bar", "baz", "qux"]),
            'The filter value "["bar","baz","qux"]" is not valid.',
        ),
        (NotBetween("foo", ["", ""]), 'The filter value "["",""]" is not valid.'),
        (In("foo", ["bar", ""]), 'The filter value "["bar",""]" is not valid.'),
        (NotIn("foo", ["bar"]), 'The filter value "["bar"]" is not valid.'),
        (BetweenColumns("foo", ["bar", 123]), 'The filter value "["bar",123]" is not valid.'),
        (NotBetweenColumns("foo", ["bar"]), 'The filter value "["bar"]" is not valid.'),
        (GreaterThan("foo", "12"), 'The filter value "12" is not valid.'),
        (LessThan("foo", False), 'The filter value "" is not valid.'),
        (IsNull("foo", False), 'The filter value "" is not valid.'),
        (IsNotNull("foo", True), 'The filter value "1" is not valid.'),
    ],
)
def test_invalid_value_fails_on_serialization(filter_: Filter, message: str) -> None:
    with pytest.raises(FilterValueInvalidError) as exc_info:
        filter_.to_dict()

    assert str(exc_info.value) == message


def test_invalid_filter_can_be_built_but_reports_invalid() -> None:
    filter_ = Between("foo", ["x"])

    assert not filter_.value_is_valid()
    assert filter_.value == ["x"]


def test_zero_is_a_valid_scalar() -> None:
    assert Equal("foo", 0).to_dict()["value"] == 0
