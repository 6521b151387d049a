"""Tests for the DomainEvent base class."""

import copy
import pickle
from dataclasses import FrozenInstanceError, dataclass
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

import pytest

from ddd_toolkit.domain.common.domain_event import DomainEvent
from ddd_toolkit.domain.common.exceptions import ValidationError
from ddd_toolkit.domain.common.value_objects import EntityId, Money


@dataclass(frozen=True)
class PriceChanged(DomainEvent):
    name: ClassVar[str | None] = "product.price_changed"


@dataclass(frozen=True)
class StockDepleted(DomainEvent):
    warehouse: str = "main"


def test_event_name_defaults_to_class_name() -> None:
    assert StockDepleted(EntityId(1)).event_name == "StockDepleted"


def test_event_name_override() -> None:
    assert PriceChanged(EntityId(1)).event_name == "product.price_changed"


def test_metadata_is_set_at_construction() -> None:
    before = datetime.now(UTC)
    event = PriceChanged(EntityId(1))

    assert isinstance(event.event_id, UUID)
    assert event.occurred_on >= before
    assert event.event_version == 1


def test_event_is_immutable() -> None:
    event = PriceChanged(EntityId(1))

    with pytest.raises(FrozenInstanceError):
        event.occurred_on = datetime.now(UTC)  # type: ignore[misc]


def test_payload_is_read_only_copy() -> None:
    """Neither the caller's dict nor the event payload can change the event."""
    payload = {"old_price": 10}
    event = PriceChanged(EntityId(1), payload)

    payload["old_price"] = 99

    assert event.payload["old_price"] == 10
    with pytest.raises(TypeError):
        event.payload["old_price"] = 5  # type: ignore[index]


def test_event_version_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        PriceChanged(EntityId(1), event_version=0)


def test_to_dict_serializes_values() -> None:
    occurred = datetime(2024, 1, 1, 12, tzinfo=UTC)
    event = PriceChanged(
        EntityId(7),
        {"new_price": Money.euros(1000), "changed_at": occurred},
        event_version=2,
        occurred_on=occurred,
    )

    data = event.to_dict()

    assert data["event_name"] == "product.price_changed"
    assert data["aggregate_id"] == 7
    assert data["event_version"] == 2
    assert data["occurred_on"] == "2024-01-01T12:00:00+00:00"
    assert data["payload"] == {
        "new_price": {"amount": "10", "currency": "EUR"},
        "changed_at": "2024-01-01T12:00:00+00:00",
    }


def test_copy_and_pickle_keep_identity_and_fields() -> None:
    event = StockDepleted(EntityId(3), {"sku": "A-1"}, warehouse="north")

    for clone in (copy.copy(event), pickle.loads(pickle.dumps(event))):
        assert clone == event
        assert clone is not event
        assert clone.event_id == event.event_id
        assert clone.warehouse == "north"
        assert dict(clone.payload) == {"sku": "A-1"}
