"""Common value objects shared across all domain modules."""

from .color import Color, ColorName
from .date_range import DateRange
from .email import Email
from .geo_address import GeoAddress
from .ids import EntityId, MongoObjectId, UuidEntityId
from .json_data import JsonData
from .link import Link
from .money import Money

__all__ = [
    "Color",
    "ColorName",
    "DateRange",
    "Email",
    "EntityId",
    "GeoAddress",
    "JsonData",
    "Link",
    "MongoObjectId",
    "Money",
    "UuidEntityId",
]
