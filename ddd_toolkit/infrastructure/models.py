"""Shared columns and column types for storage records."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, Integer, String, inspect
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator[datetime]):
    """
    Timezone-aware datetime column.

    Values are stored in UTC. Backends without timezone support (SQLite)
    hand back naive values, which are read as UTC.
    """

    impl = DateTime
    cache_ok = True

    def __init__(self) -> None:
        super().__init__(timezone=True)

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Naive datetimes are not accepted, use timezone-aware values")
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class VersionedRecordMixin:
    """
    Identity and bookkeeping columns of a record backing an entity.

    ``version``, ``created_at`` and ``updated_at`` are written by the
    repository from the entity; the database never generates them.

    ``version`` is the mapper's version counter: every UPDATE and DELETE
    matches on the version the record was loaded with, and the session
    raises ``StaleDataError`` when another writer changed it in between.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    @declared_attr.directive
    def __mapper_args__(cls) -> dict[str, Any]:
        return {"version_id_col": cls.__table__.c.version, "version_id_generator": False}

    @property
    def exists(self) -> bool:
        """True once the record has been persisted (or loaded from storage)."""
        return inspect(self).has_identity
