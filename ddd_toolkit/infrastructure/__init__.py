"""
Infrastructure layer.

Implements persistence for the domain layer: mappers between entities and
SQLAlchemy records, repositories with optimistic locking, and publishing
of domain events after a successful write.

This layer depends on the domain layer, but the domain does not depend on it.
"""
