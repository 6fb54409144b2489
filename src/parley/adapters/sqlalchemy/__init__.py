"""SQLAlchemy adapter package for parley."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCallRepository,
    SqlAlchemyMessageRepository,
    SqlAlchemyProviderRepository,
    SqlAlchemyThreadRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyCallRepository",
    "SqlAlchemyMessageRepository",
    "SqlAlchemyProviderRepository",
    "SqlAlchemyThreadRepository",
    "SqlAlchemyUnitOfWork",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
