"""Persistence layer: SQLAlchemy models, database and repositories."""

from identity_service.infrastructure.persistence.base import BaseModel, BaseMutableModel
from identity_service.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]
