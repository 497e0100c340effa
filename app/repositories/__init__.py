"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.common import SyncMetadataRepository
from app.repositories.core import PersonRepository
from app.repositories.db import (
    close_db,
    get_db,
    get_write_connection,
    init_tables,
)
from app.repositories.errors import PersistenceFailure
from app.repositories.voting import BallotRepository

__all__ = [
    # DB
    "get_db",
    "close_db",
    "init_tables",
    "get_write_connection",
    # Base
    "BaseRepository",
    "PersistenceFailure",
    # Common
    "SyncMetadataRepository",
    # Core
    "PersonRepository",
    # Voting
    "BallotRepository",
]
