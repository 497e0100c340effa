"""Core domain models - persons, mandates and their external identifiers."""

from app.models.core.entities import DeceasedSyncResult
from app.models.core.external_id import EXTERNAL_ID_DDL, EXTERNAL_ID_INDEXES, DataSource
from app.models.core.mandate import MANDATE_DDL, MANDATE_INDEXES
from app.models.core.person import PERSON_DDL, PERSON_INDEXES

__all__ = [
    "PERSON_DDL",
    "PERSON_INDEXES",
    "MANDATE_DDL",
    "MANDATE_INDEXES",
    "EXTERNAL_ID_DDL",
    "EXTERNAL_ID_INDEXES",
    "DataSource",
    "DeceasedSyncResult",
]
