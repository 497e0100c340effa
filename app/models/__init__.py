"""Models package - DDL and entities for all domains."""

from app.models.common import SYNC_METADATA_DDL, BaseEntity
from app.models.core import (
    EXTERNAL_ID_DDL,
    EXTERNAL_ID_INDEXES,
    MANDATE_DDL,
    MANDATE_INDEXES,
    PERSON_DDL,
    PERSON_INDEXES,
    DataSource,
    DeceasedSyncResult,
)
from app.models.voting import (
    BALLOT_DDL,
    BALLOT_INDEXES,
    VOTE_DDL,
    VOTE_INDEXES,
    BallotSyncResult,
    ResolvedVote,
)

ALL_DDL = [
    # Core
    PERSON_DDL,
    MANDATE_DDL,
    EXTERNAL_ID_DDL,
    # Voting
    BALLOT_DDL,
    VOTE_DDL,
    # Common
    SYNC_METADATA_DDL,
]

ALL_INDEXES = [
    *PERSON_INDEXES,
    *MANDATE_INDEXES,
    *EXTERNAL_ID_INDEXES,
    *BALLOT_INDEXES,
    *VOTE_INDEXES,
]

__all__ = [
    # Common
    "BaseEntity",
    "SYNC_METADATA_DDL",
    # Core
    "PERSON_DDL",
    "MANDATE_DDL",
    "EXTERNAL_ID_DDL",
    "DataSource",
    "DeceasedSyncResult",
    # Voting
    "BALLOT_DDL",
    "VOTE_DDL",
    "BallotSyncResult",
    "ResolvedVote",
    # All
    "ALL_DDL",
    "ALL_INDEXES",
]
