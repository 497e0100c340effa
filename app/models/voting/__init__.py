"""Voting domain models - ballots, votes and sync results."""

from app.models.voting.ballot import BALLOT_DDL, BALLOT_INDEXES
from app.models.voting.entities import BallotSyncResult, ResolvedVote
from app.models.voting.vote import VOTE_DDL, VOTE_INDEXES

__all__ = [
    "BALLOT_DDL",
    "BALLOT_INDEXES",
    "VOTE_DDL",
    "VOTE_INDEXES",
    "BallotSyncResult",
    "ResolvedVote",
]
