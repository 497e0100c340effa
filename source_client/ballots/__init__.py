"""Ballots provider client."""

from source_client.ballots.client import BallotsClient
from source_client.ballots.schemas import (
    BallotDetailSchema,
    BallotListSchema,
    BallotOutcome,
    BallotSchema,
    VotePosition,
    VoteSchema,
)

__all__ = [
    "BallotsClient",
    "BallotOutcome",
    "VotePosition",
    "BallotSchema",
    "BallotListSchema",
    "VoteSchema",
    "BallotDetailSchema",
]
