"""Ballots provider schemas."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class VotePosition(StrEnum):
    """Possible vote positions."""

    FOR = "FOR"
    AGAINST = "AGAINST"
    ABSTAIN = "ABSTAIN"
    ABSENT = "ABSENT"


class BallotOutcome(StrEnum):
    """Binary ballot outcome."""

    ADOPTED = "ADOPTED"
    REJECTED = "REJECTED"


# Provider spellings, English and French
POSITION_ALIASES = {
    "for": VotePosition.FOR,
    "pour": VotePosition.FOR,
    "against": VotePosition.AGAINST,
    "contre": VotePosition.AGAINST,
    "abstain": VotePosition.ABSTAIN,
    "abstention": VotePosition.ABSTAIN,
    "absent": VotePosition.ABSENT,
    "nonvotant": VotePosition.ABSENT,
    "non-votant": VotePosition.ABSENT,
}


def parse_outcome(value: str | bool) -> BallotOutcome:
    """Anything adopted ('adopted', 'adopté', True) is ADOPTED, the rest REJECTED."""
    if isinstance(value, bool):
        return BallotOutcome.ADOPTED if value else BallotOutcome.REJECTED
    return BallotOutcome.ADOPTED if str(value).strip().lower().startswith("adopt") else BallotOutcome.REJECTED


class BallotSchema(BaseModel):
    """Ballot summary (scrutin) from the list endpoint."""

    id: str
    title: str
    date: date
    votes_for: int = Field(alias="votesFor", default=0)
    votes_against: int = Field(alias="votesAgainst", default=0)
    votes_abstain: int = Field(alias="votesAbstain", default=0)
    outcome: BallotOutcome
    source_url: str | None = Field(alias="sourceUrl", default=None)

    class Config:
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v)

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, v):
        # Provider sends either a date or a full timestamp
        if isinstance(v, str) and len(v) > 10:
            return v[:10]
        return v

    @field_validator("outcome", mode="before")
    @classmethod
    def _outcome(cls, v):
        return parse_outcome(v)


class BallotListSchema(BaseModel):
    """List endpoint payload.

    Only the envelope is checked here; entries are validated one by one with
    ``BallotsClient.parse_ballot`` so a bad entry fails alone.
    """

    ballots: list[dict]


class VoteSchema(BaseModel):
    """Individual vote on a ballot."""

    voter_slug: str = Field(alias="voterSlug")
    position: VotePosition

    class Config:
        populate_by_name = True

    @field_validator("position", mode="before")
    @classmethod
    def _position(cls, v):
        if isinstance(v, VotePosition):
            return v
        key = str(v).strip().lower()
        if key in POSITION_ALIASES:
            return POSITION_ALIASES[key]
        raise ValueError(f"unknown vote position: {v!r}")


class BallotDetailSchema(BaseModel):
    """Detail endpoint payload; ``votes`` may be missing or null."""

    votes: list[VoteSchema] | None = None
