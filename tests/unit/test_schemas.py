"""Tests for provider schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from source_client.ballots import BallotDetailSchema, BallotSchema, VoteSchema
from source_client.ballots.schemas import BallotOutcome, VotePosition, parse_outcome
from source_client.graph.schemas import DeathDateBinding


class TestBallotSchema:
    def test_wire_aliases(self):
        ballot = BallotSchema.model_validate(
            {
                "id": 1234,
                "title": "Projet de loi",
                "date": "2024-03-12",
                "votesFor": 300,
                "votesAgainst": 200,
                "votesAbstain": 12,
                "outcome": "adopté",
                "sourceUrl": "https://example.org/1234",
            }
        )
        assert ballot.id == "1234"
        assert ballot.date == date(2024, 3, 12)
        assert (ballot.votes_for, ballot.votes_against, ballot.votes_abstain) == (300, 200, 12)
        assert ballot.outcome == BallotOutcome.ADOPTED

    def test_timestamp_date(self):
        ballot = BallotSchema.model_validate(
            {"id": "7", "title": "t", "date": "2024-03-12T15:30:00+01:00", "outcome": "rejeté"}
        )
        assert ballot.date == date(2024, 3, 12)
        assert ballot.votes_for == 0

    def test_missing_title_rejected(self):
        with pytest.raises(ValidationError):
            BallotSchema.model_validate({"id": "7", "date": "2024-03-12", "outcome": "adopté"})


class TestOutcome:
    def test_adopted_spellings(self):
        assert parse_outcome("adopté") == BallotOutcome.ADOPTED
        assert parse_outcome("Adopted") == BallotOutcome.ADOPTED
        assert parse_outcome(True) == BallotOutcome.ADOPTED

    def test_everything_else_rejected(self):
        assert parse_outcome("rejeté") == BallotOutcome.REJECTED
        assert parse_outcome("") == BallotOutcome.REJECTED
        assert parse_outcome(False) == BallotOutcome.REJECTED


class TestVoteSchema:
    def test_french_positions(self):
        positions = [VoteSchema.model_validate({"voterSlug": "x", "position": p}).position for p in ("pour", "contre", "abstention", "nonVotant")]
        assert positions == [VotePosition.FOR, VotePosition.AGAINST, VotePosition.ABSTAIN, VotePosition.ABSENT]

    def test_english_positions(self):
        assert VoteSchema.model_validate({"voterSlug": "x", "position": "AGAINST"}).position == VotePosition.AGAINST

    def test_unknown_position(self):
        with pytest.raises(ValidationError):
            VoteSchema.model_validate({"voterSlug": "x", "position": "maybe"})

    def test_detail_votes_optional(self):
        assert BallotDetailSchema.model_validate({}).votes is None
        assert BallotDetailSchema.model_validate({"votes": None}).votes is None


class TestDeathDateBinding:
    def _binding(self, value):
        return DeathDateBinding.model_validate(
            {
                "person": {"type": "uri", "value": "http://www.wikidata.org/entity/Q42"},
                "deathDate": {"type": "literal", "value": value},
            }
        )

    def test_entity_id_and_date(self):
        binding = self._binding("2001-05-11T00:00:00Z")
        assert binding.entity_id == "Q42"
        assert binding.parsed_date == date(2001, 5, 11)

    def test_unparsable_date(self):
        assert self._binding("http://www.wikidata.org/.well-known/genid/abc").parsed_date is None
