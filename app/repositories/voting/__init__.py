"""Voting repositories."""

from app.repositories.voting.ballot import BallotRepository

__all__ = ["BallotRepository"]
