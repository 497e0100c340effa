"""Ballot repository - ballots and their vote sets."""

import uuid
from datetime import date, datetime

import duckdb
import polars as pl
from loguru import logger

from app.models.common import generate_date_slug, with_suffix
from app.models.voting import ResolvedVote
from app.repositories.base import BaseRepository
from app.repositories.errors import PersistenceFailure
from source_client.ballots import BallotSchema

DESCRIPTIVE_FIELDS = (
    "title",
    "date",
    "session",
    "votes_for",
    "votes_against",
    "votes_abstain",
    "outcome",
    "source_url",
)


class BallotRepository(BaseRepository):
    """Repository for ballot and vote persistence.

    Ballots are upserted by external id; the votes of a ballot are always
    replaced as a whole.
    """

    def get_by_external_id(self, external_id: str) -> tuple | None:
        """(id, *descriptive fields) of a ballot, or None."""
        return self.fetchone(
            f"SELECT id, {', '.join(DESCRIPTIVE_FIELDS)} FROM ballot WHERE external_id = ?",
            [external_id],
        )

    def exists(self, external_id: str) -> bool:
        return self.get_by_external_id(external_id) is not None

    def _slug_taken(self, slug: str) -> bool:
        return self.fetchone("SELECT 1 FROM ballot WHERE slug = ?", [slug]) is not None

    def unique_slug(self, day: date, title: str, external_id: str) -> str:
        """Date-title slug, numbered on collision."""
        base = generate_date_slug(day, title)
        if not self._slug_taken(base):
            return base
        for n in range(2, 100):
            candidate = with_suffix(base, n)
            if not self._slug_taken(candidate):
                return candidate
        return f"{base[:60].rstrip('-')}-{external_id}"

    def upsert_ballot(self, record: BallotSchema, session: int, source_url: str) -> tuple[str, bool]:
        """Create or overwrite a ballot. Returns (ballot_id, created)."""
        values = [
            record.title,
            record.date,
            session,
            record.votes_for,
            record.votes_against,
            record.votes_abstain,
            str(record.outcome),
            source_url,
        ]
        now = datetime.now()
        existing = self.get_by_external_id(record.id)

        if existing is None:
            ballot_id = str(uuid.uuid4())
            slug = self.unique_slug(record.date, record.title, record.id)
            self.execute(
                f"""
                INSERT INTO ballot (id, external_id, slug, {', '.join(DESCRIPTIVE_FIELDS)}, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [ballot_id, record.id, slug, *values, now, now],
            )
            logger.debug("Ballot {} created ({})", record.id, slug)
            return ballot_id, True

        ballot_id = existing[0]
        if list(existing[1:]) != values:
            assignments = ", ".join(f"{f} = ?" for f in DESCRIPTIVE_FIELDS)
            self.execute(
                f"UPDATE ballot SET {assignments}, updated_at = ? WHERE id = ?",
                [*values, now, ballot_id],
            )
            logger.debug("Ballot {} updated", record.id)
        return ballot_id, False

    def replace_votes(self, ballot_id: str, votes: list[ResolvedVote]) -> int:
        """Delete every vote of the ballot, then insert the new set."""
        self.execute("DELETE FROM vote WHERE ballot_id = ?", [ballot_id])

        # One vote per person; the first occurrence wins
        by_person: dict[str, ResolvedVote] = {}
        for v in votes:
            by_person.setdefault(v.person_id, v)
        unique = list(by_person.values())
        if not unique:
            return 0

        votes_df = pl.DataFrame(
            {
                "id": [f"{ballot_id}_{v.person_id}" for v in unique],
                "ballot_id": [ballot_id] * len(unique),
                "person_id": [v.person_id for v in unique],
                "position": [str(v.position) for v in unique],
            }
        )
        self._db.register("votes_df", votes_df)
        try:
            self.execute(
                "INSERT INTO vote (id, ballot_id, person_id, position) "
                "SELECT id, ballot_id, person_id, position FROM votes_df"
            )
        finally:
            self._db.unregister("votes_df")
        return len(unique)

    def persist(
        self,
        record: BallotSchema,
        session: int,
        source_url: str,
        votes: list[ResolvedVote],
    ) -> tuple[str, bool, int]:
        """Upsert a ballot and replace its votes in one transaction.

        Returns (ballot_id, created, votes_written).
        """
        try:
            with self.transaction():
                ballot_id, created = self.upsert_ballot(record, session, source_url)
                written = self.replace_votes(ballot_id, votes)
        except duckdb.Error as e:
            raise PersistenceFailure(f"persistence failed: {e}") from e
        return ballot_id, created, written

    def get_votes(self, ballot_id: str) -> dict[str, str]:
        """Votes of a ballot: {person_id: position}."""
        rows = self.fetchall("SELECT person_id, position FROM vote WHERE ballot_id = ?", [ballot_id])
        return {r[0]: r[1] for r in rows}

    def get_stats(self) -> dict:
        """Ballot and vote counts, per session and per position."""
        sessions = self.fetchall("SELECT session, COUNT(*) FROM ballot GROUP BY session ORDER BY session DESC")
        positions = self.fetchall("SELECT position, COUNT(*) FROM vote GROUP BY position ORDER BY position")
        return {
            "ballots": self.count("ballot"),
            "votes": self.count("vote"),
            "sessions": [{"session": r[0], "count": int(r[1])} for r in sessions],
            "by_position": {r[0]: int(r[1]) for r in positions},
        }
