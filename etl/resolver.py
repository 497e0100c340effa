"""Voter resolution - external voter slug to local person id."""

from loguru import logger

from app.models.core import DataSource
from app.repositories import PersonRepository


class VoterResolver:
    """Resolves provider voter slugs to person ids from a per-run snapshot.

    Lookup order: the source's external id mapping (case-insensitive), then
    the person's own slug. On key collisions the oldest row wins, and a
    mapping always beats a slug.
    """

    def __init__(self, by_external_id: dict[str, str], by_slug: dict[str, str]):
        self._by_external_id = by_external_id
        self._by_slug = by_slug
        self._unresolved: dict[str, str] = {}

    @classmethod
    def build(cls, repo: PersonRepository, source: DataSource) -> "VoterResolver":
        """One bulk read per table; rows arrive oldest first."""
        by_external_id: dict[str, str] = {}
        for external_id, person_id in repo.get_external_ids(source):
            by_external_id.setdefault(cls._key(external_id), person_id)

        by_slug: dict[str, str] = {}
        for slug, person_id in repo.get_slugs():
            by_slug.setdefault(cls._key(slug), person_id)

        logger.info("Resolver: {} {} ids, {} person slugs", len(by_external_id), source, len(by_slug))
        return cls(by_external_id, by_slug)

    def __len__(self) -> int:
        return len(self._by_external_id.keys() | self._by_slug.keys())

    @staticmethod
    def _key(voter_slug: str) -> str:
        return voter_slug.strip().lower()

    def lookup(self, voter_slug: str) -> str | None:
        """Pure lookup, no bookkeeping."""
        key = self._key(voter_slug)
        return self._by_external_id.get(key) or self._by_slug.get(key)

    def resolve(self, voter_slug: str) -> str | None:
        """Person id, or None after recording the slug as unresolved."""
        person_id = self.lookup(voter_slug)
        if person_id is None:
            self._unresolved.setdefault(self._key(voter_slug), voter_slug)
        return person_id

    @property
    def unresolved(self) -> list[str]:
        """Distinct unresolved slugs (case-insensitive), first spelling seen, in first-seen order."""
        return list(self._unresolved.values())
