"""Ballots provider client."""

import re

from settings import BALLOTS_BASE_URL
from source_client.ballots.schemas import BallotDetailSchema, BallotListSchema, BallotSchema
from source_client.base import BaseClient

LIST_PATH = re.compile(r"/\d+/ballots/json/?$")
DETAIL_PATH = re.compile(r"/\d+/ballot/[^/]+/json/?$")


class BallotsClient(BaseClient):
    """Client for the ballot list and detail endpoints."""

    def __init__(self, base_url: str = BALLOTS_BASE_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def list_url(self, session: int) -> str:
        return f"{self.base_url}/{session}/ballots/json"

    def detail_url(self, record_id: str, session: int) -> str:
        return f"{self.base_url}/{session}/ballot/{record_id}/json"

    def public_url(self, record_id: str, session: int) -> str:
        """Canonical human-facing page of a ballot."""
        return f"{self.base_url}/{session}/ballot/{record_id}"

    async def fetch_list(self, session: int) -> BallotListSchema:
        """GET /{session}/ballots/json - all ballots of a session."""
        url = self.list_url(session)
        data = await self._get(url, expect=LIST_PATH)
        return self._parse(BallotListSchema, data, url)

    def parse_ballot(self, raw: dict, session: int) -> BallotSchema:
        """Validate one list entry; raises MalformedResponse for that entry only."""
        return self._parse(BallotSchema, raw, self.list_url(session))

    async def fetch_detail(self, record_id: str, session: int) -> BallotDetailSchema:
        """GET /{session}/ballot/{id}/json - individual votes of a ballot."""
        url = self.detail_url(record_id, session)
        data = await self._get(url, expect=DETAIL_PATH)
        return self._parse(BallotDetailSchema, data, url)
