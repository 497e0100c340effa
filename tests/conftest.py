"""Shared fixtures: in-memory store and a scripted ballots provider."""

from datetime import datetime

import duckdb
import httpx
import pytest

from app.models import DataSource
from app.repositories import BallotRepository, PersonRepository, init_tables

BASE_URL = "https://votes.test"


@pytest.fixture
def conn():
    conn = duckdb.connect(":memory:")
    init_tables(conn)
    yield conn
    conn.close()


@pytest.fixture
def persons(conn):
    return PersonRepository(conn)


@pytest.fixture
def ballots(conn):
    return BallotRepository(conn)


@pytest.fixture
def deputies(persons):
    """Three persons; two mapped by provider slug, one known only by its own slug."""
    alice = persons.add_person("alice-martin", "Alice Martin", created_at=datetime(2020, 1, 1))
    bob = persons.add_person("bob-durand", "Bob Durand", created_at=datetime(2020, 1, 2))
    chloe = persons.add_person("chloe-petit", "Chloé Petit", created_at=datetime(2020, 1, 3))
    persons.add_external_id(DataSource.NOSDEPUTES, "amartin", alice, created_at=datetime(2020, 1, 1))
    persons.add_external_id(DataSource.NOSDEPUTES, "bdurand", bob, created_at=datetime(2020, 1, 2))
    return {"alice": alice, "bob": bob, "chloe": chloe}


def ballot_payload(record_id, title="Amendement n°1", day="2024-03-12", outcome="adopté", **counts):
    return {
        "id": record_id,
        "title": title,
        "date": day,
        "votesFor": counts.get("votes_for", 2),
        "votesAgainst": counts.get("votes_against", 1),
        "votesAbstain": counts.get("votes_abstain", 0),
        "outcome": outcome,
    }


class FakeProvider:
    """Scripted ballots provider behind an ``httpx.MockTransport``.

    ``details`` maps a ballot id to a votes list, an ``httpx.Response`` or an
    exception instance to raise. ``flaky`` maps a ballot id to a number of
    503 answers served before the real detail.
    """

    def __init__(self, session: int = 16):
        self.session = session
        self.ballots: list[dict] = []
        self.details: dict[str, object] = {}
        self.list_response: httpx.Response | None = None
        self.flaky: dict[str, int] = {}
        self.requests: list[str] = []

    def add(self, record_id, votes, **fields):
        self.ballots.append(ballot_payload(record_id, **fields))
        self.details[str(record_id)] = votes

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path == f"/{self.session}/ballots/json":
            if self.list_response is not None:
                return self.list_response
            return httpx.Response(200, json={"ballots": self.ballots})

        prefix = f"/{self.session}/ballot/"
        if path.startswith(prefix) and path.endswith("/json"):
            record_id = path[len(prefix) : -len("/json")]
            if self.flaky.get(record_id):
                self.flaky[record_id] -= 1
                return httpx.Response(503, text="busy")
            detail = self.details.get(record_id)
            if isinstance(detail, Exception):
                raise detail
            if isinstance(detail, httpx.Response):
                return detail
            if detail is None:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, json={"votes": detail})

        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def provider():
    return FakeProvider()
