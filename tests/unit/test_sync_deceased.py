"""Tests for the death-date sync and the mandate pass."""

import re
from datetime import date

import duckdb
import httpx
import pytest

from app.models import DataSource
from app.repositories import PersonRepository, SyncMetadataRepository, init_tables
from etl import update_deceased_mandates
from etl.deceased import METADATA_KEY, DeceasedSync
from source_client import GraphClient

SPARQL_URL = "https://graph.test/sparql"
ENTITY = re.compile(r"wd:(Q\d+)")


def graph_handler(dates: dict[str, str], queries: list | None = None):
    def handler(request):
        query = request.url.params["query"]
        if queries is not None:
            queries.append(query)
        bindings = [
            {
                "person": {"type": "uri", "value": f"http://www.wikidata.org/entity/{qid}"},
                "deathDate": {"type": "literal", "value": dates[qid]},
            }
            for qid in ENTITY.findall(query)
            if qid in dates
        ]
        return httpx.Response(200, json={"head": {"vars": ["person", "deathDate"]}, "results": {"bindings": bindings}})

    return handler


async def run_sync(conn, handler, dry_run=False, close_mandates=False, **kwargs):
    async with GraphClient(SPARQL_URL, transport=httpx.MockTransport(handler), **kwargs) as client:
        return await DeceasedSync(client, conn, dry_run=dry_run).run(close_mandates=close_mandates)


@pytest.fixture
def graph_ids(persons, deputies):
    persons.add_external_id(DataSource.WIKIDATA, "Q100", deputies["alice"])
    persons.add_external_id(DataSource.WIKIDATA, "Q200", deputies["bob"])
    persons.add_mandate(deputies["alice"], "Députée")
    persons.add_mandate(deputies["bob"], "Député")
    persons.add_mandate(deputies["chloe"], "Députée")
    return deputies


class TestDeceasedSync:
    @pytest.mark.asyncio
    async def test_sets_missing_dates(self, conn, persons, graph_ids):
        result = await run_sync(conn, graph_handler({"Q100": "2023-04-05T00:00:00Z"}))

        assert result.success
        assert (result.checked, result.updated, result.mandates_closed) == (2, 1, 0)
        assert persons.get_death_date(graph_ids["alice"]) == date(2023, 4, 5)
        assert persons.get_death_date(graph_ids["bob"]) is None
        assert SyncMetadataRepository(conn).get(METADATA_KEY)["item_count"] == 2

    @pytest.mark.asyncio
    async def test_known_dates_not_rechecked(self, conn, persons, graph_ids):
        persons.set_death_date(graph_ids["alice"], date(2020, 1, 1))
        queries = []

        result = await run_sync(conn, graph_handler({"Q100": "2023-04-05T00:00:00Z"}, queries))

        assert result.checked == 1
        assert result.updated == 0
        assert ENTITY.findall(queries[0]) == ["Q200"]
        assert persons.get_death_date(graph_ids["alice"]) == date(2020, 1, 1)

    @pytest.mark.asyncio
    async def test_close_mandates(self, conn, persons, graph_ids):
        result = await run_sync(conn, graph_handler({"Q200": "2024-02-29T00:00:00Z"}), close_mandates=True)

        assert result.mandates_closed == 1
        assert persons.count_current_mandates(graph_ids["bob"]) == 0
        assert persons.count_current_mandates(graph_ids["alice"]) == 1
        assert persons.count_current_mandates(graph_ids["chloe"]) == 1

    @pytest.mark.asyncio
    async def test_dry_run(self, conn, persons, graph_ids):
        result = await run_sync(conn, graph_handler({"Q100": "2023-04-05T00:00:00Z"}), dry_run=True, close_mandates=True)

        assert result.updated == 1
        assert result.mandates_closed == 0
        assert persons.get_death_date(graph_ids["alice"]) is None
        assert SyncMetadataRepository(conn).get(METADATA_KEY) is None

    @pytest.mark.asyncio
    async def test_failed_batch_reported(self, conn, persons, graph_ids):
        def handler(request):
            return httpx.Response(500)

        result = await run_sync(conn, handler)

        assert result.success
        assert result.updated == 0
        assert result.errors == ["1 graph batch(es) failed"]
        assert SyncMetadataRepository(conn).get(METADATA_KEY)["success"] is False

    @pytest.mark.asyncio
    async def test_nothing_to_check(self, conn, deputies):
        def handler(request):
            raise AssertionError("unexpected request")

        result = await run_sync(conn, handler)

        assert result.success
        assert result.checked == 0


class TestMandatePass:
    def test_standalone(self, tmp_path):
        db_path = str(tmp_path / "votes.duckdb")
        conn = duckdb.connect(db_path)
        init_tables(conn)
        persons = PersonRepository(conn)
        alive = persons.add_person("vivant")
        dead = persons.add_person("defunt", death_date=date(2022, 9, 1))
        persons.add_mandate(alive, "Député")
        persons.add_mandate(dead, "Député")
        conn.close()

        assert update_deceased_mandates(db_path) == 1
        assert update_deceased_mandates(db_path) == 0

        conn = duckdb.connect(db_path, read_only=True)
        current = conn.execute("SELECT person_id FROM mandate WHERE is_current").fetchall()
        conn.close()
        assert current == [(alive,)]
