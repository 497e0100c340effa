"""Knowledge-graph client - batched SPARQL lookups."""

import re
from datetime import date

from loguru import logger
from pydantic import ValidationError

from settings import GRAPH_BATCH_SIZE, SPARQL_URL
from source_client.base import BaseClient
from source_client.errors import SourceError
from source_client.graph.schemas import DeathDateBinding, SparqlResponse

DEATH_DATE_PROP = "P570"
ENTITY_ID = re.compile(r"^Q\d+$")

DEATH_DATE_QUERY = """
SELECT ?person ?deathDate WHERE {{
  VALUES ?person {{ {values} }}
  ?person wdt:{prop} ?deathDate .
}}
"""


def build_death_date_query(entity_ids: list[str]) -> str:
    """SPARQL query for the death dates of a batch of entities."""
    values = " ".join(f"wd:{i}" for i in entity_ids)
    return DEATH_DATE_QUERY.format(values=values, prop=DEATH_DATE_PROP)


class GraphClient(BaseClient):
    """Client for the SPARQL query endpoint.

    Pass a ``MinIntervalGate`` to space out requests; every batch goes
    through it.
    """

    def __init__(self, sparql_url: str = SPARQL_URL, batch_size: int = GRAPH_BATCH_SIZE, **kwargs):
        super().__init__(sparql_url, **kwargs)
        self.batch_size = batch_size
        self.failed_batches = 0

    async def query(self, sparql: str) -> SparqlResponse:
        """GET /sparql?query=...&format=json"""
        data = await self._get(self.base_url, params={"query": sparql, "format": "json"})
        return self._parse(SparqlResponse, data, self.base_url)

    async def fetch_death_dates(self, external_ids: list[str]) -> dict[str, date]:
        """Death dates keyed by entity id; failed batches contribute nothing."""
        ids = [i for i in dict.fromkeys(external_ids) if ENTITY_ID.match(i)]
        if len(ids) < len(set(external_ids)):
            logger.warning("Skipping {} malformed entity ids", len(set(external_ids)) - len(ids))

        results: dict[str, date] = {}
        total_batches = (len(ids) + self.batch_size - 1) // self.batch_size

        for n, i in enumerate(range(0, len(ids), self.batch_size), start=1):
            batch = ids[i : i + self.batch_size]
            try:
                response = await self.query(build_death_date_query(batch))
            except SourceError as e:
                self.failed_batches += 1
                logger.warning("Graph batch {}/{} failed: {}", n, total_batches, e)
                continue

            for raw in response.results.bindings:
                try:
                    binding = DeathDateBinding.model_validate(raw)
                except ValidationError:
                    logger.debug("Skipping incomplete binding: {}", raw)
                    continue
                death_date = binding.parsed_date
                if death_date is not None:
                    results.setdefault(binding.entity_id, death_date)
            logger.debug("Graph batch {}/{}: {} dates so far", n, total_batches, len(results))

        logger.info("Death dates found: {} of {} ids", len(results), len(ids))
        return results
