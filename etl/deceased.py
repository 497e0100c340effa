"""Death-date sync from the knowledge graph, and the mandate follow-up pass."""

import time

import duckdb
from loguru import logger

from app.models import DataSource, DeceasedSyncResult
from app.repositories import PersonRepository, SyncMetadataRepository
from source_client import GraphClient

METADATA_KEY = "deceased-wikidata"


class DeceasedSync:
    """Fills in missing death dates for persons with a graph identifier."""

    def __init__(self, client: GraphClient, conn: duckdb.DuckDBPyConnection, dry_run: bool = False):
        self.client = client
        self.dry_run = dry_run
        self.persons = PersonRepository(conn)
        self.metadata = SyncMetadataRepository(conn)

    async def run(self, close_mandates: bool = False) -> DeceasedSyncResult:
        started = time.monotonic()
        result = DeceasedSyncResult(dry_run=self.dry_run)

        candidates = self.persons.get_alive_external_ids(DataSource.WIKIDATA)
        result.checked = len(candidates)
        logger.info("Found {} persons with graph ids to check", result.checked)

        if candidates:
            death_dates = await self.client.fetch_death_dates([c["external_id"] for c in candidates])
            if self.client.failed_batches:
                result.errors.append(f"{self.client.failed_batches} graph batch(es) failed")

            for candidate in candidates:
                death_date = death_dates.get(candidate["external_id"])
                if death_date is None:
                    continue
                if self.dry_run:
                    result.updated += 1
                    continue
                try:
                    if self.persons.set_death_date(candidate["person_id"], death_date):
                        result.updated += 1
                        logger.info("Updated {}: deceased {}", candidate["full_name"] or candidate["external_id"], death_date)
                except duckdb.Error as e:
                    logger.warning("Failed to set death date for {}: {}", candidate["external_id"], e)
                    result.errors.append(f"person {candidate['external_id']}: {e}")

        if close_mandates and not self.dry_run:
            result.mandates_closed = self.persons.close_deceased_mandates()

        result.success = True
        result.duration = time.monotonic() - started
        if not self.dry_run:
            self.metadata.mark_completed(METADATA_KEY, result.checked, result.duration, success=not result.errors)
        logger.info("Deceased sync: {} checked, {} updated ({:.1f}s)", result.checked, result.updated, result.duration)
        return result


def close_deceased_mandates(conn: duckdb.DuckDBPyConnection) -> int:
    """Standalone mandate pass; safe to re-run."""
    return PersonRepository(conn).close_deceased_mandates()
