"""Ballot sync - list, detail, resolve, persist."""

import asyncio
import time
from collections.abc import Callable
from enum import StrEnum

import duckdb
from loguru import logger
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from app.models import BallotSyncResult, DataSource, ResolvedVote
from app.repositories import BallotRepository, PersistenceFailure, PersonRepository, SyncMetadataRepository
from etl.resolver import VoterResolver
from settings import DELAY_EVERY, ITEM_DELAY, PROGRESS_EVERY, RETRY_ATTEMPTS
from source_client import BallotsClient, SessionUnavailable, SourceError, is_retryable
from source_client.ballots import BallotDetailSchema

ProgressCallback = Callable[[int, str], None]


class SyncPhase(StrEnum):
    """Where a run currently is."""

    IDLE = "IDLE"
    LISTING = "LISTING"
    PAGING = "PAGING"
    RESOLVING = "RESOLVING"
    PERSISTING = "PERSISTING"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    REPORTING = "REPORTING"
    DONE = "DONE"


class NoVotes(Exception):
    """Detail payload carried no votes."""


def metadata_key(session: int) -> str:
    return f"votes-{session}"


class VotesSync:
    """One sequential sync run of the ballots of a session.

    Only a failure to get the ballot list ends the run early. Every item
    failure is recorded as ``"ballot {id}: {reason}"`` and the loop moves on.
    """

    def __init__(
        self,
        client: BallotsClient,
        conn: duckdb.DuckDBPyConnection,
        session: int,
        dry_run: bool = False,
        on_progress: ProgressCallback | None = None,
        item_delay: float = ITEM_DELAY,
        delay_every: int = DELAY_EVERY,
        progress_every: int = PROGRESS_EVERY,
        retry_attempts: int = RETRY_ATTEMPTS,
        retry_wait: float = 1.0,
    ):
        self.client = client
        self.session = session
        self.dry_run = dry_run
        self.on_progress = on_progress
        self.item_delay = item_delay
        self.delay_every = delay_every
        self.progress_every = progress_every
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait

        self.ballots = BallotRepository(conn)
        self.persons = PersonRepository(conn)
        self.metadata = SyncMetadataRepository(conn)
        self.phase = SyncPhase.IDLE

    def _enter(self, phase: SyncPhase) -> None:
        self.phase = phase

    async def _fetch_detail(self, record_id: str) -> BallotDetailSchema:
        """Detail fetch, retried on timeouts, network errors and 5xx."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_wait, max=30),
            retry=retry_if_exception(is_retryable),
            reraise=True,
        ):
            with attempt:
                detail = await self.client.fetch_detail(record_id, self.session)
        return detail

    async def _sync_item(self, raw: dict, resolver: VoterResolver, result: BallotSyncResult) -> None:
        record = self.client.parse_ballot(raw, self.session)
        detail = await self._fetch_detail(record.id)
        if not detail.votes:
            raise NoVotes("no votes in detail")

        self._enter(SyncPhase.RESOLVING)
        votes = []
        for vote in detail.votes:
            person_id = resolver.resolve(vote.voter_slug)
            if person_id is not None:
                votes.append(ResolvedVote(person_id, str(vote.position)))

        self._enter(SyncPhase.PERSISTING)
        if self.dry_run:
            created = not self.ballots.exists(record.id)
            written = len({v.person_id for v in votes})
        else:
            source_url = self.client.public_url(record.id, self.session)
            _, created, written = self.ballots.persist(record, self.session, source_url, votes)

        if created:
            result.ballots_created += 1
        else:
            result.ballots_updated += 1
        result.votes_written += written

    def _report_progress(self, done: int, total: int) -> None:
        if self.on_progress is None or done % self.progress_every:
            return
        self.on_progress(round(done * 100 / total), f"Processed {done}/{total} ballots")

    def _finish(self, result: BallotSyncResult, started: float) -> BallotSyncResult:
        self._enter(SyncPhase.REPORTING)
        result.duration = time.monotonic() - started
        if result.success and not self.dry_run:
            self.metadata.mark_completed(
                metadata_key(self.session),
                result.ballots_created + result.ballots_updated,
                result.duration,
                success=not result.errors,
            )
        logger.info(
            "Session {}: +{} created, ~{} updated, {} votes, {} unresolved, {} errors ({:.1f}s)",
            self.session,
            result.ballots_created,
            result.ballots_updated,
            result.votes_written,
            len(result.unresolved_voters),
            len(result.errors),
            result.duration,
        )
        self._enter(SyncPhase.DONE)
        return result

    async def run(self) -> BallotSyncResult:
        """Sync every ballot of the session."""
        started = time.monotonic()
        result = BallotSyncResult(session=self.session, dry_run=self.dry_run)
        logger.info("Syncing ballots for session {}{}", self.session, " [DRY RUN]" if self.dry_run else "")

        self._enter(SyncPhase.LISTING)
        try:
            listing = await self.client.fetch_list(self.session)
        except SessionUnavailable as e:
            logger.error("Session {} is not available on the provider: {}", self.session, e)
            result.errors.append(f"session {self.session} not available: {e}")
            return self._finish(result, started)
        except SourceError as e:
            logger.error("Failed to fetch ballot list for session {}: {}", self.session, e)
            result.errors.append(f"ballot list: {e}")
            return self._finish(result, started)

        total = len(listing.ballots)
        logger.info("Found {} ballots", total)
        resolver = VoterResolver.build(self.persons, DataSource.NOSDEPUTES)

        for index, raw in enumerate(listing.ballots):
            record_id = raw.get("id", f"#{index + 1}")
            self._enter(SyncPhase.PAGING)
            if index and index % self.delay_every == 0 and self.item_delay > 0:
                await asyncio.sleep(self.item_delay)

            try:
                await self._sync_item(raw, resolver, result)
            except (SourceError, PersistenceFailure, NoVotes) as e:
                self._enter(SyncPhase.PARTIAL_FAILURE)
                logger.warning("Ballot {} failed: {}", record_id, e)
                result.errors.append(f"ballot {record_id}: {e}")
            except Exception as e:
                self._enter(SyncPhase.PARTIAL_FAILURE)
                logger.exception("Ballot {} failed unexpectedly", record_id)
                result.errors.append(f"ballot {record_id}: unexpected error: {e}")

            self._report_progress(index + 1, total)

        result.unresolved_voters = resolver.unresolved
        if result.unresolved_voters:
            logger.warning("{} voters could not be resolved", len(result.unresolved_voters))
        result.success = True
        return self._finish(result, started)
