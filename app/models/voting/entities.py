"""Voting domain entities - ballot sync results."""

from dataclasses import dataclass, field

from app.models.common import BaseEntity


@dataclass
class BallotSyncResult(BaseEntity):
    """Outcome of a ballot sync run.

    ``success`` is False only when the ballot list itself could not be
    obtained; item-level failures land in ``errors``.
    """

    session: int
    success: bool = False
    ballots_created: int = 0
    ballots_updated: int = 0
    votes_written: int = 0
    unresolved_voters: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    duration: float = 0.0
    dry_run: bool = False
    skipped: bool = False

    @property
    def stats(self) -> dict[str, int]:
        return {
            "checked": self.ballots_created + self.ballots_updated + len(self.errors),
            "created": self.ballots_created,
            "updated": self.ballots_updated,
            "votes_written": self.votes_written,
            "unresolved_voters": len(self.unresolved_voters),
        }


@dataclass(frozen=True)
class ResolvedVote:
    """A remote vote whose voter resolved to a local person."""

    person_id: str
    position: str
