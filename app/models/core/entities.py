"""Core domain entities - death-date sync results."""

from dataclasses import dataclass, field

from app.models.common import BaseEntity


@dataclass
class DeceasedSyncResult(BaseEntity):
    """Outcome of a death-date sync run."""

    success: bool = False
    checked: int = 0
    updated: int = 0
    mandates_closed: int = 0
    errors: list[str] = field(default_factory=list)
    duration: float = 0.0
    dry_run: bool = False
    skipped: bool = False

    @property
    def stats(self) -> dict[str, int]:
        return {
            "checked": self.checked,
            "updated": self.updated,
            "mandates_closed": self.mandates_closed,
        }
