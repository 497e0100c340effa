"""Base entity class for all domain entities."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class BaseEntity:
    """Base class for all entities."""

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to dictionary, with computed ``stats`` when defined."""
        data = asdict(self)
        stats = getattr(self, "stats", None)
        if stats is not None:
            data["stats"] = stats
        return data
