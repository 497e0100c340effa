"""Person repository - persons, their external ids and mandates."""

import uuid
from datetime import date, datetime

from loguru import logger

from app.models.core import DataSource
from app.repositories.base import BaseRepository


class PersonRepository(BaseRepository):
    """Repository for person, external id and mandate data access."""

    def add_person(
        self,
        slug: str,
        full_name: str | None = None,
        death_date: date | None = None,
        created_at: datetime | None = None,
    ) -> str:
        """Insert a person and return its id."""
        self._check_writable()
        person_id = str(uuid.uuid4())
        self.execute(
            "INSERT INTO person (id, slug, full_name, death_date, created_at) VALUES (?, ?, ?, ?, ?)",
            [person_id, slug, full_name, death_date, created_at or datetime.now()],
        )
        return person_id

    def add_external_id(
        self,
        source: DataSource,
        external_id: str,
        person_id: str,
        created_at: datetime | None = None,
    ) -> None:
        """Register an external identifier for a person."""
        self._check_writable()
        self.execute(
            "INSERT INTO external_id (source, external_id, person_id, created_at) VALUES (?, ?, ?, ?)",
            [str(source), external_id, person_id, created_at or datetime.now()],
        )

    def add_mandate(self, person_id: str, title: str, is_current: bool = True) -> str:
        """Insert a mandate and return its id."""
        self._check_writable()
        mandate_id = str(uuid.uuid4())
        self.execute(
            "INSERT INTO mandate (id, person_id, title, is_current, created_at) VALUES (?, ?, ?, ?, ?)",
            [mandate_id, person_id, title, is_current, datetime.now()],
        )
        return mandate_id

    def get_external_ids(self, source: DataSource) -> list[tuple[str, str]]:
        """(external_id, person_id) for a source, oldest mapping first."""
        rows = self.fetchall(
            """
            SELECT e.external_id, e.person_id
            FROM external_id e
            JOIN person p ON p.id = e.person_id
            WHERE e.source = ?
            ORDER BY e.created_at, e.person_id
            """,
            [str(source)],
        )
        return [(r[0], r[1]) for r in rows]

    def get_slugs(self) -> list[tuple[str, str]]:
        """(slug, person_id) for every person, oldest first."""
        rows = self.fetchall("SELECT slug, id FROM person ORDER BY created_at, id")
        return [(r[0], r[1]) for r in rows]

    def get_alive_external_ids(self, source: DataSource) -> list[dict]:
        """External ids of persons without a death date."""
        rows = self.fetchall(
            """
            SELECT e.external_id, e.person_id, p.full_name
            FROM external_id e
            JOIN person p ON p.id = e.person_id
            WHERE e.source = ? AND p.death_date IS NULL
            ORDER BY e.created_at, e.external_id
            """,
            [str(source)],
        )
        return [{"external_id": r[0], "person_id": r[1], "full_name": r[2]} for r in rows]

    def get_death_date(self, person_id: str) -> date | None:
        row = self.fetchone("SELECT death_date FROM person WHERE id = ?", [person_id])
        return row[0] if row else None

    def set_death_date(self, person_id: str, death_date: date) -> bool:
        """Set a death date that was not set yet. Returns whether it was written."""
        self._check_writable()
        row = self.fetchone("SELECT death_date FROM person WHERE id = ?", [person_id])
        if row is None or row[0] is not None:
            return False
        self.execute("UPDATE person SET death_date = ? WHERE id = ?", [death_date, person_id])
        return True

    def count_current_mandates(self, person_id: str) -> int:
        return self.count("mandate", "person_id = ? AND is_current", [person_id])

    def close_deceased_mandates(self) -> int:
        """Mark every current mandate of a deceased person as no longer current."""
        self._check_writable()
        where = "is_current AND person_id IN (SELECT id FROM person WHERE death_date IS NOT NULL)"
        affected = self.count("mandate", where)
        if affected:
            self.execute(f"UPDATE mandate SET is_current = FALSE WHERE {where}")
        logger.info("Marked {} mandates as not current for deceased persons", affected)
        return affected

    def get_deceased_stats(self) -> dict[str, int]:
        """Counts of deceased persons and of those still holding a current mandate."""
        total = self.count("person")
        deceased = self.count("person", "death_date IS NOT NULL")
        with_mandate = self.fetchone(
            """
            SELECT COUNT(DISTINCT p.id) FROM person p
            JOIN mandate m ON m.person_id = p.id
            WHERE p.death_date IS NOT NULL AND m.is_current
            """
        )[0]
        return {
            "total": total,
            "deceased": deceased,
            "alive": total - deceased,
            "deceased_with_current_mandate": int(with_mandate),
        }
