"""External identifier mapping: (source, external id) -> person."""

from enum import StrEnum


class DataSource(StrEnum):
    """Sources that issue person identifiers."""

    NOSDEPUTES = "NOSDEPUTES"
    WIKIDATA = "WIKIDATA"


EXTERNAL_ID_DDL = """
CREATE TABLE IF NOT EXISTS external_id (
    source VARCHAR NOT NULL,
    external_id VARCHAR NOT NULL,
    person_id VARCHAR NOT NULL,
    created_at TIMESTAMP NOT NULL,
    PRIMARY KEY (source, external_id)
)
"""

EXTERNAL_ID_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_external_id_person ON external_id(person_id)",
]
