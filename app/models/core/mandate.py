"""Mandate model."""

MANDATE_DDL = """
CREATE TABLE IF NOT EXISTS mandate (
    id VARCHAR PRIMARY KEY,
    person_id VARCHAR NOT NULL,
    title VARCHAR,
    is_current BOOLEAN DEFAULT TRUE,
    created_at TIMESTAMP NOT NULL
)
"""

MANDATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_mandate_person ON mandate(person_id)",
]
