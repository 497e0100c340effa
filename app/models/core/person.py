"""Person (politician) model."""

PERSON_DDL = """
CREATE TABLE IF NOT EXISTS person (
    id VARCHAR PRIMARY KEY,
    slug VARCHAR NOT NULL,
    full_name VARCHAR,
    death_date DATE,
    created_at TIMESTAMP NOT NULL
)
"""

PERSON_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_person_slug ON person(slug)",
]
