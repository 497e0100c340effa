"""Ballot (scrutin) model."""

BALLOT_DDL = """
CREATE TABLE IF NOT EXISTS ballot (
    id VARCHAR PRIMARY KEY,
    external_id VARCHAR NOT NULL UNIQUE,
    slug VARCHAR NOT NULL,
    title VARCHAR,
    date DATE,
    session INTEGER,
    votes_for INTEGER,
    votes_against INTEGER,
    votes_abstain INTEGER,
    outcome VARCHAR,
    source_url VARCHAR,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

BALLOT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_ballot_slug ON ballot(slug)",
]
