"""Vote (individual person vote on a ballot) model."""

VOTE_DDL = """
CREATE TABLE IF NOT EXISTS vote (
    id VARCHAR PRIMARY KEY,
    ballot_id VARCHAR NOT NULL,
    person_id VARCHAR NOT NULL,
    position VARCHAR NOT NULL
)
"""

VOTE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_vote_ballot ON vote(ballot_id)",
    "CREATE INDEX IF NOT EXISTS idx_vote_person ON vote(person_id)",
]
