"""Sync metadata table - last run per source, shared across all domains."""

SYNC_METADATA_DDL = """
CREATE TABLE IF NOT EXISTS sync_metadata (
    source_key VARCHAR PRIMARY KEY,
    last_sync_at TIMESTAMP NOT NULL,
    item_count INTEGER,
    duration_s DOUBLE,
    success BOOLEAN
)
"""
