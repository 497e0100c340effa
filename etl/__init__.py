"""ETL package - sync from remote sources to the local store."""

from etl.sync import deceased_stats, sync_deceased, sync_votes, update_deceased_mandates, votes_stats

__all__ = [
    "sync_votes",
    "sync_deceased",
    "update_deceased_mandates",
    "votes_stats",
    "deceased_stats",
]
