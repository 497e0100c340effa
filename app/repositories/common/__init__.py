"""Common repositories."""

from app.repositories.common.sync_metadata import SyncMetadataRepository

__all__ = ["SyncMetadataRepository"]
