"""Common models - base classes and shared tables."""

from app.models.common.base import BaseEntity
from app.models.common.slugs import generate_date_slug, generate_slug, with_suffix
from app.models.common.sync_metadata import SYNC_METADATA_DDL

__all__ = [
    "BaseEntity",
    "generate_slug",
    "generate_date_slug",
    "with_suffix",
    "SYNC_METADATA_DDL",
]
