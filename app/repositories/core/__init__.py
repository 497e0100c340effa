"""Core repositories."""

from app.repositories.core.person import PersonRepository

__all__ = ["PersonRepository"]
