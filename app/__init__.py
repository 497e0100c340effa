"""Votes sync application - storage models and repositories."""
