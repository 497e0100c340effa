"""Slug generation for locally keyed entities."""

import re
import unicodedata
from datetime import date

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(text: str) -> str:
    """Lowercase ASCII slug: accents stripped, runs of other characters become '-'."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    ascii_text = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_ALNUM.sub("-", ascii_text).strip("-")


def generate_date_slug(day: date, title: str, max_length: int = 120) -> str:
    """'YYYY-MM-DD-title' cut at the last word boundary that fits."""
    prefix = day.isoformat()
    title_slug = generate_slug(title)
    available = max_length - len(prefix) - 1
    if len(title_slug) > available:
        title_slug = title_slug[:available]
        cut = title_slug.rfind("-")
        if cut > 0:
            title_slug = title_slug[:cut]
    return f"{prefix}-{title_slug}" if title_slug else prefix


def with_suffix(base: str, n: int, max_length: int = 80) -> str:
    """Numbered variant of a slug for collisions, e.g. 'base-2'."""
    suffix = f"-{n}"
    return base[: max_length - len(suffix)].rstrip("-") + suffix
