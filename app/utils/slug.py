"""Slug generation utilities."""
import logging
import re
import uuid
from typing import Awaitable, Callable

from unidecode import unidecode

from app.config import settings

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "slug"

SlugExists = Callable[[str], Awaitable[bool]]


def normalize(name: str) -> str:
    """
    Convert a display name to a URL-safe slug.

    Non-ASCII letters (Cyrillic included) are transliterated to Latin.

    Args:
        name: Free-text display name

    Returns:
        Slug made of ``[a-z0-9-]``, possibly empty

    Examples:
        >>> normalize("Молоко 3.2%")
        'moloko-3-2'
        >>> normalize("DE Shaw TPM Role")
        'de-shaw-tpm-role'
    """
    if not name:
        return ""

    text = name.strip()
    if not text:
        return ""

    # Transliterate and lowercase
    slug = unidecode(text).lower()

    # Anything that is not a latin letter, digit or hyphen becomes a hyphen
    slug = re.sub(r"[^a-z0-9-]+", "-", slug)

    # Collapse hyphen runs
    slug = re.sub(r"-{2,}", "-", slug)

    # Remove leading/trailing hyphens
    return slug.strip("-")


async def resolve_unique(
    name: str,
    exists: SlugExists,
    max_attempts: int | None = None,
) -> str:
    """
    Generate a unique slug from a display name.

    Checks the normalized name first. If it is taken, tries name-2,
    name-3, etc. one at a time until ``exists`` reports a free candidate.

    Args:
        name: Display name to derive the slug from
        exists: Async predicate answering whether a slug is taken
        max_attempts: Number of numeric suffixes to try before falling
                      back to a random suffix

    Returns:
        Non-empty slug string

    Examples:
        If "moloko" exists, returns "moloko-2"
        If "moloko" and "moloko-2" exist, returns "moloko-3"
    """
    if max_attempts is None:
        max_attempts = settings.slug_max_attempts

    base = normalize(name) or FALLBACK_SLUG

    if not await exists(base):
        return base

    for suffix in range(2, max_attempts + 2):
        candidate = f"{base}-{suffix}"
        if not await exists(candidate):
            return candidate

    fallback = f"{base}-{uuid.uuid4().hex[:8]}"
    logger.warning(
        "No free slug for %r after %d attempts, using %s",
        base,
        max_attempts,
        fallback,
    )
    return fallback
