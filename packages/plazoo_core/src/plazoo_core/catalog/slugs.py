"""Store slugs (used as the store's subdomain)."""

import re
import unicodedata

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Build a slug from a display name.

    "Padaria São João" -> "padaria-sao-joao"
    """
    text = unicodedata.normalize("NFD", name.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _NON_SLUG.sub("-", text).strip("-")


def clean_slug(slug: str) -> str:
    """Sanitize a slug typed by the owner: lower case, [a-z0-9-] only."""
    return re.sub(r"[^a-z0-9-]", "", slug.lower())
