"""Domain helpers for tour slugs."""

import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lower-case, ASCII-fold and hyphenate a tour name ("The Forest Hiker" -> "the-forest-hiker")."""
    folded = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode()
    return _NON_SLUG_CHARS.sub("-", folded.lower()).strip("-")
