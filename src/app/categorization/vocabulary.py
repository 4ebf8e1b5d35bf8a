"""Case-insensitive lookups against the known category names."""

from app.models.category import category_key


def find_known_category(candidate: str | None, known_categories: list[str]) -> str | None:
    """Return the known spelling of ``candidate``, or None if it isn't known.

    Matching is exact after trimming whitespace and ignoring case. Near
    misses (plurals, punctuation) are not accepted.
    """
    key = category_key(candidate or "")
    if not key:
        return None
    for name in known_categories:
        if category_key(name) == key:
            return name
    return None
