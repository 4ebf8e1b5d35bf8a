"""Deterministic keyword categorization.

Used when the semantic classifier is not configured, fails, or answers with
a label outside the known vocabulary. No network calls, so results are
fast, repeatable and auditable.
"""

from __future__ import annotations

from app.categorization.vocabulary import find_known_category

FALLBACK_CATEGORY = "Miscellaneous"

# Ordering matters: earlier matches win ("lunch and gas" is food, not
# transportation). Keywords are plain substrings of the lower-cased text.
KEYWORD_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("food", ("grocery", "restaurant", "meal", "lunch", "dinner", "breakfast", "coffee", "pizza", "burger")),
    ("transportation", ("gas", "fuel", "bus", "train", "taxi", "uber", "lyft", "subway", "car", "vehicle", "toll", "parking")),
    ("housing", ("rent", "mortgage", "apartment", "home", "house", "property")),
    ("utilities", ("electric", "water", "gas", "internet", "phone", "bill", "utility")),
    ("entertainment", ("movie", "game", "concert", "show", "theater", "netflix", "spotify", "subscription")),
    ("healthcare", ("doctor", "medical", "health", "medicine", "dental", "pharmacy", "hospital", "clinic")),
    ("shopping", ("clothes", "shoes", "clothing", "amazon", "walmart", "target", "buy", "purchase")),
    ("education", ("tuition", "book", "school", "college", "university", "course", "class")),
]


class KeywordClassifier:
    """Map a description to a known category using fixed keyword tables."""

    def __init__(
        self,
        rules: list[tuple[str, tuple[str, ...]]] | None = None,
        fallback: str = FALLBACK_CATEGORY,
    ):
        self.rules = rules if rules is not None else KEYWORD_RULES
        self.fallback = fallback

    def classify(self, description: str | None, available_categories: list[str]) -> str | None:
        """Pick a category for ``description``.

        Args:
            description: Free-text expense description.
            available_categories: Known category names, most used first.

        Returns:
            The first rule category that is available and whose keywords occur
            in the description; otherwise the fallback category when available,
            otherwise the first available category, otherwise None.
        """
        text = (description or "").lower()

        for category, keywords in self.rules:
            known = find_known_category(category, available_categories)
            if known and any(keyword in text for keyword in keywords):
                return known

        fallback = find_known_category(self.fallback, available_categories)
        if fallback:
            return fallback

        return available_categories[0] if available_categories else None
