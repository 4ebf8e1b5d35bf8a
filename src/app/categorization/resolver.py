"""Two-tier category resolution: semantic model first, keyword rules second.

An outage or an off-list answer from the model never blocks
categorization; the keyword classifier always gets the last word.
"""

import logging
from typing import Protocol

from app.categorization.keywords import KeywordClassifier
from app.categorization.vocabulary import find_known_category
from app.core.exceptions import NoCategoryAvailableError, ProviderError

logger = logging.getLogger(__name__)


class Classifier(Protocol):
    """Primary classifier contract: may be unconfigured, may raise ProviderError."""

    @property
    def is_configured(self) -> bool: ...

    async def classify(self, description: str, available_categories: list[str]) -> str | None: ...


class CategoryResolver:
    """Choose a category for an expense description."""

    def __init__(
        self,
        semantic: Classifier | None = None,
        keyword: KeywordClassifier | None = None,
    ):
        self.semantic = semantic
        self.keyword = keyword or KeywordClassifier()

    @property
    def semantic_enabled(self) -> bool:
        return self.semantic is not None and self.semantic.is_configured

    async def resolve(self, description: str, known_categories: list[str]) -> str:
        """Resolve a category name that is guaranteed to be in ``known_categories``.

        Raises:
            NoCategoryAvailableError: If there are no categories to choose from.
        """
        if not known_categories:
            raise NoCategoryAvailableError()

        if self.semantic_enabled:
            try:
                candidate = await self.semantic.classify(description, known_categories)
            except ProviderError:
                logger.warning("Semantic classifier unavailable, using keyword rules")
                candidate = None

            category = find_known_category(candidate, known_categories)
            if category:
                logger.info("Categorized expense", extra={"category": category, "source": "semantic"})
                return category
            logger.info("Semantic classifier declined, using keyword rules")

        candidate = self.keyword.classify(description, known_categories)
        category = find_known_category(candidate, known_categories)
        if category is None:
            raise NoCategoryAvailableError()

        logger.info("Categorized expense", extra={"category": category, "source": "keyword"})
        return category
