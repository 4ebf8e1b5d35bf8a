"""
LLM-based semantic categorization (primary layer).

Asks an OpenAI-compatible chat-completion endpoint to pick exactly one
category from the known list. Answers outside that list are treated as
"no opinion" so the resolver can fall back to keyword rules.
"""

import logging

from openai import AsyncOpenAI, OpenAIError

from app.categorization.vocabulary import find_known_category
from app.config import Settings, settings
from app.core.exceptions import ProviderError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a precise expense categorization assistant. Always respond with "
    "exactly one category name from the provided list, nothing more."
)


def build_prompt(description: str, categories: list[str]) -> str:
    """Build the single-turn user prompt for one expense."""
    return f"""Given the expense description "{description}", categorize it into one of the following categories: {', '.join(categories)}.
Consider the context and meaning of the expense. Respond with only the category name, nothing else.

Example format:
Description: "Groceries at Walmart"
Response: Food

Description: "{description}"
Response:"""


class SemanticClassifier:
    """Categorize expenses with a chat-completion model."""

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.3,
        max_tokens: int = 20,
    ):
        """
        Args:
            client: Configured OpenAI client; None leaves the classifier disabled.
            model: Model identifier sent with every request.
            temperature: Sampling temperature (low for consistent labels).
            max_tokens: Reply budget; one category name only.
        """
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "SemanticClassifier":
        client = None
        if config.llm_enabled:
            client = AsyncOpenAI(
                api_key=config.openai_api_key,
                base_url=config.openai_base_url or None,
                timeout=config.llm_timeout_seconds,
                max_retries=config.llm_max_retries,
            )
        else:
            logger.info("No OpenAI API key configured, semantic categorization disabled")
        return cls(
            client=client,
            model=config.openai_model,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
        )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def classify(self, description: str, available_categories: list[str]) -> str | None:
        """Ask the model for a category.

        Returns:
            The matching known category, or None when the reply isn't one.

        Raises:
            ProviderError: If the provider is unreachable, rejects the request
                or times out.
        """
        if not self.is_configured:
            return None

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(description, available_categories)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.warning(
                "Semantic categorization request failed",
                extra={"error_type": type(e).__name__},
            )
            raise ProviderError(details={"error_type": type(e).__name__}) from e

        reply = ""
        if response.choices:
            reply = (response.choices[0].message.content or "").strip()

        category = find_known_category(reply, available_categories)
        if category is None:
            logger.info(f"Model suggested unknown category: {reply!r}")
        return category
