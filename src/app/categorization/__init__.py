"""Expense categorization engine.

A semantic (LLM) classifier is tried first when an API key is configured;
deterministic keyword rules are the fallback. Every answer is validated
against the category registry's known names.
"""

from .keywords import KeywordClassifier
from .registry import CategoryRegistry
from .resolver import CategoryResolver, Classifier
from .semantic import SemanticClassifier

__all__ = [
    "CategoryRegistry",
    "CategoryResolver",
    "Classifier",
    "KeywordClassifier",
    "SemanticClassifier",
]
