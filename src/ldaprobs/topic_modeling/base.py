from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class BaseTopicProbabilities(ABC):
    """Abstract read interface over a fitted topic model.

    Words and documents are addressed by their string ids; topics by their
    integer index in [0, topic_count()).
    """

    @abstractmethod
    def word_topic_probability(self, word: str, topic: int) -> float:
        """Return P(word | topic)."""

    @abstractmethod
    def topic_document_probability(self, topic: int, document: str) -> float:
        """Return P(topic | document), 0.0 when nothing is recorded."""

    @abstractmethod
    def most_likely_topic(self, document: str) -> Optional[int]:
        """Return the most probable topic for a document, or None."""

    @abstractmethod
    def vocabulary(self) -> Sequence[str]:
        """Return the words in word-id order."""

    @abstractmethod
    def documents(self) -> Sequence[str]:
        """Return the document ids in document-id order."""

    @abstractmethod
    def topic_count(self) -> int:
        """Return the number of topics."""
