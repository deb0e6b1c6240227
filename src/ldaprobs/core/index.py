from __future__ import annotations

import warnings
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ldaprobs.topic_modeling.base import BaseTopicProbabilities

from .errors import DuplicateKey, MatrixShapeMismatch, UnknownTopic, UnknownWord
from .keys import CompositeKey, check_component, make_topic_doc_key, make_word_topic_key

# Starting point of the argmax scan; below any valid probability.
NO_PROBABILITY = -1.0


def _index_unique(values: Sequence[str], what: str) -> Dict[str, int]:
    positions: Dict[str, int] = {}
    for i, value in enumerate(values):
        if value in positions:
            raise DuplicateKey(f"{what} {value!r} occurs at positions {positions[value]} and {i}.")
        positions[value] = i
    return positions


class ProbabilityIndex(BaseTopicProbabilities):
    """Read-only lookup over a fitted topic model.

    Two mappings are held, both keyed by composite strings:

        word_topic["<word>:<topic>"] = P(word | topic)
        topic_doc["<topic>:<document>"] = P(topic | document)

    Every word-topic cell is stored. Topic-document entries exist only for
    documents that have a row in the topic-document matrix; lookups of
    anything else default to 0.0.

    Instances are built with ``ProbabilityIndex.build`` and never modified
    afterwards, so they can be shared between threads without locking.
    """

    def __init__(
        self,
        *,
        vocabulary: Tuple[str, ...],
        documents: Tuple[str, ...],
        topic_count: int,
        word_topic: Mapping[CompositeKey, float],
        topic_doc: Mapping[CompositeKey, float],
        recorded_documents: FrozenSet[str],
    ) -> None:
        self._vocabulary = vocabulary
        self._documents = documents
        self._topic_count = topic_count
        self._word_ids = MappingProxyType({w: i for i, w in enumerate(vocabulary)})
        self._word_topic = MappingProxyType(dict(word_topic))
        self._topic_doc = MappingProxyType(dict(topic_doc))
        self._recorded_documents = recorded_documents

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def build(
        cls,
        vocabulary: Sequence[str],
        documents: Sequence[str],
        word_topic_matrix: np.ndarray,
        topic_doc_matrix: np.ndarray,
    ) -> "ProbabilityIndex":
        """Build both lookup mappings eagerly from parsed model data.

        Parameters
        ----------
        vocabulary:
            Words in word-id order.
        documents:
            Document ids in document-id order.
        word_topic_matrix:
            (topics, words) matrix of P(word | topic).
        topic_doc_matrix:
            (documents, topics) matrix of P(topic | document), one row per
            document in document order. It may cover only a prefix of
            ``documents``; the rest have no recorded probabilities.

        Values are expected to be finite; the file readers reject NaN and inf.
        """
        vocabulary = tuple(vocabulary)
        documents = tuple(documents)
        _index_unique(vocabulary, "Word")
        _index_unique(documents, "Document")
        for component in vocabulary + documents:
            check_component(component)

        phi = np.asarray(word_topic_matrix, dtype=np.float64)
        theta = np.asarray(topic_doc_matrix, dtype=np.float64)
        if phi.ndim == 1 and phi.size == 0:
            phi = phi.reshape(0, len(vocabulary))
        if phi.ndim != 2 or phi.shape[1] != len(vocabulary):
            raise MatrixShapeMismatch(
                f"Word-topic matrix has shape {phi.shape}, expected (topics, {len(vocabulary)})."
            )
        topic_count = phi.shape[0]
        if theta.ndim == 1 and theta.size == 0:
            theta = theta.reshape(0, topic_count)
        if theta.ndim != 2 or theta.shape[1] != topic_count:
            raise MatrixShapeMismatch(
                f"Topic-document matrix has shape {theta.shape}, expected (documents, {topic_count})."
            )
        if theta.shape[0] > len(documents):
            raise MatrixShapeMismatch(
                f"Topic-document matrix has {theta.shape[0]} rows but only {len(documents)} documents exist."
            )
        if (phi < 0.0).any() or (theta < 0.0).any():
            warnings.warn(
                "Model contains negative probabilities; most_likely_topic assumes values >= 0.",
                RuntimeWarning,
                stacklevel=2,
            )

        word_topic: Dict[CompositeKey, float] = {}
        for topic in range(topic_count):
            row = phi[topic].tolist()
            for word_id, word in enumerate(vocabulary):
                word_topic[make_word_topic_key(word, topic)] = row[word_id]

        topic_doc: Dict[CompositeKey, float] = {}
        for doc_id in range(theta.shape[0]):
            document = documents[doc_id]
            row = theta[doc_id].tolist()
            for topic in range(topic_count):
                topic_doc[make_topic_doc_key(topic, document)] = row[topic]

        return cls(
            vocabulary=vocabulary,
            documents=documents,
            topic_count=topic_count,
            word_topic=word_topic,
            topic_doc=topic_doc,
            recorded_documents=frozenset(documents[: theta.shape[0]]),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def _check_topic(self, topic: int) -> None:
        if not (0 <= topic < self._topic_count):
            raise UnknownTopic(topic, self._topic_count)

    def word_topic_probability(self, word: str, topic: int) -> float:
        if word not in self._word_ids:
            raise UnknownWord(word)
        self._check_topic(topic)
        return self._word_topic.get(make_word_topic_key(word, topic), 0.0)

    def topic_document_probability(self, topic: int, document: str) -> float:
        if document not in self._recorded_documents:
            return 0.0
        return self._topic_doc.get(make_topic_doc_key(topic, document), 0.0)

    def most_likely_topic(self, document: str) -> Optional[int]:
        """Return the topic with the highest P(topic | document).

        The first topic reaching the maximum wins. ``None`` when the model has
        no topics or no probabilities were recorded for ``document``.
        """
        if document not in self._recorded_documents:
            return None
        top_prob = NO_PROBABILITY
        max_index: Optional[int] = None
        for topic in range(self._topic_count):
            prob = self.topic_document_probability(topic, document)
            if prob > top_prob:
                max_index = topic
                top_prob = prob
        return max_index

    def topic_distribution(self, document: str) -> Dict[int, float]:
        """Return P(topic | document) for every topic, with 0.0 defaults."""
        return {
            topic: self.topic_document_probability(topic, document)
            for topic in range(self._topic_count)
        }

    def top_words(self, topic: int, top_k: int = 10) -> List[Tuple[str, float]]:
        """Return the ``top_k`` most probable words of a topic.

        Words with equal probability keep vocabulary order.
        """
        if top_k < 1:
            raise ValueError("top_k must be positive.")
        self._check_topic(topic)
        scored = [(word, self.word_topic_probability(word, topic)) for word in self._vocabulary]
        scored.sort(key=lambda kv: kv[1], reverse=True)
        return scored[:top_k]

    def documents_by_topic(self) -> Dict[int, List[str]]:
        """Group documents under their most likely topic.

        Every topic id is present as a key; documents without a topic are left out.
        """
        clusters: Dict[int, List[str]] = {topic: [] for topic in range(self._topic_count)}
        for document in self._documents:
            topic = self.most_likely_topic(document)
            if topic is not None:
                clusters[topic].append(document)
        return clusters

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def vocabulary(self) -> Tuple[str, ...]:
        return self._vocabulary

    def documents(self) -> Tuple[str, ...]:
        return self._documents

    def topic_count(self) -> int:
        return self._topic_count

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(words={len(self._vocabulary)}, "
            f"documents={len(self._documents)}, topics={self._topic_count})"
        )


def build(
    vocabulary: Sequence[str],
    documents: Sequence[str],
    word_topic_matrix: np.ndarray,
    topic_doc_matrix: np.ndarray,
) -> ProbabilityIndex:
    return ProbabilityIndex.build(vocabulary, documents, word_topic_matrix, topic_doc_matrix)
