from __future__ import annotations

import logging
import os
from typing import Optional

from ldaprobs.core.index import ProbabilityIndex
from ldaprobs.storage.model_files import (
    DOCMAP,
    WORDMAP,
    read_document_list,
    read_topic_doc_matrix,
    read_vocabulary,
    read_word_topic_matrix,
)
from .config import EstimatorConfig, InferenceConfig

logger = logging.getLogger(__name__)


def load_lda_probs(
    estimator: EstimatorConfig,
    inference: Optional[InferenceConfig] = None,
) -> ProbabilityIndex:
    """Load a fitted topic model into a new ProbabilityIndex.

    Parameters
    ----------
    estimator:
        Where the estimator wrote its model. The vocabulary always comes from
        here.
    inference:
        Optional inference run. When given, the document list and both
        probability matrices are read from the inference directory instead.

    Files are read in dependency order: vocabulary, documents, word-topic
    matrix (which fixes the topic count), then topic-document matrix.
    """
    if inference is None:
        doc_dir = estimator.model_dir
        phi_path = estimator.word_topic_path()
        theta_path = estimator.topic_doc_path()
    else:
        doc_dir = inference.model_dir
        phi_path = inference.word_topic_path()
        theta_path = inference.topic_doc_path()

    wordmap_path = os.path.join(estimator.model_dir, WORDMAP)
    logger.debug("Reading vocabulary from %s", wordmap_path)
    vocabulary = read_vocabulary(wordmap_path)

    docmap_path = os.path.join(doc_dir, DOCMAP)
    logger.debug("Reading document list from %s", docmap_path)
    documents = read_document_list(docmap_path)

    logger.debug("Reading word-topic matrix from %s", phi_path)
    word_topic = read_word_topic_matrix(phi_path, len(vocabulary))

    logger.debug("Reading topic-document matrix from %s", theta_path)
    topic_doc = read_topic_doc_matrix(theta_path, word_topic.shape[0])

    index = ProbabilityIndex.build(vocabulary, documents, word_topic, topic_doc)
    logger.info(
        "Loaded topic model: %d words, %d documents, %d topics",
        len(vocabulary),
        len(documents),
        index.topic_count(),
    )
    return index
