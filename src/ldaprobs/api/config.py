from __future__ import annotations

import json
import os
from typing import Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ldaprobs.storage.model_files import (
    INFERENCE_MODEL_SUFFIX,
    TOPIC_DOC_SUFFIX,
    WORD_TOPIC_SUFFIX,
)

_ConfigT = TypeVar("_ConfigT", bound="_FileConfig")


class _FileConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    @classmethod
    def from_file(cls: Type[_ConfigT], path: str) -> _ConfigT:
        """Load the configuration from a JSON object stored at ``path``."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file {path!r} not found")
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return cls(**payload)


class EstimatorConfig(_FileConfig):
    """Location of the estimator's output.

    ``model_dir`` holds wordmap.txt, docmap.txt and ``<model>.phi`` /
    ``<model>.theta``.
    """

    model_dir: str = Field(
        min_length=1,
        description="Directory the estimator wrote its model files to.",
    )
    model: str = Field(
        default="model-final",
        min_length=1,
        description="Model name; the .phi/.theta files are named after it.",
    )

    def word_topic_path(self) -> str:
        return os.path.join(self.model_dir, self.model + WORD_TOPIC_SUFFIX)

    def topic_doc_path(self) -> str:
        return os.path.join(self.model_dir, self.model + TOPIC_DOC_SUFFIX)


class InferenceConfig(_FileConfig):
    """Location of an inference run over new documents with a fitted model."""

    model_dir: str = Field(
        min_length=1,
        description="Directory holding docmap.txt and the inferred model files.",
    )
    data_file: str = Field(
        min_length=1,
        description="Base name of the inference data file.",
    )

    def word_topic_path(self) -> str:
        return os.path.join(self.model_dir, self.data_file + INFERENCE_MODEL_SUFFIX + WORD_TOPIC_SUFFIX)

    def topic_doc_path(self) -> str:
        return os.path.join(self.model_dir, self.data_file + INFERENCE_MODEL_SUFFIX + TOPIC_DOC_SUFFIX)
