from __future__ import annotations

from .base import BaseTopicProbabilities  # noqa: F401

__all__ = ["BaseTopicProbabilities"]
