from __future__ import annotations

import sys

from .api.cli import main as _cli_main
from .api.client import load_lda_probs
from .api.config import EstimatorConfig, InferenceConfig
from .core.index import ProbabilityIndex

__all__ = ["EstimatorConfig", "InferenceConfig", "ProbabilityIndex", "load_lda_probs", "main"]


def main() -> None:
    """Entry point for the `ldaprobs` console script."""
    sys.exit(_cli_main())
