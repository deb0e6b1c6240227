from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from ldaprobs.core.errors import LDAProbsError
from .client import load_lda_probs
from .config import EstimatorConfig, InferenceConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ldaprobs",
        description="Load a fitted topic model and print each document's most likely topic.",
    )
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("--estimator-config", help="JSON file with model_dir and model")
    source.add_argument("--model-dir", help="Directory holding the estimator output")
    ap.add_argument("--model", default="model-final", help="Model name (with --model-dir)")
    ap.add_argument("--inference-config", help="JSON file with model_dir and data_file")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the `ldaprobs` console script."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.estimator_config:
            estimator = EstimatorConfig.from_file(args.estimator_config)
        else:
            estimator = EstimatorConfig(model_dir=args.model_dir, model=args.model)
        inference = None
        if args.inference_config:
            inference = InferenceConfig.from_file(args.inference_config)
        probs = load_lda_probs(estimator, inference)
    except (LDAProbsError, OSError, ValueError) as exc:
        logger.debug("Load failed", exc_info=True)
        print(f"ldaprobs: {exc}", file=sys.stderr)
        return 1

    for doc in probs.documents():
        topic = probs.most_likely_topic(doc)
        print(f"{doc}: {-1 if topic is None else topic}")
    return 0
