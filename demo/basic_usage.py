from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ldaprobs import EstimatorConfig, load_lda_probs

# A tiny two-topic model in the estimator's output format.
_FILES = {
    "wordmap.txt": "4\nmarket 0\nstocks 1\ngoal 2\nmatch 3\n",
    "docmap.txt": "3\nfinance-001\nsport-001\nmixed-001\n",
    "model-final.phi": "0.45 0.45 0.05 0.05\n0.05 0.05 0.5 0.4\n",
    "model-final.theta": "0.9 0.1\n0.15 0.85\n0.5 0.5\n",
}


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    with tempfile.TemporaryDirectory() as model_dir:
        for name, text in _FILES.items():
            (Path(model_dir) / name).write_text(text, encoding="utf-8")

        probs = load_lda_probs(EstimatorConfig(model_dir=model_dir))

        for doc in probs.documents():
            print(f"{doc}: topic {probs.most_likely_topic(doc)} {probs.topic_distribution(doc)}")
        for topic in range(probs.topic_count()):
            words = ", ".join(f"{w}={p:.2f}" for w, p in probs.top_words(topic, top_k=2))
            print(f"topic {topic}: {words}")
        print("clusters:", probs.documents_by_topic())


if __name__ == "__main__":
    main()
