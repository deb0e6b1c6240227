from __future__ import annotations

import math
import os
import re
from typing import List, Optional, Type

import numpy as np

from ldaprobs.core.errors import (
    MalformedDocumentFile,
    MalformedMatrixFile,
    MalformedVocabularyFile,
    MatrixShapeMismatch,
    ModelFileError,
)
from ldaprobs.core.keys import KEY_SEPARATOR

# Filenames and suffixes written by the topic-model estimator
WORDMAP = "wordmap.txt"
DOCMAP = "docmap.txt"
WORD_TOPIC_SUFFIX = ".phi"
TOPIC_DOC_SUFFIX = ".theta"
INFERENCE_MODEL_SUFFIX = ".model-final"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _read_lines(path: str, error: Type[ModelFileError]) -> List[str]:
    """Return the file's lines without line endings or trailing blank lines.

    Bytes that are not valid UTF-8 raise ``error`` at the offending line.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"{os.path.basename(path)} not found in {os.path.dirname(path) or '.'!r}")
    with open(path, "rb") as f:
        data = f.read()
    try:
        lines = data.decode("utf-8").splitlines()
    except UnicodeDecodeError as exc:
        raise error(
            f"invalid UTF-8 byte at offset {exc.start}", path=path, line=data.count(b"\n", 0, exc.start) + 1
        ) from None
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _parse_int(raw: str) -> int:
    """Parse a plain decimal integer; ``int()`` alone also accepts forms like ``1_000``."""
    if not _INTEGER.fullmatch(raw):
        raise ValueError(raw)
    return int(raw)


def _read_count(lines: List[str], path: str, error: Type[ModelFileError]) -> int:
    if not lines:
        raise error("missing count line", path=path, line=1)
    raw = lines[0].strip()
    try:
        count = _parse_int(raw)
    except ValueError:
        raise error(f"count {raw!r} is not an integer", path=path, line=1) from None
    if count < 0:
        raise error(f"count {count} is negative", path=path, line=1)
    return count


def read_vocabulary(path: str) -> List[str]:
    """Read a ``wordmap.txt`` file into a list indexed by word id.

    The first line holds the vocabulary size N; every following line is
    ``<word> <index>``, in any order. Every slot in [0, N) must be filled
    exactly once.
    """
    lines = _read_lines(path, MalformedVocabularyFile)
    size = _read_count(lines, path, MalformedVocabularyFile)
    if len(lines) - 1 < size:
        raise MalformedVocabularyFile(f"expected {size} words, found {len(lines) - 1} lines", path=path)

    words: List[Optional[str]] = [None] * size
    seen: dict[str, int] = {}
    for lineno, line in enumerate(lines[1:], start=2):
        vals = line.split()
        if len(vals) < 2:
            raise MalformedVocabularyFile(
                f"expected '<word> <index>', got {line!r}", path=path, line=lineno
            )
        word, raw_index = vals[0], vals[1]
        try:
            index = _parse_int(raw_index)
        except ValueError:
            raise MalformedVocabularyFile(
                f"index {raw_index!r} is not an integer", path=path, line=lineno
            ) from None
        if not (0 <= index < size):
            raise MalformedVocabularyFile(
                f"index {index} is outside [0, {size})", path=path, line=lineno
            )
        if KEY_SEPARATOR in word:
            raise MalformedVocabularyFile(
                f"word {word!r} contains the reserved separator {KEY_SEPARATOR!r}",
                path=path,
                line=lineno,
            )
        if words[index] is not None:
            raise MalformedVocabularyFile(f"index {index} assigned twice", path=path, line=lineno)
        if word in seen:
            raise MalformedVocabularyFile(
                f"word {word!r} already has index {seen[word]}", path=path, line=lineno
            )
        words[index] = word
        seen[word] = index

    if len(seen) < size:
        missing = next(i for i, w in enumerate(words) if w is None)
        raise MalformedVocabularyFile(
            f"expected {size} words, found {len(seen)} (index {missing} unfilled)", path=path
        )
    return [w for w in words if w is not None]


def read_document_list(path: str) -> List[str]:
    """Read a ``docmap.txt`` file: a count line followed by one id per line."""
    lines = _read_lines(path, MalformedDocumentFile)
    size = _read_count(lines, path, MalformedDocumentFile)

    body = lines[1:]
    if len(body) != size:
        raise MalformedDocumentFile(f"expected {size} document ids, found {len(body)}", path=path)

    documents: List[str] = []
    seen: set[str] = set()
    for lineno, line in enumerate(body, start=2):
        doc = line.strip()
        if not doc:
            raise MalformedDocumentFile("empty document id", path=path, line=lineno)
        if KEY_SEPARATOR in doc:
            raise MalformedDocumentFile(
                f"document id {doc!r} contains the reserved separator {KEY_SEPARATOR!r}",
                path=path,
                line=lineno,
            )
        if doc in seen:
            raise MalformedDocumentFile(f"duplicate document id {doc!r}", path=path, line=lineno)
        seen.add(doc)
        documents.append(doc)
    return documents


def _parse_row(vals: List[str], path: str, lineno: int) -> List[float]:
    row: List[float] = []
    for col, token in enumerate(vals):
        try:
            row.append(float(token))
        except ValueError:
            raise MalformedMatrixFile(
                f"column {col}: {token!r} is not a number", path=path, line=lineno
            ) from None
        if not math.isfinite(row[-1]):
            raise MalformedMatrixFile(f"column {col}: {token!r} is not finite", path=path, line=lineno)
    return row


def read_word_topic_matrix(path: str, vocabulary_size: int) -> np.ndarray:
    """Read a ``.phi`` file into a (topics, vocabulary_size) matrix.

    Each line is one topic; the number of topics is the number of lines.
    """
    rows: List[List[float]] = []
    for lineno, line in enumerate(_read_lines(path, MalformedMatrixFile), start=1):
        vals = line.split()
        if len(vals) != vocabulary_size:
            raise MalformedMatrixFile(
                f"expected {vocabulary_size} values (vocabulary size), found {len(vals)}",
                path=path,
                line=lineno,
            )
        rows.append(_parse_row(vals, path, lineno))
    return np.asarray(rows, dtype=np.float64).reshape(len(rows), vocabulary_size)


def read_topic_doc_matrix(path: str, topic_count: int) -> np.ndarray:
    """Read a ``.theta`` file into a (documents, topic_count) matrix.

    ``topic_count`` comes from the word-topic matrix. A first row of another
    width means the two files disagree; a later row of another width means
    the file itself is ragged.
    """
    rows: List[List[float]] = []
    for lineno, line in enumerate(_read_lines(path, MalformedMatrixFile), start=1):
        vals = line.split()
        if len(vals) != topic_count:
            error = MatrixShapeMismatch if lineno == 1 else MalformedMatrixFile
            raise error(
                f"expected {topic_count} values (topic count), found {len(vals)}",
                path=path,
                line=lineno,
            )
        rows.append(_parse_row(vals, path, lineno))
    return np.asarray(rows, dtype=np.float64).reshape(len(rows), topic_count)
