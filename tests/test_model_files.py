from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from ldaprobs.core.errors import (
    MalformedDocumentFile,
    MalformedMatrixFile,
    MalformedVocabularyFile,
    MatrixShapeMismatch,
    ModelFileError,
)
from ldaprobs.storage.model_files import (
    read_document_list,
    read_topic_doc_matrix,
    read_vocabulary,
    read_word_topic_matrix,
)


def _write(tmp_path: Path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_read_vocabulary_places_words_by_index(tmp_path: Path) -> None:
    path = _write(tmp_path, "wordmap.txt", "3\ngamma 2\nalpha 0\nbeta 1\n\n")
    assert read_vocabulary(path) == ["alpha", "beta", "gamma"]


def test_read_vocabulary_missing_line_fails(tmp_path: Path) -> None:
    path = _write(tmp_path, "wordmap.txt", "3\nalpha 0\nbeta 1\n")
    with pytest.raises(MalformedVocabularyFile):
        read_vocabulary(path)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "three\nalpha 0\n",
        "-1\n",
        "2\nalpha\nbeta 1\n",
        "2\nalpha x\nbeta 1\n",
        "2\nalpha 0\nbeta 2\n",
        "2\nalpha 0\nbeta 0\n",
        "2\nalpha 0\nalpha 1\n",
        "2\nhttp:x 0\nbeta 1\n",
        "2\nalpha 0\n\nbeta 1\n",
    ],
)
def test_read_vocabulary_rejects_malformed_files(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path, "wordmap.txt", text)
    with pytest.raises(MalformedVocabularyFile):
        read_vocabulary(path)


def test_malformed_error_reports_path_and_line(tmp_path: Path) -> None:
    path = _write(tmp_path, "wordmap.txt", "2\nalpha 0\nbeta 7\n")
    with pytest.raises(ModelFileError) as excinfo:
        read_vocabulary(path)
    assert excinfo.value.path == path
    assert excinfo.value.line == 3
    assert path in str(excinfo.value)


def test_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_vocabulary(str(tmp_path / "wordmap.txt"))


def test_read_document_list_in_line_order(tmp_path: Path) -> None:
    path = _write(tmp_path, "docmap.txt", "2\ndocs/b.txt\ndocs/a.txt\n")
    assert read_document_list(path) == ["docs/b.txt", "docs/a.txt"]


@pytest.mark.parametrize(
    "text",
    [
        "x\nd1\n",
        "2\nd1\n",
        "1\nd1\nd2\n",
        "2\nd1\n   \n",
        "2\nd1\nd1\n",
        "1\nC:doc\n",
    ],
)
def test_read_document_list_rejects_malformed_files(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path, "docmap.txt", text)
    with pytest.raises(MalformedDocumentFile):
        read_document_list(path)


def test_read_word_topic_matrix_shape_and_values(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.phi", "0.9 0.1 \n0.4 0.6 \n")
    phi = read_word_topic_matrix(path, 2)
    assert phi.shape == (2, 2)
    assert phi.dtype == np.float64
    assert phi[0, 0] == 0.9
    assert phi[1, 1] == 0.6


def test_read_word_topic_matrix_ragged_row_fails(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.phi", "0.2 0.3 0.5\n0.5 0.5\n")
    with pytest.raises(MalformedMatrixFile) as excinfo:
        read_word_topic_matrix(path, 3)
    assert excinfo.value.line == 2


def test_read_word_topic_matrix_bad_token_fails(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.phi", "0.2 abc\n")
    with pytest.raises(MalformedMatrixFile):
        read_word_topic_matrix(path, 2)


def test_read_word_topic_matrix_empty_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.phi", "")
    assert read_word_topic_matrix(path, 4).shape == (0, 4)


def test_read_topic_doc_matrix_width_must_match_topic_count(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.theta", "0.3 0.3 0.4\n")
    with pytest.raises(MatrixShapeMismatch):
        read_topic_doc_matrix(path, 2)


def test_read_topic_doc_matrix_ragged_row_fails(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.theta", "0.3 0.7\n0.1 0.2 0.7\n")
    with pytest.raises(MalformedMatrixFile):
        read_topic_doc_matrix(path, 2)


def test_read_topic_doc_matrix_rows_are_documents(tmp_path: Path) -> None:
    path = _write(tmp_path, "model.theta", "0.3 0.7\n0.6 0.4\n0.5 0.5\n")
    theta = read_topic_doc_matrix(path, 2)
    assert theta.shape == (3, 2)
    assert theta[1].tolist() == [0.6, 0.4]


def test_non_utf8_file_is_malformed_with_location(tmp_path: Path) -> None:
    path = tmp_path / "wordmap.txt"
    path.write_bytes(b"1\ncaf\xe9 0\n")
    with pytest.raises(MalformedVocabularyFile) as excinfo:
        read_vocabulary(str(path))
    assert excinfo.value.path == str(path)
    assert excinfo.value.line == 2
    assert str(path) in str(excinfo.value)


def test_non_utf8_matrix_file_is_malformed(tmp_path: Path) -> None:
    path = tmp_path / "model.theta"
    path.write_bytes(b"0.5 0.5\n0.5\xff 0.5\n")
    with pytest.raises(MalformedMatrixFile) as excinfo:
        read_topic_doc_matrix(str(path), 2)
    assert excinfo.value.line == 2


def test_read_vocabulary_huge_count_is_malformed(tmp_path: Path) -> None:
    path = _write(tmp_path, "wordmap.txt", "1000000000000000\na 0\n")
    with pytest.raises(MalformedVocabularyFile):
        read_vocabulary(path)


@pytest.mark.parametrize("text", ["1_000\n", "2\nalpha 0\nbeta 1_0\n", "2\nalpha 0\nbeta 0x1\n"])
def test_read_vocabulary_rejects_non_decimal_integers(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path, "wordmap.txt", text)
    with pytest.raises(MalformedVocabularyFile):
        read_vocabulary(path)


@pytest.mark.parametrize("token", ["nan", "inf", "-inf", "NaN"])
def test_matrix_rejects_non_finite_values(tmp_path: Path, token: str) -> None:
    path = _write(tmp_path, "model.theta", f"0.5 0.5\n{token} 0.5\n")
    with pytest.raises(MalformedMatrixFile) as excinfo:
        read_topic_doc_matrix(path, 2)
    assert excinfo.value.line == 2
