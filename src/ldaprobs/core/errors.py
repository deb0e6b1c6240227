from __future__ import annotations

from typing import Optional


class LDAProbsError(Exception):
    """Base class for all errors raised by ldaprobs."""


class ModelFileError(LDAProbsError, ValueError):
    """A model file could not be parsed.

    ``path`` and ``line`` (1-based, when known) locate the offending input.
    """

    def __init__(self, message: str, *, path: Optional[str] = None, line: Optional[int] = None) -> None:
        self.path = path
        self.line = line
        location = ""
        if path is not None:
            location = f"{path}:{line}: " if line is not None else f"{path}: "
        super().__init__(f"{location}{message}")


class MalformedVocabularyFile(ModelFileError):
    pass


class MalformedDocumentFile(ModelFileError):
    pass


class MalformedMatrixFile(ModelFileError):
    pass


class MatrixShapeMismatch(ModelFileError):
    """Word-topic and topic-document data disagree on their dimensions."""


class UnknownWord(LDAProbsError, KeyError):
    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"Word {word!r} is not in the vocabulary.")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownTopic(LDAProbsError, IndexError):
    def __init__(self, topic: int, topic_count: int) -> None:
        self.topic = topic
        self.topic_count = topic_count
        super().__init__(f"Topic {topic} is outside [0, {topic_count}).")


class KeySeparatorCollision(LDAProbsError, ValueError):
    """A key component contains the reserved composite-key separator."""


class DuplicateKey(LDAProbsError, ValueError):
    """A vocabulary word or document id occurs more than once."""
