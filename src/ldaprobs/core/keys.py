from __future__ import annotations

from .errors import KeySeparatorCollision

KEY_SEPARATOR = ":"

CompositeKey = str


def check_component(component: str) -> str:
    """Return ``component`` unchanged, rejecting it if it holds the separator."""
    if KEY_SEPARATOR in component:
        raise KeySeparatorCollision(
            f"Key component {component!r} contains the reserved separator {KEY_SEPARATOR!r}."
        )
    return component


def make_word_topic_key(word: str, topic: int) -> CompositeKey:
    return f"{check_component(word)}{KEY_SEPARATOR}{topic}"


def make_topic_doc_key(topic: int, document: str) -> CompositeKey:
    return f"{topic}{KEY_SEPARATOR}{check_component(document)}"
