"""Sentence splitting shared by every chunking component."""

import re
from collections.abc import Iterator

_SENTENCE_END = re.compile(r"[.!?]+")


def split_sentences(text: str) -> Iterator[str]:
    """Yield trimmed sentences, each terminated with a period.

    Splits on runs of ``.``, ``!`` and ``?``; empty fragments are dropped.
    Splitting a space-joined result again yields the same sentences.
    """
    for fragment in _SENTENCE_END.split(text):
        sentence = fragment.strip()
        if sentence:
            yield sentence + "."
