from __future__ import annotations

from typing import Sequence

from regex import compile

from .logging import log
from .types import Segmenter, grapheme

_CLUSTER = compile(r"\X")


class RegexSegmenter(Segmenter):
    def __init__(self) -> None:
        self._pattern = _CLUSTER
        log.debug("%s", f"segmenter ready :: {self._pattern.pattern}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._pattern.pattern!r})"

    def segment(self, text: str) -> Sequence[grapheme]:
        if not text:
            return ()
        else:
            return tuple(map(grapheme, self._pattern.findall(text)))


DEFAULT = RegexSegmenter()


def segment(text: str) -> Sequence[grapheme]:
    return DEFAULT.segment(text)
