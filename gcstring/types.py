from __future__ import annotations

from abc import abstractmethod
from typing import NewType, Optional, Protocol, Sequence, cast

from .logging import log

grapheme = NewType("grapheme", str)
Locale = NewType("Locale", str)


class GraphemeError(Exception):
    ...


class InvalidInput(GraphemeError, TypeError):
    ...


class InvalidPattern(GraphemeError, ValueError):
    ...


class Segmenter(Protocol):
    @abstractmethod
    def segment(self, text: str) -> Sequence[grapheme]:
        ...


class CaseFolder(Protocol):
    @abstractmethod
    def lower(self, text: str, locale: Optional[Locale]) -> str:
        ...

    @abstractmethod
    def upper(self, text: str, locale: Optional[Locale]) -> str:
        ...


class Collator(Protocol):
    @abstractmethod
    def compare(self, lhs: str, rhs: str, locale: Optional[Locale]) -> int:
        ...


class HasSegmenter:
    segmenter = cast(Segmenter, None)

    @classmethod
    def init_segmenter(cls, segmenter: Segmenter) -> None:
        log.debug("%s", f"segmenter :: {segmenter!r}")
        cls.segmenter = segmenter


class HasLocale:
    case_folder = cast(CaseFolder, None)
    collator = cast(Collator, None)

    @classmethod
    def init_case_folder(cls, case_folder: CaseFolder) -> None:
        log.debug("%s", f"case folder :: {case_folder!r}")
        cls.case_folder = case_folder

    @classmethod
    def init_collator(cls, collator: Collator) -> None:
        log.debug("%s", f"collator :: {collator!r}")
        cls.collator = collator
