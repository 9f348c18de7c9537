from __future__ import annotations

from contextlib import contextmanager
from locale import LC_COLLATE, Error, setlocale, strxfrm
from threading import Lock
from typing import Iterator, Mapping, Optional, Tuple

from .logging import log
from .types import CaseFolder, Collator, Locale

_TURKIC = {"tr", "az"}

_TURKIC_LOWER: Mapping[str, str] = {"I\u0307": "i", "\u0130": "i", "I": "\u0131"}
_TURKIC_UPPER: Mapping[str, str] = {"i": "\u0130"}


def _language(locale: Optional[Locale]) -> str:
    if not locale:
        return ""
    else:
        lang, _, _ = locale.replace("-", "_").partition("_")
        return lang.casefold()


def _substitute(text: str, table: Mapping[str, str]) -> str:
    for src, dest in table.items():
        text = text.replace(src, dest)
    return text


class LocaleCaseFolder(CaseFolder):
    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def lower(self, text: str, locale: Optional[Locale]) -> str:
        if _language(locale) in _TURKIC:
            return _substitute(text, table=_TURKIC_LOWER).lower()
        else:
            return text.lower()

    def upper(self, text: str, locale: Optional[Locale]) -> str:
        if _language(locale) in _TURKIC:
            return _substitute(text, table=_TURKIC_UPPER).upper()
        else:
            return text.upper()


def _candidates(locale: Locale) -> Iterator[str]:
    name = locale.replace("-", "_")
    yield name
    if "." not in name:
        yield f"{name}.UTF-8"


class LocaleCollator(Collator):
    def __init__(self) -> None:
        self._lock = Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @contextmanager
    def _collating(self, locale: Locale) -> Iterator[bool]:
        with self._lock:
            prev = setlocale(LC_COLLATE)
            for name in _candidates(locale):
                try:
                    setlocale(LC_COLLATE, name)
                except Error:
                    continue
                else:
                    try:
                        yield True
                    finally:
                        setlocale(LC_COLLATE, prev)
                    return
            else:
                log.warning("%s", f"unknown collation locale :: {locale}")
                yield False

    def _keys(self, lhs: str, rhs: str, locale: Optional[Locale]) -> Tuple[str, str]:
        if locale:
            with self._collating(locale):
                return strxfrm(lhs), strxfrm(rhs)
        else:
            with self._lock:
                return strxfrm(lhs), strxfrm(rhs)

    def compare(self, lhs: str, rhs: str, locale: Optional[Locale]) -> int:
        l_key, r_key = self._keys(lhs, rhs, locale=locale)
        return (l_key > r_key) - (l_key < r_key)
