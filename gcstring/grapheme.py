from __future__ import annotations

from functools import cached_property
from itertools import chain, cycle, islice
from re import Match
from typing import (
    Any,
    Iterable,
    Iterator,
    Optional,
    Sequence,
    Tuple,
    Union,
    overload,
)
from unicodedata import normalize as _normalize

from .casing import LocaleCaseFolder, LocaleCollator
from .lib import aligned, clamp, decode, is_space, seek, utf16_len
from .pattern import (
    AnyPattern,
    GlobalPattern,
    GraphemeMatch,
    Replacement,
    compiled,
    literal,
    unwrap,
)
from .segmenter import DEFAULT
from .types import (
    HasLocale,
    HasSegmenter,
    InvalidInput,
    InvalidPattern,
    Locale,
    grapheme,
)

Separator = Union[str, "GraphemeString", AnyPattern, GlobalPattern, None]


def _coerce(value: Any) -> str:
    if value is None:
        return ""
    elif isinstance(value, str):
        return value
    elif isinstance(value, (bytes, bytearray)):
        return decode(bytes(value))
    else:
        try:
            return str(value)
        except Exception as e:
            raise InvalidInput(f"{type(value).__name__} has no string form") from e


def _locale(locale: Optional[str]) -> Optional[Locale]:
    return Locale(locale) if locale else None


def _template(replacement: Any) -> Replacement:
    if callable(replacement):
        return replacement
    else:
        return _coerce(replacement)


def _verbatim(replacement: Any) -> Replacement:
    if callable(replacement):
        return replacement
    else:
        text = _coerce(replacement)
        return lambda _: text


def join(sep: Any, glyphs: Iterable[Any]) -> str:
    return str(sep).join(map(str, glyphs))


class GraphemeString(HasSegmenter, HasLocale):
    """
    Immutable text indexed by user perceived characters (extended grapheme clusters)

    Every offset taken or returned is a grapheme index,
    unless the name says code unit
    """

    def __init__(self, value: Any = None) -> None:
        if isinstance(value, GraphemeString):
            raw, body = value._raw, value._body
        else:
            raw = _coerce(value)
            body = tuple(self.segmenter.segment(raw))

        super().__setattr__("_raw", raw)
        super().__setattr__("_body", body)

    def __setattr__(self, key: str, val: Any) -> None:
        raise AttributeError(key)

    def __delattr__(self, key: str) -> None:
        raise AttributeError(key)

    def _new(self, raw: str) -> GraphemeString:
        return type(self)(raw)

    def _from(self, glyphs: Iterable[str]) -> GraphemeString:
        return self._new(join("", glyphs))

    def _glyphs(self, text: Any) -> Sequence[grapheme]:
        if isinstance(text, GraphemeString):
            return text._body
        else:
            return self.segmenter.segment(_coerce(text))

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def clusters(self) -> Sequence[grapheme]:
        return self._body

    graphemes = clusters

    @property
    def length(self) -> int:
        return len(self._body)

    @property
    def code_unit_length(self) -> int:
        return len(self._raw)

    @cached_property
    def utf16_length(self) -> int:
        return utf16_len(self._raw)

    @cached_property
    def unit_map(self) -> Sequence[int]:
        """
        code unit offset -> grapheme index, one past the end included
        """

        def cont() -> Iterator[int]:
            for idx, glyph in enumerate(self._body):
                for _ in glyph:
                    yield idx
            yield len(self._body)

        return tuple(cont())

    def grapheme_index(self, offset: int) -> int:
        if 0 <= offset <= len(self._raw):
            return self.unit_map[offset]
        else:
            return -1

    def _translate(self, match: Match) -> GraphemeMatch:
        begin, end = match.span()
        index = self.grapheme_index(begin)
        if end == begin:
            stop = index
        else:
            stop = self.grapheme_index(end)
            if self.unit_map[end - 1] == stop:
                stop += 1
        return GraphemeMatch(match=match, index=index, end=stop)

    def char_at(self, index: int) -> str:
        if 0 <= index < len(self._body):
            return self._body[index]
        else:
            return ""

    def at(self, index: int) -> Optional[str]:
        idx = index + len(self._body) if index < 0 else index
        if 0 <= idx < len(self._body):
            return self._body[idx]
        else:
            return None

    def code_point_at(self, index: int) -> Optional[int]:
        if glyph := self.char_at(index):
            return ord(glyph[0])
        else:
            return None

    def code_points(self, index: int) -> Optional[Sequence[int]]:
        if glyph := self.char_at(index):
            return tuple(map(ord, glyph))
        else:
            return None

    def slice(
        self, start: Optional[int] = 0, end: Optional[int] = None
    ) -> GraphemeString:
        return self._from(self._body[start:end])

    def substring(self, start: int, end: Optional[int] = None) -> GraphemeString:
        lo = max(0, start)
        hi = len(self._body) if end is None else max(0, end)
        if lo > hi:
            lo, hi = hi, lo
        return self.slice(lo, hi)

    def substr(self, start: int, length: Optional[int] = None) -> GraphemeString:
        if start < 0:
            start = max(len(self._body) + start, 0)

        if length is None:
            return self.slice(start)
        elif length <= 0:
            return self._new("")
        else:
            return self.slice(start, start + length)

    def index_of(self, term: Any, position: int = 0) -> int:
        needle = self._glyphs(term)
        lo = clamp(0, position, len(self._body))
        hi = len(self._body) - len(needle)
        idx = seek(self._body, needle=needle, idxs=iter(range(lo, hi + 1)))
        return -1 if idx is None else idx

    def last_index_of(self, term: Any, position: Optional[int] = None) -> int:
        needle = self._glyphs(term)
        top = len(self._body) - len(needle)
        hi = top if position is None else min(max(position, 0), top)
        idx = seek(self._body, needle=needle, idxs=iter(range(hi, -1, -1)))
        return -1 if idx is None else idx

    def includes(self, term: Any, position: int = 0) -> bool:
        return self.index_of(term, position) != -1

    def starts_with(self, term: Any, position: int = 0) -> bool:
        needle = self._glyphs(term)
        idx = clamp(0, position, len(self._body))
        return aligned(self._body, needle=needle, idx=idx)

    def ends_with(self, term: Any, end_position: Optional[int] = None) -> bool:
        needle = self._glyphs(term)
        end = (
            len(self._body)
            if end_position is None
            else clamp(0, end_position, len(self._body))
        )
        return aligned(self._body, needle=needle, idx=end - len(needle))

    def split(
        self, separator: Separator = None, limit: Optional[int] = None
    ) -> Sequence[GraphemeString]:
        if limit is not None and limit <= 0:
            return ()
        elif separator is None:
            return (self._new(self._raw),)
        elif isinstance(separator, GlobalPattern) or not isinstance(
            separator, (str, GraphemeString)
        ):
            pattern = unwrap(separator)
            if limit is None:
                parts = pattern.split(self._raw)
            elif cuts := (limit - 1) // (1 + pattern.groups):
                parts = pattern.split(self._raw, maxsplit=cuts)
            else:
                parts = [self._raw]
            return tuple(map(self._new, parts))
        elif not (sep := self._glyphs(separator)):
            return tuple(map(self._new, islice(self._body, limit)))
        else:
            body = self._body

            def cont() -> Iterator[GraphemeString]:
                begin = idx = cuts = 0
                while idx < len(body) and (limit is None or cuts < limit - 1):
                    if aligned(body, needle=sep, idx=idx):
                        yield self._from(body[begin:idx])
                        cuts += 1
                        idx = begin = idx + len(sep)
                    else:
                        idx += 1
                yield self._from(body[begin:])

            return tuple(cont())

    def _padding(self, target: int, pad: Any) -> Sequence[str]:
        needed = target - len(self._body)
        glyphs = self._glyphs(pad)
        if needed <= 0 or not glyphs:
            return ()
        else:
            return tuple(islice(cycle(glyphs), needed))

    def pad_start(self, target: int, pad: Any = " ") -> GraphemeString:
        return self._from(chain(self._padding(target, pad=pad), self._body))

    def pad_end(self, target: int, pad: Any = " ") -> GraphemeString:
        return self._from(chain(self._body, self._padding(target, pad=pad)))

    def repeat(self, count: int) -> GraphemeString:
        if count < 0:
            raise ValueError(count)
        else:
            return self._new(self._raw * count)

    @overload
    def match(self, pattern: GlobalPattern) -> Sequence[GraphemeMatch]:
        ...

    @overload
    def match(self, pattern: AnyPattern) -> Optional[GraphemeMatch]:
        ...

    def match(
        self, pattern: Union[AnyPattern, GlobalPattern]
    ) -> Union[Sequence[GraphemeMatch], Optional[GraphemeMatch]]:
        if isinstance(pattern, GlobalPattern):
            return tuple(self.match_all(pattern))
        elif m := compiled(pattern).search(self._raw):
            return self._translate(m)
        else:
            return None

    def match_all(self, pattern: GlobalPattern) -> Iterator[GraphemeMatch]:
        if not isinstance(pattern, GlobalPattern):
            raise InvalidPattern("match_all() requires a glob() pattern")
        else:
            return (self._translate(m) for m in pattern.pattern.finditer(self._raw))

    def search(self, pattern: Union[AnyPattern, GlobalPattern]) -> int:
        if m := unwrap(pattern).search(self._raw):
            return self.grapheme_index(m.start())
        else:
            return -1

    def replace(self, pattern: Any, replacement: Any) -> GraphemeString:
        if isinstance(pattern, GlobalPattern):
            raise InvalidPattern("replace() takes one match, use replace_all()")
        elif isinstance(pattern, (str, GraphemeString)):
            expr = literal(str(pattern))
            return self._new(expr.sub(_verbatim(replacement), self._raw, count=1))
        else:
            return self._new(pattern.sub(_template(replacement), self._raw, count=1))

    def replace_all(self, pattern: Any, replacement: Any) -> GraphemeString:
        if isinstance(pattern, GlobalPattern):
            return self._new(pattern.pattern.sub(_template(replacement), self._raw))
        elif isinstance(pattern, (str, GraphemeString)):
            expr = literal(str(pattern))
            return self._new(expr.sub(_verbatim(replacement), self._raw))
        else:
            raise InvalidPattern("replace_all() takes a literal or a glob() pattern")

    def to_lower(self) -> GraphemeString:
        return self._new(self._raw.lower())

    def to_upper(self) -> GraphemeString:
        return self._new(self._raw.upper())

    def to_locale_lower(self, locale: Optional[str] = None) -> GraphemeString:
        return self._new(self.case_folder.lower(self._raw, locale=_locale(locale)))

    def to_locale_upper(self, locale: Optional[str] = None) -> GraphemeString:
        return self._new(self.case_folder.upper(self._raw, locale=_locale(locale)))

    def _trimmed(self, head: bool, tail: bool) -> Tuple[int, int]:
        lo, hi = 0, len(self._body)
        if head:
            while lo < hi and is_space(self._body[lo]):
                lo += 1
        if tail:
            while hi > lo and is_space(self._body[hi - 1]):
                hi -= 1
        return lo, hi

    def trim(self) -> GraphemeString:
        return self.slice(*self._trimmed(head=True, tail=True))

    def trim_start(self) -> GraphemeString:
        return self.slice(*self._trimmed(head=True, tail=False))

    def trim_end(self) -> GraphemeString:
        return self.slice(*self._trimmed(head=False, tail=True))

    def normalize(self, form: str = "NFC") -> GraphemeString:
        return self._new(_normalize(form, self._raw))

    def locale_compare(self, other: Any, locale: Optional[str] = None) -> int:
        return self.collator.compare(self._raw, _coerce(other), locale=_locale(locale))

    def concat(self, *others: Any) -> GraphemeString:
        return self._new(join("", chain((self._raw,), map(_coerce, others))))

    def __len__(self) -> int:
        return len(self._body)

    def __iter__(self) -> Iterator[str]:
        return iter(self._body)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self._body)

    def __getitem__(self, index: Union[int, slice]) -> GraphemeString:
        glyph = self._body[index]
        if isinstance(glyph, tuple):
            return self._from(glyph)
        else:
            return self._new(glyph)

    def __contains__(self, x: Any) -> bool:
        return self.includes(x)

    def __eq__(self, x: Any) -> bool:
        if isinstance(x, GraphemeString):
            return self._raw == x._raw
        elif isinstance(x, str):
            return self._raw == x
        else:
            return False

    def __hash__(self) -> int:
        return hash(self._raw)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"

    def __add__(self, x: Any) -> GraphemeString:
        if isinstance(x, (str, GraphemeString)):
            return self.concat(x)
        else:
            return NotImplemented

    def __radd__(self, x: Any) -> GraphemeString:
        if isinstance(x, str):
            return self._new(x + self._raw)
        else:
            return NotImplemented

    def __mul__(self, count: Any) -> GraphemeString:
        if isinstance(count, int):
            return self.repeat(count)
        else:
            return NotImplemented

    __rmul__ = __mul__


GraphemeString.init_segmenter(DEFAULT)
GraphemeString.init_case_folder(LocaleCaseFolder())
GraphemeString.init_collator(LocaleCollator())
