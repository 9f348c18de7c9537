from __future__ import annotations

from dataclasses import dataclass
from re import Match, Pattern
from typing import Any, Callable, Sequence, Tuple, Union

from regex import compile, escape

AnyPattern = Union[str, Pattern]
Replacement = Union[str, Callable[[Match], str]]


@dataclass(frozen=True)
class GlobalPattern:
    pattern: Pattern


@dataclass(frozen=True)
class GraphemeMatch:
    match: Match
    index: int
    end: int

    @property
    def span(self) -> Tuple[int, int]:
        return self.match.span()

    @property
    def text(self) -> str:
        return self.match.group()

    def group(self, *groups: Union[int, str]) -> Any:
        return self.match.group(*groups)

    def groups(self, default: Any = None) -> Sequence[Any]:
        return self.match.groups(default)

    def __getitem__(self, group: Union[int, str]) -> Any:
        return self.match.group(group)


def compiled(pattern: AnyPattern, flags: int = 0) -> Pattern:
    if isinstance(pattern, str):
        return compile(pattern, flags)
    else:
        return pattern


def literal(text: str) -> Pattern:
    return compile(escape(text))


def glob(pattern: AnyPattern, flags: int = 0) -> GlobalPattern:
    return GlobalPattern(pattern=compiled(pattern, flags=flags))


def unwrap(pattern: Union[AnyPattern, GlobalPattern]) -> Pattern:
    if isinstance(pattern, GlobalPattern):
        return pattern.pattern
    else:
        return compiled(pattern)
