from .casing import LocaleCaseFolder, LocaleCollator
from .grapheme import GraphemeString, join
from .logging import log
from .pattern import GlobalPattern, GraphemeMatch, glob
from .segmenter import RegexSegmenter, segment
from .types import (
    CaseFolder,
    Collator,
    GraphemeError,
    InvalidInput,
    InvalidPattern,
    Segmenter,
    grapheme,
)

__version__ = "0.1.0"
