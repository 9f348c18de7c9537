from typing import Iterator, Literal, Optional, Sequence

_Encoding = Literal["UTF-8", "UTF-16-LE", "UTF-32-LE"]


def encode(text: str, encoding: _Encoding = "UTF-8") -> bytes:
    return text.encode(encoding, errors="surrogatepass")


def decode(btext: bytes, encoding: _Encoding = "UTF-8") -> str:
    return btext.decode(encoding, errors="surrogateescape")


def utf16_len(text: str) -> int:
    return len(encode(text, encoding="UTF-16-LE")) // 2


_SPACE = frozenset(
    "\t\n\v\f\r \u00a0\u1680\u2028\u2029\u202f\u205f\u3000\ufeff"
    + "".join(map(chr, range(0x2000, 0x200B)))
)


def is_space(glyph: str) -> bool:
    return bool(glyph) and all(char in _SPACE for char in glyph)


def clamp(lo: int, x: int, hi: int) -> int:
    return min(max(lo, x), hi)


def aligned(body: Sequence[str], needle: Sequence[str], idx: int) -> bool:
    if idx < 0 or idx + len(needle) > len(body):
        return False
    else:
        return all(body[idx + i] == glyph for i, glyph in enumerate(needle))


def seek(
    body: Sequence[str], needle: Sequence[str], idxs: Iterator[int]
) -> Optional[int]:
    for idx in idxs:
        if aligned(body, needle=needle, idx=idx):
            return idx
    else:
        return None
