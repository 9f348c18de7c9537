import pytest
from regex import compile

from gcstring import GraphemeString, InvalidPattern, glob

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467\u200d\U0001F466"
THUMB = "\U0001F44D\U0001F3FD"
WAVE = "\U0001F44B"


def test_replace_literal():
    assert GraphemeString("a.b.c").replace(".", "-") == "a-b.c"
    assert GraphemeString("ab").replace("b", r"\g<0>") == r"a\g<0>"
    assert GraphemeString("abc").replace("z", "-") == "abc"


def test_replace_pattern():
    s = GraphemeString("a.b.c")
    assert s.replace(compile(r"\."), "-") == "a-b.c"
    assert s.replace(compile(r"(\w)\."), r"<\1>") == "<a>b.c"


def test_replace_callable():
    s = GraphemeString("x21y")
    doubled = s.replace(compile(r"\d+"), lambda m: str(int(m.group()) * 2))
    assert doubled == "x42y"
    assert s.replace("x", lambda m: m.group().upper()) == "X21y"


def test_replace_rejects_global():
    with pytest.raises(InvalidPattern):
        GraphemeString("aa").replace(glob("a"), "b")


def test_replace_resegments():
    s = GraphemeString(f"{FAMILY}Hello").replace("Hello", WAVE)
    assert s == f"{FAMILY}{WAVE}"
    assert len(s) == 2


def test_replace_all():
    assert GraphemeString("a.b.c").replace_all(".", "-") == "a-b-c"
    assert GraphemeString("ab").replace_all(glob(r"(\w)"), r"<\1>") == "<a><b>"
    s = GraphemeString(THUMB * 2).replace_all(THUMB, "X")
    assert s == "XX"
    assert len(s) == 2


def test_replace_all_rejects_single_pattern():
    with pytest.raises(InvalidPattern):
        GraphemeString("aa").replace_all(compile("a"), "b")


def test_case():
    assert GraphemeString("Stra\u00dfe").to_upper() == "STRASSE"
    assert GraphemeString("\u00c9COLE").to_lower() == "\u00e9cole"
    assert GraphemeString(f"{FAMILY}Hi").to_upper() == f"{FAMILY}HI"


def test_locale_case():
    assert GraphemeString("i").to_locale_upper("tr") == "\u0130"
    assert GraphemeString("I").to_locale_lower("tr-TR") == "\u0131"
    assert GraphemeString("\u0130").to_locale_lower("az") == "i"
    assert GraphemeString("I").to_locale_lower() == "i"
    assert GraphemeString("i").to_locale_upper("en_US") == "I"


def test_injected_case_folder():
    class Shouting:
        def lower(self, text, locale):
            return text.upper()

        def upper(self, text, locale):
            return f"{text.upper()}!"

    class Loud(GraphemeString):
        ...

    Loud.init_case_folder(Shouting())
    assert Loud("hi").to_locale_upper() == "HI!"
    assert Loud("hi").to_locale_lower("en") == "HI"
    assert GraphemeString("hi").to_locale_upper() == "HI"


def test_trim():
    s = GraphemeString(f"\u3000 \t{WAVE} hi\r\n ")
    assert s.trim() == f"{WAVE} hi"
    assert s.trim_start() == f"{WAVE} hi\r\n "
    assert s.trim_end() == f"\u3000 \t{WAVE} hi"


def test_trim_all_whitespace():
    assert GraphemeString("  \r\n\t").trim() == ""
    assert GraphemeString("").trim() == ""


def test_trim_keeps_combined_space():
    s = GraphemeString(" \u0301x")
    assert s.trim() == s


def test_normalize():
    s = GraphemeString("e\u0301")
    assert s.normalize() == "\u00e9"
    assert s.normalize().code_unit_length == 1
    assert GraphemeString("\u00e9").normalize("NFD").code_unit_length == 2
    assert len(GraphemeString("\u00e9").normalize("NFD")) == 1
    with pytest.raises(ValueError):
        s.normalize("NFX")


def test_locale_compare():
    s = GraphemeString("a")
    assert s.locale_compare("b") < 0
    assert GraphemeString("b").locale_compare(GraphemeString("a")) > 0
    assert s.locale_compare("a") == 0


def test_locale_compare_unknown_locale(caplog):
    assert GraphemeString("a").locale_compare("b", "xx_NOWHERE") < 0
    assert "unknown collation locale" in caplog.text


def test_injected_collator():
    class Backwards:
        def compare(self, lhs, rhs, locale):
            return (lhs < rhs) - (lhs > rhs)

    class Reversed(GraphemeString):
        ...

    Reversed.init_collator(Backwards())
    assert Reversed("a").locale_compare("b") == 1
    assert GraphemeString("a").locale_compare("b") == -1


def test_replace_with_grapheme_string():
    assert GraphemeString("a.b").replace(".", GraphemeString(WAVE)) == f"a{WAVE}b"
    assert GraphemeString("a.b").replace(compile(r"\."), GraphemeString("-")) == "a-b"
    assert GraphemeString("a.b.c").replace_all(".", GraphemeString(THUMB)).length == 5
    assert GraphemeString("ab").replace_all(glob(r"\w"), GraphemeString("x")) == "xx"


def test_trim_whitespace_set():
    assert GraphemeString("\ufeff x\u2003\ufeff").trim() == "x"
    assert GraphemeString("\u00a0 x\u202f").trim() == "x"
    assert GraphemeString("\r\nx\r\n").trim() == "x"
    s = GraphemeString("\x1cx\x1f")
    assert s.trim() == s
    assert GraphemeString("\u200bx").trim_start() == "\u200bx"
