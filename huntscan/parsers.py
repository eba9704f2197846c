"""
Field Parsers

Turn recognized text into typed field values.

Every parser is total: malformed input, no match and out-of-range values
all return None. Nothing here raises on bad text.
"""

import re
from typing import Iterable, List, Optional, Tuple

# Level range accepted by default (the game's level ceiling)
DEFAULT_MIN_LEVEL = 1
DEFAULT_MAX_LEVEL = 300

EXP_MAX = 100.0          # exclusive
COUNTER_MAX = 20         # inclusive
GAUGE_MAX = 1000         # exclusive
FRAGMENT_MAX = 99999     # inclusive

# Grouped/bare currency values below this are treated as noise
CURRENCY_FLOOR = 1000

HUNDRED_MILLION = 100_000_000
TEN_THOUSAND = 10_000

# "억" is often read as "역" (and occasionally "의")
_HUNDRED_MILLION_GLYPHS = "억역의"
_TEN_THOUSAND_GLYPH = "만"

FRAGMENT_KEYWORDS = ("조각", "fragment")

_ZERO_CONFUSION_RE = re.compile(r"(?<=\d)[Oo]|[Oo](?=\d)")
# Only between digits: a misread "[" before a number must not become "1"
_ONE_CONFUSION_RE = re.compile(r"(?<=\d)[Il|](?=\d)")

_LEVEL_RES = [
    re.compile(r"[Ll][Vv][.\s]*(\d+)"),
    # "Lv" misread as roman numerals: "LⅥ287", "LVI287"
    re.compile(r"[Ll][vVⅥⅤI]+[.\s]*(\d+)"),
    re.compile(r"레벨\s*(\d{2,3})"),
]

_EXP_DECIMAL_RE = re.compile(r"(?<![\d.])(\d{1,3}\.\d+)\s*%")
_EXP_INTEGER_RE = re.compile(r"(?<![\d.])(\d{1,2})\s*%")
# No percent sign: number right after the label
_EXP_KEYWORD_RE = re.compile(r"(?:EXP|경험치)[:\s]*(\d+(?:\.\d+)?)(?![\d.])", re.IGNORECASE)

_CURRENCY_UNIT_RE = re.compile(
    rf"(?<!\d)"
    rf"(?:(?P<eok>\d{{1,2}})\s*[{_HUNDRED_MILLION_GLYPHS}]\s*)?"
    rf"(?:(?P<man>\d{{1,4}})\s*{_TEN_THOUSAND_GLYPH}\s*)?"
    rf"(?P<rest>\d{{1,4}})?(?!\d)"
)
# "26 7758만 6006": hundred-million glyph dropped entirely
_CURRENCY_NO_EOK_RE = re.compile(
    rf"(?<!\d)(\d{{1,2}})\s+(\d{{1,4}})\s*{_TEN_THOUSAND_GLYPH}\s*(\d{{1,4}})(?!\d)"
)
_COMMA_GROUPED_RE = re.compile(r"(?<![\d,])(\d{1,3}(?:,\d{3})+)(?!\d)")
_DIGIT_RUN_RE = re.compile(r"\d+")

_COUNTER_RE = re.compile(r"(?<![\d/,.])(\d{1,2})(?![\d,.])(?!\s*/)")
_GAUGE_RE = re.compile(r"(?<![\d,])(\d{1,4})\s*/\s*1[,.]?000(?!\d)")

_NUMBER = r"(?<![\d,])(\d{1,3}(?:,\d{3})+|\d+)(?!\d)"
_NUMBER_RE = re.compile(_NUMBER)
_FRAGMENT_KEYWORD_RES = [
    re.compile(r"조각\s*[:：]?\s*" + _NUMBER),
    re.compile(_NUMBER + r"\s*(?:개\s*)?조각"),
    re.compile(r"fragments?\s*:?\s*" + _NUMBER, re.IGNORECASE),
    re.compile(_NUMBER + r"\s*fragments?", re.IGNORECASE),
]


def normalize_digits(text: str) -> str:
    """
    Fix common OCR letter/digit confusions next to digits.

    "O"/"o" becomes 0 when touching a digit. "I"/"l"/"|" becomes 1 only
    between two digits, since a bracket in front of a number is often read
    as one of those. Labels such as "Lv" are left alone.
    """
    text = _ZERO_CONFUSION_RE.sub("0", text)
    return _ONE_CONFUSION_RE.sub("1", text)


def _to_int(digits: str) -> Optional[int]:
    try:
        return int(digits.replace(",", ""))
    except ValueError:
        return None


def parse_level(
    text: Optional[str],
    min_level: int = DEFAULT_MIN_LEVEL,
    max_level: int = DEFAULT_MAX_LEVEL,
) -> Optional[int]:
    """
    Parse a level label: "Lv.287", "LV287", "Lv 300".

    Falls back to roman-numeral misreads of the label ("LⅥ287") and to the
    Korean label ("레벨 287").

    Args:
        text: Recognized text
        min_level: Lowest valid level
        max_level: Highest valid level (game ceiling)

    Returns:
        Level, or None if missing or outside [min_level, max_level]
    """
    if not text:
        return None
    text = normalize_digits(text)
    for pattern in _LEVEL_RES:
        match = pattern.search(text)
        if match is None:
            continue
        level = _to_int(match.group(1))
        if level is not None and min_level <= level <= max_level:
            return level
    return None


def parse_exp_percent(text: Optional[str]) -> Optional[float]:
    """
    Parse an experience percentage: "67.432%" or, failing that, "50%".

    Without a percent sign, a number right after an "EXP"/"경험치" label
    is taken instead ("EXP: 45.2").

    Returns:
        Percentage in [0, 100), or None
    """
    if not text:
        return None
    text = normalize_digits(text)
    for pattern in (_EXP_DECIMAL_RE, _EXP_INTEGER_RE, _EXP_KEYWORD_RE):
        for match in pattern.finditer(text):
            value = float(match.group(1))
            if 0.0 <= value < EXP_MAX:
                return value
    return None


def _unit_candidates(text: str) -> List[int]:
    values = []
    for match in _CURRENCY_UNIT_RE.finditer(text):
        eok, man, rest = match.group("eok"), match.group("man"), match.group("rest")
        if eok is None and man is None:
            continue
        values.append(
            int(eok or 0) * HUNDRED_MILLION + int(man or 0) * TEN_THOUSAND + int(rest or 0)
        )

    for match in _CURRENCY_NO_EOK_RE.finditer(text):
        eok, man, rest = (int(g) for g in match.groups())
        if 1 <= eok <= 99:
            values.append(eok * HUNDRED_MILLION + man * TEN_THOUSAND + rest)
    return values


def _largest_plausible(values: Iterable[Optional[int]]) -> Optional[int]:
    plausible = [v for v in values if v is not None and v >= CURRENCY_FLOOR]
    return max(plausible) if plausible else None


def parse_currency(text: Optional[str]) -> Optional[int]:
    """
    Parse a currency amount.

    Tried in order, the first form that yields a value wins:
      1. Unit grouping: "25억 2758만 6086" (억 may be read as 역/의)
      2. Comma grouping: "2,527,586,086"
      3. Bare digit run: "2527586086"
    Within a form the largest candidate is taken. Forms 2 and 3 require
    at least CURRENCY_FLOOR to filter stray digits.

    Returns:
        Amount, or None
    """
    if not text:
        return None
    text = normalize_digits(text)

    units = _unit_candidates(text)
    if units:
        return max(units)

    grouped = _largest_plausible(_to_int(m.group(1)) for m in _COMMA_GROUPED_RE.finditer(text))
    if grouped is not None:
        return grouped

    return _largest_plausible(_to_int(m.group(0)) for m in _DIGIT_RUN_RE.finditer(text))


def parse_counter(text: Optional[str]) -> Optional[int]:
    """
    Parse the counter: a 1-2 digit number in [0, 20].

    The numerator of an "x/1000" gauge is never taken as the counter.
    """
    if not text:
        return None
    match = _COUNTER_RE.search(normalize_digits(text))
    if match is None:
        return None
    value = int(match.group(1))
    return value if 0 <= value <= COUNTER_MAX else None


def parse_gauge(text: Optional[str]) -> Optional[int]:
    """
    Parse the gauge: the number before "/1000" ("348/1000", "348 / 1,000").

    Returns:
        Gauge in [0, 1000), or None
    """
    if not text:
        return None
    match = _GAUGE_RE.search(normalize_digits(text))
    if match is None:
        return None
    value = int(match.group(1))
    return value if 0 <= value < GAUGE_MAX else None


def parse_counter_gauge(text: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """Parse counter and gauge from the same region text ("19 348/1000")."""
    return parse_counter(text), parse_gauge(text)


def _fragment_in_range(value: Optional[int]) -> Optional[int]:
    if value is not None and 0 <= value <= FRAGMENT_MAX:
        return value
    return None


def parse_fragments(text: Optional[str]) -> Optional[int]:
    """
    Parse a fragment count in [0, 99999]; commas are tolerated.

    A number next to a fragment keyword ("조각 41", "41 조각",
    "Fragment: 41") is preferred, then the first number on a line that
    mentions the keyword, then the first number in the text.
    """
    if not text:
        return None
    text = normalize_digits(text)

    for pattern in _FRAGMENT_KEYWORD_RES:
        for match in pattern.finditer(text):
            value = _fragment_in_range(_to_int(match.group(1)))
            if value is not None:
                return value

    for line in text.splitlines():
        lowered = line.lower()
        if any(keyword in lowered for keyword in FRAGMENT_KEYWORDS):
            match = _NUMBER_RE.search(line)
            if match is not None:
                value = _fragment_in_range(_to_int(match.group(1)))
                if value is not None:
                    return value

    match = _NUMBER_RE.search(text)
    if match is None:
        return None
    return _fragment_in_range(_to_int(match.group(1)))
