"""
Text normalization shared by the matchers and the similarity detector.

Organization keys, date-phrase tokens and whole-term matching live here so
every comparison sees the same canonical forms.
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, List, Optional

# Organizations are compared on their leading words only; "Acme Corporation"
# and "Acme Inc, Seattle WA" both key to "acme". Raising this trades recall
# for precision on generically named companies.
ORG_KEY_WORDS = 1

MONTH_TOKENS = MappingProxyType({
    "jan": "01", "january": "01",
    "feb": "02", "february": "02",
    "mar": "03", "march": "03",
    "apr": "04", "april": "04",
    "may": "05",
    "jun": "06", "june": "06",
    "jul": "07", "july": "07",
    "aug": "08", "august": "08",
    "sep": "09", "sept": "09", "september": "09",
    "oct": "10", "october": "10",
    "nov": "11", "november": "11",
    "dec": "12", "december": "12",
})

_YEAR_RE = re.compile(r"^(19|20)\d{2}$")
_NUMERIC_MONTH_RE = re.compile(r"^\d{1,2}$")
_NON_ALNUM_RE = re.compile(r"[^0-9A-Za-z]+")


def normalize_text(s: Optional[str]) -> str:
    if not s:
        return ""
    return " ".join(s.strip().lower().split())


def normalize_organization(name: Optional[str], key_words: int = ORG_KEY_WORDS) -> str:
    """Canonical comparison key for an employer name.

    Drops everything after the first comma (usually a location qualifier),
    lowercases and keeps the first ``key_words`` words. Blank input gives "".
    """
    if not name:
        return ""
    head = name.split(",", 1)[0]
    words = head.strip().lower().split()
    return " ".join(words[:max(key_words, 1)])


def _month_token(token: str) -> Optional[str]:
    if token in MONTH_TOKENS:
        return MONTH_TOKENS[token]
    if _NUMERIC_MONTH_RE.match(token):
        value = int(token)
        if 1 <= value <= 12:
            return f"{value:02d}"
    return None


def normalize_date_phrase(phrase: Optional[str]) -> List[str]:
    """Reduce a free-text date range to its year and month tokens.

    Months come back as two-digit numbers so "March 2019" and "2019-03"
    produce the same multiset. Anything unrecognised is dropped.
    """
    if not phrase or not isinstance(phrase, str):
        return []
    tokens = []
    for raw in _NON_ALNUM_RE.sub(" ", phrase).lower().split():
        if _YEAR_RE.match(raw):
            tokens.append(raw)
            continue
        month = _month_token(raw)
        if month is not None:
            tokens.append(month)
    return tokens


def extract_years(phrases: Iterable[Optional[str]]) -> List[int]:
    years = []
    for phrase in phrases or []:
        years.extend(int(t) for t in normalize_date_phrase(phrase) if len(t) == 4)
    return years


@lru_cache(maxsize=None)
def term_pattern(term: str) -> "re.Pattern[str]":
    # \b fails next to symbols, so "C#" and ".NET" need explicit lookarounds
    return re.compile(r"(?<!\w)" + re.escape(term.lower()) + r"(?!\w)")


def contains_term(text: Optional[str], term: str) -> bool:
    """Whole-term, case-insensitive containment check."""
    if not text or not term:
        return False
    return term_pattern(term).search(text.lower()) is not None
