# spamfilter/patterns.py
# Deterministic per-message features: character/digit counts and regex pattern flags.
# Nothing here looks at labels or at other messages, so TRAIN and TEST are treated identically.

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

import pandas as pd

PATTERNS_VERSION = "2"

# Heuristics; they only have to be consistent between fit and scoring.
URL = r"(?:https?://\S+|www\.\S+|\b[\w-]+\.(?:com|net|org|co|uk|biz|info)(?:/\S*)?\b)"
DATE = (r"\b\d{1,2}[/.-]\d{1,2}(?:[/.-]\d{2,4})?\b"
        r"|\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+\d{1,2}(?:st|nd|rd|th)?\b"
        r"|\b\d{1,2}(?:st|nd|rd|th)?\s+(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\b")
DOLLAR = r"[$£€]\s?\d"
EMOTICON = r"(?:(?<![\w/])[:;=][\-o\*']?[\)\]\(\[dDpP/\\|]|<3|\^_\^|\b[xX][dD]\b)"
EMAIL = r"\b[\w\.-]+@[\w\.-]+\.\w+\b"
PHONE = (r"(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b"
         r"|\b0\d{4}\s?\d{6}\b")


@dataclass(frozen=True)
class PatternMatcher:
    name: str
    pattern: str
    flags: int = re.IGNORECASE

    def __post_init__(self):
        # compiled once; frozen dataclass so go through object.__setattr__
        object.__setattr__(self, "_regex", re.compile(self.pattern, self.flags))

    @property
    def column(self) -> str:
        return f"has_{self.name}"

    def matches(self, text: str) -> bool:
        return bool(text) and self._regex.search(text) is not None


@dataclass(frozen=True)
class PatternSet:
    """Named, versioned set of matchers. Column order follows matcher order."""
    version: str
    matchers: Tuple[PatternMatcher, ...]

    def __post_init__(self):
        names = [m.name for m in self.matchers]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate matcher names in pattern set: {names}")

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(m.name for m in self.matchers)

    def with_matcher(self, matcher: PatternMatcher, version: str = None) -> "PatternSet":
        return PatternSet(version or f"{self.version}+{matcher.name}", self.matchers + (matcher,))


DEFAULT_PATTERNS = PatternSet(PATTERNS_VERSION, (
    PatternMatcher("url", URL),
    PatternMatcher("date", DATE),
    PatternMatcher("dollar", DOLLAR),
    PatternMatcher("emoticon", EMOTICON, flags=0),
    PatternMatcher("email", EMAIL),
    PatternMatcher("phone", PHONE),
))


def pattern_columns(patterns: PatternSet = DEFAULT_PATTERNS):
    return ["char_count", "has_numbers", "numbers_count"] + [m.column for m in patterns.matchers]


def _as_text(text) -> str:
    # None / NaN / non-strings count as an empty message
    return text if isinstance(text, str) else ""


def extract_pattern_features(text, patterns: PatternSet = DEFAULT_PATTERNS) -> dict:
    text = _as_text(text)
    digits = sum(ch.isdigit() for ch in text)
    row = {
        "char_count": len(text),
        "has_numbers": int(digits > 0),
        "numbers_count": digits,
    }
    for m in patterns.matchers:
        row[m.column] = int(m.matches(text))
    return row


def pattern_feature_table(messages: pd.DataFrame, patterns: PatternSet = DEFAULT_PATTERNS) -> pd.DataFrame:
    """One row of pattern features per message, indexed by message_id."""
    rows: Iterable[dict] = (extract_pattern_features(t, patterns) for t in messages["text"])
    table = pd.DataFrame(list(rows), columns=pattern_columns(patterns),
                         index=pd.Index(messages["message_id"].to_numpy(), name="message_id"))
    return table.astype("int64")
