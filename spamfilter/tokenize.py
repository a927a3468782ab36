# spamfilter/tokenize.py
# Word tokens for the spam dictionary: lowercase, >= min_length chars, English stopwords removed.

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterator

import pandas as pd
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

TOKEN_RE = re.compile(r"(?u)\b\w+\b")


@dataclass(frozen=True)
class StopwordSet:
    version: str
    words: FrozenSet[str]

    def __contains__(self, word) -> bool:
        return word in self.words

    def __len__(self):
        return len(self.words)


# same list as TfidfVectorizer(stop_words="english")
ENGLISH_STOPWORDS = StopwordSet("sklearn-english", frozenset(ENGLISH_STOP_WORDS))


def tokenize(text, stopwords: StopwordSet = ENGLISH_STOPWORDS, min_length: int = 3) -> Iterator[str]:
    if not isinstance(text, str):
        return
    for match in TOKEN_RE.finditer(text.lower()):
        word = match.group(0)
        if len(word) >= min_length and word not in stopwords:
            yield word


def token_table(messages: pd.DataFrame, stopwords: StopwordSet = ENGLISH_STOPWORDS,
                min_length: int = 3) -> pd.DataFrame:
    """One row per token occurrence, joined back to the message id and label."""
    rows = [
        (mid, label, word)
        for mid, label, text in zip(messages["message_id"], messages["label"], messages["text"])
        for word in tokenize(text, stopwords, min_length)
    ]
    return pd.DataFrame(rows, columns=["message_id", "label", "word"])
