# spamfilter/dictionary.py
# Spam dictionary: words whose document frequency is much higher in spam than in ham.
# Built from TRAIN only and then reused unchanged to score every split.
#
# Counting is per document (a word counts once per message) both when building the
# dictionary and when scoring messages against it.

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import FrozenSet, Optional, Tuple

import pandas as pd

from .exceptions import DataInsufficiencyError, OrderingError
from .loader import HAM, LABELS, SPAM
from .tokenize import ENGLISH_STOPWORDS, StopwordSet, token_table, tokenize

logger = logging.getLogger(__name__)

DICTIONARY_FEATURE = "spam_words_count"


@dataclass(frozen=True)
class DictionaryEntry:
    word: str
    ham_frequency: float
    spam_frequency: float
    lift: float


@dataclass(frozen=True)
class SpamDictionary:
    entries: Tuple[DictionaryEntry, ...]
    min_token_length: int = 3
    stopwords: StopwordSet = ENGLISH_STOPWORDS

    @property
    def words(self) -> FrozenSet[str]:
        return frozenset(e.word for e in self.entries)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(e.word, e.ham_frequency, e.spam_frequency, e.lift) for e in self.entries],
            columns=["word", "ham_frequency", "spam_frequency", "lift"],
        )


def build_spam_dictionary(train: pd.DataFrame, size: int = 30,
                          stopwords: StopwordSet = ENGLISH_STOPWORDS,
                          min_length: int = 3) -> SpamDictionary:
    """Rank words seen in both classes by lift = P(word | spam) / P(word | ham), top `size`.

    `train` must hold TRAIN messages only; passing TEST rows here leaks them into the
    features used to score TEST.
    """
    total_docs = train["label"].value_counts().reindex(list(LABELS), fill_value=0)
    empty = [label for label in LABELS if total_docs[label] == 0]
    if empty:
        raise DataInsufficiencyError(f"no TRAIN messages labeled {empty}; word frequencies are undefined")

    tokens = token_table(train, stopwords, min_length).drop_duplicates(["message_id", "word"])
    if tokens.empty:
        logger.warning("TRAIN messages produced no tokens; spam dictionary is empty")
        return SpamDictionary((), min_length, stopwords)

    counts = (tokens.groupby(["word", "label"]).size()
              .unstack("label", fill_value=0)
              .reindex(columns=list(LABELS), fill_value=0))
    eligible = counts[(counts[HAM] > 0) & (counts[SPAM] > 0)]

    # rank on the exact ratio so equal lifts tie and fall back to the word
    n_ham, n_spam = int(total_docs[HAM]), int(total_docs[SPAM])
    ranked = sorted(
        ((Fraction(int(s) * n_ham, int(h) * n_spam), str(word), int(h), int(s))
         for word, h, s in zip(eligible.index, eligible[HAM], eligible[SPAM])),
        key=lambda r: (-r[0], r[1]),
    )[:size]

    entries = tuple(
        DictionaryEntry(word, h / n_ham, s / n_spam, float(lift))
        for lift, word, h, s in ranked
    )
    if len(entries) < size:
        logger.info("Only %d dictionary-eligible words (asked for %d)", len(entries), size)
    logger.info("Built spam dictionary: %d words from %d TRAIN messages (vocab=%d, eligible=%d)",
                len(entries), len(train), len(counts), len(eligible))
    return SpamDictionary(entries, min_length, stopwords)


def count_dictionary_words(text, dictionary: Optional[SpamDictionary]) -> int:
    """Number of distinct tokens of one message that are dictionary words."""
    if dictionary is None:
        raise OrderingError("spam dictionary has not been built; build it from TRAIN before scoring")
    words = dictionary.words
    return len({w for w in tokenize(text, dictionary.stopwords, dictionary.min_token_length) if w in words})


def dictionary_feature(messages: pd.DataFrame, dictionary: Optional[SpamDictionary]) -> pd.Series:
    """spam_words_count for every message, indexed by message_id; no match -> 0."""
    if dictionary is None:
        raise OrderingError("spam dictionary has not been built; build it from TRAIN before scoring")
    ids = pd.Index(messages["message_id"].to_numpy(), name="message_id")

    tokens = token_table(messages, dictionary.stopwords, dictionary.min_token_length)
    hits = tokens[tokens["word"].isin(dictionary.words)].drop_duplicates(["message_id", "word"])
    counts = hits.groupby("message_id").size()
    # explicit fill: messages without any dictionary word get 0, never NaN
    return counts.reindex(ids, fill_value=0).astype("int64").rename(DICTIONARY_FEATURE)
