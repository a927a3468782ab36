"""Shared corpora for the spamfilter tests."""

import numpy as np
import pandas as pd
import pytest

from spamfilter import PipelineConfig, load_corpus

HAM_WORDS = [
    "meeting", "dinner", "tonight", "lunch", "tomorrow", "mum", "office", "sorry", "thanks", "home",
    "movie", "birthday", "class", "library", "coffee", "weekend", "kitchen", "dog", "garden", "bus",
]
# more spam-leaning words than the default dictionary size (30)
SPAM_WORDS = [
    "prize", "claim", "winner", "cash", "urgent", "offer", "award", "mobile", "reply", "bonus",
    "jackpot", "voucher", "ringtone", "guaranteed", "selected", "congratulations", "txt", "entry",
    "draw", "tone", "discount", "unsubscribe", "subscription", "credit", "loan", "deal", "exclusive",
    "reward", "lottery", "premium", "gift", "promo", "password", "account", "verify",
]


def make_corpus(n=400, seed=0) -> pd.DataFrame:
    """Overlapping ham/spam messages; no single feature separates the classes.

    Digit strings are random and also appear in class-independent filler, so
    numbers_count does not pin down which patterns a message carries.
    """
    rng = np.random.RandomState(seed)
    rows = []
    for i in range(n):
        spam = rng.rand() < 0.4
        own, other = (SPAM_WORDS, HAM_WORDS) if spam else (HAM_WORDS, SPAM_WORDS)
        words = [rng.choice(own) if rng.rand() < 0.75 else rng.choice(other) for _ in range(5)]
        lean = 0.3 if spam else 0.1
        if rng.rand() < lean:
            words.append("http://win.example.com/x")
        if rng.rand() < lean:
            words.append(f"${rng.randint(1, 100)}")
        if rng.rand() < lean:
            words.append(f"ring {rng.randint(100, 1000)}{rng.randint(100, 1000)}{rng.randint(1000, 10000)}")
        if rng.rand() < (0.05 if spam else 0.2):
            words.append(":)")
        if rng.rand() < 0.15:
            words.append(f"on {rng.randint(1, 29)}/{rng.randint(1, 13)}")
        if rng.rand() < 0.1:
            words.append("info@example.com")
        if rng.rand() < 0.4:
            words.append(f"room {rng.randint(1, 100)}")
        rows.append(("spam" if spam else "ham", " ".join(words)))
    return pd.DataFrame(rows, columns=["label", "text"])


@pytest.fixture
def corpus():
    return load_corpus(make_corpus())


@pytest.fixture
def scenario_corpus():
    return load_corpus(pd.DataFrame([
        ("ham", "Call me later"),
        ("spam", "WIN a FREE prize, claim now http://x.co"),
        ("ham", "See you at 5pm"),
        ("spam", "URGENT reply STOP to opt out"),
    ], columns=["label", "text"]))


@pytest.fixture
def config():
    return PipelineConfig()
