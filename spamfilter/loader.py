# spamfilter/loader.py
# Corpus ingest (label,text rows -> message table) and the seeded train/test split.

import csv
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet

import pandas as pd
from sklearn.model_selection import train_test_split

from .config import PipelineConfig
from .exceptions import DataInsufficiencyError, SchemaError

logger = logging.getLogger(__name__)

HAM, SPAM = "ham", "spam"
LABELS = (HAM, SPAM)
CORPUS_COLUMNS = ["message_id", "label", "text"]


def load_corpus(frame: pd.DataFrame, label_col="label", text_col="text") -> pd.DataFrame:
    """Validate a rows-of-(label, text) table and assign dense ids by row order."""
    if frame is None or len(frame) == 0:
        raise SchemaError("corpus is empty")
    missing = [c for c in (label_col, text_col) if c not in frame.columns]
    if missing:
        raise SchemaError(f"corpus is missing column(s) {missing}; got {list(frame.columns)}")

    labels = frame[label_col].astype(str).str.strip().str.lower()
    bad = sorted(set(labels[~labels.isin(LABELS)]))
    if bad:
        raise SchemaError(f"unrecognized labels in {label_col!r}: {bad[:10]}")

    # missing text is an empty message, not an error
    text = frame[text_col].where(frame[text_col].notna(), "").astype(str)

    corpus = pd.DataFrame({
        "message_id": range(len(frame)),
        "label": labels.to_numpy(),
        "text": text.to_numpy(),
    })
    counts = corpus["label"].value_counts()
    logger.info("Loaded %d messages (ham=%d, spam=%d)",
                len(corpus), counts.get(HAM, 0), counts.get(SPAM, 0))
    return corpus


def read_corpus_csv(path, label_col="label", text_col="text", encoding="utf-8") -> pd.DataFrame:
    """Read a labeled corpus from disk.

    Accepts a ``label,text`` CSV, the Kaggle export of the UCI SMS corpus
    (``v1,v2`` columns, latin-1) or the raw tab-separated ``SMSSpamCollection``.
    """
    path = Path(path)
    if path.suffix.lower() in ("", ".tsv", ".txt"):
        df = pd.read_csv(path, sep="\t", header=None, names=[label_col, text_col],
                         quoting=csv.QUOTE_NONE, encoding=encoding)
    else:
        try:
            df = pd.read_csv(path, encoding=encoding)
        except UnicodeDecodeError:
            logger.warning("%s is not %s, retrying as latin-1", path, encoding)
            df = pd.read_csv(path, encoding="ISO-8859-1")
        df = df.rename(columns={"v1": label_col, "v2": text_col})
        df.columns = [str(c).strip().lower() for c in df.columns]
        label_col, text_col = label_col.lower(), text_col.lower()
    return load_corpus(df, label_col=label_col, text_col=text_col)


@dataclass(frozen=True)
class Split:
    train_ids: FrozenSet[int]
    test_ids: FrozenSet[int]

    def train(self, corpus: pd.DataFrame) -> pd.DataFrame:
        return corpus[corpus["message_id"].isin(self.train_ids)]

    def test(self, corpus: pd.DataFrame) -> pd.DataFrame:
        return corpus[corpus["message_id"].isin(self.test_ids)]


def split_corpus(corpus: pd.DataFrame, config: PipelineConfig) -> Split:
    """Deterministic seeded TRAIN/TEST partition of message ids."""
    n = len(corpus)
    # TRAIN gets floor(fraction * n) messages, TEST the rest
    n_train = math.floor(config.split_fraction * n)
    n_test = n - n_train
    if n_train < 1 or n_test < 1:
        raise DataInsufficiencyError(
            f"split_fraction={config.split_fraction} leaves an empty split for {n} messages"
        )

    ids = corpus["message_id"].to_numpy()
    labels = corpus["label"].to_numpy()
    n_classes = corpus["label"].nunique()
    stratify = None
    if config.stratify:
        if (n_classes == 2 and corpus["label"].value_counts().min() >= 2
                and min(n_train, n_test) >= n_classes):
            stratify = labels
        else:
            logger.warning("Too few messages per class or per split to stratify; using a plain random split")

    train_ids, test_ids = train_test_split(
        ids, train_size=n_train, random_state=config.split_seed, stratify=stratify
    )
    split = Split(frozenset(int(i) for i in train_ids), frozenset(int(i) for i in test_ids))
    logger.info("Split %d messages -> train=%d test=%d (seed=%d)",
                len(ids), len(split.train_ids), len(split.test_ids), config.split_seed)
    return split
