# spamfilter/features.py
# Model-facing feature table: pattern features + spam_words_count + is_spam label.

from typing import Optional, Tuple

import pandas as pd

from .dictionary import DICTIONARY_FEATURE, SpamDictionary, dictionary_feature
from .loader import SPAM
from .patterns import DEFAULT_PATTERNS, PatternSet, pattern_columns, pattern_feature_table

LABEL_COLUMN = "is_spam"


def feature_columns(patterns: PatternSet = DEFAULT_PATTERNS):
    return pattern_columns(patterns) + [DICTIONARY_FEATURE]


def assemble_features(messages: pd.DataFrame, dictionary: Optional[SpamDictionary],
                      patterns: PatternSet = DEFAULT_PATTERNS) -> pd.DataFrame:
    """One row per message, indexed by message_id; text and id are not columns.

    The same `dictionary` (built from TRAIN) must be passed for every split.
    """
    pattern_part = pattern_feature_table(messages, patterns)
    dict_part = dictionary_feature(messages, dictionary)
    label = pd.Series((messages["label"] == SPAM).astype("int64").to_numpy(),
                      index=pattern_part.index, name=LABEL_COLUMN)

    table = pattern_part.join(dict_part, how="left").join(label, how="left")
    table[DICTIONARY_FEATURE] = table[DICTIONARY_FEATURE].fillna(0).astype("int64")
    table = table[feature_columns(patterns) + [LABEL_COLUMN]]

    if table.isna().any().any():
        # join keys come from the same message table, so this means a duplicate/missing id
        raise ValueError("feature table has missing values; message ids must be unique")
    return table


def split_xy(table: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    return table.drop(columns=[LABEL_COLUMN]), table[LABEL_COLUMN]
