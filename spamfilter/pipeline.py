# spamfilter/pipeline.py
# split -> dictionary (TRAIN) -> features (TRAIN, TEST) -> fit (TRAIN) -> score/evaluate both

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .config import PipelineConfig
from .dictionary import SpamDictionary, build_spam_dictionary
from .evaluate import Metrics, evaluate
from .features import LABEL_COLUMN, assemble_features
from .loader import Split, split_corpus
from .model import FittedModel, ModelBundle, fit, score
from .patterns import DEFAULT_PATTERNS, PatternSet
from .tokenize import ENGLISH_STOPWORDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    config: PipelineConfig
    patterns: PatternSet
    split: Split
    dictionary: SpamDictionary
    train_table: pd.DataFrame
    test_table: pd.DataFrame
    model: FittedModel
    train_proba: np.ndarray
    test_proba: np.ndarray
    train_metrics: Metrics
    test_metrics: Metrics

    def bundle(self) -> ModelBundle:
        return ModelBundle(self.model, self.dictionary, self.patterns, self.config)

    def predictions(self) -> pd.DataFrame:
        """TEST predictions: message_id, proba, label."""
        return pd.DataFrame({
            "message_id": self.test_table.index,
            "proba": self.test_proba,
            "label": self.test_table[LABEL_COLUMN].to_numpy(),
        })


def run_pipeline(corpus: pd.DataFrame, config: PipelineConfig = None,
                 patterns: PatternSet = DEFAULT_PATTERNS) -> PipelineResult:
    config = config or PipelineConfig()
    split = split_corpus(corpus, config)
    train, test = split.train(corpus), split.test(corpus)

    # dictionary is final before any TEST row is touched
    dictionary = build_spam_dictionary(train, size=config.dictionary_size,
                                       stopwords=ENGLISH_STOPWORDS,
                                       min_length=config.min_token_length)

    train_table = assemble_features(train, dictionary, patterns)
    test_table = assemble_features(test, dictionary, patterns)

    model = fit(train_table, config)
    train_proba = score(model, train_table)
    test_proba = score(model, test_table)

    t = config.decision_threshold
    train_metrics = evaluate(train_table[LABEL_COLUMN], train_proba, t)
    test_metrics = evaluate(test_table[LABEL_COLUMN], test_proba, t)
    logger.info("train: acc=%.4f auc=%.4f | test: acc=%.4f auc=%.4f",
                train_metrics.accuracy, train_metrics.roc_auc,
                test_metrics.accuracy, test_metrics.roc_auc)

    return PipelineResult(config, patterns, split, dictionary, train_table, test_table,
                          model, train_proba, test_proba, train_metrics, test_metrics)
