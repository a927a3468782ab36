"""Spam/ham classification from engineered message features and a TRAIN-derived spam dictionary."""

from .config import PipelineConfig
from .dictionary import (
    DictionaryEntry, SpamDictionary, build_spam_dictionary, count_dictionary_words, dictionary_feature
)
from .evaluate import Metrics, classify, evaluate
from .exceptions import (
    ConfigError, DataInsufficiencyError, FitDivergenceError, OrderingError, SchemaError, SpamFilterError
)
from .features import LABEL_COLUMN, assemble_features, feature_columns
from .loader import Split, load_corpus, read_corpus_csv, split_corpus
from .model import FittedModel, ModelBundle, fit, load_model, save_model, score
from .patterns import DEFAULT_PATTERNS, PatternMatcher, PatternSet, extract_pattern_features
from .pipeline import PipelineResult, run_pipeline
from .tokenize import ENGLISH_STOPWORDS, StopwordSet, tokenize

__version__ = "0.1.0"
