# spamfilter/evaluate.py
# Confusion-matrix metrics at a fixed threshold + threshold-free ROC-AUC.

import logging
from dataclasses import dataclass, asdict

import numpy as np
from sklearn.metrics import (
    accuracy_score, confusion_matrix, f1_score, precision_score, recall_score, roc_auc_score
)

logger = logging.getLogger(__name__)


def classify(probabilities, threshold: float = 0.5) -> np.ndarray:
    """1 (spam) iff p >= threshold; a score exactly at the threshold is spam."""
    return (np.asarray(probabilities, dtype=float) >= threshold).astype(int)


@dataclass(frozen=True)
class Metrics:
    threshold: float
    n: int
    TP: int
    FP: int
    TN: int
    FN: int
    accuracy: float
    precision: float
    recall: float
    f1: float
    roc_auc: float

    def to_dict(self) -> dict:
        return asdict(self)


def roc_auc(y_true, probabilities) -> float:
    """P(random spam scores above random ham), ties counted half. NaN if a class is absent."""
    y_true = np.asarray(y_true).astype(int)
    if len(np.unique(y_true)) < 2:
        logger.warning("ROC-AUC undefined: only one class present in y_true")
        return float("nan")
    return float(roc_auc_score(y_true, probabilities))


def evaluate(y_true, probabilities, threshold: float = 0.5) -> Metrics:
    y_true = np.asarray(y_true).astype(int)
    y_pred = classify(probabilities, threshold)
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
    return Metrics(
        threshold=float(threshold),
        n=int(len(y_true)),
        TP=int(tp), FP=int(fp), TN=int(tn), FN=int(fn),
        accuracy=float(accuracy_score(y_true, y_pred)) if len(y_true) else float("nan"),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        roc_auc=roc_auc(y_true, probabilities),
    )
