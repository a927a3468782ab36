# spamfilter/model.py
# Unpenalized logistic regression over the assembled feature table, plus Wald statistics
# so coefficients can be read the way a glm summary reads.

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

import joblib
import numpy as np
import pandas as pd
from scipy.special import expit
from scipy.stats import norm
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression

from .config import PipelineConfig
from .dictionary import SpamDictionary
from .exceptions import DataInsufficiencyError, FitDivergenceError
from .features import split_xy
from .patterns import PatternSet

logger = logging.getLogger(__name__)

INTERCEPT = "(Intercept)"


@dataclass(frozen=True)
class FittedModel:
    feature_names: Tuple[str, ...]
    coefficients: Dict[str, float]
    intercept: float
    std_errors: Dict[str, float]
    n_iter: int = 0

    def coefficient_table(self) -> pd.DataFrame:
        """estimate / std_error / z_value / p_value per term, intercept first."""
        terms = [INTERCEPT] + list(self.feature_names)
        est = np.array([self.intercept] + [self.coefficients[f] for f in self.feature_names])
        se = np.array([self.std_errors[t] for t in terms])
        with np.errstate(divide="ignore", invalid="ignore"):
            z = est / se
        p = 2 * norm.sf(np.abs(z))
        return pd.DataFrame({"estimate": est, "std_error": se, "z_value": z, "p_value": p},
                            index=pd.Index(terms, name="term"))


def _wald_std_errors(X: np.ndarray, beta: np.ndarray) -> np.ndarray:
    # observed information X'WX at the optimum; pinv keeps collinear columns reportable
    Xd = np.column_stack([np.ones(len(X)), X])
    p = expit(Xd @ beta)
    info = Xd.T @ (Xd * (p * (1 - p))[:, None])
    cov = np.linalg.pinv(info)
    return np.sqrt(np.clip(np.diag(cov), 0, None))


def fit(train_table: pd.DataFrame, config: PipelineConfig = None) -> FittedModel:
    """Fit P(spam) = expit(b0 + X.b) on TRAIN rows. All feature columns enter the model."""
    config = config or PipelineConfig()
    X, y = split_xy(train_table)
    if y.nunique() < 2:
        raise DataInsufficiencyError(f"TRAIN has a single class ({sorted(y.unique())}); cannot fit")

    Xv = X.to_numpy(dtype=float)
    # C=inf turns the default l2 penalty off (penalty=None is deprecated from scikit-learn 1.8)
    clf = LogisticRegression(C=np.inf, solver=config.solver, max_iter=config.max_iter)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        clf.fit(Xv, y.to_numpy())

    for w in caught:
        if issubclass(w.category, ConvergenceWarning):
            raise FitDivergenceError(
                f"logistic regression did not converge ({config.solver}, max_iter={config.max_iter}): {w.message}"
            )
        logger.warning("fit: %s", w.message)

    beta = np.concatenate([clf.intercept_, clf.coef_.ravel()])
    se = _wald_std_errors(Xv, beta)
    names = tuple(X.columns)
    model = FittedModel(
        feature_names=names,
        coefficients={n: float(b) for n, b in zip(names, beta[1:])},
        intercept=float(beta[0]),
        std_errors={t: float(s) for t, s in zip((INTERCEPT,) + names, se)},
        n_iter=int(np.max(clf.n_iter_)),
    )
    logger.info("Fitted logistic regression on %d rows x %d features in %d iterations",
                len(Xv), len(names), model.n_iter)
    return model


def score(model: FittedModel, table: pd.DataFrame) -> np.ndarray:
    """P(spam) per row. Columns are matched by name; a label column, if present, is ignored."""
    X = table[list(model.feature_names)].to_numpy(dtype=float)
    coef = np.array([model.coefficients[f] for f in model.feature_names])
    return expit(model.intercept + X @ coef)


@dataclass(frozen=True)
class ModelBundle:
    """Everything needed to score new messages exactly as TRAIN was scored."""
    model: FittedModel
    dictionary: SpamDictionary
    patterns: PatternSet
    config: PipelineConfig


def save_model(bundle: ModelBundle, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(bundle, path)
    return path


def load_model(path) -> ModelBundle:
    bundle = joblib.load(path)
    if not isinstance(bundle, ModelBundle):
        raise TypeError(f"{path} does not contain a ModelBundle (got {type(bundle).__name__})")
    return bundle
