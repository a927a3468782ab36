import numpy as np

from spamfilter import PipelineConfig, run_pipeline
from spamfilter.tokenize import tokenize


def test_pipeline_generalizes(corpus, config):
    res = run_pipeline(corpus, config)
    assert res.test_metrics.n == len(res.split.test_ids)
    assert res.train_metrics.n == len(res.split.train_ids)
    assert res.test_metrics.roc_auc > 0.8
    assert len(res.dictionary) <= config.dictionary_size


def test_dictionary_comes_from_train_messages(corpus, config):
    res = run_pipeline(corpus, config)
    train = corpus[corpus["message_id"].isin(res.split.train_ids)]
    train_words = {w for t in train["text"] for w in tokenize(t)}
    assert res.dictionary.words <= train_words


def test_pipeline_is_idempotent(corpus):
    config = PipelineConfig(split_seed=3)
    a, b = run_pipeline(corpus, config), run_pipeline(corpus, config)
    assert a.split == b.split
    assert a.dictionary == b.dictionary
    for name, coef in a.model.coefficients.items():
        assert np.isclose(coef, b.model.coefficients[name])
    assert a.test_metrics == b.test_metrics


def test_predictions_frame(corpus, config):
    preds = run_pipeline(corpus, config).predictions()
    assert list(preds.columns) == ["message_id", "proba", "label"]
    assert set(preds["label"]) == {0, 1}
