import pandas as pd
import pytest

from spamfilter import (
    DataInsufficiencyError, PipelineConfig, SchemaError, load_corpus, read_corpus_csv, split_corpus,
)
from spamfilter.exceptions import ConfigError


def test_load_assigns_dense_ids_and_normalizes_labels():
    c = load_corpus(pd.DataFrame({"label": [" Spam", "HAM", "ham"], "text": ["a", None, "c"]}))
    assert list(c["message_id"]) == [0, 1, 2]
    assert list(c["label"]) == ["spam", "ham", "ham"]
    assert c.loc[1, "text"] == ""


@pytest.mark.parametrize("frame", [
    pd.DataFrame({"label": [], "text": []}),
    pd.DataFrame({"label": ["spam", "junk"], "text": ["a", "b"]}),
    pd.DataFrame({"label": ["spam"], "body": ["a"]}),
])
def test_load_rejects_bad_schema(frame):
    with pytest.raises(SchemaError):
        load_corpus(frame)


def test_read_csv_and_uci_tsv(tmp_path):
    csv_path = tmp_path / "sms.csv"
    csv_path.write_text('label,text\nham,"hi, there"\nspam,win cash\n', encoding="utf-8")
    c = read_corpus_csv(csv_path)
    assert list(c["text"]) == ["hi, there", "win cash"]

    tsv_path = tmp_path / "SMSSpamCollection"
    tsv_path.write_text('ham\tsay "hi"\nspam\twin cash\n', encoding="utf-8")
    c = read_corpus_csv(tsv_path)
    assert list(c["label"]) == ["ham", "spam"]
    assert c.loc[0, "text"] == 'say "hi"'


def test_split_is_deterministic_disjoint_and_exhaustive(corpus, config):
    a = split_corpus(corpus, config)
    b = split_corpus(corpus, config)
    assert a == b
    assert a.train_ids.isdisjoint(a.test_ids)
    assert a.train_ids | a.test_ids == set(corpus["message_id"])
    assert len(a.train_ids) == len(corpus) // 2


def test_split_depends_on_seed(corpus):
    a = split_corpus(corpus, PipelineConfig(split_seed=1))
    b = split_corpus(corpus, PipelineConfig(split_seed=2))
    assert a.train_ids != b.train_ids


@pytest.mark.parametrize("kwargs", [
    {"split_fraction": 0.0}, {"split_fraction": 1.0}, {"dictionary_size": 0},
    {"min_token_length": 0}, {"decision_threshold": 1.0}, {"solver": "sag"},
])
def test_config_validation(kwargs):
    with pytest.raises(ConfigError):
        PipelineConfig(**kwargs)


def test_kaggle_export_falls_back_to_latin1(tmp_path):
    path = tmp_path / "spam.csv"
    path.write_bytes(b"v1,v2\nham,caf\xe9 tonight\nspam,win \xa3100 now\n")
    c = read_corpus_csv(path)
    assert list(c["label"]) == ["ham", "spam"]
    assert list(c["text"]) == ["café tonight", "win £100 now"]


def test_split_too_small_to_stratify_falls_back(scenario_corpus):
    split = split_corpus(scenario_corpus, PipelineConfig(split_fraction=0.25))
    assert len(split.train_ids) == 1
    assert len(split.test_ids) == 3
    assert split.train_ids | split.test_ids == set(scenario_corpus["message_id"])


def test_split_leaving_an_empty_side_is_rejected(scenario_corpus):
    with pytest.raises(DataInsufficiencyError):
        split_corpus(scenario_corpus, PipelineConfig(split_fraction=0.1))
