import json
import runpy
import sys
from pathlib import Path

import pandas as pd
import pytest

from spamfilter import run_pipeline, save_model

from conftest import make_corpus

EVALUATE = Path(__file__).resolve().parents[1] / "scripts" / "evaluate_saved_model.py"


@pytest.fixture
def saved_model(corpus, config, tmp_path):
    return save_model(run_pipeline(corpus, config).bundle(), tmp_path / "run" / "model.pkl")


def run_script(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", [str(EVALUATE), *argv])
    runpy.run_path(str(EVALUATE), run_name="__main__")


def test_evaluate_saved_model_with_custom_columns(monkeypatch, saved_model, tmp_path):
    other = make_corpus(n=120, seed=5).rename(columns={"label": "category", "text": "message"})
    csv_path = tmp_path / "other.csv"
    other.to_csv(csv_path, index=False)

    outdir = tmp_path / "eval"
    run_script(monkeypatch, "--csv", str(csv_path), "--model", str(saved_model), "--outdir", str(outdir),
               "--label-col", "category", "--text-col", "message")

    metrics = json.loads((outdir / "metrics_eval.json").read_text(encoding="utf-8"))
    assert metrics["n"] == 120
    assert metrics["threshold_source"] == "model.pkl"
    assert len(pd.read_csv(outdir / "preds_eval.csv")) == 120


def test_evaluate_saved_model_reports_bad_labels(monkeypatch, saved_model, tmp_path):
    csv_path = tmp_path / "bad.csv"
    csv_path.write_text("label,text\nmaybe,hello\n", encoding="utf-8")
    with pytest.raises(SystemExit, match="error: unrecognized labels"):
        run_script(monkeypatch, "--csv", str(csv_path), "--model", str(saved_model),
                   "--outdir", str(tmp_path / "eval"))
