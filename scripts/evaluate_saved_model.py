#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Evaluate a saved feature + logistic regression bundle on another labeled CSV.
- Loads model.pkl (joblib ModelBundle written by run_baseline.py)
- Rebuilds features with the bundle's TRAIN dictionary and pattern set (no refit)
- Uses threshold: CLI --threshold > bundle config > 0.5
- Saves metrics_eval.json and preds_eval.csv

Usage:
  python scripts/evaluate_saved_model.py \
    --csv data/other_sms.csv \
    --model outputs/sms/model.pkl \
    --outdir outputs/sms_eval
"""

import argparse, json, logging
from pathlib import Path

import pandas as pd

from spamfilter import assemble_features, evaluate, load_model, read_corpus_csv, score
from spamfilter.exceptions import SpamFilterError
from spamfilter.features import LABEL_COLUMN


def pick_threshold(cli_threshold, bundle):
    if cli_threshold is not None:
        return float(cli_threshold), "cli"
    if bundle.config is not None:
        return float(bundle.config.decision_threshold), "model.pkl"
    return 0.5, "default_0.5"


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", required=True, help="label,text CSV (or UCI SMSSpamCollection TSV)")
    ap.add_argument("--model", required=True, help="Path to model.pkl (joblib)")
    ap.add_argument("--outdir", required=True, help="Directory to write evaluation artifacts")
    ap.add_argument("--threshold", type=float, default=None, help="Decision threshold override")
    ap.add_argument("--label-col", default="label")
    ap.add_argument("--text-col", default="text")
    ap.add_argument("--encoding", default="utf-8")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    try:
        bundle = load_model(args.model)
        corpus = read_corpus_csv(args.csv, args.label_col, args.text_col, encoding=args.encoding)
        table = assemble_features(corpus, bundle.dictionary, bundle.patterns)
    except (SpamFilterError, TypeError) as e:
        raise SystemExit(f"error: {e}")

    scores = score(bundle.model, table)
    thr, source = pick_threshold(args.threshold, bundle)

    m = evaluate(table[LABEL_COLUMN], scores, thr)
    metrics = {"threshold_source": source, **m.to_dict()}
    Path(outdir, "metrics_eval.json").write_text(json.dumps(metrics, indent=2), encoding="utf-8")
    pd.DataFrame({"message_id": table.index, "proba": scores, "label": table[LABEL_COLUMN].to_numpy()}) \
        .to_csv(Path(outdir, "preds_eval.csv"), index=False)

    print("\n=== EVALUATION DONE ===")
    print(json.dumps(metrics, indent=2))
    print(f"\nArtifacts written to: {outdir.resolve()}")


if __name__ == "__main__":
    main()
