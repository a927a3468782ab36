# run_baseline.py
# Usage:
#   python run_baseline.py --csv data/sms_spam.csv --outdir outputs/sms
#   python run_baseline.py --csv data/SMSSpamCollection --outdir outputs/sms_k50 --dictionary-size 50
# Engineered features (patterns + spam dictionary) -> logistic regression.
# Saves: metrics.json, coefficients.csv, dictionary.csv, preds.csv,
#        features_train.csv, features_test.csv, model.pkl

import argparse, json, logging
from pathlib import Path

import pandas as pd

from spamfilter import PipelineConfig, read_corpus_csv, run_pipeline, save_model
from spamfilter.exceptions import SpamFilterError


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", required=True, help="label,text CSV (or UCI SMSSpamCollection TSV)")
    ap.add_argument("--outdir", default="outputs/run")
    ap.add_argument("--label-col", default="label")
    ap.add_argument("--text-col", default="text")
    ap.add_argument("--encoding", default="utf-8")
    ap.add_argument("--log-level", default="INFO")
    PipelineConfig.add_arguments(ap)
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    outdir = Path(args.outdir); outdir.mkdir(parents=True, exist_ok=True)

    try:
        config = PipelineConfig.from_args(args)
        corpus = read_corpus_csv(args.csv, args.label_col, args.text_col, encoding=args.encoding)
        res = run_pipeline(corpus, config)
    except SpamFilterError as e:
        raise SystemExit(f"error: {e}")

    # tables
    res.model.coefficient_table().to_csv(outdir / "coefficients.csv", encoding="utf-8")
    res.dictionary.to_frame().to_csv(outdir / "dictionary.csv", index=False, encoding="utf-8")
    res.predictions().to_csv(outdir / "preds.csv", index=False, encoding="utf-8")
    res.train_table.to_csv(outdir / "features_train.csv", encoding="utf-8")
    res.test_table.to_csv(outdir / "features_test.csv", encoding="utf-8")
    save_model(res.bundle(), outdir / "model.pkl")

    metrics = {
        "model": "logreg_features",
        "config": config.to_dict(),
        "patterns_version": res.patterns.version,
        "n_train": len(res.split.train_ids),
        "n_test": len(res.split.test_ids),
        "dictionary_words": [e.word for e in res.dictionary],
        "train": res.train_metrics.to_dict(),
        "test": res.test_metrics.to_dict(),
        "confusion_matrix": [[res.test_metrics.TN, res.test_metrics.FP],
                             [res.test_metrics.FN, res.test_metrics.TP]],
    }
    (outdir / "metrics.json").write_text(json.dumps(metrics, indent=2), encoding="utf-8")

    with open(outdir / "metrics.txt", "w", encoding="utf-8") as f:
        f.write(f"Threshold: {config.decision_threshold:.2f}\n\n")
        f.write(pd.DataFrame({"train": res.train_metrics.to_dict(),
                              "test": res.test_metrics.to_dict()}).to_string())
        f.write("\n\n==== coefficients ====\n")
        f.write(res.model.coefficient_table().to_string())

    print(pd.DataFrame({"train": res.train_metrics.to_dict(), "test": res.test_metrics.to_dict()}))
    print(f"\nSaved outputs to: {outdir}")
    print(f"Next: python make_plots.py --run {outdir}")


if __name__ == "__main__":
    main()
