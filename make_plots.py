# make_plots.py
# Usage: python make_plots.py --run outputs/sms
# Reads preds.csv, metrics.json, coefficients.csv written by run_baseline.py.

import argparse, json
from pathlib import Path

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from sklearn.metrics import roc_curve, auc, ConfusionMatrixDisplay


def plot_roc(y_true, y_score, out):
    fpr, tpr, _ = roc_curve(y_true, y_score)
    roc_auc = auc(fpr, tpr)
    plt.figure()
    plt.plot(fpr, tpr, lw=2)
    plt.plot([0, 1], [0, 1], "--", alpha=.6)
    plt.xlabel("FPR"); plt.ylabel("TPR"); plt.title(f"ROC Curve (AUC={roc_auc:.3f})")
    plt.grid(True, alpha=.3); plt.tight_layout()
    plt.savefig(out, dpi=160); plt.close()


def plot_confusion(cm, thr, out):
    disp = ConfusionMatrixDisplay(confusion_matrix=cm, display_labels=["ham", "spam"])
    disp.plot(values_format="d", cmap="Blues")
    plt.title(f"Confusion Matrix (test) @ thr={thr:.2f}")
    plt.tight_layout()
    plt.savefig(out, dpi=160); plt.close()


def plot_coefficients(coefs: pd.DataFrame, out):
    # intercept is left out: it is on a different scale from the per-feature effects
    c = coefs.drop(index="(Intercept)", errors="ignore").sort_values("estimate")
    err = 1.96 * c["std_error"].to_numpy()
    fig, ax = plt.subplots(figsize=(7, 4.5))
    ax.barh(c.index, c["estimate"], xerr=err, color=np.where(c["p_value"] < 0.05, "tab:red", "tab:gray"))
    ax.axvline(0, color="black", lw=1)
    ax.set_xlabel("log-odds coefficient (95% CI)"); ax.set_title("Logistic regression coefficients")
    fig.tight_layout()
    fig.savefig(out, dpi=160); plt.close(fig)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--run", required=True, help="output folder of run_baseline.py")
    ap.add_argument("--outdir", default=None, help="defaults to --run")
    args = ap.parse_args()

    run = Path(args.run)
    outdir = Path(args.outdir) if args.outdir else run
    outdir.mkdir(parents=True, exist_ok=True)

    df = pd.read_csv(run / "preds.csv")
    with open(run / "metrics.json", "r", encoding="utf-8") as f:
        m = json.load(f)
    coefs = pd.read_csv(run / "coefficients.csv", index_col="term")

    if df["label"].nunique() == 2:
        plot_roc(df["label"].to_numpy(), df["proba"].to_numpy(), outdir / "roc_curve.png")

    cm = np.array(m.get("confusion_matrix"))
    if cm.size:
        plot_confusion(cm, m["config"]["decision_threshold"], outdir / "confusion_matrix.png")

    plot_coefficients(coefs, outdir / "coefficients.png")
    print(f"Saved figures to {outdir}")


if __name__ == "__main__":
    main()
