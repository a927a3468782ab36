# scripts/prepare_sms_csv.py
# Fetch the UCI SMS Spam corpus from the Hugging Face hub and write label,text CSV.
# Usage: python scripts/prepare_sms_csv.py [out.csv]
import csv, re, sys
from pathlib import Path

from datasets import load_dataset

OUT = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("data/sms_spam.csv")
OUT.parent.mkdir(parents=True, exist_ok=True)

LABELS = {0: "ham", 1: "spam"}


def clean(s):
    return re.sub(r"\s+", " ", (s or "")).strip()


def main():
    ds = load_dataset("ucirvine/sms_spam")   # columns: sms, label (0=ham,1=spam)

    rows = []
    for split in ("train", "test", "validation"):
        if split not in ds:
            continue
        for r in ds[split]:
            rows.append([LABELS[int(r["label"])], clean(r["sms"])])

    with OUT.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["label", "text"])
        w.writerows(rows)

    print(f"Wrote {len(rows)} rows -> {OUT}")


if __name__ == "__main__":
    main()
