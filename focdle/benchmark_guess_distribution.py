#!/usr/bin/env python3
"""
Make a bar chart of how many games were solved in 1, 2, ... guesses
(or failed), using the CSV written by benchmark_guesses_csv.py.
"""

import argparse
import csv
from collections import Counter
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402


def load_guess_csv(path):
    rows = []
    with Path(path).open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            row["guesses_used"] = int(row["guesses_used"])
            row["solved"] = int(row["solved"])
            rows.append(row)
    return rows


def guess_counts(rows):
    """Ordered (label, count) bins: 1..longest solved game, then "fail"."""
    counts = Counter()
    for r in rows:
        if r["solved"]:
            counts[r["guesses_used"]] += 1
        else:
            counts["fail"] += 1

    longest = max((k for k in counts if k != "fail"), default=0)
    labels = list(range(1, longest + 1)) + ["fail"]
    return [(str(label), counts[label]) for label in labels]


def plot_distribution(csv_path="focdle_guess_bench.csv", out_path="focdle_guess_distribution.png"):
    rows = load_guess_csv(csv_path)
    bins = guess_counts(rows)

    plt.figure()
    plt.bar([label for label, _ in bins], [count for _, count in bins])
    plt.xlabel("Guesses used (fail = not solved)")
    plt.ylabel("Number of games")
    plt.title("FoCdle solver: distribution of guesses per game")
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()
    print(f"Wrote {out_path}")


def main():
    parser = argparse.ArgumentParser(
        description="Plot the guess distribution from a benchmark CSV."
    )
    parser.add_argument("--csv", type=str, default="focdle_guess_bench.csv")
    parser.add_argument("--png", type=str, default="focdle_guess_distribution.png")
    args = parser.parse_args()

    plot_distribution(args.csv, args.png)


if __name__ == "__main__":
    main()
