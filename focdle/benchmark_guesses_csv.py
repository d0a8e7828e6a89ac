#!/usr/bin/env python3
"""
Play the solver on random FoCdle games and write a CSV for guess
distribution analysis.

Usage:
    focdle-bench --difficulty 9 --games 100 --out focdle_guess_bench.csv
"""

import argparse
import csv
import random
from pathlib import Path

from .config import CONFIG
from .focdle_env import create_secret
from .focdle_guesser import create_guess
from .focdle_oracle import FrequencyOracle
from .focdle_search import SearchExhausted
from .focdle_sim import play_game

FIELDNAMES = ["game_idx", "difficulty", "secret", "guesses_used", "solved", "guesses"]


def run_guess_benchmark(difficulty: int, num_games: int, out_path: Path, seed: int) -> None:
    rng = random.Random(seed)
    oracle = FrequencyOracle.from_samples(rng=random.Random(seed))

    def guess_fn(history, length):
        return create_guess(history, length, oracle=oracle, rng=rng)

    rows = []
    solved_count = 0
    total_guesses = 0

    for i in range(num_games):
        secret = create_secret(difficulty, rng)
        try:
            result = play_game(secret, guess_fn)
            guesses = result.guesses
            solved = int(result.solved)
        except SearchExhausted as e:
            print(f"[bench] game {i}: {e}")
            guesses = []
            solved = 0

        solved_count += solved
        total_guesses += len(guesses)

        rows.append({
            "game_idx": i,
            "difficulty": difficulty,
            "secret": secret,
            "guesses_used": len(guesses),
            "solved": solved,
            "guesses": " ".join(guesses),
        })

        if (i + 1) % 10 == 0:
            print(f"[bench] finished {i+1}/{num_games} games")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(rows)

    avg_guesses = total_guesses / num_games if num_games > 0 else 0.0
    solve_rate = solved_count / num_games if num_games > 0 else 0.0

    print(f"[bench] wrote {out_path}")
    print(f"[bench] avg_guesses={avg_guesses:.3f}, solve_rate={solve_rate*100:.1f}% "
          f"over {num_games} games")


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark solver guess distribution on random FoCdle games."
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        default=7,
        help="Secret length (7-15).",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=100,
        help="Number of games to play.",
    )
    parser.add_argument(
        "--out",
        type=str,
        default="focdle_guess_bench.csv",
        help="Output CSV filename.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=CONFIG["random_seed"],
        help="Random seed for secrets and tie-breaking.",
    )
    args = parser.parse_args()

    run_guess_benchmark(args.difficulty, args.games, Path(args.out), args.seed)


if __name__ == "__main__":
    main()
