#!/usr/bin/env python3
"""
Play FoCdle secrets with the solver, or benchmark it per difficulty.

Usage:
    focdle "1+1+1=3" "12+34*2=80"
    focdle --bench 7 8 9 --secrets 10 --repeats 10
    focdle --dump-oracle freq.json
"""

import argparse
import random
import sys

from .config import CONFIG
from .focdle_env import is_valid_secret
from .focdle_guesser import create_guess
from .focdle_oracle import FrequencyOracle
from .focdle_search import SearchExhausted
from .focdle_sim import benchmark_difficulty, play_game


def build_oracle(source, seed: int, verbose: bool) -> FrequencyOracle:
    if source:
        return FrequencyOracle.from_json(source, verbose=verbose)
    return FrequencyOracle.from_samples(rng=random.Random(seed), verbose=verbose)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Solve FoCdle equations from feedback alone."
    )
    parser.add_argument(
        "secrets",
        nargs="*",
        help="Secret equations to play, e.g. 1+1+1=3.",
    )
    parser.add_argument(
        "--bench",
        type=int,
        nargs="+",
        default=None,
        help="Benchmark these difficulties (7-15) on random secrets.",
    )
    parser.add_argument(
        "--secrets",
        dest="num_secrets",
        type=int,
        default=10,
        help="Random secrets per benchmarked difficulty.",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=10,
        help="Games played per benchmark secret.",
    )
    parser.add_argument(
        "--oracle",
        type=str,
        default=CONFIG.get("oracle_source"),
        help="Frequency table JSON path or URL (default: sample random secrets).",
    )
    parser.add_argument(
        "--dump-oracle",
        type=str,
        default=None,
        help="Write the frequency table for all difficulties to this JSON file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=CONFIG["random_seed"],
        help="Random seed for secrets and tie-breaking.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=CONFIG.get("verbose", False),
        help="Print solver internals.",
    )
    args = parser.parse_args(argv)

    if not args.secrets and args.bench is None and args.dump_oracle is None:
        parser.print_help()
        return 0

    oracle = build_oracle(args.oracle, args.seed, args.verbose)
    rng = random.Random(args.seed)

    if args.dump_oracle:
        oracle.to_json(args.dump_oracle)
        print(f"[main] wrote frequency table to {args.dump_oracle}")

    def guess_fn(history, difficulty):
        return create_guess(history, difficulty, oracle=oracle, rng=rng, verbose=args.verbose)

    status = 0
    for secret in args.secrets:
        if not is_valid_secret(secret):
            print(f"Error: invalid secret {secret!r}")
            status = 1
            continue

        print(f"secret {secret}:")
        try:
            result = play_game(secret, guess_fn, verbose=True)
        except SearchExhausted as e:
            print(f"[main] Error: {e}")
            status = 1
            continue
        if result.solved:
            print(f"SOLVED in {result.num_guesses} guesses!\n")
        else:
            print(f"Failed after {result.num_guesses} guesses.\n")
            status = 1

    for difficulty in args.bench or []:
        try:
            benchmark_difficulty(
                difficulty,
                num_secrets=args.num_secrets,
                repeats=args.repeats,
                rng=rng,
                oracle=oracle,
                verbose=True,
            )
        except (SearchExhausted, ValueError) as e:
            print(f"[main] Error: {e}")
            status = 1
        print()

    return status


if __name__ == "__main__":
    sys.exit(main())
