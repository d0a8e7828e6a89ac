#!/usr/bin/env python3
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import CONFIG
from .focdle_env import FeedbackEntry, create_secret, feedback_to_string, set_colors
from .focdle_guesser import create_guess
from .focdle_oracle import default_oracle

MAX_GUESSES = CONFIG["max_guesses"]

GuessFunction = Callable[[List[List[FeedbackEntry]], int], str]


@dataclass
class GameResult:
    secret: str
    guesses: List[str] = field(default_factory=list)
    solved: bool = False

    @property
    def num_guesses(self) -> int:
        return len(self.guesses)


def play_game(
    secret: str,
    guess_fn: Optional[GuessFunction] = None,
    max_guesses: int = MAX_GUESSES,
    verbose: bool = False,
) -> GameResult:
    """
    Play one FoCdle game against `secret`: ask for a guess, score it,
    append the feedback and repeat until the secret is hit or
    `max_guesses` is used up.
    """
    if guess_fn is None:
        guess_fn = create_guess

    result = GameResult(secret)
    history: List[List[FeedbackEntry]] = []

    for guess_num in range(1, max_guesses + 1):
        guess = guess_fn(history, len(secret))
        result.guesses.append(guess)

        if guess == secret:
            result.solved = True
            if verbose:
                print(f"[sim] Guess {guess_num}: {guess}  solved!")
            return result

        row = set_colors(secret, guess)
        if verbose:
            print(f"[sim] Guess {guess_num}: {guess}  Feedback: {feedback_to_string(row)}")
        history.append(row)

    if verbose:
        print(f"[sim] Failed to find {secret} within {max_guesses} guesses.")
    return result


def summarize(results: List[GameResult]) -> Dict[str, object]:
    counts = [r.num_guesses for r in results if r.solved]
    failed = sum(1 for r in results if not r.solved)
    return {
        "games": len(results),
        "failed": failed,
        "average": sum(counts) / len(counts) if counts else 0.0,
        "max": max(counts) if counts else 0,
        "min": min(counts) if counts else 0,
        "distribution": dict(sorted(Counter(counts).items())),
    }


def benchmark_difficulty(
    difficulty: int,
    num_secrets: int = 10,
    repeats: int = 10,
    rng: Optional[random.Random] = None,
    oracle=None,
    verbose: bool = False,
) -> Dict[str, object]:
    """
    Play `repeats` games on each of `num_secrets` random secrets and
    report average / max / min guesses plus the guess distribution.
    """
    if rng is None:
        rng = random.Random(CONFIG["random_seed"])
    if oracle is None:
        oracle = default_oracle()

    def guess_fn(history, length):
        return create_guess(history, length, oracle=oracle, rng=rng)

    results = []
    for _ in range(num_secrets):
        secret = create_secret(difficulty, rng)
        for _ in range(repeats):
            results.append(play_game(secret, guess_fn))

    summary = summarize(results)
    if verbose:
        print(f"[bench] Difficulty {difficulty}")
        print(f"[bench] average: {summary['average']:.2f}")
        print(f"[bench] max: {summary['max']}")
        print(f"[bench] min: {summary['min']}")
        for count, times in summary["distribution"].items():
            print(f"[bench] {count} = {times}")
        if summary["failed"]:
            print(f"[bench] failed: {summary['failed']}")
    return summary
