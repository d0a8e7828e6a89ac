#!/usr/bin/env python3
"""
focdle_guesser.py

Turns a feedback history into the next FoCdle guess.

One Guesser lives for exactly one guess:
  - no history yet      -> fill the opening template for the difficulty
  - otherwise           -> rebuild the constraint index, pin down '=',
                           then either probe for information or solve
"""

import random
from typing import List, Optional

from .config import CONFIG
from .focdle_constraints import ConstraintIndex
from .focdle_env import CHARS, DIGITS, EQUALITY, OPS, FeedbackEntry, check_difficulty
from .focdle_oracle import default_oracle
from .focdle_search import Chooser, ProbeSearch, SearchPlan, SolveSearch

INITIAL_TEMPLATES = CONFIG["initial_templates"]
EQUALITY_CAP: int = CONFIG.get("equality_cap", 8)
MODULO_FROM: int = CONFIG.get("modulo_from", 8)
ALL_OPERATORS_FROM: int = CONFIG.get("all_operators_from", 13)
NINE_FROM: int = CONFIG.get("nine_from", 14)


class Guesser:
    """
    Interface to the search for a single guess.
    """

    def __init__(
        self,
        difficulty: int,
        history: List[List[FeedbackEntry]],
        oracle=None,
        rng: Optional[random.Random] = None,
        verbose: bool = False,
    ):
        check_difficulty(difficulty)
        for row in history:
            if len(row) != difficulty:
                raise ValueError(
                    f"feedback row of length {len(row)} given for difficulty {difficulty}"
                )

        self.difficulty = difficulty
        self.attempt = len(history)
        self.index = ConstraintIndex.build(difficulty, history)
        self.oracle = oracle if oracle is not None else default_oracle()
        if rng is None:
            rng = random.Random(CONFIG["random_seed"])
        self.chooser = Chooser(self.oracle, difficulty, rng)
        self.verbose = verbose

    # ------------------------ opening guess ---------------------------------

    def initial_alphabet(self) -> List[str]:
        alphabet = [d for d in DIGITS if d != "9"]
        if self.difficulty >= MODULO_FROM:
            alphabet.append("%")
        if self.difficulty >= ALL_OPERATORS_FROM:
            alphabet.extend(op for op in OPS if op not in alphabet)
        if self.difficulty >= NINE_FROM:
            alphabet.append("9")
        return alphabet

    def initial_guess(self) -> str:
        """
        Keep the '=' slots of the template and refill every other slot with
        the best-ranked character, counting what is already used.
        """
        alphabet = self.initial_alphabet()
        frequency = {ch: 0 for ch in CHARS}

        guess = []
        for i, target in enumerate(INITIAL_TEMPLATES[self.difficulty]):
            if target == EQUALITY:
                guess.append(EQUALITY)
                continue
            best = self.chooser.rank(alphabet, i, frequency)[0]
            frequency[best] += 1
            guess.append(best)
        return "".join(guess)

    # ------------------------ deduction -------------------------------------

    def deduce_equality(self) -> int:
        """
        Position of '=': the confirmed green if there is exactly one,
        otherwise an assumed position near the end.
        """
        position = self.index.confirmed_equality()
        if position is None:
            position = min(self.difficulty - 2, EQUALITY_CAP)
        return position

    def count_correct(self) -> int:
        # '=' counts once, confirmed or assumed
        correct = 1
        for ch in CHARS:
            if ch != EQUALITY:
                correct += len(self.index[ch].correct)
        return correct

    def should_probe(self) -> bool:
        """
        Hand-tuned table deciding whether this attempt gathers information
        instead of trying to solve.
        """
        attempt = self.attempt
        unresolved = self.difficulty - self.count_correct()
        ops_seen = [op for op in OPS if self.index[op].min_count > 0]
        only_modulo = ops_seen == ["%"]

        if self.difficulty == 7:
            return False

        if self.difficulty == 8:
            return attempt == 1

        if attempt == 1:
            return True

        if self.difficulty == 9:
            return attempt == 2 and self.index["%"].min_count > 0 and unresolved <= 4

        if self.difficulty == 10:
            return attempt == 3 and only_modulo and 1 < unresolved <= 3

        if attempt == 2 and unresolved <= 2:
            return True

        return attempt == 3 and only_modulo and 1 < unresolved <= 3

    def create_plan(self, equality_position: int) -> SearchPlan:
        admissible = []
        confirmed = {}
        confirmed_operators = 0
        for ch in CHARS:
            info = self.index[ch]
            if ch == EQUALITY or info.max_count == 0:
                continue
            admissible.append(ch)
            for position in info.correct:
                confirmed[position] = ch
            if ch in OPS:
                confirmed_operators += len(info.correct)

        result_length = self.difficulty - equality_position - 1
        return SearchPlan(
            admissible=admissible,
            confirmed=confirmed,
            confirmed_operators=confirmed_operators,
            expression_length=self.difficulty - result_length - 1,
            result_length=result_length,
        )

    # ------------------------ entry point -----------------------------------

    def create_guess(self) -> str:
        if self.attempt == 0:
            guess = self.initial_guess()
            if self.verbose:
                print(f"[guesser] Opening guess: {guess}")
            return guess

        equality_position = self.deduce_equality()
        plan = self.create_plan(equality_position)
        probe = self.should_probe()

        if self.verbose:
            print(
                f"[guesser] Attempt {self.attempt + 1}: '=' at {equality_position}, "
                f"result length {plan.result_length}, "
                f"confirmed={sorted(plan.confirmed.items())}, "
                f"{'probing' if probe else 'solving'}"
            )

        if probe:
            engine = ProbeSearch(self.index, plan, self.chooser, verbose=self.verbose)
        else:
            engine = SolveSearch(self.index, plan, self.chooser, verbose=self.verbose)
        return engine.run()


def create_guess(
    history: List[List[FeedbackEntry]],
    difficulty: int,
    oracle=None,
    rng: Optional[random.Random] = None,
    verbose: bool = False,
) -> str:
    """Best next guess of length `difficulty` for the given feedback history."""
    return Guesser(difficulty, history, oracle=oracle, rng=rng, verbose=verbose).create_guess()
