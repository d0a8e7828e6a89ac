#!/usr/bin/env python3
"""
focdle_constraints.py

Everything we can deduce about the secret from the feedback history.

The index is rebuilt from the whole history on every guess, never updated
incrementally. For each alphabet symbol it tracks:

- correct:    positions where the symbol was green
- impossible: positions where the symbol was orange or gray
- min_count / max_count: bounds on how often the symbol occurs in the secret
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set

from .focdle_env import (
    ABSENT,
    CHARS,
    CORRECT,
    DIGITS,
    EQUALITY,
    OPS,
    PRESENT,
    FeedbackEntry,
    str_frequency,
)


@dataclass
class CharacterConstraint:
    correct: Set[int] = field(default_factory=set)
    impossible: Set[int] = field(default_factory=set)
    min_count: int = 0
    max_count: int = 0


class ConstraintIndex:
    """
    Per-symbol bounds and position facts for one guess-creation call.
    """

    def __init__(self, difficulty: int, lookup: Dict[str, CharacterConstraint]):
        self.difficulty = difficulty
        self.lookup = lookup

    def __getitem__(self, ch: str) -> CharacterConstraint:
        return self.lookup[ch]

    def confirmed_equality(self):
        """Position of '=' if exactly one green has been seen, else None."""
        correct = self.lookup[EQUALITY].correct
        if len(correct) == 1:
            return next(iter(correct))
        return None

    @classmethod
    def build(cls, difficulty: int, history: List[List[FeedbackEntry]]) -> "ConstraintIndex":
        lookup: Dict[str, CharacterConstraint] = {}

        # a secret holds difficulty - 3 digits in total
        for ch in DIGITS:
            max_count = difficulty - 7 if ch == "0" else difficulty - 3
            lookup[ch] = CharacterConstraint(max_count=max_count)
        for ch in OPS:
            lookup[ch] = CharacterConstraint(max_count=2)
        lookup[EQUALITY] = CharacterConstraint(min_count=1, max_count=1)

        for row in history:
            tally: Dict[str, int] = {}
            capped: Set[str] = set()

            for entry in row:
                info = lookup[entry.char]
                if entry.color == CORRECT:
                    info.correct.add(entry.index)
                    tally[entry.char] = tally.get(entry.char, 0) + 1
                elif entry.color == PRESENT:
                    info.impossible.add(entry.index)
                    tally[entry.char] = tally.get(entry.char, 0) + 1
                elif entry.color == ABSENT:
                    info.impossible.add(entry.index)
                    capped.add(entry.char)

            for ch in CHARS:
                info = lookup[ch]
                if info.min_count == info.max_count:
                    continue
                info.min_count = max(info.min_count, tally.get(ch, 0))
                if ch in capped:
                    info.max_count = info.min_count

        _infer_operators(lookup)
        _redistribute_digits(lookup, difficulty)

        return cls(difficulty, lookup)


def _infer_operators(lookup: Dict[str, CharacterConstraint]) -> None:
    # both operator slots taken by the same operator
    doubled = [op for op in OPS if lookup[op].min_count == 2]
    if doubled:
        for op in OPS:
            if op != doubled[0]:
                lookup[op].min_count = 0
                lookup[op].max_count = 0
        return

    singles = [op for op in OPS if lookup[op].min_count == 1]
    if len(singles) == 2:
        for op in OPS:
            if op in singles:
                lookup[op].max_count = 1
            else:
                lookup[op].min_count = 0
                lookup[op].max_count = 0
    elif len(singles) == 1:
        # only one operator slot is still open
        for op in OPS:
            if op != singles[0]:
                lookup[op].max_count = min(lookup[op].max_count, 1)


def _redistribute_digits(lookup: Dict[str, CharacterConstraint], difficulty: int) -> None:
    max_digits = difficulty - 3
    total_min = sum(lookup[d].min_count for d in DIGITS)
    for d in DIGITS:
        info = lookup[d]
        if info.min_count < info.max_count:
            info.max_count = min(
                info.max_count,
                max_digits - (total_min - info.min_count),
            )


def passes_restrictions(guess: str, index: ConstraintIndex) -> bool:
    """
    Tests a full `guess` against the collective evidence in `index`.
    Returns False on the first violation:
    - a confirmed green position holds a different symbol
    - a symbol sits on one of its impossible positions
    - an occurrence count falls outside [min_count, max_count]
    - the guess is more diverse than the proven repeats allow
    Does not check the arithmetic of the candidate.
    """
    frequency = str_frequency(guess)
    uniques_upperbound = len(guess)

    for ch in CHARS:
        info = index.lookup[ch]

        for position in info.correct:
            if guess[position] != ch:
                return False

        for position in info.impossible:
            if guess[position] == ch:
                return False

        if not info.min_count <= frequency[ch] <= info.max_count:
            return False

        uniques_upperbound -= max(0, info.min_count - 1)

    if len(set(guess)) > uniques_upperbound:
        return False

    return True
