#!/usr/bin/env python3
"""
focdle_search.py

Candidate ranking and the two backtracking engines behind every guess.

Both engines keep one candidate list per position instead of recursing.
The last element of each list is the current choice; the partial guess is
the run of list tops from position 0 up to the first empty list (the
cursor). Backtracking pops the top of the previous position and keeps
unwinding leftward while lists run empty.

- SolveSearch fills the expression part only, then appends '=' and the
  computed result and checks the full guess against the constraint index.
- ProbeSearch fills every position with characters chosen to learn
  something new; it never checks arithmetic.
"""

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .config import CONFIG
from .focdle_constraints import ConstraintIndex, passes_restrictions
from .focdle_env import CHARS, DIGITS, EQUALITY, OPS, fast_eval


class SearchExhausted(RuntimeError):
    """No guess satisfies the accumulated constraints."""

    def __init__(self, engine: str, difficulty: int):
        super().__init__(f"{engine} search exhausted at difficulty {difficulty}")
        self.engine = engine
        self.difficulty = difficulty


class Chooser:
    """
    Orders candidate characters for a position, best first.

    Cost is the oracle weight (negated) plus a little uniform jitter to break
    ties. When a tally of characters already in the guess is given, the
    weight is amplified and the tally added on top, so repeats sink.
    """

    def __init__(
        self,
        oracle,
        difficulty: int,
        rng: Optional[random.Random] = None,
        jitter: float = CONFIG["jitter"],
        weight_scale: float = CONFIG["search_weight_scale"],
    ):
        self.oracle = oracle
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random(CONFIG["random_seed"])
        self.jitter = jitter
        self.weight_scale = weight_scale

    def rank(
        self,
        candidates: List[str],
        position: int,
        frequency: Optional[Dict[str, int]] = None,
    ) -> List[str]:
        def cost(ch: str) -> float:
            weight = self.oracle.weight(self.difficulty, position, ch)
            noise = self.jitter * self.rng.random()
            if not frequency:
                return noise - weight
            return noise - self.weight_scale * weight + frequency.get(ch, 0)

        return sorted(candidates, key=cost)


@dataclass
class SearchPlan:
    """What the controller hands to an engine for one guess."""
    admissible: List[str]
    confirmed: Dict[int, str] = field(default_factory=dict)
    confirmed_operators: int = 0
    expression_length: int = 0
    result_length: int = 0


def revert(position: int, stack: List[List[str]]) -> bool:
    """
    Undo the choice left of `position`, unwinding through emptied lists.
    Returns False once the very first position has nothing left.
    """
    position -= 1
    while position >= 0:
        stack[position].pop()
        if stack[position]:
            break
        position -= 1
    return position >= 0


def _current_output(stack: List[List[str]]) -> List[str]:
    output = []
    for choices in stack:
        if not choices:
            break
        output.append(choices[-1])
    return output


class SolveSearch:
    """
    Depth-first search for an arithmetically valid guess consistent with
    every constraint in the index.
    """

    def __init__(
        self,
        index: ConstraintIndex,
        plan: SearchPlan,
        chooser: Chooser,
        verbose: bool = False,
    ):
        self.index = index
        self.plan = plan
        self.chooser = chooser
        self.verbose = verbose
        self.steps = 0

    def _exhausted(self, ch: str, frequency: Counter) -> bool:
        return frequency[ch] >= self.index[ch].max_count

    def _filters(self, position: int, output: List[str], ops_left: int) -> Set[str]:
        length = self.plan.expression_length
        chars_remain = length - position
        prev = output[-1] if output else None
        filter_: Set[str] = set()

        # no leading operator or leading zero
        if position == 0:
            filter_.update(OPS)
            filter_.add("0")

        # the character before '=' closes an operand
        if position + 1 == length:
            filter_.update(OPS)

        if prev is not None and prev in OPS:
            filter_.update(OPS)

        # operands are at most two digits
        if position >= 2 and output[-1] in DIGITS and output[-2] in DIGITS:
            filter_.update(DIGITS)

        # an operand starting with '0' is just "0"
        if prev == "0" and (len(output) == 1 or output[-2] in OPS):
            filter_.update(DIGITS)

        if chars_remain == 2 and prev is not None and prev in DIGITS:
            filter_.update(DIGITS)

        # the owed operators must go in now
        if (chars_remain == 2 and ops_left == 1) or (chars_remain == 3 and ops_left == 2):
            filter_.update(DIGITS)

        if ops_left <= 0 or self.plan.confirmed_operators >= 3:
            filter_.update(OPS)

        return filter_

    def _complete(self, output: List[str]) -> Optional[str]:
        expression = "".join(output)
        answer = fast_eval(expression)
        if answer is None or answer <= 0:
            return None

        result = str(answer)
        if len(result) != self.plan.result_length:
            return None

        guess = f"{expression}{EQUALITY}{result}"
        if not passes_restrictions(guess, self.index):
            return None
        return guess

    def run(self) -> str:
        length = self.plan.expression_length
        stack: List[List[str]] = [[] for _ in range(length)]

        while True:
            self.steps += 1
            output = _current_output(stack)
            position = len(output)
            ops_left = 2 - sum(1 for ch in output if ch in OPS)
            frequency = Counter(output)

            if position == length:
                guess = self._complete(output)
                if guess is not None:
                    if self.verbose:
                        print(f"[search] solve found {guess} after {self.steps} steps")
                    return guess
                if not revert(position, stack):
                    break
                continue

            filter_ = self._filters(position, output, ops_left)

            # a known green is the only option at its position
            confirmed = self.plan.confirmed.get(position)
            if confirmed is not None:
                if confirmed in filter_ or self._exhausted(confirmed, frequency):
                    if not revert(position, stack):
                        break
                    continue
                stack[position].append(confirmed)
                continue

            choices = [
                ch for ch in self.plan.admissible
                if ch not in filter_
                and position not in self.index[ch].impossible
                and not self._exhausted(ch, frequency)
            ]
            if not choices:
                if not revert(position, stack):
                    break
                continue

            # best candidate goes on top of the stack
            ranked = self.chooser.rank(choices, position)
            ranked.reverse()
            stack[position] = ranked

        if self.verbose:
            print(f"[search] solve exhausted after {self.steps} steps")
        raise SearchExhausted("solve", self.index.difficulty)


class ProbeSearch:
    """
    Fills a full-length guess meant to harvest information rather than to
    win: known greens are not repeated in place, and the ranking tally
    charges each character for its repeats plus its still-unknown positions.
    """

    def __init__(
        self,
        index: ConstraintIndex,
        plan: SearchPlan,
        chooser: Chooser,
        verbose: bool = False,
    ):
        self.index = index
        self.plan = plan
        self.chooser = chooser
        self.verbose = verbose

    def _filters(self, position: int, output: List[str], ops_placed: int) -> Set[str]:
        difficulty = self.index.difficulty
        prev = output[-1] if output else None
        filter_: Set[str] = set()

        if position == 0:
            filter_.update(OPS)
            filter_.add("0")

        if position + 1 == difficulty:
            filter_.update(OPS)

        if prev is not None and prev in OPS:
            filter_.update(OPS)
            filter_.add("0")

        if ops_placed >= 4 or self.plan.confirmed_operators >= 2:
            filter_.update(OPS)

        # modulo already located: operators teach nothing more
        if self.index["%"].min_count >= 1:
            filter_.update(OPS)

        return filter_

    def run(self) -> str:
        difficulty = self.index.difficulty
        stack: List[List[str]] = [[] for _ in range(difficulty)]

        for position in range(difficulty):
            output = _current_output(stack)
            ops_placed = sum(1 for ch in output if ch in OPS)
            frequency = Counter(output)

            filter_ = self._filters(position, output, ops_placed)
            confirmed = self.plan.confirmed.get(position)
            if confirmed is not None:
                filter_.add(confirmed)

            choices = [
                ch for ch in self.plan.admissible
                if ch not in filter_
                and position not in self.index[ch].impossible
                and frequency[ch] < self.index[ch].max_count
            ]

            if not choices:
                if confirmed is not None:
                    choices = [confirmed]
                else:
                    choices = [
                        d for d in DIGITS if position not in self.index[d].impossible
                    ] or list(DIGITS)

            tally = {
                ch: frequency[ch] + difficulty - len(self.index[ch].correct)
                for ch in CHARS
            }
            ranked = self.chooser.rank(choices, position, tally)
            ranked.reverse()
            stack[position] = ranked

        guess = "".join(_current_output(stack))
        if self.verbose:
            print(f"[search] probe filled {guess}")
        return guess
