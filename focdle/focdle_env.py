#!/usr/bin/env python3
import random
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .config import CONFIG

# FoCdle environment: alphabet, evaluation, feedback and secrets

DIGITS = "0123456789"
OPS = "+-*%"
EQUALITY = "="
CHARS = DIGITS + OPS + EQUALITY

# '*' and '%' bind tighter than '+' and '-'
OP_PRECEDENCE = {"+": 0, "-": 0, "*": 1, "%": 1}

MIN_DIFFICULTY = CONFIG["min_difficulty"]
MAX_DIFFICULTY = CONFIG["max_difficulty"]

# Feedback colours, same convention as the rest of the project
CORRECT = 1
PRESENT = -1
ABSENT = 0


def check_difficulty(difficulty: int) -> None:
    if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
        raise ValueError(
            f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, "
            f"got {difficulty}"
        )


def _apply(left: Optional[int], right: Optional[int], op: str) -> Optional[int]:
    if left is None or right is None:
        return None
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if right == 0:
        return None
    return left % right


def fast_eval(expression: str) -> Optional[int]:
    """
    Evaluate a FoCdle expression: three 1-2 digit operands joined by exactly
    two operators from + - * %.

    Returns None for anything else (wrong operand or operator count, digit
    runs longer than two, leading/trailing/adjacent operators, stray
    characters) and for modulo by zero.
    """
    nums: List[int] = []
    ops: List[str] = []
    was_op = True

    i = 0
    while i < len(expression):
        ch = expression[i]

        if ch in DIGITS:
            if not was_op or len(nums) >= 3:
                return None
            was_op = False
            if i + 1 < len(expression) and expression[i + 1] in DIGITS:
                nums.append(int(expression[i:i + 2]))
                i += 2
                continue
            nums.append(int(ch))
            i += 1
            continue

        if ch not in OPS or was_op or len(ops) >= 2:
            return None
        was_op = True
        ops.append(ch)
        i += 1

    if len(nums) != 3 or len(ops) != 2:
        return None

    # second operator first only when it binds strictly tighter
    if OP_PRECEDENCE[ops[1]] > OP_PRECEDENCE[ops[0]]:
        return _apply(nums[0], _apply(nums[1], nums[2], ops[1]), ops[0])
    return _apply(_apply(nums[0], nums[1], ops[0]), nums[2], ops[1])


def is_valid_secret(secret: str) -> bool:
    """
    Check that `secret` is a well-formed FoCdle equation:
    - length within the supported difficulties
    - exactly one '=' with the expression on the left
    - no operand with a leading zero
    - right-hand side is the positive decimal value of the expression
    """
    if not MIN_DIFFICULTY <= len(secret) <= MAX_DIFFICULTY:
        return False
    if secret.count(EQUALITY) != 1:
        return False
    expression, result = secret.split(EQUALITY)
    value = fast_eval(expression)
    if value is None or value <= 0:
        return False

    number = ""
    for ch in expression + "+":
        if ch in DIGITS:
            number += ch
            continue
        if len(number) > 1 and number[0] == "0":
            return False
        number = ""

    return result == str(value)


@dataclass(frozen=True)
class FeedbackEntry:
    index: int
    char: str
    color: int


def set_colors(secret: str, guess: str) -> List[FeedbackEntry]:
    """
    Wordle-style feedback with full duplicate handling:
    - CORRECT (1) for the right character in the right position
    - PRESENT (-1) for a character still unaccounted for elsewhere in the secret
    - ABSENT (0) otherwise
    Greens are assigned first, then yellows left to right, so a single
    secret character is never counted twice.
    """
    if len(secret) != len(guess):
        raise ValueError(
            f"guess length {len(guess)} does not match secret length {len(secret)}"
        )

    remaining = Counter(secret)
    for secret_ch, guess_ch in zip(secret, guess):
        if secret_ch == guess_ch:
            remaining[guess_ch] -= 1

    colors: List[FeedbackEntry] = []
    for i, (secret_ch, guess_ch) in enumerate(zip(secret, guess)):
        if guess_ch == secret_ch:
            colors.append(FeedbackEntry(i, guess_ch, CORRECT))
        elif remaining[guess_ch] > 0:
            remaining[guess_ch] -= 1
            colors.append(FeedbackEntry(i, guess_ch, PRESENT))
        else:
            colors.append(FeedbackEntry(i, guess_ch, ABSENT))
    return colors


def feedback_to_string(row: Iterable[FeedbackEntry]) -> str:
    mapping = {CORRECT: "G", PRESENT: "O", ABSENT: "."}
    return "".join(mapping.get(entry.color, "?") for entry in row)


def random_expression(rng=random) -> str:
    """
    Random three-operand expression. Operands are 1..99, one or two digits
    with equal chance, so short difficulties are reachable quickly.
    NOTE: does NOT check the value; caller filters by fast_eval.
    """
    nums = []
    for _ in range(3):
        if rng.random() < 0.5:
            nums.append(rng.randint(1, 9))
        else:
            nums.append(rng.randint(10, 99))
    op1 = rng.choice(OPS)
    op2 = rng.choice(OPS)
    return f"{nums[0]}{op1}{nums[1]}{op2}{nums[2]}"


def create_secret(difficulty: int, rng=None, max_tries: int = 1_000_000) -> str:
    """
    Return a random valid secret of exactly `difficulty` characters whose
    result is strictly positive.
    """
    check_difficulty(difficulty)
    if rng is None:
        rng = random

    for _ in range(max_tries):
        expression = random_expression(rng)
        value = fast_eval(expression)
        if value is None or value <= 0:
            continue
        secret = f"{expression}{EQUALITY}{value}"
        if len(secret) == difficulty:
            return secret
    raise RuntimeError(f"Failed to generate a secret of difficulty {difficulty}.")


def str_frequency(text: str) -> Dict[str, int]:
    """Occurrence count of every alphabet symbol in `text` (zeros included)."""
    frequency = {ch: 0 for ch in CHARS}
    for ch in text:
        frequency[ch] += 1
    return frequency


def compute_positional_symbol_frequencies(candidates: List[str]) -> List[Dict[str, float]]:
    if not candidates:
        return []
    length = len(candidates[0])
    pos_counts = [Counter() for _ in range(length)]
    for expr in candidates:
        for i, ch in enumerate(expr):
            pos_counts[i][ch] += 1
    pos_freqs = []
    for i in range(length):
        total = sum(pos_counts[i].values()) or 1
        pos_freqs.append({ch: c / total for ch, c in pos_counts[i].items()})
    return pos_freqs
