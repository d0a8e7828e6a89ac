import random

import pytest

from focdle.focdle_env import ABSENT, CORRECT, PRESENT, FeedbackEntry
from focdle.focdle_oracle import FrequencyOracle

_COLORS = {"G": CORRECT, "O": PRESENT, ".": ABSENT}


def make_row(guess, pattern):
    """Feedback row from a guess and a G/O/. pattern string."""
    assert len(guess) == len(pattern)
    return [FeedbackEntry(i, ch, _COLORS[p]) for i, (ch, p) in enumerate(zip(guess, pattern))]


@pytest.fixture(scope="session")
def oracle():
    return FrequencyOracle.from_samples(sample_size=200, rng=random.Random(7))


@pytest.fixture
def rng():
    return random.Random(1234)
