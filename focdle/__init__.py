"""FoCdle solver package."""

from .focdle_env import create_secret, fast_eval, set_colors
from .focdle_guesser import Guesser, create_guess
from .focdle_oracle import FrequencyOracle
from .focdle_search import SearchExhausted

__all__ = [
    "FrequencyOracle",
    "Guesser",
    "SearchExhausted",
    "create_guess",
    "create_secret",
    "fast_eval",
    "set_colors",
]
