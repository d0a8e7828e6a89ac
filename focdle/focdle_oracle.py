#!/usr/bin/env python3
import json
import random
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import requests

from .config import CONFIG
from .focdle_env import (
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    check_difficulty,
    compute_positional_symbol_frequencies,
    create_secret,
)

# =========================
# Positional frequency oracle
# =========================

# JSON layout: {"<difficulty>": {"<position>": {"<char>": weight}}}


class FrequencyOracle:
    """
    Table of positional symbol weights, keyed by
    (difficulty, position, character).

    Tables come either from a JSON file / URL, or are sampled lazily, one
    difficulty at a time, from random secrets. A sampled difficulty is
    cached in `self.table` on first lookup; after that the weights never
    change. Symbols missing from a table weigh 0.0.
    """

    def __init__(
        self,
        table: Optional[Dict[int, List[Dict[str, float]]]] = None,
        sample_size: Optional[int] = None,
        rng: Optional[random.Random] = None,
        verbose: bool = False,
    ):
        self.table: Dict[int, List[Dict[str, float]]] = dict(table or {})
        self.sample_size = sample_size
        self.rng = rng if rng is not None else random.Random(CONFIG["random_seed"])
        self.verbose = verbose

    @classmethod
    def from_samples(cls, sample_size: Optional[int] = None, rng=None, verbose: bool = False):
        if sample_size is None:
            sample_size = CONFIG["oracle_sample_size"]
        return cls(sample_size=sample_size, rng=rng, verbose=verbose)

    @classmethod
    def from_json(cls, source: str, verbose: bool = False):
        """
        Load a table from a local JSON file or an http(s) URL.
        """
        if source.startswith(("http://", "https://")):
            if verbose:
                print(f"[oracle] Downloading frequency table from {source} ...")
            resp = requests.get(source, timeout=CONFIG["oracle_timeout"])
            resp.raise_for_status()
            data = resp.json()
        else:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)

        table = _parse_table(data)
        if verbose:
            print(f"[oracle] Loaded frequencies for difficulties {sorted(table)}")
        return cls(table=table, verbose=verbose)

    def positions(self, difficulty: int) -> List[Dict[str, float]]:
        check_difficulty(difficulty)
        if difficulty not in self.table:
            if self.sample_size is None:
                raise ValueError(f"No frequency table for difficulty {difficulty}.")
            self.table[difficulty] = self._sample(difficulty)
        return self.table[difficulty]

    def weight(self, difficulty: int, position: int, ch: str) -> float:
        per_position = self.positions(difficulty)
        if position >= len(per_position):
            return 0.0
        return per_position[position].get(ch, 0.0)

    def _sample(self, difficulty: int) -> List[Dict[str, float]]:
        secrets = [create_secret(difficulty, self.rng) for _ in range(self.sample_size)]
        if self.verbose:
            print(
                f"[oracle] Sampled {len(secrets)} secrets for difficulty {difficulty}, "
                f"e.g. {secrets[0]}"
            )
        return compute_positional_symbol_frequencies(secrets)

    def to_json(self, path, difficulties: Optional[Iterable[int]] = None) -> None:
        if difficulties is None:
            difficulties = range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1)
        data = {}
        for difficulty in difficulties:
            data[str(difficulty)] = {
                str(i): weights for i, weights in enumerate(self.positions(difficulty))
            }
        Path(path).write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        if self.verbose:
            print(f"[oracle] wrote {path}")


def _parse_table(data) -> Dict[int, List[Dict[str, float]]]:
    if not isinstance(data, dict):
        raise ValueError("Frequency table must be a JSON object keyed by difficulty.")
    table: Dict[int, List[Dict[str, float]]] = {}
    for difficulty_key, by_position in data.items():
        difficulty = int(difficulty_key)
        check_difficulty(difficulty)
        per_position: List[Dict[str, float]] = [{} for _ in range(difficulty)]
        for position_key, weights in by_position.items():
            position = int(position_key)
            if not 0 <= position < difficulty:
                raise ValueError(
                    f"Position {position} out of range for difficulty {difficulty}."
                )
            per_position[position] = {ch: float(w) for ch, w in weights.items()}
        table[difficulty] = per_position
    return table


_DEFAULT_ORACLE: Optional[FrequencyOracle] = None


def default_oracle() -> FrequencyOracle:
    """
    Process-wide oracle built once from CONFIG: the configured JSON source if
    there is one, otherwise sampled secrets.
    """
    global _DEFAULT_ORACLE
    if _DEFAULT_ORACLE is None:
        source = CONFIG.get("oracle_source")
        verbose = CONFIG.get("verbose", False)
        if source:
            _DEFAULT_ORACLE = FrequencyOracle.from_json(source, verbose=verbose)
        else:
            _DEFAULT_ORACLE = FrequencyOracle.from_samples(verbose=verbose)
    return _DEFAULT_ORACLE
