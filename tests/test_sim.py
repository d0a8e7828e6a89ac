import random

import pytest

from focdle.benchmark_guess_distribution import guess_counts
from focdle.focdle_main import main
from focdle.focdle_sim import GameResult, benchmark_difficulty, play_game, summarize


def test_play_game_stops_on_the_secret():
    result = play_game("1+1+1=3", lambda history, difficulty: "1+1+1=3")
    assert result.solved
    assert result.num_guesses == 1


def test_play_game_feeds_back_every_row():
    seen = []

    def guess_fn(history, difficulty):
        seen.append(len(history))
        return "1+1+1=3" if len(history) == 2 else "2+2+2=6"

    result = play_game("1+1+1=3", guess_fn)
    assert seen == [0, 1, 2]
    assert result.guesses == ["2+2+2=6", "2+2+2=6", "1+1+1=3"]


def test_play_game_gives_up_after_max_guesses():
    result = play_game("1+1+1=3", lambda history, difficulty: "2+2+2=6", max_guesses=3)
    assert not result.solved
    assert result.num_guesses == 3


def test_play_game_rejects_wrong_length_guess():
    with pytest.raises(ValueError):
        play_game("1+1+1=3", lambda history, difficulty: "1+1+1=33")


def test_summarize():
    results = [
        GameResult("1+1+1=3", ["a"] * 3, True),
        GameResult("1+1+1=3", ["a"] * 5, True),
        GameResult("1+1+1=3", ["a"] * 3, True),
        GameResult("1+1+1=3", ["a"] * 9, False),
    ]
    summary = summarize(results)
    assert summary["games"] == 4
    assert summary["failed"] == 1
    assert summary["average"] == pytest.approx(11 / 3)
    assert summary["max"] == 5
    assert summary["min"] == 3
    assert summary["distribution"] == {3: 2, 5: 1}


def test_benchmark_difficulty_seven(oracle):
    summary = benchmark_difficulty(7, num_secrets=3, repeats=2, rng=random.Random(3), oracle=oracle)
    assert summary["games"] == 6
    assert summary["failed"] == 0
    assert 1 <= summary["min"] <= summary["max"]


def test_guess_counts_bins():
    rows = [
        {"guesses_used": 2, "solved": 1},
        {"guesses_used": 4, "solved": 1},
        {"guesses_used": 2, "solved": 1},
        {"guesses_used": 50, "solved": 0},
    ]
    assert guess_counts(rows) == [("1", 0), ("2", 2), ("3", 0), ("4", 1), ("fail", 1)]


def test_main_plays_secrets(capsys):
    assert main(["1+1+1=3", "--seed", "11"]) == 0
    out = capsys.readouterr().out
    assert "secret 1+1+1=3:" in out
    assert "SOLVED" in out


def test_main_rejects_invalid_secret(capsys):
    assert main(["1+1+1=4"]) == 1
    assert "invalid secret" in capsys.readouterr().out
