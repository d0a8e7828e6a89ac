import random

import pytest

from focdle.focdle_constraints import passes_restrictions
from focdle.focdle_env import DIGITS, OPS, fast_eval, set_colors
from focdle.focdle_guesser import Guesser, create_guess
from focdle.focdle_oracle import FrequencyOracle
from focdle.focdle_search import Chooser, ProbeSearch, SearchExhausted, SolveSearch, revert
from focdle.focdle_sim import play_game

from conftest import make_row


@pytest.fixture
def stub_oracle():
    return FrequencyOracle(table={7: [{"1": 0.9, "2": 0.5, "3": 0.1}] + [{} for _ in range(6)]})


def test_chooser_ranks_by_weight(stub_oracle):
    chooser = Chooser(stub_oracle, 7, random.Random(0))
    assert chooser.rank(["3", "1", "2"], 0) == ["1", "2", "3"]


def test_chooser_penalises_repeats(stub_oracle):
    chooser = Chooser(stub_oracle, 7, random.Random(0))
    assert chooser.rank(["3", "1", "2"], 0, {"1": 3}) == ["2", "1", "3"]


def test_chooser_is_reproducible_with_seed(stub_oracle):
    first = Chooser(stub_oracle, 7, random.Random(5)).rank(list("456789"), 3)
    second = Chooser(stub_oracle, 7, random.Random(5)).rank(list("456789"), 3)
    assert first == second
    assert sorted(first) == list("456789")


def test_initial_alphabet_gates():
    oracle = FrequencyOracle(table={})
    assert Guesser(7, [], oracle=oracle).initial_alphabet() == list("012345678")
    assert "%" in Guesser(8, [], oracle=oracle).initial_alphabet()
    assert "+" not in Guesser(12, [], oracle=oracle).initial_alphabet()
    thirteen = Guesser(13, [], oracle=oracle).initial_alphabet()
    assert all(op in thirteen for op in "+-*%")
    assert "9" not in thirteen
    assert "9" in Guesser(14, [], oracle=oracle).initial_alphabet()


@pytest.mark.parametrize("difficulty", [7, 9])
def test_initial_guess_follows_template(oracle, rng, difficulty):
    guesser = Guesser(difficulty, [], oracle=oracle, rng=rng)
    guess = guesser.create_guess()
    alphabet = set(guesser.initial_alphabet())

    assert len(guess) == difficulty
    if difficulty == 9:
        assert guess[5] == "=" and guess[6] == "="
        others = guess[:5] + guess[7:]
    else:
        others = guess
    assert set(others) <= alphabet


def test_deduce_equality(oracle):
    assert Guesser(7, [set_colors("1+1+1=3", "1234567")], oracle=oracle).deduce_equality() == 5
    assert Guesser(12, [make_row("12345678=901", "........O...")], oracle=oracle).deduce_equality() == 8
    assert Guesser(9, [make_row("1+-*%=44=", ".....G..O")], oracle=oracle).deduce_equality() == 5


def test_should_probe_table(oracle):
    row7 = set_colors("1+1+1=3", "1234567")
    assert not Guesser(7, [row7], oracle=oracle).should_probe()

    row9 = set_colors("12+3-4=11", "1+-*%=541")
    assert Guesser(9, [row9], oracle=oracle).should_probe()

    row = set_colors("1+2*3=7", "4+5*6=9")
    assert not Guesser(7, [row, row], oracle=oracle).should_probe()

    secret = "12+34*5=182"
    close = set_colors(secret, "12+34*5=189")
    far = set_colors(secret, "98-76%54=01")
    assert Guesser(11, [far], oracle=oracle).should_probe()
    assert Guesser(11, [close, close], oracle=oracle).should_probe()
    assert not Guesser(11, [far, far], oracle=oracle).should_probe()
    assert not Guesser(11, [far, far, far], oracle=oracle).should_probe()


def test_create_plan(oracle):
    guesser = Guesser(7, [set_colors("1+1+1=3", "1234567")], oracle=oracle)
    plan = guesser.create_plan(guesser.deduce_equality())

    assert plan.expression_length == 5
    assert plan.result_length == 1
    assert plan.confirmed == {0: "1"}
    assert plan.confirmed_operators == 0
    assert "=" not in plan.admissible
    assert set(plan.admissible) == set("1389+-*%")


def test_solve_guess_is_a_true_equation(oracle, rng):
    history = [set_colors("1+1+1=3", "1234567")]
    guesser = Guesser(7, history, oracle=oracle, rng=rng)
    guess = guesser.create_guess()

    assert len(guess) == 7
    assert guess[5] == "="
    assert fast_eval(guess[:5]) == int(guess[6])
    assert guess[0] == "1"
    assert passes_restrictions(guess, guesser.index)


def test_probe_guess_avoids_impossible_positions(oracle, rng):
    secret = "12+3*4=24"
    opening = create_guess([], 9, oracle=oracle, rng=rng)
    history = [set_colors(secret, opening)]

    guesser = Guesser(9, history, oracle=oracle, rng=rng)
    assert guesser.should_probe()
    guess = guesser.create_guess()

    assert len(guess) == 9
    assert "=" not in guess
    for i, ch in enumerate(guess):
        assert i not in guesser.index[ch].impossible


def test_probe_skips_operators_once_modulo_is_known(oracle, rng):
    history = [make_row("1%2+3=456", ".G...G...")]
    guess = Guesser(9, history, oracle=oracle, rng=rng).create_guess()
    assert len(guess) == 9
    assert all(ch in DIGITS for ch in guess)


def test_unsatisfiable_history_raises(oracle, rng):
    history = [make_row("1+2+3=6", ".......")]
    with pytest.raises(SearchExhausted) as excinfo:
        create_guess(history, 7, oracle=oracle, rng=rng)
    assert excinfo.value.engine == "solve"
    assert excinfo.value.difficulty == 7


def test_rejects_wrong_length_rows(oracle):
    with pytest.raises(ValueError):
        Guesser(8, [set_colors("1+1+1=3", "1234567")], oracle=oracle)


def test_rejects_unsupported_difficulty(oracle):
    with pytest.raises(ValueError):
        Guesser(16, [], oracle=oracle)


def test_converges_on_easy_secret(oracle, rng):
    def guess_fn(history, difficulty):
        return create_guess(history, difficulty, oracle=oracle, rng=rng)

    result = play_game("1+1+1=3", guess_fn, max_guesses=10)
    assert result.solved
    assert result.guesses[-1] == "1+1+1=3"
    assert len(result.guesses) <= 10


def test_solve_engine_starts_from_empty_stack(oracle, rng):
    guesser = Guesser(7, [set_colors("1+1+1=3", "1234567")], oracle=oracle, rng=rng)
    plan = guesser.create_plan(guesser.deduce_equality())
    engine = SolveSearch(guesser.index, plan, guesser.chooser)

    assert engine._filters(0, [], 2) == set(OPS) | {"0"}

    guess = engine.run()
    assert guess[5] == "="
    assert fast_eval(guess[:5]) == int(guess[6])


def test_information_engine_starts_from_empty_stack(oracle, rng):
    guesser = Guesser(9, [set_colors("12+3*4=24", "1+-*%==44")], oracle=oracle, rng=rng)
    plan = guesser.create_plan(guesser.deduce_equality())
    engine = ProbeSearch(guesser.index, plan, guesser.chooser)

    filter_ = engine._filters(0, [], 0)
    assert set(OPS) <= filter_
    assert "0" in filter_
    assert "1" not in filter_

    guess = engine.run()
    assert len(guess) == 9
    assert guess[0] not in OPS


def test_second_guess_after_opening(oracle, rng):
    for secret, opening in [("1+1+1=3", "1234567"), ("12+3*4=24", "1+-*%==44")]:
        history = [set_colors(secret, opening)]
        guess = create_guess(history, len(secret), oracle=oracle, rng=rng)
        assert len(guess) == len(secret)
        assert guess != opening


def test_default_randomness_is_per_call(oracle):
    history = [set_colors("1+1+1=3", "1234567"), set_colors("1+1+1=3", "1+2+3=6")]
    first = create_guess(history, 7, oracle=oracle)
    create_guess([], 7, oracle=oracle)
    assert create_guess(history, 7, oracle=oracle) == first


def test_revert_pops_current_choice():
    stack = [["a", "b"], []]
    assert revert(1, stack)
    assert stack == [["a"], []]


def test_revert_unwinds_through_emptied_lists():
    stack = [["a", "b"], ["c"], ["d"]]
    assert revert(3, stack)
    assert stack == [["a"], [], []]


def test_revert_reports_exhaustion_at_first_position():
    stack = [["a"], ["c"]]
    assert not revert(2, stack)
    assert stack == [[], []]
