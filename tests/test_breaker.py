"""
Testing the codebreaker: pruning and the minimax guess search.
"""

import random

import numpy as np
import pytest

from bullscows.breaker import Codebreaker, encode, feedback_table
from bullscows.engine import BC, Code, Responder, WIN, all_possible_codes, score

def test_new_breaker_starts_with_full_pools():
    breaker = Codebreaker()
    assert len(breaker.possible_correct_codes) == 5040
    assert breaker.possible_guesses == breaker.possible_correct_codes
    assert breaker.history == []
    assert not breaker.is_won

def test_first_guess_needs_no_search():
    assert Codebreaker().find_best_guess() == Code((0, 1, 2, 3))

def test_two_turns_against_1278():
    secret = Code.from_number(1278)
    resp = Responder(secret)
    breaker = Codebreaker()

    first = breaker.make_turn(Code.from_number(1234), resp)
    assert first == BC(bulls=2, cows=0)

    second = breaker.make_turn(Code.from_number(5678), resp)
    assert second == BC(bulls=2, cows=0)

    pool = breaker.possible_correct_codes
    assert pool
    assert secret in pool
    for c in pool:
        assert score(c, Code.from_number(1234)) == first
        assert score(c, Code.from_number(5678)) == second
    assert breaker.history == [(Code.from_number(1234), first), (Code.from_number(5678), second)]

def test_pool_only_shrinks_and_keeps_the_secret():
    rng = random.Random(7)
    universe = all_possible_codes()

    for secret in rng.sample(universe, 5):
        resp = Responder(secret)
        breaker = Codebreaker()
        for guess in rng.sample(universe, 6):
            before = list(breaker.possible_correct_codes)
            breaker.make_turn(guess, resp)
            after = breaker.possible_correct_codes

            assert len(after) <= len(before)
            assert set(after) <= set(before)
            assert secret in after

def test_wrong_guess_removes_itself():
    breaker = Codebreaker()
    guess = Code.from_number(5031)
    breaker.apply_feedback(guess, BC(1, 1))
    assert guess not in breaker.possible_correct_codes

def test_winning_feedback_leaves_one_candidate():
    breaker = Codebreaker()
    breaker.apply_feedback(Code.from_number(4096), WIN)
    assert breaker.possible_correct_codes == [Code.from_number(4096)]
    assert breaker.is_won
    assert breaker.find_best_guess() == Code.from_number(4096)

def test_possible_guesses_never_change():
    resp = Responder(Code.from_number(1278))
    breaker = Codebreaker()
    breaker.make_turn(Code.from_number(1234), resp)
    assert len(breaker.possible_guesses) == 5040

def test_feedback_table_matches_score():
    table = feedback_table()
    universe = all_possible_codes()
    assert table.shape == (5040, 5040)
    assert table.dtype == np.uint8

    rng = random.Random(3)
    for _ in range(300):
        g = rng.randrange(len(universe))
        c = rng.randrange(len(universe))
        assert table[g, c] == encode(score(universe[g], universe[c]))

def test_best_guess_is_first_minimax_guess():
    resp = Responder(Code.from_number(1278))
    breaker = Codebreaker()
    breaker.make_turn(Code.from_number(1234), resp)
    breaker.make_turn(Code.from_number(5678), resp)
    assert len(breaker.possible_correct_codes) > 1

    # brute force reference, pure python
    worst = [breaker.worst_case(g) for g in breaker.possible_guesses]
    expected = breaker.possible_guesses[worst.index(min(worst))]

    assert breaker.find_best_guess() == expected

def test_best_guess_never_leaves_more_than_the_worst_case():
    resp = Responder(Code.from_number(3904))
    breaker = Codebreaker()
    breaker.make_turn(breaker.find_best_guess(), resp)

    best = breaker.find_best_guess()
    groups = breaker.partition(best)
    assert sum(groups.values()) == len(breaker.possible_correct_codes)
    assert breaker.worst_case(best) == max(groups.values())
    assert breaker.worst_case(best) < len(breaker.possible_correct_codes)

def test_inconsistent_feedback_empties_pool_and_search_fails():
    breaker = Codebreaker()
    breaker.apply_feedback(Code.from_number(123), WIN)
    breaker.apply_feedback(Code.from_number(123), BC(0, 0))
    assert breaker.possible_correct_codes == []

    with pytest.raises(RuntimeError):
        breaker.find_best_guess()
    with pytest.raises(RuntimeError):
        breaker.worst_case(Code.from_number(123))
