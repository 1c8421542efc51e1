"""
The codebreaker: keeps the list of codes that could still be the secret and
picks the next guess with a minimax search.

Each turn:
1. find_best_guess() picks the guess whose worst outcome leaves the fewest candidates
2. the guess is answered (by a Responder, or by a person holding the secret)
3. apply_feedback() drops every candidate that would have answered differently

The minimax scan scores every allowed guess against every remaining candidate
(up to 5040 x 5040 pairs). To keep that fast we look the answers up in a
feedback table computed once per process with numpy.
"""

import logging
from collections import Counter
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import numpy as np

from .engine import BC, Code, Responder, all_possible_codes, is_win, score
from .types import CODE_LENGTH

logger = logging.getLogger(__name__)

# feedback is stored as bulls * 5 + cows, so every (bulls, cows) pair fits in 0..24
_OUTCOME_BASE = CODE_LENGTH + 1
_NUM_OUTCOMES = _OUTCOME_BASE * _OUTCOME_BASE

# rows of the table handled per numpy step (keeps temporary arrays around 20 MB)
_CHUNK = 256


@lru_cache(maxsize=1)
def _code_index() -> Dict[Code, int]:
    return {code: i for i, code in enumerate(all_possible_codes())}


@lru_cache(maxsize=1)
def feedback_table() -> np.ndarray:
    """
    table[g, c] == bulls * 5 + cows of score(universe[g], universe[c]),
    for every pair of valid codes. 5040 x 5040 uint8, about 25 MB.
    """
    digits = np.array([code.digits for code in all_possible_codes()], dtype=np.int8)
    n = len(digits)
    table = np.empty((n, n), dtype=np.uint8)

    for start in range(0, n, _CHUNK):
        rows = digits[start:start + _CHUNK]
        # every position of the row code against every position of each column code
        matches = (rows[:, None, :, None] == digits[None, :, None, :]).sum(axis=(2, 3))
        bulls = (rows[:, None, :] == digits[None, :, :]).sum(axis=2)
        table[start:start + _CHUNK] = bulls * _OUTCOME_BASE + (matches - bulls)

    logger.debug("Built %dx%d feedback table", n, n)
    return table


def encode(feedback: BC) -> int:
    return feedback.bulls * _OUTCOME_BASE + feedback.cows


def worst_case_sizes(guess_rows: np.ndarray, candidate_cols: np.ndarray) -> np.ndarray:
    """
    For each guess row: the size of the largest group of candidates that would
    all give that guess the same feedback.
    """
    table = feedback_table()
    worst = np.zeros(len(guess_rows), dtype=np.int64)

    for start in range(0, len(guess_rows), _CHUNK):
        rows = guess_rows[start:start + _CHUNK]
        outcomes = table[rows][:, candidate_cols].astype(np.intp)
        # shift each row into its own block of 25 bins so one bincount does all rows
        offsets = np.arange(len(rows), dtype=np.intp)[:, None] * _NUM_OUTCOMES
        counts = np.bincount((outcomes + offsets).ravel(), minlength=len(rows) * _NUM_OUTCOMES)
        worst[start:start + len(rows)] = counts.reshape(len(rows), _NUM_OUTCOMES).max(axis=1)

    return worst


class Codebreaker:
    """
    possible_correct_codes: codes still consistent with every answer so far (only shrinks)
    possible_guesses: codes we are allowed to guess (never changes)
    """

    def __init__(self) -> None:
        self.possible_correct_codes: List[Code] = all_possible_codes()
        self.possible_guesses: List[Code] = all_possible_codes()
        self.history: List[Tuple[Code, BC]] = []
        self.last_feedback: Optional[BC] = None

    @property
    def is_won(self) -> bool:
        return self.last_feedback is not None and is_win(self.last_feedback)

    def apply_feedback(self, guess: Code, feedback: BC) -> BC:
        """Keep only the candidates that would have answered `guess` with `feedback`."""
        before = len(self.possible_correct_codes)
        self.possible_correct_codes = [
            c for c in self.possible_correct_codes if score(c, guess) == feedback
        ]
        self.history.append((guess, feedback))
        self.last_feedback = feedback

        logger.debug(
            "Guess %s -> %s: %d -> %d candidates",
            guess, feedback, before, len(self.possible_correct_codes),
        )
        return feedback

    def make_turn(self, guess: Code, responder: Responder) -> BC:
        return self.apply_feedback(guess, responder.respond(guess))

    def partition(self, guess: Code) -> Counter:
        """How the remaining candidates split up by the feedback they give `guess`."""
        return Counter(score(guess, c) for c in self.possible_correct_codes)

    def worst_case(self, guess: Code) -> int:
        groups = self.partition(guess)
        if not groups:
            raise RuntimeError("No candidate codes remain; feedback history is inconsistent.")
        return max(groups.values())

    def find_best_guess(self) -> Code:
        if not self.possible_correct_codes:
            raise RuntimeError("No candidate codes remain; feedback history is inconsistent.")

        # nothing pruned yet (any first guess is as good as another), or only one answer left
        if (len(self.possible_guesses) == len(self.possible_correct_codes)
                or len(self.possible_correct_codes) == 1):
            return self.possible_correct_codes[0]

        index = _code_index()
        guess_rows = np.fromiter(
            (index[g] for g in self.possible_guesses), dtype=np.intp, count=len(self.possible_guesses)
        )
        candidate_cols = np.fromiter(
            (index[c] for c in self.possible_correct_codes),
            dtype=np.intp,
            count=len(self.possible_correct_codes),
        )

        worst = worst_case_sizes(guess_rows, candidate_cols)
        if worst.size == 0 or worst.min() == 0:
            raise RuntimeError("Empty feedback distribution during guess search.")

        # group guesses by worst case, take the smallest group, first guess in guess order
        best_size = int(worst.min())
        best_group = np.flatnonzero(worst == best_size)
        best = self.possible_guesses[int(best_group[0])]

        logger.debug(
            "Best guess %s: worst case %d of %d candidates (%d guesses tie)",
            best, best_size, len(self.possible_correct_codes), len(best_group),
        )
        return best
