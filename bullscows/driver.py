"""
Game loops that sit on top of the engine.

auto_play(): the codebreaker plays against a Responder until it sees 4 bulls.
replay(): rebuild a codebreaker from stored (guess, feedback) pairs.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .breaker import Codebreaker
from .engine import BC, Code, Responder

logger = logging.getLogger(__name__)

# the candidate pool shrinks every turn, so this is only a guard
DEFAULT_MAX_TURNS = 10


@dataclass(frozen=True)
class Turn:
    guess: Code
    feedback: BC
    candidates_left: int


def auto_play(secret: Code, max_turns: int = DEFAULT_MAX_TURNS) -> List[Turn]:
    responder = Responder(secret)
    breaker = Codebreaker()
    turns: List[Turn] = []

    while not breaker.is_won:
        if len(turns) >= max_turns:
            raise RuntimeError(f"No solution for {secret} after {max_turns} turns.")

        guess = breaker.find_best_guess()
        feedback = breaker.make_turn(guess, responder)
        turns.append(Turn(guess, feedback, len(breaker.possible_correct_codes)))

    logger.info("Solved %s in %d turn(s)", secret, len(turns))
    return turns


def replay(history: Iterable[Tuple[Code, BC]]) -> Codebreaker:
    breaker = Codebreaker()
    for guess, feedback in history:
        breaker.apply_feedback(guess, feedback)
    return breaker
