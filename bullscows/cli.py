"""
Command line front end.

  bullscows auto  [--secret 1278]   the engine breaks a secret and shows its work
  bullscows human [--secret 1278]   you guess, the computer answers
  bullscows ai                      you think of a secret, the engine guesses

Input/output go through `ask` and `say` so the loops can be driven from tests.
"""

import argparse
import logging
from typing import Callable, Dict, List, Optional

from .breaker import Codebreaker
from .driver import auto_play
from .engine import Code, Responder, describe, parse_feedback
from .random_client import fetch_secret
from .types import GameMode

Ask = Callable[[str], str]
Say = Callable[[str], None]


def parse_secret(text: str) -> Code:
    try:
        code = Code.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))
    if not code.is_valid():
        raise argparse.ArgumentTypeError(f"{text!r} repeats a digit; all 4 digits must differ.")
    return code


def run_auto(secret: Code, ask: Ask, say: Say) -> int:
    say(f"Secret is {secret}. Watch the engine work.")
    turns = auto_play(secret)
    for number, turn in enumerate(turns, start=1):
        say(f"{number}. {turn.guess} -> {describe(turn.feedback)} ({turn.candidates_left} left)")
    say(f"Solved in {len(turns)} turn(s).")
    return 0


def run_human(secret: Code, ask: Ask, say: Say) -> int:
    responder = Responder(secret)
    # tracks what the player has learned, so we can offer a hint
    breaker = Codebreaker()
    say("I have a secret: 4 different digits. Good luck!")

    while True:
        text = ask("Your guess? ('?' for a hint, 'q' to quit) ").strip()
        if text.lower() == "q":
            say(f"The secret was {secret}.")
            return 0
        if text == "?":
            say(f"Try {breaker.find_best_guess()} ({len(breaker.possible_correct_codes)} codes still possible).")
            continue

        try:
            guess = Code.parse(text)
        except ValueError as exc:
            say(str(exc))
            continue
        if not guess.is_valid():
            say("Bad guess. Please enter 4 different digits.")
            continue

        feedback = breaker.make_turn(guess, responder)
        say(describe(feedback))
        if breaker.is_won:
            say(f"You win! It took you {len(breaker.history)} turn(s).")
            return 0


def run_ai(secret: Optional[Code], ask: Ask, say: Say) -> int:
    breaker = Codebreaker()
    say("Think of 4 different digits. Answer each guess with: bulls cows (e.g. '1 2').")

    while not breaker.is_won:
        guess = breaker.find_best_guess()
        while True:
            text = ask(f"My guess: {guess}. Bulls and cows? ")
            try:
                feedback = parse_feedback(text)
            except ValueError as exc:
                say(str(exc))
                continue
            break
        breaker.apply_feedback(guess, feedback)

        # a "4 0" for a guess that was no longer possible also empties the pool
        if not breaker.possible_correct_codes:
            say("No code fits those answers. Please check your secret and try again.")
            return 1

    say(f"Got it: {breaker.history[-1][0]} in {len(breaker.history)} turn(s).")
    return 0


MODES: Dict[GameMode, Callable[..., int]] = {
    "auto": run_auto,
    "human": run_human,
    "ai": run_ai,
}


def play(mode: GameMode, secret: Optional[Code] = None, ask: Ask = input, say: Say = print) -> int:
    runner = MODES[mode]
    if secret is None and mode != "ai":
        secret = fetch_secret()
    return runner(secret, ask, say)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bullscows",
        description="Play Bulls and Cows (4 different digits) with a minimax codebreaker.",
    )
    parser.add_argument("mode", choices=list(MODES), help="who holds the secret and who guesses")
    parser.add_argument("--secret", type=parse_secret, help="fixed secret for auto/human mode, e.g. 1278")
    parser.add_argument("-v", "--verbose", action="store_true", help="show engine debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return play(args.mode, args.secret)
    except (EOFError, KeyboardInterrupt):
        print("\nExiting.")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
