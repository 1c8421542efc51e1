"""
DB-backed game store.

Public methods:
- create(secret) -> GameState
- get(game_id) -> GameState | None
- guess(game_id, attempt) -> GameState | None
- suggest(game_id) -> tuple[str, SuggestionOut | None]
- get_secret(game_id) -> list[int] | None

The codebreaker is never stored: its candidate list is rebuilt by replaying
the guess history, so a game row plus its guesses is the whole state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy.orm import Session
from sqlalchemy import select

from .breaker import Codebreaker
from .driver import replay
from .engine import BC, Code, Responder, describe, is_win
from .models import Game as GameORM, Guess as GuessORM
from .schemas import GuessEntryOut, GameState, SuggestionOut

logger = logging.getLogger(__name__)

# --- Small DTO builders so routes never see ORM objects ---

def _to_guess_out(g: GuessORM) -> GuessEntryOut:
    return GuessEntryOut(
        guess=g.guess,
        bulls=g.bulls,
        cows=g.cows,
        message=g.message,
        timestamp=g.timestamp.timestamp(),
    )

def _to_game_state(game: GameORM, history: list[GuessORM]) -> GameState:
    breaker = _breaker_for(history)
    return GameState(
        game_id=game.id,
        status=game.status,
        turns=game.turns,
        candidates_left=len(breaker.possible_correct_codes),
        history=[_to_guess_out(h) for h in history],
    )

def _breaker_for(history: list[GuessORM]) -> Codebreaker:
    return replay((Code(h.guess), BC(bulls=h.bulls, cows=h.cows)) for h in history)

class DBGameStore:
    def __init__(self, db: Session):
        self.db = db

    def _history(self, game_id: str) -> list[GuessORM]:
        return list(
            self.db.execute(select(GuessORM).where(GuessORM.game_id == game_id).order_by(GuessORM.id.asc()))
            .scalars()
            .all()
        )

    # --- Public API ---

    def create(self, secret: Code) -> GameState:
        if not secret.is_valid():
            raise ValueError(f"Secret {secret} must have 4 different digits.")

        now = datetime.utcnow()
        game = GameORM(
            id=str(uuid4()),
            secret=secret.to_list(),
            status="in_progress",
            turns=0,
            created_at=now,
            updated_at=now,
        )
        self.db.add(game)
        self.db.commit()
        self.db.refresh(game)

        logger.info("Created game %s", game.id)
        return _to_game_state(game, history=[])

    def get(self, game_id: str) -> Optional[GameState]:
        game = self.db.get(GameORM, game_id)
        if not game:
            return None
        return _to_game_state(game, self._history(game_id))

    def guess(self, game_id: str, attempt: Code) -> Optional[GameState]:
        game = self.db.get(GameORM, game_id)
        if not game:
            return None

        if game.status != "in_progress":
            # Return current state without modifying
            return _to_game_state(game, self._history(game_id))

        if not attempt.is_valid():
            raise ValueError("Guess must have 4 different digits.")

        feedback = Responder(Code(game.secret)).respond(attempt)

        g = GuessORM(
            game_id=game.id,
            guess=attempt.to_list(),
            bulls=feedback.bulls,
            cows=feedback.cows,
            message=describe(feedback),
            timestamp=datetime.utcnow(),
        )
        self.db.add(g)

        game.turns += 1
        if is_win(feedback):
            game.status = "won"
            logger.info("Game %s solved in %d turn(s)", game.id, game.turns)
        game.updated_at = datetime.utcnow()

        self.db.commit()

        return _to_game_state(game, self._history(game_id))

    def suggest(self, game_id: str):
        """
        Returns a tuple like ("ok", SuggestionOut)
        Or: ("not_found", None) if no game
            ("finished", None) if the game is already won
            ("inconsistent", None) if no code fits the history (should never happen)
        """
        game = self.db.get(GameORM, game_id)
        if not game:
            return ("not_found", None)
        if game.status != "in_progress":
            return ("finished", None)

        breaker = _breaker_for(self._history(game_id))
        if not breaker.possible_correct_codes:
            logger.error("Game %s history leaves no candidates", game_id)
            return ("inconsistent", None)

        best = breaker.find_best_guess()
        return ("ok", SuggestionOut(
            guess=best.to_list(),
            worst_case=breaker.worst_case(best),
            candidates_left=len(breaker.possible_correct_codes),
        ))

    def get_secret(self, game_id: str):
        """Return the secret code ONLY for finished games; else None."""
        game = self.db.get(GameORM, game_id)
        if not game:
            return None
        if game.status == "won":
            return list(game.secret)
        return None
