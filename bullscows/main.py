'''
Bulls and Cows API

Endpoints:
POST /games                -> start a game (secret from random.org, local fallback)
GET  /games/{id}           -> read state & history
POST /games/{id}/guess     -> submit a guess, get bulls/cows
GET  /games/{id}/suggest   -> the engine's best next guess for this game

Extras:
POST /solve                -> watch the engine break a secret of your choice
'''

import logging
import os
from fastapi import FastAPI, HTTPException, Depends

from fastapi.middleware.cors import CORSMiddleware

from .random_client import fetch_secret
from .db import get_db                  # SQLAlchemy Session dependency
from .repository import DBGameStore     # DB-backed store
from .bootstrap_db import create_all    # dev-only: create tables
from .driver import auto_play
from .engine import Code

from .schemas import (
    NewGameResponse,
    GuessRequest,
    GuessResponse,
    GameState,
    SuggestionOut,
    SolveRequest,
    SolveResponse,
    TurnOut,
)

APP_ENV = os.getenv("APP_ENV", "local")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Bulls and Cows API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# --- Dev convenience: auto-create tables locally ---
if APP_ENV == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

# Small factory so routes get a per-request store (bound to the current DB session)
def get_store(session = Depends(get_db)) -> DBGameStore:
    return DBGameStore(session)

# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(store: DBGameStore = Depends(get_store)) -> NewGameResponse:
    secret = fetch_secret()                 # random.org w/ secure fallback
    game_state: GameState = store.create(secret)

    return NewGameResponse(
        game_id=game_state.game_id,
        status=game_state.status,
        candidates_left=game_state.candidates_left,
    )

@app.get("/games/{game_id}", response_model=GameState, summary="Get current game state")
def get_game(
    game_id: str,
    store: DBGameStore = Depends(get_store),
) -> GameState:
    game_state = store.get(game_id)
    if not game_state:
        raise HTTPException(status_code=404, detail="Game not found")
    return game_state

@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: DBGameStore = Depends(get_store),
) -> GuessResponse:
    try:
        updated: GameState = store.guess(game_id, Code(payload.guess))
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    if not updated:
        raise HTTPException(status_code=404, detail="Game not found")

    feedback = updated.history[-1] if updated.history else None

    # The secret is only revealed once it was found
    secret = None
    if updated.status == "won":
        secret = store.get_secret(game_id)

    return GuessResponse(
        turns=updated.turns,
        status=updated.status,
        feedback=feedback,
        secret=secret,
        note=(f"Game won in {updated.turns} turn(s). No more guesses allowed."
              if updated.status == "won" else None),
    )

@app.get("/games/{game_id}/suggest", response_model=SuggestionOut, summary="Ask the engine for the next guess")
def suggest_guess(
    game_id: str,
    store: DBGameStore = Depends(get_store),
) -> SuggestionOut:
    status, suggestion = store.suggest(game_id)
    if status == "not_found":
        raise HTTPException(status_code=404, detail="Game not found")
    if status == "finished":
        raise HTTPException(status_code=409, detail="Game finished. Nothing left to suggest.")
    if status == "inconsistent":
        raise HTTPException(status_code=500, detail="No code matches this game's history.")
    return suggestion

@app.post("/solve", response_model=SolveResponse, summary="Let the engine break a secret")
def solve(payload: SolveRequest) -> SolveResponse:
    turns = auto_play(Code(payload.secret))
    return SolveResponse(
        secret=payload.secret,
        turns=[
            TurnOut(
                guess=t.guess.to_list(),
                bulls=t.feedback.bulls,
                cows=t.feedback.cows,
                candidates_left=t.candidates_left,
            )
            for t in turns
        ],
        solved_in=len(turns),
    )
