"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
"""

from typing import List, Literal
from pydantic import BaseModel, Field, field_validator

from .types import CODE_LENGTH, NUM_SYMBOLS


def _check_code(digits: List[int]) -> List[int]:
    if len(digits) != CODE_LENGTH:
        raise ValueError(f"A code must have exactly {CODE_LENGTH} digits.")
    for digit in digits:
        if digit < 0 or digit >= NUM_SYMBOLS:
            raise ValueError(f"Each digit must be between 0 and {NUM_SYMBOLS - 1} inclusive.")
    if len(set(digits)) != len(digits):
        raise ValueError("Digits must all be different.")
    return digits

# 1. Response when a new game is started
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; secret is never returned")
    status: Literal["in_progress", "won"] = Field(..., description="Current state of the game")
    candidates_left: int = Field(..., description="How many codes could still be the secret")

# 2. Validates player's guess
class GuessRequest(BaseModel):
    guess: List[int] = Field(
        ..., description="Exactly 4 different digits, each between 0 and 9."
    )

    @field_validator("guess")
    @classmethod
    def validate_digits(cls, guess_list: List[int]) -> List[int]:
        return _check_code(guess_list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                { "guess": [0, 1, 2, 3] },
                { "guess": [9, 8, 7, 6] },
            ]
        }
    }

# 3. Feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: List[int] = Field(..., description="The player's guess")
    bulls: int = Field(..., description="Right digit in the right place")
    cows: int = Field(..., description="Right digit in the wrong place")
    message: str = Field(..., description="Feedback message")
    timestamp: float = Field(..., description="When the guess was made")

# 4. Overall state of the game
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    status: Literal["in_progress", "won"] = Field(..., description="Current state of the game")
    turns: int = Field(..., description="How many guesses were made")
    candidates_left: int = Field(..., description="How many codes are still consistent with the history")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")

# 5. Result of a guess
class GuessResponse(BaseModel):
    turns: int = Field(..., description="How many guesses were made")
    status: Literal["in_progress", "won"] = Field(..., description="Current state of the game")
    feedback: GuessEntryOut | None = Field(None, description="Feedback from the latest guess")
    secret: List[int] | None = Field(None, description="The secret code (only revealed once solved)")
    note: str | None = Field(None, description="Extra note (ex. 'Game won. No more guesses.')")

# 6. Engine suggestion for the next guess
class SuggestionOut(BaseModel):
    guess: List[int] = Field(..., description="Guess the engine would play next")
    worst_case: int = Field(..., description="Most candidates this guess can leave behind")
    candidates_left: int = Field(..., description="How many codes are still consistent with the history")

# 7. Engine plays a whole game against a given secret
class SolveRequest(BaseModel):
    secret: List[int] = Field(..., description="Secret for the engine to break")

    @field_validator("secret")
    @classmethod
    def validate_digits(cls, secret: List[int]) -> List[int]:
        return _check_code(secret)

class TurnOut(BaseModel):
    guess: List[int] = Field(..., description="Guess played by the engine")
    bulls: int
    cows: int
    candidates_left: int = Field(..., description="Candidates remaining after this turn")

class SolveResponse(BaseModel):
    secret: List[int]
    turns: List[TurnOut] = Field(..., description="Every guess in order; the last one has 4 bulls")
    solved_in: int = Field(..., description="Number of guesses used")
