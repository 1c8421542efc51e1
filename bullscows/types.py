"""
Labels for clarity.
"""

from typing import Literal, Tuple

Digit = int  # 0 -> 9
Digits = Tuple[Digit, Digit, Digit, Digit]  # 4 distinct digits
GameStatus = Literal["in_progress", "won"]
GameMode = Literal["auto", "human", "ai"]

CODE_LENGTH = 4
NUM_SYMBOLS = 10
