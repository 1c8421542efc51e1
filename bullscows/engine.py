"""
Pure game logic (no HTTP, no storage).

A code is 4 digits from 0..9, all different. For each guess we compute:
- bulls: how many digits are right AND in the right place
- cows: how many digits appear in both codes but in different places

Repeated digits are NOT supported: the scoring below counts every equal
pair of positions, which is only correct when each code has distinct digits.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from .types import CODE_LENGTH, NUM_SYMBOLS, Digits

# place values, most significant first
_DIVISORS = (1000, 100, 10, 1)


@dataclass(frozen=True)
class Code:
    digits: Digits

    def __post_init__(self) -> None:
        # accept lists/tuples from callers, always store a tuple so we stay hashable
        object.__setattr__(self, "digits", tuple(self.digits))

    @classmethod
    def from_number(cls, n: int) -> "Code":
        """
        Example:
          Code.from_number(1357) -> Code((1, 3, 5, 7))
          Code.from_number(42)   -> Code((0, 0, 4, 2))
        n must be in 0..9999 (not checked).
        """
        return cls(tuple((n // div) % 10 for div in _DIVISORS))

    @classmethod
    def parse(cls, text: str) -> "Code":
        """Build a code from user text like "1278"."""
        cleaned = text.strip()
        if len(cleaned) != CODE_LENGTH or not cleaned.isdigit():
            raise ValueError(f"A code must be exactly {CODE_LENGTH} digits, got {text!r}.")
        return cls(tuple(int(ch) for ch in cleaned))

    def is_valid(self) -> bool:
        d = self.digits
        if len(d) != CODE_LENGTH:
            return False

        for i in range(CODE_LENGTH):
            # range check is redundant for from_number() codes, kept as an invariant check
            if d[i] < 0 or d[i] >= NUM_SYMBOLS:
                return False
            for j in range(i + 1, CODE_LENGTH):
                if d[i] == d[j]:
                    return False
        return True

    def to_list(self) -> List[int]:
        return list(self.digits)

    def __str__(self) -> str:
        return "".join(str(d) for d in self.digits)


@dataclass(frozen=True)
class BC:
    bulls: int = 0
    cows: int = 0

    def __str__(self) -> str:
        return f"{self.bulls}B{self.cows}C"


WIN = BC(bulls=CODE_LENGTH, cows=0)


@lru_cache(maxsize=1)
def _universe() -> Tuple[Code, ...]:
    codes = []
    for n in range(10000):
        code = Code.from_number(n)
        if code.is_valid():
            codes.append(code)
    return tuple(codes)


def all_possible_codes() -> List[Code]:
    """
    Every valid code, in ascending numeric order (0123, 0124, ... 9876).
    There are 10 * 9 * 8 * 7 = 5040 of them.
    The list is built once per process; each caller gets its own copy.
    """
    return list(_universe())


def score(first: Code, other: Code) -> BC:
    """
    Example:
      secret = 1278
      guess  = 0172
      bulls = 1  (7 in the third place)
      cows  = 2  (1 and 2 are in the secret, somewhere else)
      Returns BC(bulls=1, cows=2)
    """
    bulls = 0
    cows = 0

    # compare every position of the first code with every position of the other
    for i, d0 in enumerate(first.digits):
        for j, d1 in enumerate(other.digits):
            if d0 == d1:
                if i == j:
                    bulls += 1
                else:
                    cows += 1

    return BC(bulls=bulls, cows=cows)


def is_win(feedback: BC) -> bool:
    return feedback.bulls == CODE_LENGTH


def describe(feedback: BC) -> str:
    """Feedback message for people, never reveals which digits matched."""
    if is_win(feedback):
        return f"{CODE_LENGTH} bulls - solved"
    if feedback.bulls == 0 and feedback.cows == 0:
        return "no bulls, no cows"
    return f"{feedback.bulls} bull(s), {feedback.cows} cow(s)"


def parse_feedback(text: str) -> BC:
    """
    Read feedback typed by a person: "2 1", "2,1" or "2B1C".
    """
    cleaned = text.strip().upper().replace(",", " ").replace("B", " ").replace("C", " ")
    parts = cleaned.split()
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Feedback must be two numbers (bulls cows), got {text!r}.")

    bulls, cows = int(parts[0]), int(parts[1])
    if bulls + cows > CODE_LENGTH:
        raise ValueError(f"Bulls + cows cannot be more than {CODE_LENGTH}.")
    if bulls == CODE_LENGTH - 1 and cows == 1:
        # three digits in place leaves only one spot, the last digit cannot be a cow
        raise ValueError("3 bulls and 1 cow is impossible.")
    return BC(bulls=bulls, cows=cows)


class Responder:
    """Holds the secret and answers guesses. Never changes after creation."""

    def __init__(self, secret_code: Code) -> None:
        self._secret_code = secret_code

    @property
    def secret_code(self) -> Code:
        return self._secret_code

    def respond(self, guess: Code) -> BC:
        return score(self._secret_code, guess)
