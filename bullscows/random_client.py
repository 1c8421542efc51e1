"""
- HTTP call with clear fallback
Get a secret code (4 different digits 0..9) from random.org. If anything goes
wrong (no internet, timeout, bad response), we fall back to a local secure
random generator so the game still works.
"""

import logging
import os
from secrets import SystemRandom

import requests

from .engine import Code
from .types import CODE_LENGTH, NUM_SYMBOLS

logger = logging.getLogger(__name__)

# the sequence generator returns a shuffled 0..9, so the first 4 are all different
RANDOM_URL = "https://www.random.org/sequences/"


def _random_org_enabled() -> bool:
    return os.getenv("RANDOM_ORG_ENABLED", "1").lower() not in ("0", "false", "no")


def _local_secret() -> Code:
    return Code(tuple(SystemRandom().sample(range(NUM_SYMBOLS), CODE_LENGTH)))


def fetch_secret() -> Code:
    if not _random_org_enabled():
        return _local_secret()

    params = {
        "min": 0,           # smallest allowed number
        "max": NUM_SYMBOLS - 1,
        "col": 1,           # one number per line
        "format": "plain",  # plain text response
        "rnd": "new",       # always generate new numbers
    }
    timeout_seconds = float(os.getenv("RANDOM_ORG_TIMEOUT", "3.0"))

    try:
        response = requests.get(RANDOM_URL, params=params, timeout=timeout_seconds)
        response.raise_for_status()

        # The body looks like:
        #   3\n0\n9\n1\n...
        digits = [int(line) for line in response.text.splitlines() if line.strip()]
        if len(digits) < CODE_LENGTH:
            raise ValueError(f"random.org returned {len(digits)} values, expected {NUM_SYMBOLS}.")

        code = Code(tuple(digits[:CODE_LENGTH]))
        if not code.is_valid():
            raise ValueError(f"random.org returned an unusable sequence: {digits}.")
        return code

    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable (%s); using local random secret", exc)
        return _local_secret()
