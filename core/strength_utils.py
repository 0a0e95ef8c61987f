# core/strength_utils.py
from __future__ import annotations
import re
from typing import NamedTuple

EMPTY_LABEL = "—"

_ALL_SAME = re.compile(r"(.)\1+", re.DOTALL)
_TRIPLE_RUN = re.compile(r"(.)\1\1", re.DOTALL)


class StrengthResult(NamedTuple):
    score: int
    label: str

    @property
    def percent(self) -> int:
        """Fill ratio of the strength bar, 0..100."""
        return round(self.score / 10 * 100)


def strength_label(score: int) -> str:
    if score >= 9:  return "Very Strong"
    if score >= 7:  return "Strong"
    if score >= 4:  return "Medium"
    return "Weak"

def estimate_strength(password: str) -> StrengthResult:
    """
    Heuristic score in [0, 10]:
      - length: +1 at 8, 12, 16, 24 chars
      - diversity: +1 per type present (upper, lower, digit, symbol)
      - a single repeated char scores 0, any run of 3 identical chars costs 1
    """
    if not password:
        return StrengthResult(0, EMPTY_LABEL)

    n = len(password)
    score = sum(1 for limit in (8, 12, 16, 24) if n >= limit)

    kinds = (
        re.search(r"[A-Z]", password),
        re.search(r"[a-z]", password),
        re.search(r"[0-9]", password),
        re.search(r"[^A-Za-z0-9]", password),
    )
    score += sum(1 for k in kinds if k)

    if _ALL_SAME.fullmatch(password):
        score = 0
    elif _TRIPLE_RUN.search(password):
        score -= 1

    score = max(0, min(score, 10))
    return StrengthResult(score, strength_label(score))
