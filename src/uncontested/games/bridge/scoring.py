"""Duplicate-bridge point scores for undoubled contracts.

Made contract::

    trick score   20 per level (C/D), 30 per level (H/S/NT), +10 for NT
    bonus         game (trick score >= 100): 300 / 500 vul
                  part-score: 50
                  small slam (6): +500 / +750 vul
                  grand slam (7): +1000 / +1500 vul
    overtricks    20 (C/D) or 30 (H/S/NT) each

Defeated contract: 50 per undertrick (100 vulnerable).
"""

from __future__ import annotations

from uncontested.games.bridge.bids import Contract, Denomination, MAX_LEVEL
from uncontested.games.bridge.cards import NUM_CARDS_PER_HAND


# ---------------------------------------------------------------------------
#  Bounds
# ---------------------------------------------------------------------------


def min_score(vulnerable: bool = False) -> int:
    """7-level contract, 13 undertricks."""
    return -_undertrick_value(vulnerable) * (MAX_LEVEL + 6)


def max_score(vulnerable: bool = False) -> int:
    """7NT making."""
    return score_contract(Contract(MAX_LEVEL, Denomination.NO_TRUMP, 0), NUM_CARDS_PER_HAND, vulnerable)


# ---------------------------------------------------------------------------
#  Score table
# ---------------------------------------------------------------------------


def _undertrick_value(vulnerable: bool) -> int:
    return 100 if vulnerable else 50


def _per_trick(denomination: Denomination) -> int:
    return 20 if denomination in (Denomination.CLUBS, Denomination.DIAMONDS) else 30


def score_contract(contract: Contract, tricks: int, vulnerable: bool = False) -> int:
    """Signed score for the declaring side when declarer takes *tricks*."""
    if contract.passed_out:
        return 0
    if not 0 <= tricks <= NUM_CARDS_PER_HAND:
        raise ValueError(f"Trick count must be 0..13, got {tricks}")

    needed = contract.tricks_needed
    if tricks < needed:
        return -_undertrick_value(vulnerable) * (needed - tricks)

    per_trick = _per_trick(contract.denomination)
    trick_score = per_trick * contract.level
    if contract.denomination == Denomination.NO_TRUMP:
        trick_score += 10

    if trick_score >= 100:
        bonus = 500 if vulnerable else 300
    else:
        bonus = 50
    if contract.level == 6:
        bonus += 750 if vulnerable else 500
    elif contract.level == 7:
        bonus += 1500 if vulnerable else 1000

    return trick_score + bonus + per_trick * (tricks - needed)
