"""Bids, calls and contracts.

Action ids
----------
``0 .. 34`` are bids, ordered by (level, denomination)::

    id = (level - 1) * 5 + denomination      # 1C = 0, 1NT = 4, 2NT = 9, 7NT = 34

``35`` (``PASS``) is the only other call.  The opponents never act,
so there is no double or redouble.

Declarer
--------
The declarer is whichever partner *first* named the final
denomination, not necessarily the one who made the final bid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence


# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------


class Denomination(IntEnum):
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3
    NO_TRUMP = 4


NUM_DENOMINATIONS: int = len(Denomination)  # 5
MAX_LEVEL: int = 7
NUM_BIDS: int = MAX_LEVEL * NUM_DENOMINATIONS  # 35
PASS: int = NUM_BIDS
NUM_ACTIONS: int = NUM_BIDS + 1  # 36
NUM_PLAYERS: int = 2

DENOMINATION_STRS: tuple[str, ...] = ("C", "D", "H", "S", "NT")
PASS_STR: str = "Pass"


# ---------------------------------------------------------------------------
#  Bid encoding
# ---------------------------------------------------------------------------


def is_bid(action: int) -> bool:
    return 0 <= action < NUM_BIDS


def bid_action(level: int, denomination: int) -> int:
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"Level must be 1..{MAX_LEVEL}, got {level}")
    return (level - 1) * NUM_DENOMINATIONS + int(denomination)


def bid_level(action: int) -> int:
    return action // NUM_DENOMINATIONS + 1


def bid_denomination(action: int) -> Denomination:
    return Denomination(action % NUM_DENOMINATIONS)


def action_to_string(action: int) -> str:
    """``'1C'``, ``'2NT'``, ``'Pass'``."""
    if action == PASS:
        return PASS_STR
    if not is_bid(action):
        raise ValueError(f"Not a bidding action: {action}")
    return f"{bid_level(action)}{DENOMINATION_STRS[action % NUM_DENOMINATIONS]}"


def string_to_action(text: str) -> int:
    """Inverse of :func:`action_to_string` (case-insensitive, ``'2N'`` ok)."""
    t = text.strip().upper()
    if t in ("PASS", "P"):
        return PASS
    if len(t) < 2 or not t[0].isdigit():
        raise ValueError(f"Cannot parse call {text!r}")
    level = int(t[0])
    strain = t[1:]
    if strain == "N":
        strain = "NT"
    if strain not in DENOMINATION_STRS:
        raise ValueError(f"Unknown denomination in call {text!r}")
    return bid_action(level, DENOMINATION_STRS.index(strain))


def parse_calls(text: str) -> list[int]:
    """Parse ``'2NT 3C Pass'`` or ``'2NT-3C-Pass'`` into action ids."""
    tokens = text.replace("-", " ").replace(",", " ").split()
    return [string_to_action(t) for t in tokens]


def auction_string(actions: Iterable[int]) -> str:
    return "-".join(action_to_string(a) for a in actions)


def highest_bid(actions: Iterable[int]) -> int | None:
    best = None
    for a in actions:
        if is_bid(a) and (best is None or a > best):
            best = a
    return best


# ---------------------------------------------------------------------------
#  Contract
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Contract:
    """Final commitment of the bidding side.

    ``level == 0`` marks a passed-out deal (see :data:`PASSED_OUT`).
    ``declarer`` is the player index (0 = West, 1 = East).
    """

    level: int
    denomination: Denomination = Denomination.NO_TRUMP
    declarer: int = 0

    @property
    def passed_out(self) -> bool:
        return self.level == 0

    @property
    def tricks_needed(self) -> int:
        return self.level + 6

    def label(self) -> str:
        if self.passed_out:
            return "Passed out"
        return f"{self.level}{DENOMINATION_STRS[self.denomination]} by {'WE'[self.declarer]}"

    def __str__(self) -> str:
        return self.label()


PASSED_OUT: Contract = Contract(level=0)


def contract_from_auction(actions: Sequence[int]) -> Contract:
    """Derive the contract reached by *actions* (player 0 at even indices)."""
    top = highest_bid(actions)
    if top is None:
        return PASSED_OUT
    denomination = bid_denomination(top)
    declarer = None
    for i, a in enumerate(actions):
        if is_bid(a) and bid_denomination(a) == denomination:
            declarer = i % NUM_PLAYERS
            break
    return Contract(bid_level(top), denomination, declarer)


def all_contracts(min_bid: int = 0) -> list[Contract]:
    """Every contract at or above *min_bid*, for both declarers."""
    return [
        Contract(bid_level(b), bid_denomination(b), declarer)
        for b in range(min_bid, NUM_BIDS)
        for declarer in range(NUM_PLAYERS)
    ]
