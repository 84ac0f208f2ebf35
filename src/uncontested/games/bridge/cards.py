"""Card encoding for the 52-card bridge deck.

A card is a plain ``int`` in ``[0, 52)``:

  - suit = card % 4   (0 = clubs, 1 = diamonds, 2 = hearts, 3 = spades)
  - rank = card // 4  (0 = two, …, 8 = ten, 12 = ace)

Hands are written in PBN order (spades first) with suits separated
by dots, e.g. ``'AKJ2.Q93.K84.A52'``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable


# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------

NUM_SUITS: int = 4
NUM_CARDS_PER_SUIT: int = 13
NUM_CARDS: int = NUM_SUITS * NUM_CARDS_PER_SUIT  # 52
NUM_HANDS: int = 4
NUM_CARDS_PER_HAND: int = 13


class Suit(IntEnum):
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


class Seat(IntEnum):
    """Hand index inside a :class:`Deal` (slot block ``seat * 13``)."""

    WEST = 0    # player 0
    EAST = 1    # player 1
    NORTH = 2   # silent opponent
    SOUTH = 3   # silent opponent


RANK_CHARS: str = "23456789TJQKA"
SEAT_CHARS: str = "WENS"

# PBN lists suits from spades down to clubs.
_PBN_SUIT_ORDER: tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)


# ---------------------------------------------------------------------------
#  Decoding
# ---------------------------------------------------------------------------


def card_suit(card: int) -> Suit:
    return Suit(card % NUM_SUITS)


def card_rank(card: int) -> int:
    return card // NUM_SUITS


def make_card(suit: int, rank: int) -> int:
    return rank * NUM_SUITS + int(suit)


def hcp(card: int) -> int:
    """High-card points: A = 4, K = 3, Q = 2, J = 1."""
    return max(0, card_rank(card) - 8)


def hand_hcp(cards: Iterable[int]) -> int:
    return sum(hcp(c) for c in cards)


def suit_lengths(cards: Iterable[int]) -> list[int]:
    """Number of cards held in each suit, indexed by :class:`Suit`."""
    lengths = [0] * NUM_SUITS
    for c in cards:
        lengths[c % NUM_SUITS] += 1
    return lengths


# ---------------------------------------------------------------------------
#  PBN hand notation
# ---------------------------------------------------------------------------


def hand_to_pbn(cards: Iterable[int]) -> str:
    """Render a hand as ``'S.H.D.C'`` with ranks from high to low."""
    by_suit: dict[Suit, list[int]] = {s: [] for s in Suit}
    for c in cards:
        by_suit[card_suit(c)].append(card_rank(c))
    parts = []
    for suit in _PBN_SUIT_ORDER:
        ranks = sorted(by_suit[suit], reverse=True)
        parts.append("".join(RANK_CHARS[r] for r in ranks))
    return ".".join(parts)


def pbn_to_hand(text: str) -> list[int]:
    """Parse a ``'S.H.D.C'`` hand.  Raises ``ValueError`` on bad input."""
    parts = text.strip().split(".")
    if len(parts) != NUM_SUITS:
        raise ValueError(f"Hand needs {NUM_SUITS} dot-separated suits: {text!r}")
    cards: list[int] = []
    for suit, ranks in zip(_PBN_SUIT_ORDER, parts):
        for ch in ranks.upper():
            if ch not in RANK_CHARS:
                raise ValueError(f"Unknown rank {ch!r} in hand {text!r}")
            cards.append(make_card(suit, RANK_CHARS.index(ch)))
    if len(set(cards)) != len(cards):
        raise ValueError(f"Duplicate card in hand {text!r}")
    return cards
