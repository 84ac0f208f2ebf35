"""The deal: a permutation of 52 cards across four hands.

Slots ``[0, 13)`` hold West's hand (player 0), ``[13, 26)`` East's
(player 1), ``[26, 39)`` North's and ``[39, 52)`` South's.

Shuffling is a partial Fisher–Yates pass driven by raw 32-bit MT19937
outputs (``random.Random.getrandbits(32)``) so that a seed reproduces
the same deal bit-for-bit on every platform and Python version
(``random.shuffle`` / ``randrange`` draw patterns are unspecified).
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Sequence

from uncontested.games.bridge.cards import (
    NUM_CARDS,
    NUM_CARDS_PER_HAND,
    NUM_HANDS,
    SEAT_CHARS,
    Seat,
    card_rank,
    card_suit,
    hand_hcp,
    hand_to_pbn,
    suit_lengths,
)
from uncontested.games.bridge.errors import RetryLimitExceededError

log = logging.getLogger(__name__)

DealFilter = Callable[["Deal"], bool]

# First slot of the silent partnership (North, South).
OPPONENTS_BEGIN: int = 2 * NUM_CARDS_PER_HAND

# Rejection rounds between progress warnings.
_WARN_EVERY: int = 10_000


# ---------------------------------------------------------------------------
#  Deal
# ---------------------------------------------------------------------------


class Deal:
    """52 cards laid out in four 13-card blocks."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Sequence[int] | None = None) -> None:
        if cards is None:
            self._cards = list(range(NUM_CARDS))
        else:
            self._cards = list(cards)
            if not self.is_permutation():
                raise ValueError("A deal must contain each of the 52 cards exactly once")

    @classmethod
    def from_hands(cls, hands: Sequence[Iterable[int]]) -> Deal:
        """Build a deal from four hands given in :class:`Seat` order."""
        if len(hands) != NUM_HANDS:
            raise ValueError(f"Expected {NUM_HANDS} hands, got {len(hands)}")
        cards: list[int] = []
        for h in hands:
            h = list(h)
            if len(h) != NUM_CARDS_PER_HAND:
                raise ValueError(f"Each hand needs {NUM_CARDS_PER_HAND} cards, got {len(h)}")
            cards.extend(h)
        return cls(cards)

    @classmethod
    def with_fixed_hand(cls, seat: int, hand: Iterable[int]) -> Deal:
        """Deal with *hand* in *seat*'s slots and the other cards in order."""
        hand = list(hand)
        if len(hand) != NUM_CARDS_PER_HAND or len(set(hand)) != NUM_CARDS_PER_HAND:
            raise ValueError(f"A fixed hand needs {NUM_CARDS_PER_HAND} distinct cards")
        held = set(hand)
        rest = [c for c in range(NUM_CARDS) if c not in held]
        start = seat * NUM_CARDS_PER_HAND
        return cls(rest[:start] + hand + rest[start:])

    # -- shuffling ----------------------------------------------------------

    def shuffle(self, rng: random.Random, begin: int = 0, end: int = NUM_CARDS) -> None:
        """In-place partial Fisher–Yates over slots ``[begin, end)``."""
        cards = self._cards
        for i in range(begin, end - 1):
            j = i + rng.getrandbits(32) % (end - i)
            cards[i], cards[j] = cards[j], cards[i]

    def copy(self) -> Deal:
        d = Deal.__new__(Deal)
        d._cards = list(self._cards)
        return d

    # -- queries ------------------------------------------------------------

    def card(self, i: int) -> int:
        return self._cards[i]

    def suit(self, i: int) -> int:
        return int(card_suit(self._cards[i]))

    def rank(self, i: int) -> int:
        return card_rank(self._cards[i])

    @property
    def cards(self) -> tuple[int, ...]:
        return tuple(self._cards)

    def hand(self, seat: int) -> list[int]:
        start = seat * NUM_CARDS_PER_HAND
        return self._cards[start : start + NUM_CARDS_PER_HAND]

    def is_permutation(self) -> bool:
        return len(self._cards) == NUM_CARDS and set(self._cards) == set(range(NUM_CARDS))

    def hand_string(self, seat: int) -> str:
        return hand_to_pbn(self.hand(seat))

    def _hands_key(self) -> tuple[frozenset[int], ...]:
        return tuple(frozenset(self.hand(s)) for s in Seat)

    def __eq__(self, other: object) -> bool:
        """Two deals are equal when every seat holds the same cards."""
        if not isinstance(other, Deal):
            return NotImplemented
        return self._hands_key() == other._hands_key()

    def __hash__(self) -> int:
        return hash(self._hands_key())

    def __repr__(self) -> str:
        hands = " ".join(f"{SEAT_CHARS[s]}:{self.hand_string(s)}" for s in Seat)
        return f"Deal({hands})"


# ---------------------------------------------------------------------------
#  Generation
# ---------------------------------------------------------------------------


def generate_deal(
    rng: random.Random,
    deal_filter: DealFilter,
    begin: int = 0,
    end: int = NUM_CARDS,
    deal: Deal | None = None,
    max_attempts: int | None = None,
) -> tuple[Deal, int]:
    """Shuffle until *deal_filter* accepts; return ``(deal, attempts)``.

    Each retry reshuffles the previous (rejected) layout in place, so the
    accepted deal and the attempt count are a pure function of the RNG
    state.  With ``max_attempts=None`` the loop is unbounded: a filter
    that can never be satisfied will spin forever.  Pass a cap to get a
    :class:`RetryLimitExceededError` instead.
    """
    deal = Deal() if deal is None else deal.copy()
    attempts = 0
    while True:
        attempts += 1
        deal.shuffle(rng, begin, end)
        if deal_filter(deal):
            log.debug("Deal accepted after %d attempt(s)", attempts)
            return deal, attempts
        if max_attempts is not None and attempts >= max_attempts:
            raise RetryLimitExceededError(attempts)
        if attempts % _WARN_EVERY == 0:
            log.warning("Deal filter has rejected %d deals so far", attempts)


def redeal_opponents(deal: Deal, rng: random.Random) -> Deal:
    """Copy of *deal* with North's and South's cards reshuffled."""
    layout = deal.copy()
    layout.shuffle(rng, OPPONENTS_BEGIN, NUM_CARDS)
    return layout


# ---------------------------------------------------------------------------
#  Filters
# ---------------------------------------------------------------------------


def any_deal(deal: Deal) -> bool:
    return True


def is_balanced(deal: Deal, seat: int = Seat.WEST) -> bool:
    """4-3-3-3, 4-4-3-2 or 5-3-3-2 (no 5-4-2-2 or 6-3-2-2)."""
    lengths = suit_lengths(deal.hand(seat))
    return min(lengths) >= 2 and lengths.count(2) <= 1


def is_2nt_opening(deal: Deal) -> bool:
    """Opener (West) is balanced with 20-21 HCP.

    Roughly 0.7% of random deals qualify, i.e. ~140 shuffles per deal.
    """
    return 20 <= hand_hcp(deal.hand(Seat.WEST)) <= 21 and is_balanced(deal, Seat.WEST)
