"""Trick counting: how many tricks declarer takes on a given layout.

The engine only needs a pure function ``(contract, deal) -> int``.
:class:`DoubleDummyTrickCounter` provides one on top of the DDS solver
shipped by ``endplay`` (``pip install uncontested[dds]``).
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from uncontested.games.bridge.bids import Contract, Denomination
from uncontested.games.bridge.cards import SEAT_CHARS, Seat
from uncontested.games.bridge.deal import Deal

log = logging.getLogger(__name__)


@runtime_checkable
class TrickCounter(Protocol):
    """Pure, deterministic trick oracle."""

    def __call__(self, contract: Contract, deal: Deal) -> int:
        """Tricks (0..13) taken by ``contract.declarer``'s side."""
        ...


def deal_to_pbn(deal: Deal) -> str:
    """``'W:<west> <north> <east> <south>'`` (PBN lists hands clockwise)."""
    order = (Seat.WEST, Seat.NORTH, Seat.EAST, Seat.SOUTH)
    return f"{SEAT_CHARS[Seat.WEST]}:" + " ".join(deal.hand_string(s) for s in order)


class DoubleDummyTrickCounter:
    """Double-dummy trick counts via ``endplay.dds.calc_dd_table``.

    A full 20-entry table is solved once per layout and cached, so
    scoring many reference contracts on the same deal costs one solve.
    ``endplay`` is imported on first use.
    """

    def __init__(self, max_cached: int = 1024) -> None:
        self._max_cached = max_cached
        self._tables: dict[tuple[int, ...], Any] = {}
        self._denoms: dict[Denomination, Any] | None = None
        self._players: tuple[Any, Any] | None = None

    def _solve(self, deal: Deal) -> Any:
        from endplay.dds import calc_dd_table
        from endplay.types import Deal as PbnDeal, Denom, Player

        if self._denoms is None:
            self._denoms = {
                Denomination.CLUBS: Denom.clubs,
                Denomination.DIAMONDS: Denom.diamonds,
                Denomination.HEARTS: Denom.hearts,
                Denomination.SPADES: Denom.spades,
                Denomination.NO_TRUMP: Denom.nt,
            }
            self._players = (Player.west, Player.east)
        pbn = deal_to_pbn(deal)
        log.debug("Solving double-dummy table for %s", pbn)
        return calc_dd_table(PbnDeal(pbn))

    def _table(self, deal: Deal) -> Any:
        key = deal.cards
        table = self._tables.get(key)
        if table is None:
            if len(self._tables) >= self._max_cached:
                self._tables.clear()
            table = self._solve(deal)
            self._tables[key] = table
        return table

    def __call__(self, contract: Contract, deal: Deal) -> int:
        table = self._table(deal)
        return int(table[self._denoms[contract.denomination], self._players[contract.declarer]])
