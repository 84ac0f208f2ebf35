from __future__ import annotations

from typing import Any, Callable

import pytest

from uncontested.games.bridge.adapter import UncontestedBiddingGame
from uncontested.games.bridge.bids import Contract, Denomination
from uncontested.games.bridge.cards import hand_hcp, Seat
from uncontested.games.bridge.deal import Deal


class ConstantTricks:
    """Trick oracle that always reports the same count."""

    def __init__(self, tricks: int) -> None:
        self.tricks = tricks
        self.calls = 0

    def __call__(self, contract: Contract, deal: Deal) -> int:
        self.calls += 1
        return self.tricks


class HcpTricks:
    """Cheap deterministic stand-in for a double-dummy solver.

    More combined West/East HCP → more tricks; trump contracts get one
    extra trick.  Always within 0..13.
    """

    def __call__(self, contract: Contract, deal: Deal) -> int:
        side = hand_hcp(deal.hand(Seat.WEST)) + hand_hcp(deal.hand(Seat.EAST))
        tricks = 6 + (side - 20) // 2
        if contract.denomination != Denomination.NO_TRUMP:
            tricks += 1
        return max(0, min(13, tricks))


@pytest.fixture
def make_game() -> Callable[..., UncontestedBiddingGame]:
    def _make(params: dict[str, Any] | None = None, tricks: Any = None) -> UncontestedBiddingGame:
        counter = tricks if tricks is not None else HcpTricks()
        return UncontestedBiddingGame.from_params(params or {}, trick_counter=counter)

    return _make


@pytest.fixture
def constant_tricks() -> type[ConstantTricks]:
    return ConstantTricks
