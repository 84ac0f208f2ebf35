"""UncontestedBiddingGame: implements GameInterface for the auction.

Wraps the functional engine in :mod:`uncontested.games.bridge.auction`
behind the generic protocol.  The game object owns the (immutable)
configuration and a seed counter: every ``new_initial_state()`` takes
the next seed, so a sequence of states gets distinct but reproducible
RNG streams.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Mapping

import numpy as np

from uncontested.games.bridge import auction as _auction
from uncontested.games.bridge.auction import AuctionState, DEAL
from uncontested.games.bridge.bids import NUM_ACTIONS, NUM_PLAYERS, Contract, action_to_string
from uncontested.games.bridge.config import GameConfig
from uncontested.games.bridge.encoder import STATE_DIM, encode_state, information_state
from uncontested.games.bridge.notation import deserialize, serialize
from uncontested.games.bridge.tricks import DoubleDummyTrickCounter, TrickCounter

log = logging.getLogger(__name__)


class UncontestedBiddingGame:
    """GameInterface implementation for uncontested bridge bidding."""

    def __init__(
        self,
        config: GameConfig | None = None,
        trick_counter: TrickCounter | None = None,
    ) -> None:
        config = config if config is not None else GameConfig()
        if trick_counter is not None:
            config = config.with_trick_counter(trick_counter)
        elif config.trick_counter is None:
            config = config.with_trick_counter(DoubleDummyTrickCounter())
        self.config = config
        self._seeds = itertools.count(config.rng_seed + 1)
        log.debug(
            "New game: forced=%s, %d reference contract(s), %d layout(s)",
            [action_to_string(a) for a in config.forced_actions],
            len(config.reference_contracts),
            config.num_layouts,
        )

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        trick_counter: TrickCounter | None = None,
    ) -> UncontestedBiddingGame:
        return cls(GameConfig.from_params(params), trick_counter=trick_counter)

    # -- game description ----------------------------------------------------

    @property
    def num_players(self) -> int:
        return NUM_PLAYERS

    @property
    def num_distinct_actions(self) -> int:
        return NUM_ACTIONS

    @property
    def max_game_length(self) -> int:
        return NUM_ACTIONS

    def min_utility(self) -> float:
        return self.config.min_utility()

    def max_utility(self) -> float:
        return self.config.max_utility()

    @property
    def reference_contracts(self) -> tuple[Contract, ...]:
        return self.config.reference_contracts

    # -- game rules ------------------------------------------------------------

    def new_initial_state(self) -> AuctionState:
        return _auction.new_state(self.config, next(self._seeds))

    def new_game(self, seed: int | None = None) -> AuctionState:
        """Dealt state: from an explicit *seed*, or the next counter seed."""
        state = self.new_initial_state() if seed is None else _auction.new_state(self.config, seed)
        _auction.apply_action(state, DEAL)
        return state

    def current_player(self, state: AuctionState) -> int:
        return _auction.current_player(state)

    def legal_actions(self, state: AuctionState) -> list[int]:
        return _auction.legal_actions(state)

    def chance_outcomes(self, state: AuctionState) -> list[tuple[int, float]]:
        return _auction.chance_outcomes(state)

    def apply(self, state: AuctionState, action: int) -> AuctionState:
        child = state.clone()
        _auction.apply_action(child, action)
        return child

    def apply_in_place(self, state: AuctionState, action: int) -> None:
        _auction.apply_action(state, action)

    def is_terminal(self, state: AuctionState) -> bool:
        return _auction.is_terminal(state)

    def returns(self, state: AuctionState) -> list[float]:
        return _auction.returns(state)

    def clone(self, state: AuctionState) -> AuctionState:
        return state.clone()

    def contract(self, state: AuctionState) -> Contract:
        return _auction.contract(state)

    # -- observations and text forms -----------------------------------------

    @property
    def state_dim(self) -> int:
        return STATE_DIM

    def encode_state(self, state: AuctionState, player: int) -> np.ndarray:
        return encode_state(state, player)

    def information_state(self, state: AuctionState, player: int) -> str:
        return information_state(state, player)

    def action_to_string(self, action: int) -> str:
        return action_to_string(action)

    def serialize_state(self, state: AuctionState) -> str:
        return serialize(state)

    def deserialize_state(self, text: str) -> AuctionState:
        return deserialize(text, self.config, seed=next(self._seeds))
