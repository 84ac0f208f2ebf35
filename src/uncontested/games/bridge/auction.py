"""Uncontested auction: the game state and its transitions.

Phases
------
1. **Not dealt**: the only legal action is the chance outcome
   :data:`DEAL`.  Applying it shuffles (with rejection sampling against
   the configured deal filter), draws any extra opponent layouts, and
   then applies the configured forced actions.
2. **Bidding**: West (player 0) acts at even positions of the auction,
   East (player 1) at odd ones.  Legal calls are Pass plus every bid
   above the current highest bid.
3. **Terminal**: two consecutive passes (after a bid: contract reached;
   without one: passed out), or the auction reached ``NUM_ACTIONS``
   calls.  The deal is scored exactly once on entering this phase.

All of the state's randomness is consumed in phase 1.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from uncontested.games.bridge.bids import (
    NUM_ACTIONS,
    NUM_BIDS,
    NUM_PLAYERS,
    PASS,
    Contract,
    auction_string,
    contract_from_auction,
    highest_bid,
)
from uncontested.games.bridge.cards import NUM_CARDS_PER_HAND, Seat
from uncontested.games.bridge.config import GameConfig
from uncontested.games.bridge.deal import Deal, generate_deal, redeal_opponents
from uncontested.games.bridge.errors import (
    IllegalActionError,
    InvalidStateError,
    NotTerminalError,
)
from uncontested.games.bridge.scoring import max_score, min_score, score_contract

log = logging.getLogger(__name__)

CHANCE_PLAYER: int = -1
TERMINAL_PLAYER: int = -4

# The single chance outcome.
DEAL: int = 0


# ---------------------------------------------------------------------------
#  State
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class AuctionState:
    """Mutable state of one uncontested auction.

    ``layouts[0]`` is the actual deal; further entries share West's and
    East's hands and differ in North/South.  ``score`` and
    ``reference_scores`` are filled in once, when the auction ends.
    """

    config: GameConfig
    rng: random.Random
    layouts: tuple[Deal, ...] = ()
    actions: list[int] = field(default_factory=list)
    num_forced: int = 0
    deal_attempts: int = 0
    score: float | None = None                  # player 0's raw score
    reference_scores: tuple[float, ...] = ()
    scored_returns: tuple[float, float] | None = None

    @property
    def dealt(self) -> bool:
        return bool(self.layouts)

    @property
    def deal(self) -> Deal | None:
        return self.layouts[0] if self.layouts else None

    def clone(self) -> AuctionState:
        """Independent copy; the RNG continues from the same position."""
        rng = random.Random()
        rng.setstate(self.rng.getstate())
        return AuctionState(
            config=self.config,
            rng=rng,
            layouts=self.layouts,
            actions=list(self.actions),
            num_forced=self.num_forced,
            deal_attempts=self.deal_attempts,
            score=self.score,
            reference_scores=self.reference_scores,
            scored_returns=self.scored_returns,
        )

    def __str__(self) -> str:
        from uncontested.games.bridge.notation import to_string

        return to_string(self)


def new_state(config: GameConfig, seed: int) -> AuctionState:
    """Fresh, undealt state with its own RNG stream."""
    return AuctionState(config=config, rng=random.Random(seed))


# ---------------------------------------------------------------------------
#  Queries
# ---------------------------------------------------------------------------


def is_terminal(state: AuctionState) -> bool:
    if not state.dealt:
        return False
    actions = state.actions
    if len(actions) >= NUM_ACTIONS:
        return True
    return len(actions) >= 2 and actions[-1] == PASS and actions[-2] == PASS


def current_player(state: AuctionState) -> int:
    if not state.dealt:
        return CHANCE_PLAYER
    if is_terminal(state):
        return TERMINAL_PLAYER
    return len(state.actions) % NUM_PLAYERS


def legal_actions(state: AuctionState) -> list[int]:
    """Chance outcome before the deal; Pass + higher bids while bidding."""
    if not state.dealt:
        return [DEAL]
    if is_terminal(state):
        return []
    top = highest_bid(state.actions)
    first = 0 if top is None else top + 1
    return list(range(first, NUM_BIDS)) + [PASS]


def chance_outcomes(state: AuctionState) -> list[tuple[int, float]]:
    if state.dealt:
        return []
    return [(DEAL, 1.0)]


def contract(state: AuctionState) -> Contract:
    """Contract implied by the auction so far (``PASSED_OUT`` if no bid)."""
    return contract_from_auction(state.actions)


def auction(state: AuctionState) -> str:
    return auction_string(state.actions)


# ---------------------------------------------------------------------------
#  Transitions
# ---------------------------------------------------------------------------


def apply_action(state: AuctionState, action: int) -> None:
    """Apply the chance outcome or a call, in place."""
    if not state.dealt:
        if action != DEAL:
            raise IllegalActionError(action, [DEAL])
        _deal(state)
        return
    if is_terminal(state):
        raise InvalidStateError("The auction is over; no further actions are allowed")
    _append(state, action)


def _append(state: AuctionState, action: int) -> None:
    legal = legal_actions(state)
    if action not in legal:
        raise IllegalActionError(action, legal)
    state.actions.append(action)
    if is_terminal(state):
        try:
            score_deal(state)
        except BaseException:
            # A call that cannot be scored is not committed.
            state.actions.pop()
            raise


def _deal(state: AuctionState) -> None:
    config = state.config
    if config.opener_hand is not None:
        base = Deal.with_fixed_hand(Seat.WEST, config.opener_hand)
        begin = NUM_CARDS_PER_HAND
    else:
        base = None
        begin = 0

    deal, attempts = generate_deal(
        state.rng,
        config.deal_filter,
        begin=begin,
        deal=base,
        max_attempts=config.max_deal_attempts,
    )
    layouts = [deal]
    for _ in range(config.num_layouts - 1):
        layouts.append(redeal_opponents(deal, state.rng))
    state.layouts = tuple(layouts)
    state.deal_attempts = attempts
    log.debug("Dealt %r after %d attempt(s), %d layout(s)", deal, attempts, len(layouts))

    for a in config.forced_actions:
        _append(state, a)
    state.num_forced = len(config.forced_actions)


def restore_state(
    config: GameConfig,
    layouts: Sequence[Deal],
    actions: Sequence[int],
    seed: int = 0,
) -> AuctionState:
    """Rebuild a dealt state from its layouts and full auction record.

    The record must start with the configured forced actions; every call
    is re-validated.
    """
    if not layouts:
        raise InvalidStateError("A dealt state needs at least one layout")
    forced = tuple(config.forced_actions)
    if tuple(actions[: len(forced)]) != forced:
        raise InvalidStateError(
            f"Auction {auction_string(actions)!r} does not start with the forced calls "
            f"{auction_string(forced)!r}"
        )
    state = new_state(config, seed)
    state.layouts = tuple(layouts)
    for a in actions:
        if is_terminal(state):
            raise InvalidStateError("Auction continues after it has ended")
        _append(state, a)
    state.num_forced = len(forced)
    return state


# ---------------------------------------------------------------------------
#  Scoring
# ---------------------------------------------------------------------------


def contract_score(config: GameConfig, contract: Contract, layouts: Sequence[Deal]) -> float:
    """Point score of *contract* averaged over *layouts*."""
    if contract.passed_out:
        return 0.0
    counter = config.trick_counter
    if counter is None:
        raise InvalidStateError("No trick counter configured")
    total = 0
    for layout in layouts:
        tricks = counter(contract, layout)
        total += score_contract(contract, tricks, config.vulnerable)
    return total / len(layouts)


def score_deal(state: AuctionState) -> tuple[float, tuple[float, ...]]:
    """Score the finished auction; computed once, cached afterwards.

    Returns ``(score, reference_scores)``.
    """
    if state.scored_returns is not None:
        return state.score, state.reference_scores
    if not is_terminal(state):
        raise NotTerminalError("Cannot score an auction that has not ended")

    config = state.config
    achieved = contract(state)
    score = contract_score(config, achieved, state.layouts)
    reference_scores = tuple(
        contract_score(config, ref, state.layouts) for ref in config.reference_contracts
    )
    if reference_scores:
        relative = score - max(reference_scores)
    else:
        relative = score

    # Player 0 always gets the raw score; player 1's range depends on the mode.
    raw_lo, raw_hi = min_score(config.vulnerable), max_score(config.vulnerable)
    assert raw_lo <= score <= raw_hi, f"score {score} outside [{raw_lo}, {raw_hi}]"
    lo, hi = config.min_utility(), config.max_utility()
    assert lo <= relative <= hi, f"player 1 return {relative} outside [{lo}, {hi}]"

    state.score = score
    state.reference_scores = reference_scores
    state.scored_returns = (score, relative)
    log.debug("Scored %s (%s): returns %s", achieved, auction(state), state.scored_returns)
    return score, reference_scores


def returns(state: AuctionState) -> list[float]:
    """``[player 0, player 1]`` returns; only defined on terminal states."""
    if not is_terminal(state):
        raise NotTerminalError("Returns are only defined once the auction has ended")
    score_deal(state)
    return list(state.scored_returns)
