"""Game configuration: variants, scoring mode, collaborators.

Two named subgames are built in:

  ``""``     any deal, free auction from West.
  ``"2NT"``  West holds a balanced 20-21 HCP hand and is forced to
             open 2NT; the partnership bids on from there.

Configs are usually built from a flat parameter mapping (CLI flags or
a JSON file) via :meth:`GameConfig.from_params` / :func:`load_config`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from uncontested.games.bridge.bids import (
    NUM_ACTIONS,
    PASS,
    PASSED_OUT,
    Contract,
    all_contracts,
    bid_action,
    highest_bid,
    parse_calls,
)
from uncontested.games.bridge.cards import NUM_CARDS, NUM_CARDS_PER_HAND, pbn_to_hand
from uncontested.games.bridge.deal import DealFilter, any_deal, is_2nt_opening
from uncontested.games.bridge.errors import InvalidStateError
from uncontested.games.bridge.scoring import max_score, min_score
from uncontested.games.bridge.tricks import TrickCounter

log = logging.getLogger(__name__)

OPEN_2NT: int = bid_action(2, 4)  # 9

SUBGAMES: dict[str, tuple[tuple[int, ...], DealFilter]] = {
    "": ((), any_deal),
    "2NT": ((OPEN_2NT,), is_2nt_opening),
}

_KNOWN_PARAMS = frozenset({
    "subgame",
    "relative_scoring",
    "rng_seed",
    "num_layouts",
    "vulnerable",
    "max_deal_attempts",
    "forced_actions",
    "opener_hand",
})


# ---------------------------------------------------------------------------
#  Config
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable settings shared by a game and all of its states."""

    reference_contracts: tuple[Contract, ...] = ()  # non-empty → player 1 scored relatively
    forced_actions: tuple[int, ...] = ()             # applied right after the deal
    deal_filter: DealFilter = any_deal               # rejection-sampling predicate
    trick_counter: TrickCounter | None = None        # None → double-dummy solver
    vulnerable: bool = False
    num_layouts: int = 1                             # opponent layouts averaged when scoring
    opener_hand: tuple[int, ...] | None = None       # fixes West's 13 cards
    max_deal_attempts: int | None = None             # None → retry forever
    rng_seed: int = 0

    def __post_init__(self) -> None:
        previous = -1
        passes = 0
        for i, a in enumerate(self.forced_actions):
            if not 0 <= a < NUM_ACTIONS:
                raise InvalidStateError(f"Forced action {a} is out of range")
            if passes >= 2:
                raise InvalidStateError("Forced actions continue after the auction has ended")
            if a == PASS:
                passes += 1
                continue
            if a <= previous:
                raise InvalidStateError(f"Forced bid at position {i} does not outrank the previous bid")
            previous = a
            passes = 0
        if self.num_layouts < 1:
            raise InvalidStateError("num_layouts must be at least 1")
        if self.max_deal_attempts is not None and self.max_deal_attempts < 1:
            raise InvalidStateError("max_deal_attempts must be positive")
        if self.opener_hand is not None:
            hand = self.opener_hand
            if (
                len(hand) != NUM_CARDS_PER_HAND
                or len(set(hand)) != NUM_CARDS_PER_HAND
                or not all(0 <= c < NUM_CARDS for c in hand)
            ):
                raise InvalidStateError("opener_hand must be 13 distinct cards")

    # -- scoring bounds -----------------------------------------------------

    @property
    def relative(self) -> bool:
        return bool(self.reference_contracts)

    def min_utility(self) -> float:
        lo = min_score(self.vulnerable)
        return lo - max_score(self.vulnerable) if self.relative else lo

    def max_utility(self) -> float:
        return 0 if self.relative else max_score(self.vulnerable)

    # -- construction -------------------------------------------------------

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        trick_counter: TrickCounter | None = None,
    ) -> GameConfig:
        """Build a config from flat, string-friendly parameters."""
        unknown = set(params) - _KNOWN_PARAMS
        if unknown:
            raise InvalidStateError(f"Unknown game parameter(s): {sorted(unknown)}")

        subgame = str(params.get("subgame", ""))
        if subgame not in SUBGAMES:
            raise InvalidStateError(f"Unknown subgame {subgame!r}; expected one of {sorted(SUBGAMES)}")
        forced, deal_filter = SUBGAMES[subgame]

        if params.get("forced_actions"):
            raw = params["forced_actions"]
            try:
                forced = tuple(parse_calls(raw) if isinstance(raw, str) else (int(a) for a in raw))
            except ValueError as e:
                raise InvalidStateError(f"Bad forced_actions {raw!r}: {e}") from e

        opener_hand = None
        if params.get("opener_hand"):
            try:
                opener_hand = tuple(pbn_to_hand(str(params["opener_hand"])))
            except ValueError as e:
                raise InvalidStateError(str(e)) from e
            # The hand is fixed, so there is nothing left to filter on.
            deal_filter = any_deal

        references: tuple[Contract, ...] = ()
        if _as_bool(params.get("relative_scoring", False)):
            references = relative_references(forced)

        max_attempts = params.get("max_deal_attempts")
        config = cls(
            reference_contracts=references,
            forced_actions=forced,
            deal_filter=deal_filter,
            trick_counter=trick_counter,
            vulnerable=_as_bool(params.get("vulnerable", False)),
            num_layouts=int(params.get("num_layouts", 1)),
            opener_hand=opener_hand,
            max_deal_attempts=int(max_attempts) if max_attempts is not None else None,
            rng_seed=int(params.get("rng_seed", 0)),
        )
        log.debug("Built config for subgame %r: %s", subgame, config)
        return config

    def with_trick_counter(self, trick_counter: TrickCounter) -> GameConfig:
        return replace(self, trick_counter=trick_counter)


def relative_references(forced_actions: tuple[int, ...]) -> tuple[Contract, ...]:
    """Every contract the partnership could still reach after *forced_actions*."""
    top = highest_bid(forced_actions)
    if top is None:
        return (PASSED_OUT, *all_contracts(0))
    return tuple(all_contracts(top))


def load_config(path: str | Path, trick_counter: TrickCounter | None = None) -> GameConfig:
    """Read :meth:`GameConfig.from_params` parameters from a JSON object file."""
    obj = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise InvalidStateError(f"{path}: expected a JSON object")
    return GameConfig.from_params(obj, trick_counter=trick_counter)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
