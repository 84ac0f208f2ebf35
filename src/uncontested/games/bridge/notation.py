"""Text forms of an auction state.

``serialize`` / ``deserialize`` use a stable line-oriented format::

    deal W:AKJ2.Q93.K84.A52 N:... E:... S:...
    redeal N:... S:...            # one line per extra opponent layout
    auction 2NT 3C Pass Pass      # possibly empty

An undealt state serializes to the empty string.  It has no cards yet,
so nothing of its RNG is written: ``deserialize`` gives it a stream
from the *seed* argument, and dealing it reproduces the deal of
``new_state(config, seed)``, not of the state that was serialized.

Hands are written high to low, so slot order inside a hand is not
kept; the restored deal still compares equal (:class:`Deal` equality is
per-seat card sets).  ``deal_attempts`` is generation bookkeeping and
is not serialized; a restored state reports 0.
"""

from __future__ import annotations

from uncontested.games.bridge.auction import (
    AuctionState,
    contract,
    is_terminal,
    new_state,
    restore_state,
)
from uncontested.games.bridge.bids import action_to_string, auction_string, parse_calls
from uncontested.games.bridge.cards import SEAT_CHARS, Seat, pbn_to_hand
from uncontested.games.bridge.config import GameConfig
from uncontested.games.bridge.deal import Deal
from uncontested.games.bridge.errors import InvalidStateError

_PBN_ORDER = (Seat.WEST, Seat.NORTH, Seat.EAST, Seat.SOUTH)
_OPPONENTS = (Seat.NORTH, Seat.SOUTH)
_SEAT_NAMES = {Seat.WEST: "West", Seat.EAST: "East", Seat.NORTH: "North", Seat.SOUTH: "South"}


# ---------------------------------------------------------------------------
#  Serialization
# ---------------------------------------------------------------------------


def _hands_text(deal: Deal, seats: tuple[Seat, ...]) -> str:
    return " ".join(f"{SEAT_CHARS[s]}:{deal.hand_string(s)}" for s in seats)


def serialize(state: AuctionState) -> str:
    if state.deal is None:
        return ""
    lines = [f"deal {_hands_text(state.deal, _PBN_ORDER)}"]
    for layout in state.layouts[1:]:
        lines.append(f"redeal {_hands_text(layout, _OPPONENTS)}")
    lines.append(" ".join(["auction", *(action_to_string(a) for a in state.actions)]))
    return "\n".join(lines)


def _parse_hands(text: str) -> dict[Seat, list[int]]:
    hands: dict[Seat, list[int]] = {}
    for token in text.split():
        seat_char, sep, pbn = token.partition(":")
        if not sep or seat_char.upper() not in SEAT_CHARS:
            raise InvalidStateError(f"Bad hand token {token!r}")
        seat = Seat(SEAT_CHARS.index(seat_char.upper()))
        if seat in hands:
            raise InvalidStateError(f"Seat {seat_char} given twice")
        try:
            hands[seat] = pbn_to_hand(pbn)
        except ValueError as e:
            raise InvalidStateError(str(e)) from e
    return hands


def _build_deal(hands: dict[Seat, list[int]]) -> Deal:
    if set(hands) != set(Seat):
        raise InvalidStateError("A deal needs all four hands")
    try:
        return Deal.from_hands([hands[s] for s in Seat])
    except ValueError as e:
        raise InvalidStateError(str(e)) from e


def deserialize(text: str, config: GameConfig, seed: int = 0) -> AuctionState:
    """Inverse of :func:`serialize` for a game built with *config*."""
    lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
    if not lines:
        return new_state(config, seed)

    layouts: list[Deal] = []
    actions: list[int] | None = None
    for line in lines:
        keyword, _, rest = line.partition(" ")
        if keyword == "deal":
            if layouts:
                raise InvalidStateError("More than one 'deal' line")
            layouts.append(_build_deal(_parse_hands(rest)))
        elif keyword == "redeal":
            if not layouts:
                raise InvalidStateError("'redeal' before 'deal'")
            hands = _parse_hands(rest)
            if set(hands) != set(_OPPONENTS):
                raise InvalidStateError("A redeal lists exactly North and South")
            hands[Seat.WEST] = layouts[0].hand(Seat.WEST)
            hands[Seat.EAST] = layouts[0].hand(Seat.EAST)
            layouts.append(_build_deal(hands))
        elif keyword == "auction":
            if actions is not None:
                raise InvalidStateError("More than one 'auction' line")
            try:
                actions = parse_calls(rest)
            except ValueError as e:
                raise InvalidStateError(str(e)) from e
        else:
            raise InvalidStateError(f"Unknown line {line!r}")

    if not layouts:
        raise InvalidStateError("Missing 'deal' line")
    if actions is None:
        raise InvalidStateError("Missing 'auction' line")
    return restore_state(config, layouts, actions, seed=seed)


# ---------------------------------------------------------------------------
#  Human-readable rendering
# ---------------------------------------------------------------------------


def to_string(state: AuctionState) -> str:
    if state.deal is None:
        return "(not dealt)"
    lines = [f"{_SEAT_NAMES[s] + ':':<7}{state.deal.hand_string(s)}" for s in Seat]
    lines.append(f"Auction: {auction_string(state.actions) or '-'}")
    if is_terminal(state):
        p0, p1 = state.scored_returns
        lines.append(f"Contract: {contract(state)}")
        lines.append(f"Returns: {p0:g} / {p1:g}")
    return "\n".join(lines)
