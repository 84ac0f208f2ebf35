"""Per-player observations of an auction state.

  Section                     Features   Offset
  ─────────────────────────────────────────────
  Own hand (one-hot cards)        52        0
  West's calls (one-hot)          36       52
  East's calls (one-hot)          36       88
  Player to move (one-hot)         2      124
  ─────────────────────────────────────────────
  Total                          126

Only the observer's own 13 cards are ever encoded.  Partner's and the
opponents' hands and any trick count stay hidden, terminal or not.
"""

from __future__ import annotations

import numpy as np

from uncontested.games.bridge.auction import AuctionState, current_player, is_terminal
from uncontested.games.bridge.bids import NUM_ACTIONS, NUM_PLAYERS, auction_string
from uncontested.games.bridge.cards import NUM_CARDS, SEAT_CHARS

_HAND_OFF = 0
_AUCTION_OFF = _HAND_OFF + NUM_CARDS                  # 52
_TURN_OFF = _AUCTION_OFF + NUM_PLAYERS * NUM_ACTIONS  # 124

STATE_DIM = _TURN_OFF + NUM_PLAYERS                   # 126


def _check_player(player: int) -> None:
    if player not in range(NUM_PLAYERS):
        raise ValueError(f"Player must be 0 or 1, got {player}")


def encode_state(state: AuctionState, player: int) -> np.ndarray:
    """Flat float vector of what *player* can see."""
    _check_player(player)
    x = np.zeros(STATE_DIM, dtype=np.float64)
    if state.deal is None:
        return x

    for card in state.deal.hand(player):
        x[_HAND_OFF + card] = 1.0
    for i, action in enumerate(state.actions):
        x[_AUCTION_OFF + (i % NUM_PLAYERS) * NUM_ACTIONS + action] = 1.0

    to_move = current_player(state)
    if to_move in range(NUM_PLAYERS):
        x[_TURN_OFF + to_move] = 1.0
    return x


def information_state(state: AuctionState, player: int) -> str:
    """Text observation, e.g. ``'W AKJ2.Q93.K84.A52 2NT-3C'``."""
    _check_player(player)
    if state.deal is None:
        return ""
    text = f"{SEAT_CHARS[player]} {state.deal.hand_string(player)}"
    if state.actions:
        text += " " + auction_string(state.actions)
    if is_terminal(state):
        text += " (end)"
    return text
