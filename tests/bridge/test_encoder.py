"""Tests for the per-player observation vector and text observation."""

from __future__ import annotations

import numpy as np
import pytest

from uncontested.games.bridge.bids import NUM_ACTIONS, PASS, string_to_action
from uncontested.games.bridge.cards import NUM_CARDS, Seat
from uncontested.games.bridge.deal import Deal
from uncontested.games.bridge.encoder import (
    STATE_DIM,
    _AUCTION_OFF,
    _TURN_OFF,
    encode_state,
    information_state,
)


def _b(text: str) -> int:
    return string_to_action(text)


class TestLayout:
    def test_dimension(self):
        assert STATE_DIM == 126
        assert _AUCTION_OFF == 52
        assert _TURN_OFF == 124

    def test_undealt_is_zero(self, make_game):
        state = make_game().new_initial_state()
        x = encode_state(state, 0)
        assert x.shape == (STATE_DIM,)
        assert not x.any()

    def test_bad_player(self, make_game):
        state = make_game().new_game(seed=1)
        with pytest.raises(ValueError):
            encode_state(state, 2)
        with pytest.raises(ValueError):
            information_state(state, -1)


class TestHand:
    @pytest.mark.parametrize("player", [0, 1])
    def test_only_own_cards(self, make_game, player):
        state = make_game().new_game(seed=2)
        x = encode_state(state, player)
        hand = np.flatnonzero(x[:NUM_CARDS])
        assert sorted(hand.tolist()) == sorted(state.deal.hand(player))

    def test_hidden_cards_do_not_leak(self, make_game):
        game = make_game({"num_layouts": 2})
        a = game.new_game(seed=2)
        b = game.clone(a)
        # Swap partner's hand with North's; West's view must not change.
        cards = list(b.layouts[0].cards)
        cards[13:26], cards[26:39] = cards[26:39], cards[13:26]
        b.layouts = (Deal(cards),) + b.layouts[1:]
        assert np.array_equal(encode_state(a, Seat.WEST), encode_state(b, Seat.WEST))
        assert information_state(a, Seat.WEST) == information_state(b, Seat.WEST)


class TestAuction:
    def test_calls_by_caller(self, make_game):
        game = make_game({"subgame": "2NT"})
        state = game.new_game(seed=4)
        game.apply_in_place(state, _b("3C"))
        game.apply_in_place(state, PASS)
        x = encode_state(state, 1)
        west = x[_AUCTION_OFF : _AUCTION_OFF + NUM_ACTIONS]
        east = x[_AUCTION_OFF + NUM_ACTIONS : _TURN_OFF]
        assert np.flatnonzero(west).tolist() == [_b("2NT"), PASS]
        assert np.flatnonzero(east).tolist() == [_b("3C")]

    def test_both_players_see_same_auction(self, make_game):
        game = make_game()
        state = game.new_game(seed=4)
        game.apply_in_place(state, _b("1H"))
        x0 = encode_state(state, 0)
        x1 = encode_state(state, 1)
        assert np.array_equal(x0[_AUCTION_OFF:], x1[_AUCTION_OFF:])


class TestTurn:
    def test_turn_bits(self, make_game):
        game = make_game()
        state = game.new_game(seed=5)
        assert encode_state(state, 1)[_TURN_OFF:].tolist() == [1.0, 0.0]
        game.apply_in_place(state, _b("1S"))
        assert encode_state(state, 0)[_TURN_OFF:].tolist() == [0.0, 1.0]

    def test_no_turn_when_terminal(self, make_game):
        game = make_game()
        state = game.new_game(seed=5)
        game.apply_in_place(state, PASS)
        game.apply_in_place(state, PASS)
        assert not encode_state(state, 0)[_TURN_OFF:].any()


class TestInformationState:
    def test_format(self, make_game):
        game = make_game({"subgame": "2NT"})
        state = game.new_game(seed=6)
        game.apply_in_place(state, _b("3C"))
        text = information_state(state, Seat.EAST)
        assert text == f"E {state.deal.hand_string(Seat.EAST)} 2NT-3C"

    def test_terminal_marker(self, make_game):
        game = make_game()
        state = game.new_game(seed=6)
        assert information_state(state, 0) == f"W {state.deal.hand_string(Seat.WEST)}"
        game.apply_in_place(state, PASS)
        game.apply_in_place(state, PASS)
        assert information_state(state, 0).endswith("Pass-Pass (end)")

    def test_undealt(self, make_game):
        assert information_state(make_game().new_initial_state(), 0) == ""
