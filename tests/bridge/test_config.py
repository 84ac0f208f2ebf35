"""Tests for GameConfig construction and validation."""

from __future__ import annotations

import json

import pytest

from uncontested.games.bridge.bids import PASS, PASSED_OUT, string_to_action
from uncontested.games.bridge.cards import pbn_to_hand
from uncontested.games.bridge.config import (
    OPEN_2NT,
    GameConfig,
    load_config,
    relative_references,
)
from uncontested.games.bridge.deal import any_deal, is_2nt_opening
from uncontested.games.bridge.errors import InvalidStateError


class TestFromParams:
    def test_defaults(self):
        config = GameConfig.from_params({})
        assert config.forced_actions == ()
        assert config.deal_filter is any_deal
        assert config.reference_contracts == ()
        assert not config.relative
        assert config.num_layouts == 1
        assert config.max_deal_attempts is None

    def test_2nt_subgame(self):
        config = GameConfig.from_params({"subgame": "2NT"})
        assert OPEN_2NT == 9
        assert config.forced_actions == (OPEN_2NT,)
        assert config.deal_filter is is_2nt_opening

    def test_string_values(self):
        config = GameConfig.from_params({
            "relative_scoring": "true",
            "vulnerable": "no",
            "num_layouts": "4",
            "rng_seed": "12",
            "max_deal_attempts": "500",
        })
        assert config.relative
        assert not config.vulnerable
        assert config.num_layouts == 4
        assert config.rng_seed == 12
        assert config.max_deal_attempts == 500

    def test_forced_actions_override(self):
        config = GameConfig.from_params({"forced_actions": "1NT Pass"})
        assert config.forced_actions == (string_to_action("1NT"), PASS)
        config = GameConfig.from_params({"forced_actions": [0, 3]})
        assert config.forced_actions == (0, 3)

    def test_opener_hand_disables_filter(self):
        config = GameConfig.from_params({"subgame": "2NT", "opener_hand": "AKJ2.KQ9.K84.A52"})
        assert config.opener_hand == tuple(pbn_to_hand("AKJ2.KQ9.K84.A52"))
        assert config.deal_filter is any_deal
        assert config.forced_actions == (OPEN_2NT,)

    @pytest.mark.parametrize("params", [
        {"subgame": "1NT"},
        {"colour": "red"},
        {"forced_actions": "2NT 1C"},
        {"forced_actions": "1Z"},
        {"forced_actions": "Pass Pass 1C"},
        {"forced_actions": [36]},
        {"num_layouts": 0},
        {"max_deal_attempts": 0},
        {"opener_hand": "AKQ.JT9"},
    ])
    def test_rejects(self, params):
        with pytest.raises(InvalidStateError):
            GameConfig.from_params(params)


class TestReferences:
    def test_free_auction(self):
        refs = relative_references(())
        assert len(refs) == 71
        assert refs[0] == PASSED_OUT

    def test_after_forced_2nt(self):
        refs = relative_references((OPEN_2NT,))
        assert len(refs) == 52
        assert PASSED_OUT not in refs

    def test_relative_flag_builds_references(self):
        config = GameConfig.from_params({"subgame": "2NT", "relative_scoring": True})
        assert config.reference_contracts == relative_references((OPEN_2NT,))


class TestBounds:
    def test_relative_bounds(self):
        config = GameConfig.from_params({"relative_scoring": True, "vulnerable": True})
        assert config.min_utility() == -1300 - 2220
        assert config.max_utility() == 0


class TestLoadConfig:
    def test_reads_json(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text(json.dumps({"subgame": "2NT", "num_layouts": 2}))
        config = load_config(path)
        assert config.forced_actions == (OPEN_2NT,)
        assert config.num_layouts == 2

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text("[1, 2]")
        with pytest.raises(InvalidStateError):
            load_config(path)
