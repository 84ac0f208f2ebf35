from __future__ import annotations

import argparse
import logging

from uncontested.games.bridge.adapter import UncontestedBiddingGame
from uncontested.games.bridge.bids import action_to_string, parse_calls
from uncontested.games.bridge.config import SUBGAMES, GameConfig, load_config


def _build_config(args: argparse.Namespace) -> GameConfig:
    if args.config:
        return load_config(args.config)
    params = {
        "subgame": args.subgame,
        "relative_scoring": args.relative,
        "vulnerable": args.vulnerable,
        "num_layouts": args.num_layouts,
    }
    if args.max_deal_attempts is not None:
        params["max_deal_attempts"] = args.max_deal_attempts
    if args.opener_hand:
        params["opener_hand"] = args.opener_hand
    return GameConfig.from_params(params)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Uncontested bridge bidding: deal and inspect one auction")
    parser.add_argument("--subgame", type=str, default="", choices=sorted(SUBGAMES))
    parser.add_argument("--seed", type=int, default=0, help="Seed for this deal's RNG stream.")
    parser.add_argument("--relative", action="store_true", help="Score East relative to the best contract.")
    parser.add_argument("--vulnerable", action="store_true")
    parser.add_argument("--num-layouts", type=int, default=1, help="Opponent layouts averaged when scoring.")
    parser.add_argument("--max-deal-attempts", type=int, default=None)
    parser.add_argument("--opener-hand", type=str, default="", help="Fix West's hand, e.g. 'AKJ2.Q93.K84.A52'.")
    parser.add_argument(
        "--config",
        type=str,
        default="",
        help="JSON file with game parameters (overrides the flags above).",
    )
    parser.add_argument(
        "--calls",
        type=str,
        default="",
        help="Calls to apply after the deal, e.g. '3C Pass 3NT Pass Pass'.",
    )
    parser.add_argument("--serialize", action="store_true", help="Print the serialized state instead.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        game = UncontestedBiddingGame(_build_config(args))
        state = game.new_game(seed=args.seed)
        for action in parse_calls(args.calls):
            game.apply_in_place(state, action)
    except ValueError as e:
        raise SystemExit(f"error: {e}")

    if args.serialize:
        print(game.serialize_state(state))
        return 0

    print(state)
    print(f"Deal attempts: {state.deal_attempts}")
    if not game.is_terminal(state):
        player = game.current_player(state)
        legal = " ".join(action_to_string(a) for a in game.legal_actions(state))
        print(f"To move: {'WE'[player]}  Legal: {legal}")
        print(f"Observation: {game.information_state(state, player)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
