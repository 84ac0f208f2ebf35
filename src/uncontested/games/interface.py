"""Generic game interface for search, self-play and evaluation code.

A game implements this protocol so that callers never need to know
its rules.  States are opaque to the caller; the game object owns
every rule query and transition.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import numpy as np


# Generic type aliases; concrete games define their own State / Action types.
State = Any
Action = Any


@runtime_checkable
class GameInterface(Protocol):
    """Protocol that every game must implement."""

    # ------------------------------------------------------------------
    #  Game description
    # ------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        ...

    @property
    def num_distinct_actions(self) -> int:
        """Size of the action-id space."""
        ...

    @property
    def max_game_length(self) -> int:
        ...

    def min_utility(self) -> float:
        ...

    def max_utility(self) -> float:
        ...

    # ------------------------------------------------------------------
    #  Game rules
    # ------------------------------------------------------------------

    def new_initial_state(self) -> State:
        """Fresh state with its own, independently seeded RNG."""
        ...

    def current_player(self, state: State) -> int:
        """Index of the player who acts next (negative for chance / terminal)."""
        ...

    def legal_actions(self, state: State) -> list[Action]:
        ...

    def apply(self, state: State, action: Action) -> State:
        """Apply *action* and return a **new** state (no mutation)."""
        ...

    def is_terminal(self, state: State) -> bool:
        ...

    def returns(self, state: State) -> list[float]:
        """Per-player returns.  Only defined on terminal states."""
        ...

    def clone(self, state: State) -> State:
        ...

    # ------------------------------------------------------------------
    #  Observations and text forms
    # ------------------------------------------------------------------

    @property
    def state_dim(self) -> int:
        """Length of the observation vector."""
        ...

    def encode_state(self, state: State, player: int) -> np.ndarray:
        """Encode *player*'s observation into a 1-D float array."""
        ...

    def action_to_string(self, action: Action) -> str:
        ...

    def serialize_state(self, state: State) -> str:
        ...

    def deserialize_state(self, text: str) -> State:
        ...
