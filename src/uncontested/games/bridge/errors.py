"""Exceptions raised by the uncontested bidding engine."""

from __future__ import annotations


class BiddingError(ValueError):
    """Base class for every engine error."""


class InvalidStateError(BiddingError):
    """Operation not allowed in the current phase (or malformed state/config)."""


class IllegalActionError(BiddingError):
    """Action is not in ``legal_actions()`` for the current state."""

    def __init__(self, action: int, legal: list[int]) -> None:
        super().__init__(f"Illegal action {action}; legal actions are {legal}")
        self.action = action
        self.legal = legal


class NotTerminalError(BiddingError):
    """Returns were requested before the auction finished."""


class RetryLimitExceededError(BiddingError):
    """The deal filter rejected every deal within the attempt limit."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Deal filter rejected {attempts} consecutive deals")
        self.attempts = attempts
