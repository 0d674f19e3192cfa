from __future__ import annotations


class DealerError(Exception):
    """Base error raised by the dealer. ``code`` is what the host sends to clients."""

    code = "DEALER_ERROR"


class EmptyDeck(DealerError, ValueError):
    code = "EMPTY_DECK"


class InvalidHandSize(DealerError, ValueError):
    code = "INVALID_HAND_SIZE"


class InsufficientPlayers(DealerError, RuntimeError):
    code = "INSUFFICIENT_PLAYERS"


class RosterLocked(DealerError, RuntimeError):
    code = "ROUND_IN_PROGRESS"


class TableFull(DealerError, RuntimeError):
    code = "TABLE_FULL"
