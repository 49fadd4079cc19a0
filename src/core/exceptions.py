"""
Custom exceptions.

Two families matter to the caller:
* RejectedCommandError: the command is not allowed right now. Nothing was changed, the game stays where it was.
* ContractViolationError: the caller handed over something that cannot exist (stale piece reference, unknown game).
"""


class GameError(Exception):
    """Top-level exception of the application. The service simply propagates anything deriving from it."""


# --- REJECTED COMMANDS ---
class RejectedCommandError(GameError):
    """Invalid transition. The state machine remains in its prior state."""


class GameStateError(RejectedCommandError):
    """Command not available in the current phase."""


class NotYourTurnError(RejectedCommandError):
    pass


class IllegalMoveError(RejectedCommandError):
    pass


class DraftError(RejectedCommandError):
    """Selection out of bounds, or finishing the draft with the wrong roster total."""


class PlacementError(RejectedCommandError):
    pass


# --- STRUCTURAL IMPOSSIBILITIES ---
class ContractViolationError(GameError):
    """The caller passed a stale or corrupt reference."""


class PieceNotFoundError(ContractViolationError):
    pass


class GameNotFoundError(ContractViolationError):
    pass


# --- PARSING / VALIDATION ---
class InvalidRequestError(GameError):
    pass


class InvalidNotationError(GameError):
    pass
