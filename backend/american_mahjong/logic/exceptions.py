"""Typed domain exceptions for game rule violations.

Rule violations raised by the transition handlers (charleston.py, turn.py,
call_resolution.py) use subclasses of GameRuleError. They never reach callers
of apply_action: the action_handlers boundary catches them, logs the reason,
and returns the unchanged state.
"""


class GameRuleError(Exception):
    """Base exception for game rule violations.

    Raised by domain logic when an action is not applicable to the current
    state. Caught at the apply_action boundary and converted to a no-op.
    """


class InvalidActionError(GameRuleError):
    """Action is not valid in the current phase or for the acting seat."""


class InvalidTileError(GameRuleError):
    """Tile is not held by the seat that tried to use it."""


class InvalidCharlestonPassError(GameRuleError):
    """Charleston pass does not name exactly the required distinct held tiles."""


class InvalidClaimError(GameRuleError):
    """Claim is not the one on offer, or the hand no longer supports it."""


class UnsupportedSettingsError(GameRuleError):
    """Game settings contain unsupported values that cannot be silently ignored."""
