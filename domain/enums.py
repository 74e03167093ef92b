from enum import Enum


class MatchPhase(str, Enum):
    """Phases of a match. Only MatchStateMachine writes the current one."""
    INITIALIZING  = "INITIALIZING"
    AWAITING_HAND = "AWAITING_HAND"
    MENU          = "MENU"
    SERVING       = "SERVING"
    ACTIVE        = "ACTIVE"
    GAME_OVER     = "GAME_OVER"


class Side(str, Enum):
    """The two ends of the table. PLAYER is the bottom, OPPONENT the top."""
    PLAYER   = "PLAYER"
    OPPONENT = "OPPONENT"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class ServeGate(str, Enum):
    """When a serve trigger is honoured relative to the serve countdown."""
    IMMEDIATE       = "IMMEDIATE"
    AFTER_COUNTDOWN = "AFTER_COUNTDOWN"
    BUFFERED        = "BUFFERED"


class PresenceChange(str, Enum):
    """Edges reported by the hand-presence debounce."""
    ACQUIRED = "ACQUIRED"
    LOST     = "LOST"
