from core.ball_physics import BallPhysics, StepOutcome
from core.countdown import ServeCountdown
from core.gesture_classifier import GestureClassifier
from core.input_mapper import InputMapper
from core.match import MatchStateMachine
from core.opponent import OpponentController
from core.presence import HandPresence
from core.serve_rotation import ServeRotation, is_deuce, is_match_won

# camera and hand_tracker pull in OpenCV / MediaPipe; import them directly.
__all__ = [
    "BallPhysics",
    "StepOutcome",
    "ServeCountdown",
    "GestureClassifier",
    "InputMapper",
    "MatchStateMachine",
    "OpponentController",
    "HandPresence",
    "ServeRotation",
    "is_deuce",
    "is_match_won",
]
