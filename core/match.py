"""
MatchStateMachine — owns the phase, the scores and the serve, and runs
every other component once per tick.

    INITIALIZING → AWAITING_HAND → MENU → SERVING ⇄ ACTIVE → GAME_OVER
                                     ↑___________(fist)__________|

Per tick, in order:
  1. classify the hand and update the presence debounce
  2. map the hand onto the player paddle
  3. react to gestures that are valid for the current phase
  4. move the opponent, then the ball (or keep it pinned while serving)
  5. score, rotate the serve, re-enter SERVING or stop at GAME_OVER

Gestures that make no sense in the current phase are ignored, not errors.
"""
from __future__ import annotations
import random
from typing import Optional

from app.config import GameConfig, default_config
from core.ball_physics import BallPhysics
from core.countdown import ServeCountdown
from core.gesture_classifier import GestureClassifier
from core.input_mapper import InputMapper
from core.opponent import OpponentController
from core.presence import HandPresence
from core.serve_rotation import ServeRotation, is_match_won
from domain.enums import MatchPhase, PresenceChange, ServeGate, Side
from domain.models import GameSnapshot, HandFrame, Scoreboard, TableState
from utils.constants import STATUS_DETECTED, STATUS_INITIALIZING, STATUS_LOST


class MatchStateMachine:
    """
    The single writer of the match phase and of all simulation state.

    Parameters
    ----------
    config : GameConfig
    rng : random.Random
        Shared by the physics (launch bias) and the opponent (error offset).
    countdown : ServeCountdown
        Display counter; created here unless a driver supplies its own.
    """

    def __init__(
        self,
        config: GameConfig = default_config,
        rng: Optional[random.Random] = None,
        countdown: Optional[ServeCountdown] = None,
    ) -> None:
        cfg = config
        self._cfg = cfg
        self._rng = rng or random.Random()

        self._classifier = GestureClassifier(cfg.fist_threshold, cfg.bend_threshold)
        self._presence   = HandPresence(cfg.lost_hand_frames)
        self._mapper     = InputMapper(cfg.field_width, cfg.paddle_half_width, cfg.smoothing)
        self._physics    = BallPhysics(cfg, self._rng)
        self._opponent   = OpponentController(
            cfg.field_width,
            cfg.paddle_half_width,
            speed=cfg.opponent_speed,
            serve_error_range=cfg.serve_error_range,
            rally_error_range=cfg.rally_error_range,
            rng=self._rng,
        )
        self._rotation  = ServeRotation(cfg.serves_per_turn, cfg.deuce_threshold)
        self._countdown = countdown or ServeCountdown(cfg.countdown_start)
        self._scores    = Scoreboard()

        center = cfg.field_width / 2
        self._table = TableState(
            player_x=center,
            opponent_x=center,
            ball=self._physics.reset_for_serve(Side.PLAYER),
        )

        self._phase: MatchPhase = MatchPhase.INITIALIZING
        self._hand_status = STATUS_INITIALIZING
        self._landmarks: tuple = ()
        self._serve_requested = False
        self._serve_ticks = 0
        self._fist_held = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def phase(self) -> MatchPhase:
        return self._phase

    @property
    def scores(self) -> Scoreboard:
        return self._scores

    @property
    def server(self) -> Side:
        return self._rotation.server

    @property
    def table(self) -> TableState:
        return self._table

    @property
    def countdown(self) -> ServeCountdown:
        return self._countdown

    @property
    def opponent(self) -> OpponentController:
        return self._opponent

    @property
    def hand_detected(self) -> bool:
        return self._presence.detected

    # ------------------------------------------------------------------
    # External events
    # ------------------------------------------------------------------
    def on_source_ready(self) -> None:
        """The video source delivered its first frame."""
        if self._phase is MatchPhase.INITIALIZING:
            self._phase = MatchPhase.AWAITING_HAND

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def update(self, hand: Optional[HandFrame]) -> GameSnapshot:
        """Advance the whole simulation by one tick."""
        signals = self._classifier.classify(hand)

        change = self._presence.update(hand)
        if change is PresenceChange.ACQUIRED:
            self._hand_status = STATUS_DETECTED
        elif change is PresenceChange.LOST:
            self._hand_status = STATUS_LOST
            self._landmarks = ()
            self._fist_held = False

        if self._phase is MatchPhase.AWAITING_HAND and self._presence.detected:
            self._phase = MatchPhase.MENU

        if hand is not None:
            self._landmarks = hand.landmarks
            self._mapper.update(self._table, hand)

            if self._phase in (MatchPhase.MENU, MatchPhase.GAME_OVER):
                # Only a freshly closed fist starts a match.
                if signals.is_fist and not self._fist_held:
                    self.start_match()
            elif self._phase is MatchPhase.SERVING and self.server is Side.PLAYER:
                if signals.index_bent:
                    self.request_serve()
            self._fist_held = signals.is_fist

        if self._phase in (MatchPhase.ACTIVE, MatchPhase.SERVING):
            self._opponent.update(self._table, self._phase, self.server)

        if self._phase is MatchPhase.ACTIVE:
            outcome = self._physics.step(self._table)
            if outcome.contact is Side.PLAYER:
                self._opponent.on_player_contact()
            if outcome.scorer is not None:
                self.score_point(outcome.scorer)
        elif self._phase is MatchPhase.SERVING:
            self._hold_serve()

        return self.snapshot()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start_match(self) -> None:
        """Fresh match from MENU or GAME_OVER: 0–0, player serves first."""
        if self._phase not in (MatchPhase.MENU, MatchPhase.GAME_OVER):
            return
        self._scores.reset()
        self._rotation.reset(Side.PLAYER)
        self._begin_serve()

    def request_serve(self) -> bool:
        """
        Ask for the serve to be taken. Honoured according to the configured
        gate; returns True when the ball was launched right away.
        """
        if self._phase is not MatchPhase.SERVING:
            return False
        gate = self._cfg.serve_gate
        if gate is ServeGate.IMMEDIATE or not self._countdown.running:
            self._launch()
            return True
        if gate is ServeGate.BUFFERED:
            self._serve_requested = True
        return False

    def score_point(self, winner: Side) -> None:
        """Credit a point, then either end the match or set up the next serve."""
        self._scores.award(winner)
        if is_match_won(self._scores, self._cfg.winning_score, self._cfg.win_margin):
            self._phase = MatchPhase.GAME_OVER
            self._countdown.cancel()
            self._serve_requested = False
            return
        self._rotation.record_point(self._scores)
        self._begin_serve()

    # ------------------------------------------------------------------
    def _begin_serve(self) -> None:
        self._phase = MatchPhase.SERVING
        self._table.ball = self._physics.reset_for_serve(self.server)
        self._opponent.prepare_serve(self._table.ball)
        self._physics.pin_to_server(self._table, self.server)
        self._countdown.restart()
        self._serve_requested = False
        self._serve_ticks = 0

    def _hold_serve(self) -> None:
        self._physics.pin_to_server(self._table, self.server)
        self._serve_ticks += 1

        if self._serve_requested and not self._countdown.running:
            self._launch()
        elif (self.server is Side.OPPONENT
                and self._serve_ticks >= self._cfg.opponent_serve_delay_ticks):
            self.request_serve()

    def _launch(self) -> None:
        self._physics.launch(self._table.ball)
        self._phase = MatchPhase.ACTIVE
        self._countdown.cancel()
        self._serve_requested = False

    # ------------------------------------------------------------------
    def snapshot(self) -> GameSnapshot:
        ball = self._table.ball
        return GameSnapshot(
            phase=self._phase,
            player_x=self._table.player_x,
            opponent_x=self._table.opponent_x,
            ball=ball.position,
            ball_velocity=(ball.dx, ball.dy),
            player_score=self._scores.player,
            opponent_score=self._scores.opponent,
            server=self.server,
            countdown=self._countdown.value,
            hand_detected=self._presence.detected,
            hand_status=self._hand_status,
            winner=self._scores.leader if self._phase is MatchPhase.GAME_OVER else None,
            landmarks=self._landmarks,
        )
