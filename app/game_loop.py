"""
GameLoop — drives the match from the GUI thread.

Two timers live on the same Qt event loop:
  * the tick timer (display rate) fetches the latest hand, runs one
    MatchStateMachine.update and publishes the snapshot;
  * the countdown timer (1 s) only advances the serve countdown display.

Both run on one thread, so the match has a single writer. stop() cancels
both timers so nothing mutates the match after teardown.
"""
from __future__ import annotations
from typing import Optional, Tuple

import numpy as np
from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from app.config import GameConfig, default_config
from core.hand_tracker import HandTracker
from core.match import MatchStateMachine
from domain.enums import MatchPhase
from domain.errors import TrackerInitError
from domain.models import GameSnapshot


class GameLoop(QObject):
    """
    Signals:
        snapshot_ready — GameSnapshot after every tick
        status_msg     — tagged log line ([PHASE], [POINT], [HAND], [ERROR])
        init_failed    — tracker could not start; the loop stays stopped
    """

    snapshot_ready = pyqtSignal(object)
    status_msg     = pyqtSignal(str)
    init_failed    = pyqtSignal(str)

    def __init__(
        self,
        config: GameConfig = default_config,
        tracker: Optional[HandTracker] = None,
        match: Optional[MatchStateMachine] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._config  = config
        self._tracker = tracker or HandTracker(
            config.model_path,
            config.model_url,
            config.min_detection_confidence,
            config.min_tracking_confidence,
        )
        self._match = match or MatchStateMachine(config)

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(config.tick_interval_ms)
        self._tick_timer.timeout.connect(self.tick)

        self._countdown_timer = QTimer(self)
        self._countdown_timer.setInterval(config.countdown_interval_ms)
        self._countdown_timer.timeout.connect(self._on_countdown)

        self._latest: Optional[Tuple[np.ndarray, int]] = None
        self._countdown_generation = self._match.countdown.generation
        self._prev: Optional[GameSnapshot] = None

    # ------------------------------------------------------------------
    @property
    def match(self) -> MatchStateMachine:
        return self._match

    @property
    def running(self) -> bool:
        return self._tick_timer.isActive()

    @property
    def countdown_active(self) -> bool:
        return self._countdown_timer.isActive()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> bool:
        try:
            self._tracker.initialize()
        except TrackerInitError as exc:
            self.status_msg.emit(f"[ERROR] Tracker: {exc}")
            self.init_failed.emit(str(exc))
            return False
        self._tick_timer.start()
        self.status_msg.emit("[LOOP] Started")
        return True

    def stop(self) -> None:
        self._tick_timer.stop()
        self._countdown_timer.stop()
        self._match.countdown.cancel()
        self._tracker.release()
        self._latest = None
        self.status_msg.emit("[LOOP] Stopped")

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def on_source_ready(self) -> None:
        self._match.on_source_ready()

    def on_frame(self, frame: np.ndarray, timestamp_ms: int) -> None:
        """Keep only the newest frame; the next tick decides what to do with it."""
        self._latest = (frame, timestamp_ms)

    def tick(self) -> GameSnapshot:
        hand = None
        if self._latest is not None:
            frame, stamp = self._latest
            hand = self._tracker.detect(frame, stamp)

        snapshot = self._match.update(hand)
        self._sync_countdown_timer()
        self._report(snapshot)
        self.snapshot_ready.emit(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    def _on_countdown(self) -> None:
        if not self._match.countdown.advance():
            self._countdown_timer.stop()

    def _sync_countdown_timer(self) -> None:
        countdown = self._match.countdown
        if countdown.generation != self._countdown_generation:
            # A new serve phase began: restart the interval from zero.
            self._countdown_generation = countdown.generation
            self._countdown_timer.start()
        elif not countdown.running and self._countdown_timer.isActive():
            self._countdown_timer.stop()

    def _report(self, snap: GameSnapshot) -> None:
        prev = self._prev
        self._prev = snap
        if prev is None:
            return

        if snap.hand_status != prev.hand_status:
            self.status_msg.emit(f"[HAND] {snap.hand_status}")

        if (snap.player_score, snap.opponent_score) != (prev.player_score, prev.opponent_score):
            self.status_msg.emit(
                f"[POINT] You {snap.player_score} - {snap.opponent_score} Opponent"
            )

        if snap.phase != prev.phase:
            self.status_msg.emit(f"[PHASE] {prev.phase.value} → {snap.phase.value}")
            if snap.phase is MatchPhase.GAME_OVER and snap.winner is not None:
                self.status_msg.emit(f"[PHASE] Winner: {snap.winner.value}")
