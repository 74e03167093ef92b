"""
GameLoop wiring: init failure, timer lifecycle, per-frame de-duplication.
"""
from types import SimpleNamespace

import numpy as np
import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")
QtCore = pytest.importorskip("PyQt6.QtCore")

from app.config import GameConfig
from app.game_loop import GameLoop
from core.hand_tracker import HandTracker
from domain.enums import MatchPhase

from conftest import fist_hand, open_hand


class StubLandmarker:

    def __init__(self):
        self.hand = None
        self.calls = 0

    def detect_for_video(self, image, timestamp_ms):
        self.calls += 1
        found = [] if self.hand is None else [list(self.hand.landmarks)]
        return SimpleNamespace(hand_landmarks=found)

    def close(self):
        pass


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


@pytest.fixture
def frame():
    return np.zeros((48, 64, 3), dtype=np.uint8)


@pytest.fixture
def stub():
    return StubLandmarker()


@pytest.fixture
def loop(qt_app, tmp_path, stub):
    tracker = HandTracker(tmp_path / "model.task", landmarker=stub)
    game = GameLoop(GameConfig(), tracker=tracker)
    yield game
    game.stop()


def feed(loop, stub, frame, hand, stamp):
    stub.hand = hand
    loop.on_frame(frame, stamp)
    return loop.tick()


def test_tracker_failure_keeps_loop_stopped(qt_app, tmp_path):
    tracker = HandTracker(tmp_path / "missing.task", model_url="")
    game = GameLoop(GameConfig(), tracker=tracker)
    failures, log = [], []
    game.init_failed.connect(failures.append)
    game.status_msg.connect(log.append)

    assert game.start() is False
    assert not game.running
    assert len(failures) == 1
    assert any(line.startswith("[ERROR]") for line in log)


def test_start_and_stop_cancel_both_timers(loop, stub, frame):
    assert loop.start() is True
    assert loop.running

    loop.on_source_ready()
    feed(loop, stub, frame, open_hand(), 1)
    snap = feed(loop, stub, frame, fist_hand(), 2)
    assert snap.phase is MatchPhase.SERVING
    assert loop.countdown_active

    loop.stop()
    assert not loop.running
    assert not loop.countdown_active
    assert loop.match.countdown.value is None


def test_frame_is_used_once(loop, stub, frame):
    loop.on_source_ready()
    feed(loop, stub, frame, open_hand(x=0.25), 1)
    x = loop.match.table.player_x
    assert x == pytest.approx(704.0)

    loop.tick()
    assert loop.match.table.player_x == x
    assert stub.calls == 1


def test_snapshot_and_phase_messages(loop, stub, frame):
    snaps, log = [], []
    loop.snapshot_ready.connect(snaps.append)
    loop.status_msg.connect(log.append)

    loop.on_source_ready()
    loop.tick()
    feed(loop, stub, frame, open_hand(), 1)

    assert len(snaps) == 2
    assert snaps[-1].phase is MatchPhase.MENU
    assert any(line.startswith("[PHASE]") for line in log)
    assert any(line.startswith("[HAND]") for line in log)
