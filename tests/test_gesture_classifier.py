"""
Gesture predicates and the classifier that combines them.
"""
from types import SimpleNamespace

import pytest

from core.gesture_classifier import GestureClassifier
from domain.errors import MalformedHandFrameError
from domain.models import HandFrame
from gestures.fist import FistGesture
from gestures.index_bend import IndexBendGesture

from conftest import bent_index_hand, build_hand, fist_hand, open_hand


def test_open_hand_is_neither_fist_nor_bent():
    signals = GestureClassifier().classify(open_hand())
    assert signals.detected
    assert not signals.is_fist
    assert not signals.index_bent


def test_fist_detected():
    signals = GestureClassifier().classify(fist_hand())
    assert signals.is_fist


def test_bent_index_without_fist():
    signals = GestureClassifier().classify(bent_index_hand())
    assert signals.index_bent
    assert not signals.is_fist


def test_no_hand_reports_nothing():
    signals = GestureClassifier().classify(None)
    assert not signals.detected
    assert not signals.is_fist
    assert not signals.index_bent


def test_fist_uses_mean_of_four_fingertips():
    # Index far out, other three tucked in: mean = (0.2 + 3 * 0.02) / 4 = 0.065
    hand = build_hand(tip_reach=0.02, index_reach=0.2)
    gesture = FistGesture(threshold=0.08)
    assert gesture.measure(hand) == pytest.approx(0.065)
    assert gesture.detect(hand)


def test_fist_threshold_is_strict_and_stable():
    # 0.5 - 0.125 is exact in binary, so every distance is exactly 0.125
    hand = build_hand(tip_reach=0.125)
    gesture = FistGesture(threshold=0.125)
    assert gesture.measure(hand) == 0.125
    results = {gesture.detect(hand) for _ in range(20)}
    assert results == {False}


def test_index_bend_threshold_is_strict():
    hand = build_hand(index_reach=0.25, mcp_reach=0.125)
    assert not IndexBendGesture(threshold=0.125).detect(hand)
    assert IndexBendGesture(threshold=0.126).detect(hand)


def test_wrong_landmark_count_fails_fast():
    with pytest.raises(MalformedHandFrameError):
        HandFrame.from_points([(0.5, 0.5)] * 20)


def test_hand_frame_accepts_landmark_objects():
    points = [SimpleNamespace(x=0.1 * (i % 10), y=0.5, z=0.0) for i in range(21)]
    hand = HandFrame.from_points(points)
    assert hand[3].x == pytest.approx(0.3)
    assert hand[3].y == 0.5
