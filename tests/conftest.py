"""
Shared helpers: synthetic hand frames with controllable finger reach.
"""
import random

import pytest

from domain.models import HandFrame

WRIST_Y = 0.5


def build_hand(x=0.5, tip_reach=0.3, index_reach=None, mcp_reach=0.1):
    """
    All landmarks on a vertical line through `x`. Fingertips 12/16/20 sit
    `tip_reach` above the wrist, the index tip `index_reach` above it and
    the four MCPs `mcp_reach` above it.

    mean fingertip→wrist = (index_reach + 3 * tip_reach) / 4
    index tip→MCP        = |index_reach - mcp_reach|
    """
    if index_reach is None:
        index_reach = tip_reach
    points = [(x, WRIST_Y - 0.02)] * 21
    points[0] = (x, WRIST_Y)
    for mcp in (5, 9, 13, 17):
        points[mcp] = (x, WRIST_Y - mcp_reach)
    points[8] = (x, WRIST_Y - index_reach)
    for tip in (12, 16, 20):
        points[tip] = (x, WRIST_Y - tip_reach)
    return HandFrame.from_points(points)


def open_hand(x=0.5):
    return build_hand(x=x, tip_reach=0.3)


def fist_hand(x=0.5):
    return build_hand(x=x, tip_reach=0.05)


def bent_index_hand(x=0.5):
    return build_hand(x=x, tip_reach=0.3, index_reach=0.13)


class FixedRandom(random.Random):
    """random() always returns the same value; uniform() follows from it."""

    def __init__(self, value=0.5):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def rng():
    return random.Random(1234)
