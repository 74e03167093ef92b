"""
MatchStateMachine: phase flow, serve gating, scoring and match end.
"""
import random
from dataclasses import replace

import pytest

from app.config import GameConfig
from core.match import MatchStateMachine
from core.serve_rotation import is_match_won
from domain.enums import MatchPhase, ServeGate, Side
from domain.models import BallState
from utils.constants import STATUS_DETECTED, STATUS_INITIALIZING, STATUS_LOST

from conftest import FixedRandom, bent_index_hand, fist_hand, open_hand

CFG = GameConfig()


def in_menu(config=CFG, rng=None):
    match = MatchStateMachine(config, rng=rng or random.Random(1234))
    match.on_source_ready()
    match.update(open_hand())
    assert match.phase is MatchPhase.MENU
    return match


def serving(config=CFG, rng=None):
    match = in_menu(config, rng)
    match.update(fist_hand())
    assert match.phase is MatchPhase.SERVING
    return match


def finish_countdown(match):
    while match.countdown.advance():
        pass


def rallying(config=None, rng=None):
    match = serving(config or replace(CFG, serve_gate=ServeGate.IMMEDIATE), rng)
    match.update(bent_index_hand())
    assert match.phase is MatchPhase.ACTIVE
    return match


class TestPhaseFlow:

    def test_starts_initializing(self):
        match = MatchStateMachine(CFG)
        snap = match.update(None)
        assert snap.phase is MatchPhase.INITIALIZING
        assert snap.hand_status == STATUS_INITIALIZING
        assert not snap.hand_detected

    def test_waits_for_a_hand(self):
        match = MatchStateMachine(CFG)
        match.on_source_ready()
        assert match.update(None).phase is MatchPhase.AWAITING_HAND
        snap = match.update(open_hand())
        assert snap.phase is MatchPhase.MENU
        assert snap.hand_status == STATUS_DETECTED

    def test_hand_seen_before_camera_ready(self):
        match = MatchStateMachine(CFG)
        match.update(open_hand())
        assert match.phase is MatchPhase.INITIALIZING
        match.on_source_ready()
        assert match.update(None).phase is MatchPhase.MENU

    def test_bent_index_in_menu_is_ignored(self):
        match = in_menu()
        assert match.update(bent_index_hand()).phase is MatchPhase.MENU

    def test_fist_starts_player_serve(self):
        match = in_menu()
        snap = match.update(fist_hand())
        assert snap.phase is MatchPhase.SERVING
        assert snap.server is Side.PLAYER
        assert snap.countdown == CFG.countdown_start
        assert snap.ball.x == snap.player_x
        assert snap.ball.y == 665
        assert snap.ball_velocity == (0.0, 0.0)
        assert (snap.player_score, snap.opponent_score) == (0, 0)

    def test_pinned_ball_follows_player_paddle(self):
        match = serving()
        for _ in range(5):
            snap = match.update(open_hand(x=0.3))
        assert snap.phase is MatchPhase.SERVING
        assert snap.ball.x == snap.player_x
        assert snap.ball_velocity == (0.0, 0.0)

    def test_losing_the_hand(self):
        match = in_menu()
        for _ in range(CFG.lost_hand_frames + 1):
            snap = match.update(None)
        assert not snap.hand_detected
        assert snap.hand_status == STATUS_LOST
        assert snap.landmarks == ()
        assert snap.phase is MatchPhase.MENU

    def test_paddle_holds_still_without_hand(self):
        match = in_menu()
        match.update(open_hand(x=0.25))
        x = match.table.player_x
        match.update(None)
        assert match.table.player_x == x


class TestServeGate:

    def test_after_countdown_drops_early_request(self):
        match = serving()
        assert match.update(bent_index_hand()).phase is MatchPhase.SERVING

        finish_countdown(match)
        assert match.update(open_hand()).phase is MatchPhase.SERVING

        snap = match.update(bent_index_hand())
        assert snap.phase is MatchPhase.ACTIVE
        assert snap.countdown is None

    def test_immediate_launches_during_countdown(self):
        match = serving(replace(CFG, serve_gate=ServeGate.IMMEDIATE))
        snap = match.update(bent_index_hand())
        assert snap.phase is MatchPhase.ACTIVE
        assert snap.countdown is None

    def test_buffered_launches_once_countdown_ends(self):
        match = serving(replace(CFG, serve_gate=ServeGate.BUFFERED))
        assert match.update(bent_index_hand()).phase is MatchPhase.SERVING
        assert match.update(open_hand()).phase is MatchPhase.SERVING

        finish_countdown(match)
        assert match.update(open_hand()).phase is MatchPhase.ACTIVE

    def test_player_serve_launches_upward(self):
        match = rallying()
        dx, dy = match.snapshot().ball_velocity
        assert dy == -CFG.serve_speed
        assert -CFG.launch_spread <= dx <= CFG.launch_spread

    def test_opponent_serves_after_delay(self):
        cfg = replace(CFG, opponent_serve_delay_ticks=5)
        match = serving(cfg)
        match.score_point(Side.OPPONENT)
        match.score_point(Side.OPPONENT)
        assert match.server is Side.OPPONENT
        finish_countdown(match)

        for _ in range(4):
            snap = match.update(bent_index_hand())
            assert snap.phase is MatchPhase.SERVING
            assert snap.ball.x == snap.opponent_x

        snap = match.update(None)
        assert snap.phase is MatchPhase.ACTIVE
        assert snap.ball_velocity[1] == CFG.serve_speed

    def test_opponent_waits_for_countdown(self):
        cfg = replace(CFG, opponent_serve_delay_ticks=1)
        match = serving(cfg)
        match.score_point(Side.OPPONENT)
        match.score_point(Side.OPPONENT)
        for _ in range(3):
            assert match.update(None).phase is MatchPhase.SERVING


class TestScoring:

    def test_ball_out_top_scores_for_player(self):
        match = rallying()
        match.table.ball = BallState(640.0, 0.0, dy=-7.0)
        snap = match.update(None)
        assert (snap.player_score, snap.opponent_score) == (1, 0)
        assert snap.phase is MatchPhase.SERVING
        assert snap.server is Side.PLAYER
        assert snap.countdown == CFG.countdown_start

    def test_ball_out_bottom_scores_for_opponent(self):
        match = rallying()
        match.table.ball = BallState(200.0, 718.0, dy=7.0)
        match.table.player_x = 1000.0
        snap = match.update(None)
        assert (snap.player_score, snap.opponent_score) == (0, 1)
        assert snap.phase is MatchPhase.SERVING

    def test_player_return_redraws_opponent_error(self):
        match = rallying(rng=FixedRandom(0.75))
        table = match.table
        # serve setup drew 0.25 of the wider serve range
        aim = match.opponent.target_x(table, MatchPhase.ACTIVE, match.server)
        assert aim - table.ball.x == pytest.approx(20.0)

        match.table.ball = BallState(table.player_x, 665.0, dy=7.0)
        match.update(None)
        assert table.ball.dy < 0
        aim = match.opponent.target_x(table, MatchPhase.ACTIVE, match.server)
        assert aim - table.ball.x == pytest.approx(12.5)

    def test_serve_passes_after_two_points(self):
        match = serving()
        match.score_point(Side.PLAYER)
        assert match.server is Side.PLAYER
        match.score_point(Side.PLAYER)
        assert match.server is Side.OPPONENT
        assert match.phase is MatchPhase.SERVING


class TestMatchEnd:

    def reach_deuce(self, match):
        for _ in range(10):
            match.score_point(Side.PLAYER)
            match.score_point(Side.OPPONENT)

    def test_eleven_ten_is_not_over(self):
        match = serving()
        self.reach_deuce(match)
        match.score_point(Side.PLAYER)
        assert match.phase is MatchPhase.SERVING

    def test_two_clear_ends_the_match(self):
        match = serving()
        self.reach_deuce(match)
        match.score_point(Side.PLAYER)
        match.score_point(Side.PLAYER)
        snap = match.snapshot()
        assert snap.phase is MatchPhase.GAME_OVER
        assert snap.winner is Side.PLAYER
        assert snap.countdown is None

    def test_winner_only_set_at_game_over(self):
        match = serving()
        match.score_point(Side.OPPONENT)
        assert match.snapshot().winner is None

    @pytest.mark.parametrize("seed", range(20))
    def test_random_rallies_end_exactly_on_win_rule(self, seed):
        pick = random.Random(seed)
        match = serving()
        while match.phase is not MatchPhase.GAME_OVER:
            match.score_point(pick.choice([Side.PLAYER, Side.OPPONENT]))
            won = is_match_won(match.scores)
            assert won == (match.phase is MatchPhase.GAME_OVER)
        p, o = match.scores.as_tuple()
        assert max(p, o) >= 11 and abs(p - o) >= 2

    def test_fist_after_game_over_restarts(self):
        match = serving()
        for _ in range(11):
            match.score_point(Side.OPPONENT)
        assert match.phase is MatchPhase.GAME_OVER
        assert match.snapshot().winner is Side.OPPONENT

        match.update(open_hand())
        snap = match.update(fist_hand())
        assert snap.phase is MatchPhase.SERVING
        assert (snap.player_score, snap.opponent_score) == (0, 0)
        assert snap.server is Side.PLAYER

    def test_fist_held_through_last_point_keeps_game_over(self):
        match = serving()
        match.update(fist_hand())
        for _ in range(11):
            match.score_point(Side.OPPONENT)
        assert match.phase is MatchPhase.GAME_OVER

        # repeated frames arrive as empty ticks between tracked ones
        for hand in [fist_hand(), None, fist_hand(), None, fist_hand()]:
            assert match.update(hand).phase is MatchPhase.GAME_OVER

        match.update(open_hand())
        assert match.update(fist_hand()).phase is MatchPhase.SERVING

    def test_fist_after_losing_the_hand_counts_as_fresh(self):
        match = serving()
        match.update(fist_hand())
        for _ in range(11):
            match.score_point(Side.OPPONENT)
        for _ in range(CFG.lost_hand_frames + 1):
            match.update(None)
        assert not match.hand_detected

        assert match.update(fist_hand()).phase is MatchPhase.SERVING
