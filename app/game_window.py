"""
GameWindow — the table, the HUD overlays, the mirrored camera preview with
the hand skeleton, and a console log. Pure presentation: it only reads
GameSnapshot values and never writes back into the match.
"""
from __future__ import annotations
from typing import Optional

import cv2
import numpy as np
from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QBrush, QColor, QFont, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QSizePolicy, QTextEdit, QVBoxLayout, QWidget,
)

from app.config import GameConfig, default_config
from domain.enums import MatchPhase, Side
from domain.models import GameSnapshot
from utils.constants import (
    COLOR_BALL, COLOR_BG, COLOR_JOINT, COLOR_LINES, COLOR_PADDLE_OPPONENT,
    COLOR_PADDLE_PLAYER, COLOR_TABLE, HAND_CONNECTIONS,
)
from utils.geometry import camera_to_preview


def _qcolor(rgb: tuple, alpha: int = 255) -> QColor:
    r, g, b = rgb
    return QColor(r, g, b, alpha)


class GameWindow(QWidget):
    """
    Main window.

    - Left: the board (painted from the latest snapshot).
    - Right: score column, hand status, camera preview, console log.
    """

    def __init__(self, config: GameConfig = default_config, parent=None) -> None:
        super().__init__(parent)
        self._cfg = config
        self._snapshot: Optional[GameSnapshot] = None
        self._setup_ui()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------
    def _setup_ui(self) -> None:
        self.setWindowTitle("Forest Pong — gesture table tennis")
        self.setMinimumSize(1100, 560)
        self.setStyleSheet("""
            QWidget {
                background-color: #000000;
                color: #e0e0e0;
                font-family: 'Segoe UI', Consolas, monospace;
            }
            QLabel#score_opponent { font-size: 40px; font-weight: bold; color: #94a3b8; }
            QLabel#score_player   { font-size: 40px; font-weight: bold; color: #fbbf24; }
            QLabel#caption        { font-size: 11px; color: #888; }
            QLabel#status         { font-size: 12px; padding: 4px 8px;
                                    border-radius: 6px; background: #181924; }
            QTextEdit#log {
                background-color: #101010;
                color: #7ec8a0;
                font-size: 11px;
                border: 1px solid #333;
                border-radius: 4px;
            }
        """)

        root = QHBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(10)

        # ---- LEFT: board ---------------------------------------------
        self._board = _BoardView(self._cfg)
        root.addWidget(self._board, stretch=4)

        # ---- RIGHT: scores + camera + log ----------------------------
        right = QVBoxLayout()
        right.setSpacing(8)

        cap_opp = QLabel("OPPONENT")
        cap_opp.setObjectName("caption")
        right.addWidget(cap_opp, alignment=Qt.AlignmentFlag.AlignHCenter)
        self._score_opponent = QLabel("0")
        self._score_opponent.setObjectName("score_opponent")
        right.addWidget(self._score_opponent, alignment=Qt.AlignmentFlag.AlignHCenter)

        sep = QFrame()
        sep.setFrameShape(QFrame.Shape.HLine)
        right.addWidget(sep)

        self._score_player = QLabel("0")
        self._score_player.setObjectName("score_player")
        right.addWidget(self._score_player, alignment=Qt.AlignmentFlag.AlignHCenter)
        cap_you = QLabel("YOU")
        cap_you.setObjectName("caption")
        right.addWidget(cap_you, alignment=Qt.AlignmentFlag.AlignHCenter)

        self._status = QLabel("Initializing Camera...")
        self._status.setObjectName("status")
        self._status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        right.addWidget(self._status)

        self._camera_label = QLabel()
        self._camera_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._camera_label.setFixedSize(240, 180)
        self._camera_label.setStyleSheet("background:#000; border:2px solid #333; border-radius:6px;")
        right.addWidget(self._camera_label)

        right.addWidget(QLabel("Console log"))
        self._log = QTextEdit()
        self._log.setObjectName("log")
        self._log.setReadOnly(True)
        right.addWidget(self._log, stretch=1)

        root.addLayout(right, stretch=1)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def on_snapshot(self, snap: GameSnapshot) -> None:
        self._snapshot = snap
        self._score_opponent.setText(str(snap.opponent_score))
        self._score_player.setText(str(snap.player_score))

        dot = "#22c55e" if snap.hand_detected else "#ef4444"
        self._status.setText(f"<span style='color:{dot}'>●</span> {snap.hand_status}")
        self._board.set_snapshot(snap)

    def on_frame(self, frame: np.ndarray, _timestamp_ms: int = 0) -> None:
        """BGR frame → mirrored preview with the latest skeleton on top."""
        preview = cv2.flip(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), 1)
        if self._snapshot is not None and self._snapshot.landmarks:
            self._draw_skeleton(preview, self._snapshot.landmarks)

        h, w, ch = preview.shape
        img = QImage(preview.data, w, h, ch * w, QImage.Format.Format_RGB888)
        pix = QPixmap.fromImage(img).scaled(
            self._camera_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._camera_label.setPixmap(pix)

    def on_status(self, msg: str) -> None:
        if msg.startswith("[PHASE]") or msg.startswith("[POINT]"):
            self._log.append(f"<span style='color:#6699cc'>{msg}</span>")
        elif msg.startswith("[ERROR]"):
            self._log.append(f"<span style='color:#ff6b6b'>{msg}</span>")
        else:
            self._log.append(f"<span style='color:#888'>{msg}</span>")
        sb = self._log.verticalScrollBar()
        sb.setValue(sb.maximum())

    def on_fatal(self, reason: str) -> None:
        """Initialization failed: block the board with an error overlay."""
        self._board.set_blocking_error(reason)

    # ------------------------------------------------------------------
    @staticmethod
    def _draw_skeleton(image: np.ndarray, landmarks) -> None:
        h, w = image.shape[:2]
        points = [camera_to_preview(p, w, h) for p in landmarks]
        for start, end in HAND_CONNECTIONS:
            cv2.line(image, points[start], points[end], COLOR_LINES, 2)
        for pt in points:
            cv2.circle(image, pt, 3, COLOR_JOINT, -1)


# ---- Board widget ------------------------------------------------------

class _BoardView(QWidget):
    """Paints the field scaled to the widget, plus the phase overlays."""

    def __init__(self, config: GameConfig, parent=None) -> None:
        super().__init__(parent)
        self._cfg = config
        self._snap: Optional[GameSnapshot] = None
        self._error: Optional[str] = None
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_snapshot(self, snap: GameSnapshot) -> None:
        self._snap = snap
        self.update()

    def set_blocking_error(self, reason: str) -> None:
        self._error = reason
        self.update()

    # ------------------------------------------------------------------
    def paintEvent(self, _) -> None:
        cfg = self._cfg
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)

        scale = min(self.width() / cfg.field_width, self.height() / cfg.field_height)
        ox = (self.width() - cfg.field_width * scale) / 2
        oy = (self.height() - cfg.field_height * scale) / 2
        p.fillRect(self.rect(), _qcolor(COLOR_BG))
        p.translate(ox, oy)
        p.scale(scale, scale)

        board = QRectF(0, 0, cfg.field_width, cfg.field_height)
        p.fillRect(board, _qcolor(COLOR_TABLE))

        # Net
        pen = QPen(_qcolor(COLOR_LINES))
        pen.setWidth(4)
        pen.setDashPattern([3, 4])
        p.setPen(pen)
        p.drawLine(0, cfg.field_height // 2, cfg.field_width, cfg.field_height // 2)

        snap = self._snap
        if snap is not None:
            self._draw_pieces(p, snap)
            self._draw_overlay(p, snap, board)

        if self._error is not None:
            self._draw_banner(p, board, "Camera / tracker unavailable", self._error, alpha=230)

        p.end()

    def _draw_pieces(self, p: QPainter, snap: GameSnapshot) -> None:
        cfg = self._cfg
        half = cfg.paddle_half_width
        p.setPen(Qt.PenStyle.NoPen)

        p.setBrush(QBrush(_qcolor(COLOR_PADDLE_OPPONENT)))
        p.drawRect(QRectF(snap.opponent_x - half, cfg.wall_offset, cfg.paddle_width, cfg.paddle_height))

        p.setBrush(QBrush(_qcolor(COLOR_PADDLE_PLAYER)))
        p.drawRect(QRectF(
            snap.player_x - half,
            cfg.field_height - cfg.wall_offset - cfg.paddle_height,
            cfg.paddle_width, cfg.paddle_height,
        ))

        if snap.phase in (MatchPhase.SERVING, MatchPhase.ACTIVE):
            r = cfg.ball_radius
            p.setBrush(QBrush(_qcolor(COLOR_BALL)))
            p.drawEllipse(QRectF(snap.ball.x - r, snap.ball.y - r, 2 * r, 2 * r))

    def _draw_overlay(self, p: QPainter, snap: GameSnapshot, board: QRectF) -> None:
        phase = snap.phase
        if phase in (MatchPhase.INITIALIZING, MatchPhase.AWAITING_HAND):
            self._draw_banner(p, board, "Prepare your camera...",
                              "Raise your index finger to be detected")
        elif phase is MatchPhase.MENU:
            self._draw_banner(p, board, "Forest Pong",
                              "Move your hand left / right · Make a FIST to start")
        elif phase is MatchPhase.SERVING:
            turn = "Your Serve (Bottom)" if snap.server is Side.PLAYER else "Opponent Serving (Top)"
            self._text(p, board.adjusted(0, -120, 0, -120), turn, 28, COLOR_LINES)
            if snap.countdown:
                self._text(p, board, str(snap.countdown), 110, (255, 255, 255))
            elif snap.server is Side.PLAYER:
                self._text(p, board, "BEND FINGER!", 44, (250, 204, 21))
                self._text(p, board.adjusted(0, 70, 0, 70),
                           "Curl index finger to hit ball up", 16, (255, 255, 255))
        elif phase is MatchPhase.GAME_OVER:
            title = "You Won!" if snap.winner is Side.PLAYER else "You Lost"
            self._draw_banner(
                p, board, title,
                f"You: {snap.player_score} - Opponent: {snap.opponent_score}"
                "  ·  Make a FIST to play again",
                alpha=220,
            )

    def _draw_banner(self, p: QPainter, board: QRectF, title: str, subtitle: str,
                     alpha: int = 200) -> None:
        p.fillRect(board, QColor(0, 0, 0, alpha))
        self._text(p, board.adjusted(0, -40, 0, -40), title, 56, COLOR_LINES)
        self._text(p, board.adjusted(0, 50, 0, 50), subtitle, 20, (230, 230, 230))

    @staticmethod
    def _text(p: QPainter, rect: QRectF, text: str, size: int, rgb: tuple) -> None:
        font = QFont("Segoe UI", size)
        font.setBold(True)
        p.setFont(font)
        p.setPen(_qcolor(rgb))
        p.drawText(rect, Qt.AlignmentFlag.AlignCenter, text)
