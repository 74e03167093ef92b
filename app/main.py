"""
main.py — Application entry point.

    CameraWorker (thread) → frames → GameLoop (tick timer, GUI thread)
        → HandTracker → MatchStateMachine → GameSnapshot → GameWindow

The capture thread only delivers frames; every game-state write happens
inside GameLoop.tick on the GUI thread.
"""
from __future__ import annotations
import sys

from PyQt6.QtWidgets import QApplication

from app.camera_worker import CameraWorker
from app.config import GameConfig, default_config
from app.game_loop import GameLoop
from app.game_window import GameWindow


def run(config: GameConfig = default_config) -> int:
    print("=" * 55)
    print("  FOREST PONG — gesture table tennis")
    print("=" * 55)
    print(f"  Model      : {config.model_path}")
    print(f"  Camera     : {config.camera_device} @ {config.fps_limit} fps")
    print(f"  First to   : {config.winning_score} (win by {config.win_margin})")
    print(f"  Serve gate : {config.serve_gate.value}")
    print("  Close the window to quit")
    print("=" * 55 + "\n")

    qt_app = QApplication(sys.argv)

    window = GameWindow(config)
    loop   = GameLoop(config)
    worker = CameraWorker(config)

    def log(msg: str) -> None:
        print(msg)
        window.on_status(msg)

    def fail(reason: str) -> None:
        loop.stop()
        window.on_fatal(reason)

    worker.status_msg.connect(log)
    worker.source_ready.connect(loop.on_source_ready)
    worker.frame_ready.connect(loop.on_frame)
    worker.frame_ready.connect(window.on_frame)
    worker.failed.connect(fail)

    loop.status_msg.connect(log)
    loop.snapshot_ready.connect(window.on_snapshot)
    loop.init_failed.connect(window.on_fatal)

    def shutdown() -> None:
        loop.stop()
        worker.stop()
        print("\n✓ Application closed cleanly")

    qt_app.aboutToQuit.connect(shutdown)

    window.show()
    if loop.start():
        worker.start()
    return qt_app.exec()


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
