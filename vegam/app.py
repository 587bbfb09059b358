"""Application entry point and setup for the Vegam typing test."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from vegam.core.clock import CountdownClock
from vegam.core.highscore import HighScoreStore
from vegam.core.session import TypingTest
from vegam.core.settings import Settings
from vegam.core.texts import TextRepository
from vegam.ui.main_window import MainWindow
from vegam.ui.qt_scheduler import QtTickScheduler


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_test(settings: Settings, scheduler: QtTickScheduler) -> TypingTest:
    """Wire the engine to its collaborators."""
    texts = TextRepository(settings.texts_path)
    high_scores = HighScoreStore(settings.high_score_path)
    clock = CountdownClock(scheduler, duration=settings.duration)
    logging.info(
        "Loaded %d passages from %r, best so far %d wpm",
        len(texts.all()),
        texts.title,
        high_scores.read(),
    )
    return TypingTest(texts, clock, high_scores)


def run() -> None:
    """Initialize the application and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Vegam")
    app.setApplicationDisplayName("Vegam")

    settings = Settings.from_env()
    test = build_test(settings, QtTickScheduler(app))

    window = MainWindow(test)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1100, geometry.width()), min(700, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
