from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from vegam.core.session import SessionSnapshot, SessionState, TypingTest
from vegam.ui.colors import Palette
from vegam.ui.rendering import format_remaining, input_box_style, reference_markup


class MainWindow(QMainWindow):
    """Typing test screen: reference text, input box, live stats and results.

    The window only forwards input and reset events to the engine and redraws
    from the snapshots it publishes.
    """

    def __init__(self, test: TypingTest) -> None:
        super().__init__()
        self._test = test
        self._unsubscribe = None

        self._text_label: Optional[QLabel] = None
        self._input_box: Optional[QLineEdit] = None
        self._input_has_error = False
        self._time_value: Optional[QLabel] = None
        self._wpm_value: Optional[QLabel] = None
        self._accuracy_value: Optional[QLabel] = None
        self._accuracy_sub: Optional[QLabel] = None
        self._chars_value: Optional[QLabel] = None
        self._chars_sub: Optional[QLabel] = None
        self._best_value: Optional[QLabel] = None
        self._result_label: Optional[QLabel] = None
        self._restart_button: Optional[QPushButton] = None

        self.setWindowTitle("Vegam")
        self._build_ui()
        self._unsubscribe = self._test.subscribe(self._render)
        self._render(self._test.snapshot)

    def _build_ui(self) -> None:
        central = QWidget(self)
        central.setStyleSheet(
            f"background: qlineargradient(x1:0, y1:0, x2:0, y2:1, "
            f"stop:0 {Palette.BG_TOP}, stop:1 {Palette.BG_BOTTOM});"
        )
        layout = QVBoxLayout(central)
        layout.setContentsMargins(48, 32, 48, 32)
        layout.setSpacing(20)

        stats_row = QHBoxLayout()
        stats_row.setSpacing(16)
        self._time_value, _ = self._stat_card(stats_row, "Time", "")
        self._wpm_value, _ = self._stat_card(stats_row, "WPM", "")
        self._accuracy_value, self._accuracy_sub = self._stat_card(stats_row, "Accuracy", "")
        self._chars_value, self._chars_sub = self._stat_card(stats_row, "Characters", "")
        self._best_value, _ = self._stat_card(stats_row, "Best", "")
        layout.addLayout(stats_row)

        self._text_label = QLabel()
        self._text_label.setTextFormat(Qt.RichText)
        self._text_label.setWordWrap(True)
        self._text_label.setStyleSheet(
            f"background: {Palette.CARD_BG}; border: 1px solid {Palette.CARD_BORDER}; "
            f"border-radius: 16px; padding: 24px; font-size: 22px;"
        )
        layout.addWidget(self._text_label)

        self._input_box = QLineEdit()
        self._input_box.setPlaceholderText("Start typing to begin the test…")
        self._input_box.setStyleSheet(input_box_style(False))
        self._input_box.textChanged.connect(self._test.text_changed)
        layout.addWidget(self._input_box)

        self._result_label = QLabel()
        self._result_label.setAlignment(Qt.AlignCenter)
        self._result_label.setStyleSheet(f"color: {Palette.PRIMARY_DARK}; font-size: 18px; font-weight: 600;")
        layout.addWidget(self._result_label)

        self._restart_button = QPushButton("Restart")
        self._restart_button.setCursor(Qt.PointingHandCursor)
        self._restart_button.setStyleSheet(
            f"QPushButton {{ background: {Palette.PRIMARY}; color: white; border-radius: 10px; "
            f"padding: 10px 24px; font-size: 16px; }}"
            f"QPushButton:disabled {{ background: {Palette.TEXT_MUTED}; }}"
        )
        self._restart_button.clicked.connect(self._restart)
        layout.addWidget(self._restart_button, 0, Qt.AlignCenter)
        layout.addStretch(1)

        self.reset_shortcut = QShortcut(QKeySequence(Qt.Key_Escape), self)
        self.reset_shortcut.activated.connect(self._restart)

        self.setCentralWidget(central)

    def _stat_card(self, row: QHBoxLayout, title: str, sub: str) -> tuple[QLabel, QLabel]:
        card = QFrame()
        card.setStyleSheet(
            f"QFrame {{ background: {Palette.CARD_BG}; border: 1px solid {Palette.CARD_BORDER}; "
            f"border-radius: 14px; }} QLabel {{ background: transparent; border: none; }}"
        )
        box = QVBoxLayout(card)
        header = QLabel(title)
        header.setStyleSheet(f"color: {Palette.TEXT_MUTED}; font-size: 12px;")
        value = QLabel("")
        value.setStyleSheet(f"color: {Palette.PRIMARY}; font-size: 28px; font-weight: 700;")
        sub_label = QLabel(sub)
        sub_label.setStyleSheet(f"color: {Palette.TEXT_SECONDARY}; font-size: 11px;")
        box.addWidget(header)
        box.addWidget(value)
        box.addWidget(sub_label)
        row.addWidget(card)
        return value, sub_label

    def _restart(self) -> None:
        """Start over. The button is disabled mid-test but Escape always works."""
        self._test.reset()
        self._input_box.blockSignals(True)
        self._input_box.clear()
        self._input_box.blockSignals(False)
        self._input_box.setFocus()

    def _set_input_error_state(self, is_error: bool) -> None:
        """Toggle the input box border between normal and error styles."""
        if self._input_has_error == is_error:
            return
        self._input_has_error = is_error
        self._input_box.setStyleSheet(input_box_style(is_error))

    def _render(self, snapshot: SessionSnapshot) -> None:
        finished = snapshot.state is SessionState.FINISHED
        metrics = snapshot.live_metrics()

        self._text_label.setText(reference_markup(snapshot.reference, snapshot.verdicts))
        self._time_value.setText(format_remaining(snapshot.remaining))
        self._wpm_value.setText(str(metrics.wpm) if finished else "-")
        self._accuracy_value.setText(f"{metrics.accuracy}%" if finished else "-%")
        self._accuracy_sub.setText(f"{snapshot.error_count} errors")
        self._chars_value.setText(str(snapshot.characters_typed))
        self._chars_sub.setText(f"{metrics.words} words")
        self._best_value.setText(str(snapshot.high_score))

        self._input_box.setEnabled(not finished)
        if self._input_box.text() != snapshot.typed:
            self._input_box.blockSignals(True)
            self._input_box.setText(snapshot.typed)
            self._input_box.blockSignals(False)
        self._set_input_error_state(snapshot.has_error and not finished)
        self._restart_button.setEnabled(snapshot.state is not SessionState.ACTIVE)

        if not finished:
            self._result_label.setText("")
            return
        lines = [f"Test complete! {metrics.wpm} WPM, {metrics.accuracy}% accuracy"]
        if snapshot.new_record:
            lines.append("★ New High Score! ★")
        if not snapshot.score_saved:
            lines.append("(high score could not be saved)")
        self._result_label.setText("\n".join(lines))

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop the clock when closing the app."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._test.close()
        super().closeEvent(event)
