"""Rich-text rendering of the reference text. No Qt imports, so it is testable headless."""

from __future__ import annotations

import html
from itertools import groupby
from typing import Sequence

from vegam.core.diff import Verdict
from vegam.ui.colors import Palette, blend_hex

UNTYPED_COLOR = blend_hex(Palette.TEXT_PRIMARY, Palette.BG_TOP, 0.5)

_STYLES = {
    Verdict.CORRECT: f"color:{Palette.CORRECT};",
    Verdict.INCORRECT: f"color:{Palette.INCORRECT}; background:{Palette.INCORRECT_BG};",
    Verdict.CURRENT: f"color:{Palette.TEXT_PRIMARY}; background:{Palette.CURRENT_BG}; font-weight:600;",
    Verdict.UNTYPED: f"color:{UNTYPED_COLOR};",
}


def _escape(text: str, verdict: Verdict) -> str:
    escaped = html.escape(text)
    if verdict in (Verdict.INCORRECT, Verdict.CURRENT):
        # a highlighted space would otherwise collapse to nothing
        escaped = escaped.replace(" ", "&nbsp;")
    return escaped


def reference_markup(reference: str, verdicts: Sequence[Verdict]) -> str:
    """One ``<span>`` per run of characters sharing a verdict."""
    if len(verdicts) != len(reference):
        raise ValueError("need exactly one verdict per reference character")
    parts = []
    index = 0
    for verdict, run in groupby(verdicts):
        length = len(list(run))
        chunk = reference[index : index + length]
        index += length
        parts.append(f'<span style="{_STYLES[verdict]}">{_escape(chunk, verdict)}</span>')
    return "".join(parts)


def format_remaining(seconds: int) -> str:
    return f"{max(0, seconds)}s"


def input_box_style(has_error: bool) -> str:
    """Stylesheet for the input box; the border turns red while a mistake stands."""
    border = f"2px solid {Palette.INCORRECT}" if has_error else f"2px solid {Palette.PRIMARY}"
    return (
        f"QLineEdit {{ background: white; color: {Palette.TEXT_PRIMARY}; "
        f"border: {border}; border-radius: 12px; "
        f"padding: 12px 16px; font-size: 20px; }}"
    )
