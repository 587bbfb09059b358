"""Theme colors and color utilities for the UI."""

from typing import Optional, Tuple


class Palette:
    """Light theme palette."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#80deea"

    PRIMARY = "#00838f"
    PRIMARY_DARK = "#005662"
    AMBER = "#ffb74d"

    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_SECONDARY = "#4a6572"
    TEXT_MUTED = "#78909c"

    # Per-character verdicts in the reference text
    CORRECT = "#2e7d32"
    INCORRECT = "#c62828"
    INCORRECT_BG = "#ffebee"
    CURRENT_BG = "#b2ebf2"


def _rgb(color: str) -> Optional[Tuple[int, int, int]]:
    color = color.strip()
    if len(color) != 7 or not color.startswith("#"):
        return None
    try:
        return tuple(int(color[i : i + 2], 16) for i in (1, 3, 5))
    except ValueError:
        return None


def blend_hex(a: str, b: str, t: float) -> str:
    """Mix two #RRGGBB colors; t=0 gives a, t=1 gives b. Anything unparsable returns a."""
    start, end = _rgb(a), _rgb(b)
    if start is None or end is None:
        return a
    t = max(0.0, min(1.0, float(t)))
    mixed = (int(s + (e - s) * t) for s, e in zip(start, end))
    return "#" + "".join(f"{c:02X}" for c in mixed)
