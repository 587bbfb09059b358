from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from vegam.core.clock import DEFAULT_DURATION


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, overridable through ``VEGAM_*`` environment variables."""

    duration: int = DEFAULT_DURATION
    data_dir: Path = Path.home() / ".vegam"
    texts_path: Optional[Path] = None

    @property
    def high_score_path(self) -> Path:
        return self.data_dir / "highscore.json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        duration = DEFAULT_DURATION
        raw_duration = env.get("VEGAM_DURATION")
        if raw_duration:
            try:
                duration = int(raw_duration)
            except ValueError:
                raise ValueError(f"VEGAM_DURATION must be an integer, got {raw_duration!r}") from None
            if duration < 1:
                raise ValueError(f"VEGAM_DURATION must be at least 1, got {duration}")
        data_dir = Path(env["VEGAM_HOME"]).expanduser() if env.get("VEGAM_HOME") else cls.data_dir
        texts_path = Path(env["VEGAM_TEXTS"]).expanduser() if env.get("VEGAM_TEXTS") else None
        return cls(duration=duration, data_dir=data_dir, texts_path=texts_path)
