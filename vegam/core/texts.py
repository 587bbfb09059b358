from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional

import yaml

DEFAULT_TEXTS_PATH = Path(__file__).resolve().parent.parent / "data" / "texts.yaml"


class TextRepository:
    """Passages to type, loaded from a YAML file with ``title`` and ``content``."""

    def __init__(self, path: Optional[Path] = None, rng: Optional[random.Random] = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_TEXTS_PATH
        self._rng = rng or random.Random()
        self.title, self._texts = self._load_texts()

    def all(self) -> List[str]:
        return list(self._texts)

    def next_reference_text(self) -> str:
        """Pick a passage uniformly at random."""
        return self._rng.choice(self._texts)

    def _load_texts(self) -> tuple[str, List[str]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Texts file not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML with 'title' and 'content'")
        title = raw.get("title")
        content = raw.get("content")
        if not title or not isinstance(title, str):
            raise ValueError(f"{self._path.name}: missing or invalid 'title'")
        if content is None:
            raise ValueError(f"{self._path.name}: missing 'content'")
        if isinstance(content, list):
            # passages are typed verbatim, so only blank entries are dropped
            texts = [str(item) for item in content if str(item).strip()]
        else:
            text = str(content).strip()
            texts = [line.strip() for line in text.splitlines() if line.strip()]
        if not texts:
            raise ValueError(f"{self._path.name}: 'content' has no passages")
        return title.strip(), texts
