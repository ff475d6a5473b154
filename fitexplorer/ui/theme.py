from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal, Optional

logger = logging.getLogger(__name__)

Theme = Literal["dark", "light"]
THEMES = ("dark", "light")
THEME_KEY = "theme"


def resolve_theme(saved: Optional[str], system_prefers_dark: bool = False) -> Theme:
    """A saved preference wins; otherwise follow the system color scheme."""
    if saved in THEMES:
        return saved  # type: ignore[return-value]
    return "dark" if system_prefers_dark else "light"


def toggle_theme(current: str) -> Theme:
    return "light" if current == "dark" else "dark"


class ThemeStore:
    """Single key-value preference kept in a small JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Optional[Theme]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return None
        value = raw.get(THEME_KEY) if isinstance(raw, dict) else None
        return value if value in THEMES else None

    def save(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}; expected one of {THEMES}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({THEME_KEY: theme}), encoding="utf-8")
