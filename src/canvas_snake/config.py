"""Game and server configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STATIC_DIR = Path(__file__).parent / "static"


@dataclass(frozen=True)
class GameConfig:
    """All tunables for one game session.

    Supports JSON serialization so a session can be reproduced from a
    file plus a seed.
    """

    # Board
    grid_cells: int = 30
    cell_size: int = 20
    start_cell: tuple[int, int] = (15, 15)

    # Pace
    base_speed_ms: int = 120
    min_speed_ms: int = 60
    speed_step_ms: int = 2
    initial_mode: str = "normal"

    # Food
    food_count: int = 1
    recent_food_capacity: int = 5
    respawn_delay_ms: int = 0
    event_log_capacity: int = 100

    # Presentation
    theme: str = "dark"

    # Reproducibility
    seed: int | None = None

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["start_cell"] = list(self.start_cell)
        return d

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "start_cell" in changes:
            changes["start_cell"] = tuple(changes["start_cell"])
        return replace(self, **changes)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "start_cell" in raw:
            raw["start_cell"] = tuple(raw["start_cell"])
        return cls(**raw)


@dataclass(frozen=True)
class ServerConfig:
    """Settings for the HTTP/WebSocket front end."""

    host: str = "127.0.0.1"
    port: int = 3000
    static_dir: str = str(DEFAULT_STATIC_DIR)
    max_sessions: int = 100
    game: GameConfig = field(default_factory=GameConfig)

    @classmethod
    def from_env(cls, game: GameConfig | None = None) -> ServerConfig:
        """Build a config honouring the ``PORT`` environment variable."""
        port = int(os.environ.get("PORT", cls.port))
        return cls(port=port, game=game if game is not None else GameConfig())
