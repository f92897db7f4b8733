import os
from dataclasses import dataclass
from typing import Optional

MAX_SIDE = 100


@dataclass
class MazeConfig:
    rows: int = 10
    cols: int = 20
    start_row: Optional[int] = None
    start_col: Optional[int] = None
    branch_probability: float = 0.5
    branch_decay: float = 0.1
    corridor_min: int = 2
    corridor_max: int = 4
    placement_pick_chance: float = 0.1
    seed: Optional[int] = None

    def __post_init__(self):
        if self.start_row is None:
            self.start_row = self.rows // 2
        if self.start_col is None:
            self.start_col = self.cols // 2

    @property
    def start(self):
        return self.start_row, self.start_col

    def validate(self) -> "MazeConfig":
        """Raise ValueError for shapes the carver cannot work with."""
        if self.rows < 2 or self.cols < 2:
            raise ValueError(f"grid must be at least 2x2, got {self.rows}x{self.cols}")
        if self.rows > MAX_SIDE or self.cols > MAX_SIDE:
            raise ValueError(f"grid must be at most {MAX_SIDE}x{MAX_SIDE}, got {self.rows}x{self.cols}")
        if not (0 <= self.start_row < self.rows):
            raise ValueError(f"start_row {self.start_row} outside 0..{self.rows - 1}")
        # The exit is carved westwards from the start, so column 0 leaves no room for it.
        if not (1 <= self.start_col < self.cols):
            raise ValueError(f"start_col {self.start_col} outside 1..{self.cols - 1}")
        if not (0.0 <= self.branch_probability <= 1.0):
            raise ValueError("branch_probability must be between 0 and 1")
        if self.branch_decay <= 0:
            raise ValueError("branch_decay must be positive")
        if not (1 <= self.corridor_min <= self.corridor_max):
            raise ValueError("corridor lengths must satisfy 1 <= corridor_min <= corridor_max")
        if not (0.0 < self.placement_pick_chance <= 1.0):
            raise ValueError("placement_pick_chance must be in (0, 1]")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "MazeConfig":
        """Build a config from DARKCASTLE_* environment variables.

        Keyword overrides that are not None win over the environment.
        """
        env_map = {
            "DARKCASTLE_ROWS": ("rows", int),
            "DARKCASTLE_COLS": ("cols", int),
            "DARKCASTLE_SEED": ("seed", int),
            "DARKCASTLE_BRANCH_PROBABILITY": ("branch_probability", float),
        }
        values = {}
        for env_key, (attr, cast) in env_map.items():
            raw = os.environ.get(env_key, "").strip()
            if raw:
                try:
                    values[attr] = cast(raw)
                except ValueError:
                    raise ValueError(f"{env_key} must be {cast.__name__}, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = ["MAX_SIDE", "MazeConfig"]
