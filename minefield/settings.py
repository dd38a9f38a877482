from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from .grid import Coordinate
from .safe_zone import safe_zone_size


@dataclass(frozen=True)
class DifficultySettings:
    width: int
    height: int
    mines: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f'Board must be at least 1x1, got {self.width}x{self.height}')
        if self.mines < 0:
            raise ValueError(f'Mine count must not be negative, got {self.mines}')
        placeable = self.total_cells - safe_zone_size(self.total_cells)
        if self.mines >= placeable:
            raise ValueError(
                f'{self.mines} mines do not fit a {self.width}x{self.height} board '
                f'(at most {placeable - 1} outside the safe zone)')

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Coordinate:
        return (self.width // 2, self.height // 2)


DIFFICULTIES: Dict[str, DifficultySettings] = {
    'easy': DifficultySettings(16, 16, 40),
    'medium': DifficultySettings(20, 16, 70),
    'hard': DifficultySettings(28, 16, 110),
}


def get_difficulty(name: str) -> DifficultySettings:
    try:
        return DIFFICULTIES[name]
    except KeyError:
        raise ValueError(f"Unknown difficulty '{name}', expected one of {sorted(DIFFICULTIES)}") from None
