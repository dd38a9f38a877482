from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .grid import in_bounds


class CellRef(Protocol):
    def set_value(self, value: str) -> None: ...
    def get_value(self) -> str: ...
    def reveal(self) -> None: ...
    def is_revealed(self) -> bool: ...
    def toggle_flag(self) -> None: ...
    def is_flagged(self) -> bool: ...
    def reset(self) -> None: ...


class CellStore(Protocol):
    def get_cell(self, x: int, y: int) -> Optional[CellRef]: ...


@dataclass
class Cell:
    value: str = ''
    revealed: bool = False
    flagged: bool = False

    def set_value(self, value: str) -> None:
        self.value = value

    def get_value(self) -> str:
        return self.value

    def reveal(self) -> None:
        self.revealed = True

    def is_revealed(self) -> bool:
        return self.revealed

    def toggle_flag(self) -> None:
        self.flagged = not self.flagged

    def is_flagged(self) -> bool:
        return self.flagged

    def reset(self) -> None:
        self.value = ''
        self.revealed = False
        self.flagged = False


class BoardStore:
    """In-memory cell store used when no UI supplies its own."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [[Cell() for _ in range(width)] for _ in range(height)]

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        if not in_bounds(x, y, self.width, self.height):
            return None
        return self.cells[y][x]
