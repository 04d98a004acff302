"""
Data models for the arrowword generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Tuple, Any


class Direction(Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"

    @property
    def step(self) -> Tuple[int, int]:
        """(row, col) delta between consecutive letters."""
        if self == Direction.HORIZONTAL:
            return (0, 1)
        return (1, 0)

    @property
    def hint_slot(self) -> str:
        return "right" if self == Direction.HORIZONTAL else "down"

    def perpendicular(self) -> 'Direction':
        if self == Direction.HORIZONTAL:
            return Direction.VERTICAL
        return Direction.HORIZONTAL


class CellType(Enum):
    EMPTY = "empty"
    RESERVED = "reserved"  # strict border, waiting for a clue
    LETTER = "letter"
    CLUE = "clue"
    FILLER = "filler"


@dataclass
class Cell:
    """Represents a single cell in the arrowword board."""
    row: int
    col: int
    cell_type: CellType = CellType.EMPTY
    letter: Optional[str] = None
    right_hint: Optional[str] = None
    down_hint: Optional[str] = None

    def is_letter(self) -> bool:
        return self.cell_type == CellType.LETTER

    def is_clue(self) -> bool:
        return self.cell_type == CellType.CLUE

    def is_filler(self) -> bool:
        return self.cell_type == CellType.FILLER

    def is_open(self) -> bool:
        """True while the cell has no role yet."""
        return self.cell_type in (CellType.EMPTY, CellType.RESERVED)

    def hint_for(self, direction: Direction) -> Optional[str]:
        if direction == Direction.HORIZONTAL:
            return self.right_hint
        return self.down_hint

    def has_hints(self) -> bool:
        return self.right_hint is not None or self.down_hint is not None


@dataclass
class VocabularyWord:
    """A vocabulary entry ready for placement."""
    display: str
    normalized: str
    hint: str

    def __len__(self) -> int:
        return len(self.normalized)


@dataclass
class PlacedWord:
    """A word written on the board, with its clue in the preceding cell."""
    text: str
    hint: str
    row: int
    col: int
    direction: Direction
    display: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]

    @property
    def clue_position(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return (self.row - dr, self.col - dc)

    def contains(self, row: int, col: int) -> bool:
        if self.direction == Direction.HORIZONTAL:
            return row == self.row and self.col <= col < self.col + self.length
        return col == self.col and self.row <= row < self.row + self.length

    def letter_at(self, row: int, col: int) -> str:
        offset = (col - self.col) if self.direction == Direction.HORIZONTAL else (row - self.row)
        return self.text[offset]


class HintConflictError(Exception):
    """Raised when a clue cell already holds a hint in that direction."""
    pass


@dataclass
class Board:
    """Represents the arrowword board."""
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self):
        if not self.cells:
            self.cells = [
                [Cell(row=r, col=c) for c in range(self.cols)]
                for r in range(self.rows)
            ]

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position."""
        return self.cells[row][col]

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def reserve_border(self):
        """Mark row 0 and column 0 as clue-only cells."""
        for r in range(self.rows):
            self.cells[r][0].cell_type = CellType.RESERVED
        for c in range(self.cols):
            self.cells[0][c].cell_type = CellType.RESERVED

    def set_letter(self, row: int, col: int, letter: str):
        """Set a letter in a cell."""
        cell = self.cells[row][col]
        cell.cell_type = CellType.LETTER
        cell.letter = letter.upper()

    def add_hint(self, row: int, col: int, direction: Direction, hint: str):
        """
        Write a hint into a clue cell, creating the clue holder if needed.

        Raises:
            HintConflictError: If the cell is a letter or already carries
                a hint for this direction
        """
        cell = self.cells[row][col]
        if cell.is_letter() or cell.is_filler():
            raise HintConflictError(
                f"Cell ({row}, {col}) is {cell.cell_type.value}, cannot hold a clue"
            )
        if cell.is_clue() and cell.hint_for(direction) is not None:
            raise HintConflictError(
                f"Cell ({row}, {col}) already has a {direction.hint_slot} hint"
            )
        cell.cell_type = CellType.CLUE
        if direction == Direction.HORIZONTAL:
            cell.right_hint = hint
        else:
            cell.down_hint = hint

    def set_filler(self, row: int, col: int):
        cell = self.cells[row][col]
        cell.cell_type = CellType.FILLER
        cell.letter = None
        cell.right_hint = None
        cell.down_hint = None

    def iter_cells(self):
        for row in self.cells:
            for cell in row:
                yield cell

    def letter_cells(self) -> List[Cell]:
        return [cell for cell in self.iter_cells() if cell.is_letter()]

    def count(self, cell_type: CellType) -> int:
        return sum(1 for cell in self.iter_cells() if cell.cell_type == cell_type)

    def density(self) -> float:
        """Fraction of cells holding a letter."""
        return self.count(CellType.LETTER) / (self.rows * self.cols)

    def to_string(self, show_solution: bool = True) -> str:
        """Convert board to string representation."""
        result = []
        for row in self.cells:
            line = ""
            for cell in row:
                if cell.is_letter():
                    line += f"{cell.letter if show_solution else '_'} "
                elif cell.is_clue():
                    if cell.right_hint is not None and cell.down_hint is not None:
                        line += "+ "
                    elif cell.right_hint is not None:
                        line += "→ "
                    else:
                        line += "↓ "
                elif cell.is_filler():
                    line += "■ "
                else:
                    line += ". "
            result.append(line.rstrip())
        return "\n".join(result)

    def validate(self) -> Dict[str, Any]:
        """Quick structural check of a finished board."""
        issues = []

        open_cells = [
            (cell.row, cell.col) for cell in self.iter_cells() if cell.is_open()
        ]
        if open_cells:
            issues.append(f"{len(open_cells)} cells have no role: {open_cells[:5]}")

        empty_clues = [
            (cell.row, cell.col) for cell in self.iter_cells()
            if cell.is_clue() and not cell.has_hints()
        ]
        if empty_clues:
            issues.append(f"{len(empty_clues)} clue cells without hints")

        return {
            "valid": len(issues) == 0,
            "issues": issues,
            "stats": {
                "rows": self.rows,
                "cols": self.cols,
                "letters": self.count(CellType.LETTER),
                "clues": self.count(CellType.CLUE),
                "fillers": self.count(CellType.FILLER),
                "density": self.density(),
            }
        }


@dataclass
class GeneratedPuzzle:
    """A finished board together with the words placed on it."""
    board: Board
    words: List[PlacedWord] = field(default_factory=list)
    attempts: int = 1
    seed: Optional[int] = None

    def words_at(self, row: int, col: int) -> List[PlacedWord]:
        """All placed words passing through a cell."""
        return [w for w in self.words if w.contains(row, col)]

    def horizontal_words(self) -> List[PlacedWord]:
        return [w for w in self.words if w.direction == Direction.HORIZONTAL]

    def vertical_words(self) -> List[PlacedWord]:
        return [w for w in self.words if w.direction == Direction.VERTICAL]
