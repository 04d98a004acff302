"""
Arrowword Board Validator

Validates that a generated board is playable:
1. Every cell has a role (letter, clue or filler)
2. Placed words agree with the letters on the board
3. Every word's clue cell exists and carries its hint
4. The reserved border holds no letters (strict variant)
5. Enough words were placed
6. Every run of two or more letters is a placed word
"""

import os
import sys
from typing import List, Dict, Tuple
from dataclasses import dataclass, field

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from models import Board, Direction, GeneratedPuzzle, PlacedWord


@dataclass
class ValidationResult:
    """Result of board validation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict = field(default_factory=dict)

    def __str__(self):
        status = "✅ VALID" if self.valid else "❌ INVALID"
        lines = [f"Structure: {status}"]

        if self.errors:
            lines.append("\nErrors:")
            for e in self.errors:
                lines.append(f"  ❌ {e}")

        if self.warnings:
            lines.append("\nWarnings:")
            for w in self.warnings:
                lines.append(f"  ⚠️ {w}")

        if self.stats:
            lines.append("\nStats:")
            for k, v in self.stats.items():
                lines.append(f"  {k}: {v}")

        return "\n".join(lines)


class BoardValidator:
    """Checks the structural rules of a finished arrowword board."""

    def __init__(self, puzzle: GeneratedPuzzle, strict_border: bool = True, min_words: int = 1):
        """
        Initialize validator.

        Args:
            puzzle: Generated board and its placed words
            strict_border: Whether row 0 and column 0 must be letter-free
            min_words: Fewest placed words accepted
        """
        self.puzzle = puzzle
        self.board: Board = puzzle.board
        self.strict_border = strict_border
        self.min_words = min_words

    def validate(self) -> ValidationResult:
        result = ValidationResult(valid=True)

        self._check_coverage(result)
        self._check_words(result)
        if self.strict_border:
            self._check_border(result)
        self._check_runs(result)

        placed = len(self.puzzle.words)
        if placed < self.min_words:
            result.errors.append(f"Only {placed} words placed (minimum {self.min_words})")

        result.stats["words"] = placed
        result.stats["horizontal"] = len(self.puzzle.horizontal_words())
        result.stats["vertical"] = len(self.puzzle.vertical_words())
        result.stats["density"] = f"{self.board.density():.1%}"

        result.valid = len(result.errors) == 0
        return result

    def _check_coverage(self, result: ValidationResult):
        for cell in self.board.iter_cells():
            if cell.is_open():
                result.errors.append(f"Cell ({cell.row}, {cell.col}) has no role")
            elif cell.is_clue() and not cell.has_hints():
                result.errors.append(f"Clue cell ({cell.row}, {cell.col}) has no hint")

    def _check_words(self, result: ValidationResult):
        for word in self.puzzle.words:
            for (r, c), ch in zip(word.cells, word.text):
                if not self.board.is_valid_position(r, c):
                    result.errors.append(f"{word.text} runs off the board at ({r}, {c})")
                    break
                cell = self.board.get_cell(r, c)
                if not cell.is_letter() or cell.letter != ch:
                    result.errors.append(
                        f"{word.text} expects '{ch}' at ({r}, {c}), found {cell.letter!r}"
                    )

            clue_row, clue_col = word.clue_position
            if not self.board.is_valid_position(clue_row, clue_col):
                result.errors.append(f"{word.text} has its clue cell off the board")
                continue
            clue = self.board.get_cell(clue_row, clue_col)
            if not clue.is_clue():
                result.errors.append(
                    f"{word.text} clue cell ({clue_row}, {clue_col}) is {clue.cell_type.value}"
                )
            elif clue.hint_for(word.direction) != word.hint:
                result.errors.append(
                    f"{word.text} hint missing from clue cell ({clue_row}, {clue_col})"
                )

    def _check_border(self, result: ValidationResult):
        for r in range(self.board.rows):
            if self.board.get_cell(r, 0).is_letter():
                result.errors.append(f"Letter in reserved column at ({r}, 0)")
        for c in range(1, self.board.cols):
            if self.board.get_cell(0, c).is_letter():
                result.errors.append(f"Letter in reserved row at (0, {c})")

    def _check_runs(self, result: ValidationResult):
        """Every maximal run of 2+ letters must be exactly one placed word."""
        starts = {
            (w.row, w.col, w.direction, w.length) for w in self.puzzle.words
        }
        for run in self._letter_runs():
            if run not in starts:
                row, col, direction, length = run
                result.errors.append(
                    f"Unclued {direction.name.lower()} run of {length} letters at ({row}, {col})"
                )

    def _letter_runs(self) -> List[Tuple[int, int, Direction, int]]:
        runs = []
        board = self.board
        for direction in Direction:
            dr, dc = direction.step
            for cell in board.iter_cells():
                if not cell.is_letter():
                    continue
                pr, pc = cell.row - dr, cell.col - dc
                if board.is_valid_position(pr, pc) and board.get_cell(pr, pc).is_letter():
                    continue
                length = 0
                r, c = cell.row, cell.col
                while board.is_valid_position(r, c) and board.get_cell(r, c).is_letter():
                    length += 1
                    r, c = r + dr, c + dc
                if length >= 2:
                    runs.append((cell.row, cell.col, direction, length))
        return runs


def find_crossings(words: List[PlacedWord]) -> List[Tuple[PlacedWord, PlacedWord, Tuple[int, int]]]:
    """All pairs of placed words sharing a cell, with that cell."""
    crossings = []
    for i, first in enumerate(words):
        first_cells = set(first.cells)
        for second in words[i + 1:]:
            for pos in second.cells:
                if pos in first_cells:
                    crossings.append((first, second, pos))
    return crossings


def validate_puzzle(
    puzzle: GeneratedPuzzle,
    strict_border: bool = True,
    min_words: int = 1,
) -> ValidationResult:
    """
    Convenience function to validate a board.

    Args:
        puzzle: Generated board and placed words
        strict_border: Whether the border must be letter-free
        min_words: Fewest placed words accepted

    Returns:
        ValidationResult
    """
    validator = BoardValidator(puzzle, strict_border=strict_border, min_words=min_words)
    return validator.validate()
