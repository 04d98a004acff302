# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for validator module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import Board, CellType, Direction, GeneratedPuzzle, PlacedWord
from validator import BoardValidator, find_crossings, validate_puzzle


def build_sol_oso():
    """
    4x5 board: SOL across from (1, 1), OSO down from (1, 2).

        # # v # #
        > S O L #
        # # S # #
        # # O # #
    """
    board = Board(rows=4, cols=5)
    words = [
        PlacedWord(text="SOL", hint="sun", row=1, col=1, direction=Direction.HORIZONTAL),
        PlacedWord(text="OSO", hint="bear", row=1, col=2, direction=Direction.VERTICAL),
    ]
    for word in words:
        for (r, c), ch in zip(word.cells, word.text):
            board.set_letter(r, c, ch)
    for word in words:
        board.add_hint(*word.clue_position, word.direction, word.hint)
    for cell in board.iter_cells():
        if cell.is_open():
            board.set_filler(cell.row, cell.col)
    return GeneratedPuzzle(board=board, words=words)


class TestBoardValidator(unittest.TestCase):
    """Tests for BoardValidator class."""

    def test_valid_board(self):
        result = validate_puzzle(build_sol_oso(), strict_border=True, min_words=2)

        self.assertTrue(result.valid, str(result))
        self.assertEqual(result.stats["words"], 2)
        self.assertEqual(result.stats["horizontal"], 1)
        self.assertEqual(result.stats["vertical"], 1)

    def test_too_few_words(self):
        result = validate_puzzle(build_sol_oso(), min_words=3)

        self.assertFalse(result.valid)
        self.assertTrue(any("minimum" in e for e in result.errors))

    def test_cell_without_role(self):
        puzzle = build_sol_oso()
        cell = puzzle.board.get_cell(3, 4)
        cell.cell_type = CellType.EMPTY

        result = validate_puzzle(puzzle)

        self.assertFalse(result.valid)
        self.assertTrue(any("no role" in e for e in result.errors))

    def test_letter_disagreement(self):
        puzzle = build_sol_oso()
        puzzle.board.get_cell(1, 3).letter = "N"

        result = validate_puzzle(puzzle)

        self.assertFalse(result.valid)
        self.assertTrue(any("SOL" in e for e in result.errors))

    def test_missing_hint(self):
        puzzle = build_sol_oso()
        puzzle.board.get_cell(0, 2).down_hint = "wrong"

        result = validate_puzzle(puzzle)

        self.assertFalse(result.valid)
        self.assertTrue(any("OSO" in e for e in result.errors))

    def test_unclued_run(self):
        """A stray letter next to SOL makes a run no word accounts for."""
        puzzle = build_sol_oso()
        puzzle.board.set_letter(1, 4, "O")

        result = validate_puzzle(puzzle)

        self.assertFalse(result.valid)
        self.assertTrue(any("Unclued" in e for e in result.errors))

    def test_border_letter(self):
        board = Board(rows=3, cols=3)
        word = PlacedWord(text="MAR", hint="sea", row=0, col=0, direction=Direction.VERTICAL)
        for (r, c), ch in zip(word.cells, word.text):
            board.set_letter(r, c, ch)
        puzzle = GeneratedPuzzle(board=board, words=[word])

        strict = BoardValidator(puzzle, strict_border=True).validate()
        border_errors = [e for e in strict.errors if "reserved" in e]

        self.assertEqual(len(border_errors), 3)
        loose = BoardValidator(puzzle, strict_border=False).validate()
        self.assertFalse(any("reserved" in e for e in loose.errors))

    def test_find_crossings(self):
        puzzle = build_sol_oso()

        crossings = find_crossings(puzzle.words)

        self.assertEqual(len(crossings), 1)
        self.assertEqual(crossings[0][2], (1, 2))

    def test_str(self):
        text = str(validate_puzzle(build_sol_oso()))

        self.assertIn("VALID", text)
        self.assertIn("words", text)


if __name__ == '__main__':
    unittest.main()
