# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for board_generator module."""

import os
import random
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from board_generator import ArrowwordGenerator, GenerationFailureError, generate_board
from models import CellType, Direction
from validator import find_crossings, validate_puzzle
from vocabulary import build_vocabulary, sample_vocabulary, EmptyVocabularyError


SMALL_RECORDS = [
    ("gato", "cat"), ("toro", "bull"), ("oso", "bear"),
    ("sol", "sun"), ("luna", "moon"), ("mar", "sea"),
]


def make_generator(seed=0, **kwargs):
    return ArrowwordGenerator(rng=random.Random(seed), **kwargs)


class TestGeneratedBoard(unittest.TestCase):
    """Properties every generated board must have."""

    @classmethod
    def setUpClass(cls):
        cls.vocabulary = sample_vocabulary()
        cls.puzzles = [
            make_generator(seed).generate_with_retry(cls.vocabulary)
            for seed in range(5)
        ]

    def test_passes_validation(self):
        for puzzle in self.puzzles:
            result = validate_puzzle(puzzle, strict_border=True, min_words=5)
            self.assertTrue(result.valid, str(result))

    def test_every_cell_has_a_role(self):
        for puzzle in self.puzzles:
            for cell in puzzle.board.iter_cells():
                self.assertIn(cell.cell_type, (CellType.LETTER, CellType.CLUE, CellType.FILLER))

    def test_border_has_no_letters(self):
        for puzzle in self.puzzles:
            board = puzzle.board
            for r in range(board.rows):
                self.assertFalse(board.get_cell(r, 0).is_letter())
            for c in range(board.cols):
                self.assertFalse(board.get_cell(0, c).is_letter())

    def test_clues_precede_their_words(self):
        for puzzle in self.puzzles:
            for word in puzzle.words:
                clue = puzzle.board.get_cell(*word.clue_position)
                self.assertTrue(clue.is_clue())
                self.assertEqual(clue.hint_for(word.direction), word.hint)

    def test_crossings_agree(self):
        for puzzle in self.puzzles:
            for first, second, (r, c) in find_crossings(puzzle.words):
                self.assertNotEqual(first.direction, second.direction)
                self.assertEqual(first.letter_at(r, c), second.letter_at(r, c))
                self.assertEqual(puzzle.board.get_cell(r, c).letter, first.letter_at(r, c))

    def test_words_come_from_vocabulary(self):
        known = {w.normalized: w.hint for w in self.vocabulary}
        for puzzle in self.puzzles:
            texts = [w.text for w in puzzle.words]
            self.assertEqual(len(texts), len(set(texts)))
            for word in puzzle.words:
                self.assertEqual(known[word.text], word.hint)


class TestArrowwordGenerator(unittest.TestCase):
    """Tests for ArrowwordGenerator class."""

    def setUp(self):
        self.vocabulary = build_vocabulary(SMALL_RECORDS)

    def test_small_vocabulary_reaches_minimum(self):
        """Six short words make a 4-word board within 20 attempts."""
        for seed in range(10):
            generator = make_generator(seed, min_words=4, max_attempts=20)
            puzzle = generator.generate(self.vocabulary)

            self.assertIsNotNone(puzzle)
            self.assertGreaterEqual(len(puzzle.words), 4)
            self.assertLessEqual(puzzle.attempts, 20)

    def test_same_seed_same_board(self):
        first = make_generator(42).generate_with_retry(sample_vocabulary())
        second = make_generator(42).generate_with_retry(sample_vocabulary())

        self.assertEqual(first.board.to_string(), second.board.to_string())
        self.assertEqual([w.text for w in first.words], [w.text for w in second.words])

    def test_generate_board_helper(self):
        puzzle = generate_board(self.vocabulary, seed=3, min_words=3)

        self.assertIsNotNone(puzzle)
        self.assertEqual(puzzle.seed, 3)

    def test_empty_vocabulary(self):
        with self.assertRaises(EmptyVocabularyError):
            make_generator().generate([])

    def test_retry_ceiling(self):
        """One word can never make a two-word board."""
        generator = make_generator(min_words=2, max_attempts=2)
        vocabulary = build_vocabulary([("sol", "sun")])

        self.assertIsNone(generator.generate(vocabulary))
        with self.assertRaises(GenerationFailureError) as ctx:
            generator.generate_with_retry(vocabulary, max_retries=3)

        self.assertEqual(ctx.exception.retries, 3)
        self.assertEqual(generator.stats["attempts"], 2 + 6)
        self.assertEqual(generator.stats["rejected_attempts"], 8)

    def test_board_too_small(self):
        with self.assertRaises(ValueError):
            ArrowwordGenerator(rows=1, cols=5)

    def test_loose_border_uses_row_zero(self):
        generator = make_generator(strict_border=False)
        generator._reset_board()

        candidates = generator.find_candidates("SOL")

        self.assertTrue(any(c.row == 0 and c.direction == Direction.HORIZONTAL for c in candidates))
        self.assertFalse(any(c.col == 0 and c.direction == Direction.HORIZONTAL for c in candidates))


class TestPlacementRules(unittest.TestCase):
    """Legality checks on a board holding GATO across at (1, 1)."""

    def setUp(self):
        self.generator = make_generator()
        self.generator._reset_board()
        gato = build_vocabulary([("gato", "cat")])[0]
        self.generator.place_word(gato, 1, 1, Direction.HORIZONTAL)

    def test_strict_border_candidates(self):
        for c in self.generator.find_candidates("MAR"):
            self.assertGreaterEqual(c.row, 1)
            self.assertGreaterEqual(c.col, 1)

    def test_crossing_allowed(self):
        """TORO down through the T of GATO."""
        self.assertTrue(self.generator.can_place("TORO", 1, 3, Direction.VERTICAL))
        self.assertEqual(self.generator.count_intersections("TORO", 1, 3, Direction.VERTICAL), 1)

    def test_letter_mismatch(self):
        self.assertFalse(self.generator.can_place("SOL", 1, 3, Direction.VERTICAL))

    def test_parallel_touching_rejected(self):
        """A word directly under GATO would form unclued runs."""
        self.assertFalse(self.generator.can_place("SOL", 2, 1, Direction.HORIZONTAL))

    def test_same_direction_overlap_rejected(self):
        self.assertFalse(self.generator.can_place("TO", 1, 3, Direction.HORIZONTAL))

    def test_clue_cell_cannot_be_letter(self):
        """Clue for a word at (1, 2) would sit on the G."""
        self.assertFalse(self.generator.can_place("AS", 1, 2, Direction.HORIZONTAL))

    def test_clue_slot_taken(self):
        """A clue cell holds one hint per direction."""
        self.assertTrue(self.generator.can_place("MAR", 4, 3, Direction.HORIZONTAL))

        self.generator.board.add_hint(4, 2, Direction.HORIZONTAL, "taken")

        self.assertFalse(self.generator.can_place("MAR", 4, 3, Direction.HORIZONTAL))
        self.assertTrue(self.generator.can_place("MAR", 5, 2, Direction.VERTICAL))

    def test_word_cannot_run_into_letter(self):
        board = self.generator.board
        board.set_letter(4, 4, "X")

        self.assertFalse(self.generator.can_place("MAR", 4, 1, Direction.HORIZONTAL))
        self.assertTrue(self.generator.can_place("MAR", 5, 1, Direction.HORIZONTAL))

    def test_best_candidate_preferred(self):
        """With top_k=1 the crossing position wins."""
        self.generator.top_k = 1
        toro = build_vocabulary([("toro", "bull")])[0]

        self.assertTrue(self.generator._try_place_word(toro))

        placed = self.generator.placed_words[-1]
        self.assertEqual(self.generator.count_intersections("TORO", placed.row, placed.col, placed.direction), 4)
        self.assertEqual(len(find_crossings(self.generator.placed_words)), 1)


if __name__ == '__main__':
    unittest.main()
