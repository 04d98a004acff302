"""
Arrowword Board Generator

Builds a dense arrowword board from a vocabulary:
- Every word's clue sits in the cell immediately before it
- Crossing words agree on their shared letter
- Parallel words never touch without crossing
- Row 0 and column 0 hold only clues (strict border)
- Every cell ends up as a letter, a clue or a filler block

Placement is greedy: for each word (shuffled), every legal position is
scored by how many existing letters it reuses and one of the top few
is picked at random. No backtracking; a board with too few words is
discarded and the attempt repeated.
"""

import logging
import os
import random
import sys
from dataclasses import dataclass
from typing import List, Tuple, Optional, Dict, Set

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from models import (
    Board, CellType, Direction, PlacedWord, VocabularyWord, GeneratedPuzzle
)
from vocabulary import EmptyVocabularyError


DEFAULT_ROWS = 10
DEFAULT_COLS = 8
DEFAULT_MIN_WORDS = 5
DEFAULT_MAX_ATTEMPTS = 20
DEFAULT_TOP_K = 3


class GenerationFailureError(Exception):
    """Raised when no board reaches the minimum word count within the retry ceiling."""

    def __init__(self, retries: int, attempts: int):
        self.retries = retries
        self.attempts = attempts
        super().__init__(
            f"Could not generate a board after {retries} retries "
            f"({attempts} attempts in total)"
        )


@dataclass(frozen=True)
class Candidate:
    """A legal position for a word, with its overlap score."""
    row: int
    col: int
    direction: Direction
    score: int = 0


class ArrowwordGenerator:
    """Generates arrowword boards from a vocabulary."""

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        strict_border: bool = True,
        min_words: int = DEFAULT_MIN_WORDS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        top_k: int = DEFAULT_TOP_K,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize generator.

        Args:
            rows: Board height
            cols: Board width
            strict_border: Keep row 0 and column 0 free of letters
            min_words: Fewest placed words for a board to be accepted
            max_attempts: Attempts per generate() call
            top_k: How many of the best candidates to choose among
            rng: Random source (inject a seeded one for reproducible boards)
            logger: Logger instance (uses module logger if not provided)
        """
        if rows < 2 or cols < 2:
            raise ValueError(f"Board must be at least 2x2, got {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self.strict_border = strict_border
        self.min_words = min_words
        self.max_attempts = max_attempts
        self.top_k = max(1, top_k)
        self.rng = rng or random.Random()
        self.logger = logger if logger else logging.getLogger(__name__)

        self.board: Optional[Board] = None
        self.placed_words: List[PlacedWord] = []
        # (row, col) -> directions of the words already using that letter
        self._occupancy: Dict[Tuple[int, int], Set[Direction]] = {}

        self.stats = {
            "attempts": 0,
            "rejected_attempts": 0,
            "candidates_evaluated": 0,
            "words_placed": 0,
        }

    def generate(self, vocabulary: List[VocabularyWord]) -> Optional[GeneratedPuzzle]:
        """
        Generate a board, trying up to max_attempts times.

        Args:
            vocabulary: Normalized vocabulary entries

        Returns:
            GeneratedPuzzle, or None if no attempt placed enough words

        Raises:
            EmptyVocabularyError: If the vocabulary is empty
        """
        if not vocabulary:
            raise EmptyVocabularyError("Cannot generate a board without vocabulary")

        for attempt in range(1, self.max_attempts + 1):
            self.stats["attempts"] += 1
            self._reset_board()
            self._fill_board(vocabulary)

            if len(self.placed_words) >= self.min_words:
                self._finalize_board()
                self.stats["words_placed"] += len(self.placed_words)
                self.logger.debug(
                    f"Attempt {attempt}: placed {len(self.placed_words)} words, "
                    f"density {self.board.density():.1%}"
                )
                return GeneratedPuzzle(
                    board=self.board,
                    words=list(self.placed_words),
                    attempts=attempt,
                )

            self.stats["rejected_attempts"] += 1
            self.logger.debug(
                f"Attempt {attempt}: only {len(self.placed_words)} words "
                f"(need {self.min_words}), discarding"
            )

        self.logger.warning(
            f"No board with {self.min_words}+ words after {self.max_attempts} attempts"
        )
        return None

    def generate_with_retry(
        self,
        vocabulary: List[VocabularyWord],
        max_retries: int = 25,
    ) -> GeneratedPuzzle:
        """
        Call generate() until it succeeds or max_retries is exhausted.

        Raises:
            EmptyVocabularyError: If the vocabulary is empty
            GenerationFailureError: If every retry fails
        """
        for retry in range(1, max_retries + 1):
            puzzle = self.generate(vocabulary)
            if puzzle is not None:
                puzzle.attempts = self.stats["attempts"]
                return puzzle
            self.logger.warning(f"Generation is hard, retrying ({retry}/{max_retries})...")

        raise GenerationFailureError(max_retries, self.stats["attempts"])

    def _reset_board(self):
        self.board = Board(rows=self.rows, cols=self.cols)
        if self.strict_border:
            self.board.reserve_border()
        self.placed_words = []
        self._occupancy = {}

    def _fill_board(self, vocabulary: List[VocabularyWord]):
        """Single greedy pass over the shuffled vocabulary."""
        shuffled = list(vocabulary)
        self.rng.shuffle(shuffled)

        for word in shuffled:
            self._try_place_word(word)

    def _try_place_word(self, word: VocabularyWord) -> bool:
        candidates = self.find_candidates(word.normalized)
        if not candidates:
            return False

        # Stable sort keeps scan order among equal scores
        candidates.sort(key=lambda c: c.score, reverse=True)
        best = candidates[:self.top_k]
        choice = self.rng.choice(best)

        self.place_word(word, choice.row, choice.col, choice.direction)
        return True

    def find_candidates(self, text: str) -> List[Candidate]:
        """Every legal (row, col, direction) for a word, scored by overlap."""
        candidates = []
        length = len(text)
        first = 1 if self.strict_border else 0

        # Horizontal: clue cell at (r, c-1), so c starts at 1
        for r in range(first, self.rows):
            for c in range(1, self.cols - length + 1):
                if self.can_place(text, r, c, Direction.HORIZONTAL):
                    candidates.append(Candidate(
                        r, c, Direction.HORIZONTAL,
                        self.count_intersections(text, r, c, Direction.HORIZONTAL)
                    ))

        # Vertical: clue cell at (r-1, c), so r starts at 1
        for r in range(1, self.rows - length + 1):
            for c in range(first, self.cols):
                if self.can_place(text, r, c, Direction.VERTICAL):
                    candidates.append(Candidate(
                        r, c, Direction.VERTICAL,
                        self.count_intersections(text, r, c, Direction.VERTICAL)
                    ))

        self.stats["candidates_evaluated"] += len(candidates)
        return candidates

    def can_place(self, text: str, row: int, col: int, direction: Direction) -> bool:
        """Check whether a word fits at a position without breaking the board."""
        board = self.board
        dr, dc = direction.step
        length = len(text)

        end_row = row + dr * (length - 1)
        end_col = col + dc * (length - 1)
        if not (board.is_valid_position(row, col) and board.is_valid_position(end_row, end_col)):
            return False

        # Clue cell must exist and have a free slot for this direction
        clue_row, clue_col = row - dr, col - dc
        if not board.is_valid_position(clue_row, clue_col):
            return False
        clue = board.get_cell(clue_row, clue_col)
        if clue.is_letter() or clue.is_filler():
            return False
        if clue.is_clue() and clue.hint_for(direction) is not None:
            return False

        # The word must not run straight into another letter
        after_row, after_col = end_row + dr, end_col + dc
        if (board.is_valid_position(after_row, after_col)
                and board.get_cell(after_row, after_col).is_letter()):
            return False

        new_letters = 0
        for i, ch in enumerate(text):
            r, c = row + dr * i, col + dc * i
            cell = board.get_cell(r, c)

            if cell.is_letter():
                if cell.letter != ch:
                    return False
                if direction in self._occupancy.get((r, c), set()):
                    return False
                continue

            if cell.cell_type != CellType.EMPTY:
                # Clue, filler or reserved border
                return False

            if self._touches_perpendicular(r, c, direction):
                return False
            new_letters += 1

        # A word lying entirely on existing letters adds nothing
        return new_letters > 0

    def _touches_perpendicular(self, row: int, col: int, direction: Direction) -> bool:
        """True if a new letter here would sit beside a letter with no crossing."""
        dr, dc = direction.perpendicular().step
        for sign in (-1, 1):
            r, c = row + dr * sign, col + dc * sign
            if self.board.is_valid_position(r, c) and self.board.get_cell(r, c).is_letter():
                return True
        return False

    def count_intersections(self, text: str, row: int, col: int, direction: Direction) -> int:
        """Number of letters the word would share with words already placed."""
        dr, dc = direction.step
        count = 0
        for i in range(len(text)):
            if self.board.get_cell(row + dr * i, col + dc * i).is_letter():
                count += 1
        return count

    def place_word(self, word: VocabularyWord, row: int, col: int, direction: Direction):
        """Write the clue and the letters of a word."""
        dr, dc = direction.step

        self.board.add_hint(row - dr, col - dc, direction, word.hint)

        for i, ch in enumerate(word.normalized):
            r, c = row + dr * i, col + dc * i
            self.board.set_letter(r, c, ch)
            self._occupancy.setdefault((r, c), set()).add(direction)

        self.placed_words.append(PlacedWord(
            text=word.normalized,
            hint=word.hint,
            row=row,
            col=col,
            direction=direction,
            display=word.display,
        ))

    def _finalize_board(self):
        """Give every undecided cell the filler role."""
        for cell in self.board.iter_cells():
            if cell.is_open() or (cell.is_clue() and not cell.has_hints()):
                self.board.set_filler(cell.row, cell.col)


def generate_board(
    vocabulary: List[VocabularyWord],
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    seed: Optional[int] = None,
    **kwargs
) -> Optional[GeneratedPuzzle]:
    """
    Convenience function to generate a board.

    Args:
        vocabulary: Normalized vocabulary entries
        rows: Board height
        cols: Board width
        seed: Optional seed for a reproducible board
        **kwargs: Extra ArrowwordGenerator options

    Returns:
        GeneratedPuzzle or None
    """
    generator = ArrowwordGenerator(rows=rows, cols=cols, rng=random.Random(seed), **kwargs)
    puzzle = generator.generate(vocabulary)
    if puzzle is not None:
        puzzle.seed = seed
    return puzzle
