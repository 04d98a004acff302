# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML importer for arrowword boards.

Loads boards from the YAML intermediate format so a saved board can be
played again, or a saved game resumed.
"""

from pathlib import Path
from typing import Dict, Any, List

import yaml

from models import Board, Direction, GeneratedPuzzle, HintConflictError, PlacedWord
from yaml_schema import PuzzleYAMLData, LAYOUT_FILLER


class YAMLImportError(Exception):
    """Raised when YAML import fails."""
    pass


class YAMLImporter:
    """
    Imports arrowword boards from the YAML intermediate format.

    Usage:
        importer = YAMLImporter()
        puzzle_data = importer.load('board.yaml')
        puzzle = importer.to_puzzle(puzzle_data)
    """

    def load(self, path: str) -> PuzzleYAMLData:
        """
        Load puzzle data from a YAML file.

        Raises:
            YAMLImportError: If the file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise YAMLImportError(f"Puzzle file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            return self.load_string(f.read())

    def load_string(self, yaml_content: str) -> PuzzleYAMLData:
        """Load puzzle data from a YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise YAMLImportError(f"Invalid YAML content: {e}")

        if not isinstance(data, dict):
            raise YAMLImportError(
                f"Puzzle file must contain a YAML mapping, got {type(data)}"
            )
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> PuzzleYAMLData:
        try:
            return PuzzleYAMLData.from_dict(data)
        except (KeyError, TypeError) as e:
            raise YAMLImportError(f"Failed to parse puzzle data: {e}")

    def to_puzzle(self, puzzle_data: PuzzleYAMLData) -> GeneratedPuzzle:
        """
        Rebuild the board and placed words.

        Letters and hints come from the word list; every other cell is a
        filler. The stored layout must agree with the rebuilt board.
        """
        meta = puzzle_data.metadata
        board = Board(rows=meta.rows, cols=meta.cols)
        words: List[PlacedWord] = []

        for w in puzzle_data.words:
            try:
                direction = Direction(w.direction)
            except ValueError:
                raise YAMLImportError(f"Unknown direction '{w.direction}' for {w.answer}")

            word = PlacedWord(
                text=w.answer, hint=w.hint, row=w.row, col=w.col,
                direction=direction, display=w.display,
            )
            clue_row, clue_col = word.clue_position
            positions = word.cells + [(clue_row, clue_col)]
            if not all(board.is_valid_position(r, c) for r, c in positions):
                raise YAMLImportError(f"{w.answer} does not fit on a {meta.rows}x{meta.cols} board")

            for (r, c), ch in zip(word.cells, word.text):
                cell = board.get_cell(r, c)
                if cell.is_letter() and cell.letter != ch:
                    raise YAMLImportError(f"Letter clash for {w.answer} at ({r}, {c})")
                board.set_letter(r, c, ch)
            words.append(word)

        # Hints after letters, so a clash with a letter is caught
        for word in words:
            clue_row, clue_col = word.clue_position
            try:
                board.add_hint(clue_row, clue_col, word.direction, word.hint)
            except HintConflictError as e:
                raise YAMLImportError(f"Bad clue cell for {word.text}: {e}")

        for cell in board.iter_cells():
            if cell.is_open():
                board.set_filler(cell.row, cell.col)

        if puzzle_data.layout:
            self._check_layout(board, puzzle_data.layout)

        return GeneratedPuzzle(
            board=board,
            words=words,
            attempts=meta.generation_stats.attempts,
            seed=meta.generation_stats.seed,
        )

    def _check_layout(self, board: Board, layout: List[str]):
        if len(layout) != board.rows or any(len(line) != board.cols for line in layout):
            raise YAMLImportError("Layout does not match the board dimensions")

        for r, line in enumerate(layout):
            for c, mark in enumerate(line):
                cell = board.get_cell(r, c)
                if cell.is_letter() and mark != cell.letter:
                    raise YAMLImportError(f"Layout disagrees with the words at ({r}, {c})")
                if cell.is_filler() and mark != LAYOUT_FILLER:
                    raise YAMLImportError(f"Layout has '{mark}' where no word needs it at ({r}, {c})")

    def restore_session(self, session, puzzle_data: PuzzleYAMLData):
        """
        Load the board into a GameSession and replay the saved fills.

        Raises:
            YAMLImportError: If a fill or score does not match the board;
                the session is left untouched
        """
        from game_session import FilledCell, Owner

        def to_owner(value):
            try:
                return Owner(value)
            except ValueError:
                raise YAMLImportError(f"Unknown owner '{value}' in saved game")

        puzzle = self.to_puzzle(puzzle_data)

        fills = {}
        for fill in puzzle_data.fills:
            if not puzzle.board.is_valid_position(fill.row, fill.col):
                raise YAMLImportError(f"Fill outside the board at ({fill.row}, {fill.col})")
            cell = puzzle.board.get_cell(fill.row, fill.col)
            if not cell.is_letter() or cell.letter != fill.char:
                raise YAMLImportError(f"Saved fill at ({fill.row}, {fill.col}) does not match the board")
            fills[(fill.row, fill.col)] = FilledCell(fill.char, to_owner(fill.owner))

        scores = {}
        for owner, points in puzzle_data.scores.items():
            if not isinstance(points, int):
                raise YAMLImportError(f"Score for '{owner}' must be an integer")
            scores[to_owner(owner)] = points

        session.load_puzzle(puzzle)
        session.fill_state.update(fills)
        session.scores.update(scores)

        if session.is_complete():
            session.solve()
        else:
            # The rack was dealt against an empty board; deal it again
            session.rack = []
            session.fill_rack()
        return session


def load_puzzle_from_yaml(path: str) -> GeneratedPuzzle:
    """
    Convenience function to load a board from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        GeneratedPuzzle
    """
    importer = YAMLImporter()
    return importer.to_puzzle(importer.load(path))
