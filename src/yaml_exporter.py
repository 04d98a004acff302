# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML exporter for arrowword boards.

Writes a generated board, its placed words and optionally the state of
a game in progress to the YAML intermediate format.
"""

from pathlib import Path
from typing import Dict, Optional, Any

import yaml

from models import Board, GeneratedPuzzle
from yaml_schema import (
    PuzzleYAMLData, PuzzleMetadata, WordData, FillData, GenerationStats,
    LAYOUT_RIGHT, LAYOUT_DOWN, LAYOUT_BOTH, LAYOUT_FILLER,
)


class YAMLExportError(Exception):
    """Raised when YAML export fails."""
    pass


class YAMLExporter:
    """
    Exports arrowword boards to the YAML intermediate format.

    Usage:
        exporter = YAMLExporter()
        yaml_str = exporter.export(puzzle, title="A1 vocabulary")
        exporter.save(puzzle, 'output/board.yaml', title="A1 vocabulary")
    """

    def export(
        self,
        puzzle: GeneratedPuzzle,
        title: str = "Arrowword",
        author: str = "",
        strict_border: bool = True,
        stats: Optional[Dict[str, Any]] = None,
        session: Optional[Any] = None,
    ) -> str:
        """
        Export a board to a YAML string.

        Args:
            puzzle: Generated board and placed words
            title: Puzzle title
            author: Puzzle author
            strict_border: Whether the board was built with a reserved border
            stats: Optional generator statistics
            session: Optional GameSession whose fills and scores are saved

        Returns:
            YAML string representation of the puzzle
        """
        data = self.build_puzzle_data(puzzle, title, author, strict_border, stats, session)

        header = "# Arrowword Puzzle Intermediate Format\n"
        header += "# Layout: letters, '>' right clue, 'v' down clue, '+' both, '#' filler\n\n"

        try:
            yaml_content = yaml.safe_dump(
                data.to_dict(),
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                indent=2,
                width=80,
            )
        except yaml.YAMLError as e:
            raise YAMLExportError(f"Could not serialize puzzle: {e}")

        return header + yaml_content

    def save(self, puzzle: GeneratedPuzzle, path: str, **kwargs) -> str:
        """
        Save a board to a YAML file.

        Returns:
            Path to saved file
        """
        yaml_content = self.export(puzzle, **kwargs)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(yaml_content)

        return str(path)

    def build_puzzle_data(
        self,
        puzzle: GeneratedPuzzle,
        title: str,
        author: str,
        strict_border: bool = True,
        stats: Optional[Dict[str, Any]] = None,
        session: Optional[Any] = None,
    ) -> PuzzleYAMLData:
        """Build PuzzleYAMLData from a generated puzzle."""
        board = puzzle.board
        stats = stats or {}

        data = PuzzleYAMLData.create_empty(title, author, board.rows, board.cols)
        data.metadata = PuzzleMetadata(
            title=title,
            author=author,
            date=data.metadata.date,
            rows=board.rows,
            cols=board.cols,
            strict_border=strict_border,
            word_count=len(puzzle.words),
            generation_stats=GenerationStats(
                attempts=stats.get('attempts', puzzle.attempts),
                rejected_attempts=stats.get('rejected_attempts', 0),
                candidates_evaluated=stats.get('candidates_evaluated', 0),
                seed=puzzle.seed,
                density=board.density(),
                generation_time_seconds=stats.get('generation_time_seconds', 0.0),
            ),
        )
        data.layout = self.layout_lines(board)
        data.words = [
            WordData(
                answer=w.text,
                hint=w.hint,
                row=w.row,
                col=w.col,
                direction=w.direction.value,
                display=w.display,
            )
            for w in puzzle.words
        ]

        if session is not None:
            data.fills = [
                FillData(row=r, col=c, char=filled.char, owner=filled.owner.value)
                for (r, c), filled in sorted(session.fill_state.items())
            ]
            data.scores = {owner.value: points for owner, points in session.scores.items()}

        return data

    @staticmethod
    def layout_lines(board: Board):
        lines = []
        for row in board.cells:
            line = ""
            for cell in row:
                if cell.is_letter():
                    line += cell.letter
                elif cell.is_clue() and cell.right_hint is not None and cell.down_hint is not None:
                    line += LAYOUT_BOTH
                elif cell.is_clue() and cell.right_hint is not None:
                    line += LAYOUT_RIGHT
                elif cell.is_clue() and cell.down_hint is not None:
                    line += LAYOUT_DOWN
                else:
                    line += LAYOUT_FILLER
            lines.append(line)
        return lines
