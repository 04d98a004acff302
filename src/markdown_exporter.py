"""
Markdown exporter for arrowword boards.
Exports a board and its clues to a structured Markdown document.
"""

from datetime import datetime
from typing import Optional
from models import Board, Cell, Direction, GeneratedPuzzle


class MarkdownExporter:
    """Exports arrowword boards to Markdown format."""

    def __init__(self, puzzle: GeneratedPuzzle, title: str = "Arrowword", author: str = ""):
        self.puzzle = puzzle
        self.board: Board = puzzle.board
        self.title = title
        self.author = author

    def export(self, filepath: Optional[str] = None) -> str:
        """
        Export the board to Markdown.

        Args:
            filepath: Optional path to save the file

        Returns:
            Markdown string
        """
        md = []

        md.append(f"# {self.title}")
        md.append("")
        md.append("## Metadata")
        md.append("")
        md.append(f"- **Date**: {datetime.now().strftime('%Y-%m-%d')}")
        if self.author:
            md.append(f"- **Author**: {self.author}")
        md.append(f"- **Size**: {self.board.rows}×{self.board.cols}")
        md.append(f"- **Words**: {len(self.puzzle.words)}")
        md.append(f"- **Density**: {self.board.density():.1%}")
        md.append("")

        md.append("## Board")
        md.append("")
        md.append(self._render_table(show_solution=False))
        md.append("")

        md.append("## Clues")
        md.append("")
        md.append("### → Across")
        md.append("")
        for word in sorted(self.puzzle.horizontal_words(), key=lambda w: (w.row, w.col)):
            md.append(f"- {_position(word.clue_position)} {word.hint} ({word.length})")
        md.append("")
        md.append("### ↓ Down")
        md.append("")
        for word in sorted(self.puzzle.vertical_words(), key=lambda w: (w.col, w.row)):
            md.append(f"- {_position(word.clue_position)} {word.hint} ({word.length})")
        md.append("")

        md.append("## Solution")
        md.append("")
        md.append(self._render_table(show_solution=True))
        md.append("")

        result = "\n".join(md)

        if filepath:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write(result)

        return result

    def _render_table(self, show_solution: bool = False) -> str:
        """Render the board as a Markdown table."""
        lines = []

        header = "| |"
        for col in range(self.board.cols):
            header += f" {col} |"
        lines.append(header)

        separator = "|---|"
        for _ in range(self.board.cols):
            separator += "---|"
        lines.append(separator)

        for row in range(self.board.rows):
            line = f"| {row} |"
            for col in range(self.board.cols):
                line += f" {self._render_cell(self.board.get_cell(row, col), show_solution)} |"
            lines.append(line)

        return "\n".join(lines)

    @staticmethod
    def _render_cell(cell: Cell, show_solution: bool) -> str:
        if cell.is_letter():
            return cell.letter if show_solution else " "
        if cell.is_clue():
            labels = [clue_label(cell, d) for d in Direction]
            return "<br>".join(_escape(label) for label in labels if label)
        return "■"


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


def _position(pos) -> str:
    return f"({pos[0]}, {pos[1]})"


def clue_label(cell: Cell, direction: Direction) -> Optional[str]:
    """Hint text with its arrow, as printed in a clue cell."""
    hint = cell.hint_for(direction)
    if hint is None:
        return None
    arrow = "→" if direction == Direction.HORIZONTAL else "↓"
    return f"{hint} {arrow}"
