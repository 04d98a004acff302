# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML schema definitions for the arrowword intermediate format.

The layout is stored one string per board row:
    A-Z  letter cell
    >    clue for a word to the right
    v    clue for a word below
    +    clue for both directions
    #    filler block
Hints themselves live in the word list, keyed by the word's start.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from datetime import datetime


LAYOUT_RIGHT = ">"
LAYOUT_DOWN = "v"
LAYOUT_BOTH = "+"
LAYOUT_FILLER = "#"


@dataclass
class GenerationStats:
    """Statistics from board generation."""
    attempts: int = 0
    rejected_attempts: int = 0
    candidates_evaluated: int = 0
    seed: Optional[int] = None
    density: float = 0.0
    generation_time_seconds: float = 0.0


@dataclass
class PuzzleMetadata:
    """Metadata for the puzzle."""
    title: str
    author: str
    date: str
    rows: int
    cols: int
    strict_border: bool = True
    word_count: int = 0
    generation_stats: GenerationStats = field(default_factory=GenerationStats)


@dataclass
class WordData:
    """A placed word."""
    answer: str
    hint: str
    row: int
    col: int
    direction: str  # 'h' or 'v'
    display: Optional[str] = None


@dataclass
class FillData:
    """A filled cell of a game in progress."""
    row: int
    col: int
    char: str
    owner: str  # 'player' or 'ai'


@dataclass
class PuzzleYAMLData:
    """
    Complete puzzle data for the YAML intermediate format.

    This is the structure serialized to/from YAML.
    """
    metadata: PuzzleMetadata
    layout: List[str] = field(default_factory=list)
    words: List[WordData] = field(default_factory=list)
    fills: List[FillData] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def create_empty(cls, title: str, author: str, rows: int, cols: int) -> 'PuzzleYAMLData':
        today = datetime.now().strftime("%Y-%m-%d")
        return cls(
            metadata=PuzzleMetadata(title=title, author=author, date=today, rows=rows, cols=cols),
            layout=[LAYOUT_FILLER * cols for _ in range(rows)],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        stats = self.metadata.generation_stats
        data = {
            'metadata': {
                'title': self.metadata.title,
                'author': self.metadata.author,
                'date': self.metadata.date,
                'rows': self.metadata.rows,
                'cols': self.metadata.cols,
                'strict_border': self.metadata.strict_border,
                'word_count': self.metadata.word_count,
                'generation_stats': {
                    'attempts': stats.attempts,
                    'rejected_attempts': stats.rejected_attempts,
                    'candidates_evaluated': stats.candidates_evaluated,
                    'seed': stats.seed,
                    'density': round(stats.density, 4),
                    'generation_time_seconds': round(stats.generation_time_seconds, 3),
                },
            },
            'layout': list(self.layout),
            'words': [
                {
                    'answer': w.answer,
                    'hint': w.hint,
                    'row': w.row,
                    'col': w.col,
                    'direction': w.direction,
                    'display': w.display,
                }
                for w in self.words
            ],
        }
        if self.fills:
            data['fills'] = [
                {'row': f.row, 'col': f.col, 'char': f.char, 'owner': f.owner}
                for f in self.fills
            ]
        if self.scores:
            data['scores'] = dict(self.scores)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PuzzleYAMLData':
        """
        Create PuzzleYAMLData from dictionary.

        Raises:
            KeyError: If a required key is missing
        """
        meta = data['metadata']
        stats = meta.get('generation_stats', {}) or {}
        metadata = PuzzleMetadata(
            title=meta.get('title', 'Arrowword'),
            author=meta.get('author', ''),
            date=meta.get('date', ''),
            rows=meta['rows'],
            cols=meta['cols'],
            strict_border=meta.get('strict_border', True),
            word_count=meta.get('word_count', 0),
            generation_stats=GenerationStats(
                attempts=stats.get('attempts', 0),
                rejected_attempts=stats.get('rejected_attempts', 0),
                candidates_evaluated=stats.get('candidates_evaluated', 0),
                seed=stats.get('seed'),
                density=stats.get('density', 0.0),
                generation_time_seconds=stats.get('generation_time_seconds', 0.0),
            ),
        )

        words = [
            WordData(
                answer=w['answer'],
                hint=w['hint'],
                row=w['row'],
                col=w['col'],
                direction=w['direction'],
                display=w.get('display'),
            )
            for w in data.get('words', [])
        ]
        fills = [
            FillData(row=f['row'], col=f['col'], char=f['char'], owner=f['owner'])
            for f in data.get('fills', []) or []
        ]

        return cls(
            metadata=metadata,
            layout=list(data.get('layout', [])),
            words=words,
            fills=fills,
            scores=dict(data.get('scores', {}) or {}),
        )
