# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Computer opponent for the arrowword game.

Fills random uncovered letter cells. It always knows the right letter,
so its only decision is how many cells to take and which ones.
"""

import random
from enum import Enum
from typing import List, Optional, Tuple, TypeVar


T = TypeVar("T")


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> 'Difficulty':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Invalid difficulty '{value}'. "
                f"Must be one of: {[d.value for d in cls]}"
            )


class AIOpponent:
    """Random-policy opponent."""

    # Probability of a second move on medium
    MEDIUM_DOUBLE_MOVE = 0.6
    HARD_MOVES: Tuple[int, int] = (2, 4)

    def __init__(self, difficulty: Difficulty = Difficulty.EASY, rng: Optional[random.Random] = None):
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = rng or random.Random()

    def move_count(self) -> int:
        """How many cells to fill this turn."""
        if self.difficulty == Difficulty.MEDIUM:
            return 2 if self.rng.random() < self.MEDIUM_DOUBLE_MOVE else 1
        if self.difficulty == Difficulty.HARD:
            low, high = self.HARD_MOVES
            return self.rng.randint(low, high)
        return 1

    def choose_cells(self, available: List[T], count: int) -> List[T]:
        """Pick up to count cells, without replacement."""
        count = min(count, len(available))
        return self.rng.sample(list(available), count)
