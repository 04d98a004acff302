# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Two-player arrowword game session.

A session owns one generated board, the fill overlay recording who filled
which letter, the scores and the player's rack. The generated board is
never modified during play.

States:
    AWAITING_START -> PLAYER_TURN <-> AI_TURN -> FINISHED

Listeners registered with subscribe() receive (event, payload) for
every change, so any presentation layer can follow the game.
"""

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Any

from models import GeneratedPuzzle, PlacedWord, VocabularyWord
from board_generator import ArrowwordGenerator
from ai_opponent import AIOpponent, Difficulty
from config import GameConfig, BoardConfig


SPANISH_ALPHABET = "ABCDEFGHIJKLMNÑOPQRSTUVWXYZ"

Position = Tuple[int, int]
Listener = Callable[[str, Dict[str, Any]], None]


class SessionState(Enum):
    AWAITING_START = "awaiting_start"
    PLAYER_TURN = "player_turn"
    AI_TURN = "ai_turn"
    FINISHED = "finished"


class Owner(Enum):
    PLAYER = "player"
    AI = "ai"


class FillOutcome(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    ILLEGAL = "illegal"


@dataclass(frozen=True)
class FilledCell:
    """One entry of the fill overlay."""
    char: str
    owner: Owner


@dataclass
class FillResult:
    """Outcome of a fill attempt."""
    outcome: FillOutcome
    points: int = 0
    completed_words: Tuple[str, ...] = ()
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.outcome != FillOutcome.ILLEGAL


class GameSession:
    """
    One game between the player and the computer on a single board.

    Usage:
        session = GameSession(vocabulary, board_config, game_config)
        session.start("medium")
        session.select_rack_tile(0)
        result = session.attempt_fill(3, 4)
        session.pass_turn()
    """

    def __init__(
        self,
        vocabulary: List[VocabularyWord],
        board_config: Optional[BoardConfig] = None,
        game_config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the session.

        Args:
            vocabulary: Normalized vocabulary to build boards from
            board_config: Board dimensions and generation limits
            game_config: Rack, difficulty and pacing settings
            rng: Random source shared by generator, rack and opponent
            sleep: Pause function between opponent moves
            logger: Logger instance (uses module logger if not provided)
        """
        self.vocabulary = list(vocabulary)
        self.board_config = board_config or BoardConfig()
        self.game_config = game_config or GameConfig()
        self.rng = rng or random.Random()
        self.sleep = sleep
        self.logger = logger if logger else logging.getLogger(__name__)

        self.difficulty = Difficulty.parse(self.game_config.difficulty)
        self.state = SessionState.AWAITING_START
        self.puzzle: Optional[GeneratedPuzzle] = None
        self.fill_state: Dict[Position, FilledCell] = {}
        self.scores: Dict[Owner, int] = {Owner.PLAYER: 0, Owner.AI: 0}
        self.rack: List[str] = []
        self.selected_tile: Optional[int] = None
        self.opponent: Optional[AIOpponent] = None

        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Subscription

    def subscribe(self, listener: Listener) -> Listener:
        """Register a listener; returns it for later unsubscribe()."""
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str, **payload):
        for listener in list(self._listeners):
            listener(event, payload)

    # ------------------------------------------------------------------
    # Lifecycle

    def start(self, difficulty=None) -> GeneratedPuzzle:
        """
        Generate a board and hand the first turn to the player.

        Raises:
            EmptyVocabularyError: If there is no vocabulary
            GenerationFailureError: If the retry ceiling is reached
        """
        if difficulty is not None:
            self.difficulty = Difficulty.parse(difficulty)

        cfg = self.board_config
        generator = ArrowwordGenerator(
            rows=cfg.rows,
            cols=cfg.cols,
            strict_border=cfg.strict_border,
            min_words=cfg.min_words,
            max_attempts=cfg.max_attempts,
            top_k=cfg.top_k,
            rng=self.rng,
        )
        puzzle = generator.generate_with_retry(
            self.vocabulary, max_retries=cfg.max_generation_retries
        )
        self.load_puzzle(puzzle)
        return puzzle

    def load_puzzle(self, puzzle: GeneratedPuzzle):
        """Start a fresh game on an existing board."""
        self.puzzle = puzzle
        self.fill_state = {}
        self.scores = {Owner.PLAYER: 0, Owner.AI: 0}
        self.rack = []
        self.selected_tile = None
        self.opponent = AIOpponent(self.difficulty, rng=self.rng)

        self.logger.info(
            f"New board: {len(puzzle.words)} words, "
            f"{len(puzzle.board.letter_cells())} letters, difficulty {self.difficulty.value}"
        )
        self._set_state(SessionState.PLAYER_TURN)
        self._emit("started", words=len(puzzle.words))
        self.fill_rack()

    def _set_state(self, state: SessionState):
        self.state = state
        self._emit("turn", state=state.value)

    # ------------------------------------------------------------------
    # Board queries

    def uncovered_cells(self) -> List[Position]:
        """Letter cells nobody has filled yet, in reading order."""
        if self.puzzle is None:
            return []
        return [
            (cell.row, cell.col) for cell in self.puzzle.board.letter_cells()
            if (cell.row, cell.col) not in self.fill_state
        ]

    def is_complete(self) -> bool:
        return self.puzzle is not None and not self.uncovered_cells()

    def cell_view(self, row: int, col: int) -> Optional[Dict[str, Any]]:
        """Read-only view of a cell for rendering; None before a board is loaded."""
        if self.puzzle is None:
            return None
        cell = self.puzzle.board.get_cell(row, col)
        filled = self.fill_state.get((row, col))
        return {
            "type": cell.cell_type.value,
            "right_hint": cell.right_hint,
            "down_hint": cell.down_hint,
            "char": filled.char if filled else None,
            "owner": filled.owner.value if filled else None,
        }

    def snapshot(self) -> Dict[str, Any]:
        """Whole-game view for rendering."""
        board = self.puzzle.board if self.puzzle else None
        return {
            "state": self.state.value,
            "difficulty": self.difficulty.value,
            "scores": {owner.value: points for owner, points in self.scores.items()},
            "rack": list(self.rack),
            "selected_tile": self.selected_tile,
            "cells": [
                [self.cell_view(r, c) for c in range(board.cols)]
                for r in range(board.rows)
            ] if board else [],
        }

    # ------------------------------------------------------------------
    # Rack

    def fill_rack(self):
        """Top the rack up, favouring letters still needed on the board."""
        needed = [
            self.puzzle.board.get_cell(r, c).letter for r, c in self.uncovered_cells()
        ]
        size = self.game_config.rack_size
        bias = self.game_config.needed_letter_bias
        alphabet = self.game_config.alphabet

        while len(self.rack) < size:
            if needed and self.rng.random() < bias:
                self.rack.append(self.rng.choice(needed))
            else:
                self.rack.append(self.rng.choice(alphabet))

        self._emit("rack", rack=list(self.rack))

    def select_rack_tile(self, index: int) -> Optional[int]:
        """Select a tile, or deselect it if already selected."""
        if self.state != SessionState.PLAYER_TURN:
            return self.selected_tile
        if not 0 <= index < len(self.rack):
            self.logger.debug(f"Rack index {index} out of range")
            return self.selected_tile

        self.selected_tile = None if self.selected_tile == index else index
        self._emit("rack", rack=list(self.rack), selected=self.selected_tile)
        return self.selected_tile

    def shuffle_rack(self):
        if self.state != SessionState.PLAYER_TURN:
            return
        self.rng.shuffle(self.rack)
        self.selected_tile = None
        self._emit("rack", rack=list(self.rack))

    # ------------------------------------------------------------------
    # Moves

    def attempt_fill(self, row: int, col: int) -> FillResult:
        """
        Place the selected tile on a letter cell.

        Illegal attempts (wrong turn, no tile, not a letter cell, already
        filled) change nothing.
        """
        reason = self._illegal_reason(row, col)
        if reason:
            self.logger.debug(f"Illegal fill at ({row}, {col}): {reason}")
            return FillResult(FillOutcome.ILLEGAL, reason=reason)

        char = self.rack.pop(self.selected_tile)
        self.selected_tile = None
        expected = self.puzzle.board.get_cell(row, col).letter

        if char == expected:
            points, completed = self._record_fill(row, col, char, Owner.PLAYER)
            result = FillResult(FillOutcome.CORRECT, points=points, completed_words=completed)
        else:
            self._add_score(Owner.PLAYER, -1)
            result = FillResult(FillOutcome.INCORRECT, points=-1)

        self._emit("rack", rack=list(self.rack))
        if self.is_complete():
            self._finish()
        elif not self.rack:
            self.fill_rack()
        return result

    def _illegal_reason(self, row: int, col: int) -> Optional[str]:
        if self.state != SessionState.PLAYER_TURN:
            return f"not the player's turn ({self.state.value})"
        if self.selected_tile is None:
            return "no rack tile selected"
        board = self.puzzle.board
        if not board.is_valid_position(row, col):
            return "outside the board"
        if not board.get_cell(row, col).is_letter():
            return "not a letter cell"
        if (row, col) in self.fill_state:
            return "cell already filled"
        return None

    def _record_fill(self, row: int, col: int, char: str, owner: Owner) -> Tuple[int, Tuple[str, ...]]:
        """Write a correct letter, award the letter point and any word bonuses."""
        self.fill_state[(row, col)] = FilledCell(char, owner)
        self._emit("filled", row=row, col=col, char=char, owner=owner.value)

        points = 1
        completed = []
        for word in self.puzzle.words_at(row, col):
            if self._word_complete(word):
                points += word.length
                completed.append(word.text)

        self._add_score(owner, points)
        if completed:
            self.logger.debug(f"{owner.value} completed {completed}")
        return points, tuple(completed)

    def _word_complete(self, word: PlacedWord) -> bool:
        return all(pos in self.fill_state for pos in word.cells)

    def _add_score(self, owner: Owner, points: int):
        self.scores[owner] += points
        self._emit("score", owner=owner.value, points=points, total=self.scores[owner])

    def pass_turn(self) -> List[Position]:
        """
        Hand the turn to the computer and play it out.

        Returns:
            Cells the computer filled
        """
        if self.state != SessionState.PLAYER_TURN:
            return []

        self.selected_tile = None
        self._set_state(SessionState.AI_TURN)
        self.sleep(self.game_config.ai_start_delay)

        moves = self.opponent.move_count()
        chosen = self.opponent.choose_cells(self.uncovered_cells(), moves)
        self.logger.debug(f"Computer plays {len(chosen)} of {moves} moves")

        for index, (row, col) in enumerate(chosen):
            char = self.puzzle.board.get_cell(row, col).letter
            self._record_fill(row, col, char, Owner.AI)
            if index < len(chosen) - 1:
                self.sleep(self.game_config.ai_move_delay)

        if self.is_complete():
            self._finish()
        else:
            self._set_state(SessionState.PLAYER_TURN)
            self.fill_rack()
        return list(chosen)

    def solve(self) -> List[Position]:
        """
        Reveal every remaining letter as the player's and end the game.

        Revealing is a forfeit: no points or word bonuses are awarded.
        """
        if self.state not in (SessionState.PLAYER_TURN, SessionState.AI_TURN):
            return []

        revealed = self.uncovered_cells()
        for row, col in revealed:
            char = self.puzzle.board.get_cell(row, col).letter
            self.fill_state[(row, col)] = FilledCell(char, Owner.PLAYER)
            self._emit("filled", row=row, col=col, char=char, owner=Owner.PLAYER.value)

        self.logger.info(f"Board revealed ({len(revealed)} letters)")
        self._finish(revealed=True)
        return revealed

    def _finish(self, revealed: bool = False):
        self.selected_tile = None
        self._set_state(SessionState.FINISHED)
        self.logger.info(
            f"Board complete. Player {self.scores[Owner.PLAYER]}, "
            f"computer {self.scores[Owner.AI]}"
        )
        self._emit(
            "finished",
            revealed=revealed,
            scores={owner.value: points for owner, points in self.scores.items()},
        )

    def winner(self) -> Optional[Owner]:
        """Higher score once finished; None while playing or on a tie."""
        if self.state != SessionState.FINISHED:
            return None
        player, ai = self.scores[Owner.PLAYER], self.scores[Owner.AI]
        if player == ai:
            return None
        return Owner.PLAYER if player > ai else Owner.AI
