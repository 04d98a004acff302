#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Arrowword Game

Play an arrowword board against the computer in the terminal.

Usage:
    python main.py --difficulty medium
    python main.py --vocabulary vocabulario_a1.json --seed 3
    python main.py --load output/arrowword_board.yaml

Commands:
    t <n>          select (or deselect) rack tile n
    f <row> <col>  place the selected tile
    p              pass the turn to the computer
    s              shuffle the rack
    save <path>    save the game to YAML
    solve          reveal the board and end the game
    q              quit
"""

import os
import sys
from typing import Callable, Dict, Any, List

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from arrowword_generator import ArrowwordBoardBuilder
from board_generator import GenerationFailureError
from config import create_argument_parser, load_config, ConfigValidationError
from game_session import GameSession, SessionState, FillOutcome, Owner
from logging_config import get_logger
from markdown_exporter import clue_label
from models import Direction
from vocabulary import EmptyVocabularyError, VocabularyLoadError
from yaml_exporter import YAMLExporter
from yaml_importer import YAMLImporter, YAMLImportError

logger = get_logger(__name__)

HELP_TEXT = """Commands:
  t <n>          select (or deselect) rack tile n
  f <row> <col>  place the selected tile
  p              pass the turn to the computer
  s              shuffle the rack
  save <path>    save the game to YAML
  solve          reveal the board and end the game
  q              quit"""


class ConsoleGame:
    """
    Text front end for a GameSession.

    Reads commands from input_func and writes everything through output,
    so the loop can be driven by a script.
    """

    def __init__(
        self,
        session: GameSession,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.session = session
        self.input_func = input_func
        self.output = output
        session.subscribe(self.on_event)

    def on_event(self, event: str, payload: Dict[str, Any]):
        if event == "filled" and payload["owner"] == Owner.AI.value:
            self.output(f"🤖 Computer fills ({payload['row']}, {payload['col']}) = {payload['char']}")
        elif event == "finished":
            scores = payload["scores"]
            if payload["revealed"]:
                self.output("Board revealed.")
            self.output(f"🏁 Final score: you {scores['player']}, computer {scores['ai']}")

    def render(self) -> str:
        """Board with fills, the clue list, scores and rack."""
        session = self.session
        board = session.puzzle.board
        lines = ["    " + "".join(f"{c:>3}" for c in range(board.cols))]

        for r in range(board.rows):
            row = f"{r:>3} "
            for c in range(board.cols):
                row += f"{self._cell_mark(r, c):>3}"
            lines.append(row)

        lines.append("")
        for cell in board.iter_cells():
            if not cell.is_clue():
                continue
            for direction in Direction:
                label = clue_label(cell, direction)
                if label:
                    lines.append(f"  ({cell.row}, {cell.col}) {label}")

        lines.append("")
        lines.append(f"Score: you {session.scores[Owner.PLAYER]}, computer {session.scores[Owner.AI]}")
        rack = []
        for i, char in enumerate(session.rack):
            tile = f"{i + 1}:{char}"
            rack.append(f"[{tile}]" if i == session.selected_tile else tile)
        lines.append("Rack: " + "  ".join(rack))
        return "\n".join(lines)

    def _cell_mark(self, row: int, col: int) -> str:
        view = self.session.cell_view(row, col)
        if view["type"] == "letter":
            if view["char"] is None:
                return "_"
            # Computer fills shown in lower case
            return view["char"] if view["owner"] == Owner.PLAYER.value else view["char"].lower()
        if view["type"] == "clue":
            if view["right_hint"] is not None and view["down_hint"] is not None:
                return "+"
            return ">" if view["right_hint"] is not None else "v"
        return "#"

    def handle(self, line: str) -> bool:
        """Run one command; returns False when the loop should stop."""
        parts = line.strip().split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("q", "quit"):
            return False
        if command in ("h", "help", "?"):
            self.output(HELP_TEXT)
        elif command == "t":
            self._select(args)
        elif command == "f":
            self._fill(args)
        elif command == "p":
            filled = self.session.pass_turn()
            if not filled and self.session.state != SessionState.FINISHED:
                self.output("Nothing to pass.")
        elif command == "s":
            self.session.shuffle_rack()
        elif command == "solve":
            self.session.solve()
        elif command == "save":
            self._save(args)
        else:
            self.output(f"Unknown command '{command}'. Type h for help.")
        return True

    def _select(self, args: List[str]):
        if len(args) != 1 or not args[0].isdigit():
            self.output("Usage: t <n>")
            return
        self.session.select_rack_tile(int(args[0]) - 1)

    def _fill(self, args: List[str]):
        try:
            row, col = (int(a) for a in args)
        except ValueError:
            self.output("Usage: f <row> <col>")
            return

        result = self.session.attempt_fill(row, col)
        if result.outcome == FillOutcome.ILLEGAL:
            self.output(f"Can't place there: {result.reason}")
        elif result.outcome == FillOutcome.INCORRECT:
            self.output("✗ Wrong letter (-1)")
        else:
            message = f"✓ Correct (+{result.points})"
            if result.completed_words:
                message += f" completed {', '.join(result.completed_words)}"
            self.output(message)

    def _save(self, args: List[str]):
        if len(args) != 1:
            self.output("Usage: save <path>")
            return
        path = YAMLExporter().save(self.session.puzzle, args[0], session=self.session)
        self.output(f"Saved to {path}")

    def run(self):
        self.output(HELP_TEXT)
        while self.session.state != SessionState.FINISHED:
            self.output("")
            self.output(self.render())
            try:
                line = self.input_func("> ")
            except EOFError:
                break
            if not self.handle(line):
                break

        if self.session.state == SessionState.FINISHED:
            self.output(self.render())
            winner = self.session.winner()
            if winner is None:
                self.output("It's a tie.")
            else:
                self.output("You win! 🎉" if winner == Owner.PLAYER else "The computer wins.")


def main():
    """Main entry point."""
    parser = create_argument_parser("Play an arrowword game against the computer")
    parser.add_argument("--load", metavar="PATH", help="Play a saved YAML board or game")
    parser.add_argument("--no-delay", action="store_true", help="Computer moves without pauses")
    args = parser.parse_args()

    try:
        config = load_config(args)
        config.output.enable_console_logging = args.verbose
        if args.no_delay:
            config.game.ai_start_delay = 0.0
            config.game.ai_move_delay = 0.0

        builder = ArrowwordBoardBuilder(config)
        session = GameSession(
            vocabulary=[],
            board_config=config.board,
            game_config=config.game,
            rng=builder.rng,
        )

        if args.load:
            importer = YAMLImporter()
            importer.restore_session(session, importer.load(args.load))
        else:
            session.vocabulary = builder.build_vocabulary()
            session.start()

        ConsoleGame(session).run()

    except ConfigValidationError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except (VocabularyLoadError, EmptyVocabularyError) as e:
        print(f"Vocabulary error: {e}")
        sys.exit(1)
    except GenerationFailureError as e:
        print(f"Could not generate a board: {e}")
        sys.exit(1)
    except YAMLImportError as e:
        print(f"Could not load game: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Game interrupted")
        print("\nBye.")
        sys.exit(0)


if __name__ == "__main__":
    main()
