# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Functional tests for the arrowword generator and console game."""

import json
import os
import random
import shutil
import sys
import tempfile
import unittest
from unittest import mock

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from arrowword_generator import ArrowwordBoardBuilder, InvalidBoardError, main as generator_main
from config import ArrowwordConfig
from game_session import GameSession, SessionState
from main import ConsoleGame
from validator import ValidationResult, validate_puzzle
from vocabulary import build_vocabulary, EmptyVocabularyError
from yaml_importer import load_puzzle_from_yaml


class TestBoardBuilder(unittest.TestCase):
    """End-to-end board generation."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def make_config(self, **vocabulary):
        return ArrowwordConfig(
            title="Prueba",
            board={'seed': 5},
            vocabulary=vocabulary or {'source': 'sample'},
            output={
                'directory': self.temp_dir,
                'formats': ['text', 'markdown', 'yaml_intermediate'],
            },
        )

    def test_full_run(self):
        builder = ArrowwordBoardBuilder(self.make_config(), configure_logging=False)

        files = builder.run()

        self.assertEqual(set(files), {'text', 'markdown', 'yaml_intermediate'})
        for path in files.values():
            self.assertTrue(os.path.exists(path))

        loaded = load_puzzle_from_yaml(files['yaml_intermediate'])
        self.assertEqual(loaded.board.to_string(), builder.puzzle.board.to_string())
        self.assertTrue(validate_puzzle(loaded, min_words=5).valid)

    def test_seed_reproduces_board(self):
        first = ArrowwordBoardBuilder(self.make_config(), configure_logging=False).generate()
        second = ArrowwordBoardBuilder(self.make_config(), configure_logging=False).generate()

        self.assertEqual(first.board.to_string(), second.board.to_string())
        self.assertEqual(first.seed, 5)

    def test_file_vocabulary_with_bare_words(self):
        """Bare words in the file get their hints from the AI source."""
        path = os.path.join(self.temp_dir, "words.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(["gato", {"palabra": "sol", "traduccion_ingles": "sun"}], f)

        builder = ArrowwordBoardBuilder(
            self.make_config(source='file', path=path), configure_logging=False
        )
        builder.ai = mock.Mock()
        builder.ai.complete_hints.return_value = build_vocabulary([("gato", "cat")])

        words = builder.build_vocabulary()

        self.assertEqual({w.normalized: w.hint for w in words}, {"SOL": "sun", "GATO": "cat"})
        builder.ai.complete_hints.assert_called_once()

    def test_empty_file_vocabulary(self):
        path = os.path.join(self.temp_dir, "words.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([{"word": "x", "translation": "?"}], f)

        builder = ArrowwordBoardBuilder(
            self.make_config(source='file', path=path), configure_logging=False
        )

        with self.assertRaises(EmptyVocabularyError):
            builder.build_vocabulary()

    def test_invalid_board_reported(self):
        """A board that fails validation is not reported as a retry failure."""
        builder = ArrowwordBoardBuilder(self.make_config(), configure_logging=False)
        broken = ValidationResult(valid=False, errors=["Word MAR has no hint"])

        with mock.patch('arrowword_generator.validate_puzzle', return_value=broken):
            with self.assertRaises(InvalidBoardError) as ctx:
                builder.generate()

        self.assertEqual(ctx.exception.errors, ["Word MAR has no hint"])
        self.assertIn("invalid", str(ctx.exception))
        self.assertNotIn("retries", str(ctx.exception))
        self.assertIsNone(builder.puzzle)

    def test_cli_bad_config_exits(self):

        with mock.patch.object(sys, 'argv', ['arrowword-generator', '--rows', '99']):
            with self.assertRaises(SystemExit) as ctx:
                generator_main()

        self.assertEqual(ctx.exception.code, 1)


class TestConsoleGame(unittest.TestCase):
    """Scripted console sessions."""

    def setUp(self):
        builder = ArrowwordBoardBuilder(ArrowwordConfig(board={'seed': 9}), configure_logging=False)
        self.puzzle = builder.generate()
        self.session = GameSession([], rng=random.Random(1), sleep=lambda s: None)
        self.session.load_puzzle(self.puzzle)
        self.output = []

    def run_script(self, commands):
        script = iter(commands)

        def read(prompt):
            try:
                return next(script)
            except StopIteration:
                raise EOFError

        game = ConsoleGame(self.session, input_func=read, output=self.output.append)
        game.run()
        return "\n".join(self.output)

    def test_render_shows_clues_and_rack(self):
        game = ConsoleGame(self.session, output=self.output.append)

        text = game.render()

        self.assertIn("Rack: 1:", text)
        self.assertIn(self.puzzle.words[0].hint, text)
        self.assertIn("_", text)

    def test_script_to_solve(self):
        text = self.run_script(["h", "t 1", "f 0 0", "s", "p", "bogus", "solve"])

        self.assertIn("Can't place there", text)
        self.assertIn("Computer fills", text)
        self.assertIn("Unknown command", text)
        self.assertIn("Final score", text)
        self.assertEqual(self.session.state, SessionState.FINISHED)

    def test_correct_fill_message(self):
        row, col = self.session.uncovered_cells()[0]
        letter = self.puzzle.board.get_cell(row, col).letter
        self.session.rack[0] = letter

        text = self.run_script(["t 1", f"f {row} {col}", "q"])

        self.assertIn("Correct", text)
        self.assertEqual(self.session.state, SessionState.PLAYER_TURN)

    def test_save_command(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "game.yaml")

            self.run_script([f"save {path}", "q"])

            self.assertTrue(os.path.exists(path))

    def test_end_of_input_stops(self):
        text = self.run_script([])

        self.assertIn("Commands:", text)
        self.assertEqual(self.session.state, SessionState.PLAYER_TURN)


if __name__ == '__main__':
    unittest.main()
