# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for vocabulary module."""

import json
import os
import shutil
import sys
import tempfile
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from vocabulary import (
    normalize, build_vocabulary, load_vocabulary, read_records, sample_vocabulary,
    SAMPLE_RECORDS, EmptyVocabularyError, VocabularyLoadError
)


class TestNormalize(unittest.TestCase):
    """Tests for normalize()."""

    def test_strips_accents(self):
        self.assertEqual(normalize("café"), "CAFE")
        self.assertEqual(normalize("árbol"), "ARBOL")
        self.assertEqual(normalize("río"), "RIO")

    def test_enye_loses_tilde(self):
        self.assertEqual(normalize("mañana"), "MANANA")

    def test_removes_spaces_and_hyphens(self):
        self.assertEqual(normalize("buenos días"), "BUENOSDIAS")
        self.assertEqual(normalize("e-mail"), "EMAIL")

    def test_idempotent(self):
        """Normalizing twice gives the same result as once."""
        for word, _ in SAMPLE_RECORDS:
            once = normalize(word)
            self.assertEqual(normalize(once), once)


class TestBuildVocabulary(unittest.TestCase):
    """Tests for build_vocabulary()."""

    def test_accepts_record_shapes(self):
        records = [
            {"word": "gato", "translation": "cat"},
            {"palabra": "perro", "traduccion_ingles": "dog"},
            ("sol", "sun"),
        ]

        words = build_vocabulary(records)

        self.assertEqual([w.normalized for w in words], ["GATO", "PERRO", "SOL"])
        self.assertEqual(words[1].hint, "dog")
        self.assertEqual(words[0].display, "gato")

    def test_length_filter(self):
        records = [("a", "to"), ("mar", "sea"), ("murciélago", "bat")]

        words = build_vocabulary(records, max_word_length=8)

        self.assertEqual([w.normalized for w in words], ["MAR"])

    def test_duplicates_first_wins(self):
        records = [("té", "tea"), ("te", "you")]

        words = build_vocabulary(records)

        self.assertEqual(len(words), 1)
        self.assertEqual(words[0].hint, "tea")

    def test_skips_unusable_records(self):
        records = [{"word": "sin pista"}, "gato", ("12", "twelve"), ("pan", "bread")]

        words = build_vocabulary(records)

        self.assertEqual([w.normalized for w in words], ["PAN"])

    def test_sample_vocabulary(self):
        words = sample_vocabulary()

        self.assertGreater(len(words), 40)
        self.assertTrue(all(2 <= len(w) <= 8 for w in words))


class TestLoadVocabulary(unittest.TestCase):
    """Tests for loading vocabulary files."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _write(self, name, content):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_load_json(self):
        path = self._write("words.json", json.dumps([
            {"palabra": "casa", "traduccion_ingles": "house"},
            {"palabra": "mesa", "traduccion_ingles": "table"},
        ]))

        words = load_vocabulary(path)

        self.assertEqual([w.normalized for w in words], ["CASA", "MESA"])

    def test_load_yaml_mapping(self):
        path = self._write("words.yaml", "words:\n  - {word: luna, translation: moon}\n")

        words = load_vocabulary(path)

        self.assertEqual(words[0].normalized, "LUNA")

    def test_read_records_keeps_bare_words(self):
        path = self._write("words.json", json.dumps(["gato", {"word": "sol", "translation": "sun"}]))

        records = read_records(path)

        self.assertEqual(records[0], "gato")
        self.assertEqual(len(records), 2)

    def test_missing_file(self):
        with self.assertRaises(VocabularyLoadError):
            load_vocabulary(os.path.join(self.temp_dir, "missing.json"))

    def test_invalid_json(self):
        path = self._write("bad.json", "[{not json")

        with self.assertRaises(VocabularyLoadError):
            load_vocabulary(path)

    def test_nothing_usable(self):
        path = self._write("empty.json", json.dumps([{"word": "a", "translation": "to"}]))

        with self.assertRaises(EmptyVocabularyError):
            load_vocabulary(path)


if __name__ == '__main__':
    unittest.main()
