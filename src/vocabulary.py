# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Vocabulary loading and normalization.

Turns raw (word, translation) records into placement-ready
VocabularyWord entries: uppercase, accent-free, length-filtered.
"""

import json
import logging
import unicodedata
from pathlib import Path
from typing import List, Iterable, Any, Optional

import yaml

from models import VocabularyWord


logger = logging.getLogger(__name__)

DEFAULT_MIN_WORD_LENGTH = 2
DEFAULT_MAX_WORD_LENGTH = 8

# Key pairs accepted for (word, hint) in mapping records
RECORD_KEYS = [
    ("word", "translation"),
    ("palabra", "traduccion_ingles"),
    ("word", "hint"),
    ("word", "clue"),
]


class VocabularyLoadError(Exception):
    """Raised when a vocabulary source cannot be read."""
    pass


class EmptyVocabularyError(Exception):
    """Raised when no usable words remain after filtering."""
    pass


def normalize(text: str) -> str:
    """
    Normalize a word for the board.

    Decomposes accented characters, drops the combining marks,
    removes spaces and hyphens, and uppercases. Applying it twice
    gives the same result as applying it once.
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(
        ch for ch in decomposed if not unicodedata.combining(ch)
    )
    stripped = stripped.replace(" ", "").replace("-", "")
    return unicodedata.normalize("NFC", stripped).upper()


def _record_fields(record: Any) -> Optional[tuple]:
    """Extract (word, hint) from a mapping or a pair."""
    if isinstance(record, VocabularyWord):
        return record.display, record.hint
    if isinstance(record, dict):
        for word_key, hint_key in RECORD_KEYS:
            if word_key in record and hint_key in record:
                return str(record[word_key]), str(record[hint_key])
        return None
    if isinstance(record, (list, tuple)) and len(record) == 2:
        return str(record[0]), str(record[1])
    return None


def build_vocabulary(
    records: Iterable[Any],
    max_word_length: int = DEFAULT_MAX_WORD_LENGTH,
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
) -> List[VocabularyWord]:
    """
    Build a filtered vocabulary from raw records.

    Args:
        records: Mappings with word/translation keys, (word, hint) pairs,
            or VocabularyWord instances
        max_word_length: Longest normalized word kept
        min_word_length: Shortest normalized word kept

    Returns:
        List of VocabularyWord, duplicates removed (first one wins)
    """
    words = []
    seen = set()
    skipped = 0

    for record in records:
        fields = _record_fields(record)
        if fields is None:
            skipped += 1
            continue

        display, hint = fields
        clean = normalize(display.strip())

        if not (min_word_length <= len(clean) <= max_word_length):
            skipped += 1
            continue
        if not clean.isalpha() or clean in seen:
            skipped += 1
            continue

        seen.add(clean)
        words.append(VocabularyWord(display=display.strip(), normalized=clean, hint=hint.strip()))

    logger.debug(f"Vocabulary built: {len(words)} words kept, {skipped} skipped")
    return words


def read_records(path: str) -> List[Any]:
    """
    Read raw records from a JSON or YAML file.

    The file holds a list of records, or a mapping with a 'words' list.
    Bare strings are kept; they are words still waiting for a hint.

    Raises:
        VocabularyLoadError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise VocabularyLoadError(f"Vocabulary file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise VocabularyLoadError(f"Invalid vocabulary file {path}: {e}")

    if isinstance(data, dict):
        data = data.get("words", [])
    if not isinstance(data, list):
        raise VocabularyLoadError(
            f"Vocabulary file must contain a list of records, got {type(data)}"
        )
    return data


def load_vocabulary(
    path: str,
    max_word_length: int = DEFAULT_MAX_WORD_LENGTH,
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
) -> List[VocabularyWord]:
    """
    Load vocabulary from a JSON or YAML file.

    Raises:
        VocabularyLoadError: If the file is missing or malformed
        EmptyVocabularyError: If no word survives filtering
    """
    words = build_vocabulary(read_records(path), max_word_length, min_word_length)
    if not words:
        raise EmptyVocabularyError(f"No usable words in {path}")

    logger.info(f"Vocabulary loaded: {len(words)} words from {path}")
    return words


# Spanish A1 vocabulary with English hints
SAMPLE_RECORDS = [
    ("gato", "cat"), ("perro", "dog"), ("toro", "bull"), ("oso", "bear"),
    ("sol", "sun"), ("luna", "moon"), ("mar", "sea"), ("casa", "house"),
    ("mesa", "table"), ("silla", "chair"), ("agua", "water"), ("pan", "bread"),
    ("leche", "milk"), ("café", "coffee"), ("té", "tea"), ("rojo", "red"),
    ("azul", "blue"), ("verde", "green"), ("día", "day"), ("noche", "night"),
    ("año", "year"), ("mes", "month"), ("hora", "hour"), ("libro", "book"),
    ("papel", "paper"), ("calle", "street"), ("ciudad", "city"), ("tren", "train"),
    ("coche", "car"), ("mano", "hand"), ("pie", "foot"), ("ojo", "eye"),
    ("boca", "mouth"), ("padre", "father"), ("madre", "mother"), ("hijo", "son"),
    ("amigo", "friend"), ("ropa", "clothes"), ("mañana", "morning"), ("tarde", "afternoon"),
    ("uno", "one"), ("dos", "two"), ("tres", "three"), ("diez", "ten"),
    ("comer", "to eat"), ("beber", "to drink"), ("ir", "to go"), ("ver", "to see"),
    ("dar", "to give"), ("ser", "to be"), ("sal", "salt"), ("flor", "flower"),
    ("árbol", "tree"), ("río", "river"), ("nube", "cloud"), ("lápiz", "pencil"),
]


def sample_vocabulary(max_word_length: int = DEFAULT_MAX_WORD_LENGTH) -> List[VocabularyWord]:
    """Built-in vocabulary used when no other source is configured."""
    return build_vocabulary(SAMPLE_RECORDS, max_word_length=max_word_length)
