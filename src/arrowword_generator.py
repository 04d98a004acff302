#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Arrowword Board Generator

Generates arrowword boards from a vocabulary list:
1. Vocabulary from a JSON/YAML file, the Claude API, or the built-in list
2. Greedy placement with overlap scoring and bounded retries
3. Structural validation of the finished board
4. Text, Markdown and YAML intermediate output

Usage:
    # Built-in vocabulary:
    python arrowword_generator.py

    # Vocabulary file and fixed seed:
    python arrowword_generator.py --vocabulary vocabulario_a1.json --seed 7

    # Themed vocabulary from Claude:
    python arrowword_generator.py --topic "food and drink"
"""

import logging
import os
import random
import sys
import time
from typing import Dict, List, Optional

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from models import GeneratedPuzzle, VocabularyWord
from board_generator import ArrowwordGenerator, GenerationFailureError
from validator import validate_puzzle
from vocabulary import (
    build_vocabulary, read_records, sample_vocabulary,
    EmptyVocabularyError, VocabularyLoadError
)
from ai_vocabulary import AIVocabularyGenerator
from ai_limiter import AICallbackLimiter
from config import (
    ArrowwordConfig, create_argument_parser, load_config,
    discover_api_key, get_model, ConfigValidationError
)
from logging_config import setup_logging
from markdown_exporter import MarkdownExporter
from yaml_exporter import YAMLExporter


class InvalidBoardError(Exception):
    """Raised when a generated board fails structural validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Generated board is invalid: {'; '.join(errors)}")


class ArrowwordBoardBuilder:
    """
    Complete board generation pipeline.

    Workflow:
    1. Build the vocabulary
    2. Generate the board (bounded retries)
    3. Validate the board structure
    4. Write the requested output formats
    """

    def __init__(self, config: ArrowwordConfig, configure_logging: bool = True):
        """
        Initialize the builder.

        Args:
            config: ArrowwordConfig instance with all settings
            configure_logging: Install console/file handlers (off in tests)
        """
        self.config = config
        self.start_time = time.time()

        self.log_file_path = None
        if configure_logging:
            self.log_file_path = setup_logging(
                output_dir=config.output.directory,
                log_level=config.output.log_level,
                log_file_prefix=config.output.log_file_prefix,
                enable_console=config.output.enable_console_logging,
            )
        self.logger = logging.getLogger(__name__)
        self.logger.info(f"Board {config.board.rows}x{config.board.cols}, "
                         f"vocabulary source: {config.vocabulary.source}")

        self.limiter = AICallbackLimiter.from_config(config.ai)
        self.ai: Optional[AIVocabularyGenerator] = None
        if config.vocabulary.source in ("ai", "file"):
            self.ai = AIVocabularyGenerator(
                api_key=discover_api_key(config),
                model=get_model(config),
                limiter=self.limiter,
                logger=self.logger,
            )

        self.rng = random.Random(config.board.seed)
        self.generator = ArrowwordGenerator(
            rows=config.board.rows,
            cols=config.board.cols,
            strict_border=config.board.strict_border,
            min_words=config.board.min_words,
            max_attempts=config.board.max_attempts,
            top_k=config.board.top_k,
            rng=self.rng,
        )
        self.vocabulary: List[VocabularyWord] = []
        self.puzzle: Optional[GeneratedPuzzle] = None

    def build_vocabulary(self) -> List[VocabularyWord]:
        """
        Build the vocabulary from the configured source.

        Raises:
            VocabularyLoadError: If the vocabulary file cannot be read
            EmptyVocabularyError: If no usable word remains
        """
        source = self.config.vocabulary
        max_length = self.config.board.max_word_length

        if source.source == "file":
            records = read_records(source.path)
            words = build_vocabulary(records, max_word_length=max_length)
            bare = [r for r in records if isinstance(r, str)]
            if bare:
                self.logger.info(f"{len(bare)} words without hints, asking the AI")
                hinted = self.ai.complete_hints(
                    bare, language=source.language, hint_language=source.hint_language
                )
                words = build_vocabulary(words + hinted, max_word_length=max_length)
        elif source.source == "ai":
            words = self.ai.generate_vocabulary(
                source.topic,
                count=source.ai_word_count,
                max_length=max_length,
                language=source.language,
                hint_language=source.hint_language,
            )
        else:
            words = sample_vocabulary(max_length)

        if not words:
            raise EmptyVocabularyError("Vocabulary is empty after filtering")

        self.vocabulary = words
        self.logger.info(f"Vocabulary: {len(words)} words")
        return words

    def generate(self) -> GeneratedPuzzle:
        """
        Generate and validate a board.

        Raises:
            EmptyVocabularyError: If the vocabulary is empty
            GenerationFailureError: If the retry ceiling is reached
            InvalidBoardError: If the board breaks a structural rule
        """
        if not self.vocabulary:
            self.build_vocabulary()

        self.logger.info("Generating board...")
        puzzle = self.generator.generate_with_retry(
            self.vocabulary, max_retries=self.config.board.max_generation_retries
        )
        puzzle.seed = self.config.board.seed

        validation = validate_puzzle(
            puzzle,
            strict_border=self.config.board.strict_border,
            min_words=self.config.board.min_words,
        )
        if not validation.valid:
            # Generator invariants were broken; report loudly
            for error in validation.errors:
                self.logger.error(f"   - {error}")
            raise InvalidBoardError(validation.errors)

        self.logger.info(
            f"   - {validation.stats['words']} words "
            f"({validation.stats['horizontal']} across, {validation.stats['vertical']} down), "
            f"density {validation.stats['density']}"
        )
        self.logger.debug(f"Generator stats: {self.generator.stats}")
        self.puzzle = puzzle
        return puzzle

    def write_outputs(self, puzzle: GeneratedPuzzle) -> Dict[str, str]:
        """Write every configured output format; returns name -> path."""
        output_dir = self.config.output.directory
        os.makedirs(output_dir, exist_ok=True)
        base_name = self.config.title.lower().replace(" ", "_")[:20] or "arrowword"
        files = {}

        if "text" in self.config.output.formats:
            path = os.path.join(output_dir, f"{base_name}.txt")
            with open(path, 'w', encoding='utf-8') as f:
                f.write(puzzle.board.to_string(show_solution=True) + "\n")
            files["text"] = path

        if "markdown" in self.config.output.formats:
            path = os.path.join(output_dir, f"{base_name}.md")
            MarkdownExporter(puzzle, self.config.title, self.config.author).export(path)
            files["markdown"] = path

        if "yaml_intermediate" in self.config.output.formats:
            path = os.path.join(output_dir, f"{base_name}_board.yaml")
            stats = dict(self.generator.stats)
            stats["generation_time_seconds"] = time.time() - self.start_time
            files["yaml_intermediate"] = YAMLExporter().save(
                puzzle,
                path,
                title=self.config.title,
                author=self.config.author,
                strict_border=self.config.board.strict_border,
                stats=stats,
            )

        for name, path in files.items():
            self.logger.info(f"   {name}: {path}")
        return files

    def run(self) -> Dict[str, str]:
        puzzle = self.generate()
        print(puzzle.board.to_string(show_solution=True))
        files = self.write_outputs(puzzle)

        elapsed = time.time() - self.start_time
        self.logger.info(f"Generation time: {elapsed:.2f} seconds")
        if self.ai is not None and self.ai.is_available():
            stats = self.ai.get_stats()
            self.logger.info(f"AI calls: {stats['api_calls']}, tokens: {stats['tokens_used']}")
        return files


def main():
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args()

    try:
        config = load_config(args)

        if args.dry_run:
            print("Configuration valid:")
            print(f"  Board: {config.board.rows}x{config.board.cols}")
            print(f"  Strict border: {config.board.strict_border}")
            print(f"  Vocabulary: {config.vocabulary.source}")
            print(f"  Output Directory: {config.output.directory}")
            return

        ArrowwordBoardBuilder(config).run()

    except ConfigValidationError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except (VocabularyLoadError, EmptyVocabularyError) as e:
        print(f"Vocabulary error: {e}")
        sys.exit(1)
    except (GenerationFailureError, InvalidBoardError) as e:
        print(f"Generation failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nGeneration cancelled.")
        sys.exit(0)


if __name__ == "__main__":
    main()
