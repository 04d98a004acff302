# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the arrowword generator.

Handles loading configuration from YAML files and command-line arguments,
with proper merging and validation.
"""

import os
import json
import argparse
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

import yaml


# Default model for AI operations
DEFAULT_MODEL = "claude-sonnet-4-20250514"

# Valid configuration values
VALID_DIFFICULTIES = ["easy", "medium", "hard"]
VALID_VOCABULARY_SOURCES = ["file", "ai", "sample"]
VALID_OUTPUT_FORMATS = ["text", "markdown", "yaml_intermediate"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 20


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class BoardConfig:
    """Configuration for board generation."""
    rows: int = 10
    cols: int = 8
    strict_border: bool = True
    max_word_length: int = 8
    min_words: int = 5
    max_attempts: int = 20
    top_k: int = 3
    max_generation_retries: int = 25
    seed: Optional[int] = None


@dataclass
class GameConfig:
    """Configuration for the two-player game."""
    difficulty: str = "easy"
    rack_size: int = 5
    needed_letter_bias: float = 0.7
    alphabet: str = "ABCDEFGHIJKLMNÑOPQRSTUVWXYZ"
    ai_start_delay: float = 1.0
    ai_move_delay: float = 0.8


@dataclass
class VocabularyConfig:
    """Where the vocabulary comes from."""
    source: str = "sample"
    path: Optional[str] = None
    topic: str = "everyday Spanish (A1)"
    language: str = "Spanish"
    hint_language: str = "English"
    ai_word_count: int = 40


@dataclass
class AIConfig:
    """Configuration for AI integration."""
    model: Optional[str] = None
    api_key: Optional[str] = None
    api_key_env: str = "ANTHROPIC_API_KEY"
    model_env: str = "ANTHROPIC_MODEL"
    max_ai_callbacks: int = 10
    limits: Dict[str, int] = field(default_factory=lambda: {
        "vocabulary_list": 3,
        "hint_generation": 5,
    })


@dataclass
class OutputConfig:
    """Configuration for output."""
    directory: str = "./output"
    formats: List[str] = field(default_factory=lambda: ["text", "yaml_intermediate"])
    log_level: str = "INFO"
    log_file_prefix: str = "arrowword"
    enable_console_logging: bool = True


@dataclass
class ArrowwordConfig:
    """Complete configuration for board generation and play."""
    title: str = "Arrowword"
    author: str = "Arrowword Generator"

    # Sub-configurations
    board: BoardConfig = field(default_factory=BoardConfig)
    game: GameConfig = field(default_factory=GameConfig)
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        if isinstance(self.board, dict):
            self.board = BoardConfig(**self.board)
        if isinstance(self.game, dict):
            self.game = GameConfig(**self.game)
        if isinstance(self.vocabulary, dict):
            self.vocabulary = VocabularyConfig(**self.vocabulary)
        if isinstance(self.ai, dict):
            self.ai = AIConfig(**self.ai)
        if isinstance(self.output, dict):
            self.output = OutputConfig(**self.output)

    @classmethod
    def from_yaml(cls, path: str) -> 'ArrowwordConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            ArrowwordConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'ArrowwordConfig':
        """Create ArrowwordConfig from dictionary."""
        puzzle_data = data.get('puzzle', {})
        config = cls(
            title=puzzle_data.get('title', cls.title),
            author=puzzle_data.get('author', cls.author),
        )

        sections = {
            'board': BoardConfig,
            'game': GameConfig,
            'vocabulary': VocabularyConfig,
            'ai': AIConfig,
            'output': OutputConfig,
        }
        for name, section_cls in sections.items():
            if name not in data:
                continue
            section_data = data[name] or {}
            if not isinstance(section_data, dict):
                raise ConfigValidationError(f"Section '{name}' must be a mapping")
            known = section_cls.__dataclass_fields__
            unknown = set(section_data) - set(known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown keys in '{name}': {sorted(unknown)}"
                )
            current = asdict(getattr(config, name))
            current.update(section_data)
            setattr(config, name, section_cls(**current))

        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'ArrowwordConfig':
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            ArrowwordConfig instance
        """
        config = cls()

        if getattr(args, 'title', None):
            config.title = args.title
        if getattr(args, 'rows', None):
            config.board.rows = args.rows
        if getattr(args, 'cols', None):
            config.board.cols = args.cols
        if getattr(args, 'min_words', None):
            config.board.min_words = args.min_words
        if getattr(args, 'seed', None) is not None:
            config.board.seed = args.seed
        if getattr(args, 'loose_border', False):
            config.board.strict_border = False
        if getattr(args, 'difficulty', None):
            config.game.difficulty = args.difficulty
        if getattr(args, 'vocabulary', None):
            config.vocabulary.source = "file"
            config.vocabulary.path = args.vocabulary
        if getattr(args, 'topic', None):
            config.vocabulary.source = "ai"
            config.vocabulary.topic = args.topic
        if getattr(args, 'output', None):
            config.output.directory = args.output
        if getattr(args, 'format', None):
            config.output.formats = args.format.split(',')
        if getattr(args, 'api_key', None):
            config.ai.api_key = args.api_key
        if getattr(args, 'model', None):
            config.ai.model = args.model
        if getattr(args, 'verbose', False):
            config.output.log_level = "DEBUG"

        return config

    @classmethod
    def merge(
        cls,
        yaml_config: 'ArrowwordConfig',
        cli_config: 'ArrowwordConfig'
    ) -> 'ArrowwordConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        Args:
            yaml_config: Configuration loaded from YAML file
            cli_config: Configuration from command-line arguments

        Returns:
            Merged ArrowwordConfig instance
        """
        merged = cls._from_dict(yaml_config.to_dict())
        default = cls()

        if cli_config.title != default.title:
            merged.title = cli_config.title
        if cli_config.author != default.author:
            merged.author = cli_config.author

        for name in ('board', 'game', 'vocabulary', 'ai', 'output'):
            cli_section = asdict(getattr(cli_config, name))
            default_section = asdict(getattr(default, name))
            merged_section = getattr(merged, name)
            for key, value in cli_section.items():
                if value != default_section[key]:
                    setattr(merged_section, key, value)

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        board = self.board

        for name, value in (('rows', board.rows), ('cols', board.cols)):
            if not MIN_BOARD_SIZE <= value <= MAX_BOARD_SIZE:
                errors.append(
                    f"Invalid board {name} {value}. "
                    f"Must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}"
                )

        if board.max_word_length < 2:
            errors.append("max_word_length must be at least 2")
        if board.min_words < 1:
            errors.append("min_words must be at least 1")
        if board.max_attempts < 1:
            errors.append("max_attempts must be at least 1")
        if board.max_generation_retries < 1:
            errors.append("max_generation_retries must be at least 1")
        if board.top_k < 1:
            errors.append("top_k must be at least 1")

        if self.game.difficulty.lower() not in VALID_DIFFICULTIES:
            errors.append(
                f"Invalid difficulty '{self.game.difficulty}'. "
                f"Must be one of: {VALID_DIFFICULTIES}"
            )
        if self.game.rack_size < 1:
            errors.append("rack_size must be at least 1")
        if not 0.0 <= self.game.needed_letter_bias <= 1.0:
            errors.append("needed_letter_bias must be between 0.0 and 1.0")
        if not self.game.alphabet:
            errors.append("alphabet cannot be empty")
        if self.game.ai_start_delay < 0 or self.game.ai_move_delay < 0:
            errors.append("AI delays must be non-negative")

        if self.vocabulary.source not in VALID_VOCABULARY_SOURCES:
            errors.append(
                f"Invalid vocabulary source '{self.vocabulary.source}'. "
                f"Must be one of: {VALID_VOCABULARY_SOURCES}"
            )
        if self.vocabulary.source == "file" and not self.vocabulary.path:
            errors.append("Vocabulary source 'file' requires a path")

        if self.ai.max_ai_callbacks < 0:
            errors.append("max_ai_callbacks must be non-negative")

        for fmt in self.output.formats:
            if fmt not in VALID_OUTPUT_FORMATS:
                errors.append(
                    f"Invalid output format '{fmt}'. "
                    f"Must be one of: {VALID_OUTPUT_FORMATS}"
                )
        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"Invalid log level '{self.output.log_level}'")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'puzzle': {
                'title': self.title,
                'author': self.author,
            },
            'board': asdict(self.board),
            'game': asdict(self.game),
            'vocabulary': asdict(self.vocabulary),
            'ai': asdict(self.ai),
            'output': asdict(self.output),
        }


def discover_api_key(config: ArrowwordConfig) -> Optional[str]:
    """
    Discover API key from multiple sources in priority order.

    Priority order:
    1. CLI argument or config file api_key field
    2. Environment variable (ANTHROPIC_API_KEY or custom)
    3. Anthropic config file (~/.anthropic/api_key)
    4. Anthropic config JSON (~/.config/anthropic/config.json)

    Args:
        config: ArrowwordConfig instance

    Returns:
        API key string or None if not found
    """
    if config.ai.api_key and config.ai.api_key != "null":
        return config.ai.api_key

    env_var = config.ai.api_key_env or "ANTHROPIC_API_KEY"
    if os.environ.get(env_var):
        return os.environ[env_var]

    anthropic_key_file = Path.home() / ".anthropic" / "api_key"
    if anthropic_key_file.exists():
        key = anthropic_key_file.read_text().strip()
        if key:
            return key

    anthropic_config = Path.home() / ".config" / "anthropic" / "config.json"
    if anthropic_config.exists():
        try:
            cfg = json.loads(anthropic_config.read_text())
            if cfg.get("api_key"):
                return cfg["api_key"]
        except json.JSONDecodeError:
            return None

    return None


def get_model(config: ArrowwordConfig) -> str:
    """
    Get AI model from config with fallback chain.

    Priority order:
    1. Config ai.model field (from CLI or config file)
    2. Environment variable (ANTHROPIC_MODEL or custom)
    3. Default model
    """
    if config.ai.model and config.ai.model != "null":
        return config.ai.model

    env_var = config.ai.model_env or "ANTHROPIC_MODEL"
    if os.environ.get(env_var):
        return os.environ[env_var]

    return DEFAULT_MODEL


def create_argument_parser(description: str = "Generate arrowword puzzle boards") -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Built-in vocabulary, default 10x8 board
  arrowword-generator

  # Vocabulary file and a reproducible board
  arrowword-generator --vocabulary vocabulario_a1.json --seed 42

  # YAML configuration, CLI arguments override it
  arrowword-generator --config arrowword.yaml --rows 12
"""
    )

    parser.add_argument("--config", "-c", metavar="PATH", help="YAML configuration file")
    parser.add_argument("--title", metavar="TEXT", help="Puzzle title")

    # Board settings
    parser.add_argument("--rows", type=int, metavar="INT", help="Board rows (default: 10)")
    parser.add_argument("--cols", type=int, metavar="INT", help="Board columns (default: 8)")
    parser.add_argument("--min-words", type=int, metavar="INT", help="Minimum placed words")
    parser.add_argument("--seed", type=int, metavar="INT", help="Random seed")
    parser.add_argument(
        "--loose-border",
        action="store_true",
        help="Allow letters in row 0 and column 0"
    )

    # Game settings
    parser.add_argument("--difficulty", "-d", choices=VALID_DIFFICULTIES, help="Computer opponent level")

    # Vocabulary
    parser.add_argument("--vocabulary", metavar="PATH", help="Vocabulary JSON/YAML file")
    parser.add_argument("--topic", "-t", metavar="TEXT", help="Ask the AI for a themed vocabulary")

    # Output settings
    parser.add_argument("--output", "-o", metavar="PATH", help="Output directory")
    parser.add_argument("--format", metavar="FORMATS", help="Comma-separated output formats")

    # AI settings
    parser.add_argument("--api-key", metavar="KEY", help="Anthropic API key")
    parser.add_argument("--model", metavar="MODEL", help="AI model to use")

    # Other options
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--dry-run", action="store_true", help="Validate config without generating")

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> ArrowwordConfig:
    """
    Load configuration from command-line and/or YAML file.

    Args:
        args: Parsed command-line arguments (if None, parses sys.argv)

    Returns:
        Fully resolved ArrowwordConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = ArrowwordConfig.from_yaml(args.config)

    cli_config = ArrowwordConfig.from_args(args)

    if yaml_config:
        config = ArrowwordConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
