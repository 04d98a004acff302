# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
AI vocabulary source using the Claude API.

- Generate themed (word, translation) lists for a board
- Fill in missing hints for vocabulary entries

Falls back to the built-in sample vocabulary when no API key is set or
the call limit is reached.
"""

import json
import logging
import os
import re
from typing import List, Optional, Tuple, Any

import anthropic
import yaml

from ai_limiter import AICallbackLimiter
from models import VocabularyWord
from vocabulary import build_vocabulary, normalize, sample_vocabulary


class AIVocabularyGenerator:
    """
    Builds vocabularies with Claude.

    Features:
    - Themed word lists with translation hints
    - Hint generation for words that have none
    - Caching to reduce API calls
    - Call limiting to prevent runaway token usage
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-20250514",
        limiter: Optional[AICallbackLimiter] = None,
        logger: Optional[logging.Logger] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize the AI vocabulary generator.

        Args:
            api_key: Anthropic API key (or set ANTHROPIC_API_KEY env var)
            model: Claude model to use
            limiter: Optional AICallbackLimiter for tracking limits
            logger: Logger instance (uses module logger if not provided)
            client: Pre-built client (tests pass a mock)
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model
        self.limiter = limiter or AICallbackLimiter()
        self.logger = logger if logger else logging.getLogger(__name__)

        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None

        self._vocabulary_cache = {}  # (topic, count, max_length) -> words
        self._hint_cache = {}  # word -> hint

        self.stats = {
            "api_calls": 0,
            "cache_hits": 0,
            "words_generated": 0,
            "tokens_used": 0,
        }

    def is_available(self) -> bool:
        """Check if AI generation is available."""
        return self.client is not None

    def _make_request(
        self,
        prompt_type: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 2048,
        temperature: float = 0.7,
    ) -> Optional[str]:
        """
        Make an API request with call limiting.

        Returns:
            Response text or None if limited/failed
        """
        if not self.client:
            return None

        if not self.limiter.can_call(prompt_type):
            self.logger.warning(f"AI limit reached for {prompt_type}")
            return None

        try:
            self.stats["api_calls"] += 1
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}]
            )
        except anthropic.APIError as e:
            self.logger.error(f"AI request error: {e}")
            self.limiter.record_call(prompt_type, success=False)
            return None

        text = response.content[0].text
        tokens = response.usage.input_tokens + response.usage.output_tokens
        self.stats["tokens_used"] += tokens
        self.limiter.record_call(prompt_type, tokens_used=tokens, success=True)
        return text

    def generate_vocabulary(
        self,
        topic: str,
        count: int = 40,
        max_length: int = 8,
        language: str = "Spanish",
        hint_language: str = "English",
    ) -> List[VocabularyWord]:
        """
        Generate a themed vocabulary.

        Args:
            topic: Theme for the words (e.g. "food and drink")
            count: Number of words to ask for
            max_length: Longest word accepted (after normalization)
            language: Language of the board words
            hint_language: Language of the hints

        Returns:
            List of VocabularyWord (sample vocabulary on failure)
        """
        cache_key = (topic, count, max_length)
        if cache_key in self._vocabulary_cache:
            self.stats["cache_hits"] += 1
            return self._vocabulary_cache[cache_key]

        if not self.client:
            self.logger.info("No API key, using the built-in vocabulary")
            return sample_vocabulary(max_length)

        system_prompt, user_prompt = self._build_vocabulary_prompts(
            topic, count, max_length, language, hint_language
        )
        response = self._make_request('vocabulary_list', system_prompt, user_prompt)
        if not response:
            return sample_vocabulary(max_length)

        records = self._parse_records(response)
        words = build_vocabulary(records, max_word_length=max_length)
        if not words:
            self.logger.warning("AI response held no usable words, using the built-in vocabulary")
            return sample_vocabulary(max_length)

        self.stats["words_generated"] += len(words)
        self._vocabulary_cache[cache_key] = words
        for w in words:
            self._hint_cache[w.normalized] = w.hint
        self.logger.info(f"AI vocabulary: {len(words)} words on '{topic}'")
        return words

    def _build_vocabulary_prompts(
        self,
        topic: str,
        count: int,
        max_length: int,
        language: str,
        hint_language: str,
    ) -> Tuple[str, str]:
        """Build vocabulary list prompts."""
        system_prompt = f"""You are a {language} teacher building word puzzles for beginners.
Choose common, concrete words a learner meets early. Hints are short
{hint_language} translations that fit inside a small puzzle cell."""

        user_prompt = f"""Give {count} {language} words about: "{topic}"

Requirements:
- Between 2 and {max_length} letters, single words, no spaces
- Mostly short words (3-5 letters) so they cross easily
- Each with a one- or two-word {hint_language} translation

Respond with ONLY a JSON array, no other text:
[
  {{"word": "gato", "translation": "cat"}},
  {{"word": "mar", "translation": "sea"}},
  ...
]"""
        return system_prompt, user_prompt

    def _parse_records(self, text: str) -> List[dict]:
        """Parse a JSON (or YAML) list of word records from a response."""
        json_match = re.search(r'\[.*\]', text, re.DOTALL)
        if json_match:
            try:
                data = json.loads(json_match.group())
                if isinstance(data, list):
                    return [item for item in data if isinstance(item, dict)]
            except json.JSONDecodeError:
                self.logger.debug("Response is not JSON, trying YAML")

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return []
        if isinstance(data, dict):
            data = data.get('words', [])
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]
        return []

    def complete_hints(
        self,
        words: List[str],
        language: str = "Spanish",
        hint_language: str = "English",
    ) -> List[VocabularyWord]:
        """
        Build vocabulary entries for bare words by asking for their hints.

        Words with no hint after the call are dropped.
        """
        missing = [w for w in words if normalize(w) not in self._hint_cache]
        if missing and self.client:
            system_prompt = (
                f"You translate {language} words into short {hint_language} "
                f"puzzle hints."
            )
            user_prompt = (
                "Translate each word. Respond with ONLY a JSON array of "
                '{"word": ..., "translation": ...} objects.\n\n'
                + "\n".join(missing)
            )
            response = self._make_request(
                'hint_generation', system_prompt, user_prompt, temperature=0.2
            )
            if response:
                for entry in build_vocabulary(self._parse_records(response), max_word_length=64):
                    self._hint_cache[entry.normalized] = entry.hint

        records = [
            (word, self._hint_cache[normalize(word)])
            for word in words if self._hint_cache.get(normalize(word))
        ]
        return build_vocabulary(records, max_word_length=64)

    def get_stats(self) -> dict:
        return dict(self.stats)
