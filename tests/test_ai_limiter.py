# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for ai_limiter module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from ai_limiter import AICallbackLimiter, AILimitError
from config import AIConfig


class TestAICallbackLimiter(unittest.TestCase):
    """Tests for AICallbackLimiter class."""

    def test_default_limits(self):
        """Test default limiter limits."""
        limiter = AICallbackLimiter()

        self.assertEqual(limiter.max_total, 10)
        self.assertEqual(limiter.total_calls, 0)
        self.assertEqual(limiter.total_tokens, 0)

    def test_can_call_at_limit(self):
        """Test can_call returns False when at limit."""
        limiter = AICallbackLimiter(max_total=2)

        limiter.record_call('vocabulary_list')
        limiter.record_call('vocabulary_list')

        self.assertFalse(limiter.can_call('vocabulary_list'))

    def test_can_call_type_limit(self):
        """Test can_call respects type-specific limits."""
        limiter = AICallbackLimiter(max_total=100, limits={'hint_generation': 2})

        limiter.record_call('hint_generation')
        limiter.record_call('hint_generation')

        self.assertFalse(limiter.can_call('hint_generation'))
        self.assertTrue(limiter.can_call('vocabulary_list'))

    def test_check_raises(self):
        """Test check raises AILimitError once the limit is hit."""
        limiter = AICallbackLimiter(max_total=5, limits={'vocabulary_list': 1})
        limiter.check('vocabulary_list')
        limiter.record_call('vocabulary_list')

        with self.assertRaises(AILimitError) as ctx:
            limiter.check('vocabulary_list')

        self.assertEqual(ctx.exception.prompt_type, 'vocabulary_list')
        self.assertEqual(ctx.exception.limit, 1)

    def test_record_call(self):
        """Test recording calls updates counters."""
        limiter = AICallbackLimiter()

        limiter.record_call('vocabulary_list', tokens_used=100)
        limiter.record_call('vocabulary_list', tokens_used=150)

        self.assertEqual(limiter.total_calls, 2)
        self.assertEqual(limiter.total_tokens, 250)
        self.assertEqual(limiter.counts['vocabulary_list'], 2)

    def test_get_remaining_type_specific(self):
        """Test remaining calls are capped by both limits."""
        limiter = AICallbackLimiter(max_total=3, limits={'hint_generation': 5})

        limiter.record_call('hint_generation')
        limiter.record_call('vocabulary_list')

        self.assertEqual(limiter.get_remaining(), 1)
        self.assertEqual(limiter.get_remaining('hint_generation'), 1)

    def test_get_stats(self):
        """Test getting statistics."""
        limiter = AICallbackLimiter(max_total=10)

        limiter.record_call('vocabulary_list', tokens_used=100)
        limiter.record_call('hint_generation', tokens_used=200, success=False)

        stats = limiter.get_stats()

        self.assertEqual(stats['total_calls'], 2)
        self.assertEqual(stats['total_tokens'], 300)
        self.assertEqual(stats['remaining_calls'], 8)
        self.assertEqual(stats['calls_by_type']['hint_generation'], 1)
        self.assertAlmostEqual(stats['success_rate'], 0.5)

    def test_on_limit_reached_handler(self):
        """Test handler is called when a call is refused."""
        refused = []
        limiter = AICallbackLimiter(max_total=1, on_limit_reached_handler=refused.append)

        limiter.record_call('vocabulary_list')
        limiter.can_call('vocabulary_list')

        self.assertEqual(refused, ['vocabulary_list'])

    def test_reset(self):
        """Test resetting the limiter."""
        limiter = AICallbackLimiter(max_total=2)
        limiter.record_call('vocabulary_list', tokens_used=100)
        limiter.record_call('vocabulary_list', tokens_used=100)
        self.assertTrue(limiter.is_exhausted())

        limiter.reset()

        self.assertFalse(limiter.is_exhausted())
        self.assertEqual(limiter.total_tokens, 0)
        self.assertEqual(len(limiter.call_history), 0)

    def test_from_config(self):
        """Test building a limiter from AIConfig."""
        limiter = AICallbackLimiter.from_config(AIConfig(max_ai_callbacks=4))

        self.assertEqual(limiter.max_total, 4)
        self.assertEqual(limiter.limits['vocabulary_list'], 3)
        self.assertEqual(limiter.limits['hint_generation'], 5)


if __name__ == '__main__':
    unittest.main()
