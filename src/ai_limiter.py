# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
AI call limiter for vocabulary generation.

Counts calls to the Claude API, overall and per prompt type, and
refuses further calls once a limit is reached.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Optional, Callable, List, Any


@dataclass
class CallRecord:
    """Record of a single AI call."""
    prompt_type: str
    timestamp: float
    tokens_used: int = 0
    success: bool = True


@dataclass
class AICallbackLimiter:
    """
    Tracks and enforces AI call limits.

    Check can_call() before every request and record_call() after it.

    Usage:
        limiter = AICallbackLimiter(max_total=10, limits={'vocabulary_list': 3})

        if limiter.can_call('vocabulary_list'):
            words = request_vocabulary(topic)
            limiter.record_call('vocabulary_list', tokens_used=800)
        else:
            words = sample_vocabulary()
    """
    max_total: int = 10
    limits: Dict[str, int] = field(default_factory=dict)
    counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    total_calls: int = 0
    total_tokens: int = 0
    call_history: List[CallRecord] = field(default_factory=list)
    on_limit_reached_handler: Optional[Callable[[str], None]] = None

    def can_call(self, prompt_type: str) -> bool:
        """True if another call of this type is allowed."""
        allowed = (
            self.total_calls < self.max_total
            and self.counts[prompt_type] < self.limits.get(prompt_type, self.max_total)
        )
        if not allowed and self.on_limit_reached_handler:
            self.on_limit_reached_handler(prompt_type)
        return allowed

    def check(self, prompt_type: str):
        """
        Raise instead of returning False.

        Raises:
            AILimitError: If the call is not allowed
        """
        if not self.can_call(prompt_type):
            raise AILimitError(
                prompt_type, self.limits.get(prompt_type, self.max_total)
            )

    def record_call(self, prompt_type: str, tokens_used: int = 0, success: bool = True) -> None:
        """Record that an AI call was made."""
        self.counts[prompt_type] += 1
        self.total_calls += 1
        self.total_tokens += tokens_used
        self.call_history.append(CallRecord(
            prompt_type=prompt_type,
            timestamp=time.time(),
            tokens_used=tokens_used,
            success=success,
        ))

    def get_remaining(self, prompt_type: Optional[str] = None) -> int:
        """Remaining calls, overall or for one prompt type."""
        total_remaining = self.max_total - self.total_calls
        if prompt_type:
            type_limit = self.limits.get(prompt_type, self.max_total)
            return min(type_limit - self.counts[prompt_type], total_remaining)
        return total_remaining

    def is_exhausted(self) -> bool:
        return self.total_calls >= self.max_total

    def get_stats(self) -> Dict[str, Any]:
        successful = sum(1 for c in self.call_history if c.success)
        return {
            'total_calls': self.total_calls,
            'total_tokens': self.total_tokens,
            'remaining_calls': self.get_remaining(),
            'calls_by_type': dict(self.counts),
            'success_rate': successful / len(self.call_history) if self.call_history else 1.0,
        }

    def reset(self) -> None:
        self.counts = defaultdict(int)
        self.total_calls = 0
        self.total_tokens = 0
        self.call_history = []

    @classmethod
    def from_config(cls, config: Any) -> 'AICallbackLimiter':
        """Create a limiter from an AIConfig."""
        return cls(max_total=config.max_ai_callbacks, limits=dict(config.limits))


class AILimitError(Exception):
    """Raised when an AI call limit is reached."""

    def __init__(self, prompt_type: str, limit: int):
        self.prompt_type = prompt_type
        self.limit = limit
        super().__init__(f"AI limit reached for '{prompt_type}': {limit} calls")
