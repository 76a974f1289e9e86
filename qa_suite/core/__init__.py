"""
Core test infrastructure.

Provides reusable utilities for:
- Condition polling and element stability waits
- Fixed-delay retry of flaky operations
- Configurable timeouts and targets
"""

from .clock import monotonic_ms, sleep_ms
from .config import SuiteConfig, TimeoutConfig, WaitConfig, get_config, reset_config
from .retry import RetryConfig, retry, with_retry
from .waiter import (
    BoundingBox,
    MinCountTimeoutError,
    PollOutcome,
    StabilityDetector,
    StabilityResult,
    StabilityState,
    StabilityTimeoutError,
    WaitTimeoutError,
    poll_until,
    wait_for_min_count,
    wait_for_stable,
)

__all__ = [
    "monotonic_ms",
    "sleep_ms",
    "SuiteConfig",
    "TimeoutConfig",
    "WaitConfig",
    "get_config",
    "reset_config",
    "RetryConfig",
    "retry",
    "with_retry",
    "BoundingBox",
    "MinCountTimeoutError",
    "PollOutcome",
    "StabilityDetector",
    "StabilityResult",
    "StabilityState",
    "StabilityTimeoutError",
    "WaitTimeoutError",
    "poll_until",
    "wait_for_min_count",
    "wait_for_stable",
]
