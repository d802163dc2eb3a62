"""Retry policy for the single visible-area capture step.

Only :class:`~backend.errors.RateLimitedError` is retried.  Any other error
propagates on the first occurrence.  Rate limiting that outlasts the attempt
budget becomes a :class:`~backend.errors.RetryExhaustedError` chained to the
last rate-limit failure.

Example::

    capture = retry_on_rate_limit(max_attempts=3, delay=1.0)(target.capture_visible_area)
    png = capture()
"""

from __future__ import annotations

import time
from functools import wraps
from typing import Callable, TypeVar

from backend.errors import RateLimitedError, RetryExhaustedError

T = TypeVar("T")


def retry_on_rate_limit(
    max_attempts: int = 3,
    delay: float = 1.0,
    sleep: Callable[[float], None] | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator factory: retry the wrapped call while it is rate-limited.

    Args:
        max_attempts: Total attempts, the first call included.
        delay: Seconds to wait before each retry.
        sleep: Sleep function; defaults to :func:`time.sleep` looked up at
            call time so tests can patch it.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            wait = sleep or time.sleep
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except RateLimitedError as exc:
                    if attempt == max_attempts:
                        print(f"[CAPTURE] exhausted {max_attempts} attempt(s) — rate-limited.")
                        raise RetryExhaustedError(
                            f"capture still rate-limited after {max_attempts} attempt(s): {exc}",
                            attempts=attempt,
                        ) from exc
                    print(
                        f"[CAPTURE] rate-limited (attempt {attempt}/{max_attempts}); "
                        f"retrying in {delay:.1f}s …"
                    )
                    wait(delay)
            raise AssertionError("unreachable")  # pragma: no cover

        return wrapper

    return decorator
