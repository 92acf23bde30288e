"""Small shared helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PrependedStringBuilder:
    """Accumulates text, prefixing every piece written with a fixed string."""

    def __init__(self, prepend: str = "") -> None:
        self.prepend = prepend
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        self._parts.append(self.prepend)
        self._parts.append(text)

    def __str__(self) -> str:
        return "".join(self._parts)


class RetryableError(Exception):
    """Raised by an operation to ask :func:`retry` for another attempt."""


def retry(op: Callable[[], T], max_attempts: int, description: str) -> T | None:
    """Call ``op`` up to ``max_attempts`` times and return its result.

    An attempt that raises RetryableError is tried again; any other exception
    is logged and re-raised at once. When all attempts fail, the last error is
    raised. With no attempts allowed, nothing is called and None is returned.
    """
    last_error: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return op()
        except RetryableError as err:
            last_error = err
            logger.warning(
                "attempt %d/%d failed: %s with err: %s", attempt, max_attempts, description, err
            )
        except Exception as err:
            logger.warning("failed: %s with err: %s", description, err)
            raise
    if last_error is None:
        return None
    logger.warning("all %d attempts failed (%s) with err: %s", max_attempts, description, last_error)
    raise last_error