from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .exceptions import ApiError, HttpStatusError, NetworkError

RetryPredicate = Callable[[ApiError], bool]


def is_transient(error: ApiError) -> bool:
    if isinstance(error, NetworkError):
        return True
    return isinstance(error, HttpStatusError) and (error.status_code or 0) >= 500


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    retry_predicate: RetryPredicate = is_transient

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be >= 0")

    def should_retry(self, error: ApiError, attempt: int) -> bool:
        return attempt < self.max_attempts and self.retry_predicate(error)

    def delay_for(self, attempt: int) -> float:
        """Linear backoff: wait ``base * attempt`` after the given failed attempt."""
        return self.base_delay_seconds * attempt
