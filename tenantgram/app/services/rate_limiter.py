"""
Per-principal token-bucket rate limiting.

Buckets refill by interval: the full capacity is restored every window
rather than dripping continuously, so each window is a fresh quota.
"""

import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from tenantgram.domain.entities import UserRole

ADMIN_ROLES = (UserRole.SUPER_ADMIN, UserRole.ADMIN)


@dataclass
class RateLimitConfig:
    """Rate limit configuration."""

    unauthenticated: int = 30
    authenticated: int = 60
    admin: int = 100
    window_seconds: float = 60.0
    max_keys: int = 100_000
    retention_seconds: float = 3600.0

    @classmethod
    def from_app_config(cls, config) -> "RateLimitConfig":
        return cls(
            unauthenticated=int(config.RATE_LIMIT_UNAUTHENTICATED),
            authenticated=int(config.RATE_LIMIT_AUTHENTICATED),
            admin=int(config.RATE_LIMIT_ADMIN),
            window_seconds=float(config.RATE_LIMIT_TIME_WINDOW_MINUTES) * 60.0,
            max_keys=int(config.RATE_LIMIT_MAX_KEYS),
            retention_seconds=float(config.RATE_LIMIT_RETENTION_SECONDS),
        )


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0


@dataclass
class TokenBucket:
    """Token bucket with interval refill."""

    capacity: int
    window_seconds: float
    tokens: int
    window_start: float
    last_access: float
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _refill(self, now: float) -> None:
        elapsed = now - self.window_start
        if elapsed >= self.window_seconds:
            windows = int(elapsed // self.window_seconds)
            self.window_start += windows * self.window_seconds
            self.tokens = self.capacity

    def try_consume(self, now: float) -> RateLimitDecision:
        """Take one token. Read-modify-write is atomic per bucket."""
        with self.lock:
            self._refill(now)
            self.last_access = now
            if self.tokens > 0:
                self.tokens -= 1
                return RateLimitDecision(True, self.capacity, self.tokens)

            wait = self.window_start + self.window_seconds - now
            return RateLimitDecision(
                False, self.capacity, 0, retry_after=max(1, math.ceil(wait))
            )


class RateLimiter:
    """
    Bucket cache keyed by principal.

    Keys are ``user:<email>`` for authenticated callers and
    ``ip:<remote-addr>`` otherwise. The cache evicts entries idle for longer
    than the retention period and, past ``max_keys``, the least recently used.
    """

    def __init__(
        self,
        config: Optional[RateLimitConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or RateLimitConfig()
        self.clock = clock
        self._buckets: "OrderedDict[str, TokenBucket]" = OrderedDict()
        self._lock = threading.Lock()

    def capacity_for(self, role: Optional[UserRole], authenticated: bool) -> int:
        if not authenticated:
            return self.config.unauthenticated
        if role in ADMIN_ROLES:
            return self.config.admin
        return self.config.authenticated

    @staticmethod
    def key_for(email: Optional[str], remote_addr: Optional[str]) -> str:
        if email:
            return f"user:{email}"
        return f"ip:{remote_addr or 'unknown'}"

    def _evict(self, now: float) -> None:
        retention = self.config.retention_seconds
        while self._buckets:
            key, bucket = next(iter(self._buckets.items()))
            if now - bucket.last_access <= retention and len(self._buckets) <= self.config.max_keys:
                break
            del self._buckets[key]

    def _bucket(self, key: str, capacity: int, now: float) -> TokenBucket:
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is not None and now - bucket.last_access > self.config.retention_seconds:
                del self._buckets[key]
                bucket = None
            if bucket is None or bucket.capacity != capacity:
                bucket = TokenBucket(
                    capacity=capacity,
                    window_seconds=self.config.window_seconds,
                    tokens=capacity,
                    window_start=now,
                    last_access=now,
                )
                self._buckets[key] = bucket
            self._buckets.move_to_end(key)
            self._evict(now)
            return bucket

    def try_consume(self, key: str, capacity: int) -> RateLimitDecision:
        now = self.clock()
        return self._bucket(key, capacity, now).try_consume(now)

    def __len__(self) -> int:
        return len(self._buckets)

    def reset(self, key: Optional[str] = None) -> None:
        """Reset rate limit for a key or all."""
        with self._lock:
            if key:
                self._buckets.pop(key, None)
            else:
                self._buckets.clear()
