"""Rate limiting for calls to the text-generation service.

A token bucket throttles outgoing requests; HTTP 429 responses are retried
with the server's Retry-After delay or an exponential backoff.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

from requests import PreparedRequest, Response, Session
from requests.adapters import HTTPAdapter
from requests.exceptions import Timeout

logger = logging.getLogger("ai-tool-recommender.rate_limit")

ENV_PREFIX = "TOOLREC"


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting behavior.

    Attributes:
        requests_per_second: Rate at which tokens are refilled (default 2.0)
        burst_capacity: Maximum number of tokens in the bucket (default 5)
        backoff_base: Base delay in seconds for exponential backoff (default 1.0)
        max_retries: Maximum number of retry attempts for 429 responses (default 3)
    """

    requests_per_second: float = 2.0
    burst_capacity: int = 5
    backoff_base: float = 1.0
    max_retries: int = 3


def _env_number(
    cast: Callable[[str], Any], keys: list[str], default: Any
) -> Any:
    """Read a number from the first set key, later keys taking precedence."""
    value = default
    for key in keys:
        raw = os.getenv(key)
        if not raw:
            continue
        try:
            value = cast(raw)
        except ValueError:
            logger.warning(f"Invalid value for {key}: {raw}, ignoring")
    return value


def get_config_from_env(service_name: str | None = None) -> RateLimitConfig:
    """Load rate limit configuration from environment variables.

    Args:
        service_name: Optional service name (e.g., "OPENROUTER") whose
            ``{SERVICE}_RATE_LIMIT_*`` variables override the global ones.

    Returns:
        RateLimitConfig with values from environment or defaults.

    Environment Variables:
        TOOLREC_RATE_LIMIT_RPS, TOOLREC_RATE_LIMIT_BURST,
        TOOLREC_RATE_LIMIT_BACKOFF_BASE, TOOLREC_RATE_LIMIT_MAX_RETRIES
        and their {SERVICE}_RATE_LIMIT_* counterparts.
    """
    defaults = RateLimitConfig()

    def keys(suffix: str) -> list[str]:
        names = [f"{ENV_PREFIX}_RATE_LIMIT_{suffix}"]
        if service_name:
            names.append(f"{service_name.upper()}_RATE_LIMIT_{suffix}")
        return names

    return RateLimitConfig(
        requests_per_second=_env_number(float, keys("RPS"), defaults.requests_per_second),
        burst_capacity=_env_number(int, keys("BURST"), defaults.burst_capacity),
        backoff_base=_env_number(float, keys("BACKOFF_BASE"), defaults.backoff_base),
        max_retries=_env_number(int, keys("MAX_RETRIES"), defaults.max_retries),
    )


class TokenBucket:
    """Thread-safe token bucket.

    Tokens refill continuously at ``requests_per_second`` up to
    ``burst_capacity``; each request consumes one.
    """

    def __init__(self, config: RateLimitConfig) -> None:
        self.config = config
        self.tokens: float = float(config.burst_capacity)
        self.last_refill: float = time.monotonic()
        self._lock = Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(
            self.config.burst_capacity,
            self.tokens + elapsed * self.config.requests_per_second,
        )
        self.last_refill = now

    def get_wait_time(self) -> float:
        """Seconds until a token is available, 0.0 if one is available now."""
        with self._lock:
            self._refill()
            if self.tokens >= 1.0:
                return 0.0
            return (1.0 - self.tokens) / self.config.requests_per_second

    def try_acquire(self) -> bool:
        """Take a token if one is available, without waiting."""
        with self._lock:
            self._refill()
            if self.tokens >= 1.0:
                self.tokens -= 1.0
                return True
            return False

    def acquire(self) -> None:
        """Take a token, sleeping until one is available."""
        while not self.try_acquire():
            time.sleep(self.get_wait_time())


def _total_timeout(timeout: Any) -> float | None:
    """Seconds allowed for one send; connect and read parts are summed."""
    if isinstance(timeout, tuple):
        parts = [t for t in timeout if isinstance(t, (int, float))]
        return float(sum(parts)) if parts else None
    if isinstance(timeout, (int, float)):
        return float(timeout)
    return None


class RateLimitedAdapter(HTTPAdapter):
    """HTTP adapter that throttles requests and retries HTTP 429 responses."""

    def __init__(
        self,
        rate_limiter: TokenBucket,
        config: RateLimitConfig | None = None,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.rate_limiter = rate_limiter
        self.config = config or rate_limiter.config

    def send(
        self,
        request: PreparedRequest,
        stream: bool = False,  # noqa: FBT001, FBT002
        timeout: float | tuple[float, float] | None = None,
        verify: bool | str = True,  # noqa: FBT001, FBT002
        cert: str | tuple[str, str] | None = None,
        proxies: dict[str, str] | None = None,
    ) -> Response:
        """Send a request, waiting for a token first and retrying on 429.

        After ``max_retries`` retries the last 429 response is returned as is.
        When a ``timeout`` is given it also bounds the whole exchange: a retry
        whose wait would end past it raises ``requests.Timeout`` instead.
        """
        budget = _total_timeout(timeout)
        deadline = None if budget is None else time.monotonic() + budget
        retries = 0
        while True:
            self.rate_limiter.acquire()

            logger.debug(f"Sending request to {request.url}")
            response = super().send(
                request,
                stream=stream,
                timeout=timeout,
                verify=verify,
                cert=cert,
                proxies=proxies,
            )
            if response.status_code != 429:
                return response

            retries += 1
            if retries > self.config.max_retries:
                logger.error(
                    f"Max retries ({self.config.max_retries}) exceeded for {request.url}"
                )
                return response

            wait_time = self._parse_retry_after(response)
            if wait_time is None:
                wait_time = self.config.backoff_base * (2 ** (retries - 1))
            if deadline is not None and time.monotonic() + wait_time > deadline:
                logger.warning(
                    f"Rate limited (429), waiting {wait_time}s would exceed the "
                    f"{budget}s timeout for {request.url}"
                )
                raise Timeout(
                    f"Rate limited for longer than the {budget}s timeout",
                    request=request,
                    response=response,
                )
            logger.warning(
                f"Rate limited (429), waiting {wait_time}s, "
                f"attempt {retries}/{self.config.max_retries}"
            )
            time.sleep(wait_time)

    def _parse_retry_after(self, response: Response) -> float | None:
        """Retry-After header in seconds, or None if absent or not numeric."""
        retry_after = response.headers.get("Retry-After")
        if retry_after is None:
            return None
        try:
            return float(retry_after)
        except ValueError:
            logger.debug(f"Could not parse Retry-After header: {retry_after}")
            return None


class RateLimiterRegistry:
    """Process-wide registry of one token bucket per service."""

    _instance: RateLimiterRegistry | None = None
    _lock = Lock()

    def __new__(cls) -> RateLimiterRegistry:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._limiters = {}
        return cls._instance

    def get_config(self, service_name: str) -> RateLimitConfig:
        """Configuration of a service from the environment."""
        return get_config_from_env(service_name.lower())

    def get_limiter(self, service_name: str) -> TokenBucket:
        """Get or create the token bucket of a service."""
        service_key = service_name.lower()
        with self._lock:
            if service_key not in self._limiters:
                config = self.get_config(service_key)
                self._limiters[service_key] = TokenBucket(config)
                logger.debug(
                    f"Created rate limiter for {service_name}: "
                    f"{config.requests_per_second} RPS, burst {config.burst_capacity}"
                )
            return self._limiters[service_key]

    def reset(self) -> None:
        """Forget all buckets (for tests)."""
        with self._lock:
            self._limiters.clear()


def get_rate_limiter_registry() -> RateLimiterRegistry:
    return RateLimiterRegistry()


def configure_rate_limiting(session: Session, service_name: str) -> None:
    """Mount a rate limited adapter for a service on a requests session."""
    registry = get_rate_limiter_registry()
    adapter = RateLimitedAdapter(
        registry.get_limiter(service_name), registry.get_config(service_name)
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    logger.debug(f"Configured rate limiting for {service_name} session")
