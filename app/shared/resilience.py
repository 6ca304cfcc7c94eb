# app/shared/resilience.py
import time
import structlog
from enum import Enum
from typing import Callable, Any, Dict, Coroutine
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from app.shared.config import settings

logger = structlog.get_logger()

# --- 1. Custom Exceptions ---

class ResilienceError(Exception):
    """Base class for resilience-related errors."""
    pass

class CircuitBreakerOpenError(ResilienceError):
    """Raised when a call is blocked because the Circuit Breaker is OPEN."""
    def __init__(self, service_name: str, reset_timeout: float):
        self.service_name = service_name
        self.reset_timeout = reset_timeout
        super().__init__(f"Circuit Breaker for {service_name} is OPEN. Retrying in {reset_timeout}s.")

# --- 2. Circuit Breaker Implementation ---

class CircuitState(str, Enum):
    CLOSED = "closed"     # Normal operation
    OPEN = "open"         # Failing, blocking requests
    HALF_OPEN = "half_open" # Testing recovery

class CircuitBreaker:
    """
    Implements the Circuit Breaker pattern.

    Stops hammering the translation service while it is failing, giving it
    time to recover (quota resets, transient outages).
    """
    def __init__(self, name: str, failure_threshold: int = 5, recovery_timeout: int = 30):
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout

        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time = 0.0

    async def a_call(self, func: Callable[..., Coroutine[Any, Any, Any]], *args, **kwargs) -> Any:
        """Awaits the coroutine function if the circuit is CLOSED or HALF-OPEN."""
        self._check_state()

        try:
            result = await func(*args, **kwargs)
            self._handle_success()
            return result
        except Exception:
            self._handle_failure()
            raise

    def _check_state(self):
        if self.state == CircuitState.OPEN:
            if time.time() - self.last_failure_time > self.recovery_timeout:
                self._transition_to(CircuitState.HALF_OPEN)
            else:
                # Fail fast
                raise CircuitBreakerOpenError(self.name, self.recovery_timeout)

    def _handle_success(self):
        if self.state == CircuitState.HALF_OPEN:
            self._reset()
        else:
            self.failure_count = 0

    def _handle_failure(self):
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self.state == CircuitState.HALF_OPEN:
            # Failed right after trying to recover
            self._transition_to(CircuitState.OPEN)
        elif self.failure_count >= self.failure_threshold:
            self._transition_to(CircuitState.OPEN)

    def _transition_to(self, new_state: CircuitState):
        self.state = new_state
        logger.warning("circuit_breaker_state_change",
                       service=self.name,
                       state=new_state.value,
                       failures=self.failure_count)

    def _reset(self):
        self.failure_count = 0
        self.state = CircuitState.CLOSED
        logger.info("circuit_breaker_recovered", service=self.name)

# Registry to hold singleton instances of breakers
_breakers: Dict[str, CircuitBreaker] = {}

def get_circuit_breaker(service_name: str) -> CircuitBreaker:
    if service_name not in _breakers:
        _breakers[service_name] = CircuitBreaker(
            name=service_name,
            failure_threshold=5,
            recovery_timeout=settings.TRANSLATOR_TIMEOUT
        )
    return _breakers[service_name]

# --- 3. Retry Policies (Tenacity) ---

def _log_retry(retry_state):
    logger.warning(
        "external_call_retry",
        fn=getattr(retry_state.fn, "__name__", "unknown"),
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )

def retry_external_api(func):
    """
    Decorator for robust retries on external API calls (e.g., Gemini).
    Strategy:
    - Wait: Exponential Backoff (1s, 2s, 4s...) up to 10s.
    - Stop: After 3 attempts.
    - Only network-level errors are retried; bad payloads fail immediately.
    """
    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((IOError, TimeoutError, ConnectionError)),
        before_sleep=_log_retry,
        reraise=True
    )(func)
