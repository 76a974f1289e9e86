"""
Condition-polling waits for browser and API checks.

Replaces fixed sleeps with bounded polling loops:
- poll_until: evaluate a predicate until it holds or a deadline passes
- StabilityDetector: wait until an element's bounding box stops changing
- wait_for_min_count: wait until a collection reaches a minimum size

Every loop is bounded by a deadline; there is no external cancel signal.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Optional,
    Protocol,
    Union,
)

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .clock import monotonic_ms, sleep_ms
from .config import get_config


logger = logging.getLogger(__name__)

Predicate = Callable[[], Union[bool, Awaitable[bool]]]
CountAccessor = Callable[[], Union[int, Awaitable[int]]]


class WaitTimeoutError(Exception):
    """Raised when a wait deadline elapses without the condition holding."""

    def __init__(self, message: str, timeout_ms: float, elapsed_ms: float = 0.0):
        super().__init__(message)
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms


class MinCountTimeoutError(WaitTimeoutError):
    """Raised when a collection never reaches the required size."""

    def __init__(
        self,
        min_count: int,
        last_count: int,
        timeout_ms: float,
        elapsed_ms: float = 0.0,
    ):
        super().__init__(
            f"Timeout: expected at least {min_count} elements, "
            f"but found {last_count} after {timeout_ms:.0f}ms",
            timeout_ms=timeout_ms,
            elapsed_ms=elapsed_ms,
        )
        self.min_count = min_count
        self.last_count = last_count


class PollOutcome(str, Enum):
    """Result of a single poll tick."""

    SUCCESS = "SUCCESS"
    NOT_YET_READY = "NOT_YET_READY"
    ERROR = "ERROR"

    @classmethod
    def collapse(cls, outcome: "PollOutcome") -> "PollOutcome":
        """Ticks that raised count as not ready; only the deadline fails a wait."""
        if outcome is cls.ERROR:
            return cls.NOT_YET_READY
        return outcome


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def evaluate(predicate: Predicate) -> PollOutcome:
    """Run one poll tick of ``predicate`` and classify the result."""
    try:
        result = await _resolve(predicate())
    except Exception as e:
        logger.debug(f"Condition raised {type(e).__name__}: {e}")
        return PollOutcome.ERROR

    return PollOutcome.SUCCESS if result else PollOutcome.NOT_YET_READY


async def poll_until(
    predicate: Predicate,
    timeout_ms: Optional[float] = None,
    interval_ms: Optional[float] = None,
) -> bool:
    """
    Evaluate ``predicate`` until it returns true or ``timeout_ms`` elapses.

    Usage:
        ready = await poll_until(lambda: banner.is_visible(), 5000, 100)

    Args:
        predicate: Zero-argument callable returning a bool or an awaitable bool
        timeout_ms: Overall deadline in milliseconds
        interval_ms: Sleep between ticks in milliseconds

    Returns:
        True as soon as the predicate holds, False once the deadline passes
    """
    config = get_config()
    if timeout_ms is None:
        timeout_ms = config.timeouts.element
    if interval_ms is None:
        interval_ms = config.waits.condition_interval

    started = monotonic_ms()
    ticks = 0

    while monotonic_ms() - started < timeout_ms:
        ticks += 1
        outcome = PollOutcome.collapse(await evaluate(predicate))
        if outcome is PollOutcome.SUCCESS:
            return True
        await sleep_ms(interval_ms)

    logger.debug(f"Condition not met after {timeout_ms:.0f}ms ({ticks} ticks)")
    return False


async def wait_for_min_count(
    count_accessor: CountAccessor,
    min_count: int,
    timeout_ms: Optional[float] = None,
    interval_ms: Optional[float] = None,
) -> int:
    """
    Poll a collection size until it reaches ``min_count``.

    Returns:
        The observed count once it meets the minimum

    Raises:
        MinCountTimeoutError: With the minimum and the last observed count
    """
    config = get_config()
    if timeout_ms is None:
        timeout_ms = config.timeouts.element
    if interval_ms is None:
        interval_ms = config.waits.min_count_interval

    started = monotonic_ms()
    last_count = 0

    async def reached() -> bool:
        nonlocal last_count
        last_count = await _resolve(count_accessor())
        return last_count >= min_count

    while monotonic_ms() - started < timeout_ms:
        outcome = PollOutcome.collapse(await evaluate(reached))
        if outcome is PollOutcome.SUCCESS:
            return last_count
        await sleep_ms(interval_ms)

    raise MinCountTimeoutError(
        min_count=min_count,
        last_count=last_count,
        timeout_ms=timeout_ms,
        elapsed_ms=monotonic_ms() - started,
    )


# =============================================================================
# Element stability
# =============================================================================


@dataclass(frozen=True)
class BoundingBox:
    """On-screen rectangle of an element at one point in time."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, float]]) -> Optional["BoundingBox"]:
        if data is None:
            return None
        return cls(
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
        )


class StabilityState(str, Enum):
    """States of the stability detector."""

    WAITING_VISIBLE = "WAITING_VISIBLE"
    SAMPLING = "SAMPLING"
    HOLDING = "HOLDING"
    STABLE = "STABLE"
    TIMED_OUT = "TIMED_OUT"

    @classmethod
    def is_terminal(cls, state: "StabilityState") -> bool:
        return state in {cls.STABLE, cls.TIMED_OUT}


class BoxSource(Protocol):
    """The part of a Playwright locator the detector relies on."""

    async def wait_for(
        self, *, state: Optional[str] = None, timeout: Optional[float] = None
    ) -> None: ...

    async def bounding_box(
        self, *, timeout: Optional[float] = None
    ) -> Optional[Dict[str, float]]: ...


@dataclass
class StabilityResult:
    """Result of a stability wait."""

    success: bool
    state: StabilityState
    box: Optional[BoundingBox] = None
    elapsed_ms: float = 0.0
    samples: int = 0

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.success


class StabilityTimeoutError(WaitTimeoutError):
    """Raised when an element keeps moving (or never appears) until the deadline."""

    def __init__(self, result: StabilityResult, last_state: StabilityState, timeout_ms: float):
        super().__init__(
            f"Timeout: element not stable after {timeout_ms:.0f}ms "
            f"(state={last_state.value}, last box={result.box}, samples={result.samples})",
            timeout_ms=timeout_ms,
            elapsed_ms=result.elapsed_ms,
        )
        self.result = result
        self.last_state = last_state


class StabilityDetector:
    """
    Waits until an element is visible and its geometry stops changing.

    The bounding box is sampled every tick. Two identical consecutive samples
    start a hold of ``stable_ms``; a confirming sample identical in all four
    fields ends the wait. A missing box (element detached) is never stable.

    Usage:
        detector = StabilityDetector(page.locator("#menu"), timeout_ms=10000)
        result = await detector.wait()
        if result:
            await page.locator("#menu").click()
    """

    def __init__(
        self,
        element: BoxSource,
        timeout_ms: Optional[float] = None,
        stable_ms: Optional[float] = None,
        tick_ms: Optional[float] = None,
    ):
        config = get_config()
        self.element = element
        self.timeout_ms = timeout_ms if timeout_ms is not None else config.timeouts.element
        self.stable_ms = stable_ms if stable_ms is not None else config.waits.stable_time
        self.tick_ms = tick_ms if tick_ms is not None else config.waits.stability_tick

        self.state = StabilityState.WAITING_VISIBLE
        self.last_active_state = StabilityState.WAITING_VISIBLE
        self._samples = 0
        self._started_at = 0.0

    def _transition(self, state: StabilityState) -> None:
        if state is not self.state:
            logger.debug(f"Stability {self.state.value} -> {state.value}")
        self.state = state

    def _elapsed(self) -> float:
        return monotonic_ms() - self._started_at

    async def _sample(self) -> Optional[BoundingBox]:
        self._samples += 1
        try:
            return BoundingBox.from_dict(
                await self.element.bounding_box(timeout=self.tick_ms)
            )
        except PlaywrightError as e:
            logger.debug(f"Bounding box unavailable: {e}")
            return None

    def _timed_out(self, box: Optional[BoundingBox]) -> StabilityResult:
        self.last_active_state = self.state
        self._transition(StabilityState.TIMED_OUT)
        return StabilityResult(
            success=False,
            state=StabilityState.TIMED_OUT,
            box=box,
            elapsed_ms=self._elapsed(),
            samples=self._samples,
        )

    async def wait(self) -> StabilityResult:
        """
        Run the detector to a terminal state.

        Returns:
            StabilityResult; ``success`` is False when the deadline elapsed
        """
        self._started_at = monotonic_ms()
        self._samples = 0
        self.state = StabilityState.WAITING_VISIBLE
        deadline = self._started_at + self.timeout_ms

        try:
            await self.element.wait_for(state="visible", timeout=self.timeout_ms)
        except PlaywrightTimeoutError:
            return self._timed_out(None)

        self._transition(StabilityState.SAMPLING)
        last = await self._sample()

        while monotonic_ms() < deadline:
            await sleep_ms(self.tick_ms)
            current = await self._sample()

            if last is not None and current == last:
                self._transition(StabilityState.HOLDING)
                await sleep_ms(self.stable_ms)
                confirmed = await self._sample()

                if confirmed == current:
                    self._transition(StabilityState.STABLE)
                    return StabilityResult(
                        success=True,
                        state=StabilityState.STABLE,
                        box=confirmed,
                        elapsed_ms=self._elapsed(),
                        samples=self._samples,
                    )

                self._transition(StabilityState.SAMPLING)
                current = confirmed

            last = current

        return self._timed_out(last)


async def wait_for_stable(
    element: BoxSource,
    timeout_ms: Optional[float] = None,
    stable_ms: Optional[float] = None,
) -> StabilityResult:
    """
    Wait until ``element`` is visible and has stopped moving.

    Raises:
        StabilityTimeoutError: If the element is not stable before the deadline
    """
    detector = StabilityDetector(element, timeout_ms=timeout_ms, stable_ms=stable_ms)
    result = await detector.wait()

    if not result:
        raise StabilityTimeoutError(
            result,
            last_state=detector.last_active_state,
            timeout_ms=detector.timeout_ms,
        )

    return result
