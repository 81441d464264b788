"""
Layered Lookup

Resolves a value from an ordered list of sources (e.g. remote API, then
local cache). Each layer's outcome is recorded as a LayerResult instead of
an exception, so callers can log the failed attempts and pick a default
when every layer misses.

Usage:
    outcome = await layered_lookup([
        ("remote", api.fetch_categories),
        ("cache", read_cached_categories),
    ])
    if outcome.found:
        categories = outcome.value
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Optional, Sequence, TypeVar

from foodingo.core.exceptions import FoodingoError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A layer returns the value, or None for a clean miss
LayerFn = Callable[[], Awaitable[Optional[Any]]]


@dataclass
class LayerResult(Generic[T]):
    """
    Outcome of querying one layer.

    Attributes:
        source: Layer name
        success: Whether the layer produced a value
        value: The value, when successful
        error_message: Failure description; None for a clean miss
    """
    source: str
    success: bool
    value: Optional[T] = None
    error_message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error_message is not None


@dataclass
class LookupOutcome(Generic[T]):
    """Final result of a layered lookup plus every attempt made."""
    value: Optional[T] = None
    source: Optional[str] = None
    attempts: list[LayerResult[T]] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.source is not None

    @property
    def errors(self) -> list[str]:
        return [f"{a.source}: {a.error_message}" for a in self.attempts if a.failed]


async def query_layer(source: str, fn: LayerFn) -> LayerResult:
    """Run a single layer, converting failures into a LayerResult."""
    try:
        value = await fn()
    except (FoodingoError, ValueError) as e:
        logger.debug(f"Lookup layer '{source}' failed: {e}")
        return LayerResult(source=source, success=False, error_message=str(e))

    if value is None:
        return LayerResult(source=source, success=False)
    return LayerResult(source=source, success=True, value=value)


async def layered_lookup(layers: Sequence[tuple[str, LayerFn]]) -> LookupOutcome:
    """
    Query layers in order and stop at the first one that yields a value.

    Args:
        layers: (name, coroutine function) pairs, highest priority first

    Returns:
        LookupOutcome: value/source of the winning layer (if any) and all attempts
    """
    outcome: LookupOutcome = LookupOutcome()

    for source, fn in layers:
        result = await query_layer(source, fn)
        outcome.attempts.append(result)
        if result.success:
            outcome.value = result.value
            outcome.source = source
            break

    return outcome
