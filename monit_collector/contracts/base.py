"""
Base Contracts and Shared Types

These are the foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- Layers may import types but MUST NOT modify this module
- All types are frozen dataclasses for immutability guarantee
- Failures are returned as Result values, never as half-filled data
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    No silent fallbacks - every error state is enumerated.
    """
    # Decode errors
    EMPTY_PAYLOAD = auto()
    MALFORMED_PAYLOAD = auto()
    UNRESOLVED_CHARSET = auto()

    # Projection errors
    KIND_MISMATCH = auto()

    # Hand-off errors
    PUBLISH_TIMEOUT = auto()

    # Serving layer errors
    TRANSPORT_FAILURE = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and inspected.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def create(code: ErrorCode, message: str, **context: str) -> Error:
        return Error(
            code=code,
            message=message,
            timestamp=datetime.now(timezone.utc),
            context=tuple((key, str(value)) for key, value in context.items())
        )

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )

    def get(self, key: str) -> Optional[str]:
        for ctx_key, ctx_value in self.context:
            if ctx_key == key:
                return ctx_value
        return None


@dataclass(frozen=True)
class Result:
    """
    Generic result type for operations that can fail.
    Either contains a value OR an error, never both.
    """
    value: Optional[object] = None
    error: Optional[Error] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @staticmethod
    def success(value: object) -> Result:
        return Result(value=value, error=None)

    @staticmethod
    def failure(error: Error) -> Result:
        return Result(value=None, error=error)


# =============================================================================
# TEMPORAL TYPES (Immutable, explicit semantics)
# =============================================================================

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Whole seconds representable around EPOCH by datetime
MIN_EPOCH_SECONDS = (datetime.min.replace(tzinfo=timezone.utc) - EPOCH) // timedelta(seconds=1)
MAX_EPOCH_SECONDS = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // timedelta(seconds=1)


def epoch_seconds(text: str = '0') -> int:
    """Convert wire text to seconds since EPOCH; ValueError outside datetime range."""
    value = int(text)
    if not MIN_EPOCH_SECONDS <= value <= MAX_EPOCH_SECONDS:
        raise ValueError(f"{value} seconds is outside the representable time range")
    return value


def epoch_microseconds(text: str = '0') -> int:
    """Convert wire text to the sub-second part of a split timestamp."""
    value = int(text)
    if not 0 <= value < 1_000_000:
        raise ValueError(f"{value} is not a microsecond fraction")
    return value


@dataclass(frozen=True)
class Timestamp:
    """
    Immutable timestamp with explicit semantics.
    All timestamps are UTC, never local time.
    """
    value: datetime

    def __post_init__(self):
        # Ensure UTC timezone
        if self.value.tzinfo is None:
            object.__setattr__(self, 'value', self.value.replace(tzinfo=timezone.utc))

    @staticmethod
    def from_epoch(seconds: int, microseconds: int = 0) -> Timestamp:
        """
        Compose a wall-clock time from a split wire timestamp.

        The result is always seconds + microseconds/1e6. Integer arithmetic
        keeps the microsecond part exact.
        """
        return Timestamp(
            value=EPOCH + timedelta(seconds=seconds, microseconds=microseconds)
        )

    @property
    def epoch(self) -> float:
        return self.value.timestamp()
