"""
Centralized error taxonomy and lenient input helpers.

Setup faults (missing references, denied access, unusable encounter data) are
raised as distinct exception types. Malformed equipment payloads are never
fatal: the ``ensure_*`` helpers log the offending field and fall back to a
default so that a single bad value cannot abort stat aggregation.
"""

import math
from typing import Any, Mapping, Optional

from catchery import log_debug


class ArenaError(Exception):
    """Base class for every error raised by the combat engine."""


class ReferenceNotFoundError(ArenaError, LookupError):
    """A referenced dungeon, enemy or character record does not exist."""

    def __init__(self, kind: str, reference: str) -> None:
        self.kind = kind
        self.reference = reference
        super().__init__(f"{kind.capitalize()} with id {reference} not found")


class AccessDeniedError(ArenaError):
    """The requested dungeon level is beyond what progress allows."""

    def __init__(self, requested: int, allowed: int) -> None:
        self.requested = requested
        self.allowed = allowed
        super().__init__(
            f"Level {requested} not available. "
            f"You can only access levels up to {allowed}"
        )


class EncounterSetupError(ArenaError, ValueError):
    """Encounter data is structurally unusable (no waves, no enemies, bad level)."""


# ==============================================================================
# LENIENT READERS
# ==============================================================================
# Equipment records are often partially populated. These helpers accept
# anything and hand back a usable value, logging what was skipped.


def is_number(value: Any) -> bool:
    """
    Checks whether a value is a finite real number.

    Booleans are rejected even though they subclass ``int``.

    Args:
        value: The value to check.

    Returns:
        bool: True if the value can be used as a numeric stat.

    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def ensure_number(
    value: Any,
    param_name: str,
    default: float = 0,
    context: Optional[dict[str, Any]] = None,
) -> float:
    """
    Ensures a value is a finite number, falling back to a default otherwise.

    Missing values (``None``) fall back silently; present but unusable values
    are logged at debug level.

    Args:
        value: The value to validate.
        param_name: Human-readable parameter name for log messages.
        default: Value returned when the input is unusable.
        context: Additional context for logging.

    Returns:
        float: The validated value or the default.

    """
    if value is None:
        return default
    if is_number(value):
        return value
    log_debug(
        f"{param_name} should be a finite number, got: {type(value).__name__}, skipping",
        {
            **(context or {}),
            "param_name": param_name,
            "value": repr(value),
        },
    )
    return default


def ensure_mapping(
    value: Any,
    param_name: str,
    context: Optional[dict[str, Any]] = None,
) -> Mapping[str, Any]:
    """
    Ensures a value is a mapping, returning an empty one otherwise.

    Args:
        value: The value to validate.
        param_name: Human-readable parameter name for log messages.
        context: Additional context for logging.

    Returns:
        Mapping[str, Any]: The validated mapping or an empty dict.

    """
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    log_debug(
        f"{param_name} should be a mapping, got: {type(value).__name__}, skipping",
        {
            **(context or {}),
            "param_name": param_name,
            "type": type(value).__name__,
        },
    )
    return {}
