"""
Core system module for the combat engine.

This module contains the fundamental components shared by every other
package: constants and enumerations, the error taxonomy and lenient input
readers, randomness sources, logging setup and numeric helpers.
"""

from .constants import (
    CombatOutcome,
    Element,
    Hand,
    ItemSlot,
    StatusId,
)
from .error_handling import (
    AccessDeniedError,
    ArenaError,
    EncounterSetupError,
    ReferenceNotFoundError,
    ensure_mapping,
    ensure_number,
    is_number,
)
from .logging import get_logger, setup_logging
from .rng import RandomSource, ScriptedRandom, ensure_source, roll_between, roll_chance
from .utils import clamp, round_half_up, scale_by_growth

__all__ = [
    # Import from constants.py
    "CombatOutcome",
    "Element",
    "Hand",
    "ItemSlot",
    "StatusId",
    # Import from error_handling.py
    "ArenaError",
    "AccessDeniedError",
    "EncounterSetupError",
    "ReferenceNotFoundError",
    "ensure_mapping",
    "ensure_number",
    "is_number",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from rng.py
    "RandomSource",
    "ScriptedRandom",
    "ensure_source",
    "roll_between",
    "roll_chance",
    # Import from utils.py
    "clamp",
    "round_half_up",
    "scale_by_growth",
]
