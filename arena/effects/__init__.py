"""
Effects module for the combat engine.

This module contains the closed set of status effects an entity can carry
during combat and the manager that applies, ticks and clears them.
"""

from typing import Annotated, Union

from pydantic import Field

from .base_effect import StatusEffect, StatusSnapshot
from .damage_over_time_effect import (
    BleedEffect,
    BurnEffect,
    DamageOverTimeEffect,
    PoisonEffect,
    SourcedDamageOverTimeEffect,
)
from .effect_manager import EffectTick, StatusEffectManager
from .incapacitating_effect import StunEffect

AnyStatusEffect = Annotated[
    Union[BleedEffect, BurnEffect, PoisonEffect, StunEffect],
    Field(discriminator="status_id"),
]

__all__ = [
    # Import from base_effect.py
    "StatusEffect",
    "StatusSnapshot",
    # Import from damage_over_time_effect.py
    "DamageOverTimeEffect",
    "SourcedDamageOverTimeEffect",
    "BleedEffect",
    "BurnEffect",
    "PoisonEffect",
    # Import from incapacitating_effect.py
    "StunEffect",
    # Import from effect_manager.py
    "EffectTick",
    "StatusEffectManager",
    # Union of every concrete effect
    "AnyStatusEffect",
]
