"""
Damage over time effect module for the combat engine.

Defines the statuses that deal damage at the end of every round: bleed, which
scales with the carrier's maximum health, and burn and poison, which scale
with a snapshot of the attacker taken when the status was applied.
"""

import math
from typing import Literal

from core.constants import (
    BLEED_MAX_HP_RATIO,
    BURN_FIRE_RATIO,
    BURN_INT_RATIO,
    POISON_ELEMENT_RATIO,
    POISON_INT_RATIO,
    StatusId,
)
from pydantic import Field

from .base_effect import StatusEffect


class DamageOverTimeEffect(StatusEffect):
    """
    Base class for statuses that deal damage on every end-of-round tick.

    Every tick deals at least one point of damage per stack.
    """

    def base_tick(self, max_hp: int) -> float:
        """Unfloored damage of a single stack."""
        raise NotImplementedError("Subclasses must implement base_tick.")

    def tick_damage(self, max_hp: int) -> int:
        return max(1, math.floor(self.base_tick(max_hp))) * self.stacks


class BleedEffect(DamageOverTimeEffect):
    """
    Bleed deals a tenth of the carrier's maximum health per round.
    """

    status_id: Literal["bleed"] = StatusId.BLEED.value

    def base_tick(self, max_hp: int) -> float:
        return max_hp * BLEED_MAX_HP_RATIO


class SourcedDamageOverTimeEffect(DamageOverTimeEffect):
    """
    A damage over time status whose strength was fixed at application.

    The attacker's relevant stats are copied into the effect so that later
    ticks do not depend on the attacker's live state (or on it being alive).
    """

    source_intelligence: int = Field(
        default=0,
        description="Intelligence of the attacker when the status was applied.",
    )
    damage_bonus: float = Field(
        default=0.0,
        description="Bonus multiplier to the tick damage (0.1 = +10%).",
    )

    def refresh(self, other: StatusEffect, max_stacks: int) -> None:
        super().refresh(other, max_stacks)
        assert isinstance(other, SourcedDamageOverTimeEffect)
        self.source_intelligence = other.source_intelligence
        self.damage_bonus = other.damage_bonus


class BurnEffect(SourcedDamageOverTimeEffect):
    """
    Burn scales with the attacker's fire damage and intelligence.
    """

    status_id: Literal["burn"] = StatusId.BURN.value

    source_fire_damage: int = Field(
        default=0,
        description="Fire damage of the attacker when the burn was applied.",
    )

    def base_tick(self, max_hp: int) -> float:
        return (
            self.source_fire_damage * BURN_FIRE_RATIO
            + self.source_intelligence * BURN_INT_RATIO
        ) * (1 + self.damage_bonus)

    def refresh(self, other: StatusEffect, max_stacks: int) -> None:
        super().refresh(other, max_stacks)
        assert isinstance(other, BurnEffect)
        self.source_fire_damage = other.source_fire_damage


class PoisonEffect(SourcedDamageOverTimeEffect):
    """
    Poison scales with the attacker's poison damage and intelligence.
    """

    status_id: Literal["poison"] = StatusId.POISON.value

    source_poison_damage: int = Field(
        default=0,
        description="Poison damage of the attacker when the poison was applied.",
    )

    def base_tick(self, max_hp: int) -> float:
        return (
            self.source_poison_damage * POISON_ELEMENT_RATIO
            + self.source_intelligence * POISON_INT_RATIO
        ) * (1 + self.damage_bonus)

    def refresh(self, other: StatusEffect, max_stacks: int) -> None:
        super().refresh(other, max_stacks)
        assert isinstance(other, PoisonEffect)
        self.source_poison_damage = other.source_poison_damage
