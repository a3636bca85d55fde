"""
Damage strategy module for the combat engine.

The simulator does not compute damage itself; it asks a strategy to resolve
each exchange. Two strategies are provided and neither is silently merged into
the other:

- ``FlatDamageStrategy`` deals ``max(1, damage)`` per hit, with the player's
  attacks able to open a bleed.
- ``DerivedStatsDamageStrategy`` runs the full ``AttackResolver`` on both
  entities' derived stats and turns status procs into burn, poison and stun.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from core.rng import RandomSource, roll_chance
from effects.base_effect import StatusEffect
from effects.damage_over_time_effect import BleedEffect, BurnEffect, PoisonEffect
from effects.incapacitating_effect import StunEffect

from combat.combat_log import DamageBreakdown
from combat.damage import AttackResolver
from combat.entities import CombatEntity
from combat.settings import CombatSettings

PHYSICAL_ELEMENT = "physical"


@dataclass
class Exchange:
    """What a strategy decided for one attacker against one target."""

    amount: int = 0
    crit: bool = False
    missed: bool = False
    element: str = PHYSICAL_ELEMENT
    spell_name: Optional[str] = None
    spell_crit: bool = False
    breakdown: Optional[DamageBreakdown] = None
    statuses: list[StatusEffect] = field(default_factory=list)


class DamageStrategy(Protocol):
    def exchange(
        self,
        attacker: CombatEntity,
        target: CombatEntity,
        rng: RandomSource,
    ) -> Exchange: ...


class FlatDamageStrategy:
    """
    Every hit lands for ``max(1, attacker.damage)``.

    A player's hit applies bleed with ``bleed_chance``; the chance is only
    rolled when it is positive, so a zero chance consumes no draws.
    """

    def __init__(self, bleed_chance: float = 0.3, bleed_duration: int = 2) -> None:
        self.bleed_chance = bleed_chance
        self.bleed_duration = bleed_duration

    @classmethod
    def from_settings(cls, settings: CombatSettings) -> "FlatDamageStrategy":
        return cls(settings.bleed_chance, settings.bleed_duration)

    def exchange(
        self,
        attacker: CombatEntity,
        target: CombatEntity,
        rng: RandomSource,
    ) -> Exchange:
        result = Exchange(amount=max(1, attacker.damage))
        if (
            attacker.is_player
            and self.bleed_chance > 0
            and roll_chance(rng, self.bleed_chance)
        ):
            result.statuses.append(BleedEffect(duration=self.bleed_duration))
        return result


class DerivedStatsDamageStrategy:
    """
    Resolves every hit from derived stats through ``AttackResolver``.

    Burn and poison snapshot the attacker's elemental damage, intelligence
    and damage bonus at the moment they are applied.
    """

    def __init__(self, settings: Optional[CombatSettings] = None) -> None:
        self.settings = settings or CombatSettings()

    def exchange(
        self,
        attacker: CombatEntity,
        target: CombatEntity,
        rng: RandomSource,
    ) -> Exchange:
        outcome = AttackResolver(rng).resolve(attacker.stats, target.stats, attacker.level)
        if not outcome.hit:
            return Exchange(missed=True)

        stats = attacker.stats
        element = PHYSICAL_ELEMENT
        if outcome.spell_name is not None and stats.spells:
            element = str(stats.spells[outcome.spell_name].element)

        statuses: list[StatusEffect] = []
        if outcome.statuses.burn:
            statuses.append(
                BurnEffect(
                    duration=self.settings.burn_duration,
                    source_fire_damage=stats.fire_damage,
                    source_intelligence=stats.intelligence,
                    damage_bonus=stats.burn_damage_bonus or 0.0,
                )
            )
        if outcome.statuses.poison:
            statuses.append(
                PoisonEffect(
                    duration=self.settings.poison_duration,
                    source_poison_damage=stats.poison_damage,
                    source_intelligence=stats.intelligence,
                    damage_bonus=stats.poison_damage_bonus or 0.0,
                )
            )
        if outcome.statuses.stun:
            statuses.append(StunEffect(duration=self.settings.stun_duration))

        return Exchange(
            amount=outcome.total_damage,
            crit=outcome.crit,
            element=element,
            spell_name=outcome.spell_name,
            spell_crit=outcome.spell_crit,
            breakdown=DamageBreakdown(
                physical=outcome.physical_damage,
                elemental=outcome.elemental_damage,
                spell=outcome.spell_damage,
            ),
            statuses=statuses,
        )
