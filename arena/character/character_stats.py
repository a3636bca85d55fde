"""
Character stats module for the combat engine.

Holds the two stat records the derivation pipeline produces: ``RawStats``,
the unscaled totals folded out of equipment, and ``DerivedStats``, the
combat-ready values after every formula has been applied.
"""

from core.constants import DEFAULT_ATTACK_TYPE, Element
from pydantic import BaseModel, ConfigDict, Field


class SpellStats(BaseModel):
    """A spell that can proc on hit, with its chance, damage and element."""

    model_config = ConfigDict(frozen=True)

    chance: float = Field(
        description="Probability in [0, 1] that the spell procs on a hit.",
    )
    damage: float = Field(
        description="Spell damage (raw on RawStats, fully scaled on DerivedStats).",
    )
    element: Element = Field(
        default=Element.FIRE,
        description="The element whose flat power adds to the spell.",
    )


class RawStats(BaseModel):
    """
    Unscaled totals aggregated from equipment.

    Flat stats are integers because every contribution is floored at the
    point of aggregation; chance and bonus fields accumulate as floats.
    Rebuilt on every query and never persisted.
    """

    # Primary stats.
    health: int = 0
    armor: int = 0
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0

    # Weapon damage range.
    base_weapon_min: int = 0
    base_weapon_max: int = 0

    # Elemental flat power.
    fire_flat: int = 0
    lightning_flat: int = 0
    poison_flat: int = 0

    crit_chance_bonus: float = 0.0
    crit_damage_bonus: float = 0.0
    dodge_chance_bonus: float = 0.0
    block_chance_bonus: float = 0.0

    spells: dict[str, SpellStats] | None = Field(
        default=None,
        description="Spells granted by main-hand weapons and other gear, keyed by name.",
    )

    burn_chance_bonus: float | None = None
    burn_damage_bonus: float | None = None
    poison_chance_bonus: float | None = None
    poison_damage_bonus: float | None = None
    stun_chance_bonus: float | None = None

    def element_flat(self, element: Element) -> int:
        """Returns the flat power of the given element."""
        return {
            Element.FIRE: self.fire_flat,
            Element.LIGHTNING: self.lightning_flat,
            Element.POISON: self.poison_flat,
        }[element]


class DerivedStats(BaseModel):
    """
    Combat-ready stats after formula application.

    Damage values are rounded to integers; chances stay unrounded fractions.
    Immutable once produced.
    """

    model_config = ConfigDict(frozen=True)

    health: int
    armor: int
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0

    physical_damage_min: int = 0
    physical_damage_max: int = 0
    elemental_damage: int = 0
    fire_damage: int = 0
    lightning_damage: int = 0
    poison_damage: int = 0
    total_damage_min: int = 0
    total_damage_max: int = 0

    crit_chance: float = 0.0
    crit_multiplier: float = 1.5
    spell_crit_chance: float = 0.0
    dodge_chance: float = 0.0
    block_chance: float = 0.0
    physical_reduction: float = Field(
        default=0.0,
        description="Armor mitigation against an attacker of the character's own level (0-1).",
    )

    spells: dict[str, SpellStats] | None = Field(
        default=None,
        description="Spells with fully scaled damage; None when the character has none.",
    )

    burn_chance: float = 0.0
    poison_chance: float = 0.0
    stun_chance: float = 0.0
    burn_damage_bonus: float | None = None
    poison_damage_bonus: float | None = None

    attack_type: str = DEFAULT_ATTACK_TYPE

    @property
    def average_damage(self) -> int:
        """Midpoint of the total damage range, rounded half up."""
        return int((self.total_damage_min + self.total_damage_max) / 2 + 0.5)
