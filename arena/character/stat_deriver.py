"""
Stat derivation module for the combat engine.

Turns ``RawStats`` into ``DerivedStats``: strength scales physical damage,
intelligence scales elemental and spell damage, and crit, dodge and block
chances follow a level-dependent soft cap. All functions here are pure.
"""

from core.constants import (
    ARMOR_LEVEL_SCALE,
    ARMOR_OFFSET,
    BASE_HEALTH,
    BLOCK_BASE,
    BLOCK_MAX,
    BURN_BASE_CHANCE,
    BURN_INT_SCALING,
    CRIT_BASE,
    CRIT_MAX,
    CRIT_MULTIPLIER_BASE,
    DEFAULT_ATTACK_TYPE,
    DEFAULT_SPELL_SCALING,
    DODGE_BASE,
    DODGE_MAX,
    INTELLIGENCE_ELEMENT_SCALING,
    POISON_BASE_CHANCE,
    POISON_INT_SCALING,
    SOFT_CAP_LEVEL_SCALE,
    SOFT_CAP_OFFSET,
    SPELL_SCALING,
    STRENGTH_DAMAGE_SCALING,
    STUN_BASE_CHANCE,
    STUN_INT_SCALING,
)
from core.utils import clamp, round_half_up

from .character_stats import DerivedStats, RawStats, SpellStats


# ============================================================================
# FORMULAS
# ============================================================================


def soft_cap(base: float, maximum: float, stat: float, level: int) -> float:
    """
    Computes a soft-capped chance driven by a stat.

    The stat's contribution approaches ``maximum`` asymptotically; higher
    levels need more of the stat for the same share.

    Args:
        base (float): The chance every character has.
        maximum (float): The largest contribution the stat can reach.
        stat (float): The driving stat (e.g. dexterity).
        level (int): The character level.

    Returns:
        float: ``base + maximum * stat / (stat + 5 * level + 10)``.

    """
    denominator = stat + SOFT_CAP_LEVEL_SCALE * level + SOFT_CAP_OFFSET
    if denominator == 0:
        return base
    return base + maximum * stat / denominator


def physical_reduction(armor: float, attacker_level: int) -> float:
    """
    Fraction of physical damage absorbed by armor.

    Used both for the stat preview (against the character's own level) and
    per attack (against the actual attacker's level).

    Args:
        armor (float): The defender's armor.
        attacker_level (int): The attacker's level.

    Returns:
        float: ``armor / (armor + 50 + 5 * attacker_level)``, in [0, 1).
        Negative armor absorbs nothing.

    """
    armor = max(0, armor)
    return armor / (armor + ARMOR_OFFSET + ARMOR_LEVEL_SCALE * max(0, attacker_level))


def crit_chance(raw: RawStats, level: int) -> float:
    """Physical crit chance from dexterity, capped at 1."""
    return min(1.0, soft_cap(CRIT_BASE, CRIT_MAX, raw.dexterity, level) + raw.crit_chance_bonus)


def spell_crit_chance(raw: RawStats, level: int) -> float:
    """Spell crit chance; same curve as physical crit, driven by intelligence."""
    return min(
        1.0, soft_cap(CRIT_BASE, CRIT_MAX, raw.intelligence, level) + raw.crit_chance_bonus
    )


def dodge_chance(raw: RawStats, level: int) -> float:
    """Dodge chance from dexterity, capped at 1."""
    return min(
        1.0, soft_cap(DODGE_BASE, DODGE_MAX, raw.dexterity, level) + raw.dodge_chance_bonus
    )


def block_chance(raw: RawStats, level: int) -> float:
    """Block chance from strength; half of dodge's base and maximum."""
    return min(
        1.0, soft_cap(BLOCK_BASE, BLOCK_MAX, raw.strength, level) + raw.block_chance_bonus
    )


def burn_chance(raw: RawStats) -> float:
    base = BURN_BASE_CHANCE if raw.fire_flat > 0 else 0.0
    return clamp(
        base + raw.intelligence * BURN_INT_SCALING + (raw.burn_chance_bonus or 0), 0.0, 1.0
    )


def poison_chance(raw: RawStats) -> float:
    base = POISON_BASE_CHANCE if raw.poison_flat > 0 else 0.0
    return clamp(
        base + raw.intelligence * POISON_INT_SCALING + (raw.poison_chance_bonus or 0),
        0.0,
        1.0,
    )


def stun_chance(raw: RawStats) -> float:
    base = STUN_BASE_CHANCE if raw.lightning_flat > 0 else 0.0
    return clamp(
        base + raw.intelligence * STUN_INT_SCALING + (raw.stun_chance_bonus or 0), 0.0, 1.0
    )


def elemental_scaling(raw: RawStats) -> float:
    """Multiplier intelligence applies to elemental flat power."""
    return 1 + raw.intelligence * INTELLIGENCE_ELEMENT_SCALING


def scale_spells(raw: RawStats) -> dict[str, SpellStats] | None:
    """
    Computes the final damage of every spell.

    Each spell's base damage scales with intelligence by its own
    ``intScaling``; the flat power of its element, scaled by the usual
    intelligence factor and the spell's ``elementScaling``, is added on top.

    Args:
        raw (RawStats): The aggregated stats.

    Returns:
        dict[str, SpellStats] | None:
            The scaled spells in their original order, or None if there are none.

    """
    if not raw.spells:
        return None
    element_factor = elemental_scaling(raw)
    scaled: dict[str, SpellStats] = {}
    for name, spell in raw.spells.items():
        int_scaling, element_scaling = SPELL_SCALING.get(name, DEFAULT_SPELL_SCALING)
        scaled_base_damage = spell.damage * (1 + raw.intelligence * int_scaling)
        elemental_bonus = raw.element_flat(spell.element) * element_factor * element_scaling
        scaled[name] = SpellStats(
            chance=spell.chance,
            damage=scaled_base_damage + elemental_bonus,
            element=spell.element,
        )
    return scaled


# ============================================================================
# DERIVATION
# ============================================================================


def derive_from_raw(
    raw: RawStats,
    level: int,
    attack_type: str = DEFAULT_ATTACK_TYPE,
) -> DerivedStats:
    """
    Applies every formula to raw stats.

    Args:
        raw (RawStats):
            The aggregated stats.
        level (int):
            The character level, used by the soft caps and the armor preview.
        attack_type (str):
            Display label for the character's attacks (e.g. 'slashes').

    Returns:
        DerivedStats:
            The combat-ready stats.

    """
    strength_scaling = 1 + raw.strength * STRENGTH_DAMAGE_SCALING
    physical_min = round_half_up(raw.base_weapon_min * strength_scaling)
    physical_max = round_half_up(raw.base_weapon_max * strength_scaling)

    element_factor = elemental_scaling(raw)
    fire = raw.fire_flat * element_factor
    lightning = raw.lightning_flat * element_factor
    poison = raw.poison_flat * element_factor
    elemental = round_half_up(fire + lightning + poison)

    return DerivedStats(
        health=BASE_HEALTH + raw.health,
        armor=raw.armor,
        strength=raw.strength,
        dexterity=raw.dexterity,
        intelligence=raw.intelligence,
        physical_damage_min=physical_min,
        physical_damage_max=physical_max,
        elemental_damage=elemental,
        fire_damage=round_half_up(fire),
        lightning_damage=round_half_up(lightning),
        poison_damage=round_half_up(poison),
        total_damage_min=physical_min + elemental,
        total_damage_max=physical_max + elemental,
        crit_chance=crit_chance(raw, level),
        crit_multiplier=CRIT_MULTIPLIER_BASE + raw.crit_damage_bonus,
        spell_crit_chance=spell_crit_chance(raw, level),
        dodge_chance=dodge_chance(raw, level),
        block_chance=block_chance(raw, level),
        physical_reduction=physical_reduction(raw.armor, level),
        spells=scale_spells(raw),
        burn_chance=burn_chance(raw),
        poison_chance=poison_chance(raw),
        stun_chance=stun_chance(raw),
        burn_damage_bonus=raw.burn_damage_bonus,
        poison_damage_bonus=raw.poison_damage_bonus,
        attack_type=attack_type,
    )


def flat_stats(
    health: int,
    damage: int,
    attack_type: str = DEFAULT_ATTACK_TYPE,
    armor: int = 0,
) -> DerivedStats:
    """
    Builds derived stats for a combatant described only by health and damage.

    Enemy templates carry no equipment; this gives them a fixed damage range
    and no crit, dodge or proc chances so they can face the derived resolver.

    Args:
        health (int): Maximum health.
        damage (int): Fixed physical damage per hit.
        attack_type (str): Display label for the attacks.
        armor (int): Armor, zero unless the template defines some.

    Returns:
        DerivedStats: Stats with ``physical min = max = damage``.

    """
    return DerivedStats(
        health=health,
        armor=armor,
        physical_damage_min=damage,
        physical_damage_max=damage,
        total_damage_min=damage,
        total_damage_max=damage,
        crit_multiplier=CRIT_MULTIPLIER_BASE,
        attack_type=attack_type,
    )
