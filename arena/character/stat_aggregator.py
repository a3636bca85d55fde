"""
Stat aggregation module for the combat engine.

Folds a character's equipped items into ``RawStats``. Weapons are resolved to
a main hand and an optional off hand first; the off hand contributes at half
strength and never grants spells. Malformed bonus fields are skipped one by
one, never failing the whole aggregation.
"""

import math
from typing import Any, Mapping, Sequence

from catchery import log_debug
from core.constants import (
    DEFAULT_SPELL_ELEMENT,
    FIST_DAMAGE,
    MAIN_HAND_MULTIPLIER,
    OFF_HAND_MULTIPLIER,
    SPELL_ELEMENTS,
    Element,
)
from core.error_handling import ensure_mapping, ensure_number, is_number
from items.equipment import EquippedItem
from items.loadout import resolve_weapon_loadout

from .character_stats import RawStats, SpellStats

# (payload section, payload key, RawStats field)
_FLAT_STATS: tuple[tuple[str, str, str], ...] = (
    ("primary", "health", "health"),
    ("primary", "armor", "armor"),
    ("attributes", "strength", "strength"),
    ("attributes", "dexterity", "dexterity"),
    ("attributes", "intelligence", "intelligence"),
    ("elementPower", "fire", "fire_flat"),
    ("elementPower", "lightning", "lightning_flat"),
    ("elementPower", "poison", "poison_flat"),
)

# special.<key> -> RawStats field; summed as-is, never scaled by hand.
_SPECIAL_STATS: tuple[tuple[str, str], ...] = (
    ("critChance", "crit_chance_bonus"),
    ("critDamage", "crit_damage_bonus"),
    ("dodgeChance", "dodge_chance_bonus"),
    ("blockChance", "block_chance_bonus"),
)

# Top-level status keys -> RawStats field; scaled by the hand multiplier.
_STATUS_STATS: tuple[tuple[str, str], ...] = (
    ("burnChance", "burn_chance_bonus"),
    ("burnDamage", "burn_damage_bonus"),
    ("poisonChance", "poison_chance_bonus"),
    ("poisonDamage", "poison_damage_bonus"),
    ("stunChance", "stun_chance_bonus"),
)

_ELEMENT_VALUES = frozenset(element.value for element in Element)


class StatAggregator:
    """
    Accumulates item contributions into a single ``RawStats``.

    One aggregator is used per query; ``aggregate`` can be called directly or
    through the module-level ``aggregate_raw_stats`` shortcut.
    """

    def __init__(self) -> None:
        self.raw: RawStats = RawStats()

    def aggregate(self, items: Sequence[EquippedItem]) -> RawStats:
        """
        Folds the given items into raw stats.

        Args:
            items (Sequence[EquippedItem]):
                The character's equipped items, in inventory order.

        Returns:
            RawStats:
                The aggregated, unscaled totals.

        """
        loadout = resolve_weapon_loadout(items)

        if loadout.is_unarmed:
            self.raw.base_weapon_min = FIST_DAMAGE
            self.raw.base_weapon_max = FIST_DAMAGE
        else:
            assert loadout.main_hand is not None
            self.add_weapon(loadout.main_hand, MAIN_HAND_MULTIPLIER)
            if loadout.off_hand is not None:
                self.add_weapon(loadout.off_hand, OFF_HAND_MULTIPLIER, skip_spells=True)
            for ignored in loadout.ignored:
                log_debug(
                    f"Weapon {ignored.label} excluded from damage aggregation",
                    {"item": ignored.id, "two_handed": loadout.two_handed},
                )

        for item in items:
            if item.is_weapon:
                continue
            if not item.equipped:
                continue
            self.add_item(item, MAIN_HAND_MULTIPLIER)

        return self.raw

    def add_weapon(
        self,
        weapon: EquippedItem,
        multiplier: float,
        skip_spells: bool = False,
    ) -> None:
        """
        Adds a weapon's damage range and its other bonuses.

        Damage comes from ``bonuses.primary.minAttack``/``maxAttack``; a single
        bound is used for both, and without either the template's base attack
        is used (falling back to fist damage).

        Args:
            weapon (EquippedItem):
                The weapon to add.
            multiplier (float):
                The hand multiplier (1.0 main hand, 0.5 off hand).
            skip_spells (bool):
                Whether the weapon's spells are ignored (off hand).

        """
        context = {"item": weapon.id}
        bonuses = ensure_mapping(weapon.bonuses, "bonuses", context)
        primary = ensure_mapping(bonuses.get("primary"), "bonuses.primary", context)

        weapon_min = primary.get("minAttack")
        weapon_max = primary.get("maxAttack")
        weapon_min = weapon_min if is_number(weapon_min) else None
        weapon_max = weapon_max if is_number(weapon_max) else None

        if weapon_min is None and weapon_max is None:
            weapon_min = weapon_max = self._template_attack(weapon)
        elif weapon_min is None:
            weapon_min = weapon_max
        elif weapon_max is None:
            weapon_max = weapon_min

        self.raw.base_weapon_min += math.floor(weapon_min * multiplier)
        self.raw.base_weapon_max += math.floor(weapon_max * multiplier)

        self.add_item(weapon, multiplier, skip_spells=skip_spells)

    def add_item(
        self,
        item: EquippedItem,
        multiplier: float,
        skip_spells: bool = False,
    ) -> None:
        """
        Adds an item's bonus payload.

        Args:
            item (EquippedItem):
                The item to add.
            multiplier (float):
                Scaling for flat, spell-damage and status contributions.
            skip_spells (bool):
                Whether the item's spells are ignored.

        """
        context = {"item": item.id, "slot": item.slot}
        bonuses = ensure_mapping(item.bonuses, "bonuses", context)

        for section, key, attr in _FLAT_STATS:
            payload = ensure_mapping(bonuses.get(section), f"bonuses.{section}", context)
            value = ensure_number(payload.get(key), f"{section}.{key}", 0, context)
            setattr(self.raw, attr, getattr(self.raw, attr) + math.floor(value * multiplier))

        special = ensure_mapping(bonuses.get("special"), "bonuses.special", context)
        for key, attr in _SPECIAL_STATS:
            if key in special:
                value = ensure_number(special[key], f"special.{key}", 0, context)
                setattr(self.raw, attr, getattr(self.raw, attr) + value)

        if not skip_spells:
            spells = ensure_mapping(bonuses.get("spells"), "bonuses.spells", context)
            for spell_name, spell_data in spells.items():
                self._merge_spell(str(spell_name), spell_data, multiplier, context)

        for key, attr in _STATUS_STATS:
            if key in bonuses:
                value = ensure_number(bonuses[key], key, 0, context)
                current = getattr(self.raw, attr) or 0
                setattr(self.raw, attr, current + value * multiplier)

    def _merge_spell(
        self,
        name: str,
        data: Any,
        multiplier: float,
        context: dict[str, Any],
    ) -> None:
        """Merges one spell entry: highest chance, summed damage, first element."""
        if not isinstance(data, Mapping):
            log_debug(f"Spell {name} payload is not a mapping, skipping", context)
            return
        chance, damage = data.get("chance"), data.get("damage")
        if not is_number(chance) or not is_number(damage):
            log_debug(
                f"Spell {name} is missing a numeric chance or damage, skipping",
                {**context, "spell": name},
            )
            return

        if self.raw.spells is None:
            self.raw.spells = {}
        existing = self.raw.spells.get(name)
        if existing is not None:
            self.raw.spells[name] = SpellStats(
                chance=max(existing.chance, chance),
                damage=existing.damage + damage * multiplier,
                element=existing.element,
            )
        else:
            self.raw.spells[name] = SpellStats(
                chance=chance,
                damage=damage * multiplier,
                element=_spell_element(name, data.get("element")),
            )

    @staticmethod
    def _template_attack(weapon: EquippedItem) -> float:
        """Base attack of the weapon's template, or fist damage."""
        if weapon.template is None:
            return FIST_DAMAGE
        base_stats = ensure_mapping(
            weapon.template.base_stats, "template.baseStats", {"item": weapon.id}
        )
        for key in ("attack", "damage"):
            value = base_stats.get(key)
            # A zero attack falls through to the next key, as a missing one does.
            if is_number(value) and value:
                return value
        return FIST_DAMAGE


def _spell_element(name: str, declared: Any) -> Element:
    """Element for a new spell: declared on the item, else the spell table."""
    if isinstance(declared, str) and declared in _ELEMENT_VALUES:
        return Element(declared)
    return SPELL_ELEMENTS.get(name, DEFAULT_SPELL_ELEMENT)


def aggregate_raw_stats(items: Sequence[EquippedItem]) -> RawStats:
    """
    Folds equipped items into raw, unscaled totals.

    Args:
        items (Sequence[EquippedItem]):
            The character's equipped items, in inventory order.

    Returns:
        RawStats:
            The aggregated totals.

    """
    return StatAggregator().aggregate(items)
