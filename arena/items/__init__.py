"""
Items module for the combat engine.

This module contains the equipment records read from the data store and the
hand-resolution rules that decide which weapons supply damage.
"""

from .equipment import EquippedItem, ItemTemplate, load_equipped_items
from .loadout import (
    LoadoutIssue,
    WeaponLoadout,
    equipped_weapons,
    resolve_weapon_loadout,
    validate_loadout,
)

__all__ = [
    "EquippedItem",
    "ItemTemplate",
    "load_equipped_items",
    "LoadoutIssue",
    "WeaponLoadout",
    "equipped_weapons",
    "resolve_weapon_loadout",
    "validate_loadout",
]
