"""
Character module for the combat engine.

A ``Character`` is the read-only snapshot the data store hands to the engine:
identity, level and equipped items. Its stats are never stored; they are
recomputed from the items on every query.
"""

from typing import Any, Sequence

from core.constants import (
    DEFAULT_ATTACK_TYPE,
    FLAT_PLAYER_BASE_DAMAGE,
    FLAT_PLAYER_BASE_HP,
)
from core.error_handling import ensure_mapping, is_number
from items.equipment import EquippedItem
from pydantic import BaseModel, ConfigDict, Field

from .character_stats import DerivedStats
from .stat_aggregator import aggregate_raw_stats
from .stat_deriver import derive_from_raw


class FlatProfile(BaseModel):
    """Health and damage of a character under the flat-damage orchestration."""

    model_config = ConfigDict(frozen=True)

    hp: int
    damage: int


class Character(BaseModel):
    """
    Represents a player character as supplied by the data store.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(
        description="Unique identifier of the character.",
    )
    name: str = Field(
        description="Display name of the character.",
    )
    level: int = Field(
        default=1,
        ge=0,
        description="Character level, used by soft caps and armor mitigation.",
    )
    items: list[EquippedItem] = Field(
        default_factory=list,
        description="Items owned by the character, in inventory order.",
    )
    attack_type: str | None = Field(
        default=None,
        alias="attackType",
        description="Display label for attacks; read from the main weapon when unset.",
    )

    @property
    def equipped_items(self) -> list[EquippedItem]:
        """Returns the items currently equipped."""
        return [item for item in self.items if item.equipped]

    def resolve_attack_type(self) -> str:
        """
        Returns the attack label, falling back to the weapon template's.

        Returns:
            str: The explicit label, the first equipped weapon's
            ``baseStats.attackType``, or the default.

        """
        if self.attack_type:
            return self.attack_type
        for item in self.equipped_items:
            if item.is_weapon and item.template is not None:
                base_stats = ensure_mapping(item.template.base_stats, "template.baseStats")
                label = base_stats.get("attackType")
                if isinstance(label, str) and label:
                    return label
        return DEFAULT_ATTACK_TYPE

    def derive_stats(self) -> DerivedStats:
        """Derives combat-ready stats from the equipped items."""
        return derive_stats(self.equipped_items, self.level, self.resolve_attack_type())

    def flat_profile(self) -> FlatProfile:
        """Computes the flat-damage profile from the equipped items."""
        return flat_player_profile(self.equipped_items)


def derive_stats(
    equipped_items: Sequence[EquippedItem],
    level: int,
    attack_type: str = DEFAULT_ATTACK_TYPE,
) -> DerivedStats:
    """
    Derives combat-ready stats from equipped items.

    Args:
        equipped_items (Sequence[EquippedItem]):
            The equipped items, in inventory order.
        level (int):
            The character level.
        attack_type (str):
            Display label for the character's attacks.

    Returns:
        DerivedStats:
            The derived stats.

    """
    return derive_from_raw(aggregate_raw_stats(equipped_items), level, attack_type)


def flat_player_profile(equipped_items: Sequence[EquippedItem]) -> FlatProfile:
    """
    Computes a player's health and damage for the flat-damage orchestration.

    Starts from 20 hp and 5 damage and adds every numeric ``hp``/``damage``
    found in the template base stats and in the bonus payload of each item.

    Args:
        equipped_items (Sequence[EquippedItem]):
            The equipped items.

    Returns:
        FlatProfile:
            The resulting health and damage.

    """
    hp = FLAT_PLAYER_BASE_HP
    damage = FLAT_PLAYER_BASE_DAMAGE
    for item in equipped_items:
        sources: list[Any] = [item.bonuses]
        if item.template is not None:
            sources.insert(0, item.template.base_stats)
        for source in sources:
            payload = ensure_mapping(source, "item stats", {"item": item.id})
            if is_number(payload.get("hp")):
                hp += payload["hp"]
            if is_number(payload.get("damage")):
                damage += payload["damage"]
    return FlatProfile(hp=int(hp), damage=int(damage))
