"""
Equipment records consumed by stat aggregation.

Items arrive as plain records from the data store. Only the structural fields
(slot, equipped flag, hand, two-handed flag) are validated here; the bonus
payload is kept as an untyped mapping and read leniently during aggregation.
"""

from typing import Any

from core.constants import Hand, ItemSlot
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemTemplate(BaseModel):
    """
    Represents the shared definition of an item.

    The template carries the base stats every copy of the item starts with,
    such as the base attack of a weapon or its attack-type label.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: str = Field(
        default="",
        description="Stable item code (e.g. 'basic_sword').",
    )
    name: str = Field(
        default="",
        description="Display name of the item.",
    )
    slot: str | None = Field(
        default=None,
        description="The slot the template is designed for.",
    )
    base_stats: Any = Field(
        default_factory=dict,
        alias="baseStats",
        description="Raw base stats of the template (e.g. attack, attackType).",
    )
    is_two_handed: bool = Field(
        default=False,
        alias="isTwoHanded",
        description="Whether the template requires both hands.",
    )


class EquippedItem(BaseModel):
    """
    Represents one item owned by a character, as stored in its inventory.

    The ``bonuses`` payload is whatever the item roll produced; it may be
    partially populated or contain wrong types, which aggregation tolerates.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(
        default="",
        description="Unique identifier of the owned item.",
    )
    slot: str = Field(
        description="The slot the item occupies (e.g. 'weapon', 'chest').",
    )
    equipped: bool = Field(
        default=True,
        description="Whether the item is currently equipped.",
    )
    equipped_hand: Hand | None = Field(
        default=None,
        alias="equippedHand",
        description="The hand holding the item, for weapons and shields.",
    )
    is_two_handed: bool = Field(
        default=False,
        alias="isTwoHanded",
        description="Whether this particular item is wielded with both hands.",
    )
    template: ItemTemplate | None = Field(
        default=None,
        description="The template the item was created from.",
    )
    bonuses: Any = Field(
        default_factory=dict,
        description="Raw bonus payload rolled for this item.",
    )

    @field_validator("slot", mode="before")
    @classmethod
    def _normalize_slot(cls, value: Any) -> Any:
        if isinstance(value, ItemSlot):
            return value.value
        return value

    @field_validator("equipped_hand", mode="before")
    @classmethod
    def _normalize_hand(cls, value: Any) -> Any:
        # Unknown hand labels are treated as "no hand" rather than rejected.
        if isinstance(value, str) and value not in {h.value for h in Hand}:
            return None
        return value

    @property
    def is_weapon(self) -> bool:
        """Returns True if the item sits in the weapon slot."""
        return self.slot == ItemSlot.WEAPON.value

    @property
    def is_shield(self) -> bool:
        """Returns True if the item sits in the shield slot."""
        return self.slot == ItemSlot.SHIELD.value

    @property
    def wields_two_handed(self) -> bool:
        """Returns True if the item or its template is flagged two-handed."""
        return self.is_two_handed or bool(
            self.template is not None and self.template.is_two_handed
        )

    @property
    def label(self) -> str:
        """A human-readable label for log messages."""
        if self.template is not None and self.template.name:
            return self.template.name
        return self.id or self.slot


def load_equipped_items(records: list[dict[str, Any]]) -> list[EquippedItem]:
    """
    Builds equipment records from plain dictionaries.

    Args:
        records (list[dict[str, Any]]):
            The raw item records, using either camelCase or snake_case keys.

    Returns:
        list[EquippedItem]:
            The parsed items, in the given order.

    """
    return [EquippedItem.model_validate(record) for record in records]
