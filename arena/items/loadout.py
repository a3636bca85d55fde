"""
Weapon hand resolution.

Decides which equipped weapons contribute to damage: a two-handed weapon
excludes every other weapon, otherwise the right hand (or the first weapon)
is the main hand and a distinct left-hand weapon is the off hand. Conflicting
loadouts are reported by ``validate_loadout`` but never rejected; the
resolution rules above always produce a usable result.
"""

from dataclasses import dataclass, field
from typing import Sequence

from core.constants import Hand

from .equipment import EquippedItem


@dataclass(frozen=True)
class WeaponLoadout:
    """The weapons that supply damage, after hand resolution."""

    main_hand: EquippedItem | None = None
    off_hand: EquippedItem | None = None
    two_handed: bool = False
    # Weapons that are equipped but excluded from damage aggregation.
    ignored: tuple[EquippedItem, ...] = field(default_factory=tuple)

    @property
    def is_unarmed(self) -> bool:
        return self.main_hand is None


@dataclass(frozen=True)
class LoadoutIssue:
    """A constraint violation found in an equipment set."""

    code: str
    message: str
    items: tuple[str, ...] = ()


def equipped_weapons(items: Sequence[EquippedItem]) -> list[EquippedItem]:
    """Returns the weapons that are equipped, in list order."""
    return [item for item in items if item.is_weapon and item.equipped]


def resolve_weapon_loadout(items: Sequence[EquippedItem]) -> WeaponLoadout:
    """
    Resolves which weapons occupy the main and off hand.

    Args:
        items (Sequence[EquippedItem]):
            The character's items, in inventory order.

    Returns:
        WeaponLoadout:
            The resolved loadout. Unarmed when no weapon is equipped.

    """
    weapons = equipped_weapons(items)
    if not weapons:
        return WeaponLoadout()

    two_handed = next((w for w in weapons if w.wields_two_handed), None)
    if two_handed is not None:
        return WeaponLoadout(
            main_hand=two_handed,
            two_handed=True,
            ignored=tuple(w for w in weapons if w is not two_handed),
        )

    main_hand = next((w for w in weapons if w.equipped_hand == Hand.RIGHT), weapons[0])
    off_hand = next(
        (w for w in weapons if w.equipped_hand == Hand.LEFT and w is not main_hand),
        None,
    )
    return WeaponLoadout(
        main_hand=main_hand,
        off_hand=off_hand,
        ignored=tuple(w for w in weapons if w is not main_hand and w is not off_hand),
    )


def validate_loadout(items: Sequence[EquippedItem]) -> list[LoadoutIssue]:
    """
    Reports hand conflicts in an equipment set.

    Rules checked:
        1. A two-handed weapon cannot share the hands with another weapon.
        2. A two-handed weapon cannot be combined with a shield.
        3. A shield always goes in the left hand.
        4. No two items can claim the same hand.
        5. At most two weapons can be equipped.

    Args:
        items (Sequence[EquippedItem]):
            The character's items.

    Returns:
        list[LoadoutIssue]:
            Every violation found, empty for a valid loadout.

    """
    issues: list[LoadoutIssue] = []
    weapons = equipped_weapons(items)
    shields = [item for item in items if item.is_shield and item.equipped]
    two_handed = [w for w in weapons if w.wields_two_handed]

    if two_handed and len(weapons) > 1:
        issues.append(
            LoadoutIssue(
                code="two_handed_with_weapon",
                message="A two-handed weapon cannot be wielded with another weapon",
                items=tuple(w.label for w in weapons),
            )
        )
    if two_handed and shields:
        issues.append(
            LoadoutIssue(
                code="two_handed_with_shield",
                message="A two-handed weapon cannot be wielded with a shield",
                items=tuple(i.label for i in two_handed + shields),
            )
        )
    for shield in shields:
        if shield.equipped_hand not in (None, Hand.LEFT):
            issues.append(
                LoadoutIssue(
                    code="shield_not_left",
                    message="A shield must be held in the left hand",
                    items=(shield.label,),
                )
            )

    for hand in Hand:
        holders = [
            item
            for item in weapons + shields
            if item.equipped_hand == hand
            or (hand == Hand.LEFT and item.is_shield and item.equipped_hand is None)
        ]
        if len(holders) > 1:
            issues.append(
                LoadoutIssue(
                    code="hand_conflict",
                    message=f"More than one item occupies the {hand} hand",
                    items=tuple(i.label for i in holders),
                )
            )

    if len(weapons) > 2:
        issues.append(
            LoadoutIssue(
                code="too_many_weapons",
                message=f"{len(weapons)} weapons equipped, at most 2 allowed",
                items=tuple(w.label for w in weapons),
            )
        )
    return issues
