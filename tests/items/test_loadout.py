"""
Tests for equipment records and weapon hand resolution.
"""

import pytest
from core.constants import Hand
from items.equipment import EquippedItem, ItemTemplate, load_equipped_items
from items.loadout import equipped_weapons, resolve_weapon_loadout, validate_loadout


def weapon(item_id, hand=None, two_handed=False, equipped=True):
    return EquippedItem(
        id=item_id,
        slot="weapon",
        equipped_hand=hand,
        is_two_handed=two_handed,
        equipped=equipped,
    )


@pytest.fixture
def shield():
    return EquippedItem(id="shield", slot="shield", equipped_hand=Hand.LEFT)


def test_load_equipped_items_accepts_camel_case_records():
    items = load_equipped_items(
        [
            {
                "id": "sword",
                "slot": "weapon",
                "equippedHand": "right",
                "isTwoHanded": False,
                "template": {"code": "basic_sword", "baseStats": {"attack": 6}},
                "bonuses": {"primary": {"minAttack": 3}},
            }
        ]
    )
    assert items[0].equipped_hand == Hand.RIGHT
    assert items[0].template.base_stats == {"attack": 6}
    assert items[0].is_weapon


def test_unknown_hand_label_is_treated_as_no_hand():
    item = EquippedItem(id="sword", slot="weapon", equipped_hand="both")
    assert item.equipped_hand is None


def test_template_flag_makes_item_two_handed():
    item = EquippedItem(
        id="axe",
        slot="weapon",
        template=ItemTemplate(code="great_axe", is_two_handed=True),
    )
    assert item.wields_two_handed


def test_equipped_weapons_skips_unequipped(shield):
    items = [weapon("a"), weapon("b", equipped=False), shield]
    assert [w.id for w in equipped_weapons(items)] == ["a"]


def test_no_weapon_is_unarmed(shield):
    loadout = resolve_weapon_loadout([shield])
    assert loadout.is_unarmed
    assert loadout.off_hand is None


def test_right_hand_is_main_hand():
    left = weapon("dagger", Hand.LEFT)
    right = weapon("sword", Hand.RIGHT)
    loadout = resolve_weapon_loadout([left, right])
    assert loadout.main_hand is right
    assert loadout.off_hand is left
    assert loadout.ignored == ()


def test_first_weapon_is_main_hand_without_right_hand():
    first = weapon("first")
    second = weapon("second", Hand.LEFT)
    loadout = resolve_weapon_loadout([first, second])
    assert loadout.main_hand is first
    assert loadout.off_hand is second


def test_main_hand_is_never_also_the_off_hand():
    only = weapon("dagger", Hand.LEFT)
    loadout = resolve_weapon_loadout([only])
    assert loadout.main_hand is only
    assert loadout.off_hand is None


def test_two_handed_weapon_excludes_every_other_weapon():
    dagger = weapon("dagger", Hand.LEFT)
    greatsword = weapon("greatsword", two_handed=True)
    sword = weapon("sword", Hand.RIGHT)
    loadout = resolve_weapon_loadout([dagger, greatsword, sword])
    assert loadout.two_handed
    assert loadout.main_hand is greatsword
    assert loadout.off_hand is None
    assert set(w.id for w in loadout.ignored) == {"dagger", "sword"}


def test_valid_loadout_has_no_issues(shield):
    assert validate_loadout([weapon("sword", Hand.RIGHT), shield]) == []


def test_two_handed_with_shield_is_reported(shield):
    codes = {issue.code for issue in validate_loadout([weapon("axe", two_handed=True), shield])}
    assert "two_handed_with_shield" in codes


def test_two_handed_with_other_weapon_is_reported():
    items = [weapon("axe", two_handed=True), weapon("dagger", Hand.LEFT)]
    codes = {issue.code for issue in validate_loadout(items)}
    assert "two_handed_with_weapon" in codes


def test_shield_in_right_hand_is_reported():
    shield = EquippedItem(id="shield", slot="shield", equipped_hand=Hand.RIGHT)
    codes = {issue.code for issue in validate_loadout([shield])}
    assert codes == {"shield_not_left"}


def test_left_weapon_and_shield_conflict(shield):
    issues = validate_loadout([weapon("dagger", Hand.LEFT), shield])
    assert [issue.code for issue in issues] == ["hand_conflict"]
    assert set(issues[0].items) == {"dagger", "shield"}


def test_handless_shield_counts_as_left_hand():
    shield = EquippedItem(id="shield", slot="shield")
    codes = {issue.code for issue in validate_loadout([weapon("dagger", Hand.LEFT), shield])}
    assert "hand_conflict" in codes


def test_too_many_weapons_is_reported():
    items = [weapon("a", Hand.RIGHT), weapon("b", Hand.LEFT), weapon("c")]
    codes = {issue.code for issue in validate_loadout(items)}
    assert "too_many_weapons" in codes
