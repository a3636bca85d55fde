"""
Tests for resolving a single exchange from derived stats.
"""

import random

import pytest
from character.character_stats import DerivedStats, SpellStats
from combat.damage import AttackResolver, AttackResult, resolve_attack
from core.constants import Element
from core.rng import ScriptedRandom


@pytest.fixture
def attacker():
    return DerivedStats(
        health=50,
        armor=0,
        physical_damage_min=10,
        physical_damage_max=20,
        elemental_damage=6,
        fire_damage=6,
        crit_chance=0.2,
        crit_multiplier=2.0,
        spell_crit_chance=0.1,
        spells={
            "fireball": SpellStats(chance=0.3, damage=10, element=Element.FIRE),
            "arcBolt": SpellStats(chance=0.5, damage=8, element=Element.LIGHTNING),
        },
        burn_chance=0.1,
        poison_chance=0.1,
        stun_chance=0.1,
    )


@pytest.fixture
def defender():
    # Against a level 0 attacker, 50 armor absorbs exactly half.
    return DerivedStats(health=40, armor=50, dodge_chance=0.1)


def test_dodge_consumes_one_draw_and_zeroes_everything(attacker, defender):
    rng = ScriptedRandom([0.05])
    result = AttackResolver(rng).resolve(attacker, defender, 0)
    assert rng.consumed == 1
    assert result == AttackResult.miss()
    assert not result.hit
    assert result.total_damage == 0
    assert not result.statuses.has_any
    assert not result.spell_proc


def test_plain_hit_draw_order(attacker, defender):
    # dodge, weapon, crit, fireball, arcBolt, burn, poison, stun
    rng = ScriptedRandom([0.5, 0.0, 0.9, 0.9, 0.9, 0.9, 0.9, 0.9])
    result = resolve_attack(attacker, defender, 0, rng)
    assert rng.remaining == 0
    assert result.hit
    assert not result.crit
    assert result.physical_damage == 5
    assert result.elemental_damage == 6
    assert result.spell_damage == 0
    assert result.total_damage == 11
    assert result.spell_name is None


def test_crit_multiplies_physical_and_elemental(attacker, defender):
    rng = ScriptedRandom([0.5, 0.999, 0.1, 0.9, 0.9, 0.9, 0.9, 0.9])
    result = resolve_attack(attacker, defender, 0, rng)
    assert result.crit
    # 20 * 2.0 * 0.5
    assert result.physical_damage == 20
    assert result.elemental_damage == 12


def test_first_spell_proc_stops_spell_rolls(attacker, defender):
    # dodge, weapon, crit, fireball proc, spell crit, burn, poison, stun
    rng = ScriptedRandom([0.5, 0.999, 0.1, 0.2, 0.05, 0.05, 0.5, 0.05])
    result = resolve_attack(attacker, defender, 0, rng)
    assert rng.remaining == 0
    assert result.spell_proc
    assert result.spell_name == "fireball"
    assert result.spell_crit
    assert result.spell_damage == 20
    assert result.total_damage == 20 + 12 + 20
    assert result.statuses.burn
    assert not result.statuses.poison
    assert result.statuses.stun


def test_later_spell_can_proc(attacker, defender):
    rng = ScriptedRandom([0.5, 0.0, 0.9, 0.4, 0.4, 0.5, 0.9, 0.9, 0.9])
    result = resolve_attack(attacker, defender, 0, rng)
    assert result.spell_name == "arcBolt"
    assert not result.spell_crit
    assert result.spell_damage == 8


def test_armor_is_measured_against_attacker_level(attacker, defender):
    low = resolve_attack(attacker, defender, 0, ScriptedRandom([0.5, 0.0] + [0.9] * 6))
    high = resolve_attack(attacker, defender, 10, ScriptedRandom([0.5, 0.0] + [0.9] * 6))
    # 10 * (1 - 50 / 150)
    assert high.physical_damage == 7
    assert high.physical_damage > low.physical_damage


@pytest.mark.parametrize("armor", [-55, -500])
def test_negative_armor_never_amplifies_damage(attacker, armor):
    cursed = DerivedStats(health=40, armor=armor)
    result = resolve_attack(attacker, cursed, 1, ScriptedRandom([0.5, 0.0] + [0.9] * 6))
    assert result.physical_damage == 10
    assert result.total_damage == 16


def test_components_round_half_up(attacker, defender):
    # weapon roll 15 -> 7.5 after armor
    rng = ScriptedRandom([0.5, 0.5, 0.9, 0.9, 0.9, 0.9, 0.9, 0.9])
    assert resolve_attack(attacker, defender, 0, rng).physical_damage == 8


def test_status_procs_use_independent_draws(attacker, defender):
    rng = ScriptedRandom([0.5, 0.0, 0.9, 0.9, 0.9, 0.9, 0.05, 0.9])
    statuses = resolve_attack(attacker, defender, 0, rng).statuses
    assert (statuses.burn, statuses.poison, statuses.stun) == (False, True, False)


def test_no_spells_skips_spell_draws(defender):
    plain = DerivedStats(health=10, armor=0, physical_damage_min=3, physical_damage_max=3)
    rng = ScriptedRandom([0.5, 0.5, 0.5, 0.5, 0.5, 0.5])
    result = resolve_attack(plain, defender, 0, rng)
    assert rng.remaining == 0
    assert result.total_damage == 2


def test_seeded_source_is_reproducible(attacker, defender):
    def run(seed):
        rng = random.Random(seed)
        return [resolve_attack(attacker, defender, 3, rng) for _ in range(20)]

    assert run(11) == run(11)
