"""
Tests for the round-by-round combat simulation.
"""

import random

import pytest
from character.character_stats import DerivedStats
from combat.combat_log import (
    DeathFrame,
    EndBattleFrame,
    Rewards,
    RoundEndFrame,
    StatusCleanupFrame,
    StatusTickFrame,
)
from combat.combat_manager import CombatSimulator, run_combat
from combat.entities import CombatEntity, EnemySeed, PlayerSeed
from combat.settings import CombatSettings
from combat.strategies import DerivedStatsDamageStrategy, Exchange
from core.constants import CombatOutcome, StatusId
from core.error_handling import EncounterSetupError
from core.rng import ScriptedRandom
from effects.incapacitating_effect import StunEffect

NO_BLEED = CombatSettings(bleed_chance=0.0)


@pytest.fixture
def player():
    return PlayerSeed(id="hero", name="Hero", hp=20, damage=5, attack_type="slashes")


def enemy(hp, atk, index=0):
    return EnemySeed(id=f"enemy_rat_{index}", name="Rat", code="rat", hp=hp, damage=atk)


class StunningStrategy:
    """Player hits for 1 and always stuns; enemies hit for 1."""

    def exchange(self, attacker, target, rng):
        if attacker.is_player:
            return Exchange(amount=1, statuses=[StunEffect(duration=1)])
        return Exchange(amount=1)


# === Outcomes ===


def test_two_round_victory(player):
    rng = ScriptedRandom([])
    result = run_combat(player, [enemy(10, 3)], rng, settings=NO_BLEED)

    assert result.outcome == CombatOutcome.VICTORY
    assert result.total_rounds == 2
    assert rng.consumed == 0

    first, second = result.rounds
    assert [a.results[0].amount for a in first.actions] == [5, 3]
    assert first.actions[0].results[0].hp_after == 5
    assert first.actions[1].results[0].hp_after == 17
    assert len(second.actions) == 1
    assert second.actions[0].results[0].kill
    assert second.actions[0].results[0].hp_after == 0

    assert isinstance(first.end_frames[-1], RoundEndFrame)
    assert isinstance(second.end_frames[-1], EndBattleFrame)
    assert second.end_frames[-1].outcome == CombatOutcome.VICTORY
    assert result.rewards == Rewards(gold=0, xp=0)


def test_action_labels(player):
    result = run_combat(player, [enemy(10, 3)], settings=NO_BLEED, log_id="run_1")
    player_action, enemy_action = result.rounds[0].actions
    assert player_action.action_id == "player_attack_1_run_1"
    assert player_action.ability == "basic_slash"
    assert player_action.tags == ["melee", "physical", "player"]
    assert player_action.targets == ["enemy_rat_0"]
    assert enemy_action.action_id == "enemy_attack_1_run_1"
    assert enemy_action.ability == "basic_claw"
    assert enemy_action.actor_id == "enemy_rat_0"


def test_result_header(player):
    result = run_combat(player, [enemy(10, 3)], settings=NO_BLEED)
    assert result.version == "v2-frames"
    assert result.tick_policy == "end_of_round"
    assert result.log_id == "run_hero"
    assert [(a.id, a.is_player, a.hp, a.max_hp) for a in result.actors] == [
        ("hero", True, 20, 20),
        ("enemy_rat_0", False, 10, 10),
    ]


def test_player_death_is_defeat(player):
    result = run_combat(player, [enemy(100, 15)], settings=NO_BLEED)
    assert result.outcome == CombatOutcome.DEFEAT
    assert result.total_rounds == 2
    assert result.rewards is None
    assert result.rounds[-1].actions[-1].results[0].kill
    assert result.rounds[-1].end_frames[-1] == EndBattleFrame(outcome=CombatOutcome.DEFEAT)


def test_round_cap_is_defeat():
    tank = PlayerSeed(id="hero", name="Hero", hp=100, damage=1)
    result = run_combat(tank, [enemy(10_000, 0)], settings=NO_BLEED)
    assert result.outcome == CombatOutcome.DEFEAT
    assert result.total_rounds == 50
    # Zero attack still deals the minimum of one.
    assert result.rounds[-1].actions[-1].results[0].hp_after == 50


def test_custom_round_cap(player):
    settings = CombatSettings(max_rounds=3, bleed_chance=0.0)
    result = run_combat(player, [enemy(10_000, 0)], settings=settings)
    assert result.total_rounds == 3
    assert result.outcome == CombatOutcome.DEFEAT


def test_enemies_are_fought_in_order(player):
    result = run_combat(player, [enemy(5, 1, 0), enemy(5, 1, 1)], settings=NO_BLEED)
    assert result.outcome == CombatOutcome.VICTORY
    targets = [round_.actions[0].targets[0] for round_ in result.rounds]
    assert targets == ["enemy_rat_0", "enemy_rat_1"]
    # The second enemy counters in the round the first one dies.
    assert result.rounds[0].actions[1].actor_id == "enemy_rat_1"


def test_rewards_rolled_on_victory_only(player):
    def roller(rng):
        return Rewards(gold=int(rng.random() * 100), xp=7)

    won = run_combat(
        player, [enemy(5, 1)], ScriptedRandom([0.5]), settings=NO_BLEED, reward_roller=roller
    )
    assert won.rewards == Rewards(gold=50, xp=7)
    assert won.rounds[-1].end_frames[-1].rewards == won.rewards

    lost = run_combat(
        player, [enemy(500, 50)], ScriptedRandom([]), settings=NO_BLEED, reward_roller=roller
    )
    assert lost.rewards is None


def test_setup_errors(player):
    with pytest.raises(EncounterSetupError):
        CombatSimulator(player, [])
    with pytest.raises(EncounterSetupError):
        CombatSimulator(player, [enemy(5, 1, 0), enemy(5, 1, 0)])


def test_simulator_runs_once(player):
    simulator = CombatSimulator(player, [enemy(5, 1)], settings=NO_BLEED)
    simulator.run()
    with pytest.raises(RuntimeError):
        simulator.run()


def test_negative_damage_never_heals():
    rat = CombatEntity(enemy(10, 1), is_player=False)
    assert rat.take_damage(-5) == (10, 10)
    assert rat.take_damage(4) == (10, 6)
    assert rat.current_hp <= rat.max_hp


# === Statuses ===


def test_bleed_ticks_at_end_of_round(player):
    rng = ScriptedRandom([0.1, 0.9, 0.9, 0.9, 0.9])
    result = run_combat(player, [enemy(30, 3)], rng)

    assert result.outcome == CombatOutcome.VICTORY
    assert result.total_rounds == 5
    assert rng.remaining == 0

    applied = result.rounds[0].actions[0].results[0].status_applied
    assert [(s.id, s.stacks, s.duration) for s in applied] == [(StatusId.BLEED, 1, 2)]

    tick = result.rounds[0].end_frames[0]
    assert tick == StatusTickFrame(
        status=StatusId.BLEED,
        target_id="enemy_rat_0",
        amount=3,
        hp_before=25,
        hp_after=22,
        stacks_before=1,
        duration_after=1,
        expired=False,
        lethal=False,
    )
    assert result.rounds[1].end_frames[0].expired
    assert result.rounds[1].end_frames[0].hp_after == 14
    assert result.rounds[2].end_frames == [RoundEndFrame(round_number=3)]


def test_reapplied_bleed_does_not_stack():
    weak = PlayerSeed(id="hero", name="Hero", hp=100, damage=1)
    settings = CombatSettings(max_rounds=2, bleed_chance=1.0)
    result = run_combat(weak, [enemy(100, 0)], ScriptedRandom([0.0, 0.0]), settings=settings)

    ticks = [frame for round_ in result.rounds for frame in round_.frames_of(StatusTickFrame)]
    assert [tick.amount for tick in ticks] == [10, 10]
    assert [tick.stacks_before for tick in ticks] == [1, 1]
    assert [tick.duration_after for tick in ticks] == [1, 1]
    reapplied = result.rounds[1].actions[0].results[0].status_applied
    assert [(s.stacks, s.duration) for s in reapplied] == [(1, 2)]


def test_lethal_tick_records_death_and_cleanup(player):
    strong = PlayerSeed(id="hero", name="Hero", hp=20, damage=10)
    result = run_combat(strong, [enemy(11, 3)], ScriptedRandom([0.1]))

    assert result.outcome == CombatOutcome.VICTORY
    assert result.total_rounds == 1
    frames = result.rounds[0].end_frames
    assert [type(frame) for frame in frames] == [
        StatusTickFrame,
        DeathFrame,
        StatusCleanupFrame,
        RoundEndFrame,
        EndBattleFrame,
    ]
    assert frames[0].lethal
    assert frames[1] == DeathFrame(targets=["enemy_rat_0"], cause="bleed")
    assert frames[2].statuses == [StatusId.BLEED]


def test_killing_blow_does_not_apply_statuses(player):
    result = run_combat(player, [enemy(5, 1)], ScriptedRandom([0.1]))
    hit = result.rounds[0].actions[0].results[0]
    assert hit.kill
    assert hit.status_applied == []
    assert result.rounds[0].frames_of(DeathFrame) == []
    assert result.rounds[0].end_frames[0] == RoundEndFrame(round_number=1)


def test_stunned_actor_skips_its_action(player):
    result = run_combat(player, [enemy(3, 4)], strategy=StunningStrategy())
    first = result.rounds[0]
    assert first.actions[1].skipped
    assert first.actions[1].results == []
    assert first.end_frames[0].status == StatusId.STUN
    assert first.end_frames[0].amount == 0
    assert first.end_frames[0].expired
    assert result.outcome == CombatOutcome.VICTORY
    assert result.total_rounds == 3


# === Strategies ===


def test_derived_strategy_applies_burn_snapshot():
    stats = DerivedStats(
        health=50,
        armor=0,
        intelligence=10,
        physical_damage_min=10,
        physical_damage_max=10,
        fire_damage=8,
        burn_chance=1.0,
    )
    hero = PlayerSeed.from_stats("hero", "Hero", stats, level=1)
    settings = CombatSettings(max_rounds=1)
    rng = ScriptedRandom([0.5] * 12)

    result = run_combat(
        hero,
        [enemy(30, 4)],
        rng,
        strategy=DerivedStatsDamageStrategy(settings),
        settings=settings,
    )

    assert rng.remaining == 0
    attack, counter = result.rounds[0].actions
    assert attack.results[0].amount == 10
    assert attack.results[0].breakdown.physical == 10
    assert [s.id for s in attack.results[0].status_applied] == [StatusId.BURN]
    assert attack.results[0].status_applied[0].duration == 3
    assert counter.results[0].hp_after == 46
    tick = result.rounds[0].end_frames[0]
    # floor(8 * 0.25 + 10 * 0.05)
    assert (tick.status, tick.amount, tick.hp_after) == (StatusId.BURN, 2, 18)
    assert result.outcome == CombatOutcome.DEFEAT


def test_derived_strategy_log_is_consistent():
    stats = DerivedStats(
        health=60,
        armor=10,
        physical_damage_min=4,
        physical_damage_max=9,
        crit_chance=0.2,
        dodge_chance=0.1,
        poison_chance=0.2,
        poison_damage=5,
        stun_chance=0.1,
    )
    hero = PlayerSeed.from_stats("hero", "Hero", stats, level=2)
    result = run_combat(
        hero,
        [enemy(40, 6, 0), enemy(25, 4, 1)],
        random.Random(3),
        strategy=DerivedStatsDamageStrategy(),
    )
    for round_ in result.rounds:
        for action in round_.actions:
            for hit in action.results:
                if hit.missed:
                    assert hit.amount == 0
                    assert hit.hp_before == hit.hp_after
                else:
                    breakdown = hit.breakdown
                    assert hit.amount == breakdown.physical + breakdown.elemental + breakdown.spell
                    assert hit.hp_after == max(0, hit.hp_before - hit.amount)


# === Determinism ===


def test_identical_seeds_give_identical_logs(player):
    enemies = [enemy(30, 3, 0), enemy(20, 2, 1)]
    first = run_combat(player, enemies, random.Random(42))
    second = run_combat(player, enemies, random.Random(42))
    assert first.to_payload() == second.to_payload()


def test_seeds_are_not_mutated(player):
    enemies = [enemy(30, 3)]
    run_combat(player, enemies, random.Random(1))
    assert enemies[0].hp == 30
    assert player.hp == 20
