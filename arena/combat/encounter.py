"""
Encounter module for the combat engine.

Turns dungeon and enemy records into a ready-to-run combat: level access
checks, enemy scaling by dungeon level, reward ranges and rolls, previews,
and ``run_dungeon`` which chains all of it into a simulation.
"""

from typing import TYPE_CHECKING, Mapping, Optional

from catchery import log_warning
from character.main import Character
from core.constants import ITEM_POWER_PER_LEVEL
from core.error_handling import (
    AccessDeniedError,
    EncounterSetupError,
    ReferenceNotFoundError,
)
from core.rng import RandomSource, ensure_source, roll_between
from core.utils import scale_by_growth
from pydantic import BaseModel, ConfigDict, Field

from combat.combat_log import CombatResult, Rewards
from combat.combat_manager import run_combat
from combat.dungeon import DungeonScaling, DungeonTemplate, EnemyTemplate
from combat.entities import EnemySeed, PlayerSeed
from combat.settings import CombatSettings
from combat.strategies import (
    DamageStrategy,
    DerivedStatsDamageStrategy,
    FlatDamageStrategy,
)

if TYPE_CHECKING:
    from core.content import ContentRepository


class RewardRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    gold_min: int
    gold_max: int
    xp_min: int
    xp_max: int


class ScaledEnemy(BaseModel):
    """An enemy template with its stats scaled to a dungeon level."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    code: Optional[str] = None
    base_hp: int
    base_atk: int
    scaled_hp: int
    scaled_atk: int
    count: int = 1


class DungeonPreview(BaseModel):
    """What a dungeon level holds, computed without simulating anything."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    level: int
    waves: list[list[ScaledEnemy]] = Field(default_factory=list)
    rewards: RewardRange
    required_item_power: int


def check_level_access(level: int, highest_cleared: int) -> None:
    """
    Checks that a dungeon level may be entered.

    Levels up to one past the highest cleared level are open.

    Raises:
        EncounterSetupError: If ``level`` is below 1.
        AccessDeniedError: If ``level`` is beyond ``highest_cleared + 1``.

    """
    if level < 1:
        raise EncounterSetupError(f"Dungeon level must be at least 1, got {level}")
    allowed = max(0, highest_cleared) + 1
    if level > allowed:
        log_warning(
            "Dungeon level not available",
            {"requested": level, "allowed": allowed},
        )
        raise AccessDeniedError(level, allowed)


def _scaling(dungeon: DungeonTemplate) -> DungeonScaling:
    return dungeon.scaling or DungeonScaling()


def scale_enemy(
    enemy: EnemyTemplate,
    scaling: DungeonScaling,
    level: int,
    count: int = 1,
) -> ScaledEnemy:
    return ScaledEnemy(
        id=enemy.id,
        name=enemy.name,
        code=enemy.code,
        base_hp=enemy.hp,
        base_atk=enemy.atk,
        scaled_hp=scale_by_growth(enemy.hp, scaling.hp_growth, level),
        scaled_atk=scale_by_growth(enemy.atk, scaling.atk_growth, level),
        count=count,
    )


def _lookup(enemies: Mapping[str, EnemyTemplate], enemy_id: str) -> EnemyTemplate:
    enemy = enemies.get(enemy_id)
    if enemy is None:
        log_warning("Wave references an unknown enemy", {"enemy_id": enemy_id})
        raise ReferenceNotFoundError("enemy", enemy_id)
    return enemy


def build_enemy_seeds(
    dungeon: DungeonTemplate,
    level: int,
    enemies: Mapping[str, EnemyTemplate],
) -> list[EnemySeed]:
    """
    Builds the scaled enemies of the dungeon's first wave.

    Every reference is expanded by its ``count``; entity ids are
    ``enemy_<templateId>_<index>`` with the index running over the whole wave.

    Raises:
        EncounterSetupError: If the dungeon has no waves or the first wave
            has no enemies.
        ReferenceNotFoundError: If the wave references an unknown enemy.

    """
    wave = dungeon.first_wave
    if wave is None:
        raise EncounterSetupError(f"Dungeon {dungeon.id} has no waves")
    if not wave.enemies:
        raise EncounterSetupError(f"The first wave of dungeon {dungeon.id} is empty")

    scaling = _scaling(dungeon)
    seeds: list[EnemySeed] = []
    for ref in wave.enemies:
        scaled = scale_enemy(_lookup(enemies, ref.id), scaling, level)
        for _ in range(ref.count):
            seeds.append(
                EnemySeed(
                    id=f"enemy_{scaled.id}_{len(seeds)}",
                    name=scaled.name,
                    code=scaled.code,
                    hp=max(1, scaled.scaled_hp),
                    damage=scaled.scaled_atk,
                    level=level,
                )
            )
    return seeds


def scaled_reward_range(dungeon: DungeonTemplate, level: int) -> RewardRange:
    """Reward bounds at ``level``; a dungeon without rewards yields zeros."""
    rewards = dungeon.rewards
    if rewards is None:
        return RewardRange(gold_min=0, gold_max=0, xp_min=0, xp_max=0)
    growth = _scaling(dungeon).loot_growth
    return RewardRange(
        gold_min=scale_by_growth(rewards.base_gold_min, growth, level),
        gold_max=scale_by_growth(rewards.base_gold_max, growth, level),
        xp_min=scale_by_growth(rewards.base_xp_min, growth, level),
        xp_max=scale_by_growth(rewards.base_xp_max, growth, level),
    )


def roll_rewards(
    dungeon: DungeonTemplate,
    level: int,
    rng: Optional[RandomSource] = None,
) -> Rewards:
    """
    Rolls gold then experience uniformly within the scaled ranges.

    A dungeon without rewards yields zeros and consumes no draws.
    """
    if dungeon.rewards is None:
        return Rewards()
    rng = ensure_source(rng)
    bounds = scaled_reward_range(dungeon, level)
    gold = roll_between(rng, bounds.gold_min, bounds.gold_max)
    xp = roll_between(rng, bounds.xp_min, bounds.xp_max)
    return Rewards(gold=gold, xp=xp)


def preview_dungeon(
    dungeon: DungeonTemplate,
    level: int,
    highest_cleared: int,
    enemies: Mapping[str, EnemyTemplate],
) -> DungeonPreview:
    """
    Describes a dungeon level: every wave scaled, the reward ranges and the
    recommended item power.

    Raises:
        AccessDeniedError: If the level is not open yet.
        ReferenceNotFoundError: If any wave references an unknown enemy.

    """
    check_level_access(level, highest_cleared)
    scaling = _scaling(dungeon)
    waves = [
        [scale_enemy(_lookup(enemies, ref.id), scaling, level, ref.count) for ref in wave.enemies]
        for wave in dungeon.waves
    ]
    return DungeonPreview(
        id=dungeon.id,
        name=dungeon.name,
        level=level,
        waves=waves,
        rewards=scaled_reward_range(dungeon, level),
        required_item_power=level * ITEM_POWER_PER_LEVEL,
    )


def player_seed_for(character: Character, strategy: DamageStrategy) -> PlayerSeed:
    """
    Seeds the player for the chosen strategy.

    The derived-stats strategy fights with the character's derived stats;
    any other strategy uses the flat profile built from its equipment.
    """
    if isinstance(strategy, DerivedStatsDamageStrategy):
        return PlayerSeed.from_stats(
            character.id,
            character.name,
            character.derive_stats(),
            character.level,
        )
    profile = character.flat_profile()
    return PlayerSeed(
        id=character.id,
        name=character.name,
        hp=profile.hp,
        damage=profile.damage,
        level=character.level,
        attack_type=character.resolve_attack_type(),
    )


def run_dungeon(
    repository: "ContentRepository",
    dungeon_id: str,
    level: int,
    character: Character,
    highest_cleared: int,
    strategy: Optional[DamageStrategy] = None,
    rng: Optional[RandomSource] = None,
    settings: Optional[CombatSettings] = None,
    log_id: Optional[str] = None,
) -> CombatResult:
    """
    Sets up and runs a fight against the first wave of a dungeon level.

    Args:
        repository (ContentRepository): Source of dungeon and enemy records.
        dungeon_id (str): The dungeon to enter.
        level (int): The dungeon level.
        character (Character): The fighting character.
        highest_cleared (int): The character's highest cleared level there.
        strategy (DamageStrategy | None): How exchanges are resolved; the
            flat-damage strategy when omitted.
        rng (RandomSource | None): The randomness source.
        settings (CombatSettings | None): Per-run tunables.
        log_id (str | None): Identifier embedded in the log.

    Returns:
        CombatResult: The log of the fight, with rewards on victory.

    Raises:
        ReferenceNotFoundError: If the dungeon or one of its enemies is unknown.
        AccessDeniedError: If the level is not open yet.
        EncounterSetupError: If the dungeon's first wave is unusable.

    """
    dungeon = repository.get_dungeon(dungeon_id)
    check_level_access(level, highest_cleared)

    enemies = build_enemy_seeds(dungeon, level, repository.enemies)
    settings = settings or CombatSettings()
    rng = ensure_source(rng)
    if strategy is None:
        strategy = FlatDamageStrategy.from_settings(settings)

    return run_combat(
        player_seed_for(character, strategy),
        enemies,
        rng=rng,
        strategy=strategy,
        settings=settings,
        log_id=log_id,
        reward_roller=lambda source: roll_rewards(dungeon, level, source),
    )
