"""
Combat system module for the combat engine.

This module handles the resolution of single exchanges, the damage strategies
the simulator can use, the round-by-round combat simulation and its log, and
the dungeon encounter setup that feeds it.
"""

from .combat_log import (
    ActionResult,
    ActorSnapshot,
    CombatAction,
    CombatResult,
    CombatRound,
    DamageBreakdown,
    DeathFrame,
    EndBattleFrame,
    EndFrame,
    Rewards,
    RoundEndFrame,
    StatusCleanupFrame,
    StatusTickFrame,
)
from .damage import AttackResolver, AttackResult, StatusProcs, resolve_attack
from .settings import CombatSettings
from .entities import CombatEntity, EnemySeed, EntitySeed, PlayerSeed
from .strategies import (
    DamageStrategy,
    DerivedStatsDamageStrategy,
    Exchange,
    FlatDamageStrategy,
)
from .combat_manager import CombatSimulator, run_combat
from .dungeon import (
    DungeonRewards,
    DungeonScaling,
    DungeonTemplate,
    EnemyTemplate,
    Wave,
    WaveEnemyRef,
)
from .encounter import (
    DungeonPreview,
    RewardRange,
    ScaledEnemy,
    build_enemy_seeds,
    check_level_access,
    preview_dungeon,
    roll_rewards,
    run_dungeon,
    scale_enemy,
    scaled_reward_range,
)

__all__ = [
    # Import from combat_log.py
    "ActionResult",
    "ActorSnapshot",
    "CombatAction",
    "CombatResult",
    "CombatRound",
    "DamageBreakdown",
    "DeathFrame",
    "EndBattleFrame",
    "EndFrame",
    "Rewards",
    "RoundEndFrame",
    "StatusCleanupFrame",
    "StatusTickFrame",
    # Import from damage.py
    "AttackResolver",
    "AttackResult",
    "StatusProcs",
    "resolve_attack",
    # Import from settings.py
    "CombatSettings",
    # Import from entities.py
    "CombatEntity",
    "EntitySeed",
    "EnemySeed",
    "PlayerSeed",
    # Import from strategies.py
    "DamageStrategy",
    "DerivedStatsDamageStrategy",
    "Exchange",
    "FlatDamageStrategy",
    # Import from combat_manager.py
    "CombatSimulator",
    "run_combat",
    # Import from dungeon.py
    "DungeonRewards",
    "DungeonScaling",
    "DungeonTemplate",
    "EnemyTemplate",
    "Wave",
    "WaveEnemyRef",
    # Import from encounter.py
    "DungeonPreview",
    "RewardRange",
    "ScaledEnemy",
    "build_enemy_seeds",
    "check_level_access",
    "preview_dungeon",
    "roll_rewards",
    "run_dungeon",
    "scale_enemy",
    "scaled_reward_range",
]
