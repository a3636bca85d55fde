"""
Combat entity module for the combat engine.

Seeds are the immutable descriptions a caller hands to the simulator; a
``CombatEntity`` is the mutable state built from a seed for the lifetime of a
single run and discarded when the run ends.
"""

from typing import Optional

from character.character_stats import DerivedStats
from character.stat_deriver import flat_stats
from core.constants import DEFAULT_ATTACK_TYPE
from effects.effect_manager import StatusEffectManager
from pydantic import BaseModel, ConfigDict, Field

from combat.combat_log import ActorSnapshot


class EntitySeed(BaseModel):
    """
    The starting description of a combatant.

    ``damage`` is what the flat-damage strategy uses; ``stats`` is what the
    derived-stats strategy uses. When ``stats`` is omitted, flat stats are
    built from ``hp`` and ``damage``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    code: Optional[str] = None
    hp: int = Field(
        ge=1,
        description="Starting and maximum hit points.",
    )
    damage: int = Field(
        ge=0,
        description="Flat damage per attack.",
    )
    level: int = Field(
        default=1,
        ge=0,
        description="Level used for armor mitigation when this entity attacks.",
    )
    attack_type: str = DEFAULT_ATTACK_TYPE
    stats: Optional[DerivedStats] = None

    def resolved_stats(self) -> DerivedStats:
        if self.stats is not None:
            return self.stats
        return flat_stats(self.hp, self.damage, self.attack_type)


class PlayerSeed(EntitySeed):
    @classmethod
    def from_stats(
        cls,
        id: str,
        name: str,
        stats: DerivedStats,
        level: int,
    ) -> "PlayerSeed":
        """Seeds a player from derived stats; flat damage is the average hit."""
        return cls(
            id=id,
            name=name,
            hp=stats.health,
            damage=stats.average_damage,
            level=level,
            attack_type=stats.attack_type,
            stats=stats,
        )


class EnemySeed(EntitySeed):
    pass


class CombatEntity:
    """The mutable state of one combatant during a run."""

    def __init__(self, seed: EntitySeed, is_player: bool, max_stacks: int = 3) -> None:
        self.id: str = seed.id
        self.name: str = seed.name
        self.code: Optional[str] = seed.code
        self.max_hp: int = seed.hp
        self.current_hp: int = seed.hp
        self.damage: int = seed.damage
        self.level: int = seed.level
        self.attack_type: str = seed.attack_type
        self.stats: DerivedStats = seed.resolved_stats()
        self.is_player: bool = is_player
        self.is_alive: bool = True
        self.effects = StatusEffectManager(self.id, max_stacks)

    def take_damage(self, amount: int) -> tuple[int, int]:
        """
        Removes hit points, never going below zero. A negative amount is
        treated as zero and never heals.

        Returns:
            tuple[int, int]: Hit points before and after the damage.

        """
        hp_before = self.current_hp
        self.current_hp = max(0, hp_before - max(0, amount))
        if self.current_hp <= 0:
            self.is_alive = False
        return hp_before, self.current_hp

    def snapshot(self) -> ActorSnapshot:
        return ActorSnapshot(
            id=self.id,
            name=self.name,
            code=self.code,
            is_player=self.is_player,
            max_hp=self.max_hp,
            hp=self.current_hp,
        )

    def __repr__(self) -> str:
        return f"CombatEntity({self.id!r}, hp={self.current_hp}/{self.max_hp})"
