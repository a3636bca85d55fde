"""
Dungeon module for the combat engine.

Read-only records describing enemies and dungeons as the data store returns
them. Records accept the store's camelCase keys as well as snake_case names.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class EnemyTemplate(RecordModel):
    """An enemy as defined before any dungeon scaling."""

    id: str
    code: Optional[str] = None
    name: str
    hp: int = Field(
        ge=1,
        description="Base hit points.",
    )
    atk: int = Field(
        ge=0,
        description="Base attack damage.",
    )


class DungeonScaling(RecordModel):
    """Per-level multiplicative growth factors of a dungeon."""

    hp_growth: float = 0.0
    atk_growth: float = 0.0
    def_growth: float = 0.0
    loot_growth: float = 0.0


class DungeonRewards(RecordModel):
    """Base reward ranges, before loot growth is applied."""

    base_gold_min: int = 0
    base_gold_max: int = 0
    base_xp_min: int = 0
    base_xp_max: int = 0
    drops_json: Optional[Any] = Field(
        default=None,
        description="Opaque drop table, passed through untouched.",
    )


class WaveEnemyRef(RecordModel):
    id: str
    count: int = Field(default=1, ge=1)


class Wave(RecordModel):
    enemies: list[WaveEnemyRef] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return sum(ref.count for ref in self.enemies)


class DungeonTemplate(RecordModel):
    """
    A dungeon: its waves of enemies, how they scale and what it rewards.

    Only the first wave is fought by the simulator; the rest are exposed for
    previews.
    """

    id: str
    code: Optional[str] = None
    name: str
    waves: list[Wave] = Field(
        default_factory=list,
        alias="waveComp",
        description="Enemy composition of every wave.",
    )
    scaling: Optional[DungeonScaling] = None
    rewards: Optional[DungeonRewards] = None

    @property
    def first_wave(self) -> Optional[Wave]:
        return self.waves[0] if self.waves else None

    def enemy_ids(self) -> list[str]:
        """Every enemy id referenced by any wave, in first-seen order."""
        ids: dict[str, None] = {}
        for wave in self.waves:
            for ref in wave.enemies:
                ids.setdefault(ref.id)
        return list(ids)
