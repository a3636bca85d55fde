"""
Combat log module for the combat engine.

Defines the replayable record of a combat run. A run is a list of rounds;
each round holds the actions taken in it and the frames of its end-of-round
phase. End-of-round frames form a closed union discriminated by ``type``, and
every model serialises with camelCase keys when dumped by alias.
"""

from typing import Annotated, Any, Literal, Optional, Union

from core.constants import LOG_VERSION, TICK_POLICY, CombatOutcome, StatusId
from effects.base_effect import StatusSnapshot
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LogModel(BaseModel):
    """Base for every log record: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Action Phase ===


class DamageBreakdown(LogModel):
    """Per-component damage of an exchange resolved from derived stats."""

    physical: int = 0
    elemental: int = 0
    spell: int = 0


class ActionResult(LogModel):
    """The effect of an action on a single target."""

    target_id: str = Field(
        description="The id of the entity that was targeted.",
    )
    amount: int = Field(
        default=0,
        description="Damage dealt to the target.",
    )
    crit: bool = False
    missed: bool = Field(
        default=False,
        description="True when the target dodged the action.",
    )
    hp_before: int = Field(
        description="Target hit points before the action.",
    )
    hp_after: int = Field(
        description="Target hit points after the action, never below zero.",
    )
    kill: bool = Field(
        default=False,
        description="Whether the action reduced the target to zero hit points.",
    )
    spell_name: Optional[str] = None
    spell_crit: bool = False
    breakdown: Optional[DamageBreakdown] = Field(
        default=None,
        description="Damage components, when the exchange used derived stats.",
    )
    status_applied: list[StatusSnapshot] = Field(
        default_factory=list,
        description="Statuses applied to the target, as carried after application.",
    )


class CombatAction(LogModel):
    """One actor acting against its targets."""

    action_id: str
    actor_id: str
    ability: str
    element: str
    targets: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    results: list[ActionResult] = Field(default_factory=list)
    skipped: bool = Field(
        default=False,
        description="True when a status prevented the actor from acting.",
    )

    @property
    def total_damage(self) -> int:
        return sum(result.amount for result in self.results)


# === End Of Round Phase ===


class StatusTickFrame(LogModel):
    """A single status effect ticking on its carrier."""

    type: Literal["status_tick"] = "status_tick"
    status: StatusId
    target_id: str
    amount: int = 0
    hp_before: int
    hp_after: int
    stacks_before: int
    duration_after: int
    expired: bool = False
    lethal: bool = False


class DeathFrame(LogModel):
    """
    Entities killed during the end-of-round phase, and what killed them.

    Only end-of-round deaths produce this frame. A kill during the action
    phase is recorded on the hit itself through ``ActionResult.kill``, so
    finding every death means checking both.
    """

    type: Literal["death"] = "death"
    targets: list[str]
    cause: str


class StatusCleanupFrame(LogModel):
    """Statuses removed without ticking because their carrier is dead."""

    type: Literal["status_cleanup"] = "status_cleanup"
    targets: list[str]
    statuses: list[StatusId] = Field(default_factory=list)


class RoundEndFrame(LogModel):
    type: Literal["end_round"] = "end_round"
    round_number: int


class Rewards(LogModel):
    gold: int = 0
    xp: int = 0


class EndBattleFrame(LogModel):
    """Appended to the last round once the outcome is known."""

    type: Literal["end_battle"] = "end_battle"
    outcome: CombatOutcome
    rewards: Optional[Rewards] = None


EndFrame = Annotated[
    Union[StatusTickFrame, DeathFrame, StatusCleanupFrame, RoundEndFrame, EndBattleFrame],
    Field(discriminator="type"),
]


class CombatRound(LogModel):
    round_number: int
    actions: list[CombatAction] = Field(default_factory=list)
    end_frames: list[EndFrame] = Field(default_factory=list)

    def frames_of(self, frame_type: type) -> list[Any]:
        """Returns the end frames of the given class, in order."""
        return [frame for frame in self.end_frames if isinstance(frame, frame_type)]


# === Result ===


class ActorSnapshot(LogModel):
    """An entity as it stood when the combat started."""

    id: str
    name: str
    code: Optional[str] = None
    is_player: bool
    max_hp: int
    hp: int


class CombatResult(LogModel):
    """
    The complete, replayable record of a combat run.

    ``rewards`` is only set on victory. The last round carries an
    ``EndBattleFrame`` repeating the outcome and rewards.
    """

    version: str = LOG_VERSION
    log_id: str
    tick_policy: str = TICK_POLICY
    outcome: CombatOutcome
    total_rounds: int
    actors: list[ActorSnapshot] = Field(default_factory=list)
    rounds: list[CombatRound] = Field(default_factory=list)
    rewards: Optional[Rewards] = None

    @property
    def is_victory(self) -> bool:
        return self.outcome == CombatOutcome.VICTORY

    def actor(self, actor_id: str) -> Optional[ActorSnapshot]:
        return next((actor for actor in self.actors if actor.id == actor_id), None)

    def to_payload(self) -> dict[str, Any]:
        """Dumps the log as JSON-compatible data with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CombatResult":
        return cls.model_validate(payload)
