"""
Base effect module for the combat engine.

Defines the envelope every status effect shares: an identifier, a stack count
and a remaining duration in rounds. Concrete effects narrow ``status_id`` to a
literal so the closed set can be used as a discriminated union.
"""

from typing import Any

from core.constants import StatusId
from pydantic import BaseModel, ConfigDict, Field


class StatusSnapshot(BaseModel):
    """The public view of a status: what a combat log records."""

    model_config = ConfigDict(frozen=True)

    id: StatusId = Field(
        description="The status identifier.",
    )
    stacks: int = Field(
        description="Number of stacks at the time of the snapshot.",
    )
    duration: int = Field(
        description="Remaining duration in rounds at the time of the snapshot.",
    )


class StatusEffect(BaseModel):
    """
    Base class for all status effects that can be carried by a combat entity.

    Effects are mutable while attached to an entity: their duration counts
    down once per round and a re-application replaces them.
    """

    status_id: str = Field(
        description="The status identifier, narrowed to a literal by each concrete effect.",
    )
    stacks: int = Field(
        default=1,
        ge=1,
        description="Number of stacks; tick damage scales linearly with it.",
    )
    duration: int = Field(
        default=1,
        ge=0,
        description="Remaining duration in rounds.",
    )

    @property
    def status(self) -> StatusId:
        return StatusId(self.status_id)

    @property
    def display_name(self) -> str:
        return self.status.display_name

    @property
    def colored_name(self) -> str:
        """Returns the effect name with color formatting applied."""
        return self.status.colored_name

    @property
    def is_expired(self) -> bool:
        return self.duration <= 0

    def tick_damage(self, max_hp: int) -> int:
        """
        Damage this effect deals on one end-of-round tick.

        Args:
            max_hp (int): The carrier's maximum hit points.

        Returns:
            int: The damage to deal, zero for non-damaging effects.

        """
        return 0

    def prevents_actions(self) -> bool:
        """Whether the carrier skips its action while this effect is active."""
        return False

    def refresh(self, other: "StatusEffect", max_stacks: int) -> None:
        """
        Replaces this effect with a re-application of the same status.

        Stacks and duration are reset to those of the new application, the
        stacks capped at ``max_stacks``; nothing accumulates. Subclasses
        carrying a source snapshot also take the newer snapshot.

        Args:
            other (StatusEffect): The newly applied effect.
            max_stacks (int): The stack cap.

        """
        if other.status_id != self.status_id:
            raise ValueError(
                f"Cannot refresh {self.status_id} with {other.status_id}"
            )
        self.duration = other.duration
        self.stacks = min(max_stacks, other.stacks)

    def snapshot(self) -> StatusSnapshot:
        """Returns an immutable view of the effect for the combat log."""
        return StatusSnapshot(id=self.status, stacks=self.stacks, duration=self.duration)

    def model_post_init(self, _: Any) -> None:
        if self.status_id not in {status.value for status in StatusId}:
            raise ValueError(f"Unknown status id: {self.status_id}")
