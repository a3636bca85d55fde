from dataclasses import dataclass
from typing import Iterator, Optional

from catchery import log_debug
from core.constants import StatusId

from .base_effect import StatusEffect, StatusSnapshot


@dataclass(frozen=True)
class EffectTick:
    """The outcome of one end-of-round tick of a single effect."""

    status: StatusId
    amount: int
    stacks_before: int
    duration_after: int
    expired: bool


class StatusEffectManager:
    """
    Owns the status effects carried by one combat entity.

    Effects are keyed by status id and kept in application order; that order
    is the order in which they tick at the end of a round.
    """

    def __init__(self, owner_id: str, max_stacks: int = 3) -> None:
        self.owner_id: str = owner_id
        self.max_stacks: int = max_stacks
        self._effects: dict[StatusId, StatusEffect] = {}

    # === Effect Management ===

    def apply(self, effect: StatusEffect) -> StatusEffect:
        """
        Applies an effect, replacing an active effect of the same id.

        A re-application keeps the position of the original effect in the
        tick order.

        Args:
            effect (StatusEffect): The effect to apply.

        Returns:
            StatusEffect: The effect now carried for that status id.

        """
        existing = self._effects.get(effect.status)
        if existing is None:
            stored = effect.model_copy()
            stored.stacks = min(stored.stacks, self.max_stacks)
            self._effects[effect.status] = stored
            return stored
        existing.refresh(effect, self.max_stacks)
        log_debug(
            f"Refreshed {existing.status} on {self.owner_id}",
            {"stacks": existing.stacks, "duration": existing.duration},
        )
        return existing

    def get(self, status: StatusId) -> Optional[StatusEffect]:
        return self._effects.get(status)

    def has(self, status: StatusId) -> bool:
        return status in self._effects

    def remove(self, status: StatusId) -> bool:
        return self._effects.pop(status, None) is not None

    def clear(self) -> list[StatusId]:
        """Removes every effect and returns the ids that were active."""
        cleared = list(self._effects)
        self._effects.clear()
        return cleared

    def prevents_actions(self) -> bool:
        return any(effect.prevents_actions() for effect in self._effects.values())

    def snapshots(self) -> list[StatusSnapshot]:
        return [effect.snapshot() for effect in self._effects.values()]

    # === Round Processing ===

    def tick_all(self, max_hp: int) -> Iterator[EffectTick]:
        """
        Ticks every active effect once, in application order.

        The iteration is lazy so the caller can stop as soon as a tick is
        lethal; effects that were not reached keep their duration.

        Args:
            max_hp (int): The carrier's maximum hit points.

        Yields:
            EffectTick: One record per ticked effect.

        """
        for status, effect in list(self._effects.items()):
            if status not in self._effects:
                continue
            stacks_before = effect.stacks
            amount = effect.tick_damage(max_hp)
            effect.duration = max(0, effect.duration - 1)
            expired = effect.is_expired
            if expired:
                del self._effects[status]
            yield EffectTick(
                status=status,
                amount=amount,
                stacks_before=stacks_before,
                duration_after=effect.duration,
                expired=expired,
            )

    def __len__(self) -> int:
        return len(self._effects)

    def __iter__(self) -> Iterator[StatusEffect]:
        return iter(list(self._effects.values()))

    def __contains__(self, status: object) -> bool:
        return status in self._effects
