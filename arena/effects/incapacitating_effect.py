"""
Incapacitating effect module for the combat engine.

Defines statuses that stop the carrier from acting instead of damaging it.
"""

from typing import Literal

from core.constants import StatusId

from .base_effect import StatusEffect


class StunEffect(StatusEffect):
    """
    Stun makes the carrier skip its action while it lasts.

    Its end-of-round tick deals no damage and only counts the duration down.
    """

    status_id: Literal["stun"] = StatusId.STUN.value

    def prevents_actions(self) -> bool:
        return True
