from core.constants import MAX_ROUNDS
from pydantic import BaseModel, ConfigDict, Field


class CombatSettings(BaseModel):
    """
    Per-run tunables of the combat simulator.

    The defaults reproduce the live game's behaviour.
    """

    model_config = ConfigDict(frozen=True)

    max_rounds: int = Field(
        default=MAX_ROUNDS,
        ge=1,
        description="Rounds after which an unresolved combat is a defeat.",
    )
    bleed_chance: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Chance of a flat-damage player attack applying bleed.",
    )
    bleed_duration: int = Field(default=2, ge=1)
    burn_duration: int = Field(default=3, ge=1)
    poison_duration: int = Field(default=3, ge=1)
    stun_duration: int = Field(default=1, ge=1)
    max_status_stacks: int = Field(
        default=3,
        ge=1,
        description="Cap on the stacks a single application of a status can carry.",
    )
