"""
Damage module for the combat engine.

Resolves a single attacker versus defender exchange from derived stats: dodge,
weapon roll, critical hits, armor mitigation, spell procs and status procs.
The order in which the random source is consumed is fixed, so a scripted
source reproduces an exchange exactly.
"""

from typing import Optional

from catchery import log_debug
from character.character_stats import DerivedStats
from character.stat_deriver import physical_reduction
from core.rng import RandomSource, ensure_source, roll_between, roll_chance
from core.utils import round_half_up
from pydantic import BaseModel, ConfigDict, Field


class StatusProcs(BaseModel):
    """Which statuses the exchange applied to the defender."""

    model_config = ConfigDict(frozen=True)

    burn: bool = False
    poison: bool = False
    stun: bool = False

    @property
    def has_any(self) -> bool:
        return self.burn or self.poison or self.stun


class AttackResult(BaseModel):
    """The outcome of one exchange, with every damage component rounded."""

    model_config = ConfigDict(frozen=True)

    hit: bool = Field(
        description="False when the defender dodged.",
    )
    crit: bool = Field(
        default=False,
        description="Whether the weapon and elemental damage critically hit.",
    )
    spell_crit: bool = Field(
        default=False,
        description="Whether the proc'd spell critically hit.",
    )
    physical_damage: int = Field(
        default=0,
        description="Physical damage after armor mitigation.",
    )
    elemental_damage: int = Field(
        default=0,
        description="Elemental damage, never mitigated by armor.",
    )
    spell_damage: int = Field(
        default=0,
        description="Damage of the proc'd spell, zero when no spell proc'd.",
    )
    total_damage: int = Field(
        default=0,
        description="Sum of the three rounded components.",
    )
    statuses: StatusProcs = Field(
        default_factory=StatusProcs,
        description="Status procs rolled by the exchange.",
    )
    spell_proc: bool = Field(
        default=False,
        description="Whether any spell proc'd.",
    )
    spell_name: Optional[str] = Field(
        default=None,
        description="Name of the proc'd spell.",
    )

    @classmethod
    def miss(cls) -> "AttackResult":
        return cls(hit=False)


class AttackResolver:
    """
    Resolves exchanges between two sets of derived stats.

    Every exchange consumes draws from the source in this order: dodge,
    weapon roll, crit, one per spell until the first proc (plus its spell
    crit), then burn, poison and stun. A dodge consumes only the first draw.
    """

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self.rng: RandomSource = ensure_source(rng)

    def resolve(
        self,
        attacker: DerivedStats,
        defender: DerivedStats,
        attacker_level: int,
    ) -> AttackResult:
        """
        Resolves one attack of ``attacker`` against ``defender``.

        Args:
            attacker (DerivedStats): The attacker's derived stats.
            defender (DerivedStats): The defender's derived stats.
            attacker_level (int): The attacker's level, used for mitigation.

        Returns:
            AttackResult: The outcome of the exchange.

        """
        if roll_chance(self.rng, defender.dodge_chance):
            return AttackResult.miss()

        physical = float(
            roll_between(
                self.rng,
                attacker.physical_damage_min,
                attacker.physical_damage_max,
            )
        )
        elemental = float(attacker.elemental_damage)

        crit = roll_chance(self.rng, attacker.crit_chance)
        if crit:
            physical *= attacker.crit_multiplier
            elemental *= attacker.crit_multiplier

        physical = max(0.0, physical * (1 - physical_reduction(defender.armor, attacker_level)))

        spell_name, spell_damage, spell_crit = self._roll_spell(attacker)

        statuses = StatusProcs(
            burn=roll_chance(self.rng, attacker.burn_chance),
            poison=roll_chance(self.rng, attacker.poison_chance),
            stun=roll_chance(self.rng, attacker.stun_chance),
        )

        physical_damage = round_half_up(physical)
        elemental_damage = round_half_up(elemental)
        spell_total = round_half_up(spell_damage)
        return AttackResult(
            hit=True,
            crit=crit,
            spell_crit=spell_crit,
            physical_damage=physical_damage,
            elemental_damage=elemental_damage,
            spell_damage=spell_total,
            total_damage=physical_damage + elemental_damage + spell_total,
            statuses=statuses,
            spell_proc=spell_name is not None,
            spell_name=spell_name,
        )

    def _roll_spell(self, attacker: DerivedStats) -> tuple[Optional[str], float, bool]:
        """Rolls the attacker's spells in order; only the first proc counts."""
        for name, spell in (attacker.spells or {}).items():
            if not roll_chance(self.rng, spell.chance):
                continue
            damage = spell.damage
            spell_crit = roll_chance(self.rng, attacker.spell_crit_chance)
            if spell_crit:
                damage *= attacker.crit_multiplier
            log_debug(f"Spell {name} proc'd", {"damage": damage, "crit": spell_crit})
            return name, damage, spell_crit
        return None, 0.0, False


def resolve_attack(
    attacker: DerivedStats,
    defender: DerivedStats,
    attacker_level: int,
    rng: Optional[RandomSource] = None,
) -> AttackResult:
    """
    Resolves a single exchange with a one-off resolver.

    Args:
        attacker (DerivedStats): The attacker's derived stats.
        defender (DerivedStats): The defender's derived stats.
        attacker_level (int): The attacker's level.
        rng (RandomSource | None): The randomness source; a private one is
            created when omitted.

    Returns:
        AttackResult: The outcome of the exchange.

    """
    return AttackResolver(rng).resolve(attacker, defender, attacker_level)
