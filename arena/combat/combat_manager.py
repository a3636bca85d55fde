"""
Combat manager module for the combat engine.

Drives a combat run between one player and one or more enemies, round by
round, until every enemy is dead, the player is dead, or the round cap is
reached. A capped run is a defeat.
"""

from typing import Callable, Optional, Sequence

from catchery import log_warning
from core.constants import CombatOutcome
from core.error_handling import EncounterSetupError
from core.logging import get_logger
from core.rng import RandomSource, ensure_source

from combat.combat_log import (
    ActionResult,
    CombatAction,
    CombatResult,
    CombatRound,
    DeathFrame,
    EndBattleFrame,
    EndFrame,
    Rewards,
    RoundEndFrame,
    StatusCleanupFrame,
    StatusTickFrame,
)
from combat.entities import CombatEntity, EnemySeed, PlayerSeed
from combat.settings import CombatSettings
from combat.strategies import DamageStrategy, FlatDamageStrategy

logger = get_logger(__name__)

PLAYER_ABILITY = "basic_slash"
ENEMY_ABILITY = "basic_claw"

RewardRoller = Callable[[RandomSource], Rewards]


class CombatSimulator:
    """
    Runs a single combat between a player and a list of enemies.

    Each round the player attacks the first living enemy; if the player
    survives, the first living enemy strikes back. The end-of-round phase then
    ticks every status on every living entity in list order. A simulator is
    single use: its entities are built from the seeds at construction and are
    discarded with it.
    """

    def __init__(
        self,
        player: PlayerSeed,
        enemies: Sequence[EnemySeed],
        rng: Optional[RandomSource] = None,
        strategy: Optional[DamageStrategy] = None,
        settings: Optional[CombatSettings] = None,
        log_id: Optional[str] = None,
    ) -> None:
        if not enemies:
            raise EncounterSetupError("A combat needs at least one enemy")

        self.settings: CombatSettings = settings or CombatSettings()
        self.rng: RandomSource = ensure_source(rng)
        self.strategy: DamageStrategy = strategy or FlatDamageStrategy.from_settings(
            self.settings
        )
        self.log_id: str = log_id or f"run_{player.id}"

        stacks = self.settings.max_status_stacks
        self.player = CombatEntity(player, is_player=True, max_stacks=stacks)
        self.enemies = [
            CombatEntity(seed, is_player=False, max_stacks=stacks) for seed in enemies
        ]

        ids = [entity.id for entity in self.entities]
        if len(set(ids)) != len(ids):
            log_warning("Duplicate combatant ids", {"ids": ids})
            raise EncounterSetupError(f"Combatant ids must be unique, got {ids}")

        self.rounds: list[CombatRound] = []
        self.outcome: Optional[CombatOutcome] = None

    @property
    def entities(self) -> list[CombatEntity]:
        return [self.player] + self.enemies

    def living_enemies(self) -> list[CombatEntity]:
        return [enemy for enemy in self.enemies if enemy.is_alive]

    def is_over(self) -> bool:
        return not self.player.is_alive or not self.living_enemies()

    # === Main Loop ===

    def run(self, reward_roller: Optional[RewardRoller] = None) -> CombatResult:
        """
        Plays rounds until the combat resolves or the round cap is reached.

        Args:
            reward_roller (RewardRoller | None): Rolls the rewards on victory.
                Without one a victory yields zero gold and experience.

        Returns:
            CombatResult: The complete log of the run.

        """
        if self.outcome is not None:
            raise RuntimeError("This combat has already been run")

        actors = [entity.snapshot() for entity in self.entities]

        while len(self.rounds) < self.settings.max_rounds:
            self.rounds.append(self.play_round(len(self.rounds) + 1))
            if self.is_over():
                break

        if self.player.is_alive and not self.living_enemies():
            self.outcome = CombatOutcome.VICTORY
        else:
            self.outcome = CombatOutcome.DEFEAT
            if self.player.is_alive:
                logger.info(
                    "Combat %s hit the %d round cap", self.log_id, self.settings.max_rounds
                )

        rewards: Optional[Rewards] = None
        if self.outcome == CombatOutcome.VICTORY:
            rewards = reward_roller(self.rng) if reward_roller else Rewards()

        self.rounds[-1].end_frames.append(
            EndBattleFrame(outcome=self.outcome, rewards=rewards)
        )
        logger.info(
            "Combat %s ended in %s after %d rounds",
            self.log_id,
            self.outcome,
            len(self.rounds),
        )
        return CombatResult(
            log_id=self.log_id,
            outcome=self.outcome,
            total_rounds=len(self.rounds),
            actors=actors,
            rounds=self.rounds,
            rewards=rewards,
        )

    def play_round(self, round_number: int) -> CombatRound:
        """Plays the action phase and the end-of-round phase of one round."""
        logger.debug("Round %d of %s", round_number, self.log_id)
        actions: list[CombatAction] = []

        targets = self.living_enemies()
        if self.player.is_alive and targets:
            actions.append(self.perform_attack(self.player, targets[0], round_number))

        attackers = self.living_enemies()
        if self.player.is_alive and attackers:
            actions.append(self.perform_attack(attackers[0], self.player, round_number))

        return CombatRound(
            round_number=round_number,
            actions=actions,
            end_frames=self.end_of_round(round_number),
        )

    # === Action Phase ===

    def perform_attack(
        self,
        actor: CombatEntity,
        target: CombatEntity,
        round_number: int,
    ) -> CombatAction:
        """
        Resolves one attack and applies its damage and statuses.

        An actor carrying a status that prevents actions skips its attack.
        Statuses are not applied to a target the attack killed.
        """
        side = "player" if actor.is_player else "enemy"
        ability = PLAYER_ABILITY if actor.is_player else ENEMY_ABILITY
        action_id = f"{side}_attack_{round_number}_{self.log_id}"

        if actor.effects.prevents_actions():
            logger.debug("%s cannot act this round", actor.name)
            return CombatAction(
                action_id=action_id,
                actor_id=actor.id,
                ability=ability,
                element="physical",
                targets=[target.id],
                tags=["melee", "physical", side],
                skipped=True,
            )

        exchange = self.strategy.exchange(actor, target, self.rng)
        if exchange.missed:
            hp_before = hp_after = target.current_hp
        else:
            hp_before, hp_after = target.take_damage(exchange.amount)

        applied = []
        if target.is_alive:
            applied = [target.effects.apply(status).snapshot() for status in exchange.statuses]

        return CombatAction(
            action_id=action_id,
            actor_id=actor.id,
            ability=ability,
            element=exchange.element,
            targets=[target.id],
            tags=["melee", exchange.element, side],
            results=[
                ActionResult(
                    target_id=target.id,
                    amount=0 if exchange.missed else exchange.amount,
                    crit=exchange.crit,
                    missed=exchange.missed,
                    hp_before=hp_before,
                    hp_after=hp_after,
                    kill=not target.is_alive,
                    spell_name=exchange.spell_name,
                    spell_crit=exchange.spell_crit,
                    breakdown=exchange.breakdown,
                    status_applied=applied,
                )
            ],
        )

    # === End Of Round Phase ===

    def end_of_round(self, round_number: int) -> list[EndFrame]:
        """
        Ticks statuses on living entities and clears them from dead ones.

        A lethal tick stops the remaining ticks of that entity; its other
        statuses are cleared.
        """
        frames: list[EndFrame] = []
        for entity in self.entities:
            if entity.is_alive:
                for tick in entity.effects.tick_all(entity.max_hp):
                    hp_before, hp_after = entity.take_damage(tick.amount)
                    frames.append(
                        StatusTickFrame(
                            status=tick.status,
                            target_id=entity.id,
                            amount=tick.amount,
                            hp_before=hp_before,
                            hp_after=hp_after,
                            stacks_before=tick.stacks_before,
                            duration_after=tick.duration_after,
                            expired=tick.expired,
                            lethal=not entity.is_alive,
                        )
                    )
                    if not entity.is_alive:
                        frames.append(
                            DeathFrame(targets=[entity.id], cause=str(tick.status))
                        )
                        break
            if not entity.is_alive and len(entity.effects):
                frames.append(
                    StatusCleanupFrame(
                        targets=[entity.id], statuses=entity.effects.clear()
                    )
                )
        frames.append(RoundEndFrame(round_number=round_number))
        return frames


def run_combat(
    player: PlayerSeed,
    enemies: Sequence[EnemySeed],
    rng: Optional[RandomSource] = None,
    strategy: Optional[DamageStrategy] = None,
    settings: Optional[CombatSettings] = None,
    log_id: Optional[str] = None,
    reward_roller: Optional[RewardRoller] = None,
) -> CombatResult:
    """
    Runs a complete combat and returns its log.

    Args:
        player (PlayerSeed): The player combatant.
        enemies (Sequence[EnemySeed]): The enemies, in targeting order.
        rng (RandomSource | None): The randomness source; pass a seeded or
            scripted one for a reproducible run.
        strategy (DamageStrategy | None): How exchanges are resolved; the
            flat-damage strategy when omitted.
        settings (CombatSettings | None): Per-run tunables.
        log_id (str | None): Identifier embedded in the log and action ids.
        reward_roller (RewardRoller | None): Rolls the rewards on victory.

    Returns:
        CombatResult: The complete log of the run.

    """
    simulator = CombatSimulator(
        player,
        enemies,
        rng=rng,
        strategy=strategy,
        settings=settings,
        log_id=log_id,
    )
    return simulator.run(reward_roller)
