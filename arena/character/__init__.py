"""
Character module for the combat engine.

This module turns a character's equipped items into combat-ready stats:
aggregation of raw totals, formula-based derivation, and the character
snapshot that ties both together.
"""

from .character_stats import DerivedStats, RawStats, SpellStats
from .main import Character, FlatProfile, derive_stats, flat_player_profile
from .stat_aggregator import StatAggregator, aggregate_raw_stats
from .stat_deriver import (
    block_chance,
    burn_chance,
    crit_chance,
    derive_from_raw,
    dodge_chance,
    flat_stats,
    physical_reduction,
    poison_chance,
    scale_spells,
    soft_cap,
    spell_crit_chance,
    stun_chance,
)

__all__ = [
    # Stat records
    "RawStats",
    "DerivedStats",
    "SpellStats",
    # Character snapshot
    "Character",
    "FlatProfile",
    "derive_stats",
    "flat_player_profile",
    # Aggregation
    "StatAggregator",
    "aggregate_raw_stats",
    # Derivation
    "derive_from_raw",
    "flat_stats",
    "soft_cap",
    "physical_reduction",
    "crit_chance",
    "spell_crit_chance",
    "dodge_chance",
    "block_chance",
    "burn_chance",
    "poison_chance",
    "stun_chance",
    "scale_spells",
]
