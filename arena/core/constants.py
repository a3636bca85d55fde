"""
Constants and enumerations for the combat engine.

Defines the item slots, hands, elements, status identifiers and combat
outcomes used throughout the engine, together with every numeric constant
the stat formulas and the combat loop depend on.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class ItemSlot(NiceEnum):
    """Defines the equipment slots an item can occupy."""

    WEAPON = "weapon"
    SHIELD = "shield"
    HELMET = "helmet"
    CHEST = "chest"
    GLOVES = "gloves"
    FEET = "feet"
    CAPE = "cape"
    RING = "ring"
    AMULET = "amulet"


class Hand(NiceEnum):
    """Defines which hand holds a wielded item."""

    LEFT = "left"
    RIGHT = "right"


class Element(NiceEnum):
    """Defines the elements that carry flat power and spell damage."""

    FIRE = "fire"
    LIGHTNING = "lightning"
    POISON = "poison"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this element."""
        return {
            Element.FIRE: "🔥",
            Element.LIGHTNING: "⚡",
            Element.POISON: "☠️",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this element."""
        return {
            Element.FIRE: "bold red",
            Element.LIGHTNING: "bold blue",
            Element.POISON: "bold green",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies element color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class StatusId(NiceEnum):
    """Defines the closed set of status effects an entity can carry."""

    BLEED = "bleed"
    BURN = "burn"
    POISON = "poison"
    STUN = "stun"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this status."""
        return {
            StatusId.BLEED: "🩸",
            StatusId.BURN: "🔥",
            StatusId.POISON: "☠️",
            StatusId.STUN: "💫",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this status."""
        return {
            StatusId.BLEED: "bold red",
            StatusId.BURN: "bold yellow",
            StatusId.POISON: "bold green",
            StatusId.STUN: "bold cyan",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies status color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class CombatOutcome(NiceEnum):
    """Defines the terminal states of a combat run."""

    VICTORY = "victory"
    DEFEAT = "defeat"


# ============================================================================
# EQUIPMENT AGGREGATION
# ============================================================================

# Damage of the synthesized fist weapon when nothing is wielded.
FIST_DAMAGE = 2
# Weapon damage and bonus scaling applied to the off-hand weapon.
MAIN_HAND_MULTIPLIER = 1.0
OFF_HAND_MULTIPLIER = 0.5

# ============================================================================
# STAT DERIVATION
# ============================================================================

BASE_HEALTH = 20
STRENGTH_DAMAGE_SCALING = 0.02
INTELLIGENCE_ELEMENT_SCALING = 0.02

# Soft cap: base + max * stat / (stat + SOFT_CAP_LEVEL_SCALE * level + SOFT_CAP_OFFSET)
SOFT_CAP_LEVEL_SCALE = 5
SOFT_CAP_OFFSET = 10

CRIT_BASE = 0.05
CRIT_MAX = 0.35
DODGE_BASE = 0.02
DODGE_MAX = 0.25
BLOCK_BASE = 0.01
BLOCK_MAX = 0.125

CRIT_MULTIPLIER_BASE = 1.5

# Physical reduction: armor / (armor + ARMOR_OFFSET + ARMOR_LEVEL_SCALE * level)
ARMOR_OFFSET = 50
ARMOR_LEVEL_SCALE = 5

BURN_BASE_CHANCE = 0.10
BURN_INT_SCALING = 0.001
POISON_BASE_CHANCE = 0.10
POISON_INT_SCALING = 0.0015
STUN_BASE_CHANCE = 0.05
STUN_INT_SCALING = 0.0008

DEFAULT_ATTACK_TYPE = "smashes"

# Spell name -> element and scaling; unknown names fall back to the defaults.
SPELL_ELEMENTS: dict[str, Element] = {
    "fireball": Element.FIRE,
    "arcBolt": Element.LIGHTNING,
    "toxicBolt": Element.POISON,
}
SPELL_SCALING: dict[str, tuple[float, float]] = {
    # name: (intScaling, elementScaling)
    "fireball": (0.7, 1.0),
    "arcBolt": (0.5, 0.8),
    "toxicBolt": (0.6, 1.2),
}
DEFAULT_SPELL_ELEMENT = Element.FIRE
DEFAULT_SPELL_SCALING = (0.5, 1.0)

# ============================================================================
# COMBAT
# ============================================================================

MAX_ROUNDS = 50
LOG_VERSION = "v2-frames"
TICK_POLICY = "end_of_round"

# Profile used by the flat-damage orchestration.
FLAT_PLAYER_BASE_HP = 20
FLAT_PLAYER_BASE_DAMAGE = 5

BLEED_MAX_HP_RATIO = 0.1
BURN_FIRE_RATIO = 0.25
BURN_INT_RATIO = 0.05
POISON_ELEMENT_RATIO = 0.2
POISON_INT_RATIO = 0.075

# Item power a dungeon level asks for in previews.
ITEM_POWER_PER_LEVEL = 10
