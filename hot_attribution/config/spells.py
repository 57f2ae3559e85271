"""
Spell, item and HoT data used for attribution.

This module contains the game constants the attribution engine keys on:
the tracked heal-over-time spells, the buffs and items that can proc them,
and the base HoT timings the effect catalog is built from.
"""

from typing import Dict, Set
from enum import IntEnum


class Spell(IntEnum):
    """Spell IDs as they appear in combat logs."""

    # Heal over time effects
    REJUVENATION = 774
    REJUVENATION_GERMINATION = 155777
    REGROWTH = 8936
    WILD_GROWTH = 48438
    LIFEBLOOM_HOT_HEAL = 33763
    CENARION_WARD = 102352
    CULTIVATION = 200389
    SPRING_BLOSSOMS = 207386
    DREAMER = 253432

    # Proc sources
    POWER_OF_THE_ARCHDRUID_BUFF = 189877
    AWAKENED = 253434
    RESTO_DRUID_T19_4SET_BONUS_BUFF = 211170

    # Artifact traits
    PERSISTENCE_TRAIT = 186396


class Item(IntEnum):
    """Item IDs of equipment that changes attribution."""

    TEARSTONE_OF_ELUNE = 137042


# Base timings in milliseconds: (duration, tick period)
HOT_BASE_INFO: Dict[int, tuple] = {
    Spell.REJUVENATION: (15000, 3000),
    Spell.REJUVENATION_GERMINATION: (15000, 3000),
    Spell.REGROWTH: (12000, 2000),
    Spell.WILD_GROWTH: (7000, 1000),
    Spell.LIFEBLOOM_HOT_HEAL: (15000, 1000),
    Spell.CENARION_WARD: (8000, 2000),
    Spell.CULTIVATION: (6000, 2000),
    Spell.SPRING_BLOSSOMS: (6000, 2000),
    Spell.DREAMER: (8000, 2000),
}

# Each Persistence rank adds a second to Rejuvenation
PERSISTENCE_BONUS_MS = 1000

# HoTs whose duration scales with the Persistence trait
PERSISTENCE_HOTS: Set[int] = {
    Spell.REJUVENATION,
    Spell.REJUVENATION_GERMINATION,
}

SPELL_NAMES: Dict[int, str] = {
    774: "Rejuvenation",
    155777: "Rejuvenation (Germination)",
    8936: "Regrowth",
    48438: "Wild Growth",
    33763: "Lifebloom",
    102352: "Cenarion Ward",
    200389: "Cultivation",
    207386: "Spring Blossoms",
    253432: "Dreamer",
    189877: "Power of the Archdruid",
    253434: "Awakened",
    211170: "Tier19 4pc",
    186396: "Persistence",
}


def get_spell_name(spell_id: int) -> str:
    """Get a display name for a spell ID."""
    return SPELL_NAMES.get(spell_id, f"Spell {spell_id}")


def is_tracked_hot(spell_id: int) -> bool:
    """Check if a spell is one of the tracked heal over time effects."""
    return spell_id in HOT_BASE_INFO
