"""
Pytest configuration and shared fixtures for the test suite.

Provides event builders and engine fixtures used across the attribution,
parser and CLI tests.
"""

import pytest

from hot_attribution.attribution import HotTracker
from hot_attribution.config.settings import AttributionSettings
from hot_attribution.config.spells import Spell
from hot_attribution.models.combatant import CombatantRegistry
from hot_attribution.parser.events import CombatEvent, EventType

PLAYER = "Player-1"
TANK = "Player-2"
HEALER = "Player-3"
DPS = "Player-4"


class EventBuilder:
    """Builds engine events cast by PLAYER."""

    def cast(self, timestamp, spell_id, target=None):
        return CombatEvent(EventType.CAST, timestamp, spell_id, PLAYER, target)

    def apply(self, timestamp, spell_id, target, prepull=False):
        return CombatEvent(EventType.APPLY, timestamp, spell_id, PLAYER, target, prepull=prepull)

    def refresh(self, timestamp, spell_id, target):
        return CombatEvent(EventType.REFRESH, timestamp, spell_id, PLAYER, target)

    def remove(self, timestamp, spell_id, target):
        return CombatEvent(EventType.REMOVE, timestamp, spell_id, PLAYER, target)

    def heal(self, timestamp, spell_id, target, amount, absorbed=0, overheal=0, tick=True):
        return CombatEvent(
            EventType.HEAL,
            timestamp,
            spell_id,
            PLAYER,
            target,
            amount=amount,
            absorbed=absorbed,
            overheal=overheal,
            tick=tick,
        )

    def pota_fall(self, timestamp):
        return self.remove(timestamp, Spell.POWER_OF_THE_ARCHDRUID_BUFF, PLAYER)


class FixedShare:
    """Amplification model returning the same one-stack share for every heal."""

    def __init__(self, share):
        self.share = share
        self.calls = []

    def decompose_stack_amplification(self, event, stacks):
        self.calls.append((event, stacks))
        return self.share


@pytest.fixture
def events():
    """Event builder."""
    return EventBuilder()


@pytest.fixture
def settings():
    """Default engine settings."""
    return AttributionSettings()


@pytest.fixture
def registry():
    """Registry tracking every target, with no gear or buffs."""
    return CombatantRegistry()


@pytest.fixture
def tracker(registry, settings):
    """A fresh tracker with default settings."""
    return HotTracker(registry=registry, settings=settings)


@pytest.fixture
def sample_log_lines():
    """Sample combat log lines for a druid (Player-1) healing a tank (Player-2)."""
    stats = ",".join(["0"] * 23)
    return [
        "9/15/2025 21:30:21.000-4  COMBAT_LOG_VERSION,22,ADVANCED_LOG_ENABLED,0,BUILD_VERSION,11.2.0,PROJECT_ID,1",
        f"9/15/2025 21:30:21.000-4  COMBATANT_INFO,Player-1,{stats},[(1,2,1)],(0,0,0,0),"
        f"[(137042,900,(),(),())],[Player-1,211170,1]",
        f"9/15/2025 21:30:21.000-4  COMBATANT_INFO,Player-2,{stats},[(1,2,1)],(0,0,0,0),"
        f"[(1000,900,(),(),())],[Player-1,774,1]",
        '9/15/2025 21:30:22.000-4  SPELL_CAST_SUCCESS,Player-1,"Druid-Realm",0x511,0x0,Player-2,"Tank-Realm",0x512,0x0,774,"Rejuvenation",0x8',
        '9/15/2025 21:30:22.050-4  SPELL_AURA_REFRESH,Player-1,"Druid-Realm",0x511,0x0,Player-2,"Tank-Realm",0x512,0x0,774,"Rejuvenation",0x8,BUFF',
        '9/15/2025 21:30:23.000-4  SPELL_PERIODIC_HEAL,Player-1,"Druid-Realm",0x511,0x0,Player-2,"Tank-Realm",0x512,0x0,774,"Rejuvenation",0x8,5000,5000,1000,200,nil',
        '9/15/2025 21:30:23.500-4  SPELL_PERIODIC_HEAL,Player-5,"Other-Realm",0x511,0x0,Player-2,"Tank-Realm",0x512,0x0,774,"Rejuvenation",0x8,3000,3000,0,0,nil',
        '9/15/2025 21:30:24.000-4  SPELL_AURA_REMOVED,Player-1,"Druid-Realm",0x511,0x0,Player-2,"Tank-Realm",0x512,0x0,774,"Rejuvenation",0x8,BUFF',
    ]
