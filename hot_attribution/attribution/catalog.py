"""
Effect catalog: durations and tick periods of the tracked HoTs.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from ..config.spells import HOT_BASE_INFO, PERSISTENCE_BONUS_MS, PERSISTENCE_HOTS, Spell
from ..models.combatant import CombatantRegistry


@dataclass(frozen=True)
class HotInfo:
    """Timing of a heal over time effect, in milliseconds."""

    duration: int
    tick_period: int


class EffectCatalog:
    """Read-only lookup from spell ID to HotInfo."""

    def __init__(self, entries: Mapping[int, HotInfo]):
        self._entries = MappingProxyType(dict(entries))

    def lookup(self, spell_id: int) -> Optional[HotInfo]:
        """Get the HoT timing for a spell, None if it isn't tracked."""
        return self._entries.get(spell_id)

    def __contains__(self, spell_id: int) -> bool:
        return spell_id in self._entries

    def __getitem__(self, spell_id: int) -> HotInfo:
        return self._entries[spell_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def build_catalog(
    registry: Optional[CombatantRegistry] = None,
    overrides: Optional[Dict[int, int]] = None,
) -> EffectCatalog:
    """
    Build the effect catalog for a player.

    Some HoT durations depend on traits, so the catalog is derived once from
    the registry when a pass starts and is not re-derived afterwards.

    Args:
        registry: Combatant registry providing trait ranks
        overrides: Duration overrides (spell_id -> ms) applied last

    Returns:
        EffectCatalog
    """
    persistence = registry.trait_count(Spell.PERSISTENCE_TRAIT) if registry else 0
    overrides = overrides or {}

    entries = {}
    for spell_id, (duration, tick_period) in HOT_BASE_INFO.items():
        if spell_id in PERSISTENCE_HOTS:
            duration += PERSISTENCE_BONUS_MS * persistence
        duration = overrides.get(int(spell_id), duration)
        entries[int(spell_id)] = HotInfo(duration=duration, tick_period=tick_period)

    return EffectCatalog(entries)
