"""
Live HoT instances, one per target and spell.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union, Any

from .ledger import CausalSource


@dataclass(frozen=True)
class Hardcast:
    """The HoT was cast directly. Credited to no named source."""

    label: str = "Hardcast"

    @property
    def source(self) -> Optional[CausalSource]:
        return None


@dataclass(frozen=True)
class Named:
    """The HoT was produced by a proc and is credited to its source."""

    source: CausalSource

    @property
    def label(self) -> str:
        return self.source.name


Attribution = Union[Hardcast, Named]

HARDCAST = Hardcast()
UNATTRIBUTED = Hardcast(label="Unattributed")


@dataclass
class Tick:
    """A periodic heal of an instance."""

    healing: int
    timestamp: int


@dataclass
class Boost:
    """A relative increase to a HoT's strength, credited to the source that granted it."""

    source: CausalSource
    boost: float


@dataclass
class EffectInstance:
    """A live heal over time effect on a target."""

    spell_id: int
    target_id: str
    start: int
    end: int
    attribution: Attribution = HARDCAST
    ticks: List[Tick] = field(default_factory=list)
    boosts: List[Boost] = field(default_factory=list)
    extensions: List[Any] = field(default_factory=list)  # reserved for HoT extension tracking

    @property
    def attributions(self) -> List[CausalSource]:
        """Sources credited with the whole HoT. Empty for a hardcast."""
        source = self.attribution.source
        return [source] if source is not None else []

    @property
    def is_hardcast(self) -> bool:
        return self.attribution.source is None

    def add_boost(self, source: CausalSource, boost: float):
        """Credit a source with a relative increase for the rest of this application."""
        self.boosts.append(Boost(source=source, boost=boost))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spell_id": self.spell_id,
            "target_id": self.target_id,
            "start": self.start,
            "end": self.end,
            "attribution": self.attribution.label,
            "ticks": len(self.ticks),
            "boosts": [boost.source.name for boost in self.boosts],
        }


class EffectInstanceStore:
    """Holds at most one live instance per (target, spell)."""

    def __init__(self):
        self._hots: Dict[str, Dict[int, EffectInstance]] = {}

    def get(self, target_id: str, spell_id: int) -> Optional[EffectInstance]:
        return self._hots.get(target_id, {}).get(spell_id)

    def put(self, instance: EffectInstance):
        """Store an instance, replacing any live instance of the same spell on the target."""
        self._hots.setdefault(instance.target_id, {})[instance.spell_id] = instance

    def remove(self, target_id: str, spell_id: int) -> Optional[EffectInstance]:
        """Remove and return an instance, None if there wasn't one."""
        hots = self._hots.get(target_id)
        if not hots:
            return None
        instance = hots.pop(spell_id, None)
        if not hots:
            del self._hots[target_id]
        return instance

    def on_target(self, target_id: str) -> List[EffectInstance]:
        """All live instances on a target."""
        return list(self._hots.get(target_id, {}).values())

    def others_on_target(self, target_id: str, spell_id: int) -> List[EffectInstance]:
        """All live instances on a target except the given spell."""
        return [
            instance
            for other_id, instance in self._hots.get(target_id, {}).items()
            if other_id != spell_id
        ]

    def __iter__(self) -> Iterator[EffectInstance]:
        for hots in self._hots.values():
            yield from hots.values()

    def __len__(self) -> int:
        return sum(len(hots) for hots in self._hots.values())

    def keys(self) -> List[Tuple[str, int]]:
        return [(target_id, spell_id) for target_id, hots in self._hots.items() for spell_id in hots]

    def snapshot(self) -> Dict[str, Dict[int, Dict[str, Any]]]:
        """Get a copy of all live instances."""
        return {
            target_id: {spell_id: instance.to_dict() for spell_id, instance in hots.items()}
            for target_id, hots in self._hots.items()
        }
