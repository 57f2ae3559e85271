"""
Combatant registry used for attribution eligibility and target filtering.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set
import logging

logger = logging.getLogger(__name__)


@dataclass
class Entity:
    """A tracked group member that HoTs can land on."""

    guid: str
    name: Optional[str] = None


@dataclass
class Combatant:
    """Gear, buffs and traits of the player whose HoTs are being attributed."""

    guid: Optional[str] = None
    buffs: Set[int] = field(default_factory=set)
    items: Set[int] = field(default_factory=set)
    traits: Dict[int, int] = field(default_factory=dict)  # trait spell_id -> rank


class CombatantRegistry:
    """
    Provides entity lookups and the selected player's buffs, items and traits.

    Targets are only tracked once they are registered. A registry with no
    registered entities tracks every target, which is the behaviour wanted
    when feeding hand-built event sequences.
    """

    def __init__(self, selected: Optional[Combatant] = None):
        self.selected = selected or Combatant()
        self.entities: Dict[str, Entity] = {}

    def register_entity(self, guid: str, name: Optional[str] = None) -> Entity:
        """Register a target so events landing on it are tracked."""
        entity = self.entities.get(guid)
        if entity is None:
            entity = Entity(guid=guid, name=name)
            self.entities[guid] = entity
            logger.debug(f"Registered entity {guid} ({name})")
        elif name and not entity.name:
            entity.name = name
        return entity

    def get_entity(self, event) -> Optional[Entity]:
        """Get the tracked entity an event targets, if any."""
        if not event.target_id:
            return None
        if not self.entities:
            return Entity(guid=event.target_id)
        return self.entities.get(event.target_id)

    def has_buff(self, spell_id: int) -> bool:
        """Check if the selected player has a buff."""
        return spell_id in self.selected.buffs

    def has_item(self, item_id: int) -> bool:
        """Check if the selected player has an item equipped."""
        return item_id in self.selected.items

    def trait_count(self, spell_id: int) -> int:
        """Get the rank of an artifact trait, 0 if not taken."""
        return self.selected.traits.get(spell_id, 0)
