"""
Event classes and factory for the attribution engine's input stream.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class EventType(Enum):
    """Event types the attribution engine consumes."""

    CAST = "cast"
    APPLY = "applybuff"
    REFRESH = "refreshbuff"
    REMOVE = "removebuff"
    HEAL = "heal"


# Combat log event types and the engine event they map to
LOG_EVENT_TYPES: Dict[str, EventType] = {
    "SPELL_CAST_SUCCESS": EventType.CAST,
    "SPELL_AURA_APPLIED": EventType.APPLY,
    "SPELL_AURA_REFRESH": EventType.REFRESH,
    "SPELL_AURA_REMOVED": EventType.REMOVE,
    "SPELL_HEAL": EventType.HEAL,
    "SPELL_PERIODIC_HEAL": EventType.HEAL,
}


@dataclass
class CombatEvent:
    """A single event in the attribution stream. Timestamps are in milliseconds."""

    type: EventType
    timestamp: int
    ability_id: int
    source_id: Optional[str] = None
    target_id: Optional[str] = None

    # Heal parameters
    amount: int = 0
    absorbed: int = 0
    overheal: int = 0
    tick: bool = False

    # Fabricated for auras already present when the log starts
    prepull: bool = False

    @property
    def raw_healing(self) -> int:
        """Healing including overhealing and absorbed amounts."""
        return self.amount + self.absorbed + self.overheal

    @property
    def effective_healing(self) -> int:
        """Healing that landed, including absorbed amounts."""
        return self.amount + self.absorbed


def format_timestamp(timestamp: int) -> str:
    """Format a millisecond offset as m:ss.mmm."""
    minutes, remainder = divmod(max(timestamp, 0), 60000)
    seconds, millis = divmod(remainder, 1000)
    return f"{minutes}:{seconds:02d}.{millis:03d}"


class EventFactory:
    """
    Factory for creating engine events from tokenized combat log lines.

    Timestamps are converted to milliseconds since the first line the factory
    saw, so one factory must be used per log.
    """

    def __init__(self):
        self.start_time: Optional[datetime] = None

    @staticmethod
    def _safe_int(value: Any, default: int = 0) -> int:
        """Safely convert a value to int, returning default on failure."""
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def to_offset(self, timestamp: datetime) -> int:
        """Convert a log timestamp into milliseconds since the log started."""
        if self.start_time is None:
            self.start_time = timestamp
        return int(round((timestamp - self.start_time).total_seconds() * 1000))

    def create_event(self, parsed_line) -> Optional[CombatEvent]:
        """
        Create an engine event from a parsed line.

        Args:
            parsed_line: ParsedLine object from tokenizer

        Returns:
            CombatEvent, or None if the line is not relevant to attribution
        """
        timestamp = self.to_offset(parsed_line.timestamp)

        event_type = LOG_EVENT_TYPES.get(parsed_line.event_type)
        if event_type is None:
            return None

        if len(parsed_line.base_params) < 8 or len(parsed_line.prefix_params) < 3:
            return None

        event = CombatEvent(
            type=event_type,
            timestamp=timestamp,
            ability_id=self._safe_int(parsed_line.prefix_params[0]),
            source_id=parsed_line.base_params[0],
            target_id=self._normalize_guid(parsed_line.base_params[4]),
        )

        if event_type == EventType.HEAL:
            self._add_heal_info(event, parsed_line)

        return event

    def _add_heal_info(self, event: CombatEvent, parsed_line):
        """Add heal amounts. Heal suffix: amount, baseAmount, overhealing, absorbed, critical."""
        params = parsed_line.suffix_params
        if len(params) >= 5:
            # Modern format with baseAmount
            event.amount = self._safe_int(params[0])
            event.overheal = self._safe_int(params[2])
            event.absorbed = self._safe_int(params[3])
        elif len(params) >= 3:
            event.amount = self._safe_int(params[0])
            event.overheal = self._safe_int(params[1])
            event.absorbed = self._safe_int(params[2])
        elif params:
            event.amount = self._safe_int(params[0])

        # Overhealing is included in the logged amount
        event.amount = max(0, event.amount - event.overheal)
        event.tick = parsed_line.event_type == "SPELL_PERIODIC_HEAL"

    @staticmethod
    def _normalize_guid(guid: Any) -> Optional[str]:
        if not guid or guid == "0000000000000000":
            return None
        return str(guid)
