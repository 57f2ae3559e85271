"""
Cast window tracking used to correlate casts with later HoT applications.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class CastWindow:
    """The most recent qualifying cast of an ability."""

    timestamp: int
    target: Optional[str] = None

    def is_open(self, timestamp: int, buffer_ms: int) -> bool:
        """Check if a later event falls within the buffer after this cast."""
        return self.timestamp + buffer_ms > timestamp


class CastWindowTracker:
    """
    Records the last cast of each ability, and the last cast of each ability
    made while a proc window was open.

    The proc window opens when the proc buff falls off. A cast landing less
    than the buffer after that consumed the proc.
    """

    def __init__(self, buffer_ms: int):
        self.buffer_ms = buffer_ms
        self.casts: Dict[int, CastWindow] = {}
        self.proc_casts: Dict[int, CastWindow] = {}
        self.proc_fall_timestamp: Optional[int] = None

    def record_cast(self, spell_id: int, timestamp: int, target: Optional[str]) -> bool:
        """
        Record a cast.

        Returns:
            True if the cast was also recorded as a proc-window cast
        """
        self.casts[spell_id] = CastWindow(timestamp, target)

        if self.had_proc_window(timestamp):
            self.proc_casts[spell_id] = CastWindow(timestamp, target)
            logger.debug(f"Spell {spell_id} on {target} @{timestamp} consumed a proc window")
            return True
        return False

    def record_proc_fall(self, timestamp: int):
        """Record the proc buff falling off."""
        self.proc_fall_timestamp = timestamp

    def had_proc_window(self, timestamp: int) -> bool:
        return (
            self.proc_fall_timestamp is not None
            and self.proc_fall_timestamp + self.buffer_ms > timestamp
        )

    def cast_matches(self, spell_id: int, timestamp: int, target: Optional[str] = None) -> bool:
        """
        Check if an application at `timestamp` follows a cast of the spell.

        If `target` is given the cast must also have been on that target.
        """
        window = self.casts.get(spell_id)
        if window is None or not window.is_open(timestamp, self.buffer_ms):
            return False
        return target is None or window.target == target

    def proc_cast_off_target(self, spell_id: int, timestamp: int, target: Optional[str]) -> bool:
        """Check if a proc-window cast of the spell is open and went to another target."""
        window = self.proc_casts.get(spell_id)
        if window is None or not window.is_open(timestamp, self.buffer_ms):
            return False
        return window.target != target


class ConsumptionCounter:
    """A count armed by a trigger and used up one application at a time."""

    def __init__(self):
        self.remaining = 0

    def arm(self, count: int):
        self.remaining = count

    def consume(self) -> bool:
        """Use one charge. Returns False once the counter is exhausted."""
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True
