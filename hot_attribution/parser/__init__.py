"""
Combat log parser module for producing the attribution event stream.
"""

from .tokenizer import LineTokenizer
from .events import CombatEvent, EventFactory, EventType
from .reader import CombatLogReader

__all__ = ["LineTokenizer", "CombatEvent", "EventFactory", "EventType", "CombatLogReader"]
