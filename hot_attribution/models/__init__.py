"""
Data models for HoT attribution.
"""

from .combatant import Combatant, CombatantRegistry, Entity

__all__ = [
    "Combatant",
    "CombatantRegistry",
    "Entity",
]
