"""
HoT attribution engine.
"""

from .catalog import EffectCatalog, HotInfo, build_catalog
from .engine import HotTracker
from .healing import AmplificationModel, HarmonyMastery, calculate_effective_healing
from .instances import HARDCAST, UNATTRIBUTED, EffectInstance, EffectInstanceStore, Hardcast, Named
from .ledger import CausalSource, CausalSourceLedger
from .resolver import AttributionResolver, AttributionRule, ResolutionContext

__all__ = [
    "EffectCatalog",
    "HotInfo",
    "build_catalog",
    "HotTracker",
    "AmplificationModel",
    "HarmonyMastery",
    "calculate_effective_healing",
    "HARDCAST",
    "UNATTRIBUTED",
    "EffectInstance",
    "EffectInstanceStore",
    "Hardcast",
    "Named",
    "CausalSource",
    "CausalSourceLedger",
    "AttributionResolver",
    "AttributionRule",
    "ResolutionContext",
]
