"""
HoT tracker: the event dispatcher of the attribution engine.
"""

from typing import Any, Dict, Iterable, Optional
import logging

from .catalog import EffectCatalog, build_catalog
from .healing import AmplificationDistributor, AmplificationModel, HarmonyMastery, HealingRecorder
from .instances import EffectInstance, EffectInstanceStore
from .ledger import CausalSourceLedger
from .resolver import AttributionResolver, ResolutionContext
from .windows import CastWindowTracker, ConsumptionCounter
from ..config.settings import AttributionSettings
from ..config.spells import Spell, get_spell_name
from ..models.combatant import CombatantRegistry
from ..parser.events import CombatEvent, EventType, format_timestamp

logger = logging.getLogger(__name__)


class HotTracker:
    """
    Tracks attribution of HoTs: what applied them and what boosted them.

    Events must be pushed in log order. Every event is handled to completion,
    including attribution and mastery redistribution, before the next one.
    Handlers never raise: data the tracker can't make sense of is logged and
    skipped.
    """

    def __init__(
        self,
        registry: Optional[CombatantRegistry] = None,
        settings: Optional[AttributionSettings] = None,
        ledger: Optional[CausalSourceLedger] = None,
        catalog: Optional[EffectCatalog] = None,
        amplification: Optional[AmplificationModel] = None,
    ):
        """
        Initialize the tracker.

        Args:
            registry: Combatant registry for entity lookups, gear and traits
            settings: Engine settings, defaults if not given
            ledger: Ledger to accumulate totals into, a fresh one if not given
            catalog: HoT catalog, built from the registry if not given
            amplification: Mastery model, HarmonyMastery from settings if not given
        """
        self.settings = settings or AttributionSettings()
        self.registry = registry or CombatantRegistry()
        self.ledger = ledger or CausalSourceLedger()
        # some HoT info depends on traits and so is derived once, here
        self.catalog = catalog or build_catalog(self.registry)

        self.store = EffectInstanceStore()
        self.windows = CastWindowTracker(self.settings.buffer_ms)
        self.t21_counter = ConsumptionCounter()
        self.resolver = AttributionResolver(
            self.ledger, self.windows, self.t21_counter, self.registry
        )
        self.recorder = HealingRecorder()
        self.distributor = AmplificationDistributor(
            amplification or HarmonyMastery(self.settings.mastery_per_stack)
        )

        self._handlers = {
            EventType.CAST: self.on_cast,
            EventType.APPLY: self.on_apply,
            EventType.REFRESH: self.on_refresh,
            EventType.REMOVE: self.on_remove,
            EventType.HEAL: self.on_heal,
        }

        self.events_processed = 0
        self.events_filtered = 0
        self.data_gaps = 0
        self.errors = 0

    def process(self, events: Iterable[CombatEvent]) -> "HotTracker":
        """Process a complete event sequence."""
        for event in events:
            self.process_event(event)
        return self

    def process_event(self, event: CombatEvent):
        """
        Dispatch a single event.

        Args:
            event: The next event in log order
        """
        self.events_processed += 1
        handler = self._handlers.get(event.type)
        if handler is None:
            return

        try:
            handler(event)
        except Exception as e:
            self.errors += 1
            logger.warning(
                f"Error handling {event.type.value} of {get_spell_name(event.ability_id)} "
                f"@{format_timestamp(event.timestamp)}: {e}"
            )

    def on_cast(self, event: CombatEvent):
        spell_id = event.ability_id

        # casts of the HoTs are remembered for attributing their applications later
        if spell_id in (Spell.REJUVENATION, Spell.REGROWTH, Spell.WILD_GROWTH):
            self.windows.record_cast(spell_id, event.timestamp, event.target_id)

    def on_apply(self, event: CombatEvent):
        if event.ability_id == Spell.AWAKENED:
            # 4t21 proc causes 5 Dreamer procs that would not otherwise have happened.
            # In reality there is usually a quick sequence of 6 Dreamers, one of which is
            # "natural"; we simplify by attributing the next 5 to 4t21.
            self.t21_counter.arm(self.settings.t21_proc_count)

        if not self._validate(event):
            return

        info = self.catalog[event.ability_id]
        instance = EffectInstance(
            spell_id=event.ability_id,
            target_id=event.target_id,
            start=event.timestamp,
            end=event.timestamp + info.duration,
        )
        self.store.put(instance)
        instance.attribution = self.resolver.resolve(self._context(event))

    def on_refresh(self, event: CombatEvent):
        if not self._validate(event):
            return

        instance = self._get_instance(event)
        if instance is None:
            return

        duration = self.catalog[event.ability_id].duration
        new_end_max = instance.end + duration
        pandemic_max = event.timestamp + duration * self.settings.pandemic_factor
        instance.end = min(new_end_max, pandemic_max)

        # refresh attribution is independent of what applied the HoT originally
        instance.attribution = self.resolver.resolve(self._context(event))
        instance.boosts = []

    def on_remove(self, event: CombatEvent):
        if event.ability_id == Spell.POWER_OF_THE_ARCHDRUID_BUFF:
            self.windows.record_proc_fall(event.timestamp)

        if not self._validate(event):
            return

        if self._get_instance(event) is None:
            return

        self.store.remove(event.target_id, event.ability_id)

    def on_heal(self, event: CombatEvent):
        if not self._validate(event):
            return

        instance = self._get_instance(event)
        if instance is None:
            return

        self.recorder.record(instance, event)
        others = self.store.others_on_target(event.target_id, event.ability_id)
        self.distributor.distribute(event, instance, others)

    def _validate(self, event: CombatEvent) -> bool:
        """Check whether an event concerns a tracked HoT on a tracked target."""
        if event.ability_id not in self.catalog:
            self.events_filtered += 1
            return False

        if not event.target_id:
            logger.debug(
                f"{get_spell_name(event.ability_id)} {event.type.value} to target without ID "
                f"@{format_timestamp(event.timestamp)}... HoT will not be tracked."
            )
            self.events_filtered += 1
            return False

        # target wasn't important (a pet probably)
        if self.registry.get_entity(event) is None:
            self.events_filtered += 1
            return False

        return True

    def _get_instance(self, event: CombatEvent) -> Optional[EffectInstance]:
        instance = self.store.get(event.target_id, event.ability_id)
        if instance is None:
            self.data_gaps += 1
            logger.warning(
                f"{get_spell_name(event.ability_id)} {event.type.value} on target ID "
                f"{event.target_id} @{format_timestamp(event.timestamp)} "
                f"but there's no record of the HoT being added..."
            )
        return instance

    @staticmethod
    def _context(event: CombatEvent) -> ResolutionContext:
        return ResolutionContext(
            spell_id=event.ability_id,
            target_id=event.target_id,
            timestamp=event.timestamp,
            prepull=event.prepull,
        )

    def get_stats(self) -> Dict[str, int]:
        """Get processing statistics."""
        return {
            "events_processed": self.events_processed,
            "events_filtered": self.events_filtered,
            "data_gaps": self.data_gaps,
            "unattributed": self.resolver.unattributed_count,
            "errors": self.errors,
            "live_hots": len(self.store),
        }

    def summary(self) -> Dict[str, Any]:
        """Get ledger totals and processing statistics."""
        return {
            "sources": self.ledger.snapshot(),
            "stats": self.get_stats(),
        }
