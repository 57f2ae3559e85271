"""
Crediting HoT healing to causal sources.

Healing of an instance goes to its own attribution and boosts. The mastery
bonus a heal gets from other HoTs on the same target is credited to the
sources of those other HoTs.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from .instances import EffectInstance, Tick
from ..parser.events import CombatEvent

logger = logging.getLogger(__name__)


def calculate_effective_healing(event: CombatEvent, relative_increase: float) -> float:
    """
    Effective healing a relative healing increase contributed to a heal.

    Overhealing is taken off the increase first, since the increased part of
    the heal is what pushed it over.

    Args:
        event: The heal event
        relative_increase: The increase, e.g. 0.1 for +10%

    Returns:
        Effective healing attributable to the increase
    """
    raw = event.raw_healing
    increase = raw - raw / (1 + relative_increase)
    return max(0.0, increase - event.overheal)


class AmplificationModel(ABC):
    """Decomposes a heal into the part contributed by stacking HoTs."""

    @abstractmethod
    def decompose_stack_amplification(self, event: CombatEvent, stacks: int) -> float:
        """
        Healing one stack contributed to a heal.

        Args:
            event: The heal event
            stacks: Number of HoTs on the target when the heal landed

        Returns:
            Healing attributable to a single stack
        """
        pass


class HarmonyMastery(AmplificationModel):
    """
    Restoration Druid mastery: every HoT on the target increases healing
    by the same amount.
    """

    def __init__(self, mastery_per_stack: float):
        self.mastery_per_stack = mastery_per_stack

    def decompose_stack_amplification(self, event: CombatEvent, stacks: int) -> float:
        if stacks <= 0 or self.mastery_per_stack <= 0:
            return 0.0
        base_healing = event.effective_healing / (1 + stacks * self.mastery_per_stack)
        return base_healing * self.mastery_per_stack


class HealingRecorder:
    """Applies a heal to the instance it came from."""

    def record(self, instance: EffectInstance, event: CombatEvent) -> int:
        """
        Credit an instance's attribution and boosts with a heal.

        Direct heals (e.g. the initial heal of a procced Regrowth) still count
        toward attribution but are not tracked as ticks.

        Returns:
            The healing recorded
        """
        healing = event.effective_healing
        if event.tick:
            instance.ticks.append(Tick(healing=healing, timestamp=event.timestamp))

        for source in instance.attributions:
            source.increment(healing=healing)

        for boost in instance.boosts:
            boost.source.increment(mastery_healing=calculate_effective_healing(event, boost.boost))

        # TODO credit HoT extensions once extension tracking fills instance.extensions
        return healing


class AmplificationDistributor:
    """Credits the one-stack mastery share of a heal to the other HoTs' sources."""

    def __init__(self, model: AmplificationModel):
        self.model = model

    def distribute(
        self, event: CombatEvent, instance: EffectInstance, others: List[EffectInstance]
    ) -> float:
        """
        Credit each other instance's attribution with one stack of the heal.

        Boosts get nothing here: the HoT was there with or without the boost.

        Args:
            event: The heal event
            instance: The instance that healed
            others: Every other live instance on the same target

        Returns:
            The one-stack share
        """
        share = self.model.decompose_stack_amplification(event, len(others) + 1)
        if share <= 0:
            return 0.0

        for other in others:
            for source in other.attributions:
                source.increment(mastery_healing=share)

        logger.debug(
            f"Mastery share {share:.1f} of spell {instance.spell_id} "
            f"credited to {len(others)} other HoTs on {instance.target_id}"
        )
        return share
