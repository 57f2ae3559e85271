"""
Attribution of HoT applications to the mechanic that produced them.

Each HoT family has an ordered chain of rules. Rules are evaluated top to
bottom and the first match decides the attribution, so the order of a chain
is its tie-break order. At most one named source is credited per application.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import logging

from .instances import HARDCAST, UNATTRIBUTED, Attribution, Named
from .ledger import (
    CausalSourceLedger,
    POTA_REGROWTH,
    POTA_REJUVENATION,
    T19_4PC,
    T21_2PC,
    T21_4PC,
    TEARSTONE,
)
from .windows import CastWindowTracker, ConsumptionCounter
from ..config.spells import Item, Spell, get_spell_name
from ..models.combatant import CombatantRegistry
from ..parser.events import format_timestamp

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """The application being attributed."""

    spell_id: int
    target_id: str
    timestamp: int
    prepull: bool = False


@dataclass
class AttributionRule:
    """
    One step of a priority chain.

    `source` is a ledger key, or None for an uncredited outcome. `on_match`
    runs only when the rule wins. `warn` marks the catch-all of a chain that
    could not explain the application.
    """

    name: str
    matches: Callable[[ResolutionContext], bool]
    source: Optional[str] = None
    on_match: Optional[Callable[[], object]] = None
    warn: bool = False


def _always(ctx: ResolutionContext) -> bool:
    return True


class AttributionResolver:
    """Decides the causal source of new and refreshed HoT applications."""

    def __init__(
        self,
        ledger: CausalSourceLedger,
        windows: CastWindowTracker,
        counter: ConsumptionCounter,
        registry: CombatantRegistry,
    ):
        self.ledger = ledger
        self.windows = windows
        self.counter = counter

        # Gear and set bonus are read once when the pass starts
        self.has_tearstone = registry.has_item(Item.TEARSTONE_OF_ELUNE)
        self.has_4t19 = registry.has_buff(Spell.RESTO_DRUID_T19_4SET_BONUS_BUFF)

        self.unattributed_count = 0
        self.chains = self._build_chains()

    def _build_chains(self) -> Dict[int, List[AttributionRule]]:
        windows = self.windows

        rejuvenation = [
            AttributionRule(
                "Hardcast",
                # prepull applications are assumed to be hardcast
                lambda c: c.prepull
                or windows.cast_matches(Spell.REJUVENATION, c.timestamp, c.target_id),
            ),
            AttributionRule(
                "Power of the Archdruid",
                # PotA proc but not the primary target
                lambda c: windows.proc_cast_off_target(Spell.REJUVENATION, c.timestamp, c.target_id),
                source=POTA_REJUVENATION,
            ),
            AttributionRule(
                "Tearstone of Elune",
                lambda c: self.has_tearstone
                and windows.cast_matches(Spell.WILD_GROWTH, c.timestamp),
                source=TEARSTONE,
            ),
            AttributionRule("Tier19 4pc", lambda c: self.has_4t19, source=T19_4PC),
            AttributionRule("Unattributed", _always, warn=True),
        ]

        regrowth = [
            AttributionRule(
                "Hardcast",
                lambda c: c.prepull
                or windows.cast_matches(Spell.REGROWTH, c.timestamp, c.target_id),
            ),
            AttributionRule(
                "Power of the Archdruid",
                lambda c: windows.proc_cast_off_target(Spell.REGROWTH, c.timestamp, c.target_id),
                source=POTA_REGROWTH,
            ),
            AttributionRule("Unattributed", _always, warn=True),
        ]

        dreamer = [
            AttributionRule(
                "Tier21 4pc",
                lambda c: self.counter.remaining > 0,
                source=T21_4PC,
                on_match=self.counter.consume,
            ),
            AttributionRule("Tier21 2pc", _always, source=T21_2PC),
        ]

        return {
            Spell.REJUVENATION: rejuvenation,
            Spell.REJUVENATION_GERMINATION: rejuvenation,
            Spell.REGROWTH: regrowth,
            Spell.DREAMER: dreamer,
        }

    def resolve(self, ctx: ResolutionContext) -> Attribution:
        """
        Attribute an application, crediting the winning source with one proc.

        HoTs without a chain are always hardcast.
        """
        rules = self.chains.get(ctx.spell_id)
        if rules is None:
            self._log_attribution(ctx, "NONE")
            return HARDCAST

        for rule in rules:
            if rule.matches(ctx):
                return self._apply(rule, ctx)

        # every chain ends in a catch-all
        raise AssertionError(f"No rule matched for spell {ctx.spell_id}")

    def _apply(self, rule: AttributionRule, ctx: ResolutionContext) -> Attribution:
        if rule.on_match is not None:
            rule.on_match()

        if rule.warn:
            self.unattributed_count += 1
            logger.warning(
                f"Unable to attribute {get_spell_name(ctx.spell_id)} "
                f"@{format_timestamp(ctx.timestamp)} on {ctx.target_id}"
            )
            return UNATTRIBUTED

        self._log_attribution(ctx, rule.name)

        if rule.source is None:
            return HARDCAST

        source = self.ledger.get(rule.source)
        source.increment(procs=1)
        return Named(source)

    def _log_attribution(self, ctx: ResolutionContext, name: str):
        logger.debug(
            f"{get_spell_name(ctx.spell_id)} on {ctx.target_id} "
            f"@{format_timestamp(ctx.timestamp)} attributed to {name}"
        )
