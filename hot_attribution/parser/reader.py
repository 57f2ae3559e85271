"""
Combat log reader that turns a WoW combat log into the attribution event stream.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional
import logging

from .tokenizer import LineTokenizer, ParsedLine
from .events import CombatEvent, EventFactory, EventType
from ..config.spells import is_tracked_hot
from ..models.combatant import CombatantRegistry


logger = logging.getLogger(__name__)


class CombatLogReader:
    """
    Reads a combat log and yields the selected player's events in log order.

    COMBATANT_INFO lines register group members as tracked entities. For the
    selected player they also fill in equipped items and active buffs, and every
    tracked HoT listed among a combatant's auras is emitted as a prepull
    application so later refreshes and ticks have an instance to land on.
    """

    def __init__(self, player_guid: str, registry: Optional[CombatantRegistry] = None):
        """
        Initialize the reader.

        Args:
            player_guid: GUID of the player whose HoTs are attributed
            registry: Registry to populate from COMBATANT_INFO lines
        """
        self.player_guid = player_guid
        self.registry = registry or CombatantRegistry()
        self.registry.selected.guid = player_guid
        self.tokenizer = LineTokenizer()
        self.event_factory = EventFactory()
        self.events_read = 0
        self.parse_errors = []

    def read_file(self, file_path: str) -> Iterator[CombatEvent]:
        """
        Read a combat log file and yield events.

        Args:
            file_path: Path to the combat log file

        Yields:
            CombatEvent objects cast by the selected player
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Combat log file not found: {file_path}")

        logger.info(f"Reading {file_path.name} ({file_path.stat().st_size / 1024 / 1024:.1f} MB)")

        with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
            yield from self.read_lines(f)

        logger.info(
            f"Read {self.events_read:,} events, "
            f"{self.tokenizer.error_count} unparseable lines"
        )

    def read_lines(self, lines: Iterable[str]) -> Iterator[CombatEvent]:
        """Yield events from an iterable of raw log lines."""
        for line_number, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            try:
                parsed = self.tokenizer.parse_line(line)
            except (ValueError, IndexError) as e:
                if len(self.parse_errors) < 100:
                    self.parse_errors.append(f"Line {line_number}: {e}")
                continue

            if parsed is None:
                continue

            if parsed.event_type == "COMBATANT_INFO":
                yield from self._handle_combatant_info(parsed)
                continue

            event = self.event_factory.create_event(parsed)
            if event is None or event.source_id != self.player_guid:
                continue

            self.events_read += 1
            yield event

    def _handle_combatant_info(self, parsed: ParsedLine) -> Iterator[CombatEvent]:
        """Register the combatant and emit prepull applications for its HoTs."""
        params = parsed.suffix_params
        if not params or not params[0]:
            return

        guid = str(params[0])
        self.registry.register_entity(guid)
        timestamp = self.event_factory.to_offset(parsed.timestamp)

        # Items: [(item_id, item_level, gems, enchants, bonus_ids), ...]
        if guid == self.player_guid and len(params) > 26 and isinstance(params[26], list):
            for item in params[26]:
                if isinstance(item, tuple) and item and item[0]:
                    self.registry.selected.items.add(int(item[0]))

        # Auras: flat list of source_guid, spell_id, stacks
        if len(params) > 27 and isinstance(params[27], list):
            auras = params[27]
            for i in range(0, len(auras) - 2, 3):
                source_guid, spell_id = auras[i], auras[i + 1]
                if not isinstance(spell_id, int):
                    continue

                if guid == self.player_guid:
                    self.registry.selected.buffs.add(spell_id)

                if source_guid == self.player_guid and is_tracked_hot(spell_id):
                    self.events_read += 1
                    yield CombatEvent(
                        type=EventType.APPLY,
                        timestamp=timestamp,
                        ability_id=spell_id,
                        source_id=self.player_guid,
                        target_id=guid,
                        prepull=True,
                    )
