"""
Line tokenizer for parsing WoW combat log lines.
"""

import re
from datetime import datetime
from typing import List, Tuple, Optional, Dict, Any
from dataclasses import dataclass


@dataclass
class ParsedLine:
    """Represents a parsed combat log line."""

    timestamp: datetime
    event_type: str
    base_params: List[Any]
    prefix_params: List[Any]
    suffix_params: List[Any]
    raw_line: str


class LineTokenizer:
    """
    Tokenizes individual lines from WoW combat logs.

    Handles the CSV-like format with quoted names and the nested arrays and
    tuples found in COMBATANT_INFO lines.
    """

    # Format: "M/D/YYYY HH:MM:SS.mmm-Z  EVENT_TYPE,params..."
    LINE_PATTERN = re.compile(
        r"^(\d{1,2}/\d{1,2}/\d{4}\s+\d{1,2}:\d{2}:\d{2}\.\d{3})(?:[-+]\d+)?\s\s(.+)$"
    )

    # sourceGUID through destRaidFlags
    BASE_PARAM_COUNT = 8

    # Events without source/dest parameters
    META_EVENTS = {
        "COMBAT_LOG_VERSION",
        "ZONE_CHANGE",
        "MAP_CHANGE",
        "ENCOUNTER_START",
        "ENCOUNTER_END",
        "CHALLENGE_MODE_START",
        "CHALLENGE_MODE_END",
        "COMBATANT_INFO",
    }

    # Advanced Combat Logging unit fields inserted before heal amounts
    ACL_FIELD_COUNT = 18
    ACL_MIN_HEAL_PARAMS = 22

    def __init__(self):
        self.line_count = 0
        self.error_count = 0

    def parse_line(self, line: str) -> Optional[ParsedLine]:
        """
        Parse a single combat log line into structured components.

        Args:
            line: Raw line from combat log file

        Returns:
            ParsedLine object or None if parsing fails
        """
        self.line_count += 1

        line = line.rstrip()
        if not line:
            return None

        match = self.LINE_PATTERN.match(line)
        if not match:
            self.error_count += 1
            return None

        timestamp_str, rest = match.groups()

        try:
            timestamp = datetime.strptime(timestamp_str, "%m/%d/%Y %H:%M:%S.%f")
        except ValueError:
            self.error_count += 1
            return None

        params = [self._convert(token) for token in self._split_top_level(rest)]
        if not params:
            self.error_count += 1
            return None

        event_type = params[0]
        remaining = params[1:]

        if event_type in self.META_EVENTS:
            base_params, prefix_params, suffix_params = [], [], remaining
        else:
            base_params = remaining[: self.BASE_PARAM_COUNT]
            remaining = remaining[self.BASE_PARAM_COUNT :]
            prefix_params, suffix_params = self._parse_event_params(event_type, remaining)

        return ParsedLine(
            timestamp=timestamp,
            event_type=event_type,
            base_params=base_params,
            prefix_params=prefix_params,
            suffix_params=suffix_params,
            raw_line=line,
        )

    def _split_top_level(self, content: str) -> List[str]:
        """
        Split a string on commas that are not quoted or nested in brackets/parens.

        Args:
            content: Comma-separated parameter string

        Returns:
            List of raw tokens
        """
        tokens = []
        current = []
        depth = 0
        in_quotes = False

        for char in content:
            if char == '"' and (not current or current[-1] != "\\"):
                in_quotes = not in_quotes
            elif not in_quotes:
                if char in "[(":
                    depth += 1
                elif char in "])":
                    depth -= 1
                elif char == "," and depth == 0:
                    tokens.append("".join(current).strip())
                    current = []
                    continue
            current.append(char)

        if current:
            tokens.append("".join(current).strip())

        return tokens

    def _convert(self, token: str) -> Any:
        """
        Convert a raw token to a Python value.

        Quoted strings lose their quotes, nil becomes None, arrays become lists,
        tuples become tuples and numbers and flags become ints or floats.
        """
        if token.startswith('"') and token.endswith('"') and len(token) >= 2:
            return token[1:-1]
        if token == "nil":
            return None
        if token.startswith("[") and token.endswith("]"):
            return [self._convert(t) for t in self._split_top_level(token[1:-1]) if t]
        if token.startswith("(") and token.endswith(")"):
            return tuple(self._convert(t) for t in self._split_top_level(token[1:-1]) if t)
        if token in ("true", "false"):
            return token == "true"

        try:
            return int(token)
        except ValueError:
            pass

        try:
            return float(token)
        except ValueError:
            pass

        if token.startswith("0x"):
            try:
                return int(token, 16)
            except ValueError:
                pass

        return token

    def _parse_event_params(
        self, event_type: str, params: List[Any]
    ) -> Tuple[List[Any], List[Any]]:
        """
        Split remaining parameters into prefix-specific and suffix-specific.

        SPELL events carry spellId, spellName and spellSchool as prefix. Heal
        suffixes are preceded by Advanced Combat Logging unit fields when
        ACL is enabled, which are skipped.
        """
        prefix_params = []
        if event_type.startswith("SPELL_") and len(params) >= 3:
            prefix_params = params[:3]
            params = params[3:]

        if "HEAL" in event_type and len(params) >= self.ACL_MIN_HEAL_PARAMS:
            params = params[self.ACL_FIELD_COUNT :]

        return prefix_params, params

    def get_stats(self) -> Dict[str, int]:
        """
        Get parsing statistics.

        Returns:
            Dictionary with line_count and error_count
        """
        return {
            "lines_processed": self.line_count,
            "errors": self.error_count,
            "success_rate": (self.line_count - self.error_count) / max(self.line_count, 1),
        }
