"""
Running totals for each mechanic HoT applications can be attributed to.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Any


@dataclass
class CausalSource:
    """
    Healing, mastery healing and proc count credited to one mechanic.

    All three counters only ever grow, and only through `increment`.
    """

    name: str
    healing: float = field(default=0, init=False)
    mastery_healing: float = field(default=0, init=False)
    procs: int = field(default=0, init=False)

    def increment(self, healing: float = 0, mastery_healing: float = 0, procs: int = 0):
        """Add to the running totals."""
        if healing < 0 or mastery_healing < 0 or procs < 0:
            raise ValueError(f"Totals of {self.name} can only increase")
        self.healing += healing
        self.mastery_healing += mastery_healing
        self.procs += procs

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "healing": self.healing,
            "mastery_healing": self.mastery_healing,
            "procs": self.procs,
        }


# Ledger keys
POTA_REJUVENATION = "pota_rejuvenation"
POTA_REGROWTH = "pota_regrowth"
TEARSTONE = "tearstone"
T19_4PC = "t19_4pc"
T21_4PC = "t21_4pc"  # Dreamer procs that would not have happened but for the 4pc
T21_2PC = "t21_2pc"  # all other Dreamer procs

SOURCE_NAMES = {
    POTA_REJUVENATION: "Power of the Archdruid (Rejuvenation)",
    POTA_REGROWTH: "Power of the Archdruid (Regrowth)",
    TEARSTONE: "Tearstone of Elune",
    T19_4PC: "Tier19 4pc",
    T21_4PC: "Tier21 4pc",
    T21_2PC: "Tier21 2pc",
}


class CausalSourceLedger:
    """
    The fixed set of named causal sources.

    Hardcasts have no entry here: healing from a hardcast HoT happened but
    is not credited to any proc.
    """

    def __init__(self):
        self._sources: Dict[str, CausalSource] = {
            key: CausalSource(name) for key, name in SOURCE_NAMES.items()
        }

    def get(self, key: str) -> CausalSource:
        """Get a source by ledger key."""
        return self._sources[key]

    def __getitem__(self, key: str) -> CausalSource:
        return self._sources[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sources)

    def items(self):
        return self._sources.items()

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        """Get a copy of every source's totals."""
        return {key: source.to_dict() for key, source in self._sources.items()}
