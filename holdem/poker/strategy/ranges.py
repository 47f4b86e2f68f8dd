"""
Preflop range tables for AI opponents.

A range maps canonical starting-hand notations ("AA", "AKs", "T9o") to a
play frequency and a preferred action. Ranges are named and versioned; the
trainer's range editor writes them through ``RangeRegistry`` and the AI only
reads them.
"""

import logging
import threading
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from holdem.exceptions import ConfigurationError, MalformedRangeError
from holdem.poker.core.cards import RANK_CHARS, Card

logger = logging.getLogger(__name__)

RANK_ORDER = "AKQJT98765432"
RANGE_ACTIONS = ("raise", "call", "fold")


def all_hand_notations() -> List[str]:
    """The 169 canonical starting hands in range-matrix order.

    Row and column follow ``RANK_ORDER``; the diagonal holds pairs, cells
    above it suited hands and cells below it offsuit hands.
    """
    notations = []
    for row, high in enumerate(RANK_ORDER):
        for col, low in enumerate(RANK_ORDER):
            if row == col:
                notations.append(high + low)
            elif col > row:
                notations.append(f"{high}{low}s")
            else:
                notations.append(f"{low}{high}o")
    return notations


VALID_NOTATIONS = frozenset(all_hand_notations())


def is_valid_notation(notation: Any) -> bool:
    return isinstance(notation, str) and notation in VALID_NOTATIONS


def hand_notation(cards: Sequence[Card]) -> Optional[str]:
    """Canonical notation for two hole cards, higher rank first; None otherwise."""
    if len(cards) != 2:
        return None
    first, second = sorted(cards, key=lambda c: c.rank, reverse=True)
    high, low = RANK_CHARS[first.rank], RANK_CHARS[second.rank]
    if high == low:
        return high + low
    return f"{high}{low}{'s' if first.suit == second.suit else 'o'}"


@dataclass(frozen=True)
class RangeEntry:
    """How often to play one starting hand, and how."""

    hand: str
    frequency: float
    action: str = "call"

    def problem(self) -> Optional[str]:
        """Describe what is wrong with this entry, or None if it is valid."""
        if not is_valid_notation(self.hand):
            return f"{self.hand!r} is not a two-card hand notation"
        if isinstance(self.frequency, bool) or not isinstance(self.frequency, (int, float)):
            return f"{self.hand}: frequency must be a number"
        if not 0.0 <= self.frequency <= 1.0:
            return f"{self.hand}: frequency {self.frequency} outside [0, 1]"
        if self.action not in RANGE_ACTIONS:
            return f"{self.hand}: unknown action {self.action!r}"
        return None

    def to_dict(self) -> dict:
        return {"hand": self.hand, "frequency": self.frequency, "action": self.action}


@dataclass(frozen=True)
class AIRange:
    """A named, versioned preflop range.

    Construction never fails; problems surface as ``MalformedRangeError``
    from ``validate`` and ``lookup`` so that a bad table degrades the AI
    instead of breaking the table.
    """

    name: str
    entries: Tuple[RangeEntry, ...] = ()
    version: int = 1
    description: str = ""

    @cached_property
    def _index(self) -> Dict[str, RangeEntry]:
        return {entry.hand: entry for entry in self.entries}

    @cached_property
    def problems(self) -> List[str]:
        found = [p for p in (entry.problem() for entry in self.entries) if p]
        seen = set()
        for entry in self.entries:
            if entry.hand in seen:
                found.append(f"{entry.hand}: listed more than once")
            seen.add(entry.hand)
        return found

    def validate(self) -> "AIRange":
        if self.problems:
            raise MalformedRangeError(
                f"Range {self.name!r} has {len(self.problems)} malformed entries: "
                + "; ".join(self.problems[:5]),
                bad_entries=self.problems,
            )
        return self

    def lookup(self, notation: str) -> Optional[RangeEntry]:
        """Entry for a hand notation, None when the hand is not in the range."""
        self.validate()
        return self._index.get(notation)

    @property
    def hands(self) -> Dict[str, RangeEntry]:
        return dict(self._index)

    @property
    def coverage(self) -> float:
        """Share of the 169 starting hands that appear in the range."""
        return len(self._index) / len(VALID_NOTATIONS)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "hands": [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AIRange":
        """Build a range from its serialized form.

        ``hands`` may be a list of ``{"hand", "frequency", "action"}`` objects
        or a mapping of notation to ``{"frequency", "action"}``.
        """
        try:
            hands = data.get("hands", [])
            if isinstance(hands, Mapping):
                hands = [dict(value, hand=key) for key, value in hands.items()]
            entries = tuple(
                RangeEntry(
                    hand=item["hand"],
                    frequency=item.get("frequency", 1.0),
                    action=item.get("action", "call"),
                )
                for item in hands
            )
            return cls(
                name=str(data["name"]),
                entries=entries,
                version=int(data.get("version", 1)),
                description=str(data.get("description", "")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedRangeError(f"Cannot read range definition: {e}") from e


def _groups(name: str, description: str, groups: Iterable[Tuple[float, str, str]]) -> AIRange:
    """Build a range from (frequency, action, "hand hand ...") groups."""
    entries = []
    for frequency, action, hands in groups:
        entries.extend(RangeEntry(hand, frequency, action) for hand in hands.split())
    return AIRange(name=name, entries=tuple(entries), description=description)


_LOOSE_GROUPS = [
    (1.0, "raise", "AA KK QQ JJ TT 99 88 77 AKs AQs AJs ATs A9s KQs KJs KTs QJs QTs"),
    (1.0, "raise", "AKo AQo AJo ATo KQo"),
    (1.0, "call", "66 55 44 33 22 A8s A7s A6s A5s A4s A3s A2s JTs T9s 98s"),
    (0.9, "call", "K9s 87s"),
    (0.9, "raise", "KJo"),
    (0.8, "call", "Q9s J9s T8s 76s A9o QJo"),
    (0.7, "call", "K8s 97s 65s KTo JTo"),
    (0.6, "call", "K7s Q8s 86s 54s A8o QTo"),
    (0.5, "call", "K6s 75s A7o A5o K9o"),
    (0.4, "call", "K5s A6o"),
]

PREDEFINED_RANGES: Dict[str, AIRange] = {
    "ultraTight": _groups(
        "ultraTight",
        "Ultra Tight (2%)",
        [(1.0, "raise", "AA KK AKs"), (0.8, "raise", "QQ AKo")],
    ),
    "tight": _groups(
        "tight",
        "Tight (8%)",
        [
            (1.0, "raise", "AA KK QQ JJ AKs AQs AKo"),
            (0.9, "raise", "TT AJs"),
            (0.8, "raise", "KQs AQo"),
            (0.7, "raise", "99"),
        ],
    ),
    "standard": _groups(
        "standard",
        "Standard (15%)",
        [
            (1.0, "raise", "AA KK QQ JJ TT 99 AKs AQs AJs KQs AKo AQo"),
            (0.9, "raise", "88 ATs KJs QJs AJo"),
            (0.8, "raise", "77 KQo"),
            (0.8, "call", "JTs"),
            (0.7, "call", "66 A9s KTs QTs ATo"),
            (0.6, "call", "55 A8s A5s T9s KJo"),
            (0.5, "call", "44 A7s A4s K9s 98s QJo"),
            (0.4, "call", "33 A6s A3s A2s"),
            (0.3, "call", "22"),
        ],
    ),
    "loose": _groups("loose", "Loose (25%)", _LOOSE_GROUPS),
    "veryLoose": _groups(
        "veryLoose",
        "Very Loose (40%)",
        _LOOSE_GROUPS
        + [
            (0.5, "call", "K4s K3s K2s Q7s Q6s J8s T7s 96s 85s 64s 53s 43s"),
            (0.4, "call", "A4o A3o A2o K8o Q9o J9o T9o 98o"),
            (0.3, "call", "Q5s J7s 74s 63s 52s 42s K7o Q8o J8o T8o 87o"),
        ],
    ),
}


def default_range_name(fold_threshold: float) -> str:
    """Predefined range matching a fold threshold, tightest first."""
    if fold_threshold > 0.7:
        return "ultraTight"
    if fold_threshold > 0.5:
        return "tight"
    if fold_threshold > 0.3:
        return "standard"
    return "loose"


class RangeRegistry:
    """Named range tables shared by the tables of one server.

    Predefined ranges are read-only. Registering a custom range under an
    existing custom name replaces it and bumps its version.
    """

    def __init__(self, include_predefined: bool = True):
        self._lock = threading.Lock()
        self._predefined: Dict[str, AIRange] = dict(PREDEFINED_RANGES) if include_predefined else {}
        self._custom: Dict[str, AIRange] = {}

    def get(self, name: Optional[str]) -> Optional[AIRange]:
        if name is None:
            return None
        with self._lock:
            return self._custom.get(name) or self._predefined.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._predefined) + [n for n in self._custom if n not in self._predefined]

    def is_predefined(self, name: str) -> bool:
        return name in self._predefined

    def register(self, ai_range: AIRange) -> AIRange:
        """Validate and store a custom range, returning the stored version."""
        ai_range.validate()
        if self.is_predefined(ai_range.name):
            raise ConfigurationError(f"Range {ai_range.name!r} is built in and cannot be replaced")
        with self._lock:
            previous = self._custom.get(ai_range.name)
            version = previous.version + 1 if previous else max(ai_range.version, 1)
            stored = AIRange(
                name=ai_range.name,
                entries=ai_range.entries,
                version=version,
                description=ai_range.description,
            )
            self._custom[ai_range.name] = stored
        logger.info(f"Registered range {stored.name!r} v{stored.version} ({len(stored.entries)} hands)")
        return stored

    def remove(self, name: str) -> bool:
        if self.is_predefined(name):
            raise ConfigurationError(f"Range {name!r} is built in and cannot be removed")
        with self._lock:
            return self._custom.pop(name, None) is not None


# Used when no registry is supplied
DEFAULT_RANGE_REGISTRY = RangeRegistry()


__all__ = [
    "AIRange",
    "DEFAULT_RANGE_REGISTRY",
    "PREDEFINED_RANGES",
    "RANGE_ACTIONS",
    "RangeEntry",
    "RangeRegistry",
    "all_hand_notations",
    "default_range_name",
    "hand_notation",
    "is_valid_notation",
]
