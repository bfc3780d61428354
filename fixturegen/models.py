"""
Data models for the fixture generator.
Domain objects only — no scheduling, HTTP or rendering logic.

Participants are registered in insertion order; a schedule is derived state
built from a snapshot of them and is never patched in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterator


# ---------- Participant ----------
@dataclass(frozen=True)
class Participant:
    """
    A named entrant in the tournament.
    image is an opaque avatar reference (data URL, path, ...); never inspected.
    """
    id: str
    name: str
    image: str | None = None

    def with_image(self, image: str | None) -> Participant:
        return replace(self, image=image)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "image": self.image}


# ---------- Fixture ----------
@dataclass(frozen=True)
class Fixture:
    """
    One scheduled match within a gameweek.
    home/away order is meaningful in doubled mode; it does not imply a result.
    """
    id: str
    gameweek: int  # 1-based
    home: Participant
    away: Participant

    def pair_key(self) -> frozenset[str]:
        """Unordered pair of participant ids."""
        return frozenset((self.home.id, self.away.id))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gameweek": self.gameweek,
            "home": self.home.to_dict(),
            "away": self.away.to_dict(),
        }


# ---------- Schedule ----------
@dataclass(frozen=True)
class Schedule:
    """
    Complete fixture set in emission order.
    round_count is the number of gameweeks in one half (0 when empty).
    generation is the registry generation the schedule was built from.
    """
    fixtures: tuple[Fixture, ...] = field(default_factory=tuple)
    doubled: bool = False
    round_count: int = 0
    generation: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.fixtures

    def __len__(self) -> int:
        return len(self.fixtures)

    def __iter__(self) -> Iterator[Fixture]:
        return iter(self.fixtures)

    def by_gameweek(self) -> dict[int, list[Fixture]]:
        grouped: dict[int, list[Fixture]] = {}
        for f in self.fixtures:
            grouped.setdefault(f.gameweek, []).append(f)
        return grouped

    def fixtures_for_gameweek(self, gameweek: int) -> list[Fixture]:
        return [f for f in self.fixtures if f.gameweek == gameweek]

    def gameweeks(self) -> list[int]:
        return sorted({f.gameweek for f in self.fixtures})

    def to_dict(self) -> dict[str, Any]:
        return {
            "doubled": self.doubled,
            "round_count": self.round_count,
            "total_matches": len(self.fixtures),
            "gameweeks": [
                {"gameweek": g, "fixtures": [f.to_dict() for f in fs]}
                for g, fs in sorted(self.by_gameweek().items())
            ],
        }


EMPTY_SCHEDULE = Schedule()


# ---------- ScheduleSummary ----------
@dataclass(frozen=True)
class ScheduleSummary:
    """Closed-form totals for N participants, shown before generating."""
    participant_count: int
    doubled: bool
    total_matches: int
    total_gameweeks: int
    matches_per_gameweek: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "participant_count": self.participant_count,
            "doubled": self.doubled,
            "total_matches": self.total_matches,
            "total_gameweeks": self.total_gameweeks,
            "matches_per_gameweek": self.matches_per_gameweek,
        }
