"""
Tournament service: owns the participant registry and the derived schedule.
Registry mutations invalidate the schedule; generation replaces it wholesale.
"""
from __future__ import annotations

import logging
import threading

from fixturegen.models import EMPTY_SCHEDULE, Fixture, Participant, Schedule, ScheduleSummary
from fixturegen.services.registry import ParticipantRegistry
from fixturegen.services.scheduling import generate_schedule, summarize

logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 2

# ---------- Exceptions ----------


class NotEnoughParticipantsError(ValueError):
    """Schedule generation needs at least two participants."""


# ---------- TournamentService ----------


class TournamentService:
    """
    Single tournament instance: registry, home/away flag and current schedule.
    Mutations and generation are serialized by one lock so readers never see a
    schedule built from a stale registry snapshot.
    """

    def __init__(self, doubled: bool = False) -> None:
        self._registry = ParticipantRegistry()
        self._doubled = doubled
        self._schedule: Schedule = EMPTY_SCHEDULE
        self._lock = threading.RLock()

    # ---------- Participants ----------

    def add_participant(self, name: str) -> Participant | None:
        with self._lock:
            participant = self._registry.add(name)
            if participant is not None:
                self._invalidate()
            return participant

    def remove_participant(self, participant_id: str) -> bool:
        with self._lock:
            removed = self._registry.remove(participant_id)
            if removed:
                self._invalidate()
            return removed

    def attach_image(self, participant_id: str, image: str | None) -> Participant | None:
        """Attach image data; returns the updated participant or None if unknown."""
        with self._lock:
            if not self._registry.attach_image(participant_id, image):
                return None
            return self._registry.get(participant_id)

    def get_participant(self, participant_id: str) -> Participant | None:
        with self._lock:
            return self._registry.get(participant_id)

    def list_participants(self) -> list[Participant]:
        with self._lock:
            return list(self._registry.snapshot())

    def participant_count(self) -> int:
        with self._lock:
            return len(self._registry)

    # ---------- Home/away mode ----------

    @property
    def doubled(self) -> bool:
        return self._doubled

    def set_doubled(self, doubled: bool) -> None:
        with self._lock:
            if doubled != self._doubled:
                self._doubled = doubled
                self._invalidate()

    # ---------- Guards ----------

    def can_generate(self) -> bool:
        return self.participant_count() >= MIN_PARTICIPANTS

    def assert_can_generate(self) -> None:
        """Raise if there are too few participants to schedule."""
        count = self.participant_count()
        if count < MIN_PARTICIPANTS:
            raise NotEnoughParticipantsError(
                f"Need at least {MIN_PARTICIPANTS} participants to generate fixtures (have {count})"
            )

    # ---------- Scheduling ----------

    def generate(self, doubled: bool | None = None, strict: bool = False) -> Schedule:
        """
        Recompute the whole schedule from the current registry snapshot.
        doubled overrides (and updates) the home/away flag when given.
        Fewer than 2 participants is a no-op: the schedule stays empty.
        With strict=True that case raises NotEnoughParticipantsError instead,
        checked under the same lock as the generation itself.
        """
        with self._lock:
            if strict:
                self.assert_can_generate()
            if doubled is not None:
                self.set_doubled(doubled)
            snapshot = self._registry.snapshot()
            if len(snapshot) < MIN_PARTICIPANTS:
                logger.debug("Skipping generation: %d participants", len(snapshot))
                return self._schedule
            self._schedule = generate_schedule(
                snapshot, doubled=self._doubled, generation=self._registry.generation
            )
            return self._schedule

    def get_schedule(self) -> Schedule:
        with self._lock:
            if self._schedule.generation != self._registry.generation:
                return EMPTY_SCHEDULE
            return self._schedule

    def get_fixtures_by_gameweek(self, gameweek: int) -> list[Fixture]:
        """Fixtures for one gameweek; empty for any gameweek the schedule lacks."""
        return self.get_schedule().fixtures_for_gameweek(gameweek)

    def list_gameweeks(self) -> list[int]:
        return self.get_schedule().gameweeks()

    def summary(self) -> ScheduleSummary:
        with self._lock:
            return summarize(len(self._registry), self._doubled)

    def reset(self) -> None:
        with self._lock:
            self._registry.clear()
            self._invalidate()

    def _invalidate(self) -> None:
        if not self._schedule.is_empty:
            logger.info("Registry changed; clearing schedule")
        self._schedule = EMPTY_SCHEDULE
