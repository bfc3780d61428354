"""
Participant registry: ordered, in-memory list of named participants.
No scheduling logic — insertion order is the base ordering fed to the scheduler.
"""
from __future__ import annotations

import logging
import uuid

from fixturegen.models import Participant

logger = logging.getLogger(__name__)


class ParticipantRegistry:
    """
    Insertion-ordered participants keyed by a generated id.
    generation increases on every membership change (add/remove) so derived
    schedules can tell whether they were built from the current snapshot.
    """

    def __init__(self) -> None:
        self._participants: list[Participant] = []
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id: object) -> bool:
        return any(p.id == participant_id for p in self._participants)

    def _index_of(self, participant_id: str) -> int | None:
        for i, p in enumerate(self._participants):
            if p.id == participant_id:
                return i
        return None

    def add(self, name: str) -> Participant | None:
        """Append a new participant. Blank name (after trimming) is a no-op."""
        name = (name or "").strip()
        if not name:
            logger.debug("Ignoring blank participant name")
            return None
        participant = Participant(id=str(uuid.uuid4()), name=name)
        self._participants.append(participant)
        self._generation += 1
        logger.info("Added participant %s (%s)", participant.name, participant.id)
        return participant

    def remove(self, participant_id: str) -> bool:
        """Remove by id. Unknown id is a no-op; returns whether anything was removed."""
        idx = self._index_of(participant_id)
        if idx is None:
            return False
        removed = self._participants.pop(idx)
        self._generation += 1
        logger.info("Removed participant %s (%s)", removed.name, removed.id)
        return True

    def attach_image(self, participant_id: str, image: str | None) -> bool:
        """Associate an opaque image with a participant. Does not change membership."""
        idx = self._index_of(participant_id)
        if idx is None:
            return False
        self._participants[idx] = self._participants[idx].with_image(image)
        return True

    def get(self, participant_id: str) -> Participant | None:
        idx = self._index_of(participant_id)
        return None if idx is None else self._participants[idx]

    def snapshot(self) -> tuple[Participant, ...]:
        return tuple(self._participants)

    def clear(self) -> None:
        if self._participants:
            self._participants.clear()
            self._generation += 1
