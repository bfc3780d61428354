"""
Service layer: registry, scheduling engine and the tournament state owner.
No HTTP or rendering concerns here.
"""
from .registry import ParticipantRegistry
from .scheduling import generate_schedule, round_robin_pairings, summarize
from .tournament_service import (
    TournamentService,
    NotEnoughParticipantsError,
)

__all__ = [
    "ParticipantRegistry",
    "generate_schedule",
    "round_robin_pairings",
    "summarize",
    "TournamentService",
    "NotEnoughParticipantsError",
]
