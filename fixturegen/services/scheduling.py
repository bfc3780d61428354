"""
Deterministic round-robin schedule generation.

Round-robin is used so every participant meets every other participant exactly
once per half; a half lasts N-1 gameweeks (N even) or N gameweeks (N odd). Each
participant plays at most one match per gameweek.

BYE handling: when the number of participants is odd, we add a virtual BYE to
the working list. Whoever is paired with BYE sits that gameweek out; the pairing
produces no fixture and BYE never leaves this module.

Uses the circle method: fix the first slot, rotate the others each gameweek.
Doubled (home/away) mode replays the first half with each pair's order swapped,
gameweek-for-gameweek, offset by the number of rounds in a half.
"""
from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from fixturegen.models import EMPTY_SCHEDULE, Fixture, Participant, Schedule, ScheduleSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Sentinel for bye when number of participants is odd
BYE = object()


def round_count_for(n: int) -> int:
    """Rounds (gameweeks) in one half for n participants."""
    if n < 2:
        return 0
    return n - 1 if n % 2 == 0 else n


def total_matches(n: int, doubled: bool = False) -> int:
    if n < 2:
        return 0
    return n * (n - 1) // 2 * (2 if doubled else 1)


def total_gameweeks(n: int, doubled: bool = False) -> int:
    return round_count_for(n) * (2 if doubled else 1)


def matches_per_gameweek(n: int) -> int:
    return n // 2 if n >= 2 else 0


def summarize(n: int, doubled: bool = False) -> ScheduleSummary:
    return ScheduleSummary(
        participant_count=n,
        doubled=doubled,
        total_matches=total_matches(n, doubled),
        total_gameweeks=total_gameweeks(n, doubled),
        matches_per_gameweek=matches_per_gameweek(n),
    )


def round_robin_pairings(items: Sequence[T], doubled: bool = False) -> list[tuple[int, T, T]]:
    """
    Generate round-robin pairings: (gameweek, first, second).
    Pairings with BYE are dropped. Fewer than 2 items => [].
    Deterministic: same ordered input => same pairings.
    """
    if len(items) < 2:
        return []
    order: list = list(items)
    if len(order) % 2 == 1:
        order.append(BYE)
    size = len(order)  # even
    rounds = size - 1
    first_half: list[tuple[int, T, T]] = []
    for rnd in range(rounds):
        # Pair order[0] with order[size-1], order[1] with order[size-2], ...
        played = 0
        for i in range(size // 2):
            a, b = order[i], order[size - 1 - i]
            if a is BYE or b is BYE:
                continue
            first_half.append((rnd + 1, a, b))
            played += 1
        logger.debug("Round %d: generated %d matches", rnd + 1, played)
        # Rotate: keep order[0], move the last slot to index 1
        order.insert(1, order.pop())
    if not doubled:
        return first_half
    second_half = [(rounds + g, b, a) for g, a, b in first_half]
    return first_half + second_half


def generate_schedule(
    participants: Sequence[Participant],
    doubled: bool = False,
    generation: int = 0,
) -> Schedule:
    """
    Build a complete Schedule from an ordered participant snapshot.
    Fixture ids are "fixture-<n>" in emission order (first half, then mirrored half).
    Fewer than 2 participants => empty schedule.
    """
    if len(participants) < 2:
        return EMPTY_SCHEDULE
    rounds = round_count_for(len(participants))
    logger.info(
        "Generating fixtures for %d participants: %d rounds per half, home/away=%s",
        len(participants), rounds, doubled,
    )
    pairings = round_robin_pairings(participants, doubled=doubled)
    fixtures = tuple(
        Fixture(id=f"fixture-{i}", gameweek=g, home=home, away=away)
        for i, (g, home, away) in enumerate(pairings, start=1)
    )
    logger.info("Total fixtures generated: %d", len(fixtures))
    return Schedule(fixtures=fixtures, doubled=doubled, round_count=rounds, generation=generation)
